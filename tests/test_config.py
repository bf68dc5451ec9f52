import argparse

import pytest

from schedsim.config import SimulationConfig, run_policies
from schedsim.errors import InvalidConfiguration
from schedsim.models import ProcessDescriptor, ProcessTable


def _table():
    return ProcessTable([ProcessDescriptor(1, 0, 5), ProcessDescriptor(2, 1, 3), ProcessDescriptor(3, 2, 8)])


def test_defaults():
    config = SimulationConfig()
    config.validate()
    assert config.quantum == 2
    assert config.max_processes == 100
    assert config.algorithms == ("fcfs", "rr")


@pytest.mark.parametrize(
    "kwargs",
    [{"quantum": 0}, {"max_processes": -1}, {"algorithms": ("sjf",)}, {"algorithms": ()}],
)
def test_invalid(kwargs):
    with pytest.raises(InvalidConfiguration):
        SimulationConfig(**kwargs).validate()


def test_fcfs_only_ignores_quantum():
    SimulationConfig(quantum=0, algorithms=("fcfs",)).validate()


def test_from_args_lifts_bound():
    args = argparse.Namespace(quantum=3, max_processes=0, algorithms=["RR"])
    config = SimulationConfig.from_args(args)
    assert config.max_processes is None
    assert config.algorithms == ("rr",)


def test_run_policies_in_order():
    table = _table()
    results = run_policies(table, SimulationConfig(quantum=1))
    assert [r.algorithm for r in results] == ["FCFS", "Round Robin"]
    assert [p.finish for p in results[0].processes] == [5, 8, 16]
    assert [p.finish for p in results[1].processes] == [11, 8, 16]
    assert all(p.start is None for p in table)
