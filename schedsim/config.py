from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .algorithms import ALGORITHMS, run_algorithm
from .errors import InvalidConfiguration
from .models import DEFAULT_CAPACITY, ProcessTable, ScheduleResult

logger = logging.getLogger(__name__)

DEFAULT_QUANTUM = 2


@dataclass
class SimulationConfig:
    quantum: int = DEFAULT_QUANTUM
    max_processes: Optional[int] = DEFAULT_CAPACITY
    algorithms: Tuple[str, ...] = ("fcfs", "rr")

    def validate(self) -> None:
        if "rr" in self.algorithms and self.quantum <= 0:
            raise InvalidConfiguration(f"Quantum must be positive (got {self.quantum})")
        if self.max_processes is not None and self.max_processes < 1:
            raise InvalidConfiguration(f"max_processes must be positive (got {self.max_processes})")
        unknown = [a for a in self.algorithms if a not in ALGORITHMS]
        if unknown:
            raise InvalidConfiguration(f"Unknown algorithm(s): {', '.join(unknown)}")
        if not self.algorithms:
            raise InvalidConfiguration("At least one algorithm must be selected")

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "SimulationConfig":
        # --max-processes 0 lifts the bound.
        config = cls(
            quantum=args.quantum,
            max_processes=args.max_processes or None,
            algorithms=tuple(a.lower() for a in args.algorithms),
        )
        config.validate()
        return config


def run_policies(table: ProcessTable, config: SimulationConfig) -> List[ScheduleResult]:
    """
    Run every configured policy, in order, on fresh copies of the table.
    """
    config.validate()
    results = []
    for name in config.algorithms:
        logger.info("running %s on %d processes", name, len(table))
        results.append(
            run_algorithm(name, table, quantum=config.quantum, max_processes=config.max_processes)
        )
    return results
