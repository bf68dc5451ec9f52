from pathlib import Path

import pytest

from schedsim.errors import CapacityExceeded, MalformedInput
from schedsim.models import ProcessDescriptor, ProcessTable
from schedsim.workload_io import load_workload


def test_load_table(tmp_path: Path):
    p = tmp_path / "procesos.txt"
    p.write_text("ID Llegada Duracion\n1 0 5\n2 1 3\n\n3 2 8\n")
    table = load_workload(p)
    assert isinstance(table, ProcessTable)
    assert [(q.id, q.arrival, q.burst) for q in table] == [(1, 0, 5), (2, 1, 3), (3, 2, 8)]


def test_load_table_stops_at_bad_row(tmp_path: Path):
    p = tmp_path / "procesos.txt"
    p.write_text("id arrival burst\n1 0 5\n2 x 3\n3 2 8\n")
    table = load_workload(p)
    assert [q.id for q in table] == [1]


def test_load_table_capacity(tmp_path: Path):
    p = tmp_path / "procesos.txt"
    p.write_text("id arrival burst\n" + "".join(f"{i} 0 1\n" for i in range(5)))
    with pytest.raises(CapacityExceeded):
        load_workload(p, capacity=4)
    assert len(load_workload(p, capacity=None)) == 5


def test_load_json(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"id":1,"arrival":0,"burst":3},'
                 '{"pid":2,"arrival_time":1,"burst_time":2}]')
    table = load_workload(p)
    assert isinstance(table[0], ProcessDescriptor)
    assert table[1].arrival == 1
    assert table[1].burst == 2


def test_load_json_rejects_non_list(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('{"id": 1}')
    with pytest.raises(MalformedInput):
        load_workload(p)


def test_load_csv(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("id,arrival,burst\n4,0,3\n5,1,2\n")
    table = load_workload(p)
    assert table[0].id == 4
    assert table[1].burst == 2


def test_load_csv_bad_row(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("id,arrival,burst\n4,0,\n")
    with pytest.raises(MalformedInput):
        load_workload(p)


def test_duplicate_ids_rejected(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("id,arrival,burst\n4,0,3\n4,1,2\n")
    with pytest.raises(MalformedInput):
        load_workload(p)


def test_missing_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_workload(tmp_path / "nope.txt")


def test_load_table_rejects_non_utf8(tmp_path: Path):
    p = tmp_path / "procesos.txt"
    p.write_bytes(b"id llegada duraci\xf3n\n1 0 5\n")
    with pytest.raises(MalformedInput, match="not valid UTF-8"):
        load_workload(p)


def test_load_csv_rejects_non_utf8(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_bytes(b"id,arrival,burst\n1,0,5\xf3\n")
    with pytest.raises(MalformedInput):
        load_workload(p)


def test_load_table_stops_at_extra_column(tmp_path: Path):
    p = tmp_path / "procesos.txt"
    p.write_text("id arrival burst\n1 0 5 9\n2 1 3\n")
    assert len(load_workload(p)) == 0


def test_load_table_stops_at_short_row(tmp_path: Path):
    p = tmp_path / "procesos.txt"
    p.write_text("id arrival burst\n1 0 5\n2 1\n3 2 8\n")
    assert [q.id for q in load_workload(p)] == [1]
