from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Iterable, Mapping, Optional

from .errors import MalformedInput
from .models import DEFAULT_CAPACITY, ProcessDescriptor, ProcessTable

logger = logging.getLogger(__name__)

_ALIASES = {
    "id": ("id", "pid"),
    "arrival": ("arrival", "arrival_time"),
    "burst": ("burst", "burst_time"),
}


def load_workload(path: str | Path, capacity: Optional[int] = DEFAULT_CAPACITY) -> ProcessTable:
    """
    Load a workload from a text, JSON or CSV file into a ProcessTable.

    Text files hold a header line followed by ``id arrival burst`` rows.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    try:
        if suffix == ".json":
            table = _load_json(path, capacity)
        elif suffix == ".csv":
            table = _load_csv(path, capacity)
        else:
            table = _load_table(path, capacity)
    except UnicodeDecodeError as exc:
        raise MalformedInput(f"{path} is not valid UTF-8") from exc

    logger.info("loaded %d processes from %s", len(table), path)
    return table


def _load_table(path: Path, capacity: Optional[int]) -> ProcessTable:
    table = ProcessTable(capacity=capacity)
    with path.open("r", encoding="utf-8") as f:
        f.readline()  # column names
        for lineno, line in enumerate(f, start=2):
            fields = line.split()
            if not fields:
                continue
            try:
                pid, arrival, burst = (int(v) for v in fields)
            except ValueError:
                # Rows that are not exactly three integers end the table.
                logger.warning("%s:%d: stopping at unparsable row %r", path, lineno, line.rstrip())
                break
            table.add(ProcessDescriptor(id=pid, arrival=arrival, burst=burst))
    return table


def _load_json(path: Path, capacity: Optional[int]) -> ProcessTable:
    with path.open("r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as exc:
            raise MalformedInput(f"Invalid JSON in {path}: {exc}") from exc

    if not isinstance(raw, list):
        raise MalformedInput("JSON workload must be a list of process objects")

    return _table_from_mappings(raw, capacity)


def _load_csv(path: Path, capacity: Optional[int]) -> ProcessTable:
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        return _table_from_mappings(reader, capacity)


def _table_from_mappings(rows: Iterable, capacity: Optional[int]) -> ProcessTable:
    table = ProcessTable(capacity=capacity)
    for row in rows:
        table.add(_process_from_mapping(row))
    return table


def _lookup(mapping: Mapping, key: str):
    for alias in _ALIASES[key]:
        if alias in mapping and mapping[alias] not in (None, ""):
            return mapping[alias]
    raise KeyError(key)


def _process_from_mapping(mapping) -> ProcessDescriptor:
    try:
        pid = int(_lookup(mapping, "id"))
        arrival = int(_lookup(mapping, "arrival"))
        burst = int(_lookup(mapping, "burst"))
    except (KeyError, TypeError, ValueError) as exc:
        raise MalformedInput(f"Invalid process entry: {mapping!r}") from exc

    return ProcessDescriptor(id=pid, arrival=arrival, burst=burst)
