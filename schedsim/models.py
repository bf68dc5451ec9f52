from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterable, Iterator, List, Optional

from .errors import CapacityExceeded, IncompleteSchedule, InvalidConfiguration, MalformedInput

DEFAULT_CAPACITY = 100


@dataclass
class ProcessDescriptor:
    """
    One process: fixed input (id, arrival, burst) plus the timings a
    scheduler computes for it. ``start`` and ``finish`` stay ``None`` until
    assigned.
    """

    id: int
    arrival: int
    burst: int
    remaining: int = field(init=False, compare=False)
    start: Optional[int] = field(default=None, compare=False)
    finish: Optional[int] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        self.remaining = self.burst

    def reset(self) -> None:
        self.remaining = self.burst
        self.start = None
        self.finish = None

    def fresh(self) -> "ProcessDescriptor":
        copy = replace(self)
        copy.reset()
        return copy

    @property
    def completed(self) -> bool:
        return self.start is not None and self.finish is not None

    def _require_timings(self) -> None:
        if not self.completed:
            raise IncompleteSchedule(f"Process {self.id} has not been scheduled yet")

    @property
    def turnaround(self) -> int:
        self._require_timings()
        return self.finish - self.arrival

    @property
    def response(self) -> int:
        self._require_timings()
        return self.start - self.arrival

    @property
    def waiting(self) -> int:
        # Time spent ready but not running.
        return self.turnaround - self.burst


def validate_descriptor(proc: ProcessDescriptor) -> None:
    if proc.arrival < 0:
        raise MalformedInput(f"Process {proc.id}: arrival time must be >= 0 (got {proc.arrival})")
    if proc.burst <= 0:
        raise MalformedInput(f"Process {proc.id}: burst time must be > 0 (got {proc.burst})")


class ProcessTable:
    """
    Ordered, bounds-checked collection of process descriptors.

    Insertion order is the input order used to break arrival ties. Ids must
    be unique. ``capacity=None`` removes the upper bound.
    """

    def __init__(
        self,
        processes: Iterable[ProcessDescriptor] = (),
        capacity: Optional[int] = DEFAULT_CAPACITY,
    ) -> None:
        if capacity is not None and capacity < 1:
            raise InvalidConfiguration(f"Capacity must be positive (got {capacity})")
        self.capacity = capacity
        self._processes: List[ProcessDescriptor] = []
        self._ids: set[int] = set()
        for proc in processes:
            self.add(proc)

    def add(self, proc: ProcessDescriptor) -> None:
        if self.capacity is not None and len(self._processes) >= self.capacity:
            raise CapacityExceeded(self.capacity)
        validate_descriptor(proc)
        if proc.id in self._ids:
            raise MalformedInput(f"Duplicate process id: {proc.id}")
        self._ids.add(proc.id)
        self._processes.append(proc)

    def reset(self) -> None:
        for proc in self._processes:
            proc.reset()

    def fresh(self) -> List[ProcessDescriptor]:
        return [proc.fresh() for proc in self._processes]

    def __iter__(self) -> Iterator[ProcessDescriptor]:
        return iter(self._processes)

    def __len__(self) -> int:
        return len(self._processes)

    def __getitem__(self, index: int) -> ProcessDescriptor:
        return self._processes[index]

    def __repr__(self) -> str:
        return f"ProcessTable({self._processes!r}, capacity={self.capacity!r})"


@dataclass
class ScheduledSlice:
    """
    One contiguous slice of execution for a process in the Gantt chart.
    """

    pid: int
    start_time: int
    end_time: int


@dataclass
class PolicyMetrics:
    avg_turnaround: float
    avg_response: float
    throughput: float
    avg_waiting: float
    makespan: int
    cpu_busy_time: int
    cpu_utilization: float


@dataclass
class ScheduleResult:
    algorithm: str
    quantum: Optional[int]
    processes: List[ProcessDescriptor] = field(default_factory=list)
    timeline: List[ScheduledSlice] = field(default_factory=list)
    metrics: Optional[PolicyMetrics] = None
