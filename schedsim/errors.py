from __future__ import annotations


class SchedulerError(Exception):
    """Base class for every error raised by schedsim."""


class InvalidConfiguration(SchedulerError, ValueError):
    """Bad simulation parameters: non-positive quantum, empty process set, ..."""


class MalformedInput(SchedulerError, ValueError):
    """A process descriptor or workload row that cannot be simulated."""


class CapacityExceeded(MalformedInput):
    def __init__(self, capacity: int) -> None:
        super().__init__(f"Process table is full (capacity {capacity})")
        self.capacity = capacity


class IncompleteSchedule(SchedulerError):
    """Timing data was requested before a scheduler computed it."""
