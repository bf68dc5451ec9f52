from __future__ import annotations

import logging
from collections import deque
from typing import Deque, Iterable, List, Optional

from .errors import CapacityExceeded, InvalidConfiguration
from .metrics import attach_metrics
from .models import ProcessDescriptor, ProcessTable, ScheduleResult, ScheduledSlice

logger = logging.getLogger(__name__)


def _prepare(processes: Iterable[ProcessDescriptor], max_processes: Optional[int]) -> List[ProcessDescriptor]:
    """
    Validate the input set and return fresh working copies in input order.

    The caller's descriptors are never mutated, so running a policy twice on
    the same input gives the same result.
    """
    if isinstance(processes, ProcessTable):
        if max_processes is not None and len(processes) > max_processes:
            raise CapacityExceeded(max_processes)
        return processes.fresh()
    return list(ProcessTable((p.fresh() for p in processes), capacity=max_processes))


def schedule_fcfs(
    processes: Iterable[ProcessDescriptor],
    quantum: Optional[int] = None,
    max_processes: Optional[int] = None,
) -> ScheduleResult:
    """
    First-Come First-Serve (non-preemptive) scheduling.

    Processes run in input order; the CPU idles forward when the next one
    has not arrived yet.
    """
    procs = _prepare(processes, max_processes)

    time = 0
    timeline: List[ScheduledSlice] = []

    for p in procs:
        if time < p.arrival:
            logger.debug("t=%d: idle until %d", time, p.arrival)
            time = p.arrival

        p.start = time
        p.finish = time + p.burst
        p.remaining = 0
        timeline.append(ScheduledSlice(pid=p.id, start_time=p.start, end_time=p.finish))
        logger.debug("t=%d: dispatch %s until %d", time, p.id, p.finish)

        time = p.finish

    result = ScheduleResult(algorithm="FCFS", quantum=None, processes=procs, timeline=timeline)
    if procs:
        attach_metrics(result)
    logger.info("FCFS finished %d processes at t=%d", len(procs), time)
    return result


def schedule_rr(
    processes: Iterable[ProcessDescriptor],
    quantum: Optional[int] = None,
    max_processes: Optional[int] = None,
) -> ScheduleResult:
    """
    Round Robin scheduling with a fixed time quantum.

    Processes are admitted to the ready queue in arrival order (ties keep
    input order). Processes arriving while a slice runs are queued ahead of
    the preempted process. An idle CPU advances one time unit at a time.
    """
    if isinstance(quantum, bool) or not isinstance(quantum, int) or quantum <= 0:
        raise InvalidConfiguration(f"Round Robin requires a positive integer quantum (got {quantum!r})")

    procs = _prepare(processes, max_processes)
    n = len(procs)

    # sorted() is stable, so equal arrivals keep input order.
    by_arrival = sorted(range(n), key=lambda i: procs[i].arrival)
    next_arrival = 0

    ready: Deque[int] = deque()
    timeline: List[ScheduledSlice] = []
    time = 0
    finished = 0

    def admit_arrivals(current_time: int) -> None:
        nonlocal next_arrival
        while next_arrival < n and procs[by_arrival[next_arrival]].arrival <= current_time:
            ready.append(by_arrival[next_arrival])
            next_arrival += 1

    while finished < n:
        admit_arrivals(time)

        if not ready:
            time += 1
            continue

        idx = ready.popleft()
        p = procs[idx]

        if p.start is None:
            p.start = time

        run_time = min(p.remaining, quantum)
        timeline.append(ScheduledSlice(pid=p.id, start_time=time, end_time=time + run_time))
        logger.debug("t=%d: dispatch %s for %d (remaining %d)", time, p.id, run_time, p.remaining)

        p.remaining -= run_time
        time += run_time

        # New arrivals go ahead of the process being preempted.
        admit_arrivals(time)

        if p.remaining > 0:
            ready.append(idx)
        else:
            p.finish = time
            finished += 1

    result = ScheduleResult(algorithm="Round Robin", quantum=quantum, processes=procs, timeline=timeline)
    if procs:
        attach_metrics(result)
    logger.info("RR (q=%d) finished %d processes at t=%d", quantum, n, time)
    return result


ALGORITHMS = {
    "fcfs": schedule_fcfs,
    "rr": schedule_rr,
}


def run_algorithm(
    name: str,
    processes: Iterable[ProcessDescriptor],
    quantum: Optional[int] = None,
    max_processes: Optional[int] = None,
) -> ScheduleResult:
    """
    Dispatch to the requested algorithm. Quantum is ignored by FCFS.
    """
    name = name.lower()
    if name not in ALGORITHMS:
        raise InvalidConfiguration(f"Unknown algorithm '{name}' (choose from {', '.join(ALGORITHMS)})")

    func = ALGORITHMS[name]
    return func(processes, quantum=quantum, max_processes=max_processes)
