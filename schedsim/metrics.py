from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence

from .errors import IncompleteSchedule, InvalidConfiguration
from .models import PolicyMetrics, ProcessDescriptor, ScheduleResult, ScheduledSlice

logger = logging.getLogger(__name__)


def compute_metrics(
    processes: Sequence[ProcessDescriptor],
    timeline: Optional[Iterable[ScheduledSlice]] = None,
) -> PolicyMetrics:
    """
    Aggregate turnaround, response and throughput over fully scheduled
    processes.

    Throughput is measured over the window ending at the latest finish time.
    When no timeline is given the CPU busy time is the sum of the bursts.
    """
    if not processes:
        raise InvalidConfiguration("Cannot compute metrics for an empty process set")

    pending = [p.id for p in processes if not p.completed]
    if pending:
        raise IncompleteSchedule(f"Processes without computed timings: {pending}")

    n = len(processes)
    makespan = max(p.finish for p in processes)

    if timeline is None:
        cpu_busy_time = sum(p.burst for p in processes)
    else:
        cpu_busy_time = sum(slice_.end_time - slice_.start_time for slice_ in timeline)

    throughput = n / makespan if makespan > 0 else 0.0
    cpu_utilization = cpu_busy_time / makespan if makespan > 0 else 0.0

    metrics = PolicyMetrics(
        avg_turnaround=sum(p.turnaround for p in processes) / n,
        avg_response=sum(p.response for p in processes) / n,
        throughput=throughput,
        avg_waiting=sum(p.waiting for p in processes) / n,
        makespan=makespan,
        cpu_busy_time=cpu_busy_time,
        cpu_utilization=cpu_utilization,
    )
    logger.debug("metrics for %d processes: %s", n, metrics)
    return metrics


def attach_metrics(result: ScheduleResult) -> PolicyMetrics:
    metrics = compute_metrics(result.processes, result.timeline)
    result.metrics = metrics
    return metrics


def summarize(results: Iterable[ScheduleResult]) -> List[dict]:
    """
    Return one row of averages per result for quick comparison.
    """
    rows = []
    for result in results:
        m = result.metrics or attach_metrics(result)
        rows.append(
            {
                "algorithm": result.algorithm,
                "quantum": result.quantum,
                "avg_turnaround": m.avg_turnaround,
                "avg_response": m.avg_response,
                "avg_waiting": m.avg_waiting,
                "throughput": m.throughput,
            }
        )
    return rows
