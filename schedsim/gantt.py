from __future__ import annotations

from itertools import cycle
from typing import List, Optional, Tuple

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import ScheduledSlice

# (pid, width); pid is None for idle time.
Segment = Tuple[Optional[int], int]

PALETTE = ("red", "green", "yellow", "blue", "magenta", "cyan")


def _merge_adjacent(slices: List[ScheduledSlice]) -> List[ScheduledSlice]:
    # Back-to-back quanta of the same process draw as one bar.
    merged: List[ScheduledSlice] = []
    for sl in sorted(slices, key=lambda s: (s.start_time, s.end_time)):
        last = merged[-1] if merged else None
        if last is not None and last.pid == sl.pid and last.end_time == sl.start_time:
            merged[-1] = ScheduledSlice(pid=last.pid, start_time=last.start_time, end_time=sl.end_time)
        else:
            merged.append(sl)
    return merged


def layout(slices: List[ScheduledSlice]) -> Tuple[List[Segment], str]:
    """
    Lay the timeline out left to right from t=0.

    Returns the bar segments, with idle gaps as ``(None, width)``, and the
    time-mark ruler printed under the chart.
    """
    segments: List[Segment] = []
    marks = ["0"]
    clock = 0
    for sl in _merge_adjacent(slices):
        if sl.start_time > clock:
            segments.append((None, sl.start_time - clock))
            marks.append(f"{sl.start_time:>3}")
        segments.append((sl.pid, max(1, sl.end_time - sl.start_time)))
        marks.append(f"{sl.end_time:>3}")
        clock = sl.end_time
    return segments, "".join(marks)


def _label(pid: Optional[int], width: int) -> str:
    return ("" if pid is None else str(pid))[:width].ljust(width)


def render_gantt(slices: List[ScheduledSlice]) -> str:
    """
    Plain-text Gantt chart, used with ``--plain``. Idle time is drawn as dots.
    """
    if not slices:
        return "(no execution)"

    segments, marks = layout(slices)
    bar = "".join(("." if pid is None else "=") * width for pid, width in segments)
    labels = "".join(_label(pid, width) for pid, width in segments)
    return "\n".join(["Gantt Chart:", f"|{bar}|", f" {labels}", marks])


def build_rich_gantt(slices: List[ScheduledSlice]) -> tuple[Panel, str]:
    """
    Colored Gantt chart panel, one color per process, plus the time marks.
    """
    if not slices:
        return Panel("No execution", title="Gantt Chart"), ""

    segments, marks = layout(slices)
    colors = cycle(PALETTE)
    pid_color = {}

    bar = Text()
    labels = Text()
    for pid, width in segments:
        if pid is None:
            bar.append(" " * width)
        else:
            if pid not in pid_color:
                pid_color[pid] = next(colors)
            bar.append(" " * width, style=f"on {pid_color[pid]}")
        labels.append(_label(pid, width), style="bold")

    grid = Table.grid(padding=(0, 0))
    grid.add_row(bar)
    grid.add_row(labels)
    return Panel.fit(grid, title="Gantt Chart"), marks
