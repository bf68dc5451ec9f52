from rich.panel import Panel

from schedsim.algorithms import schedule_rr
from schedsim.gantt import build_rich_gantt, layout, render_gantt
from schedsim.models import ProcessDescriptor, ScheduledSlice


def test_render_empty():
    assert render_gantt([]) == "(no execution)"


def test_render_with_idle_gap():
    text = render_gantt([ScheduledSlice(1, 0, 2), ScheduledSlice(2, 4, 5)])
    lines = text.splitlines()
    assert lines[0] == "Gantt Chart:"
    assert lines[1] == "|==..=|"
    assert lines[3].split() == ["0", "2", "4", "5"]


def test_render_merges_consecutive_quanta():
    res = schedule_rr([ProcessDescriptor(1, 0, 4)], quantum=1)
    assert len(res.timeline) == 4
    assert render_gantt(res.timeline).splitlines()[3].split() == ["0", "4"]


def test_rich_gantt():
    panel, marks = build_rich_gantt([ScheduledSlice(1, 0, 2), ScheduledSlice(2, 2, 5)])
    assert isinstance(panel, Panel)
    assert marks.split() == ["0", "2", "5"]
    _, empty_marks = build_rich_gantt([])
    assert empty_marks == ""


def test_layout_segments_and_marks():
    segments, marks = layout([ScheduledSlice(2, 3, 4), ScheduledSlice(1, 0, 1), ScheduledSlice(1, 1, 3)])
    assert segments == [(1, 3), (2, 1)]
    assert marks.split() == ["0", "3", "4"]

    segments, marks = layout([ScheduledSlice(7, 2, 5)])
    assert segments == [(None, 2), (7, 3)]
    assert marks.split() == ["0", "2", "5"]
