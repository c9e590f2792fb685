from rich.console import Console

from schedsim.gantt import PALETTE, build_rich_gantt, pid_color
from schedsim.models import ScheduledSlice


def test_pid_color_is_stable_and_in_palette():
    assert pid_color("P1") == pid_color("P1")
    assert pid_color("a-very-long-process-name" * 4) in PALETTE
    assert {pid_color(f"P{i}") for i in range(1, 9)} <= set(PALETTE)


def test_gantt_time_marks_include_idle_gap():
    slices = [ScheduledSlice("P1", 0, 2), ScheduledSlice("P2", 4, 3)]
    panel, marks = build_rich_gantt(slices)
    assert marks.split() == ["0", "2", "4", "7"]

    console = Console(record=True, width=80)
    console.print(panel)
    text = console.export_text()
    assert "Gantt Chart" in text
    assert "P1" in text and "P2" in text


def test_gantt_empty():
    panel, marks = build_rich_gantt([])
    assert marks == ""
    assert panel.renderable == "No execution"
