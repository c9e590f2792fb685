from __future__ import annotations

from typing import List

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import ScheduledSlice

PALETTE = ["#10b981", "#f59e0b", "#ec4899", "#8b5cf6", "#06b6d4", "#f97316", "#6366f1", "#14b8a6"]


def pid_color(pid: str) -> str:
    """
    Map a process id to a palette color.

    The same id always gets the same color, whatever order the processes
    were registered or scheduled in.
    """
    h = 0
    for ch in pid:
        h = (ord(ch) + (h << 5) - h) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return PALETTE[abs(h) % len(PALETTE)]


def build_rich_gantt(slices: List[ScheduledSlice]) -> tuple[Panel, str]:
    """
    Render slices as one colored block per slice, one column per time unit.

    Returns the panel and a line of time marks at every slice boundary.
    """
    if not slices:
        return Panel("No execution", title="Gantt Chart"), ""

    bars = Text()
    labels = Text()
    marks = [0]

    for sl in sorted(slices, key=lambda s: s.start_time):
        gap = sl.start_time - marks[-1]
        if gap > 0:
            bars.append(" " * gap)
            labels.append(" " * gap)
            marks.append(sl.start_time)

        bars.append(" " * sl.duration, style=f"on {pid_color(sl.pid)}")
        labels.append(sl.pid[: sl.duration].ljust(sl.duration), style="bold")
        marks.append(sl.end_time)

    grid = Table.grid(padding=(0, 0))
    grid.add_row(bars)
    grid.add_row(labels)

    time_marks = str(marks[0]) + "".join(f"{m:>3}" for m in marks[1:])
    return Panel.fit(grid, title="Gantt Chart"), time_marks
