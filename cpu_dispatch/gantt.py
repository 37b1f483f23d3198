from __future__ import annotations

from typing import Dict, List, Tuple

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import ScheduledSlice

COLORS = ["red", "green", "yellow", "blue", "magenta", "cyan"]


def _ordered(slices: List[ScheduledSlice]) -> List[ScheduledSlice]:
    return sorted((s for s in slices if s.length > 0), key=lambda s: (s.start_time, s.end_time))


def render_gantt(slices: List[ScheduledSlice]) -> str:
    """
    Plain-text Gantt chart: one '=' per tick of execution, '.' per idle tick.
    """
    slices = _ordered(slices)
    if not slices:
        return "(no execution)"

    bar = "|"
    labels = " "
    time_marks = "0"
    last_time = 0

    for sl in slices:
        idle_gap = sl.start_time - last_time
        if idle_gap > 0:
            bar += "." * idle_gap
            labels += " " * idle_gap
            time_marks = time_marks.ljust(len(bar) - 1) + str(sl.start_time)

        bar += "=" * sl.length
        labels += f"P{sl.pid}"[: sl.length].ljust(sl.length)
        last_time = sl.end_time
        time_marks = time_marks.ljust(len(bar) - 1) + str(last_time)

    bar += "|"
    return "\n".join(["Gantt Chart:", bar, labels, time_marks])


def build_rich_gantt(slices: List[ScheduledSlice]) -> Tuple[Panel, str]:
    """
    Build a Rich Panel containing a colored Gantt chart and a string with time marks.
    """
    slices = _ordered(slices)
    if not slices:
        return Panel("No execution", title="Gantt Chart"), ""

    pid_to_color: Dict[int, str] = {}

    def pid_color(pid: int) -> str:
        if pid not in pid_to_color:
            pid_to_color[pid] = COLORS[len(pid_to_color) % len(COLORS)]
        return pid_to_color[pid]

    timeline = Text()
    labels = Text()
    time_marks = "0"
    last_time = 0

    for sl in slices:
        idle_gap = sl.start_time - last_time
        if idle_gap > 0:
            timeline.append(" " * idle_gap)
            labels.append(" " * idle_gap)
            time_marks = time_marks.ljust(sl.start_time) + str(sl.start_time)

        timeline.append(" " * sl.length, style=f"on {pid_color(sl.pid)}")
        labels.append(f"P{sl.pid}"[: sl.length].ljust(sl.length), style="bold")
        last_time = sl.end_time
        time_marks = time_marks.ljust(last_time) + str(last_time)

    table = Table.grid(padding=(0, 0))
    table.add_row(timeline)
    table.add_row(labels)

    return Panel.fit(table, title="Gantt Chart"), time_marks
