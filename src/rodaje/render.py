"""Plain-text rendering of month grids, conflicts and project listings."""

from __future__ import annotations

import calendar
from collections.abc import Sequence

from .classify import phase_for_day, total_range
from .dates import DAYS_PER_WEEK, day_of_week, parse_day
from .grid import MonthGrid, month_stats
from .models import ConflictDescription, Project

CELL_WIDTH = 12


def _cell_line(text: str) -> str:
    return text[: CELL_WIDTH - 1].ljust(CELL_WIDTH)


def _weekday_header(first_day: str) -> str:
    # day_abbr starts on Monday, day_of_week on Sunday
    start = day_of_week(first_day) - 1
    names = [calendar.day_abbr[(start + i) % DAYS_PER_WEEK] for i in range(DAYS_PER_WEEK)]
    return "".join(_cell_line(name) for name in names).rstrip()


def render_project_chip(project: Project, day: str) -> str:
    """Phase badge and name, e.g. ``R Spot``; pending projects are marked with ``?``."""
    phase = phase_for_day(project, day)
    badge = phase.badge if phase else "-"
    marker = "" if project.confirmed else "?"
    return f"{badge}{marker} {project.display_name}"


def render_month(grid: MonthGrid) -> str:
    """Render a grid as fixed-width text, one block of lines per week.

    Padding days from neighbouring months are shown in parentheses. Each day
    gets up to ``grid.day_capacity`` project lines plus a ``+N`` line for the
    projects that did not fit.
    """
    month = parse_day(grid.month_start)
    lines = [f"{calendar.month_name[month.month]} {month.year}", _weekday_header(grid.days[0])]

    for week in grid.weeks():
        day_labels = []
        for day in week:
            num = str(int(day[8:]))
            day_labels.append(_cell_line(num if grid.in_month(day) else f"({num})"))
        lines.append("".join(day_labels).rstrip())

        rows = max(
            (len(grid.per_day[d]) + (1 if grid.overflow[d] else 0) for d in week), default=0
        )
        for slot in range(min(rows, grid.day_capacity + 1)):
            cells = []
            for day in week:
                bucket = grid.per_day[day]
                if slot < len(bucket):
                    cells.append(_cell_line(render_project_chip(bucket[slot], day)))
                elif slot == len(bucket) and grid.overflow[day]:
                    cells.append(_cell_line(f"+{grid.overflow[day]}"))
                else:
                    cells.append(_cell_line(""))
            lines.append("".join(cells).rstrip())

    stats = month_stats(grid)
    lines.append("")
    lines.append(f"Free {stats.free} | Busy {stats.busy} | Overlapping {stats.overlap}")
    return "\n".join(lines) + "\n"


def render_legend(grid: MonthGrid, projects: Sequence[Project]) -> str:
    """Every project visible somewhere in the grid, including ones cut from cells."""
    visible: list[Project] = []
    for project in projects:
        span = total_range(project)
        if span is None:
            continue
        assert span.start is not None and span.end is not None
        if span.start <= grid.days[-1] and span.end >= grid.days[0]:
            visible.append(project)
    if not visible:
        return "No projects this month.\n"
    lines = ["Projects this month:"]
    for project in visible:
        status = "confirmed" if project.confirmed else "pending"
        lines.append(f"  {project.display_name} ({status})")
    return "\n".join(lines) + "\n"


def render_conflicts(project: Project, conflicts: Sequence[ConflictDescription]) -> str:
    """One warning line per conflict, headed by the project name."""
    if not conflicts:
        return f"{project.display_name}: no conflicts\n"
    lines = [f"{project.display_name}: {len(conflicts)} conflict(s)"]
    lines.extend(f"  - {conflict.message}" for conflict in conflicts)
    return "\n".join(lines) + "\n"


def render_project_line(project: Project) -> str:
    """Single listing line: name, status, city and total span."""
    span = total_range(project)
    span_text = f"{span.start} -> {span.end}" if span else "no dates"
    status = "Confirmed" if project.confirmed else "Pending"
    city = f"{project.city} | " if project.city else ""
    return f"{project.display_name} [{status}] {city}{span_text}"
