"""Which phase a project is in on a given day, and which list it belongs to."""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

from .dates import DayLike, to_iso
from .models import PHASE_ORDER, DateRange, Phase, Project


def phase_for_day(project: Project, day: DayLike) -> Phase | None:
    """Return the phase covering the day, or None.

    Hand-edited phases may intersect. Preparation is checked first, then
    Fitting, then the primary range, and the first match wins; a day that is
    both Preparation and Fitting is painted as Preparation.
    """
    iso = to_iso(day)
    for phase in PHASE_ORDER:
        if project.phase_range(phase).covers(iso):
            return phase
    return None


def total_range(project: Project) -> DateRange | None:
    """The span the project occupies on the calendar.

    Starts at Preparation when it has a start, otherwise at the primary start;
    always ends with the primary range. None when either end is unknown.
    """
    start = project.prep_start or project.primary_start
    end = project.primary_end
    if not start or not end:
        return None
    return DateRange(start, end)


def in_total_range(project: Project, day: DayLike) -> bool:
    """True if the project is visible on the calendar on this day."""
    span = total_range(project)
    return span is not None and span.covers(to_iso(day))


class ProjectTab(str, Enum):
    """Project list tabs."""

    CURRENT = "current"
    UPCOMING = "upcoming"
    PAST = "past"
    PENDING = "pending"


def tab_for_project(project: Project, today: DayLike) -> ProjectTab | None:
    """Place a project in one list tab.

    Pending projects always go to PENDING. Confirmed ones are sorted by where
    today falls against their total range. Projects without a usable range
    belong to no tab.
    """
    if not project.confirmed:
        return ProjectTab.PENDING
    span = total_range(project)
    if span is None:
        return None
    assert span.start is not None and span.end is not None
    iso = to_iso(today)
    if iso < span.start:
        return ProjectTab.UPCOMING
    if iso > span.end:
        return ProjectTab.PAST
    return ProjectTab.CURRENT


def filter_projects(projects: Iterable[Project], tab: ProjectTab, today: DayLike) -> list[Project]:
    """Projects shown under a tab, in input order."""
    return [p for p in projects if tab_for_project(p, today) is tab]
