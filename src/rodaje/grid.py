"""Month calendar grid: week-aligned days plus the projects shown on each."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from .classify import in_total_range
from .config import CalendarConfig
from .dates import (
    DAYS_PER_WEEK,
    DayLike,
    each_day,
    end_of_calendar_grid,
    end_of_month,
    start_of_calendar_grid,
    start_of_month,
)
from .logger import get_logger
from .models import Project

logger = get_logger()


def _default_per_day() -> dict[str, list[Project]]:
    return {}


def _default_counts() -> dict[str, int]:
    return {}


@dataclass
class MonthGrid:
    """A month laid out as whole weeks.

    ``per_day`` holds the projects drawn in each cell after the capacity cut;
    ``covering`` holds the count before it, and ``overflow`` how many were cut.
    ``day_capacity`` is the cut the buckets were built with.
    """

    month_start: str
    month_end: str
    days: list[str]
    day_capacity: int
    per_day: dict[str, list[Project]] = field(default_factory=_default_per_day)
    covering: dict[str, int] = field(default_factory=_default_counts)
    overflow: dict[str, int] = field(default_factory=_default_counts)

    def in_month(self, day: str) -> bool:
        """False for the padding days borrowed from neighbouring months."""
        return self.month_start <= day <= self.month_end

    def weeks(self) -> list[list[str]]:
        """Days split into rows of seven."""
        return [
            self.days[i : i + DAYS_PER_WEEK] for i in range(0, len(self.days), DAYS_PER_WEEK)
        ]


@dataclass(frozen=True)
class MonthStats:
    """Day counts across a grid: no project, at least one, and two or more."""

    free: int
    busy: int
    overlap: int


def bucket_day(projects: Sequence[Project], day: str, capacity: int) -> list[Project]:
    """Projects drawn in one cell: confirmed first, pending fill what is left.

    Input order is kept inside each group. Anything past ``capacity`` is left
    out of the cell only.
    """
    visible = [p for p in projects if in_total_range(p, day)]
    confirmed = [p for p in visible if p.confirmed]
    pending = [p for p in visible if not p.confirmed]
    return (confirmed + pending)[:capacity]


def build_grid(
    month_anchor: DayLike,
    projects: Sequence[Project],
    config: CalendarConfig | None = None,
) -> MonthGrid:
    """Lay out the month containing month_anchor.

    Args:
        month_anchor: Any day inside the month to show.
        projects: All projects; those not visible in the month are ignored.
        config: Week start and per-day capacity; defaults apply when omitted.
    """
    config = config if config is not None else CalendarConfig()

    month_start = start_of_month(month_anchor)
    month_end = end_of_month(month_anchor)
    days = each_day(
        start_of_calendar_grid(month_start, config.week_start),
        end_of_calendar_grid(month_end, config.week_start),
    )

    grid = MonthGrid(
        month_start=month_start,
        month_end=month_end,
        days=days,
        day_capacity=config.day_capacity,
    )
    for day in days:
        covering = sum(1 for p in projects if in_total_range(p, day))
        bucket = bucket_day(projects, day, config.day_capacity)
        grid.per_day[day] = bucket
        grid.covering[day] = covering
        grid.overflow[day] = covering - len(bucket)
        if grid.overflow[day]:
            logger.checks(f"  {day}: {grid.overflow[day]} project(s) beyond capacity hidden")

    logger.debug(f"Built grid {days[0]}..{days[-1]} ({len(days)} days) for {month_start}")
    return grid


def month_stats(grid: MonthGrid) -> MonthStats:
    """Count free, busy and double-booked days over the whole grid."""
    counts = [grid.covering.get(day, 0) for day in grid.days]
    return MonthStats(
        free=sum(1 for c in counts if c == 0),
        busy=sum(1 for c in counts if c >= 1),
        overlap=sum(1 for c in counts if c >= 2),  # noqa: PLR2004 - two projects on one day
    )
