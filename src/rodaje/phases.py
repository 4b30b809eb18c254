"""Derivation of the Fitting and Preparation phases from the primary range.

Given the shooting dates, Fitting defaults to a single day two days before the
first shooting day, and Preparation to the six days ending the eve of Fitting.
Phases the user edited by hand (see TouchedFlags) are kept as typed.
"""

from __future__ import annotations

from .config import PhaseOffsetPolicy
from .dates import add_days, is_valid_day, parse_day
from .exceptions import MissingRequiredRange, OrderViolation
from .logger import get_logger
from .models import DateRange, PhaseSet, Project, TouchedFlags

logger = get_logger()

DEFAULT_POLICY = PhaseOffsetPolicy()


def derive_phases(
    primary_start: str | None,
    primary_end: str | None,
    current: PhaseSet | None = None,
    touched: TouchedFlags | None = None,
    policy: PhaseOffsetPolicy | None = None,
) -> PhaseSet:
    """Compute Fitting and Preparation from the primary range.

    Fitting is recomputed unless it was touched and already has a start.
    Preparation is recomputed unless it was touched and has both bounds, and
    is always computed from the Fitting start in effect after the first step,
    so a hand-edited Fitting drags an untouched Preparation along with it.

    A kept Fitting without an end becomes a one-day phase. Preparation gets no
    such default.

    Args:
        primary_start: First shooting day. When missing or invalid nothing is
            derived and ``current`` is returned unchanged.
        primary_end: Last shooting day. Not used by the offsets; accepted so
            callers pass the whole range they just edited.
        current: Phase values currently on the form.
        touched: Which phases the user edited by hand.
        policy: Offsets and lengths; defaults to the stock policy.

    Returns:
        The phase values the form should now show.
    """
    current = current if current is not None else PhaseSet()
    touched = touched if touched is not None else TouchedFlags()
    policy = policy if policy is not None else DEFAULT_POLICY

    if not primary_start or not is_valid_day(primary_start):
        logger.debug(f"No valid primary start ({primary_start!r}); phases left as they are")
        return current

    if touched.fitting and current.fitting.start:
        fitting = DateRange(current.fitting.start, current.fitting.end or current.fitting.start)
        logger.debug(f"Keeping hand-edited fitting {fitting}")
    else:
        fitting_start = add_days(primary_start, policy.fitting_offset_days)
        fitting = DateRange(
            fitting_start, add_days(fitting_start, policy.fitting_length_days - 1)
        )
        logger.changes(f"Fitting derived from primary start {primary_start}: {fitting}")

    assert fitting.start is not None
    if touched.prep and current.prep.start and current.prep.end:
        prep = current.prep
        logger.debug(f"Keeping hand-edited preparation {prep}")
    else:
        prep_start = add_days(fitting.start, policy.prep_offset_from_fitting_days)
        prep = DateRange(prep_start, add_days(prep_start, policy.prep_length_days - 1))
        logger.changes(f"Preparation derived from fitting start {fitting.start}: {prep}")

    return PhaseSet(fitting=fitting, prep=prep)


def apply_phases(
    project: Project,
    touched: TouchedFlags | None = None,
    policy: PhaseOffsetPolicy | None = None,
) -> Project:
    """Return a copy of the project with its derived phases filled in."""
    phases = derive_phases(
        project.primary_start,
        project.primary_end,
        project.phases,
        touched,
        policy,
    )
    return project.with_phases(phases)


def validate_project(project: Project) -> None:
    """Check a project is fit to save.

    Nothing is corrected; the first problem found is raised.

    Raises:
        MissingRequiredRange: A primary bound is missing.
        InvalidDateFormat: A date is not a valid YYYY-MM-DD day.
        OrderViolation: A range ends before it starts, or Preparation, Fitting
            and the primary range start out of order.
    """
    if not project.primary_start or not project.primary_end:
        raise MissingRequiredRange(
            f"Project '{project.display_name}' needs both a shooting start and end date"
        )

    for label, date_range in (
        ("Shooting", project.primary),
        ("Fitting", project.fitting),
        ("Preparation", project.prep),
    ):
        for bound in (date_range.start, date_range.end):
            if bound:
                parse_day(bound)
        if date_range.is_complete:
            assert date_range.start is not None and date_range.end is not None
            if date_range.start > date_range.end:
                raise OrderViolation(
                    f"{label} of '{project.display_name}' ends ({date_range.end}) "
                    f"before it starts ({date_range.start})"
                )

    primary_start = project.primary_start
    fitting_start = project.fitting_start
    prep_start = project.prep_start

    if fitting_start and fitting_start > primary_start:
        raise OrderViolation(
            f"Fitting of '{project.display_name}' starts ({fitting_start}) "
            f"after shooting starts ({primary_start})"
        )
    if prep_start and fitting_start and prep_start > fitting_start:
        raise OrderViolation(
            f"Preparation of '{project.display_name}' starts ({prep_start}) "
            f"after fitting starts ({fitting_start})"
        )
    if prep_start and prep_start > primary_start:
        raise OrderViolation(
            f"Preparation of '{project.display_name}' starts ({prep_start}) "
            f"after shooting starts ({primary_start})"
        )
