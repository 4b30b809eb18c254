"""Calendar-day arithmetic on ISO ``YYYY-MM-DD`` strings.

Days are plain ``datetime.date`` values: no time of day, no timezone. A
``datetime.datetime`` is a ``date`` subclass carrying both, so it is refused
anywhere a day is accepted rather than silently truncated.

Every helper takes either an ISO string or a ``date`` and, apart from
``parse_day``, returns an ISO string. ISO day strings sort in chronological
order, so range checks compare the strings directly.
"""

from __future__ import annotations

import calendar
import re
from datetime import date, datetime, timedelta
from enum import IntEnum

from .exceptions import InvalidDateFormat

DayLike = str | date

ISO_DAY_PATTERN = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$", re.ASCII)

# Anything outside this window is treated as corrupted input
MIN_YEAR = 1900
MAX_YEAR = 2100

DAYS_PER_WEEK = 7


class Weekday(IntEnum):
    """Day numbering used by day_of_week(): Sunday is 0."""

    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6

    @classmethod
    def parse(cls, value: str | int) -> Weekday:
        """Accept a weekday name ("monday", "Mon") or its number."""
        if isinstance(value, int):
            return cls(value)
        text = value.strip().upper()
        for member in cls:
            if member.name == text or member.name[:3] == text:
                return member
        raise ValueError(f"Unknown weekday: '{value}'")


def _to_date(value: DayLike) -> date:
    """Parse without the supported-year check; used for days computed here."""
    if isinstance(value, datetime):
        raise InvalidDateFormat(f"Expected a calendar day, got a datetime: {value!r}")
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise InvalidDateFormat(f"Invalid ISO date: {value!r}")
    match = ISO_DAY_PATTERN.fullmatch(value)
    if not match:
        raise InvalidDateFormat(f"Invalid ISO date: '{value}' (expected YYYY-MM-DD)")
    year, month, day_num = (int(part) for part in match.groups())
    try:
        return date(year, month, day_num)
    except ValueError as e:
        raise InvalidDateFormat(f"Invalid ISO date: '{value}' ({e})") from e


def parse_day(value: DayLike) -> date:
    """Parse an ISO day string into a date.

    The year window applies here, to input, and not to days the helpers below
    compute: padding a December 2100 grid or deriving phases before a January
    1900 shoot steps outside it.

    Raises:
        InvalidDateFormat: If the text is not YYYY-MM-DD, names an impossible
            day (month 13, February 30, ...), falls outside 1900-2100, or the
            value is a datetime.
    """
    day = _to_date(value)
    if not MIN_YEAR <= day.year <= MAX_YEAR:
        raise InvalidDateFormat(
            f"Date out of supported range {MIN_YEAR}-{MAX_YEAR}: {day.isoformat()}"
        )
    return day


def to_iso(value: DayLike) -> str:
    """Format a day as zero-padded YYYY-MM-DD."""
    return _to_date(value).isoformat()


def normalize_day(value: DayLike) -> str:
    """Round-trip a value through parse_day so it comes back canonical."""
    return to_iso(parse_day(value))


def is_valid_day(value: object) -> bool:
    """Return True if value parses as a calendar day."""
    if not isinstance(value, str | date):
        return False
    try:
        parse_day(value)
    except InvalidDateFormat:
        return False
    return True


def today_iso(today: date | None = None) -> str:
    """Return today's date (or the given stand-in) as an ISO day."""
    return to_iso(today if today is not None else date.today())


def add_days(value: DayLike, days: int) -> str:
    """Shift a day by a whole number of days."""
    return to_iso(_to_date(value) + timedelta(days=days))


def diff_days(start: DayLike, end: DayLike) -> int:
    """Number of days from start to end (negative if end is earlier)."""
    return (_to_date(end) - _to_date(start)).days


def day_of_week(value: DayLike) -> int:
    """Day of week with Sunday=0 ... Saturday=6."""
    # date.weekday() is Monday=0
    return (_to_date(value).weekday() + 1) % DAYS_PER_WEEK


def start_of_month(value: DayLike) -> str:
    """First day of the month containing the given day."""
    day = _to_date(value)
    return to_iso(day.replace(day=1))


def end_of_month(value: DayLike) -> str:
    """Last day of the month containing the given day."""
    day = _to_date(value)
    last = calendar.monthrange(day.year, day.month)[1]
    return to_iso(day.replace(day=last))


def start_of_calendar_grid(month_start: DayLike, week_start: int = Weekday.MONDAY) -> str:
    """Walk back from month_start to the first day of its week."""
    pad = (day_of_week(month_start) - week_start) % DAYS_PER_WEEK
    return add_days(month_start, -pad)


def end_of_calendar_grid(month_end: DayLike, week_start: int = Weekday.MONDAY) -> str:
    """Walk forward from month_end to the last day of its week."""
    week_end = (week_start + DAYS_PER_WEEK - 1) % DAYS_PER_WEEK
    pad = (week_end - day_of_week(month_end)) % DAYS_PER_WEEK
    return add_days(month_end, pad)


def each_day(start: DayLike, end: DayLike) -> list[str]:
    """All days from start to end inclusive, ascending. Empty if start > end."""
    first = _to_date(start)
    count = (_to_date(end) - first).days + 1
    return [to_iso(first + timedelta(days=offset)) for offset in range(max(count, 0))]


def is_between_inclusive(iso: str, start_iso: str, end_iso: str) -> bool:
    """True if start_iso <= iso <= end_iso, comparing ISO strings directly."""
    return start_iso <= iso <= end_iso


def format_short(value: DayLike, with_year: bool = False) -> str:
    """Compact DD/MM (or DD/MM/YYYY) form used in conflict messages and listings."""
    day = _to_date(value)
    if with_year:
        return f"{day.day:02d}/{day.month:02d}/{day.year:04d}"
    return f"{day.day:02d}/{day.month:02d}"
