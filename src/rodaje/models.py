"""Data models for rodaje."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from .dates import format_short

UNTITLED = "Untitled"


class Phase(str, Enum):
    """The three sequential phases of a production, in calendar order."""

    PREP = "prep"
    FITTING = "fitting"
    PRIMARY = "primary"

    @property
    def label(self) -> str:
        """Human-readable phase name."""
        return _PHASE_LABELS[self]

    @property
    def badge(self) -> str:
        """One-letter marker drawn in calendar cells."""
        return _PHASE_BADGES[self]


_PHASE_LABELS = {
    Phase.PREP: "Preparation",
    Phase.FITTING: "Fitting",
    Phase.PRIMARY: "Shooting",
}

# R stands for "rodaje", the shooting days
_PHASE_BADGES = {
    Phase.PREP: "P",
    Phase.FITTING: "F",
    Phase.PRIMARY: "R",
}

# Order in which phases are compared and classified
PHASE_ORDER = (Phase.PREP, Phase.FITTING, Phase.PRIMARY)


@dataclass(frozen=True)
class DateRange:
    """An inclusive range of ISO days; either bound may be missing."""

    start: str | None = None
    end: str | None = None

    @property
    def is_complete(self) -> bool:
        """True when both bounds are present."""
        return bool(self.start) and bool(self.end)

    @property
    def is_empty(self) -> bool:
        """True when neither bound is present."""
        return not self.start and not self.end

    def covers(self, day: str) -> bool:
        """True if the range is complete and start <= day <= end."""
        if not self.is_complete:
            return False
        assert self.start is not None and self.end is not None
        return self.start <= day <= self.end

    def format(self, with_year: bool = False) -> str:
        """Short DD/MM-DD/MM form for messages, DD/MM/YYYY with ``with_year``."""
        if not self.is_complete:
            return "?"
        assert self.start is not None and self.end is not None
        return f"{format_short(self.start, with_year)}-{format_short(self.end, with_year)}"

    def __str__(self) -> str:
        return f"{self.start or '?'}..{self.end or '?'}"


@dataclass(frozen=True)
class TouchedFlags:
    """Which derived phases the user edited by hand during this session.

    Never persisted; the edit form owns these and passes them in on each call.
    """

    fitting: bool = False
    prep: bool = False


@dataclass(frozen=True)
class PhaseSet:
    """The two phases computed from the primary range."""

    fitting: DateRange = field(default_factory=DateRange)
    prep: DateRange = field(default_factory=DateRange)


@dataclass
class Project:
    """A production and the scheduling-relevant dates it carries."""

    id: str
    name: str = ""
    confirmed: bool = True
    primary_start: str | None = None
    primary_end: str | None = None
    fitting_start: str | None = None
    fitting_end: str | None = None
    prep_start: str | None = None
    prep_end: str | None = None
    producer: str = ""
    contact: str = ""
    city: str = ""
    description: str = ""
    notes: str = ""
    budget: float | None = None
    team_budget: float | None = None

    @property
    def display_name(self) -> str:
        """Name shown to people; falls back when blank."""
        return self.name.strip() or UNTITLED

    @property
    def primary(self) -> DateRange:
        return DateRange(self.primary_start, self.primary_end)

    @property
    def fitting(self) -> DateRange:
        return DateRange(self.fitting_start, self.fitting_end)

    @property
    def prep(self) -> DateRange:
        return DateRange(self.prep_start, self.prep_end)

    @property
    def phases(self) -> PhaseSet:
        """The derived phases as currently stored on the project."""
        return PhaseSet(fitting=self.fitting, prep=self.prep)

    def phase_range(self, phase: Phase) -> DateRange:
        """Return the range for one phase."""
        if phase is Phase.PREP:
            return self.prep
        if phase is Phase.FITTING:
            return self.fitting
        return self.primary

    def with_phases(self, phases: PhaseSet) -> Project:
        """Return a copy carrying the given fitting and prep ranges."""
        return replace(
            self,
            fitting_start=phases.fitting.start,
            fitting_end=phases.fitting.end,
            prep_start=phases.prep.start,
            prep_end=phases.prep.end,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to the per-project mapping used in project files."""
        result: dict[str, Any] = {"name": self.name, "confirmed": self.confirmed}
        for key, date_range in (
            ("primary", self.primary),
            ("fitting", self.fitting),
            ("prep", self.prep),
        ):
            if not date_range.is_empty:
                result[key] = {"start": date_range.start, "end": date_range.end}
        for key in ("producer", "contact", "city", "description", "notes"):
            value = getattr(self, key)
            if value:
                result[key] = value
        if self.budget is not None:
            result["budget"] = self.budget
        if self.team_budget is not None:
            result["team_budget"] = self.team_budget
        return result


@dataclass(frozen=True)
class ConflictDescription:
    """One same-phase overlap between a candidate project and another project."""

    phase: Phase
    other_id: str
    other_name: str
    candidate_range: DateRange
    other_range: DateRange

    @property
    def message(self) -> str:
        """Human-readable warning line.

        Days are DD/MM unless the two ranges touch more than one year, then
        every day carries its year.
        """
        bounds = (
            self.candidate_range.start,
            self.candidate_range.end,
            self.other_range.start,
            self.other_range.end,
        )
        with_year = len({day[:4] for day in bounds if day}) > 1
        return (
            f'{self.phase.label} overlaps with "{self.other_name}" '
            f"({self.candidate_range.format(with_year)} vs {self.other_range.format(with_year)})"
        )

    def __str__(self) -> str:
        return self.message
