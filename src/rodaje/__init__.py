"""rodaje - phase planning and clash detection for film productions.

Main entry points:
- derive_phases / apply_phases: Fitting and Preparation from the shooting range
- validate_project: date checks run before saving
- find_overlaps: same-phase clashes between confirmed projects
- phase_for_day / total_range: what a calendar cell shows for a project
- build_grid: week-aligned month grid with per-day project buckets
"""

from .classify import ProjectTab, filter_projects, in_total_range, phase_for_day, total_range
from .config import CalendarConfig, PhaseOffsetPolicy, RodajeConfig, load_config
from .exceptions import (
    InvalidDateFormat,
    MissingRequiredRange,
    OrderViolation,
    RodajeError,
    ValidationError,
)
from .grid import MonthGrid, MonthStats, build_grid, month_stats
from .models import ConflictDescription, DateRange, Phase, PhaseSet, Project, TouchedFlags
from .overlap import find_overlaps, ranges_overlap
from .phases import apply_phases, derive_phases, validate_project
from .store import ProjectStore, YamlProjectStore

__all__ = [
    # Models
    "ConflictDescription",
    "DateRange",
    "Phase",
    "PhaseSet",
    "Project",
    "TouchedFlags",
    # Configuration
    "CalendarConfig",
    "PhaseOffsetPolicy",
    "RodajeConfig",
    "load_config",
    # Errors
    "InvalidDateFormat",
    "MissingRequiredRange",
    "OrderViolation",
    "RodajeError",
    "ValidationError",
    # Phases
    "apply_phases",
    "derive_phases",
    "validate_project",
    # Overlaps
    "find_overlaps",
    "ranges_overlap",
    # Calendar
    "MonthGrid",
    "MonthStats",
    "ProjectTab",
    "build_grid",
    "filter_projects",
    "in_total_range",
    "month_stats",
    "phase_for_day",
    "total_range",
    # Storage
    "ProjectStore",
    "YamlProjectStore",
]
