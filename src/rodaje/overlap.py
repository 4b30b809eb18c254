"""Same-phase overlap detection between confirmed projects.

Overlaps are advisory: the detector reports them and the caller decides
whether to ask for confirmation before saving. Only confirmed projects take
part, on either side of the comparison.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from .logger import checks_enabled, get_logger
from .models import PHASE_ORDER, ConflictDescription, DateRange, Project

if TYPE_CHECKING:
    from .store import ProjectStore

logger = get_logger()


def ranges_overlap(a: DateRange, b: DateRange) -> bool:
    """Closed-interval overlap: ranges sharing even one endpoint day overlap.

    Incomplete ranges never overlap anything.
    """
    if not (a.is_complete and b.is_complete):
        return False
    assert a.start is not None and a.end is not None
    assert b.start is not None and b.end is not None
    return not (a.end < b.start or b.end < a.start)


def find_overlaps(
    candidate: Project, existing: Iterable[Project]
) -> list[ConflictDescription]:
    """List every same-phase overlap between candidate and the other projects.

    Results are grouped per other project in iteration order, and within a
    project follow Preparation, Fitting, Primary. A phase pairing is only
    compared when both sides have that phase fully specified.

    Returns:
        Conflicts found; empty when the candidate is pending or nothing overlaps.
    """
    if not candidate.confirmed:
        logger.debug(f"'{candidate.display_name}' is pending; skipping overlap check")
        return []

    conflicts: list[ConflictDescription] = []
    for other in existing:
        if other.id == candidate.id or not other.confirmed:
            continue
        for phase in PHASE_ORDER:
            mine = candidate.phase_range(phase)
            theirs = other.phase_range(phase)
            if not (mine.is_complete and theirs.is_complete):
                continue
            if checks_enabled():
                logger.checks(
                    f"  Comparing {phase.label.lower()} {mine} with "
                    f"'{other.display_name}' {theirs}"
                )
            if ranges_overlap(mine, theirs):
                conflict = ConflictDescription(
                    phase=phase,
                    other_id=other.id,
                    other_name=other.display_name,
                    candidate_range=mine,
                    other_range=theirs,
                )
                logger.changes(f"Conflict for '{candidate.display_name}': {conflict.message}")
                conflicts.append(conflict)

    return conflicts


def check_against_store(candidate: Project, store: ProjectStore) -> list[ConflictDescription]:
    """Run find_overlaps against everything currently in the store."""
    return find_overlaps(candidate, store.list())
