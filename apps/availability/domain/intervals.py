"""
Interval Overlap Validator

Pure functions deciding whether a closed date interval may be inserted
next to the existing intervals of the same room. Used identically by
peak-season rates and non-availability periods.
"""

from typing import Iterable, List, Protocol

from shared.domain.exceptions import OverlapConflict
from shared.domain.value_objects import DateInterval


class Interval(Protocol):
    """Anything exposing an interval and a soft-delete flag (override rows)."""

    interval: DateInterval
    is_deleted: bool


def overlaps(a: DateInterval, b: DateInterval) -> bool:
    """True iff the closed intervals share at least one day."""
    return a.start <= b.end and b.start <= a.end


def find_conflicts(candidate: DateInterval, existing: Iterable[Interval]) -> List[Interval]:
    """Non-deleted intervals of ``existing`` overlapping ``candidate``, in input order."""
    return [
        item for item in existing
        if not item.is_deleted and overlaps(candidate, item.interval)
    ]


def can_insert(candidate: DateInterval, existing: Iterable[Interval]) -> None:
    """
    Validate that ``candidate`` does not overlap any non-deleted interval

    Raises:
        OverlapConflict: naming the first conflicting interval
    """
    conflicts = find_conflicts(candidate, existing)
    if conflicts:
        raise OverlapConflict(
            f"Interval {candidate} overlaps existing interval {conflicts[0].interval}"
        )
