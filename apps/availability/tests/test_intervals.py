"""Tests for the interval overlap validator."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

import pytest

from apps.availability.domain.intervals import can_insert, find_conflicts, overlaps
from shared.domain.exceptions import OverlapConflict, ValidationError
from shared.domain.value_objects import DateInterval


@dataclass
class Existing:
    interval: DateInterval
    is_deleted: bool = False


def days(start: int, end: int) -> DateInterval:
    return DateInterval(date(2025, 7, start), date(2025, 7, end))


def test_reversed_interval_is_rejected():
    with pytest.raises(ValidationError):
        days(10, 9)


def test_single_day_interval_is_valid_and_checked():
    single = days(5, 5)
    assert list(single.days()) == [date(2025, 7, 5)]
    with pytest.raises(OverlapConflict):
        can_insert(single, [Existing(days(5, 8))])


@pytest.mark.parametrize(
    "a, b, expected",
    [
        ((1, 5), (5, 9), True),
        ((1, 5), (6, 9), False),
        ((3, 4), (1, 10), True),
        ((11, 20), (5, 8), False),
    ],
)
def test_overlaps_is_inclusive_on_both_ends(a, b, expected):
    assert overlaps(days(*a), days(*b)) is expected
    assert overlaps(days(*b), days(*a)) is expected


def test_containing_interval_conflicts_with_existing():
    existing = [Existing(days(5, 8))]

    with pytest.raises(OverlapConflict) as excinfo:
        can_insert(days(1, 10), existing)
    assert "2025-07-05 - 2025-07-08" in str(excinfo.value.detail)

    assert can_insert(days(11, 20), existing) is None


def test_deleted_intervals_are_ignored():
    existing = [Existing(days(5, 8), is_deleted=True)]
    assert find_conflicts(days(1, 10), existing) == []
    can_insert(days(1, 10), existing)


def test_find_conflicts_keeps_input_order():
    first, second = Existing(days(1, 3)), Existing(days(7, 9))
    assert find_conflicts(days(2, 8), [first, Existing(days(20, 21)), second]) == [first, second]
