"""
Common Value Objects

- DateInterval: closed range of calendar days used by rate and
  availability overrides
"""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterator

from shared.domain.base import ValueObject
from shared.domain.exceptions import ValidationError


@dataclass(frozen=True)
class DateInterval(ValueObject):
    """
    Date interval value object

    Represents the days from start (inclusive) to end (inclusive).
    A single-day interval has start == end. Overlap rules live in
    apps.availability.domain.intervals.
    """
    start: date
    end: date

    def __post_init__(self):
        if self.start > self.end:
            raise ValidationError(
                f"Start date ({self.start}) must not be after end date ({self.end})"
            )

    def days(self) -> Iterator[date]:
        """Iterate over every day of the interval in ascending order"""
        current = self.start
        while current <= self.end:
            yield current
            current += timedelta(days=1)

    def __str__(self):
        return f"{self.start.isoformat()} - {self.end.isoformat()}"

    def __repr__(self):
        return f"DateInterval({self.start}, {self.end})"
