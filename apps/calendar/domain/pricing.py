"""
Day pricing

Pure functions layering rate and availability overrides over a room's
base price and stock, one value per calendar day. Overrides of one kind
never overlap for a room, so at most one of them covers any given day.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Iterable, List, Optional, Protocol

from shared.domain.value_objects import DateInterval

BASE = "base"
PEAK = "peak"


class PricedInterval(Protocol):
    interval: DateInterval
    price: int


class BlackoutInterval(Protocol):
    interval: DateInterval
    reason: str


@dataclass(frozen=True)
class CalendarDay:
    date: date
    price: int
    available: bool
    pricing_source: str = BASE
    reason: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "price": self.price,
            "available": self.available,
            "pricing_source": self.pricing_source,
            "reason": self.reason,
        }


@dataclass(frozen=True)
class PriceSummary:
    minimum_price: int
    maximum_price: int
    average_price: int


def as_date(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def month_start(value) -> date:
    """First day of the calendar month containing ``value``."""
    return as_date(value).replace(day=1)


def next_month_start(value) -> date:
    first = month_start(value)
    days_in_month = calendar.monthrange(first.year, first.month)[1]
    return first + timedelta(days=days_in_month)


def month_interval(value) -> DateInterval:
    """Closed interval from the first to the last day of the month."""
    return DateInterval(month_start(value), next_month_start(value) - timedelta(days=1))


def _index_by_day(window: DateInterval, overrides: Iterable) -> Dict[date, object]:
    covering: Dict[date, object] = {}
    for override in overrides:
        interval = override.interval
        start = max(interval.start, window.start)
        end = min(interval.end, window.end)
        if start > end:
            continue
        for day in DateInterval(start, end).days():
            covering[day] = override
    return covering


def daily_prices(
    window: DateInterval,
    base_price: int,
    rates: Iterable[PricedInterval],
) -> Dict[date, int]:
    """Effective price for every day of ``window``, ascending."""
    covering = _index_by_day(window, rates)
    return {
        day: covering[day].price if day in covering else base_price  # type: ignore[attr-defined]
        for day in window.days()
    }


def build_calendar_days(
    window: DateInterval,
    base_price: int,
    stock: int,
    rates: Iterable[PricedInterval],
    blackouts: Iterable[BlackoutInterval],
) -> List[CalendarDay]:
    rate_by_day = _index_by_day(window, rates)
    blackout_by_day = _index_by_day(window, blackouts)
    days: List[CalendarDay] = []
    for day in window.days():
        rate = rate_by_day.get(day)
        blackout = blackout_by_day.get(day)
        days.append(
            CalendarDay(
                date=day,
                price=rate.price if rate is not None else base_price,  # type: ignore[attr-defined]
                available=stock > 0 and blackout is None,
                pricing_source=PEAK if rate is not None else BASE,
                reason=blackout.reason if blackout is not None else None,  # type: ignore[attr-defined]
            )
        )
    return days


def round_half_up(value: Decimal) -> int:
    return int(value.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def summarize(prices: Iterable[int], base_price: int) -> PriceSummary:
    """Minimum, maximum and mean of the day prices.

    An empty sequence (a reversed window) falls back to the base price for
    all three values.
    """
    values = list(prices)
    if not values:
        return PriceSummary(base_price, base_price, base_price)
    average = round_half_up(Decimal(sum(values)) / Decimal(len(values)))
    return PriceSummary(min(values), max(values), average)
