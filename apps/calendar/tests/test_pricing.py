"""Tests for day pricing helpers."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

import pytest

from apps.calendar.domain.pricing import (
    PEAK,
    build_calendar_days,
    daily_prices,
    month_interval,
    month_start,
    summarize,
)
from shared.domain.value_objects import DateInterval


@dataclass
class Rate:
    interval: DateInterval
    price: int


@dataclass
class Blackout:
    interval: DateInterval
    reason: str


@pytest.mark.parametrize(
    "reference, first, last",
    [
        (date(2024, 2, 17), date(2024, 2, 1), date(2024, 2, 29)),
        (date(2023, 2, 1), date(2023, 2, 1), date(2023, 2, 28)),
        (datetime(2025, 12, 31, 23, 59), date(2025, 12, 1), date(2025, 12, 31)),
    ],
)
def test_month_interval(reference, first, last):
    assert month_start(reference) == first
    assert month_interval(reference) == DateInterval(first, last)


def test_rate_is_clipped_to_window():
    window = DateInterval(date(2025, 7, 1), date(2025, 7, 5))
    rate = Rate(DateInterval(date(2025, 6, 28), date(2025, 7, 2)), 150)

    prices = daily_prices(window, 100, [rate])

    assert list(prices.values()) == [150, 150, 100, 100, 100]
    assert list(prices) == sorted(prices)


def test_calendar_days_layer_rates_and_blackouts():
    window = DateInterval(date(2025, 7, 1), date(2025, 7, 4))
    days = build_calendar_days(
        window,
        base_price=100,
        stock=1,
        rates=[Rate(DateInterval(date(2025, 7, 2), date(2025, 7, 2)), 150)],
        blackouts=[Blackout(DateInterval(date(2025, 7, 3), date(2025, 7, 4)), "Renovation")],
    )

    assert [d.price for d in days] == [100, 150, 100, 100]
    assert [d.available for d in days] == [True, True, False, False]
    assert days[1].pricing_source == PEAK
    assert days[2].reason == "Renovation"
    assert days[0].to_dict() == {
        "date": "2025-07-01",
        "price": 100,
        "available": True,
        "pricing_source": "base",
        "reason": None,
    }


def test_zero_stock_makes_every_day_unavailable():
    window = DateInterval(date(2025, 7, 1), date(2025, 7, 3))
    days = build_calendar_days(window, 100, 0, [], [])
    assert not any(d.available for d in days)


def test_summarize_rounds_average_half_up():
    summary = summarize([100, 101], base_price=90)
    assert (summary.minimum_price, summary.maximum_price, summary.average_price) == (100, 101, 101)

    assert summarize([100, 100, 101], base_price=90).average_price == 100


def test_summarize_empty_falls_back_to_base_price():
    summary = summarize([], base_price=120)
    assert (summary.minimum_price, summary.maximum_price, summary.average_price) == (120, 120, 120)
