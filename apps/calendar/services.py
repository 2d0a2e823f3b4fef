"""Read-only calendar and price comparison services.

Both read the same override tables the override store writes. Nothing here
mutates state, so no locks are taken.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, List, Sequence

from django.db.models import Prefetch  # type: ignore

from apps.availability.models import AvailabilityOverride, RateOverride
from apps.properties.models import Room
from shared.domain.exceptions import NotFound, ValidationError
from shared.domain.value_objects import DateInterval

from .domain.pricing import (
    CalendarDay,
    as_date,
    build_calendar_days,
    daily_prices,
    month_interval,
    month_start,
    summarize,
)

logger = logging.getLogger(__name__)


@dataclass
class RoomCalendar:
    room_id: int
    base_price: int
    month: str
    days: List[CalendarDay] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "room_id": self.room_id,
            "base_price": self.base_price,
            "month": self.month,
            "calendar": [day.to_dict() for day in self.days],
        }


@dataclass
class RoomPriceComparison:
    room_id: int
    name: str
    type: str
    property_id: int
    base_price: int
    minimum_price: int
    maximum_price: int
    average_price: int
    daily_prices: Dict[str, int]

    def to_dict(self) -> dict:
        return {
            "room_id": self.room_id,
            "name": self.name,
            "type": self.type,
            "property_id": self.property_id,
            "base_price": self.base_price,
            "minimum_price": self.minimum_price,
            "maximum_price": self.maximum_price,
            "average_price": self.average_price,
            "daily_prices": self.daily_prices,
        }


def active_rooms():
    return Room.objects.filter(is_deleted=False, property__is_deleted=False)


class CalendarGenerator:
    """Day-by-day price and availability of one room for one month."""

    def generate(self, room_id: int, month: date) -> RoomCalendar:
        window = month_interval(month)
        try:
            room = active_rooms().get(pk=room_id)
        except Room.DoesNotExist:
            raise NotFound(f"Room with ID {room_id} not found")

        rates = list(
            RateOverride.objects.active()
            .filter(room=room)
            .intersecting(window.start, window.end)
        )
        blackouts = list(
            AvailabilityOverride.objects.active()
            .filter(room=room)
            .intersecting(window.start, window.end)
        )

        days = build_calendar_days(window, room.base_price, room.stock, rates, blackouts)
        logger.debug(f"Generated {len(days)} calendar days for room {room.pk} ({window})")
        return RoomCalendar(
            room_id=room.pk,
            base_price=room.base_price,
            month=month_start(month).strftime("%Y-%m"),
            days=days,
        )


class PriceComparisonEngine:
    """Reduces per-day effective prices of several rooms to summary statistics."""

    def compare(self, room_ids: Sequence[int], start_date, end_date) -> List[RoomPriceComparison]:
        if not room_ids:
            raise ValidationError("No room IDs provided")
        start_date, end_date = as_date(start_date), as_date(end_date)

        rooms = self._rooms_with_rates(room_ids, start_date, end_date)
        if not rooms:
            raise NotFound("No rooms found for the given IDs")

        return [self._compare_room(room, start_date, end_date) for room in rooms]

    def property_monthly_comparison(self, property_id: int, reference_date) -> dict:
        window = month_interval(reference_date)
        room_ids = list(
            active_rooms().filter(property_id=property_id).values_list("id", flat=True)
        )
        if not room_ids:
            raise NotFound(f"No rooms found for property with ID {property_id}")

        rooms = self.compare(room_ids, window.start, window.end)
        return {
            "property_id": property_id,
            "month": window.start.strftime("%Y-%m"),
            "rooms": rooms,
        }

    def _rooms_with_rates(self, room_ids: Iterable[int], start_date: date, end_date: date) -> list:
        rates = RateOverride.objects.active()
        if start_date <= end_date:
            rates = rates.intersecting(start_date, end_date)
        else:
            rates = rates.none()
        return list(
            active_rooms()
            .filter(pk__in=list(room_ids))
            .prefetch_related(Prefetch("rate_overrides", queryset=rates, to_attr="active_rates"))
        )

    def _compare_room(self, room: Room, start_date: date, end_date: date) -> RoomPriceComparison:
        if start_date <= end_date:
            prices = daily_prices(DateInterval(start_date, end_date), room.base_price, room.active_rates)
        else:
            prices = {}
        summary = summarize(prices.values(), room.base_price)
        return RoomPriceComparison(
            room_id=room.pk,
            name=room.name,
            type=room.type,
            property_id=room.property_id,
            base_price=room.base_price,
            minimum_price=summary.minimum_price,
            maximum_price=summary.maximum_price,
            average_price=summary.average_price,
            daily_prices={day.isoformat(): price for day, price in prices.items()},
        )
