"""Override store for peak-season rates and non-availability periods.

Both kinds share the same lifecycle: create, update, soft delete and a
paginated listing scoped to the acting tenant. Every mutation that can move
an interval runs the overlap check and the write inside one transaction
while holding the room row lock, so two concurrent requests for the same
room cannot both pass the check against a stale snapshot.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Generic, Mapping, TypeVar

from django.db import transaction  # type: ignore

from apps.properties.authorization import RoomAuthorizer
from shared.application.pagination import Page, order_by, paginate
from shared.domain.exceptions import NotFound, ValidationError
from shared.domain.value_objects import DateInterval
from shared.infrastructure.locking import lock_queryset_if_possible

from .domain.intervals import can_insert
from .filters import AvailabilityOverrideFilterSet, RateOverrideFilterSet
from .models import AvailabilityOverride, BaseOverride, RateOverride

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseOverride)


@dataclass
class OverrideService(Generic[T]):
    """Create/update/delete/list for one override kind."""

    authorizer: RoomAuthorizer
    model: type = field(init=False)
    filterset_class: type = field(init=False)
    label: str = field(init=False)
    payload_fields: tuple[str, ...] = field(init=False)
    sortable_fields: tuple[str, ...] = field(init=False)

    # ---- hooks --------------------------------------------------------

    def validate_payload(self, payload: Mapping[str, Any]) -> dict[str, Any]:
        raise NotImplementedError

    # ---- operations ---------------------------------------------------

    def create(self, room_id: int, interval: DateInterval, payload: Mapping[str, Any], actor) -> T:
        data = self.validate_payload(payload)

        with transaction.atomic():
            room = self.authorizer.get_owned_room(room_id, actor, lock=True)
            existing = self.model.objects.active().filter(room=room)
            can_insert(interval, existing)
            override = self.model.objects.create(
                room=room,
                start_date=interval.start,
                end_date=interval.end,
                created_by=actor,
                **data,
            )

        logger.info(f"{self.label} {override.pk} created for room {room.pk}: {interval}")
        return override

    def update(self, override_id: int, changes: Mapping[str, Any], actor) -> T:
        changes = dict(changes)
        payload_changes = {key: changes[key] for key in self.payload_fields if key in changes}
        data = self.validate_payload(payload_changes) if payload_changes else {}

        with transaction.atomic():
            override = self._get_active(override_id, lock=True)
            room = self.authorizer.get_owned_room(override.room_id, actor, lock=True)

            start = changes.get("start_date", override.start_date)
            end = changes.get("end_date", override.end_date)
            interval = DateInterval(start, end)

            if interval != override.interval:
                others = self.model.objects.active().filter(room=room).exclude(pk=override.pk)
                can_insert(interval, others)

            override.start_date = interval.start
            override.end_date = interval.end
            for key, value in data.items():
                setattr(override, key, value)
            override.save()

        logger.info(f"{self.label} {override.pk} updated for room {room.pk}: {interval}")
        return override

    def delete(self, override_id: int, actor) -> T:
        with transaction.atomic():
            override = self._get_active(override_id, lock=True)
            self.authorizer.get_owned_room(override.room_id, actor)
            override.is_deleted = True
            override.save(update_fields=["is_deleted", "updated_at"])

        logger.info(f"{self.label} {override.pk} soft-deleted")
        return override

    def list(
        self,
        filters: Mapping[str, Any],
        actor,
        *,
        page: int = 1,
        take: int | None = None,
        sort_by: str = "created_at",
        sort_order: str = "desc",
    ) -> Page[T]:
        self.authorizer.ensure_tenant(actor)

        queryset = (
            self.model.objects.active()
            .filter(
                room__is_deleted=False,
                room__property__is_deleted=False,
                room__property__tenant=actor,
            )
            .select_related("room")
        )
        filterset = self.filterset_class(data=dict(filters), queryset=queryset)
        if not filterset.is_valid():
            raise ValidationError(str(dict(filterset.errors)))

        queryset = order_by(filterset.qs, sort_by, sort_order, self.sortable_fields)
        return paginate(queryset, page, take)

    # ---- helpers ------------------------------------------------------

    def _get_active(self, override_id: int, *, lock: bool = False) -> T:
        queryset = self.model.objects.active()
        if lock:
            queryset = lock_queryset_if_possible(queryset)
        try:
            return queryset.get(pk=override_id)
        except self.model.DoesNotExist:
            raise NotFound(f"{self.label} not found")


@dataclass
class RateOverrideService(OverrideService[RateOverride]):
    """Peak-season rates."""

    def __post_init__(self):
        self.model = RateOverride
        self.filterset_class = RateOverrideFilterSet
        self.label = "Peak Season Rate"
        self.payload_fields = ("price",)
        self.sortable_fields = ("created_at", "updated_at", "start_date", "end_date", "price")

    def validate_payload(self, payload: Mapping[str, Any]) -> dict[str, Any]:
        price = payload.get("price")
        if isinstance(price, bool) or not isinstance(price, int):
            raise ValidationError("Price must be an integer amount in minor units")
        if price <= 0:
            raise ValidationError("Price must be greater than 0")
        return {"price": price}


@dataclass
class AvailabilityOverrideService(OverrideService[AvailabilityOverride]):
    """Room non-availability periods."""

    def __post_init__(self):
        self.model = AvailabilityOverride
        self.filterset_class = AvailabilityOverrideFilterSet
        self.label = "Room Non Availability"
        self.payload_fields = ("reason",)
        self.sortable_fields = ("created_at", "updated_at", "start_date", "end_date", "reason")

    def validate_payload(self, payload: Mapping[str, Any]) -> dict[str, Any]:
        reason = payload.get("reason")
        if not isinstance(reason, str) or not reason.strip():
            raise ValidationError("Reason is required")
        return {"reason": reason.strip()}


def interval_from(start_date: date, end_date: date) -> DateInterval:
    """Build an interval, rejecting start > end with a ValidationError."""
    return DateInterval(start_date, end_date)
