"""Time-bound overrides of a room's base price and availability.

Both kinds cover an inclusive range of days and are soft-deleted. For a
given room, the non-deleted overrides of one kind never overlap; the
override services enforce it under a room row lock.
"""

from __future__ import annotations

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from shared.domain.value_objects import DateInterval


class OverrideQuerySet(models.QuerySet):
    def active(self):
        return self.filter(is_deleted=False)

    def intersecting(self, start, end):
        """Overrides sharing at least one day with [start, end]."""
        return self.filter(start_date__lte=end, end_date__gte=start)


class BaseOverride(models.Model):
    start_date = models.DateField()
    end_date = models.DateField()
    is_deleted = models.BooleanField(default=False)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = OverrideQuerySet.as_manager()

    class Meta:
        abstract = True

    @property
    def interval(self) -> DateInterval:
        return DateInterval(self.start_date, self.end_date)


class RateOverride(BaseOverride):
    """Peak-season rate: replaces the base price for the covered days."""

    room = models.ForeignKey(
        "properties.Room",
        on_delete=models.CASCADE,
        related_name="rate_overrides",
    )
    price = models.PositiveBigIntegerField(
        help_text=_("Price per night in minor currency units."),
    )

    class Meta:
        verbose_name = _("Peak season rate")
        verbose_name_plural = _("Peak season rates")
        ordering = ["start_date"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(end_date__gte=models.F("start_date")),
                name="rate_override_valid_date_range",
            ),
            models.CheckConstraint(
                condition=models.Q(price__gt=0),
                name="rate_override_price_positive",
            ),
        ]
        indexes = [
            models.Index(fields=["room", "is_deleted", "start_date", "end_date"], name="rate_override_room_range_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.room_id}: {self.start_date} - {self.end_date} @ {self.price}"


class AvailabilityOverride(BaseOverride):
    """Non-availability: the room cannot be booked on the covered days."""

    room = models.ForeignKey(
        "properties.Room",
        on_delete=models.CASCADE,
        related_name="availability_overrides",
    )
    reason = models.CharField(max_length=255)

    class Meta:
        verbose_name = _("Room non-availability")
        verbose_name_plural = _("Room non-availabilities")
        ordering = ["start_date"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(end_date__gte=models.F("start_date")),
                name="availability_override_valid_date_range",
            ),
        ]
        indexes = [
            models.Index(fields=["room", "is_deleted", "start_date", "end_date"], name="avail_override_room_range_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.room_id}: {self.start_date} - {self.end_date} ({self.reason})"
