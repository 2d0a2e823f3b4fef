"""Property and room models.

Only the attributes the pricing and payment core reads are kept here:
property ownership (tenancy) and the room's base price and stock.
Prices are stored as integers in minor currency units.
"""

from __future__ import annotations

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Property(models.Model):
    """A listing owned by a tenant."""

    tenant = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="properties",
    )
    title = models.CharField(max_length=255)
    is_deleted = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Property")
        verbose_name_plural = _("Properties")
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["tenant", "is_deleted"], name="properties__tenant__6f0c1a_idx"),
        ]

    def __str__(self) -> str:
        return self.title


class Room(models.Model):
    """A bookable room type of a property with its base price and stock."""

    property = models.ForeignKey(
        Property,
        on_delete=models.CASCADE,
        related_name="rooms",
    )
    name = models.CharField(max_length=255)
    type = models.CharField(max_length=100, blank=True)
    base_price = models.PositiveBigIntegerField(
        help_text=_("Price per night in minor currency units."),
    )
    stock = models.PositiveIntegerField(
        default=1,
        help_text=_("Units currently available for booking."),
    )
    is_deleted = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Room")
        verbose_name_plural = _("Rooms")
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(base_price__gt=0),
                name="room_base_price_positive",
            ),
        ]
        indexes = [
            models.Index(fields=["property", "is_deleted"], name="properties__propert_3b9e2d_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.property.title}: {self.name}"

    def belongs_to(self, user) -> bool:
        return self.property.tenant_id == getattr(user, "id", None)
