"""Payment records created by booking requests.

A payment holds ``reserved_units`` of its room's stock from creation until
it reaches a terminal state; stock is returned on rejection and expiration.
Rows are never deleted.
"""

from __future__ import annotations

import uuid

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Payment(models.Model):
    class Status(models.TextChoices):
        WAITING_FOR_PAYMENT = "WAITING_FOR_PAYMENT", _("Waiting for payment")
        WAITING_FOR_PAYMENT_CONFIRMATION = (
            "WAITING_FOR_PAYMENT_CONFIRMATION",
            _("Waiting for payment confirmation"),
        )
        PAID = "PAID", _("Paid")
        REJECTED = "REJECTED", _("Rejected")
        EXPIRED = "EXPIRED", _("Expired")

    class Method(models.TextChoices):
        MANUAL = "MANUAL", _("Manual transfer")
        AUTOMATIC = "AUTOMATIC", _("Payment gateway")

    uuid = models.UUIDField(default=uuid.uuid4, unique=True, editable=False)
    room = models.ForeignKey(
        "properties.Room",
        on_delete=models.PROTECT,
        related_name="payments",
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="payments",
    )
    total_price = models.PositiveBigIntegerField(
        help_text=_("Amount due in minor currency units."),
    )
    duration = models.PositiveIntegerField(help_text=_("Number of nights."))
    status = models.CharField(
        max_length=40,
        choices=Status.choices,
        default=Status.WAITING_FOR_PAYMENT,
    )
    payment_method = models.CharField(
        max_length=20,
        choices=Method.choices,
        default=Method.MANUAL,
    )
    payment_proof = models.CharField(max_length=500, blank=True)
    invoice_url = models.URLField(max_length=500, blank=True)
    expired_at = models.DateTimeField()
    reserved_units = models.PositiveIntegerField(default=1)
    expiration_job_id = models.CharField(max_length=128, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Payment")
        verbose_name_plural = _("Payments")
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(duration__gte=1),
                name="payment_duration_positive",
            ),
        ]
        indexes = [
            models.Index(fields=["status", "expired_at"], name="payment_status_expiry_idx"),
            models.Index(fields=["room", "status"], name="payment_room_status_idx"),
        ]

    def __str__(self) -> str:
        return f"Payment {self.uuid} ({self.status})"
