"""Celery tasks for the payment lifecycle."""

from __future__ import annotations

import logging

from celery import shared_task  # type: ignore
from django.conf import settings  # type: ignore
from django.db import InterfaceError, OperationalError  # type: ignore
from django.utils import timezone  # type: ignore

from config.container import get_container

from .application.command_handlers import ExpirePaymentCommand
from .models import Payment

logger = logging.getLogger(__name__)


@shared_task(
    name="payments.expire_payment",
    autoretry_for=(OperationalError, InterfaceError),
    retry_backoff=True,
    retry_backoff_max=getattr(settings, "PAYMENT_EXPIRATION_RETRY_BACKOFF_MAX", 60),
    retry_jitter=True,
    max_retries=getattr(settings, "PAYMENT_EXPIRATION_MAX_RETRIES", 5),
    acks_late=True,
)
def expire_payment(payment_uuid: str, job_id: str | None = None) -> bool:
    """Expires a payment still waiting for payment when its delay elapses.

    Returns False for the no-op outcomes (unknown, superseded, already
    resolved); only database errors are retried.
    """
    return get_container().expire_payment.handle(
        ExpirePaymentCommand(payment_uuid=payment_uuid, job_id=job_id)
    )


# ============================================================================
# PERIODIC TASKS (Celery Beat)
# ============================================================================

@shared_task(
    name="payments.expire_overdue_payments",
    autoretry_for=(OperationalError, InterfaceError),
    retry_backoff=True,
    max_retries=3,
)
def expire_overdue_payments() -> dict[str, int]:
    """
    Safety net for lost expiration jobs.

    Fires the expiration handler for every WAITING_FOR_PAYMENT payment whose
    ``expired_at`` has passed. The handler re-checks the status under a row
    lock, so racing with a regular job cannot expire a payment twice.

    Returns:
        dict: {"checked": ..., "expired": ...}
    """
    overdue = list(
        Payment.objects.filter(
            status=Payment.Status.WAITING_FOR_PAYMENT,
            expired_at__lte=timezone.now(),
        ).values_list("uuid", flat=True)
    )

    handler = get_container().expire_payment
    expired = 0
    for payment_uuid in overdue:
        if handler.handle(ExpirePaymentCommand(payment_uuid=payment_uuid)):
            expired += 1

    if overdue:
        logger.info(f"Overdue sweep: {expired} of {len(overdue)} payments expired")
    return {"checked": len(overdue), "expired": expired}
