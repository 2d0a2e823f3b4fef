"""Delayed expiration jobs for payments.

Each call to ``schedule`` issues a fresh job key and stores it on the
payment. The worker compares the key it was started with against the stored
one, so a job superseded by a later ``schedule`` call fires as a no-op.
Jobs are never revoked.
"""

from __future__ import annotations

import logging
from datetime import timedelta
from uuid import UUID, uuid4

from django.db import transaction  # type: ignore

from .models import Payment

logger = logging.getLogger(__name__)

JOB_PREFIX = "payment-expiration"


def make_job_id(payment_uuid) -> str:
    return f"{JOB_PREFIX}:{payment_uuid}:{uuid4().hex}"


class CeleryExpirationScheduler:
    """Enqueues ``payments.expire_payment`` with a countdown."""

    def schedule(self, payment_uuid: UUID, delay: timedelta) -> str:
        job_id = make_job_id(payment_uuid)
        countdown = max(int(delay.total_seconds()), 0)

        updated = Payment.objects.filter(uuid=payment_uuid).update(expiration_job_id=job_id)
        if not updated:
            logger.warning(f"Scheduling expiration for unknown payment {payment_uuid}")

        def enqueue() -> None:
            from .tasks import expire_payment  # type: ignore

            expire_payment.apply_async(
                args=[str(payment_uuid)],
                kwargs={"job_id": job_id},
                countdown=countdown,
                task_id=job_id,
            )
            logger.info(f"Expiration job {job_id} enqueued, fires in {countdown}s")

        transaction.on_commit(enqueue)
        return job_id
