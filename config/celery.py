import os

from celery import Celery

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings.dev")

app = Celery("rental_core")

app.config_from_object("django.conf:settings", namespace="CELERY")
app.autodiscover_tasks()


# ============================================================================
# CELERY BEAT SCHEDULE (Periodic Tasks)
# ============================================================================

app.conf.beat_schedule = {
    # Expire payments whose delayed job was lost by the broker
    "expire-overdue-payments": {
        "task": "payments.expire_overdue_payments",
        "schedule": float(os.environ.get("PAYMENT_EXPIRATION_SWEEP_SECONDS", 60)),
        "options": {"expires": 50},
    },
}
