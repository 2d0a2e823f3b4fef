"""Django project configuration: settings, URLs, Celery app and service wiring."""

# Import the Celery application as soon as Django starts. Without this
# the shared task registry will not be populated.
from .celery import app as celery_app  # noqa: F401
