"""DRF exception handler translating domain errors into API responses."""

from __future__ import annotations

import logging

from rest_framework import status  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import exception_handler as drf_exception_handler  # type: ignore

from shared.domain.exceptions import DomainError

logger = logging.getLogger(__name__)


def domain_exception_handler(exc, context):  # type: ignore
    """Map DomainError subclasses to their status code, defer the rest to DRF."""

    if isinstance(exc, DomainError):
        view = context.get("view")
        logger.info(
            f"{exc.__class__.__name__} in {view.__class__.__name__ if view else 'unknown view'}: {exc.detail}"
        )
        return Response(
            {"detail": exc.detail, "code": exc.default_code},
            status=exc.status_code,
        )

    response = drf_exception_handler(exc, context)
    if response is None:
        # Unhandled infrastructure failure: DRF re-raises, Django answers 500.
        logger.error(f"Unhandled error: {exc}", exc_info=exc)
    elif response.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(f"Server error response: {response.data}")
    return response
