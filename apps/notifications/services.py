"""Notification delivery for payment events: email plus an in-app record."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Dict, Tuple

from django.conf import settings  # type: ignore
from django.core.mail import send_mail  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.html import strip_tags  # type: ignore

from .models import Notification

logger = logging.getLogger(__name__)

UPLOAD_PAYMENT_PROOF = "upload-payment-proof"
PAYMENT_AWAITING_CONFIRMATION = "payment-awaiting-confirmation"
PAYMENT_ACCEPTED = "payment-accepted"
PAYMENT_REJECTED = "payment-rejected"
PAYMENT_EXPIRED = "payment-expired"


def _format_deadline(value) -> str:
    if isinstance(value, datetime):
        return timezone.localtime(value).strftime("%d.%m.%Y %H:%M")
    return str(value or "")


def _upload_payment_proof(data: dict) -> Tuple[str, str]:
    return (
        "Upload your payment proof",
        f"""
    <html>
    <body>
        <h2>Hello, {data['name']}!</h2>
        <p>Your booking <strong>{data['uuid']}</strong> is waiting for payment.</p>
        <p>Please upload your payment proof before <strong>{_format_deadline(data.get('expire_at'))}</strong>,
        otherwise the booking expires automatically.</p>
    </body>
    </html>
    """,
    )


def _payment_awaiting_confirmation(data: dict) -> Tuple[str, str]:
    return (
        "A payment is waiting for your confirmation",
        f"""
    <html>
    <body>
        <h2>Hello, {data['name']}!</h2>
        <p>A guest uploaded a payment proof for <strong>{data['room_name']}</strong>.</p>
        <p>Payment code: <strong>{data['uuid']}</strong>. Please accept or reject it.</p>
    </body>
    </html>
    """,
    )


def _payment_accepted(data: dict) -> Tuple[str, str]:
    return (
        "Your payment has been accepted!",
        f"""
    <html>
    <body>
        <h2>Hello, {data['name']}!</h2>
        <p>Your payment <strong>{data['payment_code']}</strong> has been accepted.</p>
        <ul>
            <li><strong>Total:</strong> {data['total_price']}</li>
            <li><strong>Nights:</strong> {data['duration']}</li>
        </ul>
    </body>
    </html>
    """,
    )


def _payment_rejected(data: dict) -> Tuple[str, str]:
    return (
        "Your payment has been rejected",
        f"""
    <html>
    <body>
        <h2>Hello, {data['name']}!</h2>
        <p>Your payment <strong>{data['payment_code']}</strong> has been rejected by the property owner.</p>
        <p>You can create a new booking at any time.</p>
    </body>
    </html>
    """,
    )


def _payment_expired(data: dict) -> Tuple[str, str]:
    return (
        "Your booking has expired",
        f"""
    <html>
    <body>
        <h2>Hello, {data['name']}!</h2>
        <p>No payment proof was uploaded in time for booking <strong>{data['payment_code']}</strong>.</p>
        <p>The booking has been cancelled.</p>
    </body>
    </html>
    """,
    )


TEMPLATES: Dict[str, Callable[[dict], Tuple[str, str]]] = {
    UPLOAD_PAYMENT_PROOF: _upload_payment_proof,
    PAYMENT_AWAITING_CONFIRMATION: _payment_awaiting_confirmation,
    PAYMENT_ACCEPTED: _payment_accepted,
    PAYMENT_REJECTED: _payment_rejected,
    PAYMENT_EXPIRED: _payment_expired,
}


def render(template_id: str, data: dict) -> Tuple[str, str]:
    """Subject and HTML body of a template.

    Raises:
        KeyError: unknown template id or missing template data
    """
    return TEMPLATES[template_id](data)


class Notifier:
    """Best-effort delivery: failures are logged and reported as ``False``."""

    def __init__(self, from_email: str | None = None):
        self.from_email = from_email

    def send(self, recipient, template_id: str, data: dict) -> bool:
        email = getattr(recipient, "email", "")
        try:
            subject, html_message = render(template_id, data)
            notification = Notification.objects.create(
                user=recipient,
                template_id=template_id,
                email=email,
                title=subject,
                message=strip_tags(html_message).strip(),
            )
            send_mail(
                subject=subject,
                message=strip_tags(html_message),
                from_email=self.from_email or settings.NOTIFICATION_FROM_EMAIL,
                recipient_list=[email],
                html_message=html_message,
                fail_silently=False,
            )
            notification.mark_delivered()
        except Exception as e:
            logger.error(f"Failed to send {template_id} to {email}: {e}", exc_info=True)
            return False

        logger.info(f"Email sent successfully to {email}: {template_id}")
        return True
