"""
Payment Event Handlers

Turn payment events into notifications. They run after commit through the
message bus; the bus logs and swallows their errors, so a failed
notification never undoes the transition that caused it.
"""

from datetime import date
import logging

from django.contrib.auth import get_user_model

from apps.notifications import services as templates
from apps.payments.domain.events import (
    PaymentAccepted,
    PaymentCreated,
    PaymentExpired,
    PaymentProofUploaded,
    PaymentRejected,
)
from apps.properties.models import Room
from shared.application.message_bus import MessageBus

logger = logging.getLogger(__name__)


class PaymentNotificationHandlers:
    """Maps each payment event to one notifier call"""

    def __init__(self, notifier):
        self.notifier = notifier

    def register(self, bus: MessageBus) -> None:
        bus.register_event_handler(PaymentCreated, self.on_created)
        bus.register_event_handler(PaymentProofUploaded, self.on_proof_uploaded)
        bus.register_event_handler(PaymentAccepted, self.on_accepted)
        bus.register_event_handler(PaymentRejected, self.on_rejected)
        bus.register_event_handler(PaymentExpired, self.on_expired)

    def _user(self, user_id):
        return get_user_model().objects.get(pk=user_id)

    def _send(self, user, template_id: str, data: dict) -> bool:
        data = {'name': user.display_name, 'year': date.today().year, **data}
        sent = self.notifier.send(user, template_id, data)
        if not sent:
            logger.warning(f"Notification {template_id} to user {user.pk} was not delivered")
        return sent

    def on_created(self, event: PaymentCreated):
        self._send(self._user(event.user_id), templates.UPLOAD_PAYMENT_PROOF, {
            'uuid': str(event.payment_uuid),
            'expire_at': event.expired_at,
        })

    def on_proof_uploaded(self, event: PaymentProofUploaded):
        room = Room.objects.get(pk=event.room_id)
        self._send(self._user(event.tenant_id), templates.PAYMENT_AWAITING_CONFIRMATION, {
            'uuid': str(event.payment_uuid),
            'room_name': room.name,
        })

    def on_accepted(self, event: PaymentAccepted):
        self._send(self._user(event.user_id), templates.PAYMENT_ACCEPTED, {
            'payment_code': str(event.payment_uuid),
            'total_price': event.total_price,
            'duration': event.duration,
        })

    def on_rejected(self, event: PaymentRejected):
        self._send(self._user(event.user_id), templates.PAYMENT_REJECTED, {
            'payment_code': str(event.payment_uuid),
            'total_price': event.total_price,
            'duration': event.duration,
        })

    def on_expired(self, event: PaymentExpired):
        self._send(self._user(event.user_id), templates.PAYMENT_EXPIRED, {
            'payment_code': str(event.payment_uuid),
        })
