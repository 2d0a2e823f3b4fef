"""
Payment Command Handlers

Use cases driving a payment through its lifecycle:
- CreatePaymentCommand: booking request, holds room stock and schedules expiration
- UploadPaymentProofCommand: payer submits a proof reference
- UpdatePaymentCommand: tenant accepts or rejects the proof
- ExpirePaymentCommand: fired by the delayed job or the overdue sweep

Every transition locks the payment row and changes stock in the same
transaction. Events are published through the bus after commit.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional
from uuid import UUID
import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db.models import F
from django.utils import timezone

from apps.properties.authorization import RoomAuthorizer
from apps.properties.models import Room
from apps.payments.domain import state_machine
from apps.payments.domain.events import (
    PaymentAccepted,
    PaymentCreated,
    PaymentExpired,
    PaymentProofUploaded,
    PaymentRejected,
)
from apps.payments.models import Payment
from shared.application.message_bus import MessageBus
from shared.application.uow import DjangoUnitOfWork
from shared.domain.exceptions import Forbidden, NotFound, ValidationError
from shared.infrastructure.locking import lock_queryset_if_possible

logger = logging.getLogger(__name__)

ACCEPT = "ACCEPT"
REJECT = "REJECT"


# ===== Commands =====

@dataclass
class CreatePaymentCommand:
    room_id: int
    total_price: int
    duration: int
    payment_method: str = Payment.Method.MANUAL
    payment_proof: str = ''
    invoice_url: str = ''
    expired_at: Optional[datetime] = None
    reserved_units: int = 1


@dataclass
class UploadPaymentProofCommand:
    payment_uuid: UUID
    payment_proof: str


@dataclass
class UpdatePaymentCommand:
    """Tenant decision, ``type`` is ACCEPT or REJECT"""
    payment_uuid: UUID
    type: str


@dataclass
class ExpirePaymentCommand:
    """``job_id`` is None when the overdue sweep fires the expiration"""
    payment_uuid: UUID
    job_id: Optional[str] = None


# ===== Helpers =====

def _get_payment(payment_uuid, *, lock: bool = False, related=()) -> Payment:
    queryset = Payment.objects.select_related(*related) if related else Payment.objects.all()
    if lock:
        queryset = lock_queryset_if_possible(queryset)
    try:
        return queryset.get(uuid=payment_uuid)
    except (Payment.DoesNotExist, ValueError, DjangoValidationError):
        raise NotFound("Payment not found")


def _transition(payment: Payment, target: str, *fields: str) -> None:
    """Move ``payment`` to ``target``, save it and return held stock if the target releases it"""
    state_machine.ensure_transition(payment.status, target)
    logger.info(f"Payment {payment.uuid} {payment.status} -> {target}")
    payment.status = target
    payment.save(update_fields=['status', *fields, 'updated_at'])
    if state_machine.releases_stock(target):
        Room.objects.filter(pk=payment.room_id).update(stock=F("stock") + payment.reserved_units)
        logger.info(f"Returned {payment.reserved_units} unit(s) to room {payment.room_id}")


# ===== Command Handlers =====

class CreatePaymentHandler:
    """
    Handler for CreatePayment command

    1. Lock the room row
    2. Require enough stock and hold ``reserved_units`` of it
    3. Create the payment in WAITING_FOR_PAYMENT
    4. Schedule the expiration job (enqueued after commit)
    5. Publish PaymentCreated after commit
    """

    def __init__(self, scheduler, bus: MessageBus, expiration_delay: timedelta):
        self.scheduler = scheduler
        self.bus = bus
        self.expiration_delay = expiration_delay

    def handle(self, command: CreatePaymentCommand, actor) -> Payment:
        if actor is None or not getattr(actor, 'is_authenticated', False):
            raise Forbidden("Authentication required.")
        if command.total_price < 0:
            raise ValidationError("Total price must not be negative")
        if command.duration < 1:
            raise ValidationError("Duration must be at least one night")
        if command.reserved_units < 1:
            raise ValidationError("At least one unit must be reserved")
        if command.payment_method not in Payment.Method.values:
            raise ValidationError(f"Unknown payment method {command.payment_method}")

        now = timezone.now()
        expired_at = command.expired_at or now + self.expiration_delay
        if expired_at <= now:
            raise ValidationError("Expiration must be in the future")

        with DjangoUnitOfWork(self.bus) as uow:
            rooms = lock_queryset_if_possible(
                Room.objects.filter(is_deleted=False, property__is_deleted=False)
            )
            try:
                room = rooms.get(pk=command.room_id)
            except Room.DoesNotExist:
                raise NotFound(f"Room with ID {command.room_id} does not exist.")

            if room.stock < command.reserved_units:
                raise ValidationError("Room is fully booked")
            Room.objects.filter(pk=room.pk).update(stock=F('stock') - command.reserved_units)

            payment = Payment.objects.create(
                room=room,
                user=actor,
                total_price=command.total_price,
                duration=command.duration,
                payment_method=command.payment_method,
                payment_proof=command.payment_proof,
                invoice_url=command.invoice_url,
                expired_at=expired_at,
                reserved_units=command.reserved_units,
            )
            payment.expiration_job_id = self.scheduler.schedule(payment.uuid, expired_at - now)

            uow.add_event(PaymentCreated(
                payment_uuid=payment.uuid,
                room_id=room.pk,
                user_id=actor.pk,
                total_price=payment.total_price,
                duration=payment.duration,
                expired_at=payment.expired_at,
            ))

        logger.info(f"Payment {payment.uuid} created for room {room.pk}, expires at {expired_at}")
        return payment


class UploadPaymentProofHandler:
    """Payer hands in a proof reference (WAITING_FOR_PAYMENT -> WAITING_FOR_PAYMENT_CONFIRMATION)"""

    def __init__(self, bus: MessageBus):
        self.bus = bus

    def handle(self, command: UploadPaymentProofCommand, actor) -> Payment:
        if not command.payment_proof:
            raise ValidationError("Payment proof is required")

        with DjangoUnitOfWork(self.bus) as uow:
            payment = _get_payment(command.payment_uuid, lock=True)
            if payment.user_id != getattr(actor, 'pk', None):
                raise Forbidden("Unauthorized")

            payment.payment_proof = command.payment_proof
            _transition(payment, Payment.Status.WAITING_FOR_PAYMENT_CONFIRMATION, 'payment_proof')

            tenant_id = Room.objects.filter(pk=payment.room_id).values_list(
                'property__tenant_id', flat=True
            ).first()
            uow.add_event(PaymentProofUploaded(
                payment_uuid=payment.uuid,
                room_id=payment.room_id,
                user_id=payment.user_id,
                tenant_id=tenant_id,
            ))

        return payment


class UpdatePaymentHandler:
    """
    Tenant accepts (-> PAID) or rejects (-> REJECTED) a proof

    Rejection returns the held stock in the same transaction. A repeated
    request finds the payment in a terminal state and fails with
    InvalidState, so stock is returned at most once.
    """

    def __init__(self, authorizer: RoomAuthorizer, bus: MessageBus):
        self.authorizer = authorizer
        self.bus = bus

    def handle(self, command: UpdatePaymentCommand, actor) -> Payment:
        if command.type not in (ACCEPT, REJECT):
            raise ValidationError("type must be ACCEPT or REJECT")
        self.authorizer.ensure_tenant(actor)

        with DjangoUnitOfWork(self.bus) as uow:
            payment = _get_payment(command.payment_uuid, lock=True)
            room = Room.objects.select_related('property').get(pk=payment.room_id)
            self.authorizer.ensure_room_owned(room, actor)

            if command.type == ACCEPT:
                _transition(payment, Payment.Status.PAID)
                uow.add_event(PaymentAccepted(
                    payment_uuid=payment.uuid,
                    user_id=payment.user_id,
                    total_price=payment.total_price,
                    duration=payment.duration,
                ))
            else:
                _transition(payment, Payment.Status.REJECTED)
                uow.add_event(PaymentRejected(
                    payment_uuid=payment.uuid,
                    user_id=payment.user_id,
                    total_price=payment.total_price,
                    duration=payment.duration,
                    released_units=payment.reserved_units,
                ))

        return payment


class ExpirePaymentHandler:
    """
    Fire handler of the expiration job

    Unknown payment, superseded job and a payment that already left
    WAITING_FOR_PAYMENT are all no-ops returning False. They are successful
    outcomes and must not be retried. Database errors propagate so the
    worker can retry them.
    """

    def __init__(self, bus: MessageBus):
        self.bus = bus

    def handle(self, command: ExpirePaymentCommand) -> bool:
        with DjangoUnitOfWork(self.bus) as uow:
            try:
                payment = _get_payment(command.payment_uuid, lock=True)
            except NotFound:
                logger.warning(f"Expiration fired for unknown payment {command.payment_uuid}")
                return False

            if command.job_id is not None and payment.expiration_job_id != command.job_id:
                logger.info(
                    f"Expiration job {command.job_id} superseded by "
                    f"{payment.expiration_job_id or 'none'}, skipping"
                )
                return False

            if payment.status != Payment.Status.WAITING_FOR_PAYMENT:
                logger.info(f"Payment {payment.uuid} already {payment.status}, expiration skipped")
                return False

            _transition(payment, Payment.Status.EXPIRED)
            uow.add_event(PaymentExpired(
                payment_uuid=payment.uuid,
                user_id=payment.user_id,
                released_units=payment.reserved_units,
            ))

        return True
