"""Tests for payment command handlers."""

from __future__ import annotations

import threading
from datetime import timedelta

import pytest
from django.db import connection
from django.utils import timezone

from apps.notifications import services as templates
from apps.payments.application import command_handlers
from apps.payments.application.command_handlers import (
    ACCEPT,
    REJECT,
    CreatePaymentCommand,
    CreatePaymentHandler,
    ExpirePaymentCommand,
    ExpirePaymentHandler,
    UpdatePaymentCommand,
    UpdatePaymentHandler,
    UploadPaymentProofCommand,
    UploadPaymentProofHandler,
)
from apps.payments.application.event_handlers import PaymentNotificationHandlers
from apps.payments.models import Payment
from apps.properties.models import Room
from shared.application.message_bus import MessageBus
from shared.domain.exceptions import Forbidden, InvalidState, NotFound, ValidationError
from shared.infrastructure.locking import lock_queryset_if_possible

pytestmark = pytest.mark.django_db


class RecordingScheduler:
    def __init__(self):
        self.calls = []

    def schedule(self, payment_uuid, delay):
        job_id = f"job-{len(self.calls) + 1}"
        Payment.objects.filter(uuid=payment_uuid).update(expiration_job_id=job_id)
        self.calls.append((payment_uuid, delay, job_id))
        return job_id


class RecordingNotifier:
    def __init__(self, fail=False):
        self.fail = fail
        self.sent = []

    def send(self, recipient, template_id, data):
        self.sent.append((recipient.email, template_id, data))
        if self.fail:
            raise RuntimeError("SMTP is down")
        return True


@pytest.fixture
def scheduler():
    return RecordingScheduler()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def bus(notifier):
    bus = MessageBus()
    PaymentNotificationHandlers(notifier).register(bus)
    return bus


@pytest.fixture
def handlers(scheduler, bus, authorizer):
    return {
        "create": CreatePaymentHandler(scheduler, bus, timedelta(minutes=15)),
        "upload": UploadPaymentProofHandler(bus),
        "update": UpdatePaymentHandler(authorizer, bus),
        "expire": ExpirePaymentHandler(bus),
    }


@pytest.fixture
def payment(handlers, room, guest):
    return handlers["create"].handle(CreatePaymentCommand(room_id=room.id, total_price=300, duration=3), guest)


def confirmation_pending(handlers, payment, guest):
    return handlers["upload"].handle(
        UploadPaymentProofCommand(payment_uuid=payment.uuid, payment_proof="https://cdn.example.com/proof.jpg"),
        guest,
    )


class TestCreate:
    def test_creates_waiting_payment_and_holds_stock(self, handlers, scheduler, room, guest):
        before = timezone.now()
        payment = handlers["create"].handle(
            CreatePaymentCommand(room_id=room.id, total_price=300, duration=3), guest
        )

        payment.refresh_from_db()
        room.refresh_from_db()
        assert payment.status == Payment.Status.WAITING_FOR_PAYMENT
        assert payment.user == guest
        assert room.stock == 1
        assert before + timedelta(minutes=15) <= payment.expired_at <= timezone.now() + timedelta(minutes=15)

        [(scheduled_uuid, delay, job_id)] = scheduler.calls
        assert scheduled_uuid == payment.uuid
        assert timedelta(minutes=14, seconds=59) <= delay <= timedelta(minutes=15)
        assert payment.expiration_job_id == job_id

    def test_explicit_expiration_sets_delay(self, handlers, scheduler, room, guest):
        expired_at = timezone.now() + timedelta(hours=1)
        handlers["create"].handle(
            CreatePaymentCommand(room_id=room.id, total_price=300, duration=1, expired_at=expired_at), guest
        )
        delay = scheduler.calls[0][1]
        assert timedelta(minutes=59) < delay <= timedelta(hours=1)

    def test_fully_booked_room(self, handlers, room, guest):
        room.stock = 0
        room.save()
        with pytest.raises(ValidationError):
            handlers["create"].handle(CreatePaymentCommand(room_id=room.id, total_price=300, duration=3), guest)
        assert not Payment.objects.exists()

    @pytest.mark.parametrize(
        "changes",
        [{"total_price": -1}, {"duration": 0}, {"reserved_units": 0}, {"payment_method": "CASH"}],
    )
    def test_rejects_invalid_input(self, handlers, room, guest, changes):
        command = CreatePaymentCommand(room_id=room.id, total_price=300, duration=3)
        for key, value in changes.items():
            setattr(command, key, value)
        with pytest.raises(ValidationError):
            handlers["create"].handle(command, guest)

    def test_unknown_room(self, handlers, guest):
        with pytest.raises(NotFound):
            handlers["create"].handle(CreatePaymentCommand(room_id=999_999, total_price=300, duration=3), guest)

    def test_payer_is_asked_for_proof_after_commit(
        self, handlers, notifier, room, guest, django_capture_on_commit_callbacks
    ):
        with django_capture_on_commit_callbacks(execute=True):
            payment = handlers["create"].handle(
                CreatePaymentCommand(room_id=room.id, total_price=300, duration=3), guest
            )

        [(email, template_id, data)] = notifier.sent
        assert (email, template_id) == (guest.email, templates.UPLOAD_PAYMENT_PROOF)
        assert data["uuid"] == str(payment.uuid)
        assert data["name"] == "Gary Guest"


class TestUploadProof:
    def test_moves_to_confirmation_pending(
        self, handlers, notifier, payment, guest, tenant, django_capture_on_commit_callbacks
    ):
        with django_capture_on_commit_callbacks(execute=True):
            updated = confirmation_pending(handlers, payment, guest)

        assert updated.status == Payment.Status.WAITING_FOR_PAYMENT_CONFIRMATION
        assert updated.payment_proof == "https://cdn.example.com/proof.jpg"
        assert notifier.sent[-1][:2] == (tenant.email, templates.PAYMENT_AWAITING_CONFIRMATION)

    def test_only_the_payer_may_upload(self, handlers, payment, tenant):
        with pytest.raises(Forbidden):
            confirmation_pending(handlers, payment, tenant)

    def test_second_upload_is_invalid(self, handlers, payment, guest):
        confirmation_pending(handlers, payment, guest)
        with pytest.raises(InvalidState):
            confirmation_pending(handlers, payment, guest)

    def test_unknown_payment(self, handlers, guest):
        with pytest.raises(NotFound):
            handlers["upload"].handle(
                UploadPaymentProofCommand(payment_uuid="7b0a3e0c-2d7e-4a4c-9a70-0c0f5b0d8a11", payment_proof="x"),
                guest,
            )


class TestUpdate:
    def test_accept_marks_paid_and_keeps_stock(self, handlers, payment, room, guest, tenant):
        confirmation_pending(handlers, payment, guest)

        updated = handlers["update"].handle(UpdatePaymentCommand(payment.uuid, ACCEPT), tenant)

        room.refresh_from_db()
        assert updated.status == Payment.Status.PAID
        assert room.stock == 1

    def test_reject_returns_stock_exactly_once(self, handlers, payment, room, guest, tenant):
        confirmation_pending(handlers, payment, guest)

        handlers["update"].handle(UpdatePaymentCommand(payment.uuid, REJECT), tenant)
        room.refresh_from_db()
        assert room.stock == 2

        with pytest.raises(InvalidState):
            handlers["update"].handle(UpdatePaymentCommand(payment.uuid, REJECT), tenant)
        room.refresh_from_db()
        assert room.stock == 2
        payment.refresh_from_db()
        assert payment.status == Payment.Status.REJECTED

    def test_requires_confirmation_pending(self, handlers, payment, tenant):
        with pytest.raises(InvalidState):
            handlers["update"].handle(UpdatePaymentCommand(payment.uuid, ACCEPT), tenant)

    def test_requires_owning_tenant(self, handlers, payment, guest, other_tenant):
        confirmation_pending(handlers, payment, guest)
        with pytest.raises(Forbidden):
            handlers["update"].handle(UpdatePaymentCommand(payment.uuid, ACCEPT), other_tenant)
        with pytest.raises(Forbidden):
            handlers["update"].handle(UpdatePaymentCommand(payment.uuid, ACCEPT), guest)

    def test_unknown_type(self, handlers, payment, tenant):
        with pytest.raises(ValidationError):
            handlers["update"].handle(UpdatePaymentCommand(payment.uuid, "MAYBE"), tenant)

    def test_notification_failure_keeps_transition(
        self, authorizer, payment, room, guest, tenant, django_capture_on_commit_callbacks
    ):
        failing = RecordingNotifier(fail=True)
        bus = MessageBus()
        PaymentNotificationHandlers(failing).register(bus)
        UploadPaymentProofHandler(bus).handle(
            UploadPaymentProofCommand(payment_uuid=payment.uuid, payment_proof="ref-1"), guest
        )

        with django_capture_on_commit_callbacks(execute=True):
            UpdatePaymentHandler(authorizer, bus).handle(UpdatePaymentCommand(payment.uuid, REJECT), tenant)

        assert failing.sent[-1][1] == templates.PAYMENT_REJECTED
        payment.refresh_from_db()
        room.refresh_from_db()
        assert payment.status == Payment.Status.REJECTED
        assert room.stock == 2


class TestExpire:
    def test_expires_once_under_redelivery(self, handlers, payment, room):
        command = ExpirePaymentCommand(payment_uuid=payment.uuid, job_id=payment.expiration_job_id)

        assert handlers["expire"].handle(command) is True
        assert handlers["expire"].handle(command) is False

        payment.refresh_from_db()
        room.refresh_from_db()
        assert payment.status == Payment.Status.EXPIRED
        assert room.stock == 2

    def test_skips_resolved_payment(self, handlers, payment, room, guest):
        confirmation_pending(handlers, payment, guest)

        assert handlers["expire"].handle(ExpirePaymentCommand(payment.uuid, payment.expiration_job_id)) is False

        payment.refresh_from_db()
        room.refresh_from_db()
        assert payment.status == Payment.Status.WAITING_FOR_PAYMENT_CONFIRMATION
        assert room.stock == 1

    def test_superseded_job_is_a_no_op(self, handlers, scheduler, payment):
        first_job = payment.expiration_job_id
        scheduler.schedule(payment.uuid, timedelta(minutes=15))

        assert handlers["expire"].handle(ExpirePaymentCommand(payment.uuid, first_job)) is False
        payment.refresh_from_db()
        assert payment.status == Payment.Status.WAITING_FOR_PAYMENT

        assert handlers["expire"].handle(ExpirePaymentCommand(payment.uuid, payment.expiration_job_id)) is True

    def test_sweep_without_job_id(self, handlers, payment):
        assert handlers["expire"].handle(ExpirePaymentCommand(payment.uuid)) is True

    def test_unknown_payment_is_a_no_op(self, handlers):
        assert handlers["expire"].handle(
            ExpirePaymentCommand("7b0a3e0c-2d7e-4a4c-9a70-0c0f5b0d8a11", "job-x")
        ) is False

    def test_payer_is_notified(self, handlers, notifier, payment, guest, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=True):
            handlers["expire"].handle(ExpirePaymentCommand(payment.uuid, payment.expiration_job_id))
        assert notifier.sent[-1][:2] == (guest.email, templates.PAYMENT_EXPIRED)


@pytest.fixture
def locked_models(monkeypatch):
    """Models whose rows were locked (only their own rows) during the test."""
    models = []

    def record(queryset):
        locked = lock_queryset_if_possible(queryset)
        if locked.query.select_for_update and locked.query.select_for_update_of == ("self",):
            models.append(locked.model)
        return locked

    monkeypatch.setattr(command_handlers, "lock_queryset_if_possible", record)
    return models


class TestRowLocks:
    def test_create_locks_the_room(self, handlers, room, guest, locked_models):
        handlers["create"].handle(CreatePaymentCommand(room_id=room.id, total_price=300, duration=3), guest)
        assert locked_models == [Room]

    def test_upload_locks_the_payment(self, handlers, payment, guest, locked_models):
        locked_models.clear()
        confirmation_pending(handlers, payment, guest)
        assert locked_models == [Payment]

    def test_update_locks_the_payment(self, handlers, payment, guest, tenant, locked_models):
        confirmation_pending(handlers, payment, guest)
        locked_models.clear()

        handlers["update"].handle(UpdatePaymentCommand(payment.uuid, REJECT), tenant)
        assert locked_models == [Payment]

    def test_expire_locks_the_payment(self, handlers, payment, locked_models):
        locked_models.clear()
        handlers["expire"].handle(ExpirePaymentCommand(payment.uuid, payment.expiration_job_id))
        assert locked_models == [Payment]


@pytest.mark.django_db(transaction=True)
def test_racing_rejections_return_stock_once(handlers, payment, room, guest, tenant):
    if not connection.features.has_select_for_update:
        pytest.skip("database backend has no row locks")

    confirmation_pending(handlers, payment, guest)
    barrier = threading.Barrier(2)
    outcomes = []

    def reject():
        try:
            barrier.wait()
            handlers["update"].handle(UpdatePaymentCommand(payment.uuid, REJECT), tenant)
            outcomes.append("rejected")
        except InvalidState:
            outcomes.append("invalid")
        finally:
            connection.close()

    threads = [threading.Thread(target=reject) for _ in range(2)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    room.refresh_from_db()
    assert sorted(outcomes) == ["invalid", "rejected"]
    assert room.stock == 2
