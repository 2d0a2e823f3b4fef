"""
Service composition

Every service receives its collaborators through its constructor. They are
built once per process on first use; tests that need different
collaborators construct the services directly instead of patching this
module.
"""

from dataclasses import dataclass
from datetime import timedelta
from functools import lru_cache

from django.conf import settings

from apps.availability.services import AvailabilityOverrideService, RateOverrideService
from apps.calendar.services import CalendarGenerator, PriceComparisonEngine
from apps.notifications.services import Notifier
from apps.payments.application.command_handlers import (
    CreatePaymentHandler,
    ExpirePaymentHandler,
    UpdatePaymentHandler,
    UploadPaymentProofHandler,
)
from apps.payments.application.event_handlers import PaymentNotificationHandlers
from apps.payments.application.queries import TenantPaymentsQuery
from apps.payments.scheduler import CeleryExpirationScheduler
from apps.properties.authorization import RoomAuthorizer
from shared.application.message_bus import MessageBus


@dataclass(frozen=True)
class Container:
    bus: MessageBus
    notifier: Notifier
    authorizer: RoomAuthorizer
    expiration_scheduler: CeleryExpirationScheduler
    rate_overrides: RateOverrideService
    availability_overrides: AvailabilityOverrideService
    calendar: CalendarGenerator
    price_comparison: PriceComparisonEngine
    create_payment: CreatePaymentHandler
    upload_payment_proof: UploadPaymentProofHandler
    update_payment: UpdatePaymentHandler
    expire_payment: ExpirePaymentHandler
    tenant_payments: TenantPaymentsQuery


def build_container() -> Container:
    bus = MessageBus()
    notifier = Notifier(from_email=settings.NOTIFICATION_FROM_EMAIL)
    PaymentNotificationHandlers(notifier).register(bus)

    authorizer = RoomAuthorizer()
    scheduler = CeleryExpirationScheduler()
    expiration_delay = timedelta(minutes=settings.PAYMENT_EXPIRATION_MINUTES)

    return Container(
        bus=bus,
        notifier=notifier,
        authorizer=authorizer,
        expiration_scheduler=scheduler,
        rate_overrides=RateOverrideService(authorizer),
        availability_overrides=AvailabilityOverrideService(authorizer),
        calendar=CalendarGenerator(),
        price_comparison=PriceComparisonEngine(),
        create_payment=CreatePaymentHandler(scheduler, bus, expiration_delay),
        upload_payment_proof=UploadPaymentProofHandler(bus),
        update_payment=UpdatePaymentHandler(authorizer, bus),
        expire_payment=ExpirePaymentHandler(bus),
        tenant_payments=TenantPaymentsQuery(authorizer),
    )


@lru_cache(maxsize=1)
def get_container() -> Container:
    return build_container()
