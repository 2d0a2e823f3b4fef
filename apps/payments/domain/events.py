"""
Payment Domain Events

Published after the transaction that caused them commits.
Each one results in a best-effort notification.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from uuid import UUID

from shared.domain.base import DomainEvent


@dataclass
class PaymentCreated(DomainEvent):
    """
    Event: a booking request created a payment

    Triggers:
    - Ask the payer to upload a payment proof before ``expired_at``
    """
    payment_uuid: UUID
    room_id: int
    user_id: int
    total_price: int
    duration: int
    expired_at: Optional[datetime] = None


@dataclass
class PaymentProofUploaded(DomainEvent):
    """
    Event: WAITING_FOR_PAYMENT -> WAITING_FOR_PAYMENT_CONFIRMATION

    Triggers:
    - Ask the tenant owning the room to review the proof
    """
    payment_uuid: UUID
    room_id: int
    user_id: int
    tenant_id: int


@dataclass
class PaymentAccepted(DomainEvent):
    """Event: tenant accepted the proof (-> PAID)"""
    payment_uuid: UUID
    user_id: int
    total_price: int
    duration: int


@dataclass
class PaymentRejected(DomainEvent):
    """Event: tenant rejected the proof (-> REJECTED), stock returned"""
    payment_uuid: UUID
    user_id: int
    total_price: int
    duration: int
    released_units: int = 1


@dataclass
class PaymentExpired(DomainEvent):
    """Event: no proof before the deadline (-> EXPIRED), stock returned"""
    payment_uuid: UUID
    user_id: int
    released_units: int = 1
