"""
Payment lifecycle

    WAITING_FOR_PAYMENT
      --(proof uploaded)--> WAITING_FOR_PAYMENT_CONFIRMATION
      --(expiration)------> EXPIRED
    WAITING_FOR_PAYMENT_CONFIRMATION
      --(tenant ACCEPT)---> PAID
      --(tenant REJECT)---> REJECTED

PAID, REJECTED and EXPIRED are terminal. Stock held by a payment goes back
to the room on REJECTED and EXPIRED.
"""

from typing import Dict, FrozenSet

from shared.domain.exceptions import InvalidState

WAITING_FOR_PAYMENT = "WAITING_FOR_PAYMENT"
WAITING_FOR_PAYMENT_CONFIRMATION = "WAITING_FOR_PAYMENT_CONFIRMATION"
PAID = "PAID"
REJECTED = "REJECTED"
EXPIRED = "EXPIRED"

TRANSITIONS: Dict[str, FrozenSet[str]] = {
    WAITING_FOR_PAYMENT: frozenset({WAITING_FOR_PAYMENT_CONFIRMATION, EXPIRED}),
    WAITING_FOR_PAYMENT_CONFIRMATION: frozenset({PAID, REJECTED}),
    PAID: frozenset(),
    REJECTED: frozenset(),
    EXPIRED: frozenset(),
}

RELEASES_STOCK = frozenset({REJECTED, EXPIRED})


def can_transition(current: str, target: str) -> bool:
    return target in TRANSITIONS.get(current, frozenset())


def ensure_transition(current: str, target: str) -> None:
    """
    Raises:
        InvalidState: if ``current -> target`` is not in the lifecycle
    """
    if not can_transition(current, target):
        raise InvalidState(f"Payment cannot move from {current} to {target}")


def releases_stock(status: str) -> bool:
    return status in RELEASES_STOCK
