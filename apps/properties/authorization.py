"""Tenancy checks for rooms.

Answers "does room X belong to tenant Y" for the override store and the
payment handlers. Rooms of soft-deleted properties are treated as absent.
"""

from __future__ import annotations

import logging

from shared.domain.exceptions import Forbidden, NotFound
from shared.infrastructure.locking import lock_queryset_if_possible

from .models import Room

logger = logging.getLogger(__name__)


class RoomAuthorizer:
    """Resolves room ownership for an acting user."""

    def ensure_tenant(self, actor) -> None:
        if actor is None or not getattr(actor, "is_authenticated", False):
            raise Forbidden("Authentication required.")
        if not (hasattr(actor, "is_tenant") and actor.is_tenant()):
            raise Forbidden("User doesn't have access")

    def ensure_room_owned(self, room: Room, actor) -> None:
        if not room.belongs_to(actor):
            logger.warning(f"User {getattr(actor, 'id', None)} tried to access room {room.id}")
            raise Forbidden("Unauthorized: Room does not belong to this tenant")

    def get_owned_room(self, room_id: int, actor, *, lock: bool = False) -> Room:
        """Load an active room and make sure the actor owns it.

        With ``lock=True`` the room row is locked for the rest of the
        surrounding transaction, which serializes every mutation that
        depends on the room (override inserts, stock changes).
        """
        self.ensure_tenant(actor)
        queryset = Room.objects.select_related("property").filter(
            is_deleted=False,
            property__is_deleted=False,
        )
        if lock:
            queryset = lock_queryset_if_possible(queryset)
        try:
            room = queryset.get(pk=room_id)
        except Room.DoesNotExist:
            raise NotFound("Room not found")
        self.ensure_room_owned(room, actor)
        return room
