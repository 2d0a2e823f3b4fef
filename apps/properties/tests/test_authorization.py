"""Tests for the room tenancy checks."""

from __future__ import annotations

import pytest

from apps.properties.models import Property, Room
from apps.users.models import User
from shared.domain.exceptions import Forbidden, NotFound

pytestmark = pytest.mark.django_db


def test_owner_gets_the_room(authorizer, room, tenant):
    assert authorizer.get_owned_room(room.id, tenant) == room


def test_guest_is_not_a_tenant(authorizer, room, guest):
    with pytest.raises(Forbidden):
        authorizer.get_owned_room(room.id, guest)


def test_other_tenant_is_refused(authorizer, room, other_tenant):
    with pytest.raises(Forbidden):
        authorizer.get_owned_room(room.id, other_tenant)


def test_deleted_tenant_is_refused(authorizer, room, tenant):
    User.objects.filter(pk=tenant.pk).update(is_deleted=True)
    tenant.refresh_from_db()
    with pytest.raises(Forbidden):
        authorizer.ensure_tenant(tenant)


def test_rooms_of_deleted_properties_are_absent(authorizer, room, tenant):
    Property.objects.filter(pk=room.property_id).update(is_deleted=True)
    with pytest.raises(NotFound):
        authorizer.get_owned_room(room.id, tenant)


def test_deleted_room_is_absent(authorizer, room, tenant):
    Room.objects.filter(pk=room.pk).update(is_deleted=True)
    with pytest.raises(NotFound):
        authorizer.get_owned_room(room.id, tenant)


def test_unknown_room_is_absent(authorizer, tenant):
    with pytest.raises(NotFound):
        authorizer.get_owned_room(999_999, tenant)
