"""Shared pytest fixtures: users, a tenant's property and its room."""

from __future__ import annotations

import pytest

from apps.properties.authorization import RoomAuthorizer
from apps.properties.models import Property, Room
from apps.users.models import User


@pytest.fixture
def tenant(db):
    return User.objects.create_user(
        email="tenant@example.com",
        password="StrongPass123",
        first_name="Tina",
        last_name="Owner",
        role=User.RoleChoices.TENANT,
    )


@pytest.fixture
def other_tenant(db):
    return User.objects.create_user(
        email="other-tenant@example.com",
        password="StrongPass123",
        role=User.RoleChoices.TENANT,
    )


@pytest.fixture
def guest(db):
    return User.objects.create_user(
        email="guest@example.com",
        password="StrongPass123",
        first_name="Gary",
        last_name="Guest",
    )


@pytest.fixture
def property_obj(tenant):
    return Property.objects.create(tenant=tenant, title="Sea View Villa")


@pytest.fixture
def room(property_obj):
    return Room.objects.create(
        property=property_obj,
        name="Deluxe",
        type="double",
        base_price=100,
        stock=2,
    )


@pytest.fixture
def authorizer():
    return RoomAuthorizer()
