"""Tests for the role checks on users."""

from __future__ import annotations

import pytest
from django.contrib.auth.models import AnonymousUser
from rest_framework.test import APIRequestFactory

from apps.users.models import User
from apps.users.permissions import IsTenant

pytestmark = pytest.mark.django_db


def request_for(user):
    request = APIRequestFactory().get("/")
    request.user = user
    return request


def test_is_tenant_permission(tenant, guest):
    permission = IsTenant()
    assert permission.has_permission(request_for(tenant), None)
    assert not permission.has_permission(request_for(guest), None)
    assert not permission.has_permission(request_for(AnonymousUser()), None)


def test_display_name_falls_back_to_email():
    user = User(email="nobody@example.com")
    assert user.display_name == "nobody@example.com"
    user.first_name = "Ann"
    assert user.display_name == "Ann"


def test_create_user_normalizes_email_and_defaults_role():
    user = User.objects.create_user(email="Someone@EXAMPLE.com", password="StrongPass123")
    assert user.email == "Someone@example.com"
    assert user.role == User.RoleChoices.USER
    assert not user.is_tenant()
