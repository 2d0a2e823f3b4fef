"""Tests for the override admin forms."""

from __future__ import annotations

from datetime import date

import pytest
from django.urls import reverse

from apps.availability.admin import AvailabilityOverrideAdminForm
from apps.availability.models import AvailabilityOverride, RateOverride

pytestmark = pytest.mark.django_db


@pytest.fixture
def rate(room):
    return RateOverride.objects.create(room=room, start_date=date(2025, 7, 5), end_date=date(2025, 7, 8), price=150)


def rate_form(room, start, end, price=200):
    return {"room": room.pk, "start_date": start, "end_date": end, "price": price}


def test_add_refuses_overlapping_rate(admin_client, rate, room):
    response = admin_client.post(
        reverse("admin:availability_rateoverride_add"), rate_form(room, "2025-07-01", "2025-07-10")
    )

    assert response.status_code == 200
    assert "overlaps existing interval" in response.content.decode()
    assert RateOverride.objects.active().filter(room=room).count() == 1


def test_add_accepts_adjacent_rate(admin_client, rate, room):
    response = admin_client.post(
        reverse("admin:availability_rateoverride_add"), rate_form(room, "2025-07-09", "2025-07-20")
    )

    assert response.status_code == 302
    assert RateOverride.objects.active().filter(room=room).count() == 2


def test_change_refuses_moving_onto_another_rate(admin_client, rate, room):
    other = RateOverride.objects.create(room=room, start_date=date(2025, 7, 20), end_date=date(2025, 7, 25), price=180)

    response = admin_client.post(
        reverse("admin:availability_rateoverride_change", args=[other.pk]),
        rate_form(room, "2025-07-07", "2025-07-25", price=180),
    )

    assert response.status_code == 200
    other.refresh_from_db()
    assert other.start_date == date(2025, 7, 20)


def test_change_keeps_its_own_range(admin_client, rate, room):
    response = admin_client.post(
        reverse("admin:availability_rateoverride_change", args=[rate.pk]),
        rate_form(room, "2025-07-05", "2025-07-08", price=175),
    )

    assert response.status_code == 302
    rate.refresh_from_db()
    assert rate.price == 175


def test_restoring_a_deleted_blackout_is_checked(room):
    AvailabilityOverride.objects.create(room=room, start_date=date(2025, 7, 1), end_date=date(2025, 7, 3), reason="Repairs")
    deleted = AvailabilityOverride.objects.create(
        room=room, start_date=date(2025, 7, 2), end_date=date(2025, 7, 4), reason="Old", is_deleted=True
    )

    form = AvailabilityOverrideAdminForm(
        data={"room": room.pk, "start_date": "2025-07-02", "end_date": "2025-07-04", "reason": "Old", "is_deleted": False},
        instance=deleted,
    )
    assert not form.is_valid()

    form = AvailabilityOverrideAdminForm(
        data={"room": room.pk, "start_date": "2025-07-02", "end_date": "2025-07-04", "reason": "Old", "is_deleted": True},
        instance=deleted,
    )
    assert form.is_valid()


def test_reversed_dates_are_a_form_error(room):
    form = AvailabilityOverrideAdminForm(
        data={"room": room.pk, "start_date": "2025-07-04", "end_date": "2025-07-02", "reason": "Repairs"}
    )
    assert not form.is_valid()
    assert "must not be after" in str(form.errors)
