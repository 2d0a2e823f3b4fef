"""Tests for the payment endpoints."""

from __future__ import annotations

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.payments.models import Payment
from apps.properties.models import Property, Room
from apps.users.models import User


class PaymentAPITests(APITestCase):
    def setUp(self) -> None:
        self.tenant = User.objects.create_user(
            email="tenant-pay@example.com",
            password="StrongPass123",
            role=User.RoleChoices.TENANT,
        )
        self.guest = User.objects.create_user(
            email="guest-pay@example.com",
            password="StrongPass123",
            first_name="Alice",
            last_name="Traveller",
        )
        self.property = Property.objects.create(tenant=self.tenant, title="Mountain Lodge")
        self.room = Room.objects.create(property=self.property, name="Cabin", base_price=100, stock=1)

    def _create_payment(self):
        self.client.force_authenticate(self.guest)
        return self.client.post(
            reverse("payment-list"),
            {"room_id": self.room.id, "total_price": 300, "duration": 3},
            format="json",
        )

    def test_guest_books_room(self) -> None:
        response = self._create_payment()

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["status"], Payment.Status.WAITING_FOR_PAYMENT)
        self.room.refresh_from_db()
        self.assertEqual(self.room.stock, 0)

        response = self._create_payment()
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_full_accept_flow(self) -> None:
        payment_uuid = self._create_payment().data["uuid"]

        response = self.client.post(
            reverse("payment-proof", kwargs={"payment_uuid": payment_uuid}),
            {"payment_proof": "https://cdn.example.com/transfer.png"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["status"], Payment.Status.WAITING_FOR_PAYMENT_CONFIRMATION)

        self.client.force_authenticate(self.tenant)
        response = self.client.patch(
            reverse("payment-list"), {"uuid": payment_uuid, "type": "ACCEPT"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["message"], "Accept payment success")

        response = self.client.patch(
            reverse("payment-list"), {"uuid": payment_uuid, "type": "REJECT"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data["code"], "invalid_state")

    def test_only_payer_uploads_proof(self) -> None:
        payment_uuid = self._create_payment().data["uuid"]
        self.client.force_authenticate(self.tenant)
        response = self.client.post(
            reverse("payment-proof", kwargs={"payment_uuid": payment_uuid}),
            {"payment_proof": "ref"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_guest_cannot_decide(self) -> None:
        payment_uuid = self._create_payment().data["uuid"]
        response = self.client.patch(
            reverse("payment-list"), {"uuid": payment_uuid, "type": "ACCEPT"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_tenant_lists_and_searches_payments(self) -> None:
        self._create_payment()
        self.client.force_authenticate(self.tenant)

        response = self.client.get(reverse("payment-list"))
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["meta"]["total"], 1)
        self.assertEqual(response.data["data"][0]["user_email"], self.guest.email)
        self.assertEqual(response.data["data"][0]["property_title"], "Mountain Lodge")

        for query, expected in (("alice", 1), ("lodge", 1), ("cabin", 1), ("nobody", 0)):
            response = self.client.get(reverse("payment-list"), {"q": query})
            self.assertEqual(response.data["meta"]["total"], expected, query)

        response = self.client.get(reverse("payment-list"), {"status": "PAID"})
        self.assertEqual(response.data["meta"]["total"], 0)

    def test_other_tenants_see_nothing(self) -> None:
        self._create_payment()
        stranger = User.objects.create_user(
            email="stranger-pay@example.com",
            password="StrongPass123",
            role=User.RoleChoices.TENANT,
        )
        self.client.force_authenticate(stranger)
        response = self.client.get(reverse("payment-list"))
        self.assertEqual(response.data["meta"]["total"], 0)
