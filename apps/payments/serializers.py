"""Serializers for the payment lifecycle."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .application.command_handlers import ACCEPT, REJECT
from .models import Payment


class PaymentCreateSerializer(serializers.Serializer):
    room_id = serializers.IntegerField(min_value=1)
    total_price = serializers.IntegerField(min_value=0)
    duration = serializers.IntegerField(min_value=1)
    payment_method = serializers.ChoiceField(choices=Payment.Method.choices, default=Payment.Method.MANUAL)
    payment_proof = serializers.CharField(max_length=500, required=False, allow_blank=True, default="")
    invoice_url = serializers.URLField(max_length=500, required=False, allow_blank=True, default="")
    expired_at = serializers.DateTimeField(required=False)


class PaymentProofSerializer(serializers.Serializer):
    payment_proof = serializers.CharField(max_length=500)


class PaymentUpdateSerializer(serializers.Serializer):
    uuid = serializers.UUIDField()
    type = serializers.ChoiceField(choices=[ACCEPT, REJECT])


class TenantPaymentsQuerySerializer(serializers.Serializer):
    q = serializers.CharField(required=False, allow_blank=True, trim_whitespace=True)
    status = serializers.ChoiceField(choices=Payment.Status.choices, required=False)
    page = serializers.IntegerField(min_value=1, default=1)
    take = serializers.IntegerField(min_value=1, required=False)
    sort_by = serializers.CharField(default="created_at")
    sort_order = serializers.ChoiceField(choices=["asc", "desc"], default="desc")


class PaymentSerializer(serializers.ModelSerializer):
    room_id = serializers.ReadOnlyField(source="room.id")
    room_name = serializers.ReadOnlyField(source="room.name")
    property_id = serializers.ReadOnlyField(source="room.property_id")
    user_id = serializers.ReadOnlyField(source="user.id")

    class Meta:
        model = Payment
        fields = [
            "uuid",
            "room_id",
            "room_name",
            "property_id",
            "user_id",
            "total_price",
            "duration",
            "status",
            "payment_method",
            "payment_proof",
            "invoice_url",
            "expired_at",
            "reserved_units",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class TenantPaymentSerializer(PaymentSerializer):
    user_email = serializers.ReadOnlyField(source="user.email")
    user_name = serializers.ReadOnlyField(source="user.display_name")
    property_title = serializers.ReadOnlyField(source="room.property.title")

    class Meta(PaymentSerializer.Meta):
        fields = PaymentSerializer.Meta.fields + ["user_email", "user_name", "property_title"]
        read_only_fields = fields
