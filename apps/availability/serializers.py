"""Serializers for peak-season rates and non-availability periods."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import AvailabilityOverride, RateOverride


class OverrideListQuerySerializer(serializers.Serializer):
    """Paging and ordering parameters of the override listings."""

    page = serializers.IntegerField(min_value=1, default=1)
    take = serializers.IntegerField(min_value=1, required=False)
    sort_by = serializers.CharField(default="created_at")
    sort_order = serializers.ChoiceField(choices=["asc", "desc"], default="asc")


class RateOverrideCreateSerializer(serializers.Serializer):
    room_id = serializers.IntegerField(min_value=1)
    start_date = serializers.DateField()
    end_date = serializers.DateField()
    price = serializers.IntegerField()


class RateOverrideUpdateSerializer(serializers.Serializer):
    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)
    price = serializers.IntegerField(required=False)


class AvailabilityOverrideCreateSerializer(serializers.Serializer):
    room_id = serializers.IntegerField(min_value=1)
    start_date = serializers.DateField()
    end_date = serializers.DateField()
    reason = serializers.CharField(max_length=255, allow_blank=True)


class AvailabilityOverrideUpdateSerializer(serializers.Serializer):
    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)
    reason = serializers.CharField(max_length=255, required=False, allow_blank=True)


class RateOverrideSerializer(serializers.ModelSerializer):
    room_name = serializers.ReadOnlyField(source="room.name")

    class Meta:
        model = RateOverride
        fields = [
            "id",
            "room_id",
            "room_name",
            "price",
            "start_date",
            "end_date",
            "is_deleted",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class AvailabilityOverrideSerializer(serializers.ModelSerializer):
    room_name = serializers.ReadOnlyField(source="room.name")

    class Meta:
        model = AvailabilityOverride
        fields = [
            "id",
            "room_id",
            "room_name",
            "reason",
            "start_date",
            "end_date",
            "is_deleted",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
