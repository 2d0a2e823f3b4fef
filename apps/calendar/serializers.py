"""Input serializers for the calendar endpoints."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore


class MonthQuerySerializer(serializers.Serializer):
    date = serializers.DateField(
        required=False,
        error_messages={"invalid": "Invalid date format. Please use YYYY-MM-DD format."},
    )


class CompareRoomPricingSerializer(serializers.Serializer):
    room_ids = serializers.ListField(child=serializers.IntegerField(min_value=1), allow_empty=False)
    start_date = serializers.DateField()
    end_date = serializers.DateField()

    def validate(self, attrs):  # type: ignore
        if attrs["start_date"] > attrs["end_date"]:
            raise serializers.ValidationError("start_date must be before or equal to end_date")
        return attrs
