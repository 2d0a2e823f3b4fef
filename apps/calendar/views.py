"""API views for room calendars and price comparison."""

from __future__ import annotations

from django.utils import timezone  # type: ignore
from rest_framework import permissions  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from apps.users.permissions import IsTenant
from config.container import get_container

from .serializers import CompareRoomPricingSerializer, MonthQuerySerializer


def _reference_date(request):  # type: ignore
    serializer = MonthQuerySerializer(data=request.query_params)
    serializer.is_valid(raise_exception=True)
    return serializer.validated_data.get("date") or timezone.localdate()


class RoomMonthlyCalendarView(APIView):
    permission_classes = [permissions.IsAuthenticated, IsTenant]

    def get(self, request, room_id):  # type: ignore
        room_calendar = get_container().calendar.generate(room_id, _reference_date(request))
        return Response({"data": room_calendar.to_dict()})


class CompareRoomPricingView(APIView):
    permission_classes = [permissions.IsAuthenticated, IsTenant]

    def post(self, request):  # type: ignore
        serializer = CompareRoomPricingSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        comparisons = get_container().price_comparison.compare(
            data["room_ids"], data["start_date"], data["end_date"]
        )
        return Response({"data": [item.to_dict() for item in comparisons]})


class PropertyMonthlyPriceComparisonView(APIView):
    permission_classes = [permissions.IsAuthenticated, IsTenant]

    def get(self, request, property_id):  # type: ignore
        result = get_container().price_comparison.property_monthly_comparison(
            property_id, _reference_date(request)
        )
        return Response(
            {
                "property_id": result["property_id"],
                "month": result["month"],
                "data": [item.to_dict() for item in result["rooms"]],
            }
        )
