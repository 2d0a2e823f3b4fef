"""API views for peak-season rates and non-availability periods."""

from __future__ import annotations

from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.users.permissions import IsTenant
from config.container import get_container

from .serializers import (
    AvailabilityOverrideCreateSerializer,
    AvailabilityOverrideSerializer,
    AvailabilityOverrideUpdateSerializer,
    OverrideListQuerySerializer,
    RateOverrideCreateSerializer,
    RateOverrideSerializer,
    RateOverrideUpdateSerializer,
)
from .services import interval_from

LIST_FILTER_PARAMS = ("room_id", "start_date", "end_date", "search", "price", "reason")


class OverrideViewSet(viewsets.ViewSet):
    """Tenant dashboard endpoints shared by both override kinds."""

    permission_classes = [permissions.IsAuthenticated, IsTenant]
    service_name: str = ""
    payload_field: str = ""
    create_serializer_class = None
    update_serializer_class = None
    output_serializer_class = None

    def get_service(self):  # type: ignore
        return getattr(get_container(), self.service_name)

    def list(self, request):  # type: ignore
        query = OverrideListQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        filters = {
            key: request.query_params[key]
            for key in LIST_FILTER_PARAMS
            if key in request.query_params
        }
        page = self.get_service().list(filters, request.user, **query.validated_data)
        return Response(
            {
                "data": self.output_serializer_class(page.items, many=True).data,
                "meta": page.meta,
            }
        )

    def create(self, request):  # type: ignore
        serializer = self.create_serializer_class(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        override = self.get_service().create(
            data["room_id"],
            interval_from(data["start_date"], data["end_date"]),
            {self.payload_field: data[self.payload_field]},
            request.user,
        )
        return Response(self.output_serializer_class(override).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request, pk=None):  # type: ignore
        serializer = self.update_serializer_class(data=request.data)
        serializer.is_valid(raise_exception=True)
        override = self.get_service().update(int(pk), serializer.validated_data, request.user)
        return Response(self.output_serializer_class(override).data)

    def destroy(self, request, pk=None):  # type: ignore
        override = self.get_service().delete(int(pk), request.user)
        return Response(self.output_serializer_class(override).data)


class PeakSeasonRateViewSet(OverrideViewSet):
    service_name = "rate_overrides"
    payload_field = "price"
    create_serializer_class = RateOverrideCreateSerializer
    update_serializer_class = RateOverrideUpdateSerializer
    output_serializer_class = RateOverrideSerializer


class RoomNonAvailabilityViewSet(OverrideViewSet):
    service_name = "availability_overrides"
    payload_field = "reason"
    create_serializer_class = AvailabilityOverrideCreateSerializer
    update_serializer_class = AvailabilityOverrideUpdateSerializer
    output_serializer_class = AvailabilityOverrideSerializer
