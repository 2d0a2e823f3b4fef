"""URL routing for room overrides."""

from __future__ import annotations

from django.urls import path  # type: ignore

from .views import PeakSeasonRateViewSet, RoomNonAvailabilityViewSet

peak_season_list = PeakSeasonRateViewSet.as_view({"get": "list", "post": "create"})
peak_season_detail = PeakSeasonRateViewSet.as_view({"patch": "partial_update", "delete": "destroy"})

non_availability_list = RoomNonAvailabilityViewSet.as_view({"get": "list", "post": "create"})
non_availability_detail = RoomNonAvailabilityViewSet.as_view({"patch": "partial_update", "delete": "destroy"})

urlpatterns = [
    path("peak-season-rates/", peak_season_list, name="peak-season-rate-list"),
    path("peak-season-rates/<int:pk>/", peak_season_detail, name="peak-season-rate-detail"),
    path("room-non-availabilities/", non_availability_list, name="room-non-availability-list"),
    path(
        "room-non-availabilities/<int:pk>/",
        non_availability_detail,
        name="room-non-availability-detail",
    ),
]
