"""URL routing for room calendars."""

from __future__ import annotations

from django.urls import path  # type: ignore

from .views import CompareRoomPricingView, PropertyMonthlyPriceComparisonView, RoomMonthlyCalendarView

urlpatterns = [
    path("room/<int:room_id>/", RoomMonthlyCalendarView.as_view(), name="calendar-room"),
    path("compare/", CompareRoomPricingView.as_view(), name="calendar-compare"),
    path(
        "property/<int:property_id>/",
        PropertyMonthlyPriceComparisonView.as_view(),
        name="calendar-property",
    ),
]
