"""FilterSet definitions for override listings."""

from __future__ import annotations

import django_filters  # type: ignore
from django.db.models import Q  # type: ignore

from .models import AvailabilityOverride, RateOverride


class OverrideFilterSet(django_filters.FilterSet):
    """Filters shared by both override kinds."""

    room_id = django_filters.NumberFilter(field_name="room_id", lookup_expr="exact")
    start_date = django_filters.DateFilter(field_name="start_date", lookup_expr="gte")
    end_date = django_filters.DateFilter(field_name="end_date", lookup_expr="lte")
    search = django_filters.CharFilter(method="filter_search")

    search_fields: tuple[str, ...] = ("room__name",)

    def filter_search(self, queryset, name, value):  # type: ignore
        if not value:
            return queryset
        condition = Q()
        for field in self.search_fields:
            condition |= Q(**{f"{field}__icontains": value})
        return queryset.filter(condition)


class RateOverrideFilterSet(OverrideFilterSet):
    price = django_filters.NumberFilter(field_name="price", lookup_expr="exact")

    class Meta:
        model = RateOverride
        fields = ["room_id", "start_date", "end_date", "price"]


class AvailabilityOverrideFilterSet(OverrideFilterSet):
    reason = django_filters.CharFilter(field_name="reason", lookup_expr="icontains")

    search_fields = ("room__name", "reason")

    class Meta:
        model = AvailabilityOverride
        fields = ["room_id", "start_date", "end_date", "reason"]
