"""FilterSet for the tenant payment listing."""

from __future__ import annotations

import django_filters  # type: ignore
from django.db.models import Q  # type: ignore

from .models import Payment


class PaymentFilterSet(django_filters.FilterSet):
    q = django_filters.CharFilter(method="filter_q")
    status = django_filters.ChoiceFilter(choices=Payment.Status.choices)

    class Meta:
        model = Payment
        fields = ["status"]

    def filter_q(self, queryset, name, value):  # type: ignore
        value = value.strip()
        if not value:
            return queryset
        return queryset.filter(
            Q(uuid__icontains=value)
            | Q(user__first_name__icontains=value)
            | Q(user__last_name__icontains=value)
            | Q(user__email__icontains=value)
            | Q(room__name__icontains=value)
            | Q(room__property__title__icontains=value)
        )
