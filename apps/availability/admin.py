from django import forms  # type: ignore
from django.contrib import admin  # type: ignore

from apps.properties.models import Room
from shared.domain.exceptions import DomainError
from shared.domain.value_objects import DateInterval
from shared.infrastructure.locking import lock_queryset_if_possible

from .domain.intervals import can_insert
from .models import AvailabilityOverride, RateOverride


class OverrideAdminForm(forms.ModelForm):
    """Runs the same overlap check as the override services.

    The admin validates and saves inside one transaction, so locking the
    room here keeps the check and the write serialized with the API.
    """

    def clean(self):
        cleaned_data = super().clean()
        room = cleaned_data.get("room")
        start_date = cleaned_data.get("start_date")
        end_date = cleaned_data.get("end_date")
        if room is None or start_date is None or end_date is None or cleaned_data.get("is_deleted"):
            return cleaned_data

        try:
            interval = DateInterval(start_date, end_date)
            list(lock_queryset_if_possible(Room.objects.filter(pk=room.pk)))
            others = self._meta.model.objects.active().filter(room=room)
            if self.instance.pk:
                others = others.exclude(pk=self.instance.pk)
            can_insert(interval, others)
        except DomainError as e:
            raise forms.ValidationError(e.detail)
        return cleaned_data


class RateOverrideAdminForm(OverrideAdminForm):
    class Meta:
        model = RateOverride
        fields = ("room", "start_date", "end_date", "price", "is_deleted")


class AvailabilityOverrideAdminForm(OverrideAdminForm):
    class Meta:
        model = AvailabilityOverride
        fields = ("room", "start_date", "end_date", "reason", "is_deleted")


@admin.register(RateOverride)
class RateOverrideAdmin(admin.ModelAdmin):
    form = RateOverrideAdminForm
    list_display = ("id", "room", "price", "start_date", "end_date", "is_deleted")
    list_filter = ("is_deleted",)
    search_fields = ("room__name", "room__property__title")
    date_hierarchy = "start_date"


@admin.register(AvailabilityOverride)
class AvailabilityOverrideAdmin(admin.ModelAdmin):
    form = AvailabilityOverrideAdminForm
    list_display = ("id", "room", "reason", "start_date", "end_date", "is_deleted")
    list_filter = ("is_deleted",)
    search_fields = ("room__name", "reason")
    date_hierarchy = "start_date"
