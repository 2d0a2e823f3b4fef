"""Admin registrations for properties domain."""

from __future__ import annotations

from django.contrib import admin

from .models import Property, Room


class RoomInline(admin.TabularInline):
    model = Room
    extra = 0
    fields = ("name", "type", "base_price", "stock", "is_deleted")


@admin.register(Property)
class PropertyAdmin(admin.ModelAdmin):
    list_display = ("title", "tenant", "is_deleted", "created_at")
    list_filter = ("is_deleted",)
    search_fields = ("title", "tenant__email")
    inlines = (RoomInline,)
    readonly_fields = ("created_at", "updated_at")


@admin.register(Room)
class RoomAdmin(admin.ModelAdmin):
    list_display = ("name", "property", "base_price", "stock", "is_deleted")
    list_filter = ("is_deleted",)
    search_fields = ("name", "property__title")
    readonly_fields = ("created_at", "updated_at")
