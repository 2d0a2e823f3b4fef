"""Serializers for in-app notifications."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import Notification


class NotificationSerializer(serializers.ModelSerializer):
    class Meta:
        model = Notification
        fields = ['id', 'template_id', 'title', 'message', 'is_read', 'read_at', 'delivered_at', 'created_at']
        read_only_fields = fields
