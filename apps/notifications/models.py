"""Notification model.

In-app copy of every message sent to a user about a payment. The notifier
stores the row before handing the email to the mail backend and stamps
``delivered_at`` once the backend accepted it.
"""

from __future__ import annotations

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class NotificationQuerySet(models.QuerySet):
    def for_user(self, user):
        return self.filter(user=user)

    def unread(self):
        return self.filter(is_read=False)

    def mark_read(self) -> int:
        return self.filter(is_read=False).update(is_read=True, read_at=timezone.now())


class Notification(models.Model):
    """A payment message addressed to one user."""

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='notifications'
    )
    template_id = models.CharField(max_length=64, blank=True)
    email = models.EmailField(blank=True, help_text=_("Address the email was sent to."))
    title = models.CharField(max_length=255)
    message = models.TextField()
    is_read = models.BooleanField(default=False)
    read_at = models.DateTimeField(null=True, blank=True)
    delivered_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    objects = NotificationQuerySet.as_manager()

    class Meta:
        verbose_name = _("Notification")
        verbose_name_plural = _("Notifications")
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['user', 'is_read'], name='notification_user_read_idx'),
        ]

    def __str__(self) -> str:
        return f"{self.template_id or 'message'} for {self.user_id}"

    def mark_read(self) -> None:
        if self.is_read:
            return
        self.is_read = True
        self.read_at = timezone.now()
        self.save(update_fields=['is_read', 'read_at'])

    def mark_delivered(self) -> None:
        self.delivered_at = timezone.now()
        self.save(update_fields=['delivered_at'])
