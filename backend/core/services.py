"""
Core app Service Layer.

Read-side helpers for the notification inbox.  Notification *creation*
lives in ``core.domain.notifications`` so that every app writes through
one entry-point.
"""

from __future__ import annotations

import logging
from typing import Any

from django.db.models import QuerySet
from django.utils import timezone

from core.domain.exceptions import NotFound

from .models import Notification

logger = logging.getLogger(__name__)


class NotificationService:
    """
    Handles listing and marking notifications as read for a given user.
    """

    def __init__(self, user: Any) -> None:
        self.user = user

    def list_notifications(self, *, unread_only: bool = False) -> QuerySet[Notification]:
        """Return notifications for ``self.user``, most recent first."""
        qs = (
            Notification.objects
            .filter(recipient=self.user)
            .select_related("content_type")
            .order_by("-created_at", "-id")
        )
        if unread_only:
            qs = qs.filter(is_read=False)
        return qs

    def mark_as_read(self, notification_id: int) -> Notification:
        """
        Mark a single notification as read.

        Raises:
            NotFound: If the notification does not exist or belongs to
                      another user.
        """
        try:
            notification = Notification.objects.get(
                pk=notification_id,
                recipient=self.user,
            )
        except Notification.DoesNotExist:
            raise NotFound(f"Notification {notification_id} not found.")

        if not notification.is_read:
            notification.is_read = True
            notification.save(update_fields=["is_read", "updated_at"])
        return notification

    def unread_count(self) -> int:
        return Notification.objects.filter(recipient=self.user, is_read=False).count()

    def mark_all_read(self) -> int:
        """Mark every unread notification of ``self.user`` as read; return how many changed."""
        updated = Notification.objects.filter(recipient=self.user, is_read=False).update(
            is_read=True,
            updated_at=timezone.now(),
        )
        logger.info("Marked %d notification(s) read for %s", updated, self.user)
        return updated
