"""
Core app serializers.

Read-only representations for the notification inbox.  ``project_id``
lets the client link a notification straight to the project that
triggered it.
"""

from __future__ import annotations

from rest_framework import serializers

from .models import Notification


class NotificationSerializer(serializers.ModelSerializer):

    project_id = serializers.SerializerMethodField(
        help_text="Project the notification refers to, if any.",
    )

    class Meta:
        model = Notification
        fields = ["id", "title", "message", "is_read", "created_at", "project_id"]
        read_only_fields = fields

    def get_project_id(self, obj: Notification) -> int | None:
        content_type = obj.content_type
        if content_type is None:
            return None
        if (content_type.app_label, content_type.model) == ("projects", "project"):
            return obj.object_id
        return None
