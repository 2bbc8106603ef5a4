"""
Projects app serializers.

Request and Response serializers for the project API.  **No business
logic** lives here — permission checks and notifications are handled by
``services.py``.

Reward masking
--------------
``total_reward``, ``reward_rules`` and ``client_contact`` are visible to
administrators only.  Views pass ``context={"reveal_admin_fields": bool}``
and ``ProjectSerializer`` nulls the fields otherwise, so the payload shape
stays the same for every caller.
"""

from __future__ import annotations

from typing import Any

from django.contrib.auth import get_user_model
from rest_framework import serializers

from accounts.serializers import UserSummarySerializer

from .models import Project

User = get_user_model()

ADMIN_ONLY_FIELDS = ("total_reward", "reward_rules", "client_contact")


class ProjectSerializer(serializers.ModelSerializer):
    """Read representation of a project with nested participants."""

    director = UserSummarySerializer(read_only=True)
    sales = UserSummarySerializer(read_only=True)
    assigned_users = UserSummarySerializer(many=True, read_only=True)

    class Meta:
        model = Project
        fields = [
            "id",
            "name",
            "status",
            "due_date",
            "client_name",
            "client_contact",
            "history",
            "total_reward",
            "reward_rules",
            "reward_distributed",
            "director",
            "sales",
            "assigned_users",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def to_representation(self, instance: Project) -> dict[str, Any]:
        data = super().to_representation(instance)
        if not self.context.get("reveal_admin_fields", False):
            for field in ADMIN_ONLY_FIELDS:
                data[field] = None
        return data


class ProjectWriteSerializer(serializers.ModelSerializer):
    """
    Validates project create / partial-update payloads.

    Participants are referenced by user id.  ``reward_distributed`` is
    deliberately absent — it is set through its own endpoint.
    """

    director = serializers.PrimaryKeyRelatedField(
        queryset=User.objects.all(),
        required=False,
        allow_null=True,
    )
    sales = serializers.PrimaryKeyRelatedField(
        queryset=User.objects.all(),
        required=False,
        allow_null=True,
    )
    assigned_users = serializers.PrimaryKeyRelatedField(
        queryset=User.objects.all(),
        many=True,
        required=False,
    )

    class Meta:
        model = Project
        fields = [
            "name",
            "status",
            "due_date",
            "client_name",
            "client_contact",
            "history",
            "total_reward",
            "reward_rules",
            "director",
            "sales",
            "assigned_users",
        ]
        extra_kwargs = {
            "total_reward": {"min_value": 0},
        }
