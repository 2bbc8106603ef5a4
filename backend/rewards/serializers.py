"""
Rewards app serializers.

Reward payloads use camelCase keys (``projectId``, ``salesPercentage``
...) to match the admin screen that edits them.  Every field maps onto a
snake_case model attribute or ``UserRewardShare`` attribute via
``source=``.
"""

from __future__ import annotations

from rest_framework import serializers

from .models import ShareRole


class RewardDistributionSerializer(serializers.Serializer):
    """Read representation of a stored or default distribution."""

    projectId = serializers.IntegerField(source="project_id", read_only=True)
    operationPercentage = serializers.IntegerField(source="operation_percentage", read_only=True)
    salesPercentage = serializers.IntegerField(source="sales_percentage", read_only=True)
    directorPercentage = serializers.IntegerField(source="director_percentage", read_only=True)
    creatorPercentage = serializers.IntegerField(source="creator_percentage", read_only=True)
    isDefault = serializers.BooleanField(source="is_default", read_only=True)


class RewardDistributionWriteSerializer(serializers.Serializer):
    """
    Shape check for a distribution save.

    Only presence and integer-ness are checked here; the range and the
    100% total are enforced by ``rewards.validators`` so the same rule
    applies to every write path.  ``operationPercentage`` is not
    accepted: the operations cut is fixed.
    """

    salesPercentage = serializers.IntegerField(source="sales_percentage")
    directorPercentage = serializers.IntegerField(source="director_percentage")
    creatorPercentage = serializers.IntegerField(source="creator_percentage")


class UserRewardShareSerializer(serializers.Serializer):
    projectId = serializers.IntegerField(source="project_id")
    projectName = serializers.CharField(source="project_name")
    totalReward = serializers.IntegerField(source="total_reward")
    role = serializers.ChoiceField(choices=ShareRole.choices)
    percentage = serializers.IntegerField()
    amount = serializers.IntegerField()
