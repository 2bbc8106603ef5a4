"""
Reward access policy.

Extends ``ProjectAccessPolicy`` with the reward-specific checks so every
reward read and write path asks the same object.
"""

from __future__ import annotations

from typing import Any

from core.domain.access import require_permission
from core.domain.exceptions import PermissionDenied
from core.permissions_constants import RewardsPerms, full_perm
from projects.policies import ProjectAccessPolicy

MANAGE_DISTRIBUTION = full_perm(RewardsPerms.APP_LABEL, RewardsPerms.CAN_MANAGE_REWARD_DISTRIBUTION)
VIEW_ALL_REWARDS = full_perm(RewardsPerms.APP_LABEL, RewardsPerms.CAN_VIEW_ALL_REWARDS)


class RewardAccessPolicy(ProjectAccessPolicy):

    @staticmethod
    def require_distribution_write(user: Any) -> None:
        require_permission(
            user,
            MANAGE_DISTRIBUTION,
            message="Only administrators can change a reward distribution.",
        )

    @staticmethod
    def require_rewards_view(user: Any, target_user_id: int) -> None:
        """Members may read their own rewards; reading others' needs VIEW_ALL_REWARDS."""
        if user.pk == target_user_id or user.has_perm(VIEW_ALL_REWARDS):
            return
        raise PermissionDenied("You can only view your own rewards.")
