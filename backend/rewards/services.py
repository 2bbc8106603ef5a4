"""
Rewards app Service Layer.

Architecture
------------
- ``RewardDistributionStore`` — read / atomic upsert of the one
  distribution record per project.
- ``RewardCalculator``        — a user's share(s) in a single project.
- ``RewardAggregator``        — a user's shares across every project they
  work on.
- ``RewardService``           — the entry-point used by views: applies
  ``RewardAccessPolicy`` for the acting user, then delegates to the
  components above.

Arithmetic
----------
Amounts are whole currency units: ``total_reward * percentage // 100``.
Fractions are truncated (floor), never rounded, so the sum of all shares
can fall a few units short of ``total_reward``.  An empty
``total_reward`` counts as zero.

Concurrency
-----------
``upsert`` locks the project row for the duration of the
check-validate-write sequence, so the "already distributed" check and the
write cannot interleave with ``mark_reward_distributed``.  Two admins
saving different splits for the same project still resolve as
last-write-wins; there is no version token.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import QuerySet

from core import constants
from core.domain.exceptions import Conflict, NotFound
from core.domain.transactions import lock_for_update
from projects.models import Project

from .models import RewardDistribution, ShareRole
from .policies import RewardAccessPolicy
from .validators import validate_distribution

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UserRewardShare:
    """One line item of a member's reward: a single role in a single project."""

    project_id: int
    project_name: str
    total_reward: int
    role: str
    percentage: int
    amount: int


def compute_amount(total_reward: int | None, percentage: int) -> int:
    """``floor(total_reward * percentage / 100)``; ``None`` reward counts as 0."""
    return (total_reward or 0) * percentage // constants.TOTAL_PERCENTAGE


def _project_queryset() -> QuerySet[Project]:
    return (
        Project.objects
        .select_related("reward_distribution")
        .prefetch_related("assigned_users")
    )


# ═══════════════════════════════════════════════════════════════════
#  Distribution Store
# ═══════════════════════════════════════════════════════════════════


class RewardDistributionStore:
    """Persistence rules for ``RewardDistribution``."""

    @staticmethod
    def for_project(project: Project) -> RewardDistribution:
        """
        Stored distribution of an already-loaded project, or the unsaved
        default.  Uses the ``select_related`` cache when present.
        """
        try:
            return project.reward_distribution
        except RewardDistribution.DoesNotExist:
            return RewardDistribution.default_for(project.pk)

    @staticmethod
    def get(project_id: int) -> RewardDistribution:
        """
        Return the stored distribution or an unsaved default (15/25/50 + 10).

        Raises:
            NotFound: The project does not exist.
        """
        if not Project.objects.filter(pk=project_id).exists():
            raise NotFound(f"Project {project_id} does not exist.")
        try:
            return RewardDistribution.objects.get(project_id=project_id)
        except RewardDistribution.DoesNotExist:
            return RewardDistribution.default_for(project_id)

    @staticmethod
    def upsert(project_id: int, *, sales: Any, director: Any, creator: Any) -> RewardDistribution:
        """
        Create or fully replace the project's distribution.

        Raises:
            NotFound:              The project does not exist.
            Conflict:              The project's reward was already
                                   distributed (checked before the payload).
            DomainValidationError: The percentages break the 100% rule.
        """
        with transaction.atomic():
            project = lock_for_update(Project, project_id)
            if project.reward_distributed:
                raise Conflict(
                    "Reward distribution already finalized for this project, cannot modify."
                )

            validate_distribution(sales=sales, director=director, creator=creator)

            distribution, created = RewardDistribution.objects.update_or_create(
                project=project,
                defaults={
                    "operation_percentage": constants.OPERATION_PERCENTAGE,
                    "sales_percentage": sales,
                    "director_percentage": director,
                    "creator_percentage": creator,
                },
            )

        logger.info(
            "%s reward distribution for project %s: sales=%s director=%s creator=%s",
            "Created" if created else "Replaced",
            project_id,
            sales,
            director,
            creator,
        )
        return distribution


# ═══════════════════════════════════════════════════════════════════
#  Calculator
# ═══════════════════════════════════════════════════════════════════


class RewardCalculator:
    """Derives a member's share of one project's reward."""

    @classmethod
    def calculate(cls, project_id: int, user_id: int) -> list[UserRewardShare]:
        """
        Shares earned by *user_id* in *project_id*, one per matched role.

        Raises:
            NotFound: The project does not exist.
        """
        try:
            project = _project_queryset().get(pk=project_id)
        except Project.DoesNotExist:
            raise NotFound(f"Project {project_id} does not exist.")
        return cls.shares_for(project, user_id)

    @staticmethod
    def shares_for(project: Project, user_id: int) -> list[UserRewardShare]:
        """
        Apply each role rule independently to a loaded project.

        A director who is also an assigned creator gets two line items.
        A user with no role in the project gets an empty list.
        """
        distribution = RewardDistributionStore.for_project(project)
        matches = (
            (ShareRole.DIRECTOR, project.director_id == user_id, distribution.director_percentage),
            (ShareRole.SALES, project.sales_id == user_id, distribution.sales_percentage),
            (ShareRole.CREATOR, user_id in project.assigned_user_ids(), distribution.creator_percentage),
        )
        total_reward = project.total_reward or 0
        return [
            UserRewardShare(
                project_id=project.pk,
                project_name=project.name,
                total_reward=total_reward,
                role=role.value,
                percentage=percentage,
                amount=compute_amount(total_reward, percentage),
            )
            for role, matched, percentage in matches
            if matched
        ]


# ═══════════════════════════════════════════════════════════════════
#  Aggregator
# ═══════════════════════════════════════════════════════════════════


class RewardAggregator:
    """Collects a member's shares across all of their projects."""

    @staticmethod
    def rewards_for_user(user_id: int) -> list[UserRewardShare]:
        """
        Concatenated shares for every project where *user_id* is director,
        sales or an assigned creator, ordered by project id.  Totals are
        left to the caller.
        """
        projects = (
            _project_queryset()
            .filter(Project.participant_filter(user_id))
            .distinct()
            .order_by("id")
        )
        shares: list[UserRewardShare] = []
        for project in projects:
            shares.extend(RewardCalculator.shares_for(project, user_id))
        return shares


# ═══════════════════════════════════════════════════════════════════
#  Request-facing service
# ═══════════════════════════════════════════════════════════════════


class RewardService:
    """
    Authorised entry-points.  Each method receives the acting user
    explicitly and checks ``RewardAccessPolicy`` before touching data.
    """

    @staticmethod
    def get_distribution(project_id: int, actor: Any) -> RewardDistribution:
        try:
            project = Project.objects.prefetch_related("assigned_users").get(pk=project_id)
        except Project.DoesNotExist:
            raise NotFound(f"Project {project_id} does not exist.")
        RewardAccessPolicy.require_view_project(actor, project)
        return RewardDistributionStore.get(project_id)

    @staticmethod
    def save_distribution(project_id: int, validated_data: dict[str, Any], actor: Any) -> RewardDistribution:
        RewardAccessPolicy.require_distribution_write(actor)
        distribution = RewardDistributionStore.upsert(
            project_id,
            sales=validated_data["sales_percentage"],
            director=validated_data["director_percentage"],
            creator=validated_data["creator_percentage"],
        )
        logger.info("Reward distribution for project %s saved by %s", project_id, actor)
        return distribution

    @staticmethod
    def _require_user(user_id: int) -> None:
        if not get_user_model().objects.filter(pk=user_id).exists():
            raise NotFound(f"User {user_id} does not exist.")

    @classmethod
    def rewards_for_user(cls, user_id: int, actor: Any) -> list[UserRewardShare]:
        RewardAccessPolicy.require_rewards_view(actor, user_id)
        cls._require_user(user_id)
        return RewardAggregator.rewards_for_user(user_id)

    @classmethod
    def rewards_for_user_in_project(cls, user_id: int, project_id: int, actor: Any) -> list[UserRewardShare]:
        """
        Shares for one project.

        Raises:
            NotFound: The user or project does not exist, or the user
                      earns nothing from the project.
        """
        RewardAccessPolicy.require_rewards_view(actor, user_id)
        cls._require_user(user_id)
        shares = RewardCalculator.calculate(project_id, user_id)
        if not shares:
            raise NotFound(f"User {user_id} has no reward share in project {project_id}.")
        return shares
