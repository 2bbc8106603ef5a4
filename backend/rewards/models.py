"""
Rewards app models.

``RewardDistribution`` records how a project's total reward is split
between the studio (operations), the sales owner, the director and the
assigned creators.  There is at most one per project; a project without
one reports the default split from ``core.constants``.
"""

from django.db import models
from django.db.models import F, Q

from core import constants
from core.models import TimeStampedModel
from core.permissions_constants import RewardsPerms


class RewardDistribution(TimeStampedModel):
    """
    Percentage split of one project's reward.

    Invariant (checked in ``rewards.validators`` and by a DB constraint)::

        operation + sales + director + creator == 100
    """

    project = models.OneToOneField(
        "projects.Project",
        on_delete=models.CASCADE,
        related_name="reward_distribution",
        verbose_name="Project",
    )
    operation_percentage = models.PositiveSmallIntegerField(
        default=constants.OPERATION_PERCENTAGE,
        editable=False,
        verbose_name="Operations %",
    )
    sales_percentage = models.PositiveSmallIntegerField(
        default=constants.DEFAULT_SALES_PERCENTAGE,
        verbose_name="Sales %",
    )
    director_percentage = models.PositiveSmallIntegerField(
        default=constants.DEFAULT_DIRECTOR_PERCENTAGE,
        verbose_name="Director %",
    )
    creator_percentage = models.PositiveSmallIntegerField(
        default=constants.DEFAULT_CREATOR_PERCENTAGE,
        verbose_name="Creator %",
    )

    class Meta:
        verbose_name = "Reward Distribution"
        verbose_name_plural = "Reward Distributions"
        permissions = [
            (RewardsPerms.CAN_MANAGE_REWARD_DISTRIBUTION, "Create or overwrite a project's reward distribution"),
            (RewardsPerms.CAN_VIEW_ALL_REWARDS, "View any member's reward summary"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=Q(
                    operation_percentage=constants.TOTAL_PERCENTAGE
                    - F("sales_percentage")
                    - F("director_percentage")
                    - F("creator_percentage")
                ),
                name="reward_distribution_sums_to_100",
            ),
        ]

    def __str__(self):
        return (
            f"Project #{self.project_id}: ops {self.operation_percentage}% / "
            f"sales {self.sales_percentage}% / director {self.director_percentage}% / "
            f"creator {self.creator_percentage}%"
        )

    @classmethod
    def default_for(cls, project_id: int) -> "RewardDistribution":
        """Unsaved instance carrying the default split for *project_id*."""
        return cls(
            project_id=project_id,
            operation_percentage=constants.OPERATION_PERCENTAGE,
            sales_percentage=constants.DEFAULT_SALES_PERCENTAGE,
            director_percentage=constants.DEFAULT_DIRECTOR_PERCENTAGE,
            creator_percentage=constants.DEFAULT_CREATOR_PERCENTAGE,
        )

    @property
    def is_default(self) -> bool:
        """True when this split has never been saved for the project."""
        return self.pk is None


class ShareRole(models.TextChoices):
    """Capacity in which a member earns from a project."""

    DIRECTOR = "director", "Director"
    SALES = "sales", "Sales"
    CREATOR = "creator", "Creator"
