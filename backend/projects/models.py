"""
Projects app models.

A ``Project`` is one piece of client work.  Besides the delivery details
it records who earns from it: one director, one sales owner, and any
number of assigned creators.  ``total_reward`` and ``reward_distributed``
are admin-only fields; once ``reward_distributed`` is set the project's
reward distribution can no longer change.
"""

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import models
from django.db.models import Q, QuerySet

from core.models import TimeStampedModel
from core.permissions_constants import ProjectsPerms


class ProjectStatus(models.TextChoices):
    """Delivery state shown on the project board."""

    NOT_STARTED = "not_started", "Not Started"
    IN_PROGRESS = "in_progress", "In Progress"
    COMPLETED = "completed", "Completed"
    ON_HOLD = "on_hold", "On Hold"


class Project(TimeStampedModel):
    """
    Client project tracked by the studio.

    ``assigned_users`` are the creators working on the project; the
    director and sales owner are separate single-user slots.  The same
    user may occupy several of these roles at once.
    """

    name = models.CharField(max_length=255, verbose_name="Name")
    status = models.CharField(
        max_length=20,
        choices=ProjectStatus.choices,
        default=ProjectStatus.NOT_STARTED,
        verbose_name="Status",
        db_index=True,
    )
    due_date = models.DateField(null=True, blank=True, verbose_name="Due Date")
    client_name = models.CharField(max_length=255, blank=True, default="", verbose_name="Client Name")
    client_contact = models.CharField(max_length=255, blank=True, default="", verbose_name="Client Contact")
    history = models.TextField(blank=True, default="", verbose_name="History")

    # ── Reward (admin-only) ──────────────────────────────────────────
    total_reward = models.PositiveIntegerField(
        null=True,
        blank=True,
        verbose_name="Total Reward",
        help_text="Whole currency units (JPY).  Empty counts as zero.",
    )
    reward_rules = models.TextField(blank=True, default="", verbose_name="Reward Rules")
    reward_distributed = models.BooleanField(
        default=False,
        verbose_name="Reward Distributed",
        help_text="Once set, the reward distribution is frozen.",
    )

    # ── Participants ─────────────────────────────────────────────────
    director = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="directed_projects",
        verbose_name="Director",
    )
    sales = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="sold_projects",
        verbose_name="Sales",
    )
    assigned_users = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        blank=True,
        related_name="assigned_projects",
        verbose_name="Assigned Creators",
    )

    class Meta:
        verbose_name = "Project"
        verbose_name_plural = "Projects"
        ordering = ["id"]
        permissions = [
            (ProjectsPerms.CAN_MANAGE_PROJECTS, "Admin: manage every project and its reward fields"),
            (ProjectsPerms.CAN_MARK_REWARD_DISTRIBUTED, "Mark a project's reward as distributed"),
        ]

    def __str__(self):
        return self.name

    @staticmethod
    def participant_filter(user_id: int) -> Q:
        """``Q`` matching projects where *user_id* is director, sales or creator."""
        return Q(director_id=user_id) | Q(sales_id=user_id) | Q(assigned_users__id=user_id)

    def assigned_user_ids(self) -> set[int]:
        return {user.pk for user in self.assigned_users.all()}

    def is_participant(self, user_id: int) -> bool:
        return (
            user_id in (self.director_id, self.sales_id)
            or user_id in self.assigned_user_ids()
        )

    def participants(self) -> QuerySet:
        """Users who earn from this project, each listed once."""
        User = get_user_model()
        ids = self.assigned_user_ids()
        ids.update(pk for pk in (self.director_id, self.sales_id) if pk is not None)
        return User.objects.filter(pk__in=ids).order_by("pk")
