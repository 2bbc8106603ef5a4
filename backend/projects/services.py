"""
Projects app Service Layer.

This module is the **single source of truth** for all business logic
within the ``projects`` app.  Views must remain *thin*: they validate
input through serializers, call a service method with the acting user,
and return the result wrapped in a DRF ``Response``.

Architecture
------------
- ``ProjectService`` — project CRUD, participant-scoped reads, and the
  one-way "reward distributed" flag.

Every method receives the acting user explicitly; nothing reads the
current user from ambient state.
"""

from __future__ import annotations

import logging
from typing import Any

from django.db import transaction
from django.db.models import QuerySet

from core.domain.exceptions import NotFound
from core.domain.notifications import NotificationService
from core.domain.transactions import atomic_set_flag, lock_for_update

from .models import Project
from .policies import ProjectAccessPolicy

logger = logging.getLogger(__name__)


def _base_queryset() -> QuerySet[Project]:
    return (
        Project.objects
        .select_related("director", "sales")
        .prefetch_related("assigned_users")
    )


def _notify_assigned(actor: Any, project: Project, users: list[Any]) -> None:
    if not users:
        return
    NotificationService.create(
        actor=actor,
        recipients=users,
        event_type="project_assigned",
        payload={"project_name": project.name},
        related_object=project,
    )


class ProjectService:
    """Project lifecycle operations."""

    @staticmethod
    def list_projects(actor: Any) -> QuerySet[Project]:
        """Projects visible to *actor*, ordered by id."""
        return ProjectAccessPolicy.scope_queryset(_base_queryset(), actor).order_by("id")

    @staticmethod
    def get_project(project_id: int, actor: Any) -> Project:
        """
        Return one project.

        Raises:
            NotFound:         The project does not exist.
            PermissionDenied: *actor* is neither an admin nor a participant.
        """
        try:
            project = _base_queryset().get(pk=project_id)
        except Project.DoesNotExist:
            raise NotFound(f"Project {project_id} does not exist.")
        ProjectAccessPolicy.require_view_project(actor, project)
        return project

    @staticmethod
    @transaction.atomic
    def create_project(validated_data: dict[str, Any], actor: Any) -> Project:
        """Create a project and notify every assigned creator."""
        ProjectAccessPolicy.require_manage_projects(actor)

        assigned_users = list(validated_data.pop("assigned_users", []))
        project = Project.objects.create(**validated_data)
        project.assigned_users.set(assigned_users)

        logger.info("Project %s created by %s", project.pk, actor)
        _notify_assigned(actor, project, assigned_users)
        return _base_queryset().get(pk=project.pk)

    @staticmethod
    def update_project(project_id: int, validated_data: dict[str, Any], actor: Any) -> Project:
        """
        Partially update a project.

        Creators newly added to ``assigned_users`` are notified.  The
        ``reward_distributed`` flag is not writable here; use
        ``mark_reward_distributed``.
        """
        validated_data.pop("reward_distributed", None)

        with transaction.atomic():
            project = lock_for_update(Project, project_id)
            ProjectAccessPolicy.require_update_project(actor, project, set(validated_data))

            previous_ids = project.assigned_user_ids()
            assigned_users = validated_data.pop("assigned_users", None)

            update_fields = []
            for field, value in validated_data.items():
                setattr(project, field, value)
                update_fields.append(field)
            if update_fields:
                project.save(update_fields=update_fields + ["updated_at"])

            newly_assigned: list[Any] = []
            if assigned_users is not None:
                project.assigned_users.set(assigned_users)
                newly_assigned = [u for u in assigned_users if u.pk not in previous_ids]

            _notify_assigned(actor, project, newly_assigned)

        logger.info("Project %s updated by %s (fields=%s)", project_id, actor, sorted(update_fields))
        return _base_queryset().get(pk=project_id)

    @staticmethod
    def delete_project(project_id: int, actor: Any) -> None:
        ProjectAccessPolicy.require_manage_projects(actor)
        deleted, _ = Project.objects.filter(pk=project_id).delete()
        if not deleted:
            raise NotFound(f"Project {project_id} does not exist.")
        logger.info("Project %s deleted by %s", project_id, actor)

    @staticmethod
    def mark_reward_distributed(project_id: int, actor: Any) -> Project:
        """
        Flag the project's reward as paid out and tell every participant.

        One-way: a second call raises ``Conflict``.  From this point the
        project's reward distribution is frozen.
        """
        ProjectAccessPolicy.require_mark_reward_distributed(actor)

        with transaction.atomic():
            project = atomic_set_flag(
                model_class=Project,
                pk=project_id,
                field="reward_distributed",
                conflict_message="The reward for this project has already been distributed.",
            )
            NotificationService.create(
                actor=actor,
                recipients=project.participants(),
                event_type="reward_distributed",
                payload={"project_name": project.name},
                related_object=project,
            )

        logger.info("Project %s reward marked distributed by %s", project_id, actor)
        return _base_queryset().get(pk=project_id)
