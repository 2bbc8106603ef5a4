"""
Project access policy.

Every authorisation decision about projects goes through
``ProjectAccessPolicy``.  Decisions are made from permissions granted to
the user's role (see ``core.permissions_constants``), never from role
names, so a new role only needs the right permissions to take part.
"""

from __future__ import annotations

from typing import Any

from django.db.models import QuerySet

from core.domain.access import apply_permission_scope, require_permission
from core.domain.exceptions import PermissionDenied
from core.permissions_constants import ProjectsPerms, full_perm

MANAGE_PROJECTS = full_perm(ProjectsPerms.APP_LABEL, ProjectsPerms.CAN_MANAGE_PROJECTS)
MARK_REWARD_DISTRIBUTED = full_perm(ProjectsPerms.APP_LABEL, ProjectsPerms.CAN_MARK_REWARD_DISTRIBUTED)

# Fields a participant may change without admin rights.
PARTICIPANT_EDITABLE_FIELDS = frozenset({"status"})


def _participant_scope(qs: QuerySet, user: Any) -> QuerySet:
    from .models import Project

    return qs.filter(Project.participant_filter(user.pk)).distinct()


PROJECT_SCOPE_RULES = [
    (MANAGE_PROJECTS, lambda qs, u: qs),
]


class ProjectAccessPolicy:
    """Permission checks shared by the project and reward services."""

    @staticmethod
    def is_admin(user: Any) -> bool:
        return user.has_perm(MANAGE_PROJECTS)

    @classmethod
    def can_view_project(cls, user: Any, project: Any) -> bool:
        return cls.is_admin(user) or project.is_participant(user.pk)

    @classmethod
    def require_view_project(cls, user: Any, project: Any) -> None:
        if not cls.can_view_project(user, project):
            raise PermissionDenied("You do not have access to this project.")

    @staticmethod
    def require_manage_projects(user: Any) -> None:
        require_permission(
            user,
            MANAGE_PROJECTS,
            message="Only administrators can manage projects.",
        )

    @classmethod
    def require_update_project(cls, user: Any, project: Any, fields: set[str]) -> None:
        """
        Admins may change anything.  Participants may change only the
        fields in ``PARTICIPANT_EDITABLE_FIELDS``.
        """
        if cls.is_admin(user):
            return
        if fields and fields <= PARTICIPANT_EDITABLE_FIELDS and project.is_participant(user.pk):
            return
        raise PermissionDenied("Only administrators can change these project fields.")

    @staticmethod
    def require_mark_reward_distributed(user: Any) -> None:
        require_permission(
            user,
            MARK_REWARD_DISTRIBUTED,
            message="Only administrators can mark a reward as distributed.",
        )

    @staticmethod
    def scope_queryset(qs: QuerySet, user: Any) -> QuerySet:
        """Admins see every project; everyone else sees the ones they work on."""
        return apply_permission_scope(
            qs,
            user,
            scope_rules=PROJECT_SCOPE_RULES,
            default=_participant_scope,
        )
