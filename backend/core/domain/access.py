"""
core.domain.access — Permission guards and permission-scoped selectors.

This module provides shared utilities that each app's service layer
(or access policy) calls to check permissions or to obtain querysets
filtered by the requesting user's permissions.

╔══════════════════════════════════════════════════════════════════╗
║  IMPORTANT — Per-app access rules do NOT live here.             ║
║  Each app owns its own policy / scope-rules list.               ║
║  This module provides:                                          ║
║    1) ``apply_permission_scope`` — ordered permission dispatch. ║
║    2) ``require_permission`` — guard that checks has_perm.      ║
╚══════════════════════════════════════════════════════════════════╝

Usage in an app's service layer::

    from core.domain.access import apply_permission_scope

    PROJECT_SCOPE_RULES = [
        ("projects.can_manage_projects", lambda qs, u: qs),
    ]

    qs = apply_permission_scope(
        Project.objects.all(), user,
        scope_rules=PROJECT_SCOPE_RULES,
        default=lambda qs, u: qs.filter(director=u),
    )
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from django.db.models import QuerySet

if TYPE_CHECKING:
    from accounts.models import User

# Type alias for a scope filter function.
# Takes (queryset, user) and returns a filtered queryset.
ScopeFilter = Callable[[QuerySet, "User"], QuerySet]

# Type alias for a single scope rule: (permission_codename, filter_fn).
# Permission codename should include the app label (e.g. "projects.can_manage_projects").
ScopeRule = tuple[str, ScopeFilter]


def apply_permission_scope(
    queryset: QuerySet,
    user: User,
    *,
    scope_rules: list[ScopeRule],
    default: ScopeFilter | None = None,
) -> QuerySet:
    """
    Apply the first matching permission-based scope rule.

    Rules are checked **in order** — first permission match wins.
    Order rules from broadest (unrestricted) to narrowest (most restricted)
    so that users with wider access hit their rule first.

    Args:
        queryset:     Base (unfiltered) queryset.
        user:         The authenticated user.
        scope_rules:  Ordered list of ``(perm_codename, filter_fn)`` tuples.
        default:      Filter applied when no permission matches.  ``None``
                      (the default) yields an empty queryset.

    Returns:
        The (possibly filtered) queryset.
    """
    for perm, filter_fn in scope_rules:
        if user.has_perm(perm):
            return filter_fn(queryset, user)

    if default is None:
        return queryset.none()
    return default(queryset, user)


def require_permission(user: User, *perms: str, message: str = "") -> None:
    """
    Guard that raises ``PermissionDenied`` if the user lacks **all** of
    the given permissions (OR-logic: having any one is sufficient).

    Args:
        user:    Authenticated user.
        *perms:  One or more full permission strings (``app.codename``).
        message: Optional custom error message.

    Raises:
        core.domain.exceptions.PermissionDenied: If the user has none
            of the listed permissions.

    Example::

        require_permission(user, "rewards.can_manage_reward_distribution")
    """
    from core.domain.exceptions import PermissionDenied as DomainPermissionDenied

    for perm in perms:
        if user.has_perm(perm):
            return
    raise DomainPermissionDenied(
        message or f"Missing required permission: {', '.join(perms)}."
    )
