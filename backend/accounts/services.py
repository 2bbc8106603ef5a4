"""
Accounts Service Layer.

Views must remain *thin*: they validate input through serializers,
call a service method, and return the result wrapped in a DRF
``Response``.

Architecture
------------
- ``CurrentUserService`` — "Me" endpoint helpers.
"""

from __future__ import annotations

from django.contrib.auth import get_user_model

User = get_user_model()


class CurrentUserService:
    """
    Helpers for the "Me" endpoint — the way the frontend discovers who
    is logged in, which ``Role`` they hold, and the flat permission list
    used to show or hide admin-only controls.
    """

    @staticmethod
    def get_profile(user: User) -> User:
        """
        Return the user instance with role and permissions pre-fetched
        so that ``UserDetailSerializer`` renders without N+1 queries.
        """
        return (
            User.objects.select_related("role")
            .prefetch_related("role__permissions__content_type")
            .get(pk=user.pk)
        )
