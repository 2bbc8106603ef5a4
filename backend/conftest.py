"""
Root conftest.py — shared fixtures for the entire test suite.

Provides:
  - ``api_client`` fixture returning a DRF ``APIClient``.
  - ``create_user`` factory fixture for creating test users.
  - ``auth_header`` fixture for authenticated requests (JWT).
  - ``studio_roles`` fixture seeding the Admin/Director/Sales/Creator
    roles through ``setup_rbac``.
  - ``admin_user`` shortcut on top of the two above.
  - ``client_for`` factory returning a client authenticated as a user.
  - ``make_project`` factory for ``projects.Project`` rows.
"""

from __future__ import annotations

from io import StringIO

import pytest
from django.core.management import call_command
from rest_framework.test import APIClient


@pytest.fixture()
def api_client() -> APIClient:
    """Unauthenticated DRF test client."""
    return APIClient()


@pytest.fixture()
def create_user(db):
    """
    Factory fixture that creates a user with sensible defaults.

    Usage::

        def test_something(create_user):
            user = create_user(username="alice")
            # or with a role:
            user = create_user(username="bob", role=studio_roles["Creator"])
    """
    from accounts.models import User

    _counter = 0

    def _factory(
        *,
        username: str | None = None,
        password: str = "TestPass123!",
        email: str | None = None,
        role=None,
        is_active: bool = True,
        **kwargs,
    ) -> User:
        nonlocal _counter
        _counter += 1
        if username is None:
            username = f"testuser{_counter}"
        if email is None:
            email = f"{username}@test.local"

        user = User.objects.create_user(
            username=username,
            password=password,
            email=email,
            is_active=is_active,
            **kwargs,
        )
        if role is not None:
            user.role = role
            user.save(update_fields=["role"])
        return user

    return _factory


@pytest.fixture()
def auth_header(create_user):
    """
    Returns a helper function that creates a user and returns an
    ``Authorization`` header dict with a valid JWT access token.

    The returned dict looks like::

        {"Authorization": "Bearer eyJ..."}
    """
    from rest_framework_simplejwt.tokens import AccessToken

    def _make(
        *,
        username: str | None = None,
        role=None,
        **user_kwargs,
    ) -> dict[str, str]:
        user = create_user(username=username, role=role, **user_kwargs)
        token = AccessToken.for_user(user)
        return {"Authorization": f"Bearer {token}"}

    return _make


@pytest.fixture()
def studio_roles(db) -> dict:
    """Run ``setup_rbac`` and return the seeded roles keyed by name."""
    from accounts.models import Role

    call_command("setup_rbac", stdout=StringIO())
    return {role.name: role for role in Role.objects.all()}


@pytest.fixture()
def admin_user(create_user, studio_roles):
    return create_user(username="admin", role=studio_roles["Admin"])


@pytest.fixture()
def client_for():
    """Factory returning a fresh ``APIClient`` authenticated as *user*."""

    def _make(user) -> APIClient:
        client = APIClient()
        client.force_authenticate(user=user)
        return client

    return _make


@pytest.fixture()
def make_project(db):
    """
    Factory fixture for projects.

    ``assigned_users`` is accepted as a list and applied after creation.
    """
    from projects.models import Project

    _counter = 0

    def _factory(*, name: str | None = None, assigned_users=(), **fields) -> Project:
        nonlocal _counter
        _counter += 1
        project = Project.objects.create(name=name or f"Project {_counter}", **fields)
        if assigned_users:
            project.assigned_users.set(assigned_users)
        return project

    return _factory
