"""
Integration tests — project CRUD, reward-field masking and the
"mark reward distributed" flow.

Endpoints under test (router basename ``project`` in namespace ``projects``):
    GET/POST          /api/projects/
    GET/PATCH/DELETE  /api/projects/{id}/
    POST              /api/projects/{id}/mark-reward-distributed/
"""

from __future__ import annotations

import pytest
from django.urls import reverse
from rest_framework import status

from core.models import Notification
from projects.models import Project, ProjectStatus

pytestmark = pytest.mark.django_db

LIST_URL = "projects:project-list"
DETAIL_URL = "projects:project-detail"
MARK_URL = "projects:project-mark-reward-distributed"


@pytest.fixture()
def crew(create_user, studio_roles):
    return {
        "director": create_user(username="dir", role=studio_roles["Director"]),
        "sales": create_user(username="sales", role=studio_roles["Sales"]),
        "creator": create_user(username="creator", role=studio_roles["Creator"]),
        "outsider": create_user(username="outsider", role=studio_roles["Creator"]),
    }


@pytest.fixture()
def project(make_project, crew):
    return make_project(
        name="Brand Video",
        total_reward=300_000,
        reward_rules="Paid on delivery",
        client_contact="client@example.com",
        director=crew["director"],
        sales=crew["sales"],
        assigned_users=[crew["creator"]],
    )


class TestProjectCreate:

    def test_admin_creates_project_and_assignees_are_notified(self, client_for, admin_user, crew):
        payload = {
            "name": "New Site",
            "total_reward": 120_000,
            "director": crew["director"].pk,
            "assigned_users": [crew["creator"].pk, crew["outsider"].pk],
        }
        response = client_for(admin_user).post(reverse(LIST_URL), payload, format="json")

        assert response.status_code == status.HTTP_201_CREATED, response.data
        assert response.data["total_reward"] == 120_000
        assert {u["id"] for u in response.data["assigned_users"]} == {
            crew["creator"].pk,
            crew["outsider"].pk,
        }
        recipients = set(Notification.objects.values_list("recipient_id", flat=True))
        assert recipients == {crew["creator"].pk, crew["outsider"].pk}

    def test_member_cannot_create(self, client_for, crew):
        response = client_for(crew["director"]).post(reverse(LIST_URL), {"name": "x"}, format="json")
        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert not Project.objects.exists()

    def test_negative_total_reward_rejected(self, client_for, admin_user):
        response = client_for(admin_user).post(
            reverse(LIST_URL), {"name": "Bad", "total_reward": -1}, format="json",
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "total_reward" in response.data


class TestProjectRead:

    def test_admin_sees_every_project_with_reward_fields(self, client_for, admin_user, project, make_project):
        make_project(name="Other")
        response = client_for(admin_user).get(reverse(LIST_URL))

        assert response.status_code == status.HTTP_200_OK
        assert [p["name"] for p in response.data] == ["Brand Video", "Other"]
        assert response.data[0]["total_reward"] == 300_000
        assert response.data[0]["client_contact"] == "client@example.com"

    def test_member_sees_only_own_projects_with_reward_fields_masked(self, client_for, crew, project, make_project):
        make_project(name="Other")
        response = client_for(crew["creator"]).get(reverse(LIST_URL))

        assert response.status_code == status.HTTP_200_OK
        assert [p["name"] for p in response.data] == ["Brand Video"]
        row = response.data[0]
        assert row["total_reward"] is None
        assert row["reward_rules"] is None
        assert row["client_contact"] is None

    def test_outsider_cannot_retrieve(self, client_for, crew, project):
        response = client_for(crew["outsider"]).get(reverse(DETAIL_URL, kwargs={"pk": project.pk}))
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_unknown_project_returns_404(self, client_for, admin_user):
        response = client_for(admin_user).get(reverse(DETAIL_URL, kwargs={"pk": 999_999}))
        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestProjectUpdate:

    def test_participant_may_change_status(self, client_for, crew, project):
        response = client_for(crew["creator"]).patch(
            reverse(DETAIL_URL, kwargs={"pk": project.pk}),
            {"status": ProjectStatus.IN_PROGRESS},
            format="json",
        )
        assert response.status_code == status.HTTP_200_OK, response.data
        project.refresh_from_db()
        assert project.status == ProjectStatus.IN_PROGRESS

    def test_participant_may_not_change_reward(self, client_for, crew, project):
        response = client_for(crew["director"]).patch(
            reverse(DETAIL_URL, kwargs={"pk": project.pk}),
            {"total_reward": 1},
            format="json",
        )
        assert response.status_code == status.HTTP_403_FORBIDDEN
        project.refresh_from_db()
        assert project.total_reward == 300_000

    def test_newly_assigned_users_are_notified_once(self, client_for, admin_user, crew, project):
        response = client_for(admin_user).patch(
            reverse(DETAIL_URL, kwargs={"pk": project.pk}),
            {"assigned_users": [crew["creator"].pk, crew["outsider"].pk]},
            format="json",
        )
        assert response.status_code == status.HTTP_200_OK, response.data
        assert list(Notification.objects.values_list("recipient_id", flat=True)) == [crew["outsider"].pk]

    def test_reward_distributed_cannot_be_patched(self, client_for, admin_user, project):
        response = client_for(admin_user).patch(
            reverse(DETAIL_URL, kwargs={"pk": project.pk}),
            {"reward_distributed": True},
            format="json",
        )
        assert response.status_code == status.HTTP_200_OK
        project.refresh_from_db()
        assert project.reward_distributed is False


class TestProjectDelete:

    def test_admin_deletes(self, client_for, admin_user, project):
        response = client_for(admin_user).delete(reverse(DETAIL_URL, kwargs={"pk": project.pk}))
        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not Project.objects.exists()

    def test_member_cannot_delete(self, client_for, crew, project):
        response = client_for(crew["director"]).delete(reverse(DETAIL_URL, kwargs={"pk": project.pk}))
        assert response.status_code == status.HTTP_403_FORBIDDEN


class TestMarkRewardDistributed:

    def test_admin_marks_and_every_participant_is_notified(self, client_for, admin_user, crew, project):
        response = client_for(admin_user).post(reverse(MARK_URL, kwargs={"pk": project.pk}))

        assert response.status_code == status.HTTP_200_OK
        assert response.data["reward_distributed"] is True
        recipients = sorted(Notification.objects.values_list("recipient_id", flat=True))
        assert recipients == sorted([crew["director"].pk, crew["sales"].pk, crew["creator"].pk])
        assert Notification.objects.first().title == "Reward Distributed"

    def test_second_mark_returns_409(self, client_for, admin_user, project):
        client = client_for(admin_user)
        client.post(reverse(MARK_URL, kwargs={"pk": project.pk}))

        response = client.post(reverse(MARK_URL, kwargs={"pk": project.pk}))

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_member_cannot_mark(self, client_for, crew, project):
        response = client_for(crew["director"]).post(reverse(MARK_URL, kwargs={"pk": project.pk}))
        assert response.status_code == status.HTTP_403_FORBIDDEN
        project.refresh_from_db()
        assert project.reward_distributed is False


@pytest.mark.parametrize(
    "method, path",
    [
        ("get", "/api/projects/abc/"),
        ("patch", "/api/projects/abc/"),
        ("delete", "/api/projects/abc/"),
        ("post", "/api/projects/abc/mark-reward-distributed/"),
    ],
)
def test_non_numeric_project_id_is_404(client_for, admin_user, method, path):
    response = getattr(client_for(admin_user), method)(path)
    assert response.status_code == status.HTTP_404_NOT_FOUND
