"""
Integration tests — reward distribution and member reward endpoints.

Endpoints under test:
    GET/POST /api/projects/{project_id}/reward-distribution/
             (named URL: rewards:reward-distribution)
    GET      /api/users/{user_id}/rewards/
             (named URL: rewards:user-rewards)
    GET      /api/users/{user_id}/rewards/project/{project_id}/
             (named URL: rewards:user-project-rewards)

Roles come from ``setup_rbac``: only Admin holds
``rewards.can_manage_reward_distribution`` and ``rewards.can_view_all_rewards``.
"""

from __future__ import annotations

from io import StringIO

from django.contrib.auth import get_user_model
from django.core.management import call_command
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from accounts.models import Role
from projects.models import Project
from rewards.models import RewardDistribution

User = get_user_model()

_PASSWORD = "Rew4rd!Pass01"


class RewardApiTestBase(TestCase):

    @classmethod
    def setUpTestData(cls) -> None:
        call_command("setup_rbac", stdout=StringIO())
        roles = {role.name: role for role in Role.objects.all()}

        def _user(username: str, role_name: str) -> User:
            return User.objects.create_user(
                username=username,
                password=_PASSWORD,
                email=f"{username}@studio.test",
                role=roles[role_name],
            )

        cls.admin = _user("reward_admin", "Admin")
        cls.director = _user("reward_director", "Director")
        cls.seller = _user("reward_sales", "Sales")
        cls.creator = _user("reward_creator", "Creator")
        cls.outsider = _user("reward_outsider", "Creator")

        cls.project = Project.objects.create(
            name="Launch Film",
            total_reward=1_000_000,
            director=cls.director,
            sales=cls.seller,
        )
        cls.project.assigned_users.set([cls.creator, cls.director])

    def setUp(self) -> None:
        self.client = APIClient()
        self.login_url = reverse("accounts:login")

    def login(self, user: User) -> None:
        response = self.client.post(
            self.login_url,
            {"identifier": user.username, "password": _PASSWORD},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {response.data['access']}")

    def distribution_url(self, project_id: int) -> str:
        return reverse("rewards:reward-distribution", kwargs={"project_id": project_id})


class TestRewardDistributionEndpoint(RewardApiTestBase):

    def test_unauthenticated_request_is_rejected(self):
        response = self.client.get(self.distribution_url(self.project.pk))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_get_returns_default_split_when_unset(self):
        self.login(self.admin)
        response = self.client.get(self.distribution_url(self.project.pk))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(
            response.data,
            {
                "projectId": self.project.pk,
                "operationPercentage": 10,
                "salesPercentage": 15,
                "directorPercentage": 25,
                "creatorPercentage": 50,
                "isDefault": True,
            },
        )

    def test_participant_can_read_distribution(self):
        self.login(self.creator)
        response = self.client.get(self.distribution_url(self.project.pk))
        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_non_participant_cannot_read_distribution(self):
        self.login(self.outsider)
        response = self.client.get(self.distribution_url(self.project.pk))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_get_unknown_project_returns_404(self):
        self.login(self.admin)
        response = self.client.get(self.distribution_url(999_999))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_admin_saves_and_reads_back_split(self):
        self.login(self.admin)
        payload = {"salesPercentage": 20, "directorPercentage": 30, "creatorPercentage": 40}

        response = self.client.post(self.distribution_url(self.project.pk), payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["operationPercentage"], 10)
        self.assertFalse(response.data["isDefault"])

        response = self.client.get(self.distribution_url(self.project.pk))
        self.assertEqual(response.data["salesPercentage"], 20)
        self.assertEqual(response.data["directorPercentage"], 30)
        self.assertEqual(response.data["creatorPercentage"], 40)

    def test_operation_percentage_in_payload_is_ignored(self):
        self.login(self.admin)
        payload = {
            "operationPercentage": 40,
            "salesPercentage": 15,
            "directorPercentage": 25,
            "creatorPercentage": 50,
        }
        response = self.client.post(self.distribution_url(self.project.pk), payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(RewardDistribution.objects.get(project=self.project).operation_percentage, 10)

    def test_wrong_total_returns_400_with_total(self):
        self.login(self.admin)
        payload = {"salesPercentage": 15, "directorPercentage": 25, "creatorPercentage": 45}

        response = self.client.post(self.distribution_url(self.project.pk), payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["total"], 95)
        self.assertIn("creatorPercentage", response.data["errors"])
        self.assertFalse(RewardDistribution.objects.exists())

    def test_missing_field_returns_400(self):
        self.login(self.admin)
        response = self.client.post(
            self.distribution_url(self.project.pk),
            {"salesPercentage": 15, "directorPercentage": 25},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("creatorPercentage", response.data)

    def test_non_admin_cannot_save(self):
        self.login(self.director)
        payload = {"salesPercentage": 15, "directorPercentage": 25, "creatorPercentage": 50}

        response = self.client.post(self.distribution_url(self.project.pk), payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertFalse(RewardDistribution.objects.exists())

    def test_save_after_distribution_returns_409(self):
        self.login(self.admin)
        mark_url = reverse("projects:project-mark-reward-distributed", kwargs={"pk": self.project.pk})
        self.assertEqual(self.client.post(mark_url).status_code, status.HTTP_200_OK)

        payload = {"salesPercentage": 15, "directorPercentage": 25, "creatorPercentage": 50}
        response = self.client.post(self.distribution_url(self.project.pk), payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertFalse(RewardDistribution.objects.exists())

    def test_save_unknown_project_returns_404(self):
        self.login(self.admin)
        payload = {"salesPercentage": 15, "directorPercentage": 25, "creatorPercentage": 50}
        response = self.client.post(self.distribution_url(999_999), payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)


class TestUserRewardEndpoints(RewardApiTestBase):

    def rewards_url(self, user_id: int) -> str:
        return reverse("rewards:user-rewards", kwargs={"user_id": user_id})

    def project_rewards_url(self, user_id: int, project_id: int) -> str:
        return reverse(
            "rewards:user-project-rewards",
            kwargs={"user_id": user_id, "project_id": project_id},
        )

    def test_member_sees_own_shares_per_role(self):
        self.login(self.director)
        response = self.client.get(self.rewards_url(self.director.pk))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(
            [(row["role"], row["percentage"], row["amount"]) for row in response.data],
            [("director", 25, 250_000), ("creator", 50, 500_000)],
        )
        self.assertEqual(response.data[0]["projectId"], self.project.pk)
        self.assertEqual(response.data[0]["projectName"], "Launch Film")
        self.assertEqual(response.data[0]["totalReward"], 1_000_000)

    def test_shares_follow_saved_distribution(self):
        RewardDistribution.objects.create(
            project=self.project,
            sales_percentage=20,
            director_percentage=30,
            creator_percentage=40,
        )
        self.login(self.seller)
        response = self.client.get(self.rewards_url(self.seller.pk))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]["amount"], 200_000)

    def test_member_without_projects_gets_empty_list(self):
        self.login(self.outsider)
        response = self.client.get(self.rewards_url(self.outsider.pk))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, [])

    def test_member_cannot_read_someone_elses_rewards(self):
        self.login(self.outsider)
        response = self.client.get(self.rewards_url(self.creator.pk))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_admin_can_read_any_member(self):
        self.login(self.admin)
        response = self.client.get(self.rewards_url(self.creator.pk))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data[0]["amount"], 500_000)

    def test_admin_reading_unknown_user_gets_404(self):
        self.login(self.admin)
        response = self.client.get(self.rewards_url(999_999))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_project_shares_for_member(self):
        self.login(self.creator)
        response = self.client.get(self.project_rewards_url(self.creator.pk, self.project.pk))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]["role"], "creator")

    def test_project_shares_without_share_returns_404(self):
        self.login(self.admin)
        response = self.client.get(self.project_rewards_url(self.outsider.pk, self.project.pk))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_project_shares_for_other_member_forbidden(self):
        self.login(self.outsider)
        response = self.client.get(self.project_rewards_url(self.creator.pk, self.project.pk))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
