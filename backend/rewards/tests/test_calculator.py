"""
Tests for ``RewardCalculator`` and ``RewardAggregator``.

Amounts are floor(total_reward * percentage / 100).
"""

from __future__ import annotations

import pytest

from core.domain.exceptions import NotFound
from rewards.models import RewardDistribution
from rewards.services import RewardAggregator, RewardCalculator, compute_amount

pytestmark = pytest.mark.django_db


def _as_tuples(shares):
    return [(s.project_id, s.role, s.percentage, s.amount) for s in shares]


class TestComputeAmount:

    @pytest.mark.parametrize(
        "total, pct, expected",
        [
            (1_000_000, 25, 250_000),
            (1_000_000, 50, 500_000),
            (999, 33, 329),
            (99, 1, 0),
            (0, 50, 0),
            (None, 50, 0),
        ],
    )
    def test_amount_is_truncated(self, total, pct, expected):
        assert compute_amount(total, pct) == expected


class TestRewardCalculator:

    def test_director_and_creator_get_two_entries(self, create_user, make_project):
        user = create_user()
        project = make_project(total_reward=1_000_000, director=user, assigned_users=[user])

        shares = RewardCalculator.calculate(project.pk, user.pk)

        assert _as_tuples(shares) == [
            (project.pk, "director", 25, 250_000),
            (project.pk, "creator", 50, 500_000),
        ]

    def test_sales_share_uses_stored_distribution(self, create_user, make_project):
        seller = create_user()
        project = make_project(total_reward=200_000, sales=seller)
        RewardDistribution.objects.create(
            project=project,
            sales_percentage=20,
            director_percentage=30,
            creator_percentage=40,
        )

        (share,) = RewardCalculator.calculate(project.pk, seller.pk)

        assert share.role == "sales"
        assert share.percentage == 20
        assert share.amount == 40_000
        assert share.project_name == project.name
        assert share.total_reward == 200_000

    def test_unrelated_user_gets_nothing(self, create_user, make_project):
        director, outsider = create_user(), create_user()
        project = make_project(total_reward=500_000, director=director)

        assert RewardCalculator.calculate(project.pk, outsider.pk) == []

    def test_missing_total_reward_counts_as_zero(self, create_user, make_project):
        creator = create_user()
        project = make_project(assigned_users=[creator])

        (share,) = RewardCalculator.calculate(project.pk, creator.pk)

        assert share.total_reward == 0
        assert share.amount == 0

    def test_fractional_amount_is_floored(self, create_user, make_project):
        creator = create_user()
        project = make_project(total_reward=999, assigned_users=[creator])
        RewardDistribution.objects.create(
            project=project,
            sales_percentage=32,
            director_percentage=25,
            creator_percentage=33,
        )

        (share,) = RewardCalculator.calculate(project.pk, creator.pk)

        assert share.amount == 329

    def test_unknown_project_raises_not_found(self, create_user):
        user = create_user()
        with pytest.raises(NotFound):
            RewardCalculator.calculate(987_654, user.pk)


class TestRewardAggregator:

    def test_one_entry_per_project_in_id_order(self, create_user, make_project):
        creator = create_user()
        projects = [
            make_project(total_reward=100_000 * (i + 1), assigned_users=[creator])
            for i in range(3)
        ]

        shares = RewardAggregator.rewards_for_user(creator.pk)

        assert [s.project_id for s in shares] == [p.pk for p in projects]
        assert [s.amount for s in shares] == [50_000, 100_000, 150_000]
        assert {s.role for s in shares} == {"creator"}

    def test_every_role_across_projects(self, create_user, make_project):
        user, other = create_user(), create_user()
        p1 = make_project(total_reward=1_000, director=user, sales=user)
        p2 = make_project(total_reward=1_000, director=other, assigned_users=[user, other])
        make_project(total_reward=1_000, director=other)

        shares = RewardAggregator.rewards_for_user(user.pk)

        assert _as_tuples(shares) == [
            (p1.pk, "director", 25, 250),
            (p1.pk, "sales", 15, 150),
            (p2.pk, "creator", 50, 500),
        ]

    def test_user_without_projects_gets_empty_list(self, create_user, make_project):
        user = create_user()
        make_project(total_reward=1_000)

        assert RewardAggregator.rewards_for_user(user.pk) == []
