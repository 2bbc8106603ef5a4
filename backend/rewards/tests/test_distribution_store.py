"""
Tests for ``RewardDistributionStore``: defaults, upsert semantics and the
distributed-lock.
"""

from __future__ import annotations

import pytest
from django.db import IntegrityError, transaction

from core.domain.exceptions import Conflict, DomainValidationError, NotFound
from rewards.models import RewardDistribution
from rewards.services import RewardDistributionStore

pytestmark = pytest.mark.django_db


def _split(distribution):
    return (
        distribution.operation_percentage,
        distribution.sales_percentage,
        distribution.director_percentage,
        distribution.creator_percentage,
    )


def test_get_returns_unsaved_default(make_project):
    project = make_project()

    distribution = RewardDistributionStore.get(project.pk)

    assert _split(distribution) == (10, 15, 25, 50)
    assert distribution.is_default
    assert distribution.project_id == project.pk
    assert not RewardDistribution.objects.exists()


def test_get_unknown_project_raises_not_found():
    with pytest.raises(NotFound):
        RewardDistributionStore.get(424_242)


def test_upsert_then_get_round_trip(make_project):
    project = make_project()

    saved = RewardDistributionStore.upsert(project.pk, sales=20, director=30, creator=40)
    loaded = RewardDistributionStore.get(project.pk)

    assert _split(saved) == _split(loaded) == (10, 20, 30, 40)
    assert not loaded.is_default


def test_upsert_replaces_existing_row(make_project):
    project = make_project()
    RewardDistributionStore.upsert(project.pk, sales=20, director=30, creator=40)

    RewardDistributionStore.upsert(project.pk, sales=0, director=0, creator=90)

    assert RewardDistribution.objects.filter(project=project).count() == 1
    assert _split(RewardDistributionStore.get(project.pk)) == (10, 0, 0, 90)


def test_invalid_upsert_leaves_previous_split(make_project):
    project = make_project()
    RewardDistributionStore.upsert(project.pk, sales=20, director=30, creator=40)

    with pytest.raises(DomainValidationError) as exc_info:
        RewardDistributionStore.upsert(project.pk, sales=20, director=30, creator=35)

    assert exc_info.value.extra["total"] == 95
    assert _split(RewardDistributionStore.get(project.pk)) == (10, 20, 30, 40)


@pytest.mark.parametrize(
    "split",
    [
        {"sales": 15, "director": 25, "creator": 50},
        {"sales": 15, "director": 25, "creator": 10},
    ],
)
def test_distributed_project_rejects_every_upsert(make_project, split):
    project = make_project(reward_distributed=True)

    with pytest.raises(Conflict):
        RewardDistributionStore.upsert(project.pk, **split)

    assert not RewardDistribution.objects.exists()


def test_upsert_unknown_project_raises_not_found():
    with pytest.raises(NotFound):
        RewardDistributionStore.upsert(424_242, sales=15, director=25, creator=50)


def test_database_rejects_split_not_summing_to_100(make_project):
    project = make_project()

    with pytest.raises(IntegrityError):
        with transaction.atomic():
            RewardDistribution.objects.create(
                project=project,
                sales_percentage=80,
                director_percentage=10,
                creator_percentage=10,
            )

    assert not RewardDistribution.objects.exists()
