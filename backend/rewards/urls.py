"""
Rewards app URL configuration.

Included in ``studio/urls.py`` as::

    path("api/", include("rewards.urls")),

    /api/projects/{project_id}/reward-distribution/          → get / save
    /api/users/{user_id}/rewards/                            → all shares
    /api/users/{user_id}/rewards/project/{project_id}/       → one project
"""

from django.urls import path

from . import views

app_name = "rewards"

urlpatterns = [
    path(
        "projects/<int:project_id>/reward-distribution/",
        views.RewardDistributionView.as_view(),
        name="reward-distribution",
    ),
    path(
        "users/<int:user_id>/rewards/",
        views.UserRewardsView.as_view(),
        name="user-rewards",
    ),
    path(
        "users/<int:user_id>/rewards/project/<int:project_id>/",
        views.UserProjectRewardsView.as_view(),
        name="user-project-rewards",
    ),
]
