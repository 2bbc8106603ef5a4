"""
Rewards app views.

Thin ``APIView`` handlers: validate the request shape, hand the acting
user to ``RewardService`` and serialize what comes back.  Authorisation,
validation of the 100% rule and the distributed-lock all live in the
service layer and surface through the domain exception handler.
"""

from __future__ import annotations

from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from drf_spectacular.utils import OpenApiExample, OpenApiResponse, extend_schema

from .serializers import (
    RewardDistributionSerializer,
    RewardDistributionWriteSerializer,
    UserRewardShareSerializer,
)
from .services import RewardService


class RewardDistributionView(APIView):
    """
    GET  /api/projects/{project_id}/reward-distribution/  → current (or default) split
    POST /api/projects/{project_id}/reward-distribution/  → create / overwrite (admin)
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Get a project's reward distribution",
        description=(
            "Returns the stored split, or the default 10/15/25/50 split "
            "(``isDefault: true``) when none has been saved."
        ),
        responses={
            200: OpenApiResponse(response=RewardDistributionSerializer, description="Distribution."),
            403: OpenApiResponse(description="No access to this project."),
            404: OpenApiResponse(description="Project not found."),
        },
        tags=["Rewards"],
    )
    def get(self, request: Request, project_id: int) -> Response:
        distribution = RewardService.get_distribution(project_id, request.user)
        return Response(RewardDistributionSerializer(distribution).data)

    @extend_schema(
        summary="Save a project's reward distribution",
        description=(
            "Replaces the whole split.  Sales, director and creator must each be "
            "0-90 and, with the fixed 10% operations cut, add up to 100."
        ),
        request=RewardDistributionWriteSerializer,
        responses={
            200: OpenApiResponse(response=RewardDistributionSerializer, description="Saved."),
            400: OpenApiResponse(description="Percentages invalid; body carries ``total``."),
            403: OpenApiResponse(description="Not an administrator."),
            404: OpenApiResponse(description="Project not found."),
            409: OpenApiResponse(description="Reward already distributed."),
        },
        examples=[
            OpenApiExample(
                "Balanced split",
                value={"salesPercentage": 20, "directorPercentage": 30, "creatorPercentage": 40},
                request_only=True,
            ),
        ],
        tags=["Rewards"],
    )
    def post(self, request: Request, project_id: int) -> Response:
        serializer = RewardDistributionWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        distribution = RewardService.save_distribution(
            project_id, dict(serializer.validated_data), request.user,
        )
        return Response(RewardDistributionSerializer(distribution).data, status=status.HTTP_200_OK)


class UserRewardsView(APIView):
    """GET /api/users/{user_id}/rewards/  → every share the user earns."""

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="List a member's rewards",
        description="One entry per (project, role).  Members may only read their own.",
        responses={
            200: OpenApiResponse(response=UserRewardShareSerializer(many=True), description="Shares."),
            403: OpenApiResponse(description="Not your rewards."),
            404: OpenApiResponse(description="User not found."),
        },
        tags=["Rewards"],
    )
    def get(self, request: Request, user_id: int) -> Response:
        shares = RewardService.rewards_for_user(user_id, request.user)
        return Response(UserRewardShareSerializer(shares, many=True).data)


class UserProjectRewardsView(APIView):
    """GET /api/users/{user_id}/rewards/project/{project_id}/  → shares in one project."""

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Get a member's reward in one project",
        responses={
            200: OpenApiResponse(response=UserRewardShareSerializer(many=True), description="Shares."),
            403: OpenApiResponse(description="Not your rewards."),
            404: OpenApiResponse(description="User or project not found, or no share."),
        },
        tags=["Rewards"],
    )
    def get(self, request: Request, user_id: int, project_id: int) -> Response:
        shares = RewardService.rewards_for_user_in_project(user_id, project_id, request.user)
        return Response(UserRewardShareSerializer(shares, many=True).data)
