"""
Projects app ViewSets.

Views are intentionally thin.  Every handler follows the same
three-step pattern:

    1. Parse and validate input via a serializer.
    2. Delegate to ``ProjectService`` with the acting user.
    3. Serialize the result and return a DRF ``Response``.
"""

from __future__ import annotations

from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response

from drf_spectacular.utils import OpenApiResponse, extend_schema

from .policies import ProjectAccessPolicy
from .serializers import ProjectSerializer, ProjectWriteSerializer
from .services import ProjectService


class ProjectViewSet(viewsets.ViewSet):
    """
    Project CRUD plus the one-way reward payout flag.

    GET    /api/projects/                               → list (participant-scoped)
    POST   /api/projects/                               → create (admin)
    GET    /api/projects/{id}/                          → retrieve
    PATCH  /api/projects/{id}/                          → partial update
    DELETE /api/projects/{id}/                          → delete (admin)
    POST   /api/projects/{id}/mark-reward-distributed/  → freeze reward (admin)
    """

    permission_classes = [IsAuthenticated]
    lookup_value_regex = r"\d+"

    def _context(self, request: Request) -> dict:
        return {
            "request": request,
            "reveal_admin_fields": ProjectAccessPolicy.is_admin(request.user),
        }

    @extend_schema(
        summary="List projects",
        description="Admins see every project; other members see projects they work on.",
        responses={200: OpenApiResponse(response=ProjectSerializer(many=True), description="Projects.")},
        tags=["Projects"],
    )
    def list(self, request: Request) -> Response:
        projects = ProjectService.list_projects(request.user)
        serializer = ProjectSerializer(projects, many=True, context=self._context(request))
        return Response(serializer.data)

    @extend_schema(
        summary="Create a project",
        request=ProjectWriteSerializer,
        responses={
            201: OpenApiResponse(response=ProjectSerializer, description="Project created."),
            400: OpenApiResponse(description="Validation error."),
            403: OpenApiResponse(description="Not an administrator."),
        },
        tags=["Projects"],
    )
    def create(self, request: Request) -> Response:
        serializer = ProjectWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        project = ProjectService.create_project(dict(serializer.validated_data), request.user)
        return Response(
            ProjectSerializer(project, context=self._context(request)).data,
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(
        summary="Retrieve a project",
        responses={
            200: OpenApiResponse(response=ProjectSerializer, description="Project."),
            403: OpenApiResponse(description="No access to this project."),
            404: OpenApiResponse(description="Project not found."),
        },
        tags=["Projects"],
    )
    def retrieve(self, request: Request, pk: str = None) -> Response:
        project = ProjectService.get_project(int(pk), request.user)
        return Response(ProjectSerializer(project, context=self._context(request)).data)

    @extend_schema(
        summary="Update a project",
        description="Admins may change any field; participants may change only the status.",
        request=ProjectWriteSerializer,
        responses={
            200: OpenApiResponse(response=ProjectSerializer, description="Project updated."),
            403: OpenApiResponse(description="Not allowed to change these fields."),
            404: OpenApiResponse(description="Project not found."),
        },
        tags=["Projects"],
    )
    def partial_update(self, request: Request, pk: str = None) -> Response:
        serializer = ProjectWriteSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        project = ProjectService.update_project(int(pk), dict(serializer.validated_data), request.user)
        return Response(ProjectSerializer(project, context=self._context(request)).data)

    @extend_schema(
        summary="Delete a project",
        responses={204: OpenApiResponse(description="Deleted.")},
        tags=["Projects"],
    )
    def destroy(self, request: Request, pk: str = None) -> Response:
        ProjectService.delete_project(int(pk), request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=["post"], url_path="mark-reward-distributed")
    @extend_schema(
        summary="Mark reward distributed",
        description=(
            "Flag the project's reward as paid out and notify every participant. "
            "The reward distribution becomes read-only afterwards."
        ),
        request=None,
        responses={
            200: OpenApiResponse(response=ProjectSerializer, description="Project updated."),
            403: OpenApiResponse(description="Not an administrator."),
            409: OpenApiResponse(description="Already distributed."),
        },
        tags=["Projects"],
    )
    def mark_reward_distributed(self, request: Request, pk: str = None) -> Response:
        project = ProjectService.mark_reward_distributed(int(pk), request.user)
        return Response(ProjectSerializer(project, context=self._context(request)).data)
