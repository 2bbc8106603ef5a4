"""
Projects app URL configuration.

Included in ``studio/urls.py`` as::

    path("api/", include("projects.urls")),

    /api/projects/                                → list / create
    /api/projects/{id}/                           → retrieve / update / delete
    /api/projects/{id}/mark-reward-distributed/   → freeze reward (@action)
"""

from rest_framework.routers import DefaultRouter

from .views import ProjectViewSet

app_name = "projects"

router = DefaultRouter()
router.register(
    prefix=r"projects",
    viewset=ProjectViewSet,
    basename="project",
)

urlpatterns = [
    *router.urls,
]
