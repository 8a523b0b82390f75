"""URL routing for units."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from .views import UnitViewSet

router = DefaultRouter()
router.register(r"", UnitViewSet, basename="unit")

urlpatterns = [
    path("", include(router.urls)),
]
