"""Routing for the read-only article API."""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .api import ArticleViewSet, CategoryViewSet

router = DefaultRouter()
router.register(r"articles", ArticleViewSet, basename="api-article")
router.register(r"categories", CategoryViewSet, basename="api-category")

urlpatterns = [
    path("", include(router.urls)),
]
