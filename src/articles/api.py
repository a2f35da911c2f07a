"""Read-only JSON endpoints for articles and categories."""

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework.decorators import action
from rest_framework.exceptions import ValidationError

from core.response import BaseReadOnlyViewSet, api_response
from .models import Article, Category
from .repositories import ArticleRepository
from .serializers import ArticleSerializer, CategorySerializer

MAX_LATEST_LIMIT = 50


class ArticleViewSet(BaseReadOnlyViewSet):
    serializer_class = ArticleSerializer
    queryset = Article.objects.select_related("category", "author")
    lookup_field = "slug"

    @extend_schema(
        parameters=[OpenApiParameter("limit", OpenApiTypes.INT, description="Number of articles (1-50).")]
    )
    @action(detail=False, methods=["get"])
    def latest(self, request):
        """Most recent articles, newest first."""
        raw_limit = request.query_params.get("limit", "5")
        try:
            limit = int(raw_limit)
        except ValueError:
            raise ValidationError({"limit": "Must be an integer."}) from None
        if not 1 <= limit <= MAX_LATEST_LIMIT:
            raise ValidationError({"limit": f"Must be between 1 and {MAX_LATEST_LIMIT}."})
        articles = ArticleRepository.find_latest_articles(limit)
        return api_response(self.get_serializer(articles, many=True).data)


class CategoryViewSet(BaseReadOnlyViewSet):
    serializer_class = CategorySerializer
    queryset = Category.objects.order_by("name")
    lookup_field = "slug"

    @extend_schema(responses=ArticleSerializer(many=True))
    @action(detail=True, methods=["get"])
    def articles(self, request, slug=None):
        """Articles filed under this category, newest first."""
        category = self.get_object()
        articles = ArticleRepository.find_by_category(category)
        return api_response(ArticleSerializer(articles, many=True, context=self.get_serializer_context()).data)


__all__ = ["ArticleViewSet", "CategoryViewSet"]
