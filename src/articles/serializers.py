"""Read-only serializers for the public article API."""

from rest_framework import serializers

from .models import Article, Category


class CategorySerializer(serializers.ModelSerializer):
    class Meta:
        """Expose category identity; slugs are derived and never written."""
        model = Category
        fields = ["id", "name", "slug"]
        read_only_fields = fields


class ArticleSerializer(serializers.ModelSerializer):
    category = CategorySerializer(read_only=True)
    author = serializers.CharField(source="author.display_name", read_only=True)
    image_url = serializers.CharField(read_only=True, allow_null=True)

    class Meta:
        """Expose published article fields."""
        model = Article
        fields = ["id", "title", "slug", "content", "created_at", "image_url", "category", "author"]
        read_only_fields = fields


__all__ = ["ArticleSerializer", "CategorySerializer"]
