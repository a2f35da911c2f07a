"""Read-only query helpers over articles and categories.

Every helper returns fully loaded model instances (category and author are
fetched in the same query) so callers never trigger lazy loads.
"""

from .models import Article, Category


def _articles():
    return Article.objects.select_related("category", "author").order_by("-created_at", "-id")


class ArticleRepository:
    """Article lookups used by the public pages, the back office, and the API."""

    @staticmethod
    def find_all() -> list[Article]:
        return list(_articles())

    @staticmethod
    def find_one_by_slug(slug: str) -> Article | None:
        return _articles().filter(slug=slug).first()

    @staticmethod
    def find_latest_articles(limit: int = 5) -> list[Article]:
        """Most recently created articles, newest first, at most ``limit``."""
        if limit <= 0:
            return []
        return list(_articles()[:limit])

    @staticmethod
    def find_by_category(category: Category) -> list[Article]:
        """Articles filed under ``category``, newest first."""
        return list(_articles().filter(category=category))

    @staticmethod
    def find_by_author(author) -> list[Article]:
        """Articles written by ``author``, newest first."""
        return list(_articles().filter(author=author))


class CategoryRepository:
    """Category lookups."""

    @staticmethod
    def find_all() -> list[Category]:
        return list(Category.objects.order_by("name"))

    @staticmethod
    def find_one_by_slug(slug: str) -> Category | None:
        return Category.objects.filter(slug=slug).first()


__all__ = ["ArticleRepository", "CategoryRepository"]
