"""Article use-cases: create, update, and delete on behalf of an explicit author.

The acting user is always passed in by the caller; nothing here reads it from
the request. Image files and article rows are kept consistent as follows:

- a new upload is written to disk *before* the row is saved, and removed
  again if the save fails, so a committed row never points at a missing file;
- a replaced or deleted image is removed only once the transaction commits,
  so a rolled-back change never loses the file it still references.
"""

import logging
from dataclasses import dataclass

from django.core.exceptions import PermissionDenied
from django.db import DatabaseError, transaction
from django.utils import timezone

from .images import ArticleImageError, ArticleImageStore
from .models import Article
from .slugs import make_slug

logger = logging.getLogger(__name__)


class NotArticleAuthor(PermissionDenied):
    """Raised when someone other than the stored author tries to change an article."""

    def __init__(self, article: Article, action: str):
        super().__init__(f"Only the author can {action} this article.")
        self.article = article
        self.action = action


@dataclass
class SaveOutcome:
    """Result of a create/update: the saved article and whether its new image was dropped."""

    article: Article
    image_failed: bool = False


class ArticleService:
    """Create, update, and delete articles with their image files."""

    def __init__(self, image_store: ArticleImageStore | None = None):
        self._image_store = image_store

    @property
    def images(self) -> ArticleImageStore:
        if self._image_store is None:
            self._image_store = ArticleImageStore()
        return self._image_store

    @staticmethod
    def ensure_author(actor, article: Article, action: str) -> None:
        """Raise :class:`NotArticleAuthor` unless ``actor`` wrote ``article``."""
        if not article.is_authored_by(actor):
            logger.info(
                "Refused %s of article %s by user %s",
                action,
                article.pk,
                getattr(actor, "pk", None),
            )
            raise NotArticleAuthor(article, action)

    def create(self, author, article: Article, image=None) -> SaveOutcome:
        """Stamp slug/created_at/author on a new ``article`` and persist it."""
        article.slug = make_slug(article.title)
        article.created_at = timezone.now()
        article.author = author

        staged, image_failed = self._stage_image(image)
        if staged:
            article.image = staged

        self._save(article, staged)
        logger.info("Article %s (%s) created by user %s", article.pk, article.slug, author.pk)
        return SaveOutcome(article=article, image_failed=image_failed)

    def update(self, actor, article: Article, image=None) -> SaveOutcome:
        """Persist edits to ``article``; a new ``image`` replaces the old file."""
        self.ensure_author(actor, article, "edit")

        article.slug = make_slug(article.title)
        previous_image = article.image

        staged, image_failed = self._stage_image(image)
        if staged:
            article.image = staged

        self._save(article, staged, replaced_image=previous_image if staged else "")
        logger.info("Article %s (%s) updated by user %s", article.pk, article.slug, actor.pk)
        return SaveOutcome(article=article, image_failed=image_failed)

    def delete(self, actor, article: Article) -> None:
        """Remove ``article`` and, after commit, its image file."""
        self.ensure_author(actor, article, "delete")

        article_id = article.pk
        image = article.image
        with transaction.atomic():
            article.delete()
            if image:
                transaction.on_commit(lambda: self.images.delete(image))
        logger.info("Article %s deleted by user %s", article_id, actor.pk)

    def _stage_image(self, image) -> tuple[str, bool]:
        """Write ``image`` to disk; return ``(filename, failed)``."""
        if not image:
            return "", False
        try:
            return self.images.save(image), False
        except ArticleImageError:
            return "", True

    def _save(self, article: Article, staged: str, replaced_image: str = "") -> None:
        try:
            with transaction.atomic():
                article.save()
                if replaced_image:
                    transaction.on_commit(lambda: self.images.delete(replaced_image))
        except DatabaseError:
            if staged:
                self.images.delete(staged)
            raise


__all__ = ["ArticleService", "NotArticleAuthor", "SaveOutcome"]
