"""Blog models: categories and the articles their authors own."""

from django.conf import settings
from django.db import models
from django.urls import reverse
from django.utils import timezone

from .slugs import SLUG_MAX_LENGTH, make_slug


class Category(models.Model):
    """Named grouping of articles, addressed publicly by slug."""

    name = models.CharField(max_length=100, unique=True)
    slug = models.SlugField(max_length=SLUG_MAX_LENGTH, unique=True, editable=False)

    class Meta:
        ordering = ["name"]
        verbose_name_plural = "categories"

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.name

    def save(self, *args, **kwargs):
        self.slug = make_slug(self.name)
        return super().save(*args, **kwargs)

    def get_absolute_url(self) -> str:
        return reverse("category_show", kwargs={"slug": self.slug})


class Article(models.Model):
    """Article written by one author, filed under one category.

    ``created_at`` and ``author`` are fixed when the article is first saved;
    ``slug`` follows the title and ``image`` holds the bare filename of an
    uploaded file inside ``settings.ARTICLE_IMAGES_DIR``.
    """

    title = models.CharField(max_length=255)
    slug = models.SlugField(max_length=SLUG_MAX_LENGTH, unique=True)
    content = models.TextField()
    created_at = models.DateTimeField(default=timezone.now, editable=False)
    image = models.CharField(max_length=255, blank=True, default="")
    category = models.ForeignKey(Category, on_delete=models.PROTECT, related_name="articles")
    author = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.PROTECT, related_name="articles")

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.title

    def get_absolute_url(self) -> str:
        return reverse("article_show", kwargs={"slug": self.slug})

    @property
    def image_url(self) -> str | None:
        if not self.image:
            return None
        return f"{settings.ARTICLE_IMAGES_URL}{self.image}"

    def is_authored_by(self, user) -> bool:
        """True when ``user`` is the stored author of this article."""
        return bool(
            user is not None
            and getattr(user, "is_authenticated", False)
            and self.author_id == user.pk
        )


__all__ = ["Category", "Article"]
