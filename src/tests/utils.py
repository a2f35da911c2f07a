"""Shared helpers for tests (seeding, user/article creation, image uploads)."""

from __future__ import annotations

import io
import shutil
import tempfile
from pathlib import Path
from datetime import datetime, timedelta, timezone as dt_timezone
from types import SimpleNamespace

from django.contrib.auth import get_user_model
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import override_settings
from PIL import Image

from articles.models import Article
from articles.slugs import make_slug
from articles.tokens import make_delete_token
from authentication.managers import UserManager
from scripts.management.commands.seed_blog import create_seed_categories

User = get_user_model()

BASE_TIME = datetime(2024, 1, 1, 12, 0, tzinfo=dt_timezone.utc)


def seed_categories() -> dict:
    """Create the base categories for tests.

    Delegates to the same helper used by the ``seed_blog`` management command
    to keep seeding logic in a single place.
    """

    return create_seed_categories()


def create_user(email: str, password: str = "AuthorPass123", **extra):
    """Create a user with a bcrypt-hashed password for tests."""

    return User.objects.create(
        email=email,
        password_hash=UserManager.hash_password(password),
        **extra,
    )


def create_article(author, category, title: str, minutes: int = 0, image: str = "", content: str = "Body"):
    """Create an article directly, ``minutes`` after a fixed base time."""

    return Article.objects.create(
        title=title,
        slug=make_slug(title),
        content=content,
        category=category,
        author=author,
        image=image,
        created_at=BASE_TIME + timedelta(minutes=minutes),
    )


def make_image_upload(name: str = "photo.png", image_format: str = "PNG", content_type: str | None = None):
    """Return an uploaded file holding a real (tiny) image in ``image_format``."""

    buffer = io.BytesIO()
    Image.new("RGB", (2, 2), color=(200, 30, 30)).save(buffer, format=image_format)
    return SimpleUploadedFile(
        name,
        buffer.getvalue(),
        content_type=content_type or Image.MIME[image_format],
    )


def delete_token_for(client, article) -> str:
    """Delete token as the admin index would render it for ``client``'s session."""

    return make_delete_token(SimpleNamespace(session=client.session), article)


class TemporaryImagesDirMixin:
    """Point ARTICLE_IMAGES_DIR at a fresh temporary directory for each test."""

    def setUp(self):
        super().setUp()
        self.images_dir = tempfile.mkdtemp(prefix="inkwell-images-")
        self.addCleanup(shutil.rmtree, self.images_dir, ignore_errors=True)
        override = override_settings(ARTICLE_IMAGES_DIR=self.images_dir)
        override.enable()
        self.addCleanup(override.disable)

    def write_image(self, filename: str, payload: bytes = b"old-image") -> str:
        """Place a file in the images directory as if previously uploaded."""
        with open(f"{self.images_dir}/{filename}", "wb") as handle:
            handle.write(payload)
        return filename

    def image_exists(self, filename: str) -> bool:
        return (Path(self.images_dir) / filename).is_file()

    def stored_images(self) -> list[str]:
        return sorted(p.name for p in Path(self.images_dir).iterdir())
