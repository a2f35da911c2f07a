"""Filesystem storage for uploaded article images."""

import logging
import mimetypes
import uuid
from pathlib import PurePath

from django.conf import settings
from django.core.files.storage import FileSystemStorage

from .slugs import make_slug

logger = logging.getLogger(__name__)

UNIQUE_SUFFIX_LENGTH = 13
FALLBACK_EXTENSION = ".bin"


class ArticleImageError(OSError):
    """Raised when an uploaded image cannot be written to the images directory."""


def detected_extension(upload) -> str:
    """Extension (with dot) for the upload's detected content type.

    ``forms.ImageField`` replaces the client-supplied content type with the
    one Pillow identified, so a renamed file still gets its real extension.
    """
    content_type = getattr(upload, "content_type", None) or ""
    return mimetypes.guess_extension(content_type) or FALLBACK_EXTENSION


def build_image_filename(upload) -> str:
    """``{slug of original basename}-{unique suffix}{detected extension}``."""
    basename = make_slug(PurePath(upload.name or "").stem) or "image"
    suffix = uuid.uuid4().hex[:UNIQUE_SUFFIX_LENGTH]
    return f"{basename}-{suffix}{detected_extension(upload)}"


class ArticleImageStore:
    """Save, locate, and remove article images by bare filename."""

    def __init__(self, location=None):
        self.storage = FileSystemStorage(
            location=location or settings.ARTICLE_IMAGES_DIR,
            base_url=settings.ARTICLE_IMAGES_URL,
        )

    @property
    def location(self) -> str:
        return self.storage.location

    def save(self, upload) -> str:
        """Move ``upload`` into the images directory and return its stored filename."""
        filename = build_image_filename(upload)
        try:
            stored = self.storage.save(filename, upload)
        except OSError as exc:
            logger.warning("Could not store image %s in %s: %s", filename, self.location, exc)
            raise ArticleImageError(f"Could not store image {filename}") from exc
        logger.debug("Stored image %s", stored)
        return stored

    def delete(self, filename: str) -> bool:
        """Remove ``filename`` if it exists; return whether a file was removed.

        Failures are logged and reported as ``False``: a leftover file is
        preferable to failing a request whose record change already committed.
        """
        if not filename:
            return False
        try:
            if not self.storage.exists(filename):
                return False
            self.storage.delete(filename)
        except OSError as exc:
            logger.warning("Could not delete image %s from %s: %s", filename, self.location, exc)
            return False
        logger.debug("Deleted image %s", filename)
        return True

    def exists(self, filename: str) -> bool:
        return bool(filename) and self.storage.exists(filename)

    def url(self, filename: str) -> str:
        return self.storage.url(filename)


__all__ = [
    "ArticleImageError",
    "ArticleImageStore",
    "build_image_filename",
    "detected_extension",
]
