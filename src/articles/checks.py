"""System checks for the article image configuration."""

import os
from pathlib import Path

from django.conf import settings
from django.core.checks import Error, Warning, register


@register()
def article_images_dir_is_usable(app_configs, **kwargs):
    """Ensure ARTICLE_IMAGES_DIR is configured and, if it exists, writable.

    A missing directory is fine: storage creates it on the first upload.
    """
    errors: list = []

    images_dir = getattr(settings, "ARTICLE_IMAGES_DIR", None)
    if not images_dir:
        errors.append(
            Error(
                "ARTICLE_IMAGES_DIR is not set; uploaded article images have nowhere to go.",
                id="articles.E001",
            )
        )
        return errors

    path = Path(images_dir)
    if path.exists() and not path.is_dir():
        errors.append(
            Error(
                f"ARTICLE_IMAGES_DIR ({path}) exists but is not a directory.",
                id="articles.E002",
            )
        )
    elif path.exists() and not os.access(path, os.W_OK):
        errors.append(
            Warning(
                f"ARTICLE_IMAGES_DIR ({path}) is not writable; image uploads will fail.",
                id="articles.W001",
            )
        )

    if not getattr(settings, "ARTICLE_IMAGES_URL", ""):
        errors.append(
            Error(
                "ARTICLE_IMAGES_URL is not set; article images cannot be linked.",
                id="articles.E003",
            )
        )

    return errors
