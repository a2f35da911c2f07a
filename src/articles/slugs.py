"""Slug derivation for article titles and category names."""

from django.utils.text import slugify
from unidecode import unidecode

SLUG_MAX_LENGTH = 255


def make_slug(value: str) -> str:
    """Return the lowercase, ASCII-transliterated, URL-safe form of ``value``.

    Every script is transliterated to ASCII first ("Привет" becomes "privet"),
    then anything outside ``[a-z0-9_-]`` is dropped and whitespace/dash runs
    collapse to one dash. Applying it to its own output returns the same string.
    """
    slug = slugify(unidecode(value or ""))[:SLUG_MAX_LENGTH]
    return slug.strip("-_")


__all__ = ["make_slug", "SLUG_MAX_LENGTH"]
