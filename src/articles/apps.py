"""App configuration for the articles Django application.

Registers the image-directory system checks when Django starts.
"""

from django.apps import AppConfig


class ArticlesConfig(AppConfig):
    """Application configuration for the articles app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "articles"

    def ready(self) -> None:
        """Register system checks when the app is loaded."""
        from . import checks  # noqa: F401
