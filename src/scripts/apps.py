"""App configuration for project management commands."""

from django.apps import AppConfig


class ScriptsConfig(AppConfig):
    """Holds the ``seed_blog`` management command."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "scripts"
