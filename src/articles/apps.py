"""App configuration for blog articles."""

from django.apps import AppConfig


class ArticlesConfig(AppConfig):
    """Articles are owned by their author and filed under a category."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "articles"
