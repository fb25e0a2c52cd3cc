"""App configuration for blog categories."""

from django.apps import AppConfig


class CategoriesConfig(AppConfig):
    """Categories group articles by topic."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "categories"
