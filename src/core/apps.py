"""App configuration for the core project utilities."""

import logging

from django.apps import AppConfig
from django.conf import settings

logger = logging.getLogger(__name__)


class CoreConfig(AppConfig):
    """Core app holds shared settings, URLs, error handling, and base views."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "core"

    def ready(self):
        from .dependencies import TOKEN_STRATEGIES, build_dependencies, install_dependencies

        # An unknown strategy is reported by the authentication.E001 system check.
        if settings.ACCESS_TOKEN_STRATEGY not in TOKEN_STRATEGIES:
            logger.error(
                "Not wiring request handlers: unknown ACCESS_TOKEN_STRATEGY %r",
                settings.ACCESS_TOKEN_STRATEGY,
            )
            return
        install_dependencies(build_dependencies())
