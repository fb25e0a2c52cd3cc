"""System checks for the credential resolution configuration."""

from django.conf import settings
from django.core.checks import Error, Warning, register

from core.dependencies import TOKEN_STRATEGIES


@register()
def access_token_strategy_is_configured(app_configs, **kwargs):
    """Ensure the token strategy is known and Google credentials are present.

    Both strategies go through Google for the initial sign-in, so missing
    client credentials are reported either way.
    """
    messages = []

    strategy = getattr(settings, "ACCESS_TOKEN_STRATEGY", None)
    if strategy not in TOKEN_STRATEGIES:
        messages.append(
            Error(
                f"ACCESS_TOKEN_STRATEGY must be one of {', '.join(TOKEN_STRATEGIES)}, got {strategy!r}.",
                id="authentication.E001",
            )
        )

    if not getattr(settings, "GOOGLE_CLIENT_ID", "") or not getattr(settings, "GOOGLE_CLIENT_SECRET", ""):
        messages.append(
            Warning(
                "Google OAuth2 client credentials are not configured; sign-in will fail.",
                hint="Set ING_GOOGLE_CLIENT_ID and ING_GOOGLE_CLIENT_SECRET.",
                id="authentication.W001",
            )
        )

    return messages
