"""Collaborators shared by the request handlers.

The container is built from settings when the ``core`` app becomes ready
(see ``CoreConfig.ready``) and installed with ``install_dependencies``. Tests
swap single collaborators (a fake identity resolver, in-memory repositories)
with ``override_dependencies``.
"""

from contextlib import contextmanager
from dataclasses import dataclass, replace
from typing import Iterator

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from articles.repositories import ArticlesRepository, DjangoArticlesRepository
from authentication.oauth import GoogleOAuthClient, GoogleOAuthConfig, OAuthStateSigner
from authentication.repositories import DjangoUsersRepository, UsersRepository
from authentication.services import (
    GoogleIdentityResolver,
    IdentityResolver,
    LocalTokenIdentityResolver,
)
from categories.repositories import CategoriesRepository, DjangoCategoriesRepository

TOKEN_STRATEGIES = ("google", "local")


@dataclass(frozen=True)
class Dependencies:
    users: UsersRepository
    categories: CategoriesRepository
    articles: ArticlesRepository
    oauth_client: GoogleOAuthClient
    state_signer: OAuthStateSigner
    identity_resolver: IdentityResolver


_dependencies: Dependencies | None = None


def build_dependencies() -> Dependencies:
    """Wire the production collaborators from Django settings."""

    strategy = settings.ACCESS_TOKEN_STRATEGY
    if strategy not in TOKEN_STRATEGIES:
        raise ImproperlyConfigured(f"Unknown ACCESS_TOKEN_STRATEGY {strategy!r}")

    users = DjangoUsersRepository()
    oauth_client = GoogleOAuthClient(GoogleOAuthConfig.from_settings(settings))
    if strategy == "local":
        resolver: IdentityResolver = LocalTokenIdentityResolver(users)
    else:
        resolver = GoogleIdentityResolver(users, oauth_client)

    return Dependencies(
        users=users,
        categories=DjangoCategoriesRepository(),
        articles=DjangoArticlesRepository(),
        oauth_client=oauth_client,
        state_signer=OAuthStateSigner(settings.SECRET_KEY, settings.OAUTH_STATE_TTL),
        identity_resolver=resolver,
    )


def install_dependencies(container: Dependencies | None) -> None:
    global _dependencies
    _dependencies = container


def get_dependencies() -> Dependencies:
    """Return the container installed at startup."""

    if _dependencies is None:
        raise ImproperlyConfigured(
            "Dependencies are not installed; check ACCESS_TOKEN_STRATEGY and that 'core' is in INSTALLED_APPS"
        )
    return _dependencies


@contextmanager
def override_dependencies(**overrides) -> Iterator[Dependencies]:
    """Temporarily replace some collaborators, restoring the previous set on exit."""

    previous = get_dependencies()
    install_dependencies(replace(previous, **overrides))
    try:
        yield get_dependencies()
    finally:
        install_dependencies(previous)


__all__ = [
    "Dependencies",
    "TOKEN_STRATEGIES",
    "build_dependencies",
    "get_dependencies",
    "install_dependencies",
    "override_dependencies",
]
