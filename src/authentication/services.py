"""Identity resolution: turn an ``AccessToken`` header value into a User.

Two credential strategies are supported:

* ``google``: the header carries a Google access token, checked against the
  userinfo endpoint on every request.
* ``local``: the header carries an opaque token this service issued at the end
  of the OAuth callback, kept in Redis with at most one live token per user.
"""

import logging
import secrets
from typing import Any, Protocol

import redis

from core.exceptions import InternalError, TokenStoreUnavailable, Unauthenticated
from core.redis_client import get_redis_client

from .models import Role, User
from .oauth import GoogleOAuthClient, GoogleUserInfo, ProviderError
from .repositories import DuplicateUser, UsersRepository

logger = logging.getLogger(__name__)


class IdentityResolver(Protocol):
    """Pluggable credential resolution strategy."""

    def resolve(self, access_token: str) -> User:
        """Return the user behind ``access_token`` or raise Unauthenticated."""

    def credential_for(self, user: User, provider_token: dict[str, Any]) -> dict[str, Any]:
        """Return the credential handed to the client after the OAuth callback."""


def provision_user(users: UsersRepository, profile: GoogleUserInfo) -> User:
    """Find the user for a Google profile, creating a Reader on first sight.

    Two first logins for the same subject can race; the loser of the insert
    gets DuplicateUser and simply reads the winner's row.
    """

    user = users.get_by_sub(profile.sub)
    if user is not None:
        return user

    candidate = User(
        google_sub=profile.sub,
        name=profile.name,
        profile_picture_url=profile.picture,
        role=Role.READER,
    )
    try:
        user = users.create(candidate)
    except DuplicateUser:
        user = users.get_by_sub(profile.sub)
        if user is None:
            raise InternalError("could not create user")
        return user

    logger.info("Created user %s for a new Google account", user.pk)
    return user


class GoogleIdentityResolver:
    """Resolve Google access tokens live against the userinfo endpoint."""

    def __init__(self, users: UsersRepository, oauth_client: GoogleOAuthClient):
        self.users = users
        self.oauth_client = oauth_client

    def resolve(self, access_token: str) -> User:
        if not access_token:
            raise Unauthenticated()
        try:
            profile = self.oauth_client.fetch_user_info(access_token)
        except ProviderError as exc:
            logger.info("Access token resolution failed: %s", exc)
            raise Unauthenticated() from exc
        return provision_user(self.users, profile)

    # noinspection PyMethodMayBeStatic
    def credential_for(self, user: User, provider_token: dict[str, Any]) -> dict[str, Any]:
        return {
            "accessToken": provider_token["access_token"],
            "tokenType": provider_token.get("token_type", "Bearer"),
            "refreshToken": provider_token.get("refresh_token", ""),
            "expiresAt": provider_token.get("expires_at"),
        }


class LocalTokenStore:
    """Issue and look up opaque per-user access tokens stored in Redis."""

    TOKEN_PREFIX = "access_token:"
    USER_PREFIX = "user_token:"

    @classmethod
    def issue(cls, user_id: int) -> str:
        """Issue a new token for ``user_id``, revoking any previous one.

        The user pointer is swapped with a single ``SET ... GET``, so of two
        concurrent logins the one that swaps last revokes the other's token.
        """

        client = get_redis_client()
        token = secrets.token_urlsafe(32)
        try:
            client.set(f"{cls.TOKEN_PREFIX}{token}", str(user_id))
            previous = client.set(f"{cls.USER_PREFIX}{user_id}", token, get=True)
            if previous and previous != token:
                client.delete(f"{cls.TOKEN_PREFIX}{previous}")
        except redis.RedisError as exc:
            raise TokenStoreUnavailable("Redis unavailable while issuing token") from exc
        return token

    @classmethod
    def user_id_for(cls, token: str) -> int | None:
        """Return the user id a token belongs to, or None if it is unknown."""

        client = get_redis_client()
        try:
            value = client.get(f"{cls.TOKEN_PREFIX}{token}")
        except redis.RedisError as exc:
            raise TokenStoreUnavailable("Redis unavailable while checking token") from exc
        if value is None:
            return None
        return int(value)


class LocalTokenIdentityResolver:
    """Resolve tokens issued by LocalTokenStore."""

    def __init__(self, users: UsersRepository):
        self.users = users

    def resolve(self, access_token: str) -> User:
        if not access_token:
            raise Unauthenticated()
        user_id = LocalTokenStore.user_id_for(access_token)
        if user_id is None:
            logger.info("Access token resolution failed: unknown local token")
            raise Unauthenticated()
        user = self.users.get(user_id)
        if user is None:
            logger.info("Access token resolution failed: user %s no longer exists", user_id)
            raise Unauthenticated()
        return user

    # noinspection PyMethodMayBeStatic
    def credential_for(self, user: User, provider_token: dict[str, Any]) -> dict[str, Any]:
        return {"accessToken": LocalTokenStore.issue(user.pk), "tokenType": "opaque"}


__all__ = [
    "GoogleIdentityResolver",
    "IdentityResolver",
    "LocalTokenIdentityResolver",
    "LocalTokenStore",
    "provision_user",
]
