"""Google OAuth2 client: authorization URL, code exchange, and user info.

The configuration is a frozen dataclass built once from Django settings and
handed to whoever needs it; nothing here keeps process-wide state.
"""

import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt
import requests
from authlib.integrations.base_client import OAuthError
from authlib.integrations.requests_client import OAuth2Session

logger = logging.getLogger(__name__)

GOOGLE_AUTHORIZATION_URL = "https://accounts.google.com/o/oauth2/auth"
GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"
GOOGLE_USERINFO_URL = "https://www.googleapis.com/oauth2/v3/userinfo"
CALLBACK_PATH = "/v1/auth/google-callback"


class ProviderError(Exception):
    """The OAuth provider rejected the request or could not be reached."""


@dataclass(frozen=True)
class GoogleOAuthConfig:
    """Everything needed to talk to Google's OAuth2 endpoints."""

    client_id: str
    client_secret: str
    redirect_url: str
    scopes: tuple[str, ...] = ("openid", "profile", "email")
    authorization_url: str = GOOGLE_AUTHORIZATION_URL
    token_url: str = GOOGLE_TOKEN_URL
    userinfo_url: str = GOOGLE_USERINFO_URL
    timeout: float = 5.0

    @classmethod
    def from_settings(cls, settings) -> "GoogleOAuthConfig":
        """Build the config from Django settings (client credentials, hostname)."""
        return cls(
            client_id=settings.GOOGLE_CLIENT_ID,
            client_secret=settings.GOOGLE_CLIENT_SECRET,
            redirect_url=f"{settings.HOSTNAME}{CALLBACK_PATH}",
            timeout=settings.OAUTH_HTTP_TIMEOUT,
        )


@dataclass(frozen=True)
class GoogleUserInfo:
    """Subset of Google's userinfo response used to provision accounts."""

    sub: str
    name: str = ""
    picture: str = ""
    email: str = ""

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "GoogleUserInfo":
        sub = payload.get("sub")
        if not sub:
            raise ProviderError("userinfo response has no subject identifier")
        return cls(
            sub=str(sub),
            name=payload.get("name") or "",
            picture=payload.get("picture") or "",
            email=payload.get("email") or "",
        )


class GoogleOAuthClient:
    """Thin wrapper over Authlib and requests for the three Google calls."""

    def __init__(self, config: GoogleOAuthConfig):
        self.config = config

    def _session(self) -> OAuth2Session:
        return OAuth2Session(
            client_id=self.config.client_id,
            client_secret=self.config.client_secret,
            scope=" ".join(self.config.scopes),
            redirect_uri=self.config.redirect_url,
        )

    def authorization_url(self, state: str) -> str:
        """Return the consent-screen URL the login endpoint redirects to."""
        url, _ = self._session().create_authorization_url(
            self.config.authorization_url, state=state, access_type="offline"
        )
        return url

    def exchange_code(self, code: str) -> dict[str, Any]:
        """Trade an authorization code for a token dict (``access_token`` etc.)."""
        try:
            token = self._session().fetch_token(
                self.config.token_url, code=code, timeout=self.config.timeout
            )
        except (OAuthError, requests.RequestException) as exc:
            raise ProviderError(f"failed to exchange token: {exc}") from exc
        if not token.get("access_token"):
            raise ProviderError("failed to exchange token: no access token returned")
        return dict(token)

    def fetch_user_info(self, access_token: str) -> GoogleUserInfo:
        """Fetch the profile behind an access token; any failure is a ProviderError."""
        try:
            response = requests.get(
                self.config.userinfo_url,
                headers={"Authorization": f"Bearer {access_token}"},
                timeout=self.config.timeout,
            )
        except requests.RequestException as exc:
            raise ProviderError(f"userinfo request failed: {exc}") from exc

        if response.status_code != 200:
            raise ProviderError(f"userinfo returned status {response.status_code}")
        try:
            payload = response.json()
        except ValueError as exc:
            raise ProviderError("userinfo returned invalid JSON") from exc
        return GoogleUserInfo.from_payload(payload)


class OAuthStateSigner:
    """Issue and verify the ``state`` parameter of the login round trip.

    The state is a short-lived HS256 JWT, so the callback can check it without
    any server-side storage.
    """

    ALGORITHM = "HS256"
    PURPOSE = "google-login"

    def __init__(self, secret: str, ttl_seconds: int = 600):
        self.secret = secret
        self.ttl = timedelta(seconds=ttl_seconds)

    def issue(self) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "nonce": secrets.token_urlsafe(16),
            "purpose": self.PURPOSE,
            "iat": int(now.timestamp()),
            "exp": int((now + self.ttl).timestamp()),
        }
        return jwt.encode(payload, self.secret, algorithm=self.ALGORITHM)

    def verify(self, state: str | None) -> bool:
        if not state:
            return False
        try:
            payload = jwt.decode(state, self.secret, algorithms=[self.ALGORITHM])
        except jwt.InvalidTokenError as exc:
            logger.info("Rejected OAuth state: %s", exc)
            return False
        return payload.get("purpose") == self.PURPOSE


__all__ = [
    "CALLBACK_PATH",
    "GoogleOAuthClient",
    "GoogleOAuthConfig",
    "GoogleUserInfo",
    "OAuthStateSigner",
    "ProviderError",
]
