"""DRF authentication backed by the configured identity resolver.

The ``AccessToken`` header is read only when a handler asks for
``request.user``; read-only endpoints never touch the resolver, so they
make no call to Google.
"""

from typing import Any, Optional, Tuple

from django.conf import settings
from rest_framework.authentication import BaseAuthentication

from . import dependencies


class AccessTokenAuthentication(BaseAuthentication):
    """Resolve the ``AccessToken`` header into a User.

    Returns None when the header is absent so the request stays anonymous;
    a present but unresolvable token raises Unauthenticated from the
    resolver.
    """

    def authenticate(self, request) -> Optional[Tuple[Any, str]]:
        token = request.headers.get(settings.ACCESS_TOKEN_HEADER, "").strip()
        if not token:
            return None
        user = dependencies.get_dependencies().identity_resolver.resolve(token)
        return user, token

    def authenticate_header(self, request) -> None:
        # No WWW-Authenticate challenge: failures are reported as 403.
        return None


__all__ = ["AccessTokenAuthentication"]
