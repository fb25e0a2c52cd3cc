"""User and authentication endpoints.

- ``/users``: list, retrieve, and update users.
- ``/auth``: current user, Google login redirect, and the OAuth callback.
"""

import logging

from django.http import HttpResponseRedirect
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import extend_schema
from rest_framework.response import Response

from access_control.policy import Action, Resource, authorize, updatable_user_fields
from core.exceptions import InvalidInput
from core.handlers import BaseAPIView, BaseViewSet

from .oauth import ProviderError
from .serializers import UserSerializer, UserUpdateSerializer
from .services import provision_user

logger = logging.getLogger(__name__)


class UserViewSet(BaseViewSet):
    """Users are readable by anyone and editable by themselves or an Administrator."""

    serializer_class = UserSerializer

    def list(self, request):
        """Return every registered user."""
        return Response(UserSerializer(self.deps.users.get_all(), many=True).data)

    def retrieve(self, request, pk=None):
        """Return the user with matching ID."""
        user_id = self.parse_id(pk)
        user = self.load(self.deps.users.get, user_id, "user")
        return Response(UserSerializer(user).data)

    @extend_schema(request=UserUpdateSerializer, responses=UserSerializer)
    def update(self, request, pk=None):
        """Apply the fields the caller is allowed to change and return the user.

        Fields outside the caller's allowance are dropped, not rejected: an
        Administrator updating someone's name gets a 200 and the name stays.
        """
        user_id = self.parse_id(pk)
        data = self.parse_payload(UserUpdateSerializer, request.data, "user")
        caller = self.require_user(request, "you must be authenticated to update a user")
        target = self.load(self.deps.users.get, user_id, "user")
        self.enforce(authorize(caller, Action.UPDATE, Resource.USER, target))

        allowed = updatable_user_fields(caller, target)
        for key, attribute in UserUpdateSerializer.FIELD_MAP.items():
            if key in data and attribute in allowed:
                setattr(target, attribute, data[key])

        self.deps.users.update(target)
        updated = self.load(self.deps.users.get, user_id, "user")
        return Response(UserSerializer(updated).data)


class CurrentUserView(BaseAPIView):
    """GET /auth: the user behind the presented access token."""

    @extend_schema(responses=UserSerializer)
    def get(self, request):
        """Return the authenticated user."""
        user = self.require_user(request, "invalid access token")
        return Response(UserSerializer(user).data)


class GoogleLoginView(BaseAPIView):
    """GET /auth/google-login: entry point of the Google OAuth2 flow."""

    @extend_schema(responses={307: None})
    def get(self, request):
        """Redirect to Google's consent screen with a signed state."""
        state = self.deps.state_signer.issue()
        response = HttpResponseRedirect(self.deps.oauth_client.authorization_url(state))
        response.status_code = 307
        return response


class GoogleCallbackView(BaseAPIView):
    """GET /auth/google-callback: finish the OAuth2 flow and hand out a credential."""

    @extend_schema(responses={200: OpenApiTypes.OBJECT})
    def get(self, request):
        """Exchange the code, provision the user, and return the access credential."""
        deps = self.deps
        if not deps.state_signer.verify(request.query_params.get("state")):
            raise InvalidInput("state did not match")

        code = request.query_params.get("code")
        if not code:
            raise InvalidInput("missing authorization code")

        try:
            token = deps.oauth_client.exchange_code(code)
        except ProviderError as exc:
            raise InvalidInput(str(exc))

        try:
            profile = deps.oauth_client.fetch_user_info(token["access_token"])
        except ProviderError as exc:
            raise InvalidInput(f"failed to get user info: {exc}")

        user = provision_user(deps.users, profile)
        logger.info("User %s signed in with Google", user.pk)
        return Response(deps.identity_resolver.credential_for(user, token))


__all__ = ["CurrentUserView", "GoogleCallbackView", "GoogleLoginView", "UserViewSet"]
