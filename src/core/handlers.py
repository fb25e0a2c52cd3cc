"""Base views shared by every request handler.

Each mutating handler follows the same sequence: parse the path and body,
resolve the caller, load the target, consult the policy, mutate, and
re-fetch the result. The helpers below cover the steps that look the same
everywhere.
"""

from typing import Any, Callable, Optional, TypeVar

from rest_framework.views import APIView
from rest_framework.viewsets import ViewSet

from access_control.policy import Decision

from .dependencies import Dependencies, get_dependencies
from .exceptions import Forbidden, InvalidInput, NotFound, Unauthenticated

T = TypeVar("T")


class HandlerMixin:
    """Request-handling steps used by the API views."""

    def perform_authentication(self, request) -> None:  # type: ignore[override]
        # Authentication is lazy: handlers call ``require_user`` after parsing.
        pass

    @property
    def deps(self) -> Dependencies:
        return get_dependencies()

    @staticmethod
    def parse_id(value: Any) -> int:
        """Parse a path ID, rejecting anything but a positive integer."""
        try:
            parsed = int(value)
        except (TypeError, ValueError):
            raise InvalidInput(f"invalid id: {value!r}")
        if parsed <= 0:
            raise InvalidInput(f"invalid id: {value!r}")
        return parsed

    @staticmethod
    def parse_payload(serializer_class, data, what: str, **kwargs) -> dict[str, Any]:
        """Validate a request body and return the validated data."""
        serializer = serializer_class(data=data, **kwargs)
        if not serializer.is_valid():
            errors = serializer.errors
            field, messages = next(iter(errors.items()))
            message = messages[0] if isinstance(messages, list) and messages else messages
            raise InvalidInput(f"invalid {what}: {field}: {message}")
        return serializer.validated_data

    @staticmethod
    def require_user(request, message: str = "you must be authenticated"):
        """Return the caller, or raise Unauthenticated with ``message``."""
        try:
            user = request.user
        except Unauthenticated:
            raise Unauthenticated(message)
        if user is None:
            raise Unauthenticated(message)
        return user

    @staticmethod
    def load(getter: Callable[[int], Optional[T]], pk: int, what: str) -> T:
        """Fetch an entity by ID or raise NotFound."""
        entity = getter(pk)
        if entity is None:
            raise NotFound(f"{what} with provided id not found")
        return entity

    @staticmethod
    def enforce(decision: Decision) -> None:
        """Turn a policy denial into a 403."""
        if not decision:
            raise Forbidden(decision.reason)


class BaseAPIView(HandlerMixin, APIView):
    """APIView with lazy authentication and the shared handler steps."""


class BaseViewSet(HandlerMixin, ViewSet):
    """ViewSet variant of BaseAPIView."""


__all__ = ["BaseAPIView", "BaseViewSet", "HandlerMixin"]
