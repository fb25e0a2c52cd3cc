"""Error taxonomy and the handler that renders the `{code, message}` envelope."""

import logging
from typing import Any

from django.db import DatabaseError
from django.http import Http404
from rest_framework import exceptions, status
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger(__name__)


class InvalidInput(exceptions.APIException):
    """Malformed request data or a referenced entity that does not exist."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "invalid request"
    default_code = "invalid_input"


class Unauthenticated(exceptions.AuthenticationFailed):
    """Missing, invalid, or unresolvable access token.

    Reported as 403 rather than 401: clients of this API have always received
    403 for both unauthenticated and unauthorized requests.
    """

    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "you must be authenticated"
    default_code = "unauthenticated"


class Forbidden(exceptions.PermissionDenied):
    """Resolved identity, but the authorization policy denies the action."""

    default_detail = "you are not allowed to perform this action"
    default_code = "forbidden"


class NotFound(exceptions.NotFound):
    """Target entity does not exist."""

    default_detail = "not found"


class InternalError(exceptions.APIException):
    """Store or infrastructure failure."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "internal error"
    default_code = "internal_error"


class TokenStoreUnavailable(Exception):
    """Raised when the local token store (Redis) cannot be reached."""


def error_body(code: int, message: str) -> dict[str, Any]:
    """Build the error envelope shared by every failed response."""

    return {"code": code, "message": message}


def _first_message(payload: Any) -> str:
    """Flatten DRF's error payload into a single human-readable message."""

    if isinstance(payload, list):
        return _first_message(payload[0]) if payload else ""
    if isinstance(payload, dict):
        if "detail" in payload:
            return _first_message(payload["detail"])
        for field, errors in payload.items():
            message = _first_message(errors)
            if field == "non_field_errors":
                return message
            return f"{field}: {message}"
        return ""
    return str(payload)


def custom_exception_handler(exc: Exception, context: dict[str, Any]):
    """Render every error as `{ "code": <status>, "message": <text> }`.

    - Store failures (DatabaseError, token store outages) become 500s with a
      generic message; the cause is logged, never returned.
    - Everything else goes through DRF's default handler first, then its
      payload is flattened into the envelope.
    """

    if isinstance(exc, (DatabaseError, TokenStoreUnavailable)):
        view = context.get("view")
        logger.error(
            "Store failure while handling %s", type(view).__name__ if view else "request", exc_info=exc
        )
        exc = InternalError("could not complete the operation")

    if isinstance(exc, Http404):
        exc = NotFound()

    if isinstance(exc, exceptions.ValidationError):
        exc = InvalidInput(_first_message(exc.detail))

    response = drf_exception_handler(exc, context)
    if response is None:
        return response

    response.data = error_body(response.status_code, _first_message(response.data))
    return response


__all__ = [
    "InvalidInput",
    "Unauthenticated",
    "Forbidden",
    "NotFound",
    "InternalError",
    "TokenStoreUnavailable",
    "custom_exception_handler",
    "error_body",
]
