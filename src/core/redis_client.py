"""Redis connection backing the local access-token store.

Only the ``local`` token strategy talks to Redis; with the default ``google``
strategy the client is never created.
"""

import redis
from django.conf import settings

_client: redis.Redis | None = None


def get_redis_client() -> redis.Redis:
    """Return the process-wide client for REDIS_URL.

    Nothing connects here; an unreachable server shows up as a
    ``redis.RedisError`` on the first command, bounded by REDIS_SOCKET_TIMEOUT.
    """

    global _client
    if _client is None:
        _client = redis.Redis.from_url(
            settings.REDIS_URL,
            decode_responses=True,
            socket_connect_timeout=settings.REDIS_SOCKET_TIMEOUT,
            socket_timeout=settings.REDIS_SOCKET_TIMEOUT,
        )
    return _client


def reset_redis_client() -> None:
    """Forget the cached client so the next call reconnects with current settings."""

    global _client
    if _client is not None:
        _client.close()
    _client = None


__all__ = ["get_redis_client", "reset_redis_client"]
