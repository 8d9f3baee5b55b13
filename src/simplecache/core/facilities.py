"""
Native cache facilities for :class:`~simplecache.core.external.ExternalCache`.

A facility is the process-external store the adapter forwards to. The
bundled one is Redis; anything implementing
:class:`~simplecache.core.external.NativeCacheFacility` can be passed to
``ExternalCache`` directly.

Requires the ``redis`` optional extra::

    pip install simplecache[redis]
"""

from __future__ import annotations

import json
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any
from urllib.parse import urlparse

from simplecache.core.errors import (
    BackendUnavailableError,
    CacheError,
    ErrorCategory,
    InvalidArgument,
)
from simplecache.core.logging import get_logger

logger = get_logger(__name__)

REDIS_SCHEMES = ("redis", "rediss", "unix")


class RedisFacility:
    """Redis-backed facility. Values are stored JSON-encoded.

    JSON is lossy for some Python types: tuples come back as lists, mapping
    keys come back as strings (``{1: "a"}`` → ``{"1": "a"}``), and sets or
    arbitrary objects cannot be stored at all.

    Example:
        facility = RedisFacility("redis://localhost:6379/0")
        cache = ExternalCache(facility, ttl=600)

    Raises:
        BackendUnavailableError: If the ``redis`` package is not installed.
        InvalidArgument: If a value is not JSON-serializable.
        CacheError: With category ``STORAGE`` when the Redis client fails.
    """

    def __init__(self, url: str = "redis://localhost:6379/0"):
        try:
            import redis
        except ImportError as exc:
            raise BackendUnavailableError(
                "Redis facility requires the 'redis' package. "
                "Install with: pip install simplecache[redis]",
                cause=exc,
            ) from exc

        self.url = url
        self._client = redis.from_url(url, decode_responses=False)
        self._client_error: type[Exception] = redis.RedisError

    @contextmanager
    def _storage_errors(self, operation: str) -> Iterator[None]:
        """Re-raise Redis client failures as STORAGE-category CacheErrors."""
        try:
            yield
        except self._client_error as exc:
            logger.warning("cache_facility_failed", operation=operation, error=str(exc))
            raise CacheError(
                f"Redis {operation} failed: {exc}",
                category=ErrorCategory.STORAGE,
                cause=exc,
            ).with_context(operation=operation) from exc

    def _encode(self, key: str, value: Any) -> str:
        try:
            return json.dumps(value)
        except (TypeError, ValueError) as exc:
            raise InvalidArgument(
                f"Value for key {key!r} is not JSON-serializable: {exc}",
                key=key,
                cause=exc,
            ).with_context(type=type(value).__name__) from exc

    def fetch(self, key: str) -> tuple[Any, bool]:
        with self._storage_errors("get"):
            raw = self._client.get(key)
        if raw is None:
            return None, False
        return json.loads(raw), True

    def store(self, key: str, value: Any, ttl_seconds: int) -> bool:
        serialized = self._encode(key, value)
        with self._storage_errors("set"):
            if ttl_seconds < 0:
                # Already expired: make sure nothing stale stays visible
                self._client.delete(key)
                return True
            if ttl_seconds:
                return bool(self._client.setex(key, ttl_seconds, serialized))
            return bool(self._client.set(key, serialized))

    def delete(self, key: str) -> bool:
        with self._storage_errors("delete"):
            self._client.delete(key)
        return True

    def clear_all(self) -> bool:
        """Flush the current Redis database."""
        with self._storage_errors("flushdb"):
            return bool(self._client.flushdb())

    def exists(self, key: str) -> bool:
        with self._storage_errors("exists"):
            return bool(self._client.exists(key))

    def fetch_many(self, keys: list[str]) -> dict[str, Any]:
        if not keys:
            return {}
        with self._storage_errors("mget"):
            raws = self._client.mget(keys)
        return {key: json.loads(raw) for key, raw in zip(keys, raws) if raw is not None}

    def store_many(self, values: dict[str, Any], ttl_seconds: int) -> bool:
        encoded = {key: self._encode(key, value) for key, value in values.items()}
        if ttl_seconds < 0:
            return self.delete_many(list(encoded))

        with self._storage_errors("pipeline"):
            pipe = self._client.pipeline()
            for key, serialized in encoded.items():
                if ttl_seconds:
                    pipe.setex(key, ttl_seconds, serialized)
                else:
                    pipe.set(key, serialized)
            return all(pipe.execute())

    def delete_many(self, keys: list[str]) -> bool:
        if keys:
            with self._storage_errors("delete"):
                self._client.delete(*keys)
        return True


def resolve_facility(url: str) -> RedisFacility:
    """Build the facility a ``facility_url`` setting points at.

    Raises:
        BackendUnavailableError: If the URL scheme has no facility, or the
            facility's client library is missing.
    """
    scheme = urlparse(url).scheme
    if scheme not in REDIS_SCHEMES:
        raise BackendUnavailableError(
            f"No native cache facility for URL scheme {scheme!r}"
        ).with_context(facility_url=url)

    logger.debug("cache_facility_resolved", scheme=scheme)
    return RedisFacility(url)


__all__ = [
    "REDIS_SCHEMES",
    "RedisFacility",
    "resolve_facility",
]
