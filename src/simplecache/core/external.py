"""
Adapter over an external native cache facility.

``ExternalCache`` holds no cache logic of its own. It forwards every call to
a :class:`NativeCacheFacility` (Redis via :class:`~simplecache.core.facilities.RedisFacility`
by default) and only normalizes what the facility does not: TTL shapes,
the fallback TTL, and key validation.

Architecture:
    ::

        ExternalCache ──► NativeCacheFacility (Protocol)
          │                 fetch / store / delete / clear_all / exists
          │                 fetch_many / store_many / delete_many
          │
          ├─ rejects keys containing  { } ( ) / \\ @ :
          ├─ ttl=None      → fallback TTL (default 86400s)
          └─ ttl=duration  → whole seconds from a reference instant

Examples:
    >>> from simplecache import ExternalCache
    >>> cache = ExternalCache(facility, ttl=600)
    >>> cache.set("user~42", {"name": "Alice"})
    True
    >>> cache.set("user:42", "x")
    Traceback (most recent call last):
    ...
    simplecache.core.errors.InvalidArgument: Invalid character found in the key: :

Guardrails:
    ❌ DON'T: Use ``has()`` then ``get()`` to read a value in a shared facility
    ✅ DO: ``get()`` with a sentinel default; another process may delete in between

Tags:
    cache, adapter, redis, native-cache, ttl, simplecache
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Protocol, runtime_checkable

from simplecache.core.base import CacheBase, iter_pairs, require_iterable
from simplecache.core.entry import TTL, ttl_to_seconds
from simplecache.core.errors import InvalidArgument
from simplecache.core.logging import get_logger
from simplecache.core.settings import get_settings

logger = get_logger(__name__)

RESERVED_KEY_CHARACTERS = "{}()/\\@:"


@runtime_checkable
class NativeCacheFacility(Protocol):
    """Operations the external cache facility must offer.

    ``ttl_seconds == 0`` means the entry never expires.
    """

    def fetch(self, key: str) -> tuple[Any, bool]: ...

    def store(self, key: str, value: Any, ttl_seconds: int) -> bool: ...

    def delete(self, key: str) -> bool: ...

    def clear_all(self) -> bool: ...

    def exists(self, key: str) -> bool: ...

    def fetch_many(self, keys: list[str]) -> dict[str, Any]: ...

    def store_many(self, values: dict[str, Any], ttl_seconds: int) -> bool: ...

    def delete_many(self, keys: list[str]) -> bool: ...


def validate_key(key: str) -> None:
    """Raise InvalidArgument if ``key`` contains a reserved character."""
    for character in key:
        if character in RESERVED_KEY_CHARACTERS:
            logger.warning("cache_key_rejected", key=key, character=character)
            raise InvalidArgument(
                f"Invalid character found in the key: {character}",
                key=key,
                character=character,
            )


class ExternalCache(CacheBase):
    """Cache backed by an external native facility.

    Attributes:
        ttl: Fallback TTL in seconds used when ``set`` gets no TTL.

    Raises:
        BackendUnavailableError: If no facility is given and none can be
            resolved from ``CacheSettings.facility_url``.
    """

    def __init__(self, facility: NativeCacheFacility | None = None, *, ttl: int | None = None):
        settings = get_settings()
        if facility is None:
            from simplecache.core.facilities import resolve_facility

            facility = resolve_facility(settings.facility_url)

        self._facility = facility
        self.ttl = int(ttl) if ttl is not None else settings.default_ttl_seconds

    @property
    def facility(self) -> NativeCacheFacility:
        return self._facility

    def _seconds(self, ttl: TTL) -> int:
        seconds = ttl_to_seconds(ttl)
        return self.ttl if seconds is None else seconds

    def get(self, key: str, default: Any = None) -> Any:
        value, found = self._facility.fetch(key)
        return value if found else default

    def set(self, key: str, value: Any, ttl: TTL = None) -> bool:
        """Store ``value``; ``ttl=None`` uses the fallback TTL.

        Raises:
            InvalidArgument: If ``key`` contains one of ``{}()/\\@:``.
        """
        validate_key(key)
        return self._facility.store(key, value, self._seconds(ttl))

    def delete(self, key: str) -> bool:
        return self._facility.delete(key)

    def clear(self) -> bool:
        logger.debug("cache_cleared", backend=type(self._facility).__name__)
        return self._facility.clear_all()

    def get_multiple(self, keys: Iterable[str], default: Any = None) -> dict[str, Any]:
        require_iterable(keys, "keys")
        keys = list(keys)
        found = self._facility.fetch_many(keys)
        return {key: found[key] if key in found else default for key in keys}

    def set_multiple(
        self, values: Mapping[str, Any] | Iterable[tuple[str, Any]], ttl: TTL = None
    ) -> bool:
        pairs = dict(iter_pairs(values))
        for key in pairs:
            validate_key(key)
        if not pairs:
            return True
        return self._facility.store_many(pairs, self._seconds(ttl))

    def delete_multiple(self, keys: Iterable[str]) -> bool:
        require_iterable(keys, "keys")
        keys = list(keys)
        if not keys:
            return True
        return self._facility.delete_many(keys)

    def has(self, key: str) -> bool:
        return self._facility.exists(key)


__all__ = [
    "RESERVED_KEY_CHARACTERS",
    "NativeCacheFacility",
    "ExternalCache",
    "validate_key",
]
