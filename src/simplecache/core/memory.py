"""
Dictionary-backed cache that lives for a process or a session.

``LocalMemoryCache`` keeps entries in a plain dict. By default the dict is
private to the instance and disappears with it. When the host hands in a
session mapping, the dict is stored in that mapping under a fixed slot
(``LOCAL_MEMORY_CACHE``) so every cache attached to the same session sees
the same entries for as long as the session lives.

Manifesto:
    - **Zero infrastructure:** Works with nothing but the interpreter
    - **Copy isolation:** Callers never hold a reference to cached state
    - **Lazy expiration:** Expired entries are purged on the next ``get``
    - **Explicit sharing:** Session state is injected, never looked up globally

Architecture:
    ::

        LocalMemoryCache(session=None)       LocalMemoryCache(session=s)
              │                                     │
              ▼                                     ▼
        self._store = {}              s["LOCAL_MEMORY_CACHE"] ← shared dict
              │                                     │
              └──────────── key → ExpiringEntry ────┘

Examples:
    >>> from simplecache import LocalMemoryCache
    >>> cache = LocalMemoryCache()
    >>> cache.set("user~42", {"name": "Alice"})
    True
    >>> cache.get("user~42")
    {'name': 'Alice'}
    >>> cache.get("user~43", "missing")
    'missing'

    Sharing through a session mapping:

    >>> session = {}
    >>> LocalMemoryCache(session).set("k", "v")
    True
    >>> LocalMemoryCache(session).get("k")
    'v'

Performance:
    - O(1) get/set/delete/has
    - Deep copy on set/get of mutable values is O(size of value)

Guardrails:
    ❌ DON'T: Treat ``has()`` as "get would hit" — it ignores expiration
    ✅ DO: Call ``get()`` with a sentinel default when freshness matters

    ❌ DON'T: Share a session-scoped cache between concurrent requests
    ✅ DO: Let the host serialize access per session

Tags:
    cache, in-memory, session, ttl, lazy-expiration, simplecache
"""

from __future__ import annotations

import copy
import time
from collections.abc import Callable, Iterable, Mapping, MutableMapping
from typing import Any

from simplecache.core.base import CacheBase, iter_pairs, require_iterable
from simplecache.core.entry import TTL, ExpiringEntry, ttl_to_seconds
from simplecache.core.errors import InvalidArgument
from simplecache.core.logging import get_logger
from simplecache.core.settings import get_settings

logger = get_logger(__name__)

_IMMUTABLE_TYPES = (str, bytes, int, float, complex, bool, type(None), frozenset)


def _isolate(value: Any) -> Any:
    """Return ``value`` itself if immutable, else an independent deep copy.

    Raises:
        InvalidArgument: If ``value`` cannot be deep-copied (locks, sockets,
            open files).
    """
    if isinstance(value, _IMMUTABLE_TYPES):
        return value
    try:
        return copy.deepcopy(value)
    except (TypeError, copy.Error) as exc:
        raise InvalidArgument("Cached value cannot be copied", cause=exc).with_context(
            type=type(value).__name__
        ) from exc


class LocalMemoryCache(CacheBase):
    """In-memory cache scoped to the process, or to a host-provided session.

    Attributes:
        session_scoped: True when entries live inside a session mapping.

    Example:
        cache = LocalMemoryCache()
        cache.set("report~2025~Q4", rows, ttl=300)
        rows = cache.get("report~2025~Q4", [])
    """

    def __init__(
        self,
        session: MutableMapping[str, Any] | None = None,
        *,
        slot: str | None = None,
        clock: Callable[[], float] = time.time,
    ):
        """Initialize the cache.

        Args:
            session: Host session mapping to keep entries in. ``None`` keeps
                them private to this instance.
            slot: Session key the entries live under (defaults to the
                ``session_slot`` setting, ``LOCAL_MEMORY_CACHE``).
            clock: Returns the current time in epoch seconds.
        """
        self._clock = clock
        self.session_scoped = session is not None

        if session is None:
            self._store: MutableMapping[str, ExpiringEntry] = {}
        else:
            slot = slot or get_settings().session_slot
            if slot not in session:
                session[slot] = {}
            self._store = session[slot]

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value for ``key``, or ``default`` if missing or expired."""
        entry = self._store.get(key)
        if entry is None:
            return default

        if entry.is_expired(self._clock()):
            logger.debug("cache_entry_expired", key=key)
            self.delete(key)
            return default

        return _isolate(entry.value)

    def set(self, key: str, value: Any, ttl: TTL = None) -> bool:
        """Store a copy of ``value``; ``None`` or ``0`` TTL never expires.

        Raises:
            InvalidArgument: If ``value`` cannot be deep-copied, or ``ttl``
                is not seconds or a duration.
        """
        seconds = ttl_to_seconds(ttl)
        self._store[key] = ExpiringEntry.create(_isolate(value), seconds, self._clock())
        return True

    def delete(self, key: str) -> bool:
        """Remove ``key`` if present."""
        self._store.pop(key, None)
        return True

    def clear(self) -> bool:
        """Remove every entry (in place, so a shared session dict is emptied too)."""
        self._store.clear()
        logger.debug("cache_cleared", session_scoped=self.session_scoped)
        return True

    def get_multiple(self, keys: Iterable[str], default: Any = None) -> dict[str, Any]:
        """Apply :meth:`get` to each key, preserving input order."""
        require_iterable(keys, "keys")
        return {key: self.get(key, default) for key in keys}

    def set_multiple(
        self, values: Mapping[str, Any] | Iterable[tuple[str, Any]], ttl: TTL = None
    ) -> bool:
        """Apply :meth:`set` to each pair, in input order."""
        for key, value in iter_pairs(values):
            self.set(key, value, ttl)
        return True

    def delete_multiple(self, keys: Iterable[str]) -> bool:
        """Apply :meth:`delete` to each key."""
        require_iterable(keys, "keys")
        for key in keys:
            self.delete(key)
        return True

    def has(self, key: str) -> bool:
        """Return True if ``key`` is stored, expired or not."""
        return key in self._store

    def __contains__(self, key: object) -> bool:
        return key in self._store

    def __len__(self) -> int:
        return len(self._store)


__all__ = [
    "LocalMemoryCache",
]
