"""
Cache contract and shared base class.

``SimpleCache`` is the protocol every backend satisfies: single-key
get/set/delete/has, whole-cache clear, and the batch variants. It follows
the shape of the PSR-16 "simple cache" interface.

Architecture:
    ::

        SimpleCache (Protocol)
        └── CacheBase (ABC: key helpers, batch argument checks)
            ├── LocalMemoryCache  — process or session scoped dict
            └── ExternalCache     — forwards to a native facility

        API: get(key, default=None) → value | default
             set(key, value, ttl=None) → bool
             delete(key) → bool
             clear() / delete_all() → bool
             get_multiple(keys, default=None) → dict
             set_multiple(values, ttl=None) → bool
             delete_multiple(keys) → bool
             has(key) → bool

Examples:
    >>> from simplecache import LocalMemoryCache, SimpleCache
    >>> cache = LocalMemoryCache()
    >>> isinstance(cache, SimpleCache)
    True
    >>> cache.create_key("user", [42, "profile"])
    'user~42~profile'

Tags:
    cache, protocol, psr-16, simplecache
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from typing import Any, Protocol, runtime_checkable

from simplecache.core.entry import TTL
from simplecache.core.errors import InvalidArgument
from simplecache.core.keys import create_key, create_key_array


@runtime_checkable
class SimpleCache(Protocol):
    """Protocol for cache backend implementations."""

    def get(self, key: str, default: Any = None) -> Any:
        """Return the cached value for ``key``, or ``default`` on a miss."""
        ...

    def set(self, key: str, value: Any, ttl: TTL = None) -> bool:
        """Store ``value`` under ``key``; returns the success flag."""
        ...

    def delete(self, key: str) -> bool:
        """Remove ``key``; a missing key is not an error."""
        ...

    def clear(self) -> bool:
        """Remove every entry."""
        ...

    def get_multiple(self, keys: Iterable[str], default: Any = None) -> dict[str, Any]:
        """Return ``{key: value-or-default}`` in the order of ``keys``."""
        ...

    def set_multiple(self, values: Mapping[str, Any] | Iterable[tuple[str, Any]], ttl: TTL = None) -> bool:
        """Store every pair of ``values``."""
        ...

    def delete_multiple(self, keys: Iterable[str]) -> bool:
        """Remove every key in ``keys``."""
        ...

    def has(self, key: str) -> bool:
        """Return True if ``key`` is present."""
        ...


def require_iterable(value: Any, what: str) -> None:
    """Raise InvalidArgument unless ``value`` is a non-string iterable."""
    if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
        raise InvalidArgument(f"Cannot iterate over {what}").with_context(
            received=type(value).__name__
        )


def iter_pairs(values: Mapping[str, Any] | Iterable[tuple[str, Any]]) -> Iterable[tuple[str, Any]]:
    """Return ``(key, value)`` pairs from a mapping or an iterable of pairs.

    Pairs are checked up front, so a malformed item rejects the whole batch
    before anything is stored. A two-character string is not a pair.
    """
    require_iterable(values, "values")
    if isinstance(values, Mapping):
        return values.items()

    pairs = []
    for item in values:
        if not isinstance(item, (tuple, list)) or len(item) != 2:
            raise InvalidArgument("Expected (key, value) pairs").with_context(
                received=type(item).__name__
            )
        pairs.append((item[0], item[1]))
    return pairs


class CacheBase(ABC):
    """Common base for backends: key helpers and ``delete_all``."""

    def create_key(self, *args: Any) -> str:
        """Build a ``~``-joined key from arbitrarily nested arguments."""
        return create_key(*args)

    def create_key_array(self, values: Iterable[Any]) -> str:
        """Join an already flat sequence of values with ``~``."""
        return create_key_array(values)

    def delete_all(self) -> bool:
        """Alias for :meth:`clear`."""
        return self.clear()

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any: ...

    @abstractmethod
    def set(self, key: str, value: Any, ttl: TTL = None) -> bool: ...

    @abstractmethod
    def delete(self, key: str) -> bool: ...

    @abstractmethod
    def clear(self) -> bool: ...

    @abstractmethod
    def get_multiple(self, keys: Iterable[str], default: Any = None) -> dict[str, Any]: ...

    @abstractmethod
    def set_multiple(
        self, values: Mapping[str, Any] | Iterable[tuple[str, Any]], ttl: TTL = None
    ) -> bool: ...

    @abstractmethod
    def delete_multiple(self, keys: Iterable[str]) -> bool: ...

    @abstractmethod
    def has(self, key: str) -> bool: ...


__all__ = [
    "SimpleCache",
    "CacheBase",
    "require_iterable",
    "iter_pairs",
]
