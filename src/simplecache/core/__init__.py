"""simplecache core -- key derivation, entries, and the two cache backends.

Architecture::

    Layer 1 -- Types & Errors
        errors.py       CacheError hierarchy (InvalidArgument, BackendUnavailableError)
        keys.py         create_key / create_key_array (``~``-joined keys)
        entry.py        ExpiringEntry + TTL normalization

    Layer 2 -- Backends
        base.py         SimpleCache protocol + CacheBase
        memory.py       LocalMemoryCache (process or session scoped)
        external.py     ExternalCache adapter + NativeCacheFacility protocol
        facilities.py   RedisFacility + resolve_facility

    Layer 3 -- Cross-Cutting Concerns
        logging.py      Structured logging (structlog)
        settings.py     CacheSettings (pydantic-settings)

Tags:
    simplecache, cache, psr-16, protocol-first
"""

from simplecache.core.base import CacheBase, SimpleCache
from simplecache.core.entry import TTL, ExpiringEntry, ttl_to_seconds
from simplecache.core.errors import (
    BackendUnavailableError,
    CacheError,
    ErrorCategory,
    InvalidArgument,
)
from simplecache.core.external import (
    RESERVED_KEY_CHARACTERS,
    ExternalCache,
    NativeCacheFacility,
    validate_key,
)
from simplecache.core.facilities import RedisFacility, resolve_facility
from simplecache.core.keys import KEY_DELIMITER, create_key, create_key_array
from simplecache.core.memory import LocalMemoryCache
from simplecache.core.settings import CacheSettings, get_settings

__all__ = [
    # base
    "CacheBase",
    "SimpleCache",
    # entry
    "TTL",
    "ExpiringEntry",
    "ttl_to_seconds",
    # errors
    "BackendUnavailableError",
    "CacheError",
    "ErrorCategory",
    "InvalidArgument",
    # external
    "RESERVED_KEY_CHARACTERS",
    "ExternalCache",
    "NativeCacheFacility",
    "validate_key",
    # facilities
    "RedisFacility",
    "resolve_facility",
    # keys
    "KEY_DELIMITER",
    "create_key",
    "create_key_array",
    # memory
    "LocalMemoryCache",
    # settings
    "CacheSettings",
    "get_settings",
]
