"""Environment-driven settings for simplecache.

``CacheSettings`` holds the knobs the backends read when the caller does
not pass them explicitly: the fallback TTL of the external cache, the URL
of the native facility, the session slot name and logging options.

Examples:
    >>> from simplecache.core.settings import get_settings
    >>> get_settings().default_ttl_seconds
    86400

    Override through the environment::

        SIMPLECACHE_DEFAULT_TTL_SECONDS=600
        SIMPLECACHE_FACILITY_URL=redis://cache:6379/2

Tags:
    settings, configuration, pydantic, environment, simplecache
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_TTL_SECONDS = 86400
SESSION_SLOT = "LOCAL_MEMORY_CACHE"


class CacheSettings(BaseSettings):
    """Settings shared by all simplecache backends.

    Fields
    ──────
    default_ttl_seconds : Fallback TTL for the external cache (one day)
    facility_url        : Where the native cache facility lives
    session_slot        : Key under which session-scoped stores live
    log_level           : Structlog log level
    json_logs           : True for JSON, False for console, None for auto
    """

    model_config = SettingsConfigDict(
        env_prefix="SIMPLECACHE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Backends ─────────────────────────────────────────────────
    default_ttl_seconds: int = Field(default=DEFAULT_TTL_SECONDS, ge=0)
    facility_url: str = "redis://localhost:6379/0"
    session_slot: str = SESSION_SLOT

    # ── Observability ────────────────────────────────────────────
    log_level: str = "INFO"
    json_logs: bool | None = None


_settings: CacheSettings | None = None


def get_settings(*, _force_reload: bool = False) -> CacheSettings:
    """Load and cache a :class:`CacheSettings` instance."""
    global _settings
    if _settings is None or _force_reload:
        _settings = CacheSettings()
    return _settings


def clear_settings_cache() -> None:
    """Drop the cached settings so the next call re-reads the environment."""
    global _settings
    _settings = None


__all__ = [
    "DEFAULT_TTL_SECONDS",
    "SESSION_SLOT",
    "CacheSettings",
    "get_settings",
    "clear_settings_cache",
]
