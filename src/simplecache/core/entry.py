"""
Cache entries with absolute expiration, plus TTL normalization.

An :class:`ExpiringEntry` pairs a value with the epoch second at which it
stops being visible (``None`` means never). TTLs arrive in several shapes
(``None``, seconds, ``timedelta``, ``relativedelta``) and
:func:`ttl_to_seconds` turns them into whole seconds.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

from simplecache.core.errors import InvalidArgument

TTL = int | timedelta | None


@dataclass(slots=True)
class ExpiringEntry:
    """A cached value and its absolute expiry (epoch seconds, ``None`` = never)."""

    value: Any
    expires_at: float | None = None

    def is_expired(self, now: float) -> bool:
        """Return True once ``now`` has reached ``expires_at``."""
        return self.expires_at is not None and self.expires_at <= now

    @classmethod
    def create(cls, value: Any, ttl_seconds: int | None, now: float) -> ExpiringEntry:
        """Build an entry; a ``None`` or ``0`` TTL never expires."""
        if not ttl_seconds:
            return cls(value, None)
        return cls(value, now + ttl_seconds)


def _whole_seconds(seconds: float) -> int:
    return math.ceil(seconds) if seconds > 0 else math.floor(seconds)


def ttl_to_seconds(ttl: TTL, *, reference: datetime | None = None) -> int | None:
    """
    Normalize a TTL to whole seconds.

    Durations are measured against a reference instant (default: now, UTC),
    so calendar-relative durations such as ``relativedelta(months=1)``
    resolve to the actual number of seconds from that instant.
    Fractions round away from zero, so a sub-second TTL still expires
    rather than collapsing to ``0`` (never).

    Args:
        ttl: ``None``, a number of seconds, or a duration that can be
            added to a ``datetime``.
        reference: Instant the duration is measured from.

    Returns:
        ``None`` when ``ttl`` is ``None``, otherwise an integer.

    Raises:
        InvalidArgument: If ``ttl`` is none of the supported shapes.
    """
    if ttl is None:
        return None
    if isinstance(ttl, bool):
        raise InvalidArgument(f"TTL must be seconds or a duration, got {ttl!r}")
    if isinstance(ttl, (int, float)):
        return _whole_seconds(ttl)

    reference = reference or datetime.now(timezone.utc)
    try:
        end = reference + ttl
    except TypeError as exc:
        raise InvalidArgument(
            f"TTL must be seconds or a duration, got {type(ttl).__name__}", cause=exc
        ) from exc
    return _whole_seconds((end - reference).total_seconds())


__all__ = [
    "TTL",
    "ExpiringEntry",
    "ttl_to_seconds",
]
