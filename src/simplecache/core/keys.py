"""
Deterministic cache-key derivation.

Keys are built by flattening the arguments depth-first and joining the
string form of every leaf with ``~``. Lists, tuples and mapping values are
treated as containers; everything else is a leaf.

Examples:
    >>> create_key("user", 42)
    'user~42'
    >>> create_key([1, [2, 3]], 4) == create_key(1, 2, 3, 4)
    True
    >>> create_key_array(["report", "2025", "Q4"])
    'report~2025~Q4'

Guardrails:
    ❌ DON'T: Rely on keys being unique when arguments can contain ``~``
    ✅ DO: Pre-hash free-form text before passing it in

    The delimiter is never escaped, so ``create_key("a~b")`` and
    ``create_key("a", "b")`` produce the same key.

Tags:
    cache-key, hashing, deterministic, simplecache
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Any

KEY_DELIMITER = "~"


def _flatten(values: Iterable[Any]) -> Iterator[Any]:
    for value in values:
        if isinstance(value, Mapping):
            yield from _flatten(value.values())
        elif isinstance(value, (list, tuple)):
            yield from _flatten(value)
        else:
            yield value


def create_key(*args: Any) -> str:
    """
    Build a key from arbitrarily nested arguments.

    Args:
        *args: Scalars or nested lists/tuples/mappings of scalars.

    Returns:
        Leaf values joined with ``~``, in depth-first left-to-right order.
    """
    return KEY_DELIMITER.join(str(value) for value in _flatten(args))


def create_key_array(values: Iterable[Any]) -> str:
    """Join an already flat sequence of values with ``~`` (no recursion)."""
    return KEY_DELIMITER.join(str(value) for value in values)


__all__ = [
    "KEY_DELIMITER",
    "create_key",
    "create_key_array",
]
