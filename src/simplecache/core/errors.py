"""
Structured error types for simplecache.

Every error raised by a cache backend extends :class:`CacheError`, which
carries a category, free-form context and an optional chained cause. The
hierarchy is deliberately small: a cache has very few ways to fail.

Manifesto:
    - **Typed errors:** Callers catch ``InvalidArgument``, not ``Exception``
    - **Raise at detection:** No retries, no deferred reporting
    - **Rich context:** Errors carry the offending key/character for logs
    - **Error chaining:** Wrapped exceptions are preserved as ``cause``

Architecture:
    ::

        ┌──────────────────────────────────────────────────────────┐
        │                       CacheError                          │
        │              (category, context, cause)                   │
        ├──────────────────────────────────────────────────────────┤
        │                                                           │
        │  InvalidArgument               BackendUnavailableError    │
        │  (VALIDATION, also ValueError)  (CONFIG)                  │
        │                                                           │
        └──────────────────────────────────────────────────────────┘

Examples:
    >>> error = InvalidArgument("Invalid character found in the key: @", key="a@b", character="@")
    >>> error.category
    <ErrorCategory.VALIDATION: 'VALIDATION'>
    >>> error.to_dict()["character"]
    '@'

Tags:
    error-handling, exception-hierarchy, error-context, simplecache

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Standard error categories for classification and routing."""

    VALIDATION = "VALIDATION"     # Bad keys, non-iterable batch input
    CONFIG = "CONFIG"             # Missing facility, invalid settings
    STORAGE = "STORAGE"           # Facility-level failures
    INTERNAL = "INTERNAL"         # Bugs, unexpected state


class CacheError(Exception):
    """
    Base exception for all simplecache errors.

    Subclasses set ``default_category`` to classify themselves.

    Examples:
        >>> error = CacheError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>

        >>> error = CacheError("Fetch failed").with_context(key="user~1")
        >>> error.context["key"]
        'user~1'
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context: dict[str, Any] = dict(context or {})
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> CacheError:
        """
        Add context to this error (fluent API).

        Usage:
            raise CacheError("Failed").with_context(key="a~b", backend="redis")
        """
        self.context.update(kwargs)
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        if self.context:
            result["context"] = dict(self.context)
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


class InvalidArgument(CacheError, ValueError):
    """
    An argument handed to a cache operation is unusable.

    Raised when a keys/values argument that must be iterable is not, or when
    a key contains a character the backend reserves. Never retryable.
    """

    default_category = ErrorCategory.VALIDATION

    def __init__(
        self,
        message: str = "Invalid argument",
        *,
        key: str | None = None,
        character: str | None = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.key = key
        self.character = character

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.key is not None:
            result["key"] = self.key
        if self.character is not None:
            result["character"] = self.character
        return result


class BackendUnavailableError(CacheError):
    """No native cache facility could be obtained."""

    default_category = ErrorCategory.CONFIG


__all__ = [
    "ErrorCategory",
    "CacheError",
    "InvalidArgument",
    "BackendUnavailableError",
]
