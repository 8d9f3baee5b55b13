"""
Shared pytest fixtures and configuration for simplecache tests.

This module provides:
- A controllable clock for expiration tests
- An in-memory stand-in for the native cache facility
- Settings cache isolation between tests

Usage:
    Fixtures are auto-discovered by pytest. Use them as function arguments.

    def test_expiry(clock):
        cache = LocalMemoryCache(clock=clock)
        ...
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Generator

import pytest

from simplecache.core.settings import clear_settings_cache


# =============================================================================
# Test Markers Configuration
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Mark every test without an explicit marker as a unit test."""
    for item in items:
        markers = {mark.name for mark in item.iter_markers()}
        if not markers.intersection({"unit", "integration"}):
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Fakes
# =============================================================================


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeFacility:
    """Dict-backed NativeCacheFacility that records the TTLs it receives."""

    def __init__(self) -> None:
        self.data: dict[str, Any] = {}
        self.ttls: dict[str, int] = {}
        self.calls: list[str] = []

    def fetch(self, key: str) -> tuple[Any, bool]:
        self.calls.append("fetch")
        if key in self.data:
            return self.data[key], True
        return None, False

    def store(self, key: str, value: Any, ttl_seconds: int) -> bool:
        self.calls.append("store")
        self.data[key] = value
        self.ttls[key] = ttl_seconds
        return True

    def delete(self, key: str) -> bool:
        self.calls.append("delete")
        self.data.pop(key, None)
        return True

    def clear_all(self) -> bool:
        self.calls.append("clear_all")
        self.data.clear()
        self.ttls.clear()
        return True

    def exists(self, key: str) -> bool:
        self.calls.append("exists")
        return key in self.data

    def fetch_many(self, keys: list[str]) -> dict[str, Any]:
        self.calls.append("fetch_many")
        return {key: self.data[key] for key in keys if key in self.data}

    def store_many(self, values: dict[str, Any], ttl_seconds: int) -> bool:
        self.calls.append("store_many")
        for key, value in values.items():
            self.data[key] = value
            self.ttls[key] = ttl_seconds
        return True

    def delete_many(self, keys: list[str]) -> bool:
        self.calls.append("delete_many")
        for key in keys:
            self.data.pop(key, None)
        return True


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def facility() -> FakeFacility:
    return FakeFacility()


# =============================================================================
# Settings isolation
# =============================================================================


@pytest.fixture(autouse=True)
def isolated_settings(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> Generator[None, None, None]:
    """Run each test with a fresh settings cache and no stray .env file."""
    monkeypatch.chdir(tmp_path)
    clear_settings_cache()
    yield
    clear_settings_cache()
