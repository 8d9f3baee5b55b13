"""
Tests for simplecache.core.memory module.

Covers:
- LocalMemoryCache: get/set/delete/has/clear, lazy TTL expiry
- Copy isolation of mutable values
- Batch operations and argument validation
- Session-scoped stores sharing a host mapping
"""

import threading
from dataclasses import dataclass, field
from datetime import timedelta

import pytest

from simplecache import InvalidArgument, LocalMemoryCache, SimpleCache


@dataclass
class Basket:
    items: list[str] = field(default_factory=list)


class TestLocalMemoryCache:
    """Single-key operations."""

    def test_miss_returns_default(self):
        cache = LocalMemoryCache()
        assert cache.get("missing", "D") == "D"
        assert cache.get("missing") is None

    def test_round_trip(self):
        cache = LocalMemoryCache()
        assert cache.set("k", "v") is True
        assert cache.get("k", None) == "v"

    def test_overwrite(self):
        cache = LocalMemoryCache()
        cache.set("k", "v1")
        cache.set("k", "v2")
        assert cache.get("k") == "v2"
        assert len(cache) == 1

    def test_falsy_values_are_hits(self):
        cache = LocalMemoryCache()
        cache.set("zero", 0)
        cache.set("none", None)
        assert cache.get("zero", "D") == 0
        assert cache.get("none", "D") is None

    def test_delete(self):
        cache = LocalMemoryCache()
        cache.set("k", "v")
        assert cache.delete("k") is True
        assert not cache.has("k")
        assert cache.get("k", "D") == "D"

    def test_delete_missing_is_not_an_error(self):
        assert LocalMemoryCache().delete("nope") is True

    def test_has(self):
        cache = LocalMemoryCache()
        assert cache.has("k") is False
        cache.set("k", "v")
        assert cache.has("k") is True
        assert "k" in cache

    def test_clear(self):
        cache = LocalMemoryCache()
        cache.set("a", 1)
        cache.set("b", 2)
        assert cache.clear() is True
        assert not cache.has("a")
        assert not cache.has("b")
        assert len(cache) == 0

    def test_delete_all(self):
        cache = LocalMemoryCache()
        cache.set("a", 1)
        assert cache.delete_all() is True
        assert not cache.has("a")

    def test_satisfies_protocol(self):
        cache: SimpleCache = LocalMemoryCache()
        assert isinstance(cache, SimpleCache)


class TestExpiry:
    """Lazy TTL expiration."""

    def test_no_ttl_never_expires(self, clock):
        cache = LocalMemoryCache(clock=clock)
        cache.set("k", "v")
        clock.advance(10 * 365 * 86400)
        assert cache.get("k") == "v"

    def test_zero_ttl_never_expires(self, clock):
        cache = LocalMemoryCache(clock=clock)
        cache.set("k", "v", 0)
        clock.advance(10**6)
        assert cache.get("k") == "v"

    def test_value_visible_before_expiry(self, clock):
        cache = LocalMemoryCache(clock=clock)
        cache.set("k", "v", 10)
        clock.advance(9)
        assert cache.get("k", "D") == "v"

    def test_expires_at_deadline(self, clock):
        cache = LocalMemoryCache(clock=clock)
        cache.set("k", "v", 10)
        clock.advance(10)
        assert cache.get("k", "D") == "D"

    def test_expired_entry_purged_on_get(self, clock):
        cache = LocalMemoryCache(clock=clock)
        cache.set("k", "v", 1)
        clock.advance(2)
        assert cache.get("k", "D") == "D"
        assert cache.has("k") is False

    def test_has_ignores_expiry_until_get(self, clock):
        """has() reports physical presence: an expired entry counts until a get purges it."""
        cache = LocalMemoryCache(clock=clock)
        cache.set("k", "v", 1)
        clock.advance(2)
        assert cache.has("k") is True
        cache.get("k")
        assert cache.has("k") is False

    def test_timedelta_ttl(self, clock):
        cache = LocalMemoryCache(clock=clock)
        cache.set("k", "v", timedelta(minutes=1))
        clock.advance(59)
        assert cache.get("k") == "v"
        clock.advance(1)
        assert cache.get("k") is None

    def test_negative_ttl_is_immediately_expired(self, clock):
        cache = LocalMemoryCache(clock=clock)
        cache.set("k", "v", -1)
        assert cache.get("k", "D") == "D"

    def test_sub_second_ttl_expires(self, clock):
        cache = LocalMemoryCache(clock=clock)
        cache.set("k", "v", 0.5)
        assert cache.get("k") == "v"
        clock.advance(1)
        assert cache.get("k", "D") == "D"

    def test_set_resets_ttl(self, clock):
        cache = LocalMemoryCache(clock=clock)
        cache.set("k", "v", 5)
        clock.advance(4)
        cache.set("k", "v")
        clock.advance(100)
        assert cache.get("k") == "v"

    def test_real_clock(self):
        cache = LocalMemoryCache()
        cache.set("k", "v", 3600)
        assert cache.get("k") == "v"


class TestCopyIsolation:
    """Cached state cannot be mutated through caller references."""

    def test_mutating_retrieved_value_does_not_change_cache(self):
        cache = LocalMemoryCache()
        cache.set("basket", Basket(["apple"]))

        first = cache.get("basket")
        first.items.append("pear")

        assert cache.get("basket") == Basket(["apple"])

    def test_mutating_original_after_set_does_not_change_cache(self):
        cache = LocalMemoryCache()
        original = {"rows": [1, 2]}
        cache.set("report", original)

        original["rows"].append(3)

        assert cache.get("report") == {"rows": [1, 2]}

    def test_each_get_returns_a_distinct_object(self):
        cache = LocalMemoryCache()
        cache.set("list", [1, 2, 3])
        assert cache.get("list") is not cache.get("list")

    def test_uncopyable_value_raises_invalid_argument(self):
        class Guarded:
            def __init__(self):
                self.lock = threading.Lock()

        cache = LocalMemoryCache()
        with pytest.raises(InvalidArgument, match="cannot be copied") as exc_info:
            cache.set("k", Guarded())
        assert exc_info.value.context["type"] == "Guarded"
        assert isinstance(exc_info.value.cause, TypeError)
        assert not cache.has("k")

    def test_immutable_values_returned_as_is(self):
        cache = LocalMemoryCache()
        value = "a string"
        cache.set("s", value)
        assert cache.get("s") is value


class TestBatchOperations:
    def test_bulk_consistency(self):
        cache = LocalMemoryCache()
        assert cache.set_multiple({"a": 1, "b": 2}) is True
        assert cache.get_multiple(["a", "b", "c"], 0) == {"a": 1, "b": 2, "c": 0}

    def test_get_multiple_preserves_order(self):
        cache = LocalMemoryCache()
        cache.set_multiple({"a": 1, "b": 2})
        assert list(cache.get_multiple(["b", "x", "a"])) == ["b", "x", "a"]

    def test_get_multiple_accepts_generators(self):
        cache = LocalMemoryCache()
        cache.set("a", 1)
        assert cache.get_multiple(k for k in ["a"]) == {"a": 1}

    def test_get_multiple_empty(self):
        assert LocalMemoryCache().get_multiple([]) == {}

    def test_get_multiple_purges_expired(self, clock):
        cache = LocalMemoryCache(clock=clock)
        cache.set("old", 1, 1)
        cache.set("new", 2)
        clock.advance(5)
        assert cache.get_multiple(["old", "new"], "D") == {"old": "D", "new": 2}
        assert not cache.has("old")

    def test_set_multiple_with_ttl(self, clock):
        cache = LocalMemoryCache(clock=clock)
        cache.set_multiple({"a": 1, "b": 2}, ttl=10)
        clock.advance(10)
        assert cache.get_multiple(["a", "b"]) == {"a": None, "b": None}

    def test_set_multiple_accepts_pairs(self):
        cache = LocalMemoryCache()
        cache.set_multiple([("a", 1), ("b", 2)])
        assert cache.get("b") == 2

    def test_set_multiple_two_char_string_is_not_a_pair(self):
        cache = LocalMemoryCache()
        with pytest.raises(InvalidArgument, match=r"Expected \(key, value\) pairs") as exc_info:
            cache.set_multiple(["ab"])
        assert exc_info.value.context["received"] == "str"
        assert not cache.has("a")

    def test_set_multiple_malformed_pair_stores_nothing(self):
        cache = LocalMemoryCache()
        with pytest.raises(InvalidArgument):
            cache.set_multiple([("a", 1), ("b", 2, 3)])
        assert len(cache) == 0

    def test_delete_multiple(self):
        cache = LocalMemoryCache()
        cache.set_multiple({"a": 1, "b": 2, "c": 3})
        assert cache.delete_multiple(["a", "c", "missing"]) is True
        assert cache.get_multiple(["a", "b", "c"]) == {"a": None, "b": 2, "c": None}

    @pytest.mark.parametrize("bad", [42, None, object()])
    def test_get_multiple_rejects_non_iterable(self, bad):
        with pytest.raises(InvalidArgument, match="Cannot iterate over keys"):
            LocalMemoryCache().get_multiple(bad)

    def test_get_multiple_rejects_plain_string(self):
        with pytest.raises(InvalidArgument):
            LocalMemoryCache().get_multiple("abc")

    def test_delete_multiple_rejects_non_iterable(self):
        with pytest.raises(InvalidArgument):
            LocalMemoryCache().delete_multiple(42)

    def test_set_multiple_rejects_non_iterable(self):
        with pytest.raises(InvalidArgument, match="Cannot iterate over values"):
            LocalMemoryCache().set_multiple(42)

    def test_invalid_argument_is_a_value_error(self):
        with pytest.raises(ValueError):
            LocalMemoryCache().get_multiple(1)


class TestSessionScope:
    """Stores attached to the same session mapping share entries."""

    def test_entries_live_in_session_slot(self):
        session: dict = {}
        cache = LocalMemoryCache(session)
        cache.set("k", "v")
        assert "LOCAL_MEMORY_CACHE" in session
        assert "k" in session["LOCAL_MEMORY_CACHE"]
        assert cache.session_scoped is True

    def test_caches_on_same_session_share_state(self):
        session: dict = {}
        LocalMemoryCache(session).set("k", "v")
        assert LocalMemoryCache(session).get("k") == "v"

    def test_existing_slot_is_reused(self):
        session: dict = {}
        first = LocalMemoryCache(session)
        first.set("k", "v")
        second = LocalMemoryCache(session)
        second.set("other", 1)
        assert first.get("other") == 1

    def test_clear_empties_shared_mapping(self):
        session: dict = {}
        first = LocalMemoryCache(session)
        second = LocalMemoryCache(session)
        first.set("k", "v")
        second.clear()
        assert not first.has("k")
        assert session["LOCAL_MEMORY_CACHE"] == {}

    def test_different_sessions_are_isolated(self):
        LocalMemoryCache({}).set("k", "v")
        assert LocalMemoryCache({}).get("k") is None

    def test_process_scope_is_private(self):
        LocalMemoryCache().set("k", "v")
        assert LocalMemoryCache().get("k") is None
        assert LocalMemoryCache().session_scoped is False

    def test_custom_slot(self):
        session: dict = {}
        LocalMemoryCache(session, slot="my_cache").set("k", "v")
        assert "my_cache" in session

    def test_slot_from_settings(self, monkeypatch):
        monkeypatch.setenv("SIMPLECACHE_SESSION_SLOT", "from_env")
        session: dict = {}
        LocalMemoryCache(session).set("k", "v")
        assert "from_env" in session
