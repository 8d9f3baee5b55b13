#!/usr/bin/env python3
"""Cache Backends — one contract, a local store and a native facility.

================================================================================
KEY DESIGN: SimpleCache PROTOCOL
================================================================================

Both backends share the same interface::

    class SimpleCache(Protocol):
        def get(self, key, default=None): ...
        def set(self, key, value, ttl=None) -> bool: ...
        def delete(self, key) -> bool: ...
        def has(self, key) -> bool: ...
        ...plus clear() and the *_multiple batch variants

So calling code does not care which one it gets::

    def load_report(cache: SimpleCache, year: int):
        key = cache.create_key("report", year)
        ...

    # Request / session scope:  LocalMemoryCache() / LocalMemoryCache(session)
    # Shared across processes:  ExternalCache()  (Redis facility)


================================================================================
BEST PRACTICES
================================================================================

1. **Build keys with create_key** so the same arguments give the same key::

       cache.create_key("report", 2025, ["Q4", "eu"])   # 'report~2025~Q4~eu'

2. **Keep ``{}()/\\@:`` out of keys** — the external cache rejects them.

3. **Use get() with a sentinel, not has()** — has() ignores expiration on the
   local store and races with other processes on the external one.

Run this example:
    python examples/cache_backends.py
"""


def example_local_cache():
    """Process-scoped and session-scoped local caching."""
    from simplecache import LocalMemoryCache

    print("=== LocalMemoryCache Example ===\n")

    cache = LocalMemoryCache()
    key = cache.create_key("api", "products", 123)
    cache.set(key, {"name": "Widget", "price": 9.99})
    print(f"{key} → {cache.get(key)}")

    # Callers get copies: mutating the result leaves the cache untouched
    product = cache.get(key)
    product["price"] = 0
    print(f"After caller mutation: {cache.get(key)}")

    # TTL-based expiry (fast for demo)
    cache.set("session~abc", {"user_id": 42}, ttl=2)
    import time
    time.sleep(2.1)
    print(f"has() before get: {cache.has('session~abc')}")   # → True (not purged yet)
    print(f"get() after 2s:  {cache.get('session~abc', 'expired')}")
    print(f"has() after get:  {cache.has('session~abc')}")    # → False

    # Session scope: two caches on the same session mapping share entries
    session: dict = {}
    LocalMemoryCache(session).set("cart~7", ["apple"])
    print(f"\nShared through session: {LocalMemoryCache(session).get('cart~7')}")


def example_external_cache():
    """Caching in Redis through ExternalCache."""
    from simplecache import CacheError, ExternalCache, RedisFacility

    print("\n=== ExternalCache Example ===\n")

    try:
        cache = ExternalCache(RedisFacility("redis://localhost:6379/0"), ttl=300)
        cache.set_multiple({"feed~1": {"title": "Breaking News"}, "feed~2": {"title": "Update"}})
        print(cache.get_multiple(["feed~1", "feed~2", "feed~3"], default={}))
        cache.delete_multiple(["feed~1", "feed~2"])

        try:
            cache.set("feed:1", "x")
        except CacheError as exc:
            print(f"Rejected: {exc}")

        print("\nRedis facility working! ✓")

    except Exception as exc:
        print(f"⚠️  Redis not available: {exc}")
        print("Start Redis with: docker run -p 6379:6379 redis")


if __name__ == "__main__":
    example_local_cache()
    example_external_cache()
