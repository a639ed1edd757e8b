"""Tests for the cache module."""

from toka.cache import (
    CacheBackend,
    CacheKeyComponents,
    MemoryCache,
    canonicalOptions,
    computeCacheKey,
)


class TestMemoryCache:
    """Tests for MemoryCache."""

    def test_set_and_get(self, cache):
        """Test storing and retrieving values of different types."""
        cache.set("key1", "value1")
        cache.set("key2", 42)
        cache.set("key3", {"name": "test", "value": 123})

        assert cache.get("key1") == "value1"
        assert cache.get("key2") == 42
        assert cache.get("key3") == {"name": "test", "value": 123}

    def test_get_missing_returns_none(self, cache):
        """Test a missing key reads as None."""
        assert cache.get("nonexistent") is None

    def test_set_overwrites(self, cache):
        """Test set replaces an existing entry."""
        cache.set("key", "old", ttl=100)
        cache.set("key", "new")

        assert cache.get("key") == "new"

    def test_entry_expires_after_ttl(self, cache, clock):
        """Test an entry disappears once its TTL has elapsed."""
        cache.set("key1", "value1", ttl=100)
        assert cache.get("key1") == "value1"

        clock.advance(150)

        assert cache.get("key1") is None
        assert cache.has("key1") is False

    def test_entry_live_until_expiry_instant(self, cache, clock):
        """Test an entry is still readable at exactly its expiry instant."""
        cache.set("key1", "value1", ttl=100)
        clock.advance(100)

        assert cache.get("key1") == "value1"

    def test_no_ttl_never_expires(self, cache, clock):
        """Test entries without TTL survive any amount of time."""
        cache.set("key1", "value1")
        clock.advance(365 * 24 * 60 * 60 * 1000)

        assert cache.get("key1") == "value1"
        assert cache.has("key1")

    def test_has(self, cache, clock):
        """Test has() for live, missing and expired keys."""
        cache.set("live", "v", ttl=200)
        cache.set("short", "v", ttl=50)

        clock.advance(100)

        assert cache.has("live")
        assert not cache.has("short")
        assert not cache.has("nonexistent")

    def test_expired_read_purges_entry(self, cache, clock):
        """Test reading an expired key removes it."""
        cache.set("key1", "value1", ttl=10)
        clock.advance(20)

        cache.get("key1")

        assert cache.cleanup() == 0

    def test_delete(self, cache):
        """Test delete reports whether a key was removed."""
        cache.set("key1", "value1")

        assert cache.delete("key1") is True
        assert cache.get("key1") is None
        assert cache.delete("nonexistent") is False

    def test_delete_expired_returns_false(self, cache, clock):
        """Test an expired entry counts as absent for delete."""
        cache.set("key1", "value1", ttl=10)
        clock.advance(20)

        assert cache.delete("key1") is False

    def test_clear(self, cache):
        """Test clear removes everything."""
        cache.set("key1", "value1")
        cache.set("key2", "value2")
        cache.set("key3", "value3")

        cache.clear()

        assert cache.size() == 0
        assert cache.get("key1") is None

    def test_size_ignores_expired(self, cache, clock):
        """Test size counts only live entries."""
        assert cache.size() == 0

        cache.set("key1", "value1", ttl=100)
        cache.set("key2", "value2")
        assert cache.size() == 2

        clock.advance(150)

        assert cache.size() == 1
        assert len(cache) == 1

    def test_keys_ignores_expired(self, cache, clock):
        """Test keys lists only live entries in insertion order."""
        cache.set("a", 1)
        cache.set("b", 2, ttl=100)
        cache.set("c", 3)

        clock.advance(150)

        assert cache.keys() == ["a", "c"]

    def test_cleanup_purges_expired(self, cache, clock):
        """Test cleanup removes expired entries and reports how many."""
        cache.set("a", 1, ttl=100)
        cache.set("b", 2, ttl=100)
        cache.set("c", 3, ttl=1000)
        cache.set("d", 4)

        clock.advance(500)

        assert cache.cleanup() == 2
        assert cache.keys() == ["c", "d"]

    def test_contains(self, cache, clock):
        """Test the in operator follows has()."""
        cache.set("key1", "value1", ttl=10)
        assert "key1" in cache

        clock.advance(20)
        assert "key1" not in cache
        assert 42 not in cache

    def test_satisfies_backend_protocol(self):
        """Test MemoryCache is usable wherever a CacheBackend is expected."""
        assert isinstance(MemoryCache(), CacheBackend)


class TestCacheKey:
    """Tests for cache key computation."""

    def test_key_is_deterministic(self):
        """Test identical requests produce identical keys."""
        key1 = computeCacheKey(CacheKeyComponents("gpt-4", "Hello", {"temperature": 0.5}))
        key2 = computeCacheKey(CacheKeyComponents("gpt-4", "Hello", {"temperature": 0.5}))
        assert key1 == key2

    def test_each_component_changes_key(self):
        """Test changing any component changes the key."""
        base = computeCacheKey(CacheKeyComponents("gpt-4", "Hello", {"temperature": 0.5}))

        assert computeCacheKey(CacheKeyComponents("gpt-3.5-turbo", "Hello", {"temperature": 0.5})) != base
        assert computeCacheKey(CacheKeyComponents("gpt-4", "Hello!", {"temperature": 0.5})) != base
        assert computeCacheKey(CacheKeyComponents("gpt-4", "Hello", {"temperature": 0.7})) != base
        assert computeCacheKey(CacheKeyComponents("gpt-4", "Hello")) != base

    def test_components_do_not_bleed_into_each_other(self):
        """Test separators inside components cannot cause collisions."""
        key1 = computeCacheKey(CacheKeyComponents("a:b", "c"))
        key2 = computeCacheKey(CacheKeyComponents("a", "b:c"))
        assert key1 != key2

    def test_empty_options_same_as_none(self):
        """Test empty options leave the key as model plus prompt."""
        assert computeCacheKey(CacheKeyComponents("gpt-4", "Hi", {})) == computeCacheKey(
            CacheKeyComponents("gpt-4", "Hi")
        )

    def test_option_order_is_canonical(self):
        """Test options are serialized with sorted keys."""
        assert canonicalOptions({"b": 1, "a": 2}) == canonicalOptions({"a": 2, "b": 1})
        assert canonicalOptions({"b": 1, "a": 2}) == '{"a":2,"b":1}'
        assert canonicalOptions({}) is None
        assert canonicalOptions(None) is None

    def test_key_is_hex_string(self):
        """Test the key is a 64-bit hash in hex."""
        key = computeCacheKey(CacheKeyComponents("gpt-4", "Hello"))
        assert len(key) == 16
        int(key, 16)
