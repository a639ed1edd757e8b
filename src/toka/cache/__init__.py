"""Response caching for toka.

Provides the cache backend protocol, the in-memory TTL cache and
request cache keys.
"""

from toka.cache.base import CacheBackend
from toka.cache.cacheKey import CacheKeyComponents, canonicalOptions, computeCacheKey
from toka.cache.memoryCache import CacheEntry, MemoryCache

__all__ = [
    "CacheBackend",
    "CacheEntry",
    "MemoryCache",
    "CacheKeyComponents",
    "canonicalOptions",
    "computeCacheKey",
]
