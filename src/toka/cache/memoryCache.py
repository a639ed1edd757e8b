"""In-memory response cache with per-entry TTL.

An entry is expired once the clock passes its expiry instant. Every read
path treats expired entries as absent and purges the ones it finds, so
``size()`` and ``keys()`` always agree with ``has()``.
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable

logger = logging.getLogger("toka.cache")


@dataclass(frozen=True)
class CacheEntry:
    """A cached value.

    Attributes:
        value: The stored value.
        expiresAt: Clock instant (seconds) after which the entry is expired,
            or None for never.
    """

    value: Any
    expiresAt: float | None = None

    def isExpired(self, now: float) -> bool:
        return self.expiresAt is not None and now > self.expiresAt


class MemoryCache:
    """Dictionary-backed cache with optional expiry per entry.

    Not thread-safe; callers that share an instance across threads must
    serialize access themselves.

    Args:
        clock: Monotonic clock in seconds (injectable for tests).
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._entries: dict[str, CacheEntry] = {}
        self._clock = clock

    def _liveEntry(self, key: str) -> CacheEntry | None:
        entry = self._entries.get(key)
        if entry is None:
            return None

        if entry.isExpired(self._clock()):
            del self._entries[key]
            logger.debug(f"Expired: {key}")
            return None

        return entry

    def get(self, key: str) -> Any | None:
        """Get a value from the cache.

        Args:
            key: The cache key.

        Returns:
            The cached value, or None if missing or expired.
        """
        entry = self._liveEntry(key)
        if entry is None:
            logger.debug(f"Cache miss: {key}")
            return None

        logger.debug(f"Cache hit: {key}")
        return entry.value

    def set(self, key: str, value: Any, ttl: float | None = None) -> None:
        """Store a value, replacing any existing entry.

        Args:
            key: The cache key.
            value: The value to store.
            ttl: Time-to-live in milliseconds (None never expires).
        """
        expiresAt = self._clock() + ttl / 1000 if ttl is not None else None
        self._entries[key] = CacheEntry(value=value, expiresAt=expiresAt)

    def has(self, key: str) -> bool:
        """Check if a live entry exists for a key."""
        return self._liveEntry(key) is not None

    def delete(self, key: str) -> bool:
        """Delete a key.

        Args:
            key: The cache key.

        Returns:
            True if a live entry was removed.
        """
        if self._liveEntry(key) is None:
            return False
        del self._entries[key]
        return True

    def clear(self) -> None:
        """Remove every entry."""
        self._entries.clear()
        logger.info("Cache cleared")

    def cleanup(self) -> int:
        """Purge every expired entry now.

        Returns:
            Number of entries purged.
        """
        now = self._clock()
        expired = [key for key, entry in self._entries.items() if entry.isExpired(now)]
        for key in expired:
            del self._entries[key]

        if expired:
            logger.debug(f"Purged {len(expired)} expired entries")
        return len(expired)

    def size(self) -> int:
        """Get the number of live entries."""
        self.cleanup()
        return len(self._entries)

    def keys(self) -> list[str]:
        """Get all live keys in insertion order."""
        self.cleanup()
        return list(self._entries)

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.has(key)
