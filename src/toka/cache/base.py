"""Cache backend protocol.

The orchestrator only needs get/set/has, so any store exposing those with
expiry-aware semantics can stand in for the in-memory cache.
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class CacheBackend(Protocol):
    """Minimal key/value store used by the orchestrator.

    ``get`` returns None for missing or expired keys, ``set`` overwrites
    unconditionally with an optional TTL in milliseconds, and ``has``
    reports whether a live entry exists.
    """

    def get(self, key: str) -> Any | None: ...

    def set(self, key: str, value: Any, ttl: float | None = None) -> None: ...

    def has(self, key: str) -> bool: ...
