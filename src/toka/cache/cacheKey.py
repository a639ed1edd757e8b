"""Cache key computation using xxHash.

A key identifies an exact request: the requested model, the prompt and,
when present, the request options. The components are serialized as a
JSON array before hashing so that no choice of separators inside a
component can make two different requests collide.
"""

import json
from dataclasses import dataclass, field
from typing import Any

import xxhash


@dataclass
class CacheKeyComponents:
    """Components that identify a cacheable request.

    Attributes:
        model: Model the caller requested (not the one that served it).
        prompt: Prompt text, used verbatim.
        options: Extra request options; empty means "no options".
    """

    model: str
    prompt: str
    options: dict[str, Any] = field(default_factory=dict)


def canonicalOptions(options: dict[str, Any] | None) -> str | None:
    """Serialize options deterministically.

    Args:
        options: Request options.

    Returns:
        Sorted-key compact JSON, or None for missing or empty options.
    """
    if not options:
        return None
    return json.dumps(options, sort_keys=True, separators=(",", ":"), default=str)


def computeCacheKey(components: CacheKeyComponents) -> str:
    """Compute the cache key for a request.

    Args:
        components: The key components.

    Returns:
        Hex string of the xxh64 hash of the components.

    Example:
        >>> a = computeCacheKey(CacheKeyComponents("gpt-4", "Hello"))
        >>> b = computeCacheKey(CacheKeyComponents("gpt-4", "Hello", {"temperature": 0}))
        >>> a != b
        True
    """
    parts: list[str] = [components.model, components.prompt]
    options = canonicalOptions(components.options)
    if options is not None:
        parts.append(options)

    combined = json.dumps(parts, ensure_ascii=False)
    return xxhash.xxh64(combined.encode("utf-8")).hexdigest()
