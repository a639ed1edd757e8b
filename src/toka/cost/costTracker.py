"""Usage and spend tracking for orchestrated requests.

Tracks estimated tokens, costs, cache hit rates and model fallbacks to
give visibility into what a client is spending.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

logger = logging.getLogger("toka.cost")


@dataclass
class RequestCost:
    """Cost data for a single request.

    Attributes:
        timestamp: When the request completed.
        requestedModel: Model the caller asked for.
        modelUsed: Model that actually served the request.
        tokens: Estimated tokens.
        cost: Estimated cost in USD.
        cacheHit: Whether the response came from the cache.
    """

    timestamp: datetime
    requestedModel: str
    modelUsed: str
    tokens: int
    cost: float
    cacheHit: bool = False

    @property
    def isFallback(self) -> bool:
        return self.modelUsed != self.requestedModel


@dataclass
class UsageStats:
    """Aggregated usage for a tracker.

    Attributes:
        totalRequests: Number of completed requests.
        totalTokens: Estimated tokens of requests that hit the provider.
        totalCost: Estimated spend of requests that hit the provider.
        cacheHits: Requests served from cache.
        cacheMisses: Requests sent to the provider.
        fallbacks: Requests served by a cheaper model than requested.
        costByModel: Estimated spend per model.
        startTime: When tracking started.
        requests: Individual request records.
    """

    totalRequests: int = 0
    totalTokens: int = 0
    totalCost: float = 0.0
    cacheHits: int = 0
    cacheMisses: int = 0
    fallbacks: int = 0
    costByModel: dict[str, float] = field(default_factory=dict)
    startTime: datetime = field(default_factory=datetime.now)
    requests: list[RequestCost] = field(default_factory=list)


class CostTracker:
    """Tracks estimated spend and cache efficiency across requests."""

    def __init__(self):
        self._stats = UsageStats()

    def recordRequest(
        self,
        requestedModel: str,
        modelUsed: str,
        tokens: int,
        cost: float,
        cacheHit: bool = False,
    ) -> RequestCost:
        """Record a completed request.

        Cache hits count towards hit rate but not towards spend, since no
        provider call was made for them.

        Args:
            requestedModel: Model the caller asked for.
            modelUsed: Model that served the response.
            tokens: Estimated tokens.
            cost: Estimated cost in USD.
            cacheHit: Whether the response came from the cache.

        Returns:
            The recorded request cost.
        """
        record = RequestCost(
            timestamp=datetime.now(),
            requestedModel=requestedModel,
            modelUsed=modelUsed,
            tokens=tokens,
            cost=cost,
            cacheHit=cacheHit,
        )

        self._stats.totalRequests += 1
        if cacheHit:
            self._stats.cacheHits += 1
        else:
            self._stats.cacheMisses += 1
            self._stats.totalTokens += tokens
            self._stats.totalCost += cost
            self._stats.costByModel[modelUsed] = (
                self._stats.costByModel.get(modelUsed, 0.0) + cost
            )
            if record.isFallback:
                self._stats.fallbacks += 1

        self._stats.requests.append(record)

        logger.debug(
            f"Request: model={modelUsed}, cost=${cost:.4f}, tokens={tokens}, cacheHit={cacheHit}"
        )

        return record

    def getStats(self) -> dict[str, Any]:
        """Get current usage statistics.

        Returns:
            Dictionary with usage stats.
        """
        totalRequests = self._stats.cacheHits + self._stats.cacheMisses
        cacheHitRate = self._stats.cacheHits / totalRequests if totalRequests > 0 else 0.0

        return {
            "totalRequests": self._stats.totalRequests,
            "totalTokens": self._stats.totalTokens,
            "totalCost": round(self._stats.totalCost, 4),
            "cacheHits": self._stats.cacheHits,
            "cacheMisses": self._stats.cacheMisses,
            "cacheHitRate": round(cacheHitRate, 3),
            "fallbacks": self._stats.fallbacks,
            "costByModel": {k: round(v, 4) for k, v in self._stats.costByModel.items()},
            "trackingDuration": (datetime.now() - self._stats.startTime).total_seconds(),
        }

    def getRequests(self) -> list[RequestCost]:
        """Get a copy of the individual request records."""
        return list(self._stats.requests)

    def reset(self) -> None:
        """Reset all statistics."""
        self._stats = UsageStats()
        logger.info("Cost tracker reset")
