"""Shared data types for toka requests and configuration."""

from dataclasses import dataclass, field, fields, replace
from typing import Any

from toka.exceptions import ConfigurationError

# 5 minutes, in milliseconds
DEFAULT_CACHE_TTL = 5 * 60 * 1000


@dataclass
class SDKConfig:
    """Configuration for a RequestOrchestrator.

    Attributes:
        apiKey: Credential passed to the generation client.
        models: Usable models, most expensive first.
        maxCostPerRequest: Budget per request in USD.
        cacheTTL: Cache time-to-live in milliseconds (None uses the default).
    """

    apiKey: str
    models: list[str] = field(default_factory=list)
    maxCostPerRequest: float = 1.0
    cacheTTL: int | None = DEFAULT_CACHE_TTL

    def copy(self) -> "SDKConfig":
        """Return a copy that does not share the model list."""
        return replace(self, models=list(self.models))

    def merged(self, **changes: Any) -> "SDKConfig":
        """Return a copy with the given fields replaced.

        Raises:
            ConfigurationError: If a change names an unknown field.
        """
        known = {f.name for f in fields(self)}
        unknown = sorted(set(changes) - known)
        if unknown:
            raise ConfigurationError(f"Unknown configuration fields: {', '.join(unknown)}")
        return replace(self.copy(), **changes)

    def toDict(self) -> dict[str, Any]:
        """Convert to dictionary (the API key is masked)."""
        return {
            "apiKey": "***" if self.apiKey else "",
            "models": list(self.models),
            "maxCostPerRequest": self.maxCostPerRequest,
            "cacheTTL": self.cacheTTL,
        }


@dataclass(frozen=True)
class SDKResponse:
    """Result of an orchestrated request.

    Attributes:
        text: Generated text.
        tokens: Estimated prompt tokens for the model used.
        cost: Estimated cost in USD.
        modelUsed: Model that produced the text.
        cacheHit: Whether the response was served without a provider call.
    """

    text: str
    tokens: int
    cost: float
    modelUsed: str
    cacheHit: bool = False

    def toDict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "text": self.text,
            "tokens": self.tokens,
            "cost": self.cost,
            "modelUsed": self.modelUsed,
            "cacheHit": self.cacheHit,
        }
