"""Model catalog: preference order plus pricing tables.

The catalog is the single source of pricing for estimation and selection,
so tests and deployments can swap prices without touching any logic.
"""

from dataclasses import dataclass, field
from typing import Iterator

# USD per 1000 tokens
DEFAULT_MODEL_PRICES: dict[str, float] = {
    "gpt-4": 0.03,
    "gpt-4o-mini": 0.015,
    "gpt-3.5-turbo": 0.007,
    "gpt-4-turbo": 0.02,
}

# Tokenization differences relative to a plain word count
DEFAULT_MODEL_MULTIPLIERS: dict[str, float] = {
    "gpt-4": 1.1,
    "gpt-4o-mini": 1.0,
    "gpt-3.5-turbo": 1.05,
    "gpt-4-turbo": 1.1,
}

DEFAULT_PRICE_PER_1000 = 0.01
DEFAULT_MULTIPLIER = 1.0


@dataclass
class ModelCatalog:
    """Ordered model list with price and tokenization tables.

    Attributes:
        models: Model identifiers, most preferred (most expensive) first.
        prices: USD per 1000 tokens, by model.
        multipliers: Token count multiplier, by model.
        defaultPrice: Price used for models missing from ``prices``.
        defaultMultiplier: Multiplier used for models missing from ``multipliers``.
    """

    models: list[str] = field(default_factory=list)
    prices: dict[str, float] = field(default_factory=lambda: dict(DEFAULT_MODEL_PRICES))
    multipliers: dict[str, float] = field(
        default_factory=lambda: dict(DEFAULT_MODEL_MULTIPLIERS)
    )
    defaultPrice: float = DEFAULT_PRICE_PER_1000
    defaultMultiplier: float = DEFAULT_MULTIPLIER

    def priceFor(self, model: str) -> float:
        """Get the price per 1000 tokens for a model."""
        return self.prices.get(model, self.defaultPrice)

    def multiplierFor(self, model: str) -> float:
        """Get the tokenization multiplier for a model."""
        return self.multipliers.get(model, self.defaultMultiplier)

    def withModels(self, models: list[str]) -> "ModelCatalog":
        """Return a catalog with the same pricing and a different model order."""
        return ModelCatalog(
            models=list(models),
            prices=self.prices,
            multipliers=self.multipliers,
            defaultPrice=self.defaultPrice,
            defaultMultiplier=self.defaultMultiplier,
        )

    def __contains__(self, model: object) -> bool:
        return model in self.models

    def __iter__(self) -> Iterator[str]:
        return iter(self.models)

    def __len__(self) -> int:
        return len(self.models)


def defaultCatalog(models: list[str] | None = None) -> ModelCatalog:
    """Create a catalog using the built-in pricing tables."""
    return ModelCatalog(models=list(models or []))
