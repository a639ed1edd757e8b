"""Token and cost estimation.

Tokens are approximated by a whitespace word count scaled by a per-model
multiplier. Costs are priced per 1000 tokens and always rounded to four
decimal places before they are compared or returned.
"""

import math
from dataclasses import dataclass
from typing import Any

from toka.cost.catalog import ModelCatalog, defaultCatalog

COST_PRECISION = 4


@dataclass(frozen=True)
class CostEstimate:
    """Estimated size and price of a prompt.

    Attributes:
        tokens: Estimated token count.
        cost: Estimated cost in USD, rounded to 4 places.
    """

    tokens: int
    cost: float

    @property
    def costString(self) -> str:
        """Get the cost formatted as a dollar amount."""
        return f"${self.cost:.4f}"

    def toDict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {"tokens": self.tokens, "cost": self.cost}


def countTokens(text: str) -> int:
    """Count whitespace-delimited words.

    Args:
        text: Text to count.

    Returns:
        Number of words, 0 for empty or whitespace-only text.

    Example:
        >>> countTokens("a  b   c")
        3
    """
    if not text:
        return 0
    return len(text.split())


class CostEstimator:
    """Estimates tokens and costs against a model catalog.

    Args:
        catalog: Catalog providing prices and multipliers (built-in tables
            if omitted).
    """

    def __init__(self, catalog: ModelCatalog | None = None):
        self._catalog = catalog if catalog is not None else defaultCatalog()

    @property
    def catalog(self) -> ModelCatalog:
        return self._catalog

    def countTokens(self, text: str) -> int:
        return countTokens(text)

    def calculateModelTokens(self, text: str, model: str) -> int:
        """Count tokens with the model's tokenization multiplier applied.

        Args:
            text: Prompt text.
            model: Model identifier.

        Returns:
            ceil(word count * multiplier).
        """
        return math.ceil(countTokens(text) * self._catalog.multiplierFor(model))

    def getModelPrice(self, model: str) -> float:
        """Get the price per 1000 tokens for a model."""
        return self._catalog.priceFor(model)

    def _price(self, tokens: int, model: str) -> float:
        return round((tokens / 1000) * self.getModelPrice(model), COST_PRECISION)

    def estimateCost(self, text: str, model: str) -> CostEstimate:
        """Estimate the tokens and cost of sending a prompt to a model.

        Args:
            text: Prompt text.
            model: Model identifier.

        Returns:
            CostEstimate with the model-adjusted token count and rounded cost.
        """
        tokens = self.calculateModelTokens(text, model)
        return CostEstimate(tokens=tokens, cost=self._price(tokens, model))

    def estimateTotalCost(
        self,
        promptTokens: int,
        responseTokens: int,
        model: str,
    ) -> float:
        """Estimate the cost of a prompt plus an expected response.

        Args:
            promptTokens: Tokens in the prompt.
            responseTokens: Expected tokens in the response.
            model: Model identifier.

        Returns:
            Rounded cost in USD.
        """
        return self._price(promptTokens + responseTokens, model)

    def formatEstimate(self, text: str, model: str) -> str:
        """Format an estimate as a one-line human-readable string."""
        estimate = self.estimateCost(text, model)
        return f"{model}: ~{estimate.tokens:,} tokens, {estimate.costString}"


_defaultEstimator = CostEstimator()


def calculateModelTokens(text: str, model: str) -> int:
    """Model-adjusted token count using the built-in pricing tables."""
    return _defaultEstimator.calculateModelTokens(text, model)


def getModelPrice(model: str) -> float:
    """Price per 1000 tokens using the built-in pricing tables."""
    return _defaultEstimator.getModelPrice(model)


def estimateCost(text: str, model: str) -> CostEstimate:
    """Estimate cost using the built-in pricing tables."""
    return _defaultEstimator.estimateCost(text, model)


def estimateTotalCost(promptTokens: int, responseTokens: int, model: str) -> float:
    """Estimate prompt plus response cost using the built-in pricing tables."""
    return _defaultEstimator.estimateTotalCost(promptTokens, responseTokens, model)
