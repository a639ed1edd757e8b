"""Budget-constrained model selection.

Catalogs are ordered most expensive first, so the first model that fits the
budget is also the most capable one it can pay for. Selection is a single
forward pass: a model that was skipped is never reconsidered.
"""

import logging
from typing import Sequence

from toka.cost.catalog import ModelCatalog
from toka.cost.estimator import CostEstimator

logger = logging.getLogger("toka.cost")


def getNextModel(currentModel: str, models: Sequence[str]) -> str | None:
    """Get the model that follows ``currentModel`` in preference order.

    Args:
        currentModel: Model that was rejected.
        models: Models ordered most expensive first.

    Returns:
        The next cheaper model, or None if ``currentModel`` is last or
        not in the list.
    """
    try:
        index = list(models).index(currentModel)
    except ValueError:
        return None

    if index == len(models) - 1:
        return None
    return models[index + 1]


def getModelWithinBudget(
    prompt: str,
    models: Sequence[str],
    maxCostPerRequest: float,
    estimator: CostEstimator | None = None,
) -> str | None:
    """Pick the first model whose estimated cost fits the budget.

    Args:
        prompt: Prompt to estimate.
        models: Models ordered most expensive first.
        maxCostPerRequest: Budget in USD.
        estimator: Estimator to price candidates (built-in tables if omitted).

    Returns:
        The most preferred affordable model, or None if none fit.
    """
    estimator = estimator if estimator is not None else CostEstimator()

    for model in models:
        try:
            estimate = estimator.estimateCost(prompt, model)
        except Exception as e:
            logger.warning(f"Skipping {model}: cost estimate failed ({e})")
            continue

        if estimate.cost <= maxCostPerRequest:
            logger.debug(f"Selected {model} at {estimate.costString} (budget ${maxCostPerRequest})")
            return model

        logger.debug(f"{model} over budget: {estimate.costString} > ${maxCostPerRequest}")

    return None


class ModelSelector:
    """Selects models from a catalog under a per-request budget.

    Args:
        catalog: Ordered catalog of usable models.
        maxCostPerRequest: Budget in USD.
        estimator: Estimator for pricing (defaults to one bound to ``catalog``).
    """

    def __init__(
        self,
        catalog: ModelCatalog,
        maxCostPerRequest: float,
        estimator: CostEstimator | None = None,
    ):
        self._catalog = catalog
        self._maxCostPerRequest = maxCostPerRequest
        self._estimator = estimator if estimator is not None else CostEstimator(catalog)

    @property
    def maxCostPerRequest(self) -> float:
        return self._maxCostPerRequest

    def bestModelFor(self, prompt: str) -> str | None:
        """Get the most capable model that fits the budget for a prompt.

        Args:
            prompt: Prompt to estimate.

        Returns:
            Model identifier, or None if no model fits.
        """
        return getModelWithinBudget(
            prompt,
            self._catalog.models,
            self._maxCostPerRequest,
            self._estimator,
        )

    def nextFallback(self, model: str) -> str | None:
        """Get the next cheaper model after ``model``.

        Args:
            model: Model that was rejected.

        Returns:
            Model identifier, or None if there is no further fallback.
        """
        return getNextModel(model, self._catalog.models)

    def isModelAvailable(self, model: str) -> bool:
        """Check if a model is in the catalog."""
        return model in self._catalog

    def availableModels(self) -> list[str]:
        """Get all catalog models in preference order."""
        return list(self._catalog.models)
