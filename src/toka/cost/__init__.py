"""Cost module for toka.

Provides the model catalog, token/cost estimation, budget-constrained
model selection and usage tracking.
"""

from toka.cost.catalog import (
    DEFAULT_MODEL_MULTIPLIERS,
    DEFAULT_MODEL_PRICES,
    ModelCatalog,
    defaultCatalog,
)
from toka.cost.costTracker import CostTracker, RequestCost
from toka.cost.estimator import (
    CostEstimate,
    CostEstimator,
    calculateModelTokens,
    countTokens,
    estimateCost,
    estimateTotalCost,
    getModelPrice,
)
from toka.cost.modelSelector import ModelSelector, getModelWithinBudget, getNextModel

__all__ = [
    "ModelCatalog",
    "defaultCatalog",
    "DEFAULT_MODEL_PRICES",
    "DEFAULT_MODEL_MULTIPLIERS",
    "CostEstimate",
    "CostEstimator",
    "countTokens",
    "calculateModelTokens",
    "estimateCost",
    "estimateTotalCost",
    "getModelPrice",
    "ModelSelector",
    "getNextModel",
    "getModelWithinBudget",
    "CostTracker",
    "RequestCost",
]
