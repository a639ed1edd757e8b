"""toka - cost-aware LLM request orchestration.

Combines a TTL response cache, a token/cost estimator and a
budget-constrained model selector behind a single async request call.

Example:
    >>> import asyncio
    >>> from toka import createOrchestratorWithSampleConfig
    >>> orchestrator = createOrchestratorWithSampleConfig()
    >>> response = asyncio.run(orchestrator.request("gpt-4", "Hello, world!"))
    >>> response.modelUsed
    'gpt-4'
"""

import logging as _stdlogging

__version__ = "0.1.0"

__all__ = [
    # Core
    "RequestOrchestrator",
    "createOrchestratorWithSampleConfig",
    "SDKConfig",
    "SDKResponse",
    # Config
    "Settings",
    "getSettings",
    "resetSettings",
    "loadConfig",
    "createSampleConfig",
    # Cache
    "CacheBackend",
    "MemoryCache",
    # Cost
    "ModelCatalog",
    "CostEstimate",
    "CostEstimator",
    "ModelSelector",
    "CostTracker",
    # LLM
    "GenerationClient",
    "SimulatedClient",
    "AnthropicGenerationClient",
    # Logging
    "configureLogging",
    "getLogger",
    "LogLevel",
    # Exceptions
    "TokaError",
    "ConfigurationError",
    "BudgetExceededError",
    "GenerationError",
    "GenerationErrorKind",
]

_stdlogging.getLogger("toka").addHandler(_stdlogging.NullHandler())


def __getattr__(name: str):
    """Lazy import to keep `import toka` light."""
    if name in ("RequestOrchestrator", "createOrchestratorWithSampleConfig"):
        from toka.core import orchestrator

        return getattr(orchestrator, name)
    elif name in ("SDKConfig", "SDKResponse"):
        from toka import types

        return getattr(types, name)
    elif name in ("Settings", "getSettings", "resetSettings", "loadConfig", "createSampleConfig"):
        from toka import config

        return getattr(config, name)
    elif name in ("CacheBackend", "MemoryCache"):
        from toka import cache

        return getattr(cache, name)
    elif name in ("ModelCatalog", "CostEstimate", "CostEstimator", "ModelSelector", "CostTracker"):
        from toka import cost

        return getattr(cost, name)
    elif name in ("GenerationClient", "SimulatedClient", "AnthropicGenerationClient"):
        from toka import llm

        return getattr(llm, name)
    elif name in ("configureLogging", "getLogger", "LogLevel"):
        from toka import logging as toka_logging

        return getattr(toka_logging, name)
    elif name in __all__:
        from toka import exceptions

        return getattr(exceptions, name)
    raise AttributeError(f"module 'toka' has no attribute '{name}'")
