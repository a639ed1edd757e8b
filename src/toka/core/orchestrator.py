"""Cost-aware request orchestration.

A request is answered from the cache when an identical request (same
requested model, prompt and options) was served recently. Otherwise the
most capable catalog model that fits the budget is chosen, the generation
client is called, and the response is cached for reuse.
"""

import asyncio
import logging
from dataclasses import replace
from typing import Any

from toka.cache.base import CacheBackend
from toka.cache.cacheKey import CacheKeyComponents, computeCacheKey
from toka.cache.memoryCache import MemoryCache
from toka.config import createSampleConfig
from toka.cost.catalog import ModelCatalog, defaultCatalog
from toka.cost.costTracker import CostTracker
from toka.cost.estimator import CostEstimate, CostEstimator, countTokens
from toka.cost.modelSelector import ModelSelector
from toka.exceptions import BudgetExceededError, ConfigurationError, GenerationError
from toka.llm.client import GenerationClient, SimulatedClient
from toka.types import DEFAULT_CACHE_TTL, SDKConfig, SDKResponse

logger = logging.getLogger("toka.core")


class RequestOrchestrator:
    """Routes prompts to the best affordable model, with response caching.

    The configured model list decides which models may be used and in what
    order; ``catalog`` only supplies their prices and multipliers.

    Concurrent requests for the same cache key are coalesced: while one
    generation is in flight, identical requests wait for it instead of
    calling the client again, and receive its response with
    ``cacheHit=True``.

    Args:
        config: SDK configuration.
        cache: Optional response cache (no caching if omitted).
        client: Generation client (SimulatedClient if omitted).
        catalog: Pricing tables (built-in tables if omitted).
        costTracker: Optional tracker for usage statistics.
    """

    def __init__(
        self,
        config: SDKConfig,
        cache: CacheBackend | None = None,
        client: GenerationClient | None = None,
        catalog: ModelCatalog | None = None,
        costTracker: CostTracker | None = None,
    ):
        self._config = config.copy()
        self._cache = cache
        self._client = client or SimulatedClient()
        self._catalog = catalog if catalog is not None else defaultCatalog()
        self._estimator = CostEstimator(self._catalog)
        self._costTracker = costTracker
        self._inFlight: dict[str, asyncio.Task] = {}

    @property
    def cache(self) -> CacheBackend | None:
        return self._cache

    @property
    def costTracker(self) -> CostTracker | None:
        return self._costTracker

    def _selector(self, config: SDKConfig) -> ModelSelector:
        return ModelSelector(
            self._catalog.withModels(config.models),
            config.maxCostPerRequest,
            self._estimator,
        )

    async def request(
        self,
        model: str,
        prompt: str,
        options: dict[str, Any] | None = None,
    ) -> SDKResponse:
        """Generate a response for a prompt within the configured budget.

        Args:
            model: Requested model (must be in the configured model list).
            prompt: Prompt text.
            options: Extra request options; they only affect the cache key.

        Returns:
            The response. ``modelUsed`` differs from ``model`` when a cheaper
            model had to be used to stay within budget.

        Raises:
            ConfigurationError: If the model is not allowed or the budget is
                not positive.
            BudgetExceededError: If no configured model fits the budget.
            GenerationError: If generation or estimation fails.
        """
        config = self._config

        if model not in config.models:
            raise ConfigurationError(
                f"Model '{model}' is not in the allowed models list. "
                f"Allowed models: {', '.join(config.models)}"
            )

        if not config.maxCostPerRequest > 0:
            raise ConfigurationError("Maximum cost per request must be greater than 0")

        cacheKey = self.generateCacheKey(model, prompt, options)

        if self._cache is not None:
            cached = self._cache.get(cacheKey)
            if cached is not None:
                logger.info(f"Cache hit for key: {cacheKey}")
                return self._record(model, replace(cached, cacheHit=True))

        pending = self._inFlight.get(cacheKey)
        if pending is not None:
            logger.debug(f"Joining in-flight request for key: {cacheKey}")
            response = await asyncio.shield(pending)
            return self._record(model, replace(response, cacheHit=True))

        task = asyncio.ensure_future(self._generate(cacheKey, model, prompt, config))
        self._inFlight[cacheKey] = task
        # Cancelling this caller must not cancel the generation others joined
        response = await asyncio.shield(task)
        return self._record(model, response)

    async def _generate(
        self,
        cacheKey: str,
        requestedModel: str,
        prompt: str,
        config: SDKConfig,
    ) -> SDKResponse:
        try:
            selectedModel = self._selector(config).bestModelFor(prompt)
            if selectedModel is None:
                raise BudgetExceededError(
                    config.maxCostPerRequest,
                    config.models,
                    promptTokens=countTokens(prompt),
                )

            if selectedModel != requestedModel:
                logger.info(
                    f"Falling back from {requestedModel} to {selectedModel} "
                    f"to stay within ${config.maxCostPerRequest}"
                )

            try:
                estimate = self._estimator.estimateCost(prompt, selectedModel)
                text = await self._client.generate(selectedModel, prompt, config.apiKey)
            except GenerationError as e:
                raise GenerationError(
                    f"Toka request failed: {e}",
                    kind=e.kind,
                    statusCode=e.statusCode,
                ) from e
            except Exception as e:
                raise GenerationError(f"Toka request failed: {e}") from e

            response = SDKResponse(
                text=text,
                tokens=estimate.tokens,
                cost=estimate.cost,
                modelUsed=selectedModel,
                cacheHit=False,
            )

            if self._cache is not None:
                ttl = config.cacheTTL or DEFAULT_CACHE_TTL
                self._cache.set(cacheKey, response, ttl)
                logger.debug(f"Cached response for key: {cacheKey} (TTL: {ttl}ms)")

            return response
        finally:
            self._inFlight.pop(cacheKey, None)

    def _record(self, requestedModel: str, response: SDKResponse) -> SDKResponse:
        if self._costTracker is not None:
            self._costTracker.recordRequest(
                requestedModel=requestedModel,
                modelUsed=response.modelUsed,
                tokens=response.tokens,
                cost=response.cost,
                cacheHit=response.cacheHit,
            )
        return response

    def generateCacheKey(
        self,
        model: str,
        prompt: str,
        options: dict[str, Any] | None = None,
    ) -> str:
        """Get the cache key for a request.

        Args:
            model: Requested model.
            prompt: Prompt text.
            options: Extra request options.

        Returns:
            Cache key string.
        """
        components = CacheKeyComponents(model=model, prompt=prompt, options=options or {})
        return computeCacheKey(components)

    def getConfig(self) -> SDKConfig:
        """Get a copy of the current configuration."""
        return self._config.copy()

    def updateConfig(self, **changes: Any) -> None:
        """Replace configuration fields.

        Changed values are not re-validated; ``request`` still rejects unknown
        models and non-positive budgets.

        Args:
            **changes: SDKConfig fields to replace.

        Raises:
            ConfigurationError: If a change names an unknown field.
        """
        self._config = self._config.merged(**changes)
        logger.info(f"Configuration updated: {', '.join(sorted(changes))}")

    def isModelAvailable(self, model: str) -> bool:
        """Check if a model is in the configured model list."""
        return model in self._config.models

    def estimate(self, prompt: str, model: str | None = None) -> CostEstimate:
        """Estimate the cost of a prompt without sending it.

        Args:
            prompt: Prompt text.
            model: Model to price (defaults to the model the budget would pick,
                or the first configured model when none fits).

        Returns:
            CostEstimate for the prompt.
        """
        if model is None:
            model = self._selector(self._config).bestModelFor(prompt) or self._config.models[0]
        return self._estimator.estimateCost(prompt, model)


def createOrchestratorWithSampleConfig(
    client: GenerationClient | None = None,
    costTracker: CostTracker | None = None,
) -> RequestOrchestrator:
    """Create an orchestrator over the sample configuration.

    Uses an in-memory cache and, unless given a client, the simulated client.

    Returns:
        RequestOrchestrator ready for local experiments and tests.
    """
    return RequestOrchestrator(
        createSampleConfig(),
        cache=MemoryCache(),
        client=client or SimulatedClient(),
        costTracker=costTracker,
    )
