"""Generation client backed by the Anthropic API.

Provider failures are translated into GenerationError so the orchestrator
can wrap them uniformly:
- status errors from the API become PROVIDER errors
- connection failures and timeouts become NO_RESPONSE errors
- anything else the SDK raises becomes an OTHER error
"""

import logging
from typing import Any, Callable

import anthropic
from anthropic import AsyncAnthropic

from toka.exceptions import GenerationError, GenerationErrorKind

logger = logging.getLogger("toka.llm")


class AnthropicGenerationClient:
    """Async generation client using the Anthropic Messages API.

    One AsyncAnthropic instance is created per API key and reused.

    Args:
        maxTokens: Maximum response tokens.
        temperature: Sampling temperature.
        systemPrompt: Optional system prompt for every request.
        clientFactory: Builds an SDK client from an API key (injectable for tests).
    """

    def __init__(
        self,
        maxTokens: int = 1024,
        temperature: float = 1.0,
        systemPrompt: str | None = None,
        clientFactory: Callable[[str], Any] | None = None,
    ):
        self._maxTokens = maxTokens
        self._temperature = temperature
        self._systemPrompt = systemPrompt
        self._clientFactory = clientFactory or (lambda apiKey: AsyncAnthropic(api_key=apiKey))
        self._clients: dict[str, Any] = {}

    def _clientFor(self, apiKey: str) -> Any:
        if apiKey not in self._clients:
            self._clients[apiKey] = self._clientFactory(apiKey)
        return self._clients[apiKey]

    async def generate(self, model: str, prompt: str, apiKey: str) -> str:
        """Send a single-turn prompt and return the response text.

        Raises:
            GenerationError: On any provider or connectivity failure.
        """
        if not model or not prompt or not apiKey:
            raise GenerationError(
                "API request failed: Model, prompt, and API key are required",
                kind=GenerationErrorKind.OTHER,
            )

        request: dict[str, Any] = {
            "model": model,
            "max_tokens": self._maxTokens,
            "temperature": self._temperature,
            "messages": [{"role": "user", "content": prompt}],
        }
        if self._systemPrompt:
            request["system"] = self._systemPrompt

        logger.debug(f"Calling {model}")

        try:
            response = await self._clientFor(apiKey).messages.create(**request)
        except anthropic.APIStatusError as e:
            raise GenerationError(
                f"API request failed with status {e.status_code}: {e.message}",
                kind=GenerationErrorKind.PROVIDER,
                statusCode=e.status_code,
            ) from e
        except anthropic.APIConnectionError as e:
            raise GenerationError(
                "API request failed: No response received from server. "
                "Please check your internet connection.",
                kind=GenerationErrorKind.NO_RESPONSE,
            ) from e
        except anthropic.AnthropicError as e:
            raise GenerationError(
                f"API request failed: {e}",
                kind=GenerationErrorKind.OTHER,
            ) from e

        return "".join(block.text for block in response.content if hasattr(block, "text"))
