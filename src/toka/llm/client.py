"""Generation client contract and the simulated client.

The orchestrator treats text generation as a black box: an async call
taking (model, prompt, apiKey) and returning text, or raising
GenerationError.
"""

import asyncio
import logging
from typing import Protocol, runtime_checkable

from toka.exceptions import GenerationError, GenerationErrorKind

logger = logging.getLogger("toka.llm")

PROMPT_PREVIEW_LENGTH = 50


@runtime_checkable
class GenerationClient(Protocol):
    """Async text generation capability."""

    async def generate(self, model: str, prompt: str, apiKey: str) -> str: ...


class SimulatedClient:
    """Client that fabricates a response without any network call.

    Args:
        delay: Seconds to sleep before answering, to mimic provider latency.
    """

    def __init__(self, delay: float = 0.0):
        self._delay = delay
        self.callCount = 0

    async def generate(self, model: str, prompt: str, apiKey: str) -> str:
        """Return a canned response mentioning the model and prompt.

        Raises:
            GenerationError: If model, prompt or apiKey is empty.
        """
        if not model or not prompt or not apiKey:
            raise GenerationError(
                "API request failed: Model, prompt, and API key are required",
                kind=GenerationErrorKind.OTHER,
            )

        if self._delay > 0:
            await asyncio.sleep(self._delay)

        self.callCount += 1
        logger.debug(f"Simulated call to {model}")
        return (
            f"This is a simulated response from {model} for the prompt: "
            f'"{prompt[:PROMPT_PREVIEW_LENGTH]}..."'
        )
