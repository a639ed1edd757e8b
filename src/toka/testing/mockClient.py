"""Mock generation client for testing.

Provides a drop-in GenerationClient that returns predefined responses
and records every call for assertions.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Callable

from toka.exceptions import GenerationError, GenerationErrorKind

logger = logging.getLogger("toka.testing")

# Builds a response text from (model, prompt)
MockResponseHandler = Callable[[str, str], str]


@dataclass
class MockCall:
    """A recorded generate() call.

    Attributes:
        model: Model passed to the client.
        prompt: Prompt passed to the client.
        apiKey: API key passed to the client.
    """

    model: str
    prompt: str
    apiKey: str


class MockGenerationClient:
    """Mock client for testing without provider calls.

    Responses are chosen in this order: a queued failure, a pattern
    handler matching the prompt, the response queue, the static response,
    and finally the default response.

    Args:
        defaultResponse: Text returned when nothing else is configured.
        delay: Seconds to sleep inside each call.
    """

    def __init__(self, defaultResponse: str = "Mock response", delay: float = 0.0):
        self._defaultResponse = defaultResponse
        self._delay = delay
        self._staticResponse: str | None = None
        self._responseQueue: list[str] = []
        self._failureQueue: list[Exception] = []
        self._responseHandlers: dict[str, MockResponseHandler] = {}
        self._gate: asyncio.Event | None = None
        self._callHistory: list[MockCall] = []

    def setStaticResponse(self, response: str) -> None:
        """Return the same text for every call."""
        self._staticResponse = response

    def addResponse(self, response: str) -> None:
        """Queue a response. The queue is FIFO."""
        self._responseQueue.append(response)

    def addResponses(self, responses: list[str]) -> None:
        for r in responses:
            self.addResponse(r)

    def addFailure(
        self,
        error: Exception | str,
        kind: GenerationErrorKind = GenerationErrorKind.PROVIDER,
    ) -> None:
        """Queue a failure for the next call.

        Args:
            error: Exception to raise, or a message for a GenerationError.
            kind: Kind used when ``error`` is a message.
        """
        if isinstance(error, str):
            error = GenerationError(error, kind=kind)
        self._failureQueue.append(error)

    def registerHandler(self, pattern: str, handler: MockResponseHandler) -> None:
        """Answer prompts containing ``pattern`` with ``handler(model, prompt)``."""
        self._responseHandlers[pattern] = handler

    def hold(self) -> asyncio.Event:
        """Block calls until the returned event is set.

        Returns:
            The event that releases held calls.
        """
        self._gate = asyncio.Event()
        return self._gate

    async def generate(self, model: str, prompt: str, apiKey: str) -> str:
        """Return the next mock response, or raise a queued failure."""
        self._callHistory.append(MockCall(model=model, prompt=prompt, apiKey=apiKey))

        if self._gate is not None:
            await self._gate.wait()
        if self._delay > 0:
            await asyncio.sleep(self._delay)

        if self._failureQueue:
            raise self._failureQueue.pop(0)

        text = self._getResponse(model, prompt)
        logger.debug(f"Mock response generated: {text[:50]}...")
        return text

    def _getResponse(self, model: str, prompt: str) -> str:
        for pattern, handler in self._responseHandlers.items():
            if pattern in prompt:
                return handler(model, prompt)

        if self._responseQueue:
            return self._responseQueue.pop(0)

        if self._staticResponse is not None:
            return self._staticResponse

        return self._defaultResponse

    @property
    def callCount(self) -> int:
        return len(self._callHistory)

    @property
    def callHistory(self) -> list[MockCall]:
        return list(self._callHistory)

    @property
    def lastCall(self) -> MockCall | None:
        return self._callHistory[-1] if self._callHistory else None

    def reset(self) -> None:
        """Clear recorded calls and configured responses."""
        self._staticResponse = None
        self._responseQueue.clear()
        self._failureQueue.clear()
        self._responseHandlers.clear()
        self._gate = None
        self._callHistory.clear()
