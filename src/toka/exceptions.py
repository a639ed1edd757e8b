"""toka exception hierarchy.

All toka exceptions inherit from TokaError for easy catching.
"""

from enum import Enum


class TokaError(Exception):
    """Base exception for all toka errors."""

    pass


class ConfigurationError(TokaError):
    """Raised when configuration is invalid or a request violates it."""

    pass


class BudgetExceededError(TokaError):
    """Raised when no catalog model fits within the per-request budget."""

    def __init__(self, maxCost: float, models: list[str], promptTokens: int = 0):
        self.maxCost = maxCost
        self.models = list(models)
        self.promptTokens = promptTokens
        super().__init__(
            f"No model fits within the maximum cost per request (${maxCost}) "
            f"for a {promptTokens}-word prompt. Tried: {', '.join(self.models)}"
        )


class GenerationErrorKind(str, Enum):
    """Categories of generation failure.

    Attributes:
        PROVIDER: The provider answered with an error status.
        NO_RESPONSE: The request was sent but nothing came back.
        OTHER: Anything else (bad input, unexpected failures).
    """

    PROVIDER = "provider"
    NO_RESPONSE = "no_response"
    OTHER = "other"


class GenerationError(TokaError):
    """Raised when the external generation call fails."""

    def __init__(
        self,
        message: str,
        kind: GenerationErrorKind = GenerationErrorKind.OTHER,
        statusCode: int | None = None,
    ):
        self.kind = kind
        self.statusCode = statusCode
        super().__init__(message)
