"""Generation clients for toka.

Provides the async client contract, a simulated client for development
and an Anthropic-backed client.
"""

from toka.llm.anthropicClient import AnthropicGenerationClient
from toka.llm.client import GenerationClient, SimulatedClient

__all__ = [
    "GenerationClient",
    "SimulatedClient",
    "AnthropicGenerationClient",
]
