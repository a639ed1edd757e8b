"""Testing utilities for toka.

Provides a mock generation client for deterministic tests.
"""

from toka.testing.mockClient import MockCall, MockGenerationClient, MockResponseHandler

__all__ = [
    "MockGenerationClient",
    "MockCall",
    "MockResponseHandler",
]
