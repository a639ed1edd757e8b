"""Shared pytest fixtures for toka tests."""

import logging
import os

import pytest

from toka.cache import MemoryCache
from toka.config import resetSettings
from toka.logging import COMPONENTS
from toka.testing import MockGenerationClient
from toka.types import SDKConfig


class FakeClock:
    """Manually advanced clock for cache expiry tests (seconds)."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms / 1000


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Clear TOKA_ env vars and cached settings before each test."""
    for key in list(os.environ.keys()):
        if key.startswith("TOKA_"):
            monkeypatch.delenv(key)
    resetSettings()
    yield
    resetSettings()


@pytest.fixture(autouse=True)
def reset_toka_logger():
    """Undo configureLogging() so log capture keeps working across tests."""
    yield
    logger = logging.getLogger("toka")
    for handler in [h for h in logger.handlers if not isinstance(h, logging.NullHandler)]:
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    for component in COMPONENTS:
        logging.getLogger(f"toka.{component}").setLevel(logging.NOTSET)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> MemoryCache:
    return MemoryCache(clock=clock)


@pytest.fixture
def mock_client() -> MockGenerationClient:
    return MockGenerationClient(defaultResponse="Generated text")


@pytest.fixture
def config() -> SDKConfig:
    return SDKConfig(
        apiKey="test-api-key",
        models=["gpt-4", "gpt-4o-mini", "gpt-3.5-turbo"],
        maxCostPerRequest=1.0,
        cacheTTL=5 * 60 * 1000,
    )
