"""Logging infrastructure for toka.

Provides a ``toka`` logger hierarchy with consistent formatting and debug modes.
"""

from toka.logging.config import (
    CACHE_LOGGER,
    COMPONENTS,
    CORE_LOGGER,
    COST_LOGGER,
    LLM_LOGGER,
    TOKA_LOGGER,
    LogContext,
    LogLevel,
    configureLogging,
    getLogger,
    resolveLevel,
    setDebugMode,
    setLogLevel,
)

__all__ = [
    "configureLogging",
    "getLogger",
    "setLogLevel",
    "setDebugMode",
    "LogContext",
    "LogLevel",
    "resolveLevel",
    "COMPONENTS",
    "TOKA_LOGGER",
    "CACHE_LOGGER",
    "COST_LOGGER",
    "LLM_LOGGER",
    "CORE_LOGGER",
]
