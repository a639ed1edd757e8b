"""Logging configuration for toka.

Every toka module logs through a child of the ``toka`` logger, so a single
call to configureLogging() controls the whole SDK. Nothing is installed on
import; applications opt in.
"""

import logging
import sys
from enum import Enum
from typing import Any, Iterable, TextIO

TOKA_LOGGER = "toka"
CACHE_LOGGER = "toka.cache"
COST_LOGGER = "toka.cost"
LLM_LOGGER = "toka.llm"
CORE_LOGGER = "toka.core"

# Component names accepted by setDebugMode()
COMPONENTS = ("cache", "cost", "llm", "core", "testing")


class LogLevel(str, Enum):
    """Log levels accepted by toka logging helpers."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    @property
    def levelno(self) -> int:
        return logging.getLevelName(self.value)


def resolveLevel(level: LogLevel | str | int | None) -> int:
    """Turn a LogLevel, level name or number into a logging level number.

    ``None`` resolves to TOKA_LOG_LEVEL (WARNING when unset).

    Raises:
        ValueError: If the name is not a known level.
    """
    if level is None:
        from toka.config import getSettings

        level = getSettings().logLevel
    if isinstance(level, int):
        return level
    return LogLevel(level.upper()).levelno


class TokaLogFormatter(logging.Formatter):
    """Formatter for toka records.

    Records from request handling carry the component name (``toka.cache``,
    ``toka.core`` ...) so cache hits and fallbacks can be told apart in one
    stream. Level names are colored only when writing to a terminal.
    """

    LEVEL_COLORS = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[35m",
    }
    RESET = "\033[0m"

    def __init__(
        self,
        useColors: bool = False,
        includeTimestamp: bool = True,
    ):
        prefix = "%(asctime)s " if includeTimestamp else ""
        super().__init__(
            fmt=prefix + "[%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S" if includeTimestamp else None,
        )
        self._useColors = useColors

    def format(self, record: logging.LogRecord) -> str:
        if not self._useColors:
            return super().format(record)

        # Color a copy so other handlers still see the plain level name
        colored = logging.makeLogRecord(record.__dict__)
        color = self.LEVEL_COLORS.get(record.levelno, "")
        colored.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(colored)


def _isTerminal(stream: TextIO) -> bool:
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def configureLogging(
    level: LogLevel | str | int | None = None,
    useColors: bool = True,
    includeTimestamp: bool = True,
    logFile: str | None = None,
    stream: TextIO | None = None,
) -> logging.Logger:
    """Configure toka logging.

    Replaces any handlers previously installed on the ``toka`` logger and
    stops propagation to the root logger.

    Args:
        level: Log level; defaults to TOKA_LOG_LEVEL.
        useColors: Color level names when the stream is a terminal.
        includeTimestamp: Whether to include timestamps on the console.
        logFile: Optional file path that receives the same records.
        stream: Console stream (stderr if omitted).

    Returns:
        The configured ``toka`` logger.
    """
    stream = stream or sys.stderr
    logger = logging.getLogger(TOKA_LOGGER)
    logger.setLevel(resolveLevel(level))

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(stream)
    console.setFormatter(
        TokaLogFormatter(
            useColors=useColors and _isTerminal(stream),
            includeTimestamp=includeTimestamp,
        )
    )
    logger.addHandler(console)

    if logFile:
        fileHandler = logging.FileHandler(logFile, encoding="utf-8")
        fileHandler.setFormatter(TokaLogFormatter())
        logger.addHandler(fileHandler)

    logger.propagate = False
    return logger


def getLogger(name: str) -> logging.Logger:
    """Get a logger inside the ``toka`` hierarchy.

    ``"cache"`` and ``"toka.cache"`` name the same logger.
    """
    if name != TOKA_LOGGER and not name.startswith(TOKA_LOGGER + "."):
        name = f"{TOKA_LOGGER}.{name}"
    return logging.getLogger(name)


def setLogLevel(level: LogLevel | str | int, loggerName: str | None = None) -> None:
    """Set the level of one toka logger, or of the ``toka`` root."""
    getLogger(loggerName or TOKA_LOGGER).setLevel(resolveLevel(level))


def setDebugMode(enabled: bool = True, components: Iterable[str] | None = None) -> None:
    """Switch components between DEBUG and INFO.

    Args:
        enabled: DEBUG when True, INFO when False.
        components: Names from COMPONENTS such as "cache" or "core"
            (None for the whole hierarchy).

    Raises:
        ValueError: If a component name is unknown.
    """
    level = logging.DEBUG if enabled else logging.INFO

    if components is None:
        setLogLevel(level)
        return

    for component in components:
        if component not in COMPONENTS:
            raise ValueError(
                f"Unknown logging component '{component}'. "
                f"Expected one of: {', '.join(COMPONENTS)}"
            )
        setLogLevel(level, component)


class LogContext:
    """Temporarily change the level of one or more toka loggers.

    Example:
        with LogContext("DEBUG", loggerName="toka.cache"):
            await orchestrator.request("gpt-4", prompt)
    """

    def __init__(
        self,
        level: LogLevel | str | int,
        loggerName: str | Iterable[str] = TOKA_LOGGER,
    ):
        self._level = resolveLevel(level)
        names = [loggerName] if isinstance(loggerName, str) else list(loggerName)
        self._loggers = [getLogger(name) for name in names]
        self._saved: list[int] = []

    def __enter__(self) -> "LogContext":
        self._saved = [logger.level for logger in self._loggers]
        for logger in self._loggers:
            logger.setLevel(self._level)
        return self

    def __exit__(self, *args: Any) -> None:
        for logger, original in zip(self._loggers, self._saved):
            logger.setLevel(original)
