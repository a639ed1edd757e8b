"""toka configuration using pydantic-settings.

Settings come from TOKA_-prefixed environment variables (or a .env file)
and may be layered over a JSON config file; environment values win.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Annotated, Any, Literal

from pydantic import AliasChoices, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from toka.exceptions import ConfigurationError
from toka.types import DEFAULT_CACHE_TTL, SDKConfig

CONFIG_FIELDS = ("apiKey", "models", "maxCostPerRequest", "cacheTTL")


class Settings(BaseSettings):
    """toka settings from the environment.

    Unset values stay None so they can be filled from a config file.

    Attributes:
        apiKey: Provider credential (TOKA_API_KEY).
        models: Comma-separated model list (TOKA_MODELS).
        maxCostPerRequest: Budget per request in USD (TOKA_MAX_COST).
        cacheTTL: Cache TTL in milliseconds (TOKA_CACHE_TTL).
        logLevel: Logging level (TOKA_LOG_LEVEL).
    """

    model_config = SettingsConfigDict(
        env_prefix="TOKA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    apiKey: str | None = Field(
        default=None,
        validation_alias=AliasChoices("TOKA_API_KEY", "apiKey"),
        description="Provider API key",
    )
    models: Annotated[list[str] | None, NoDecode] = Field(
        default=None,
        validation_alias=AliasChoices("TOKA_MODELS", "models"),
        description="Models ordered most expensive first",
    )
    maxCostPerRequest: float | None = Field(
        default=None,
        validation_alias=AliasChoices("TOKA_MAX_COST", "maxCostPerRequest"),
        description="Maximum cost per request in USD",
    )
    cacheTTL: int | None = Field(
        default=None,
        validation_alias=AliasChoices("TOKA_CACHE_TTL", "cacheTTL"),
        description="Cache TTL in milliseconds",
    )
    logLevel: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        validation_alias=AliasChoices("TOKA_LOG_LEVEL", "logLevel"),
        description="Logging level",
    )

    @field_validator("models", mode="before")
    @classmethod
    def splitModels(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [m.strip() for m in value.split(",") if m.strip()]
        return value

    def sdkValues(self) -> dict[str, Any]:
        """Get the SDK fields that are set."""
        return {
            name: getattr(self, name)
            for name in CONFIG_FIELDS
            if getattr(self, name) is not None
        }


@lru_cache
def getSettings() -> Settings:
    """Get cached settings instance.

    Returns:
        Singleton Settings instance.
    """
    return Settings()


def resetSettings() -> None:
    """Reset cached settings (useful for testing)."""
    getSettings.cache_clear()


def _readConfigFile(configPath: Path | str) -> dict[str, Any]:
    try:
        with open(configPath, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Failed to load config from {configPath}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Failed to load config from {configPath}: expected a JSON object")
    return data


def validateConfig(values: dict[str, Any]) -> SDKConfig:
    """Validate raw configuration values.

    Args:
        values: Mapping with apiKey, models, maxCostPerRequest and cacheTTL.

    Returns:
        A validated SDKConfig.

    Raises:
        ConfigurationError: If a required value is missing or invalid.
    """
    apiKey = values.get("apiKey")
    if not apiKey:
        raise ConfigurationError(
            "API key is required. Set TOKA_API_KEY environment variable or provide in config file."
        )

    models = values.get("models")
    if not isinstance(models, list) or not models:
        raise ConfigurationError("Models array is required and must contain at least one model.")

    try:
        maxCost = float(values.get("maxCostPerRequest") or 0)
    except (TypeError, ValueError):
        maxCost = 0.0
    # NaN fails every comparison
    if not maxCost > 0:
        raise ConfigurationError("maxCostPerRequest must be a positive number.")

    try:
        cacheTTL = int(values.get("cacheTTL") or 0) or DEFAULT_CACHE_TTL
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"cacheTTL must be a number of milliseconds: {e}") from e
    if cacheTTL < 0:
        raise ConfigurationError(f"cacheTTL must not be negative, got {cacheTTL}.")

    return SDKConfig(
        apiKey=str(apiKey),
        models=[str(m) for m in models],
        maxCostPerRequest=maxCost,
        cacheTTL=cacheTTL,
    )


def loadConfig(configPath: Path | str | None = None) -> SDKConfig:
    """Load configuration from an optional JSON file and the environment.

    Environment variables take precedence over values in the file.

    Args:
        configPath: Optional path to a JSON config file.

    Returns:
        A validated SDKConfig.

    Raises:
        ConfigurationError: If the file cannot be read or the result is invalid.
    """
    values: dict[str, Any] = {}
    if configPath is not None:
        values.update(_readConfigFile(configPath))

    try:
        settings = Settings()
    except ValidationError as e:
        raise ConfigurationError(f"Invalid TOKA_ environment settings: {e}") from e

    values.update(settings.sdkValues())
    return validateConfig(values)


def createSampleConfig() -> SDKConfig:
    """Create a sample configuration for development and testing.

    Returns:
        SDKConfig with a placeholder key and two models.
    """
    return SDKConfig(
        apiKey="sample-api-key",
        models=["gpt-4", "gpt-3.5-turbo"],
        maxCostPerRequest=1.0,
        cacheTTL=DEFAULT_CACHE_TTL,
    )
