"""Environment-based configuration using pydantic-settings.

Example:
    >>> from api_err.config import get_settings
    >>> settings = get_settings()
    >>> settings.protocol.http
    True
    >>> settings.logging.level
    'INFO'

    # Or with environment variables:
    # API_ERR_PROTOCOL_JSON_RPC=false
    # API_ERR_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ProtocolSettings(BaseSettings):
    """Which protocol status mappers are enabled."""

    model_config = SettingsConfigDict(
        env_prefix="API_ERR_PROTOCOL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    http: bool = Field(default=True, description="Enable HTTP status mapping")
    json_rpc: bool = Field(default=True, description="Enable JSON-RPC status mapping")

    @computed_field
    @property
    def enabled(self) -> tuple[str, ...]:
        """Names of the enabled protocols."""
        return tuple(name for name, on in (("http", self.http), ("json_rpc", self.json_rpc)) if on)


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="API_ERR_LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["console", "json", "none"] = "console"

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v

    @field_validator("format", mode="before")
    @classmethod
    def _normalize_format(cls, v: str) -> str:
        return v.lower() if isinstance(v, str) else v


class ApiErrSettings(BaseSettings):
    """Root settings.

    Loads configuration from environment variables with the API_ERR_ prefix,
    or from a .env file in the working directory. The nested sections read
    the same .env file under their own prefixes.

    Example environment variables:
        API_ERR_PROTOCOL_HTTP=true
        API_ERR_PROTOCOL_JSON_RPC=false
        API_ERR_LOG_FORMAT=json
        API_ERR_EXPOSE_CAUSES=true
    """

    model_config = SettingsConfigDict(
        env_prefix="API_ERR_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    expose_causes: bool = Field(default=False, description="Include the cause chain in boundary payloads")
    capture_tracebacks: bool = Field(default=False, description="Keep formatted tracebacks on wrapped errors")

    protocol: ProtocolSettings = Field(default_factory=ProtocolSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


@lru_cache(maxsize=1)
def get_settings() -> ApiErrSettings:
    """Get the global settings instance (cached)."""
    return ApiErrSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing).

    After calling this, the next get_settings() call will
    reload configuration from environment.
    """
    get_settings.cache_clear()
