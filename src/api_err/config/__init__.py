"""Configuration management using pydantic-settings."""

from .settings import (
    ApiErrSettings,
    LoggingSettings,
    ProtocolSettings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "ApiErrSettings",
    "LoggingSettings",
    "ProtocolSettings",
    "clear_settings_cache",
    "get_settings",
]
