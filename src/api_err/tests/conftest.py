"""Pytest configuration: every test starts from default settings and a fresh registry."""

from collections.abc import Generator

import pytest

from api_err.config import clear_settings_cache
from api_err.protocols import reset_registry

_ENV_VARS = (
    "API_ERR_PROTOCOL_HTTP",
    "API_ERR_PROTOCOL_JSON_RPC",
    "API_ERR_LOG_LEVEL",
    "API_ERR_LOG_FORMAT",
    "API_ERR_EXPOSE_CAUSES",
    "API_ERR_CAPTURE_TRACEBACKS",
)


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Clear API_ERR_* variables and the settings/registry caches around each test."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    clear_settings_cache()
    reset_registry()
    yield
    clear_settings_cache()
    reset_registry()
