"""Tests for protocol status mappers and the protocol registry."""

from __future__ import annotations

import pytest

from api_err.config import clear_settings_cache, get_settings
from api_err.errors import BAD_REQUEST, ApiError, Category, Custom
from api_err.protocols import (
    ProtocolNotEnabled,
    ProtocolRegistry,
    WireProtocol,
    get_registry,
    http,
    json_rpc,
    reset_registry,
    set_registry,
)


class _Unknown(Category):
    """Stand-in for a variant added after the mappers were written."""


# ═════════════════════════════════════════════════════════════════════════════
# HTTP mapper
# ═════════════════════════════════════════════════════════════════════════════


def test_http_uncategorized_is_500() -> None:
    assert http.status_code(None) == 500


def test_http_bad_request_is_400() -> None:
    assert http.status_code(BAD_REQUEST) == 400


def test_http_constants_and_server_class() -> None:
    assert http.BAD_REQUEST_STATUS == 400
    assert http.INTERNAL_SERVER_ERROR == 500
    assert not hasattr(http, "BAD_REQUEST")
    assert http.is_server_error(503)
    assert not http.is_server_error(429)


def test_http_custom_is_verbatim() -> None:
    assert http.status_code(Custom(http_status=418)) == 418
    assert http.status_code(Custom(http_status=418, json_rpc_status=-32099)) == 418


def test_http_custom_without_code_falls_back() -> None:
    assert http.status_code(Custom(json_rpc_status=-32099)) == 500


def test_http_unknown_variant_falls_back() -> None:
    assert http.status_code(_Unknown()) == 500


# ═════════════════════════════════════════════════════════════════════════════
# JSON-RPC mapper
# ═════════════════════════════════════════════════════════════════════════════


def test_json_rpc_uncategorized_is_server_error() -> None:
    assert json_rpc.status_code(None) == -32000


def test_json_rpc_bad_request_is_invalid_request() -> None:
    assert json_rpc.status_code(BAD_REQUEST) == -32600


@pytest.mark.parametrize(
    ("code", "expected"),
    [(-32000, True), (-32099, True), (-32603, True), (-32100, False), (-32600, False), (-31999, False)],
)
def test_json_rpc_server_error_range(code: int, expected: bool) -> None:
    assert json_rpc.is_server_error(code) is expected


def test_json_rpc_custom_is_verbatim() -> None:
    assert json_rpc.status_code(Custom(json_rpc_status=-32099)) == -32099
    assert json_rpc.status_code(Custom(http_status=418, json_rpc_status=-32099)) == -32099


def test_json_rpc_custom_without_code_falls_back() -> None:
    assert json_rpc.status_code(Custom(http_status=418)) == -32000


def test_json_rpc_unknown_variant_falls_back() -> None:
    assert json_rpc.status_code(_Unknown()) == -32000


# ═════════════════════════════════════════════════════════════════════════════
# Registry
# ═════════════════════════════════════════════════════════════════════════════


def test_default_registry_enables_both() -> None:
    registry = get_registry()
    assert set(registry) == {"http", "json_rpc"}
    assert len(registry) == 2
    assert registry.status_code(WireProtocol.HTTP, BAD_REQUEST) == 400
    assert registry.status_code("json_rpc", BAD_REQUEST) == -32600


def test_registry_is_cached_until_reset() -> None:
    first = get_registry()
    assert get_registry() is first
    reset_registry()
    assert get_registry() is not first


@pytest.mark.parametrize(
    ("http_on", "json_rpc_on", "expected"),
    [
        ("true", "true", {"http", "json_rpc"}),
        ("true", "false", {"http"}),
        ("false", "true", {"json_rpc"}),
        ("false", "false", set()),
    ],
)
def test_registry_follows_settings(
    monkeypatch: pytest.MonkeyPatch, http_on: str, json_rpc_on: str, expected: set[str]
) -> None:
    monkeypatch.setenv("API_ERR_PROTOCOL_HTTP", http_on)
    monkeypatch.setenv("API_ERR_PROTOCOL_JSON_RPC", json_rpc_on)
    clear_settings_cache()
    assert set(ProtocolRegistry.from_settings(get_settings())) == expected


def test_disabled_protocol_raises_and_other_still_works(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("API_ERR_PROTOCOL_JSON_RPC", "false")
    clear_settings_cache()
    reset_registry()

    err = ApiError.msg("bad").bad_request()
    assert err.http_status() == 400
    with pytest.raises(ProtocolNotEnabled) as info:
        err.json_rpc_status()
    assert info.value.protocol == "json_rpc"
    assert isinstance(info.value, LookupError)


def test_register_custom_protocol() -> None:
    registry = ProtocolRegistry()
    registry.register("grpc", lambda category: 3 if category is not None else 13)
    set_registry(registry)

    assert "grpc" in registry
    assert ApiError.msg("x").status_code("grpc") == 13
    assert ApiError.msg("x").bad_request().status_code("grpc") == 3
    with pytest.raises(ProtocolNotEnabled):
        ApiError.msg("x").http_status()


def test_unregister() -> None:
    registry = ProtocolRegistry.from_settings(get_settings())
    assert registry.unregister("http")
    assert not registry.unregister("http")
    assert registry.get("http") is None
    assert registry.get("json_rpc") is json_rpc.status_code


def test_error_status_uses_category() -> None:
    err = ApiError.msg("teapot").with_category(Custom(http_status=418, json_rpc_status=-32099))
    assert err.http_status() == 418
    assert err.json_rpc_status() == -32099
    assert err.status_code(WireProtocol.HTTP) == 418


def test_uncategorized_error_status() -> None:
    err = ApiError.wrap(RuntimeError("db down"))
    assert err.http_status() == 500
    assert err.json_rpc_status() == -32000
