"""api_err - errors for conveniently attaching status codes to failures.

An ``ApiError`` is a cause chain (the original failure plus any context added
on the way up) with an optional ``Category``. At the edge of the system a
protocol mapper turns the category into a status code. Errors without a
category default to the "internal server error"-like status.

Quick Start:
    >>> from api_err import ApiError, Option, Result, try_fn
    >>>
    >>> def add_one(request: str) -> Result[str, ApiError]:
    ...     return (
    ...         try_fn(int, request).bad_request()
    ...         .and_then(lambda n: Option.of(n + 1 if n < 2**63 - 1 else None).context("Input too large"))
    ...         .bad_request()
    ...         .map(str)
    ...     )
    >>>
    >>> err = add_one("foo").unwrap_err()
    >>> err.http_status(), err.json_rpc_status()
    (400, -32600)

Exception style:
    >>> from api_err import BAD_REQUEST, categorize
    >>>
    >>> @categorize(BAD_REQUEST, context="parsing limit")
    ... def parse_limit(raw: str) -> int:
    ...     return int(raw)

Protocols are enabled through configuration (API_ERR_PROTOCOL_HTTP,
API_ERR_PROTOCOL_JSON_RPC); see ``api_err.config``.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .errors import (
    BAD_REQUEST,
    ApiError,
    BadRequest,
    Category,
    CategoryKind,
    CauseChain,
    Custom,
    Err,
    Ok,
    Option,
    Result,
    categorize,
    into_api_error,
    parse_category,
    try_fn,
)
from .protocols import ProtocolNotEnabled, ProtocolRegistry, WireProtocol, get_registry, reset_registry, set_registry
from .config import ApiErrSettings, clear_settings_cache, get_settings
from .boundary import HttpErrorBody, JsonRpcErrorObject, http_error_body, json_rpc_error, report

__all__ = [
    "__version__",
    # Categories
    "Category", "CategoryKind", "BadRequest", "Custom", "BAD_REQUEST", "parse_category",
    # Errors
    "ApiError", "CauseChain", "into_api_error", "categorize",
    # Result / Option
    "Result", "Ok", "Err", "Option", "try_fn",
    # Protocols
    "WireProtocol", "ProtocolRegistry", "ProtocolNotEnabled", "get_registry", "set_registry", "reset_registry",
    # Config
    "ApiErrSettings", "get_settings", "clear_settings_cache",
    # Boundary
    "HttpErrorBody", "JsonRpcErrorObject", "http_error_body", "json_rpc_error", "report",
]
