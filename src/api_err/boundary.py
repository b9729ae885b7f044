"""Boundary helpers: turn a final ApiError into a response payload or a log line.

The error layer itself never logs or serializes; this module is where an
application does both, once, at the edge.

Example:
    >>> err = ApiError.msg("limit must be positive").bad_request()
    >>> http_error_body(err).model_dump()
    {'status': 400, 'message': 'limit must be positive', 'category': 'bad_request', 'causes': None}
    >>> json_rpc_error(err).code
    -32600
"""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from api_err.config import get_settings
from api_err.errors import ApiError
from api_err.errors.types import JsonDict
from api_err.observability import BoundLogger, get_logger
from api_err.protocols import WireProtocol, http, json_rpc

# Messages shown for uncategorized errors when causes aren't exposed
_GENERIC_MESSAGES: dict[str, str] = {
    WireProtocol.HTTP: "Internal server error",
    WireProtocol.JSON_RPC: "Server error",
}


class HttpErrorBody(BaseModel):
    """JSON body for an HTTP error response."""

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={"examples": [{"status": 400, "message": "invalid limit", "category": "bad_request"}]},
    )

    status: Annotated[int, Field(ge=100, le=599)]
    message: str
    category: str | None = None
    causes: list[str] | None = Field(default=None, description="Cause chain, newest first")


class JsonRpcErrorObject(BaseModel):
    """JSON-RPC 2.0 error object (the ``error`` member of a response)."""

    model_config = ConfigDict(frozen=True)

    code: int
    message: str
    data: JsonDict | None = None


def _message(err: ApiError, protocol: str, expose: bool) -> str:
    if err.category is None and not expose:
        return _GENERIC_MESSAGES.get(protocol, "Internal error")
    return str(err)


def _expose(expose_causes: bool | None) -> bool:
    return get_settings().expose_causes if expose_causes is None else expose_causes


def http_error_body(err: ApiError, *, expose_causes: bool | None = None) -> HttpErrorBody:
    """Build the HTTP error body. ``expose_causes`` defaults to ``API_ERR_EXPOSE_CAUSES``."""
    expose = _expose(expose_causes)
    return HttpErrorBody(
        status=err.http_status(),
        message=_message(err, WireProtocol.HTTP, expose),
        category=str(err.category.kind) if err.category is not None else None,
        causes=list(err.chain.layers()) if expose else None,
    )


def json_rpc_error(err: ApiError, *, expose_causes: bool | None = None) -> JsonRpcErrorObject:
    """Build the JSON-RPC error object. Causes travel in ``data`` when exposed."""
    expose = _expose(expose_causes)
    data: JsonDict = {}
    if err.category is not None:
        data["category"] = str(err.category.kind)
    if expose:
        data["causes"] = list(err.chain.layers())
    return JsonRpcErrorObject(
        code=err.json_rpc_status(),
        message=_message(err, WireProtocol.JSON_RPC, expose),
        data=data or None,
    )


def _is_server_fault(err: ApiError, protocol: str, status: int) -> bool:
    if err.category is None:
        return True
    match protocol:
        case WireProtocol.HTTP:
            return http.is_server_error(status)
        case WireProtocol.JSON_RPC:
            return json_rpc.is_server_error(status)
        case _:
            return False


def report(err: ApiError, protocol: str, *, log: BoundLogger | None = None) -> int:
    """Log ``err`` once at the boundary and return its status for ``protocol``.

    Server-side statuses are logged at error level with the verbose chain:
    every uncategorized error, and categorized ones mapping to HTTP 5xx or a
    JSON-RPC server error code. Anything else is the client's doing and is
    logged at info.
    """
    status = err.status_code(protocol)
    log = (log or get_logger("api_err.boundary")).bind_error(err).bind(protocol=str(protocol), status=status)
    if _is_server_fault(err, protocol, status):
        log.error("request failed", chain=err.format(verbose=True, include_details=True))
    else:
        log.info("request rejected")
    return status
