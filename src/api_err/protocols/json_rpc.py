"""JSON-RPC error code mapping.

Codes come from the reserved ranges of the JSON-RPC 2.0 specification:
-32600 is "Invalid Request" and -32099..-32000 is the implementation-defined
server error range.
"""

from __future__ import annotations

from api_err.errors.category import BadRequest, Category, Custom

SERVER_ERROR = -32000
INVALID_REQUEST = -32600
INTERNAL_ERROR = -32603

# Implementation-defined server errors
SERVER_ERROR_RANGE = range(-32099, -31999)


def is_server_error(code: int) -> bool:
    """Whether ``code`` reports a fault on the server side."""
    return code in SERVER_ERROR_RANGE or code == INTERNAL_ERROR


def status_code(category: Category | None) -> int:
    """JSON-RPC error code for ``category``. Uncategorized errors are server errors."""
    match category:
        case None:
            return SERVER_ERROR
        case BadRequest():
            return INVALID_REQUEST
        case Custom(json_rpc_status=int() as code):
            return code
        case _:
            return SERVER_ERROR
