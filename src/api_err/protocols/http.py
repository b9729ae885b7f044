"""HTTP status mapping."""

from __future__ import annotations

from api_err.errors.category import BadRequest, Category, Custom

INTERNAL_SERVER_ERROR = 500
BAD_REQUEST_STATUS = 400


def is_server_error(status: int) -> bool:
    """Whether ``status`` is in the 5xx class."""
    return status >= 500


def status_code(category: Category | None) -> int:
    """HTTP status for ``category``. Uncategorized errors are server errors."""
    match category:
        case None:
            return INTERNAL_SERVER_ERROR
        case BadRequest():
            return BAD_REQUEST_STATUS
        case Custom(http_status=int() as status):
            return status
        case _:
            return INTERNAL_SERVER_ERROR
