"""Error classification and context for api_err.

- Category/BadRequest/Custom: coarse classification of a failure
- CauseChain: original failure plus layered context
- ApiError: the error value (chain + optional category)
- Result/Ok/Err/Option: fallible values with category and context combinators
"""

from .category import BAD_REQUEST, AnyCategory, BadRequest, Category, CategoryKind, Custom, parse_category
from .chain import CauseChain, validate_chain
from .errors import ApiError, categorize, into_api_error
from .result import Err, Ok, Option, Result, try_fn
from .types import JsonDict, JsonValue, MessageFn

__all__ = [
    # Categories
    "Category", "CategoryKind", "BadRequest", "Custom", "BAD_REQUEST", "AnyCategory", "parse_category",
    # Cause chain
    "CauseChain", "validate_chain",
    # Error value
    "ApiError", "into_api_error", "categorize",
    # Result / Option
    "Result", "Ok", "Err", "Option", "try_fn",
    # Types
    "JsonDict", "JsonValue", "MessageFn",
]
