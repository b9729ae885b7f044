"""Error categories: coarse classification of why an operation failed.

A category is what protocol adapters read to pick a wire-level status code.
The variant set is open: new named categories may be added, so any ``match``
over a category outside this package must keep a ``case _:`` arm.

Example:
    >>> from api_err.errors import BAD_REQUEST, BadRequest, Custom
    >>> BAD_REQUEST == BadRequest()
    True
    >>> Custom(http_status=418).custom_codes()
    (418, None)
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from .types import JsonDict

_I32_MIN, _I32_MAX = -(2**31), 2**31 - 1


class CategoryKind(StrEnum):
    """Values of the ``kind`` tag carried by every category variant."""
    BAD_REQUEST = "bad_request"
    CUSTOM = "custom"


class Category(BaseModel):
    """Base of all category variants. Frozen, compared structurally."""

    model_config = ConfigDict(frozen=True, extra="forbid", revalidate_instances="never")

    @property
    def is_bad_request(self) -> bool:
        return False

    def custom_codes(self) -> tuple[int | None, int | None] | None:
        """(http_status, json_rpc_status) for Custom categories, None otherwise."""
        return None


class BadRequest(Category):
    """The client made an invalid request. Usually bad input."""

    model_config = ConfigDict(json_schema_extra={"title": "Bad Request"})

    kind: Literal["bad_request"] = Field(default="bad_request", repr=False)

    @property
    def is_bad_request(self) -> bool:
        return True


class Custom(Category):
    """Fallback for arbitrary status codes without a dedicated variant.

    Either code may be omitted; a mapper asked for a missing code uses its
    protocol default.

    Attributes:
        http_status: HTTP status, validated to 100..599
        json_rpc_status: JSON-RPC error code, validated to a signed 32-bit int
    """

    model_config = ConfigDict(
        json_schema_extra={
            "title": "Custom Category",
            "examples": [{"kind": "custom", "http_status": 418, "json_rpc_status": -32099}],
        },
    )

    kind: Literal["custom"] = Field(default="custom", repr=False)
    http_status: Annotated[int, Field(ge=100, le=599)] | None = None
    json_rpc_status: Annotated[int, Field(ge=_I32_MIN, le=_I32_MAX)] | None = None

    def custom_codes(self) -> tuple[int | None, int | None]:
        return self.http_status, self.json_rpc_status


BAD_REQUEST: BadRequest = BadRequest()

AnyCategory = Annotated[Union[BadRequest, Custom], Field(discriminator="kind")]

_CategoryAdapter: TypeAdapter[AnyCategory] = TypeAdapter(AnyCategory)


def parse_category(data: JsonDict) -> Category:
    """Validate a dumped category (``{"kind": ...}``) back into its variant."""
    return _CategoryAdapter.validate_python(data)
