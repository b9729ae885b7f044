"""Tests for the category model.

Validates:
- Structural equality and hashing
- Custom code validation
- Serialization through the discriminated union
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from api_err.errors import BAD_REQUEST, BadRequest, Category, CategoryKind, Custom, parse_category


# ═════════════════════════════════════════════════════════════════════════════
# Equality
# ═════════════════════════════════════════════════════════════════════════════


def test_bad_request_values_are_equal() -> None:
    assert BadRequest() == BadRequest()
    assert BAD_REQUEST == BadRequest()
    assert hash(BAD_REQUEST) == hash(BadRequest())


def test_custom_equal_iff_codes_match() -> None:
    assert Custom(http_status=418, json_rpc_status=-32099) == Custom(http_status=418, json_rpc_status=-32099)
    assert Custom(http_status=418) != Custom(http_status=419)
    assert Custom(json_rpc_status=-32001) != Custom(json_rpc_status=-32002)


def test_different_variants_never_equal() -> None:
    assert BAD_REQUEST != Custom(http_status=400, json_rpc_status=-32600)


def test_categories_are_frozen() -> None:
    custom = Custom(http_status=418)
    with pytest.raises(ValidationError):
        custom.http_status = 500  # type: ignore[misc]


def test_variants_share_base() -> None:
    assert isinstance(BAD_REQUEST, Category)
    assert isinstance(Custom(), Category)


# ═════════════════════════════════════════════════════════════════════════════
# Query helpers
# ═════════════════════════════════════════════════════════════════════════════


def test_is_bad_request() -> None:
    assert BAD_REQUEST.is_bad_request
    assert not Custom(http_status=400).is_bad_request


def test_custom_codes() -> None:
    assert Custom(http_status=418, json_rpc_status=-32099).custom_codes() == (418, -32099)
    assert Custom(http_status=418).custom_codes() == (418, None)
    assert BAD_REQUEST.custom_codes() is None


def test_kind_discriminator() -> None:
    assert BAD_REQUEST.kind == CategoryKind.BAD_REQUEST
    assert Custom().kind == CategoryKind.CUSTOM


def test_repr_hides_kind() -> None:
    assert repr(BAD_REQUEST) == "BadRequest()"
    assert repr(Custom(http_status=418)) == "Custom(http_status=418, json_rpc_status=None)"


# ═════════════════════════════════════════════════════════════════════════════
# Validation
# ═════════════════════════════════════════════════════════════════════════════


@pytest.mark.parametrize("status", [0, 99, 600, 65535])
def test_custom_rejects_invalid_http_status(status: int) -> None:
    with pytest.raises(ValidationError):
        Custom(http_status=status)


@pytest.mark.parametrize("code", [-(2**31) - 1, 2**31])
def test_custom_rejects_out_of_range_json_rpc_status(code: int) -> None:
    with pytest.raises(ValidationError):
        Custom(json_rpc_status=code)


def test_custom_accepts_boundary_values() -> None:
    assert Custom(http_status=100, json_rpc_status=-(2**31)).custom_codes() == (100, -(2**31))
    assert Custom(http_status=599, json_rpc_status=2**31 - 1).custom_codes() == (599, 2**31 - 1)


def test_custom_rejects_unknown_fields() -> None:
    with pytest.raises(ValidationError):
        Custom(grpc_status=3)  # type: ignore[call-arg]


# ═════════════════════════════════════════════════════════════════════════════
# Serialization
# ═════════════════════════════════════════════════════════════════════════════


def test_dump_includes_kind() -> None:
    assert BAD_REQUEST.model_dump(mode="json") == {"kind": "bad_request"}
    assert Custom(http_status=418).model_dump(mode="json") == {
        "kind": "custom", "http_status": 418, "json_rpc_status": None,
    }


def test_parse_category_restores_variant() -> None:
    assert parse_category({"kind": "bad_request"}) == BAD_REQUEST
    assert parse_category({"kind": "custom", "json_rpc_status": -32099}) == Custom(json_rpc_status=-32099)


def test_parse_category_rejects_unknown_kind() -> None:
    with pytest.raises(ValidationError):
        parse_category({"kind": "teapot"})


# ═════════════════════════════════════════════════════════════════════════════
# Matching
# ═════════════════════════════════════════════════════════════════════════════


def _describe(category: Category) -> str:
    match category:
        case BadRequest():
            return "bad request"
        case Custom(http_status=int() as status):
            return f"custom {status}"
        case _:
            return "other"


def test_match_with_wildcard_arm() -> None:
    assert _describe(BAD_REQUEST) == "bad request"
    assert _describe(Custom(http_status=409)) == "custom 409"
    assert _describe(Custom(json_rpc_status=-32001)) == "other"
