"""Shared type aliases for the error layer."""

from __future__ import annotations

from typing import Any, Callable, TypeAlias, Union

# JSON type aliases - Any for recursive slots to avoid Pydantic resolution issues
JsonPrimitive = Union[str, int, float, bool, None]
JsonValue = Union[JsonPrimitive, list[Any], dict[str, Any]]
JsonDict = dict[str, Any]

# Lazily computed context message (only called on the failure path)
MessageFn: TypeAlias = Callable[[], object]
