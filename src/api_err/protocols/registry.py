"""Registry of enabled protocol status mappers.

Which protocols an application speaks is decided at startup from
configuration (``API_ERR_PROTOCOL_HTTP`` / ``API_ERR_PROTOCOL_JSON_RPC``).
Each mapper is independent of the others; zero, one or both may be enabled.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, Callable, TypeAlias

from . import http, json_rpc

if TYPE_CHECKING:
    from collections.abc import Iterator

    from api_err.config import ApiErrSettings
    from api_err.errors.category import Category

StatusMapper: TypeAlias = Callable[["Category | None"], int]


class WireProtocol(StrEnum):
    """Protocols with a built-in status mapper."""
    HTTP = "http"
    JSON_RPC = "json_rpc"


_BUILTIN_MAPPERS: dict[WireProtocol, StatusMapper] = {
    WireProtocol.HTTP: http.status_code,
    WireProtocol.JSON_RPC: json_rpc.status_code,
}


class ProtocolNotEnabled(LookupError):
    """Raised when asking for the status of a protocol the registry doesn't hold."""

    __slots__ = ("protocol",)

    def __init__(self, protocol: str) -> None:
        self.protocol = protocol
        super().__init__(f"Protocol '{protocol}' is not enabled")


class ProtocolRegistry:
    """Name -> status mapper lookup.

    Example:
        >>> registry = ProtocolRegistry.from_settings(get_settings())
        >>> registry.status_code("http", None)
        500
    """

    __slots__ = ("_mappers",)

    def __init__(self, mappers: dict[str, StatusMapper] | None = None) -> None:
        self._mappers: dict[str, StatusMapper] = dict(mappers or {})

    @classmethod
    def from_settings(cls, settings: ApiErrSettings) -> ProtocolRegistry:
        """Registry holding the built-in mappers switched on in ``settings``."""
        enabled = {WireProtocol.HTTP: settings.protocol.http, WireProtocol.JSON_RPC: settings.protocol.json_rpc}
        return cls({str(p): _BUILTIN_MAPPERS[p] for p, on in enabled.items() if on})

    def register(self, protocol: str, mapper: StatusMapper) -> None:
        """Add or replace the mapper for ``protocol``."""
        self._mappers[str(protocol)] = mapper

    def unregister(self, protocol: str) -> bool:
        """Remove a mapper. Returns True if found."""
        return self._mappers.pop(str(protocol), None) is not None

    def get(self, protocol: str) -> StatusMapper | None:
        return self._mappers.get(str(protocol))

    def status_code(self, protocol: str, category: Category | None) -> int:
        """Map ``category`` through the mapper for ``protocol``."""
        if (mapper := self._mappers.get(str(protocol))) is None:
            raise ProtocolNotEnabled(str(protocol))
        return mapper(category)

    def __contains__(self, protocol: object) -> bool:
        return str(protocol) in self._mappers

    def __iter__(self) -> Iterator[str]:
        return iter(self._mappers)

    def __len__(self) -> int:
        return len(self._mappers)

    def __repr__(self) -> str:
        return f"ProtocolRegistry({sorted(self._mappers)})"


# ─────────────────────────────────────────────────────────────────────────────
# Global registry
# ─────────────────────────────────────────────────────────────────────────────

_registry: ProtocolRegistry | None = None


def get_registry() -> ProtocolRegistry:
    """Global registry, built from settings on first use."""
    global _registry
    if _registry is None:
        from api_err.config import get_settings
        _registry = ProtocolRegistry.from_settings(get_settings())
    return _registry


def set_registry(registry: ProtocolRegistry) -> None:
    """Replace the global registry."""
    global _registry
    _registry = registry


def reset_registry() -> None:
    """Forget the global registry; the next get_registry() rebuilds it from settings."""
    global _registry
    _registry = None
