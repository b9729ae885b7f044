"""Protocol status mappers: translate an optional Category into a wire status code.

- http: 500 / 400 / custom
- json_rpc: -32000 / -32600 / custom
- ProtocolRegistry: the mappers enabled for this application
"""

from . import http, json_rpc
from .registry import (
    ProtocolNotEnabled,
    ProtocolRegistry,
    StatusMapper,
    WireProtocol,
    get_registry,
    reset_registry,
    set_registry,
)

__all__ = [
    "http", "json_rpc",
    "ProtocolNotEnabled", "ProtocolRegistry", "StatusMapper", "WireProtocol",
    "get_registry", "reset_registry", "set_registry",
]
