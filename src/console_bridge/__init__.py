"""
Console Bridge - MCP tools relaying console capture commands to a Tauri webview host.
"""

__version__ = "0.1.0"

from ._exceptions import (
    ConsoleBridgeError,
    ErrorKind,
    InvalidArgumentError,
    UnknownToolError,
)
from .adapters import ToolAdapter
from .registry import AdapterRegistry, create_registry
from .relay import RelayClient
from .result import CommandResult, Err, Ok
from .settings import ConnectionType, RelaySettings
from .types import CommandEnvelope, OperationName, TextBlock, ToolResponse

__all__ = [
    "ConsoleBridgeError",
    "ErrorKind",
    "InvalidArgumentError",
    "UnknownToolError",
    "ToolAdapter",
    "AdapterRegistry",
    "create_registry",
    "RelayClient",
    "CommandResult",
    "Ok",
    "Err",
    "ConnectionType",
    "RelaySettings",
    "CommandEnvelope",
    "OperationName",
    "TextBlock",
    "ToolResponse",
]
