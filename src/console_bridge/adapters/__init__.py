from .base import CommandRelay, ToolAdapter
from .console import (
    DEFAULT_ADAPTERS,
    DIRECT_EVAL,
    EXECUTE_WITH_CONSOLE,
    GET_CONSOLE_BUFFER,
    GET_CONSOLE_OUTPUT,
    GET_JS_RESULT,
    SETUP_CONSOLE_CAPTURE,
)

__all__ = [
    "CommandRelay",
    "ToolAdapter",
    "DEFAULT_ADAPTERS",
    "GET_CONSOLE_OUTPUT",
    "SETUP_CONSOLE_CAPTURE",
    "EXECUTE_WITH_CONSOLE",
    "GET_CONSOLE_BUFFER",
    "GET_JS_RESULT",
    "DIRECT_EVAL",
]
