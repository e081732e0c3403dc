"""
Wire-level dataclasses for commands sent to the web-view host.

They are intentionally minimal: argument shapes live with the adapters.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

__all__ = ["OperationName", "CommandEnvelope"]


class OperationName(StrEnum):
    GET_CONSOLE_OUTPUT = "get_console_output"
    SETUP_CONSOLE_CAPTURE = "setup_console_capture"
    EXECUTE_WITH_CONSOLE = "execute_with_console"
    GET_CONSOLE_BUFFER = "get_console_buffer"
    GET_JS_RESULT = "get_js_result"
    DIRECT_EVAL = "direct_eval"


@dataclass(slots=True)
class CommandEnvelope:
    """A single request written to the channel."""
    id: int                     # correlation token, echoed back by the host
    name: str
    args: dict[str, Any] = field(default_factory=dict)

    def to_wire(self) -> dict[str, Any]:
        return {"id": self.id, "name": str(self.name), "args": self.args}
