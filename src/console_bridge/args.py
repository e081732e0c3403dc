"""
Argument records for each tool.

Contract
- Every model validates the raw ``arguments`` dict an MCP client sends.
- Unknown keys are ignored, not forwarded.
- ``None`` fields are dropped before the record goes on the wire, so
  ``{}`` in means ``{}`` out and the host applies its own defaults
  (``window_label`` falls back to ``"main"`` on the host side).
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "ToolArgs",
    "ConsoleOutputArgs",
    "SetupConsoleCaptureArgs",
    "ExecuteWithConsoleArgs",
    "ConsoleBufferArgs",
    "JsResultArgs",
    "DirectEvalArgs",
]

_WINDOW_LABEL = "Window label of the target webview (host default: main)"


class ToolArgs(BaseModel):
    model_config = ConfigDict(extra="ignore")

    def to_record(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class ConsoleOutputArgs(ToolArgs):
    window_label: Optional[str] = Field(default=None, description="Window label to get console output from")
    session_id: Optional[str] = Field(default=None, description="Console session ID for filtering")
    clear_after_read: Optional[bool] = Field(
        default=None, description="Whether to clear console buffer after reading"
    )


class SetupConsoleCaptureArgs(ToolArgs):
    window_label: Optional[str] = Field(default=None, description="Window label to setup console capture for")


class ExecuteWithConsoleArgs(ToolArgs):
    window_label: Optional[str] = Field(default=None, description="Window label to execute JavaScript in")
    code: str = Field(min_length=1, description="JavaScript code to execute")
    capture_output: Optional[bool] = Field(default=None, description="Whether to capture console output")


class ConsoleBufferArgs(ToolArgs):
    window_label: Optional[str] = Field(default=None, description=_WINDOW_LABEL)
    filter: Optional[str] = Field(default=None, description="Only include messages containing this text")


class JsResultArgs(ToolArgs):
    window_label: Optional[str] = Field(default=None, description=_WINDOW_LABEL)
    variable_name: Optional[str] = Field(
        default=None, description="Global variable to read (host default: __mcpLastResult)"
    )


class DirectEvalArgs(ToolArgs):
    window_label: Optional[str] = Field(default=None, description=_WINDOW_LABEL)
    code: str = Field(min_length=1, description="JavaScript function body to evaluate")
