"""Console capture and JavaScript execution tools for the Tauri webview."""
from __future__ import annotations

from console_bridge.adapters.base import ToolAdapter
from console_bridge.args import (
    ConsoleBufferArgs,
    ConsoleOutputArgs,
    DirectEvalArgs,
    ExecuteWithConsoleArgs,
    JsResultArgs,
    SetupConsoleCaptureArgs,
)
from console_bridge.types import OperationName

__all__ = [
    "GET_CONSOLE_OUTPUT",
    "SETUP_CONSOLE_CAPTURE",
    "EXECUTE_WITH_CONSOLE",
    "GET_CONSOLE_BUFFER",
    "GET_JS_RESULT",
    "DIRECT_EVAL",
    "DEFAULT_ADAPTERS",
]

GET_CONSOLE_OUTPUT = ToolAdapter(
    name=OperationName.GET_CONSOLE_OUTPUT,
    description=(
        "Retrieve console output (log, error, warn, info, debug) from the Tauri webview. "
        "This captures JavaScript console messages for debugging and monitoring purposes."
    ),
    args_model=ConsoleOutputArgs,
    success_prefix="Console Output Retrieved:",
    failure_prefix="Failed to get console output:",
)

SETUP_CONSOLE_CAPTURE = ToolAdapter(
    name=OperationName.SETUP_CONSOLE_CAPTURE,
    description=(
        "Initialize console capture system in the Tauri webview. This injects JavaScript code "
        "to intercept all console methods and capture their output for later retrieval."
    ),
    args_model=SetupConsoleCaptureArgs,
    success_prefix="Console capture setup successful:",
    failure_prefix="Failed to setup console capture:",
)

EXECUTE_WITH_CONSOLE = ToolAdapter(
    name=OperationName.EXECUTE_WITH_CONSOLE,
    description=(
        "Execute JavaScript code in the Tauri webview and automatically capture any console "
        "output generated during execution. This combines code execution with console "
        "monitoring for comprehensive debugging."
    ),
    args_model=ExecuteWithConsoleArgs,
    success_prefix="JavaScript executed with console capture:",
    failure_prefix="Failed to execute JavaScript with console capture:",
)

GET_CONSOLE_BUFFER = ToolAdapter(
    name=OperationName.GET_CONSOLE_BUFFER,
    description=(
        "Compile the captured console buffer, JavaScript errors and the last retrieval "
        "result into window.__mcpBufferData in the Tauri webview."
    ),
    args_model=ConsoleBufferArgs,
    success_prefix="Console buffer compiled:",
    failure_prefix="Failed to get console buffer:",
)

GET_JS_RESULT = ToolAdapter(
    name=OperationName.GET_JS_RESULT,
    description=(
        "Read a global JavaScript variable (default window.__mcpLastResult) by logging it "
        "into the captured console buffer under a unique key."
    ),
    args_model=JsResultArgs,
    success_prefix="JavaScript result retrieval executed:",
    failure_prefix="Failed to get JavaScript result:",
)

DIRECT_EVAL = ToolAdapter(
    name=OperationName.DIRECT_EVAL,
    description=(
        "Evaluate a JavaScript function body in the Tauri webview. The return value or "
        "thrown error is stored in window.__mcpLastResult."
    ),
    args_model=DirectEvalArgs,
    success_prefix="JavaScript evaluated:",
    failure_prefix="Failed to evaluate JavaScript:",
)

DEFAULT_ADAPTERS: tuple[ToolAdapter, ...] = (
    GET_CONSOLE_OUTPUT,
    SETUP_CONSOLE_CAPTURE,
    EXECUTE_WITH_CONSOLE,
    GET_CONSOLE_BUFFER,
    GET_JS_RESULT,
    DIRECT_EVAL,
)
