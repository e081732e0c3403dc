"""
Translate relay and transport failures into a small set of error kinds,
while keeping the original exception around for full tracebacks.
"""

from __future__ import annotations

import asyncio
import json
import logging
from enum import StrEnum
from typing import Any, Final, Optional, Type

__all__: tuple[str, ...] = (
    "ConsoleBridgeError",
    "InvalidArgumentError",
    "UnknownToolError",
    "ErrorKind",
    "classify_error",
)


class ConsoleBridgeError(RuntimeError):
    """Public bridge-level exception."""


class InvalidArgumentError(ConsoleBridgeError, ValueError):
    """Raised when tool arguments fail the declared schema.

    Attributes:
        operation: The tool the arguments were meant for.
        errors: Structured validation errors (pydantic ``errors()`` shape).
    """

    operation: str
    errors: list[dict[str, Any]]

    def __init__(self, operation: str, errors: list[dict[str, Any]]) -> None:
        details = "; ".join(
            f"{'.'.join(str(p) for p in err.get('loc', ())) or '<root>'}: {err.get('msg')}"
            for err in errors
        )
        super().__init__(f"Invalid arguments for {operation}: {details}")
        self.operation = operation
        self.errors = errors


class UnknownToolError(ConsoleBridgeError, KeyError):
    """Raised when no adapter is registered under the requested name."""

    def __str__(self) -> str:
        return RuntimeError.__str__(self)


class ErrorKind(StrEnum):
    REMOTE_FAILURE = "remote_failure"
    TRANSPORT_FAILURE = "transport_failure"
    TIMEOUT = "timeout"
    UNEXPECTED_FAULT = "unexpected_fault"


CONN_ERRORS: Final[tuple[Type[BaseException], ...]] = (
    ConnectionError,
    asyncio.IncompleteReadError,
    EOFError,
    OSError,
)

TIMEOUT_ERRORS: Final[tuple[Type[BaseException], ...]] = (
    TimeoutError,
    asyncio.TimeoutError,
)

DECODE_ERRORS: Final[tuple[Type[BaseException], ...]] = (
    json.JSONDecodeError,
    UnicodeDecodeError,
)


def classify_error(
    exc: BaseException,
    logger: Optional[logging.Logger] = None,
) -> tuple[ErrorKind, str]:
    """
    Classify an exception and return its error kind plus a concise message.

    Args:
        exc: The caught exception
        logger: Logger for recording the error

    Returns:
        ``(kind, message)`` suitable for building an ``Err`` result
    """
    log = logger or logging.getLogger("console_bridge.exceptions")
    detail = str(exc) or exc.__class__.__name__

    # TimeoutError is an OSError subclass, so it is checked first
    if isinstance(exc, TIMEOUT_ERRORS):
        kind, msg = ErrorKind.TIMEOUT, f"Timeout: {detail}"
    elif isinstance(exc, DECODE_ERRORS):
        kind, msg = ErrorKind.TRANSPORT_FAILURE, f"Malformed reply: {detail}"
    elif isinstance(exc, CONN_ERRORS):
        kind, msg = ErrorKind.TRANSPORT_FAILURE, f"Connection error: {detail}"
    else:
        msg = f"{exc.__class__.__name__}: {detail}"
        log.exception(msg, exc_info=exc)  # stack trace for unknown errors
        return ErrorKind.UNEXPECTED_FAULT, msg

    log.warning(msg)
    return kind, msg
