from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from console_bridge._exceptions import ConsoleBridgeError, ErrorKind

__all__ = ["Ok", "Err", "CommandResult", "UNKNOWN_ERROR"]

UNKNOWN_ERROR = "Unknown error"


@dataclass(frozen=True, slots=True)
class Ok:
    """Successful command; ``data`` is the host payload, passed through untouched."""

    data: Any = None

    @property
    def is_error(self) -> bool:
        return False

    def unwrap(self) -> Any:
        return self.data


@dataclass(frozen=True, slots=True)
class Err:
    """Failed command with a human-readable message."""

    message: str = UNKNOWN_ERROR
    kind: ErrorKind = ErrorKind.REMOTE_FAILURE

    @property
    def is_error(self) -> bool:
        return True

    def unwrap(self) -> Any:
        raise ConsoleBridgeError(f"{self.kind}: {self.message}")


CommandResult = Union[Ok, Err]
