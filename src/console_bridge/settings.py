from __future__ import annotations

import math
import os
from dataclasses import dataclass, replace
from enum import StrEnum
from typing import Any, Final, Mapping, Optional

from dotenv import load_dotenv

from console_bridge._exceptions import ConsoleBridgeError


class ConnectionType(StrEnum):
    TCP = "tcp"
    IPC = "ipc"


DEFAULT_HOST: Final = "127.0.0.1"
DEFAULT_PORT: Final = 4000
DEFAULT_SOCKET_PATH: Final = "/tmp/tauri-mcp.sock"
DEFAULT_TIMEOUT: Final = 5.0
DEFAULT_MAX_FRAME_BYTES: Final = 16 * 1024 * 1024

_ENV_VARS: Final[dict[str, str]] = {
    "connection_type": "CONSOLE_BRIDGE_CONNECTION_TYPE",
    "host": "CONSOLE_BRIDGE_HOST",
    "port": "CONSOLE_BRIDGE_PORT",
    "socket_path": "CONSOLE_BRIDGE_SOCKET_PATH",
    "timeout": "CONSOLE_BRIDGE_TIMEOUT",
}


@dataclass(frozen=True)
class RelaySettings:
    """Where the web-view host listens and how long to wait for it."""

    connection_type: ConnectionType = ConnectionType.IPC
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    socket_path: str = DEFAULT_SOCKET_PATH
    timeout: float = DEFAULT_TIMEOUT
    auto_connect: bool = True
    max_frame_bytes: int = DEFAULT_MAX_FRAME_BYTES

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "connection_type", ConnectionType(self.connection_type))
        except ValueError:
            raise ConsoleBridgeError(f"unknown connection type: {self.connection_type!r}") from None
        if not (math.isfinite(self.timeout) and self.timeout > 0):
            raise ConsoleBridgeError(f"timeout must be a positive finite number, got {self.timeout}")
        if not 0 < self.port < 65536:
            raise ConsoleBridgeError(f"port out of range: {self.port}")

    @property
    def address(self) -> str:
        if self.connection_type is ConnectionType.TCP:
            return f"{self.host}:{self.port}"
        return self.socket_path

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None, **overrides: Any) -> "RelaySettings":
        """
        Build settings from ``CONSOLE_BRIDGE_*`` variables (``.env`` is loaded first).

        Args:
            env: Mapping to read instead of ``os.environ``; ``.env`` is not loaded then.
            **overrides: Explicit values that win over the environment; ``None`` is ignored.
        """
        if env is None:
            load_dotenv()
            env = os.environ

        values: dict[str, Any] = {}
        raw_type = env.get(_ENV_VARS["connection_type"])
        if raw_type:
            try:
                values["connection_type"] = ConnectionType(raw_type.strip().lower())
            except ValueError:
                raise ConsoleBridgeError(
                    f"{_ENV_VARS['connection_type']} must be one of "
                    f"{', '.join(t.value for t in ConnectionType)}, got {raw_type!r}"
                ) from None
        if env.get(_ENV_VARS["host"]):
            values["host"] = env[_ENV_VARS["host"]]
        if env.get(_ENV_VARS["socket_path"]):
            values["socket_path"] = env[_ENV_VARS["socket_path"]]
        if env.get(_ENV_VARS["port"]):
            values["port"] = _parse(env, "port", int)
        if env.get(_ENV_VARS["timeout"]):
            values["timeout"] = _parse(env, "timeout", float)

        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    def copy(self, **kwargs: Any) -> "RelaySettings":
        return replace(self, **kwargs)


def _parse(env: Mapping[str, str], key: str, conv: type) -> Any:
    env_var = _ENV_VARS[key]
    try:
        return conv(env[env_var])
    except ValueError as exc:
        raise ConsoleBridgeError(f"{env_var} is not a valid {conv.__name__}: {env[env_var]!r}") from exc


__all__ = ["ConnectionType", "RelaySettings"]
