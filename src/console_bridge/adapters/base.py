"""Shared tool adapter: validate, relay, render."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Protocol, Type

from mcp import types as mcp_types
from pydantic import ValidationError

from console_bridge._exceptions import InvalidArgumentError, classify_error
from console_bridge.args import ToolArgs
from console_bridge.result import UNKNOWN_ERROR, CommandResult, Err, Ok
from console_bridge.types import ToolResponse

__all__ = ["CommandRelay", "ToolAdapter"]

logger = logging.getLogger(__name__)


class CommandRelay(Protocol):
    """Anything that can forward a named command and return a CommandResult."""

    async def send_command(self, name: str, args: Mapping[str, Any]) -> CommandResult:
        ...


@dataclass(frozen=True)
class ToolAdapter:
    """
    One exposed tool.

    The adapter knows nothing about what the host does with the command: it
    checks the argument shape, forwards the record under its fixed name and
    turns the result into a ``ToolResponse``.
    """

    name: str
    description: str
    args_model: Type[ToolArgs]
    success_prefix: str
    failure_prefix: str
    logger: logging.Logger = field(default=logger, repr=False, compare=False)

    def validate(self, raw_args: Optional[Mapping[str, Any]]) -> dict[str, Any]:
        """Return the wire record for *raw_args* or raise InvalidArgumentError."""
        try:
            parsed = self.args_model.model_validate(dict(raw_args or {}))
        except ValidationError as exc:
            raise InvalidArgumentError(self.name, exc.errors(include_url=False)) from exc
        return parsed.to_record()

    async def invoke(self, relay: CommandRelay, raw_args: Optional[Mapping[str, Any]] = None) -> ToolResponse:
        """
        Run the tool once.

        Raises:
            InvalidArgumentError: arguments fail the schema; the relay is not called.
        """
        args = self.validate(raw_args)
        try:
            result = await relay.send_command(self.name, args)
        except Exception as exc:
            kind, msg = classify_error(exc, self.logger)
            result = Err(msg, kind)
        return self.render(result)

    def render(self, result: CommandResult) -> ToolResponse:
        if isinstance(result, Ok):
            try:
                body = json.dumps(result.data, indent=2)
            except (TypeError, ValueError) as exc:
                kind, msg = classify_error(exc, self.logger)
                result = Err(f"Unable to render reply: {msg}", kind)
            else:
                return ToolResponse.text(f"{self.success_prefix}\n{body}")
        self.logger.info("%s failed (%s): %s", self.name, result.kind, result.message)
        return ToolResponse.text(f"{self.failure_prefix} {result.message or UNKNOWN_ERROR}", is_error=True)

    def input_schema(self) -> dict[str, Any]:
        return self.args_model.model_json_schema()

    def to_mcp_tool(self) -> mcp_types.Tool:
        return mcp_types.Tool(name=str(self.name), description=self.description, inputSchema=self.input_schema())
