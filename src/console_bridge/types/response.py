"""Caller-facing response shapes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

from mcp import types as mcp_types

__all__ = ["TextBlock", "ToolResponse"]


@dataclass(slots=True)
class TextBlock:
    text: str
    type: Literal["text"] = "text"

    def as_dict(self) -> dict[str, Any]:
        return {"type": self.type, "text": self.text}


@dataclass(slots=True)
class ToolResponse:
    """Result of one tool invocation: content blocks plus an error flag."""

    content: list[TextBlock] = field(default_factory=list)
    is_error: bool = False

    @classmethod
    def text(cls, text: str, *, is_error: bool = False) -> "ToolResponse":
        return cls(content=[TextBlock(text)], is_error=is_error)

    @property
    def first_text(self) -> str:
        return self.content[0].text if self.content else ""

    def as_dict(self) -> dict[str, Any]:
        """
        Convert to the plain MCP wire shape.

        Returns:
            ``{"content": [{"type": "text", "text": ...}], "isError": bool}``
        """
        return {
            "content": [block.as_dict() for block in self.content],
            "isError": self.is_error,
        }

    def to_mcp(self) -> mcp_types.CallToolResult:
        return mcp_types.CallToolResult(
            content=[mcp_types.TextContent(type="text", text=b.text) for b in self.content],
            isError=self.is_error,
        )

    def __bool__(self) -> bool:
        return not self.is_error
