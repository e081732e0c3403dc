from __future__ import annotations

from types import MappingProxyType
from typing import Any, Iterable, Iterator, Mapping, Optional

from mcp import types as mcp_types

from console_bridge._exceptions import UnknownToolError
from console_bridge.adapters import DEFAULT_ADAPTERS, CommandRelay, ToolAdapter
from console_bridge.types import ToolResponse

__all__ = ["AdapterRegistry", "create_registry"]


class AdapterRegistry:
    """Fixed table mapping an operation name to its adapter."""

    def __init__(self, adapters: Iterable[ToolAdapter]) -> None:
        table: dict[str, ToolAdapter] = {}
        for adapter in adapters:
            key = str(adapter.name)
            if key in table:
                raise ValueError(f"Duplicate tool name: {key}")
            table[key] = adapter
        self._adapters: Mapping[str, ToolAdapter] = MappingProxyType(table)

    def __contains__(self, name: object) -> bool:
        return name in self._adapters

    def __iter__(self) -> Iterator[ToolAdapter]:
        return iter(self._adapters.values())

    def __len__(self) -> int:
        return len(self._adapters)

    @property
    def names(self) -> list[str]:
        return list(self._adapters)

    def get(self, name: str) -> ToolAdapter:
        try:
            return self._adapters[name]
        except KeyError:
            raise UnknownToolError(f"Unknown tool: {name}") from None

    async def dispatch(
        self,
        relay: CommandRelay,
        name: str,
        arguments: Optional[Mapping[str, Any]] = None,
    ) -> ToolResponse:
        return await self.get(name).invoke(relay, arguments)

    def mcp_tools(self) -> list[mcp_types.Tool]:
        return [adapter.to_mcp_tool() for adapter in self]


def create_registry(adapters: Optional[Iterable[ToolAdapter]] = None) -> AdapterRegistry:
    """
    Factory for the tool registry.

    Args:
        adapters: Adapters to expose; defaults to every built-in console tool.
    """
    return AdapterRegistry(DEFAULT_ADAPTERS if adapters is None else adapters)
