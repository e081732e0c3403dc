"""
MCP stdio server exposing the console tools.

The relay is opened once at startup and closed on shutdown; stdout carries
the MCP protocol, so logging goes to stderr.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from typing import Any, Optional, Sequence

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from console_bridge import __version__
from console_bridge._exceptions import ConsoleBridgeError
from console_bridge.registry import AdapterRegistry, create_registry
from console_bridge.relay import RelayClient
from console_bridge.settings import ConnectionType, RelaySettings

logger = logging.getLogger(__name__)

SERVER_NAME = "console-bridge"


class ToolExecutionError(ConsoleBridgeError):
    """Carries a failed ToolResponse's text to the MCP error result."""


def create_server(relay: RelayClient, registry: Optional[AdapterRegistry] = None) -> Server:
    """Build an MCP server whose tools forward to *relay*."""
    registry = registry or create_registry()
    server: Server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        return registry.mcp_tools()

    @server.call_tool()
    async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
        response = await registry.dispatch(relay, name, arguments)
        if response.is_error:
            # the framework turns raised errors into isError results with this text
            raise ToolExecutionError(response.first_text)
        return response.to_mcp().content

    return server


async def serve(settings: RelaySettings, registry: Optional[AdapterRegistry] = None) -> None:
    async with RelayClient(settings) as relay:
        try:
            await relay.connect()
        except OSError as exc:
            logger.warning("Host at %s not reachable yet (%s); connecting on first command", settings.address, exc)

        server = create_server(relay, registry)
        async with stdio_server() as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=SERVER_NAME,
        description="MCP server relaying console capture tools to a Tauri webview host.",
    )
    parser.add_argument("--connection-type", choices=[t.value for t in ConnectionType])
    parser.add_argument("--host", help="TCP host of the webview host")
    parser.add_argument("--port", type=int, help="TCP port of the webview host")
    parser.add_argument("--socket-path", help="IPC socket path of the webview host")
    parser.add_argument("--timeout", type=float, help="Seconds to wait for each reply")
    parser.add_argument(
        "--log-level",
        default=os.getenv("CONSOLE_BRIDGE_LOG_LEVEL", "INFO"),
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def settings_from_args(args: argparse.Namespace) -> RelaySettings:
    return RelaySettings.from_env(
        connection_type=args.connection_type,
        host=args.host,
        port=args.port,
        socket_path=args.socket_path,
        timeout=args.timeout,
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=args.log_level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = settings_from_args(args)
    except ConsoleBridgeError as exc:
        logger.error("Invalid configuration: %s", exc)
        return 2

    logger.info("Starting %s %s (host: %s)", SERVER_NAME, __version__, settings.address)
    try:
        asyncio.run(serve(settings))
    except KeyboardInterrupt:
        logger.info("Shutting down")
    return 0


if __name__ == "__main__":
    sys.exit(main())
