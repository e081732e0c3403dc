"""
Minimal stand-in for the webview host, handy for trying the tools without a
running Tauri app. Replies to every command with canned data.
"""
from __future__ import annotations

import argparse
import asyncio
import json
import logging

logger = logging.getLogger(__name__)
logging.basicConfig(level=logging.INFO)

_BUFFER: list[dict[str, str]] = []


def handle(name: str, args: dict) -> dict:
    window = args.get("window_label", "main")
    if name == "setup_console_capture":
        return {"success": True, "data": {"message": "Event-based console capture setup complete", "window_label": window}}
    if name == "execute_with_console":
        _BUFFER.append({"level": "log", "message": f"executed: {args['code'][:40]}", "session_id": "demo"})
        return {"success": True, "data": {"message": "JavaScript executed with event-based console capture", "window_label": window}}
    if name == "get_console_output":
        entries = list(_BUFFER)
        if args.get("clear_after_read"):
            _BUFFER.clear()
        return {"success": True, "data": {"entries": entries, "total_count": len(entries), "session_id": "demo"}}
    return {"success": False, "error": f"Unknown command: {name}"}


async def serve_client(reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
    while line := await reader.readline():
        request = json.loads(line)
        logger.info("<- %s", request)
        reply = {"id": request["id"], **handle(request["name"], request.get("args", {}))}
        writer.write((json.dumps(reply) + "\n").encode("utf-8"))
        await writer.drain()
    writer.close()


async def main(port: int) -> None:
    server = await asyncio.start_server(serve_client, "127.0.0.1", port)
    logger.info("Fake host listening on 127.0.0.1:%d", port)
    async with server:
        await server.serve_forever()


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--port", type=int, default=4000)
    args = parser.parse_args()

    asyncio.run(main(args.port))
