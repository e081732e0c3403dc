"""Shared fixtures: an in-process webview host speaking newline-delimited JSON."""

from __future__ import annotations

import asyncio
import json
from typing import Any, Mapping

import pytest_asyncio

from console_bridge.relay import RelayClient
from console_bridge.settings import ConnectionType, RelaySettings


class FakeHost:
    """Accepts relay connections, queues requests, replies on demand."""

    def __init__(self) -> None:
        self.requests: asyncio.Queue[dict[str, Any]] = asyncio.Queue()
        self.writers: list[asyncio.StreamWriter] = []
        self.server: asyncio.AbstractServer | None = None
        self.port = 0

    async def start_tcp(self) -> None:
        self.server = await asyncio.start_server(self._handle, "127.0.0.1", 0)
        self.port = self.server.sockets[0].getsockname()[1]

    async def start_unix(self, path: str) -> None:
        self.server = await asyncio.start_unix_server(self._handle, path)

    async def _handle(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        self.writers.append(writer)
        while True:
            line = await reader.readline()
            if not line:
                break
            await self.requests.put(json.loads(line))

    async def next_request(self, timeout: float = 2.0) -> dict[str, Any]:
        return await asyncio.wait_for(self.requests.get(), timeout)

    async def send_raw(self, data: bytes) -> None:
        writer = self.writers[-1]
        writer.write(data)
        await writer.drain()

    async def reply(self, msg: Mapping[str, Any]) -> None:
        await self.send_raw((json.dumps(msg) + "\n").encode("utf-8"))

    async def drop_connections(self) -> None:
        for writer in self.writers:
            writer.close()
        self.writers.clear()

    async def stop(self) -> None:
        await self.drop_connections()
        if self.server is not None:
            self.server.close()
            await self.server.wait_closed()


@pytest_asyncio.fixture
async def host():
    fake = FakeHost()
    await fake.start_tcp()
    try:
        yield fake
    finally:
        await fake.stop()


@pytest_asyncio.fixture
async def ipc_host(tmp_path):
    path = str(tmp_path / "host.sock")
    fake = FakeHost()
    await fake.start_unix(path)
    try:
        yield fake, path
    finally:
        await fake.stop()


@pytest_asyncio.fixture
async def relay(host: FakeHost):
    client = RelayClient(RelaySettings(connection_type=ConnectionType.TCP, port=host.port, timeout=2.0))
    try:
        yield client
    finally:
        await client.aclose()
