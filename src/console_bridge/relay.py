"""
Command relay to the web-view host with a single send_command() entry point.

Frames are newline-delimited JSON objects. Each request carries an integer
``id``. Hosts that echo it back get replies matched by id, in any order.
Replies without an ``id`` are matched to the oldest unanswered request, so
hosts that answer in request order work too.
"""

from __future__ import annotations

import asyncio
import collections
import contextlib
import itertools
import json
import logging
from typing import Any, Mapping, Optional

from console_bridge._exceptions import ErrorKind, classify_error
from console_bridge.result import UNKNOWN_ERROR, CommandResult, Err, Ok
from console_bridge.settings import ConnectionType, RelaySettings
from console_bridge.types import CommandEnvelope

_MAX_UNANSWERED = 1024

__all__ = ["RelayClient"]


class RelayClient:
    """
    Async client owning the channel to the web-view host.

    Every failure on the send path (not connected, connection lost, timeout,
    malformed reply, host-reported failure) comes back as an ``Err`` result
    instead of an exception.
    """

    def __init__(
        self,
        settings: Optional[RelaySettings] = None,
        *,
        logger: Optional[logging.Logger] = None,
        name: Optional[str] = None,
    ) -> None:
        """
        Args:
            settings: Connection settings; ``RelaySettings()`` defaults if omitted.
            logger: Optional logger instance. If None, a logger named after
                    this module will be used.
            name: Optional name for this component, used in logging.
        """
        self.settings = settings or RelaySettings()
        self.logger = logger or logging.getLogger(__name__)
        self.name = name or self.__class__.__name__

        self._reader_task: Optional[asyncio.Task[None]] = None
        self._writer: Optional[asyncio.StreamWriter] = None
        self._pending: dict[int, asyncio.Future[CommandResult]] = {}
        self._ids = itertools.count(1)
        # ids in send order that still expect a reply, including expired ones
        self._unanswered: collections.deque[int] = collections.deque(maxlen=_MAX_UNANSWERED)
        self._write_lock = asyncio.Lock()
        self._connect_lock = asyncio.Lock()

    @property
    def connected(self) -> bool:
        return (
            self._writer is not None
            and not self._writer.is_closing()
            and self._reader_task is not None
            and not self._reader_task.done()
        )

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    # --- lifecycle ---------------------------------------------------------
    async def connect(self) -> None:
        """Open the channel and start the reply reader. No-op when already connected."""
        async with self._connect_lock:
            if self.connected:
                return
            s = self.settings
            if s.connection_type is ConnectionType.TCP:
                reader, writer = await asyncio.open_connection(s.host, s.port, limit=s.max_frame_bytes)
            else:
                reader, writer = await asyncio.open_unix_connection(s.socket_path, limit=s.max_frame_bytes)
            self._writer = writer
            self._reader_task = asyncio.create_task(self._read_loop(reader), name=f"{self.name}-reader")
            self._log(f"Connected to host at {s.address}")

    async def aclose(self) -> None:
        """
        Close the channel and resolve every pending call with a transport failure.
        Safe to call multiple times.
        """
        task, self._reader_task = self._reader_task, None
        if task is not None:
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task

        writer, self._writer = self._writer, None
        if writer is not None:
            writer.close()
            with contextlib.suppress(OSError):
                await writer.wait_closed()
            self._log("Channel closed")

        self._fail_pending("Relay closed")

    async def __aenter__(self) -> "RelayClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    # --- commands ----------------------------------------------------------
    async def send_command(
        self,
        name: str,
        args: Optional[Mapping[str, Any]] = None,
        *,
        timeout: Optional[float] = None,
    ) -> CommandResult:
        """
        Send one command and wait for its correlated reply.

        Args:
            name: Operation name understood by the host.
            args: Already-validated argument record.
            timeout: Per-call bound in seconds; defaults to ``settings.timeout``.

        Returns:
            ``Ok(data)`` with the host payload, or ``Err(message, kind)``.
        """
        if not name:
            return Err("Invalid command name: must be non-empty", ErrorKind.TRANSPORT_FAILURE)

        wait = timeout if timeout is not None else self.settings.timeout
        envelope = CommandEnvelope(id=next(self._ids), name=name, args=dict(args or {}))
        try:
            frame = (json.dumps(envelope.to_wire(), separators=(",", ":")) + "\n").encode("utf-8")
        except (TypeError, ValueError) as exc:
            return Err(f"Unable to encode {name} command: {exc}", ErrorKind.TRANSPORT_FAILURE)

        if not self.connected:
            if not self.settings.auto_connect:
                return Err(f"Not connected to host at {self.settings.address}", ErrorKind.TRANSPORT_FAILURE)
            try:
                await asyncio.wait_for(self.connect(), wait)
            except TimeoutError:
                self._log(f"Connecting to {self.settings.address} took longer than {wait:g}s", logging.WARNING)
                return Err(
                    f"Timed out after {wait:g}s connecting to host at {self.settings.address}",
                    ErrorKind.TIMEOUT,
                )
            except OSError as exc:
                _, msg = classify_error(exc, self.logger)
                return Err(f"Unable to reach host at {self.settings.address}: {msg}", ErrorKind.TRANSPORT_FAILURE)

        future: asyncio.Future[CommandResult] = asyncio.get_running_loop().create_future()
        self._pending[envelope.id] = future

        try:
            try:
                await self._write(envelope.id, frame)
            except OSError as exc:
                with contextlib.suppress(ValueError):
                    self._unanswered.remove(envelope.id)
                _, msg = classify_error(exc, self.logger)
                return Err(f"Connection lost while sending {name}: {msg}", ErrorKind.TRANSPORT_FAILURE)

            self._log(f"Sent {name} (id={envelope.id})", logging.DEBUG)
            try:
                return await asyncio.wait_for(future, wait)
            except TimeoutError:
                self._log(f"No reply to {name} (id={envelope.id}) within {wait:g}s", logging.WARNING)
                return Err(f"Timed out after {wait:g}s waiting for reply to {name}", ErrorKind.TIMEOUT)
        finally:
            # late replies for this id are dropped from here on
            self._pending.pop(envelope.id, None)

    async def _write(self, request_id: int, frame: bytes) -> None:
        async with self._write_lock:
            writer = self._writer
            if writer is None or writer.is_closing():
                raise ConnectionError("channel is closed")
            # recorded under the lock so the order matches the order on the wire
            self._unanswered.append(request_id)
            writer.write(frame)
            await writer.drain()

    # --- replies -----------------------------------------------------------
    async def _read_loop(self, reader: asyncio.StreamReader) -> None:
        reason = "Connection to host lost"
        try:
            while True:
                line = await reader.readline()
                if not line:
                    break
                self._dispatch(line)
        except (OSError, ValueError) as exc:  # ValueError: frame over the size limit
            _, msg = classify_error(exc, self.logger)
            reason = f"Connection to host lost: {msg}"

        self._log(reason, logging.WARNING)
        writer, self._writer = self._writer, None
        if writer is not None:
            writer.close()
        self._fail_pending(reason)

    def _dispatch(self, line: bytes) -> None:
        try:
            msg = json.loads(line)
        except ValueError:
            self._log(f"Discarding malformed frame: {line[:120]!r}", logging.WARNING)
            return
        if not isinstance(msg, dict):
            self._log(f"Discarding non-object frame: {line[:120]!r}", logging.WARNING)
            return

        request_id = msg.get("id")
        if request_id is None:
            if not self._unanswered:
                self._log("Discarding reply without an id: nothing is awaiting one", logging.WARNING)
                return
            request_id = self._unanswered.popleft()
        elif not isinstance(request_id, int) or isinstance(request_id, bool):
            self._log(f"Discarding reply without a usable id: {request_id!r}", logging.WARNING)
            return
        else:
            with contextlib.suppress(ValueError):
                self._unanswered.remove(request_id)

        future = self._pending.get(request_id)
        if future is None or future.done():
            self._log(f"Dropping reply for unknown or expired id={request_id}", logging.DEBUG)
            return
        future.set_result(self._to_result(msg))

    @staticmethod
    def _to_result(msg: dict[str, Any]) -> CommandResult:
        success = msg.get("success")
        if success is True:
            return Ok(msg.get("data"))
        if success is False:
            error = msg.get("error")
            if not error:
                return Err(UNKNOWN_ERROR, ErrorKind.REMOTE_FAILURE)
            return Err(error if isinstance(error, str) else json.dumps(error), ErrorKind.REMOTE_FAILURE)
        return Err("Malformed reply: 'success' flag missing or not a boolean", ErrorKind.TRANSPORT_FAILURE)

    def _fail_pending(self, reason: str) -> None:
        pending, self._pending = self._pending, {}
        self._unanswered.clear()
        for future in pending.values():
            if not future.done():
                future.set_result(Err(reason, ErrorKind.TRANSPORT_FAILURE))

    def _log(self, message: str, level: int = logging.INFO) -> None:
        self.logger.log(level, f"[{self.name}] {message}")
