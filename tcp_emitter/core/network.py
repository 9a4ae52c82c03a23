from __future__ import annotations

import asyncio
import codecs
import contextlib
import logging
from collections.abc import Callable
from typing import Any, Dict, Optional, Protocol

from tcp_emitter.config import CLIENT_CONFIG
from tcp_emitter.protocol.constants import ENCODING
from tcp_emitter.protocol.errors import ErrorCode, ProtocolError, StatusCode

logger = logging.getLogger(__name__)

ConnectHandler = Callable[[], Any]
DataHandler = Callable[[str], Any]
CloseHandler = Callable[[Optional[BaseException]], Any]


class NetworkError(ProtocolError):
    """Network level error surfaced to higher layers."""

    pass


class Transport(Protocol):
    """What the client needs from a stream connection."""

    def bind(self, on_connect: ConnectHandler, on_data: DataHandler, on_close: CloseHandler) -> None: ...

    async def connect(self, host: str, port: int) -> None: ...

    def write(self, data: str) -> None: ...

    def abort(self, exc: Optional[BaseException] = None) -> None: ...

    async def close(self) -> None: ...


def _noop(*_args: Any) -> None:
    return None


class StreamTransport:
    """asyncio TCP stream that reports connect/data/close to its owner.

    Incoming bytes are decoded incrementally, so a multi-byte character split
    across two reads reaches the data handler intact. Writes are fire and
    forget: no drain, no delivery confirmation.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None) -> None:
        self.config = config or CLIENT_CONFIG
        self.read_chunk_size: int = int(self.config["read_chunk_size"])
        self.connect_timeout: float = float(self.config["connect_timeout"])
        self.backoff: float = float(self.config["reconnect_backoff"])
        self.max_backoff: float = float(self.config["max_reconnect_backoff"])
        self.max_retries: int = int(self.config["max_reconnect_retries"])

        self.host: Optional[str] = None
        self.port: Optional[int] = None
        self.reader: Optional[asyncio.StreamReader] = None
        self.writer: Optional[asyncio.StreamWriter] = None
        self.connected: bool = False
        self._receive_task: Optional[asyncio.Task] = None
        self._decoder = codecs.getincrementaldecoder(ENCODING)(errors="replace")
        self._on_connect: ConnectHandler = _noop
        self._on_data: DataHandler = _noop
        self._on_close: CloseHandler = _noop

    def bind(self, on_connect: ConnectHandler, on_data: DataHandler, on_close: CloseHandler) -> None:
        self._on_connect = on_connect
        self._on_data = on_data
        self._on_close = on_close

    async def connect(self, host: str, port: int) -> None:
        if self.connected:
            return

        self.host, self.port = host, int(port)
        retries = 0
        delay = self.backoff
        while True:
            try:
                self.reader, self.writer = await asyncio.wait_for(
                    asyncio.open_connection(self.host, self.port), timeout=self.connect_timeout
                )
                break
            except (OSError, asyncio.TimeoutError) as exc:
                retries += 1
                logger.warning("Connect attempt %s to %s:%s failed: %s", retries, self.host, self.port, exc)
                if retries > self.max_retries:
                    raise NetworkError(
                        StatusCode.SERVICE_UNAVAILABLE,
                        ErrorCode.CONNECT_FAILED,
                        f"Could not connect to {self.host}:{self.port}: {exc}",
                    ) from exc
                await asyncio.sleep(delay)
                delay = min(delay * 2, self.max_backoff)

        self.connected = True
        self._decoder.reset()
        logger.info("Connected to %s:%s", self.host, self.port)
        self._on_connect()
        self._receive_task = asyncio.create_task(self._receive_loop(), name="emitter-recv-loop")

    def write(self, data: str) -> None:
        if not self.connected or self.writer is None:
            raise NetworkError(StatusCode.SERVICE_UNAVAILABLE, message="Transport is not connected")
        self.writer.write(data.encode(ENCODING))

    def abort(self, exc: Optional[BaseException] = None) -> None:
        """Drop the connection immediately and notify the owner once."""
        if not self.connected:
            return
        self.connected = False
        if self._receive_task and self._receive_task is not asyncio.current_task():
            self._receive_task.cancel()
        if self.writer:
            self.writer.close()
        logger.info("Connection to %s:%s closed", self.host, self.port)
        self._on_close(exc)

    async def close(self) -> None:
        writer = self.writer
        self.abort()
        if self._receive_task and self._receive_task is not asyncio.current_task():
            with contextlib.suppress(asyncio.CancelledError):
                await self._receive_task
        self._receive_task = None
        if writer is not None:
            with contextlib.suppress(ConnectionError, OSError):
                await writer.wait_closed()
        self.writer = None
        self.reader = None

    async def _receive_loop(self) -> None:
        assert self.reader is not None
        while self.connected:
            try:
                raw = await self.reader.read(self.read_chunk_size)
            except asyncio.CancelledError:
                break
            except (ConnectionError, OSError) as exc:
                logger.error("Receive loop terminated: %s", exc)
                self.abort(exc)
                break
            if not raw:
                logger.info("Server closed connection")
                self.abort()
                break
            text = self._decoder.decode(raw)
            if not text:
                continue
            try:
                self._on_data(text)
            except Exception:
                logger.exception("Data handler failed")


__all__ = ["NetworkError", "StreamTransport", "Transport"]
