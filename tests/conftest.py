from __future__ import annotations

from typing import Any, List, Optional

import pytest

from tcp_emitter.core import EmitterClient


class RecordingTransport:
    """In-memory transport that records every write."""

    def __init__(self) -> None:
        self.writes: List[str] = []
        self.connected = False
        self.aborted: List[Optional[BaseException]] = []
        self._on_connect: Any = None
        self._on_data: Any = None
        self._on_close: Any = None

    def bind(self, on_connect, on_data, on_close) -> None:
        self._on_connect = on_connect
        self._on_data = on_data
        self._on_close = on_close

    async def connect(self, host: str, port: int) -> None:
        self.connected = True
        self._on_connect()

    def write(self, data: str) -> None:
        self.writes.append(data)

    def receive(self, chunk: str) -> None:
        self._on_data(chunk)

    def abort(self, exc: Optional[BaseException] = None) -> None:
        if not self.connected:
            return
        self.connected = False
        self.aborted.append(exc)
        self._on_close(exc)

    async def close(self) -> None:
        self.abort()


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def client(transport: RecordingTransport) -> EmitterClient:
    return EmitterClient(transport=transport)


@pytest.fixture
def connected(client: EmitterClient, transport: RecordingTransport) -> EmitterClient:
    client.handle_connect()
    transport.connected = True
    return client
