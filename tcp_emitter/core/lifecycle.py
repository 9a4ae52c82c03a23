from __future__ import annotations

import logging
from enum import Enum

logger = logging.getLogger(__name__)


class ConnectionState(Enum):
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"


class ConnectionLifecycle:
    """Tracks connection state for one client.

    Disconnected -> Connecting -> Connected -> Disconnected. Close or error
    moves any state back to Disconnected. `mark_connected` reports whether
    this call was the transition into Connected, which is when the owner
    replays its subscriptions.
    """

    def __init__(self) -> None:
        self.state = ConnectionState.DISCONNECTED
        self.connections = 0

    @property
    def is_connected(self) -> bool:
        return self.state is ConnectionState.CONNECTED

    def begin_connect(self) -> None:
        if self.state is ConnectionState.CONNECTED:
            raise RuntimeError("Client is already connected")
        self._move(ConnectionState.CONNECTING)

    def mark_connected(self) -> bool:
        if self.state is ConnectionState.CONNECTED:
            return False
        self._move(ConnectionState.CONNECTED)
        self.connections += 1
        return True

    def mark_disconnected(self) -> bool:
        if self.state is ConnectionState.DISCONNECTED:
            return False
        self._move(ConnectionState.DISCONNECTED)
        return True

    def _move(self, state: ConnectionState) -> None:
        logger.debug("Connection state %s -> %s", self.state.value, state.value)
        self.state = state


__all__ = ["ConnectionState", "ConnectionLifecycle"]
