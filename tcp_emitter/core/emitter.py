from __future__ import annotations

import logging
import threading
from typing import Any, Dict, List, Optional

from tcp_emitter.config import CLIENT_CONFIG
from tcp_emitter.protocol.constants import DEFAULT_DELIMITER, MAX_BUFFER_SIZE
from tcp_emitter.protocol.framing import FrameDecoder
from tcp_emitter.protocol.validator import validate_delimiter

from .dispatch import InboundDispatcher, IntentKind, OutboundDispatcher
from .lifecycle import ConnectionLifecycle, ConnectionState
from .network import StreamTransport, Transport
from .registry import Listener, ListenerEntry, ListenerRegistry

logger = logging.getLogger(__name__)


def _check_event(event: Any) -> None:
    if not isinstance(event, str):
        raise TypeError(f"event name must be a string, got {type(event).__name__}")


class EmitterClient:
    """Local event emitter whose listeners double as remote subscriptions.

    Without a connection it is an ordinary in-process emitter. Once connected,
    the first listener on an event subscribes to it on the server, removing
    the last one unsubscribes, and `emit` also broadcasts the event. Every
    event that has listeners at connect time is subscribed in one replay.
    Broadcasts received from the server only reach local listeners.
    """

    def __init__(
        self,
        delimiter: str = DEFAULT_DELIMITER,
        transport: Optional[Transport] = None,
        max_buffer_size: int = MAX_BUFFER_SIZE,
    ) -> None:
        self._delimiter = validate_delimiter(delimiter)
        self._lock = threading.RLock()
        self._registry = ListenerRegistry()
        self._lifecycle = ConnectionLifecycle()
        self._decoder = FrameDecoder(self._delimiter, max_buffer_size)
        self._transport: Transport = transport if transport is not None else StreamTransport()
        self._transport.bind(self.handle_connect, self.handle_data, self.handle_close)
        self._outbound = OutboundDispatcher(self._transport.write, self._lifecycle, self._delimiter)
        self._inbound = InboundDispatcher(self._decoder, self._dispatch_local)

    @property
    def delimiter(self) -> str:
        return self._delimiter

    @property
    def transport(self) -> Transport:
        return self._transport

    @property
    def state(self) -> ConnectionState:
        return self._lifecycle.state

    @property
    def connected(self) -> bool:
        return self._lifecycle.is_connected

    # Subscription state is derived, never stored.
    def is_subscribed(self, event: str) -> bool:
        return self._registry.listener_count(event) > 0

    def subscribed_events(self) -> List[str]:
        return [event for event in self._registry.event_names() if self.is_subscribed(event)]

    # -- registration ---------------------------------------------------

    def on(self, event: str, listener: Listener) -> "EmitterClient":
        return self._add(event, listener)

    add_listener = on

    def once(self, event: str, listener: Listener) -> "EmitterClient":
        return self._add(event, listener, once=True)

    def prepend_listener(self, event: str, listener: Listener) -> "EmitterClient":
        return self._add(event, listener, prepend=True)

    def prepend_once_listener(self, event: str, listener: Listener) -> "EmitterClient":
        return self._add(event, listener, once=True, prepend=True)

    def remove_listener(self, event: str, listener: Listener) -> "EmitterClient":
        _check_event(event)
        with self._lock:
            if self._registry.remove(event, listener):
                self._after_remove([event])
        return self

    off = remove_listener

    def remove_all_listeners(self, event: Optional[str] = None) -> "EmitterClient":
        if event is not None:
            _check_event(event)
        with self._lock:
            self._after_remove(self._registry.remove_all(event))
        return self

    def listeners(self, event: str) -> List[Listener]:
        with self._lock:
            return self._registry.listeners(event)

    def listener_count(self, event: str) -> int:
        with self._lock:
            return self._registry.listener_count(event)

    def event_names(self) -> List[str]:
        with self._lock:
            return self._registry.event_names()

    def emit(self, event: str, *args: Any) -> bool:
        """Invoke local listeners, then broadcast when connected.

        Returns True if the event had local listeners.
        """
        _check_event(event)
        handled = self._dispatch_local(event, list(args))
        with self._lock:
            self._outbound.send_broadcast(event, args)
        return handled

    def _add(self, event: str, listener: Listener, *, once: bool = False, prepend: bool = False) -> "EmitterClient":
        _check_event(event)
        with self._lock:
            self._registry.add(event, listener, once=once, prepend=prepend)
            if self._registry.listener_count(event) == 1:
                self._outbound.send_intents([event], IntentKind.SUBSCRIBE)
        return self

    def _after_remove(self, events: List[str]) -> None:
        released = [event for event in events if not self.is_subscribed(event)]
        self._outbound.send_intents(released, IntentKind.UNSUBSCRIBE)

    def _retire(self, event: str, entry: ListenerEntry) -> bool:
        with self._lock:
            if not self._registry.discard(event, entry):
                return False
            self._after_remove([event])
            return True

    def _dispatch_local(self, event: str, args: List[Any]) -> bool:
        with self._lock:
            entries = self._registry.entries(event)
        for entry in entries:
            if entry.once and not self._retire(event, entry):
                continue
            entry.listener(*args)
        return bool(entries)

    # -- connection -----------------------------------------------------

    async def connect(self, host: Optional[str] = None, port: Optional[int] = None) -> None:
        host = host or CLIENT_CONFIG["server_host"]
        port = port or CLIENT_CONFIG["server_port"]
        with self._lock:
            self._lifecycle.begin_connect()
        try:
            await self._transport.connect(host, port)
        finally:
            with self._lock:
                if self._lifecycle.state is ConnectionState.CONNECTING:
                    self._lifecycle.mark_disconnected()

    async def close(self) -> None:
        await self._transport.close()
        self.handle_close()

    def handle_connect(self) -> None:
        """Transport callback: the connection is up, replay subscriptions."""
        with self._lock:
            self._decoder.reset()
            if self._lifecycle.mark_connected():
                events = self.subscribed_events()
                logger.info("Connected, replaying %d subscriptions", len(events))
                self._outbound.send_intents(events, IntentKind.SUBSCRIBE)

    def handle_data(self, chunk: str) -> None:
        """Transport callback: deliver broadcasts contained in `chunk`."""
        with self._lock:
            if not self._lifecycle.is_connected:
                logger.debug("Ignoring %d characters received while %s", len(chunk), self.state.value)
                return
            frames, overflow = self._inbound.collect(chunk)
            if overflow is not None:
                logger.warning("Closing connection after protocol error: %s", overflow.message)
                self._decoder.reset()
                self._transport.abort(overflow)
        self._inbound.dispatch(frames)

    def handle_close(self, exc: Optional[BaseException] = None) -> None:
        """Transport callback: the connection is gone, drop partial input."""
        with self._lock:
            self._decoder.reset()
            if self._lifecycle.mark_disconnected() and exc is not None:
                logger.warning("Disconnected: %s", exc)


def create_client(config: Optional[Dict[str, Any]] = None, **opts: Any) -> EmitterClient:
    """Build a client from config values, letting keyword options override them."""
    config = config or CLIENT_CONFIG
    opts.setdefault("delimiter", config.get("delimiter", DEFAULT_DELIMITER))
    opts.setdefault("max_buffer_size", config.get("max_buffer_size", MAX_BUFFER_SIZE))
    if "transport" not in opts:
        opts["transport"] = StreamTransport(config)
    return EmitterClient(**opts)


__all__ = ["EmitterClient", "create_client"]
