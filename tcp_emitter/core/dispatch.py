from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from enum import Enum
from typing import Any, List, Optional, Tuple

from tcp_emitter.protocol import framing, validator
from tcp_emitter.protocol.commands import FrameType
from tcp_emitter.protocol.errors import ProtocolError
from tcp_emitter.protocol.messages import InboundBroadcast

from .lifecycle import ConnectionLifecycle

logger = logging.getLogger(__name__)

Writer = Callable[[str], Any]
Deliver = Callable[[str, List[Any]], Any]


class IntentKind(Enum):
    """Intent produced by a listener-count transition."""

    SUBSCRIBE = FrameType.SUBSCRIBE
    UNSUBSCRIBE = FrameType.UNSUBSCRIBE


class OutboundDispatcher:
    """Encodes intents and broadcasts and hands them to the transport.

    Every send is gated on the lifecycle: while not connected it is a silent
    no-op, so a client without a connection acts as a plain local emitter.
    """

    def __init__(self, write: Writer, lifecycle: ConnectionLifecycle, delimiter: str) -> None:
        self._write = write
        self._lifecycle = lifecycle
        self.delimiter = delimiter

    def send_intents(self, events: Iterable[str], kind: IntentKind) -> bool:
        """Write one payload holding a frame per event; skip empty payloads."""
        if not self._lifecycle.is_connected:
            return False
        events = list(events)
        payload = framing.encode_intents(events, kind.value, self.delimiter)
        if not payload:
            return False
        self._write(payload)
        logger.debug("Sent %s for %s", kind.value, events)
        return True

    def send_broadcast(self, event: str, args: Sequence[Any]) -> bool:
        if not self._lifecycle.is_connected:
            return False
        self._write(framing.encode_broadcast(event, args, self.delimiter))
        logger.debug("Broadcast %s with %d args", event, len(args))
        return True


class InboundDispatcher:
    """Turns decoded frames into local listener calls. Never writes back."""

    def __init__(self, decoder: framing.FrameDecoder, deliver: Deliver) -> None:
        self.decoder = decoder
        self._deliver = deliver

    def collect(self, chunk: str) -> Tuple[List[InboundBroadcast], Optional[ProtocolError]]:
        """Decode `chunk` into validated broadcasts, dropping malformed frames.

        Frames completed before a decoder overflow are still returned, next to
        the overflow error, so the caller can deliver them before closing.
        """
        frames: List[InboundBroadcast] = []
        try:
            for raw in self.decoder.decode(chunk):
                try:
                    validator.validate_frame(raw)
                except ProtocolError as exc:
                    logger.debug("Dropping inbound frame: %s", exc.message)
                    continue
                frames.append(InboundBroadcast.from_frame(raw))
        except ProtocolError as exc:
            return frames, exc
        return frames, None

    def dispatch(self, frames: Iterable[InboundBroadcast]) -> None:
        for frame in frames:
            try:
                self._deliver(frame.event, frame.args)
            except Exception as exc:
                logger.exception("Listener error for %s: %s", frame.event, exc)


__all__ = ["IntentKind", "OutboundDispatcher", "InboundDispatcher"]
