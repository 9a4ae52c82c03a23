from __future__ import annotations

import json
import logging
from typing import Any, Dict, Iterable, Iterator, Optional, Sequence, Union

from pydantic import ValidationError

from .commands import FrameType, normalize_frame_type
from .constants import DEFAULT_DELIMITER, MAX_BUFFER_SIZE
from .errors import ErrorCode, ProtocolError, StatusCode
from .messages import FRAME_MODELS
from .validator import validate_delimiter

logger = logging.getLogger(__name__)


def _dump(data: Dict[str, Any]) -> str:
    try:
        return json.dumps(data, ensure_ascii=False, separators=(",", ":"))
    except (TypeError, ValueError) as exc:
        raise ProtocolError(StatusCode.BAD_REQUEST, ErrorCode.ENCODE_FAILED, f"Encode failed: {exc}") from exc


def encode_frame(
    frame_type: Union[str, FrameType],
    event: str,
    args: Optional[Sequence[Any]] = None,
    delimiter: str = DEFAULT_DELIMITER,
) -> str:
    """Encode one frame as compact JSON followed by the delimiter.

    Subscribe and unsubscribe frames carry only `type` and `event`; broadcast
    frames always carry `args` (an empty list when none are given). Event
    names go through regular JSON string escaping.
    """
    frame_type = normalize_frame_type(frame_type)
    fields: Dict[str, Any] = {"event": event}
    if frame_type is FrameType.BROADCAST:
        fields["args"] = list(args) if args is not None else []
    try:
        frame = FRAME_MODELS[frame_type](**fields)
    except ValidationError as exc:
        raise ProtocolError(StatusCode.BAD_REQUEST, ErrorCode.INVALID_EVENT, f"Invalid frame: {exc}") from exc
    return _dump(frame.to_wire()) + delimiter


def encode_subscribe(event: str, delimiter: str = DEFAULT_DELIMITER) -> str:
    return encode_frame(FrameType.SUBSCRIBE, event, delimiter=delimiter)


def encode_unsubscribe(event: str, delimiter: str = DEFAULT_DELIMITER) -> str:
    return encode_frame(FrameType.UNSUBSCRIBE, event, delimiter=delimiter)


def encode_broadcast(event: str, args: Optional[Sequence[Any]] = None, delimiter: str = DEFAULT_DELIMITER) -> str:
    return encode_frame(FrameType.BROADCAST, event, args, delimiter=delimiter)


def encode_intents(events: Iterable[str], frame_type: Union[str, FrameType], delimiter: str = DEFAULT_DELIMITER) -> str:
    """Concatenate subscribe/unsubscribe frames for several events, in order."""
    return "".join(encode_frame(frame_type, event, delimiter=delimiter) for event in events)


def parse_payload(payload: str) -> Any:
    """Parse a frame payload; malformed JSON yields an empty dict."""
    try:
        return json.loads(payload)
    except (TypeError, ValueError):
        return {}


class FrameDecoder:
    """Streaming splitter turning arbitrary text chunks into frame payloads.

    Reads from a stream are not frame aligned, so anything after the last
    delimiter is kept until a later chunk completes it.
    """

    def __init__(self, delimiter: str = DEFAULT_DELIMITER, max_buffer_size: int = MAX_BUFFER_SIZE) -> None:
        self.delimiter = validate_delimiter(delimiter)
        if max_buffer_size <= 0:
            raise ValueError("max_buffer_size must be positive")
        self.max_buffer_size = max_buffer_size
        self._buffer = ""

    @property
    def buffer(self) -> str:
        return self._buffer

    def reset(self) -> None:
        self._buffer = ""

    def feed(self, chunk: str) -> Iterator[str]:
        """Append `chunk` and return a lazy iterator over completed payloads.

        The chunk is buffered immediately; payloads are only cut from the
        buffer as the iterator advances. Raises ProtocolError once the
        trailing partial frame grows past `max_buffer_size`.
        """
        self._buffer += chunk
        return self._drain()

    def decode(self, chunk: str) -> Iterator[Any]:
        """Like feed, but parse each payload as JSON."""
        for payload in self.feed(chunk):
            yield parse_payload(payload)

    def _drain(self) -> Iterator[str]:
        width = len(self.delimiter)
        while True:
            index = self._buffer.find(self.delimiter)
            if index < 0:
                break
            payload = self._buffer[:index]
            self._buffer = self._buffer[index + width :]
            yield payload
        if len(self._buffer) > self.max_buffer_size:
            size = len(self._buffer)
            self._buffer = ""
            logger.warning("Discarding %s buffered characters without a delimiter", size)
            raise ProtocolError(
                StatusCode.PAYLOAD_TOO_LARGE,
                ErrorCode.FRAME_TOO_LARGE,
                f"Partial frame exceeds {self.max_buffer_size} characters",
            )


__all__ = [
    "encode_frame",
    "encode_subscribe",
    "encode_unsubscribe",
    "encode_broadcast",
    "encode_intents",
    "parse_payload",
    "FrameDecoder",
]
