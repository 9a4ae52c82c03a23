"""
Wire protocol for the emitter client: frame types, envelope models, validation,
and the delimiter framing codec.
"""

from .commands import FrameType, normalize_frame_type
from .constants import DEFAULT_DELIMITER, ENCODING, MAX_BUFFER_SIZE, READ_CHUNK_SIZE
from .errors import ErrorCode, ProtocolError, StatusCode
from .framing import (
    FrameDecoder,
    encode_broadcast,
    encode_frame,
    encode_intents,
    encode_subscribe,
    encode_unsubscribe,
    parse_payload,
)
from .messages import BaseFrame, BroadcastFrame, InboundBroadcast, SubscribeFrame, UnsubscribeFrame
from .validator import validate_delimiter, validate_frame

__all__ = [
    "FrameType",
    "normalize_frame_type",
    "DEFAULT_DELIMITER",
    "ENCODING",
    "MAX_BUFFER_SIZE",
    "READ_CHUNK_SIZE",
    "ErrorCode",
    "ProtocolError",
    "StatusCode",
    "FrameDecoder",
    "encode_frame",
    "encode_subscribe",
    "encode_unsubscribe",
    "encode_broadcast",
    "encode_intents",
    "parse_payload",
    "BaseFrame",
    "SubscribeFrame",
    "UnsubscribeFrame",
    "BroadcastFrame",
    "InboundBroadcast",
    "validate_frame",
    "validate_delimiter",
]
