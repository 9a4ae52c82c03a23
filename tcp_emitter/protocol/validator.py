from __future__ import annotations

from typing import Any, Dict

import jsonschema

from .errors import ErrorCode, ProtocolError, StatusCode

# Inbound frames need a string `event`; `type` is ignored and `args` may be absent or null.
# InboundBroadcast is built from frames that already passed this schema.
BROADCAST_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "required": ["event"],
    "properties": {
        "event": {"type": "string"},
        "args": {"type": ["array", "null"]},
    },
}

_BROADCAST_VALIDATOR = jsonschema.Draft7Validator(BROADCAST_SCHEMA)


def validate_frame(frame: Any) -> None:
    """Check a decoded inbound frame against the broadcast schema."""
    try:
        _BROADCAST_VALIDATOR.validate(frame)
    except jsonschema.ValidationError as exc:
        code = ErrorCode.INVALID_EVENT if "event" in exc.path or "event" in exc.message else ErrorCode.MALFORMED_FRAME
        raise ProtocolError(StatusCode.BAD_REQUEST, code, f"Frame validation failed: {exc.message}") from exc


def validate_delimiter(delimiter: Any) -> str:
    """Return the delimiter if usable as a frame terminator, else raise ValueError."""
    if not isinstance(delimiter, str):
        raise ValueError(f"delimiter must be a string, got {type(delimiter).__name__}")
    if not delimiter:
        raise ValueError("delimiter must not be empty")
    return delimiter


__all__ = ["BROADCAST_SCHEMA", "validate_frame", "validate_delimiter"]
