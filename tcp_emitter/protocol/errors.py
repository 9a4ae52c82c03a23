from __future__ import annotations

from enum import IntEnum
from typing import Optional


class StatusCode(IntEnum):
    """HTTP-like status codes attached to protocol errors."""

    BAD_REQUEST = 400
    PAYLOAD_TOO_LARGE = 413
    SERVICE_UNAVAILABLE = 503


class ErrorCode(IntEnum):
    """Domain specific error codes."""

    MALFORMED_FRAME = 1001
    INVALID_EVENT = 1002
    FRAME_TOO_LARGE = 1003
    ENCODE_FAILED = 1004
    CONNECT_FAILED = 1006


class ProtocolError(Exception):
    """Structured protocol exception carrying status + code + message."""

    def __init__(self, status: StatusCode, code: Optional[ErrorCode] = None, message: str = "") -> None:
        self.status = status
        self.code = code
        self.message = message
        super().__init__(f"{status.name} ({int(status)}): {message} (code={code.name if code else 'n/a'})")


__all__ = ["StatusCode", "ErrorCode", "ProtocolError"]
