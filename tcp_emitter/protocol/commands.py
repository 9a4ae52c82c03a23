from __future__ import annotations

from enum import StrEnum
from typing import Union


class FrameType(StrEnum):
    """Frame types a client may put on the wire."""

    SUBSCRIBE = "subscribe"
    UNSUBSCRIBE = "unsubscribe"
    BROADCAST = "broadcast"


def normalize_frame_type(frame_type: Union[str, FrameType]) -> FrameType:
    """Return the FrameType for a raw string, raising ValueError for unknown types."""
    if isinstance(frame_type, FrameType):
        return frame_type
    return FrameType(str(frame_type).strip().lower())


__all__ = ["FrameType", "normalize_frame_type"]
