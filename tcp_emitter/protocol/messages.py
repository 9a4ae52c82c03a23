from __future__ import annotations

from typing import Any, Dict, List, Literal

from pydantic import BaseModel, ConfigDict, Field

from .commands import FrameType


class BaseFrame(BaseModel):
    """Envelope shared by every outbound frame. Field order is wire order."""

    model_config = ConfigDict(extra="forbid")

    type: FrameType = Field(..., description="subscribe / unsubscribe / broadcast")
    event: str = Field(..., description="Event name, matched by exact string equality")

    def to_wire(self) -> Dict[str, Any]:
        data = self.model_dump()
        data["type"] = str(self.type)
        return data


class SubscribeFrame(BaseFrame):
    type: Literal[FrameType.SUBSCRIBE] = FrameType.SUBSCRIBE


class UnsubscribeFrame(BaseFrame):
    type: Literal[FrameType.UNSUBSCRIBE] = FrameType.UNSUBSCRIBE


class BroadcastFrame(BaseFrame):
    type: Literal[FrameType.BROADCAST] = FrameType.BROADCAST
    args: List[Any] = Field(default_factory=list, description="Positional listener arguments")


class InboundBroadcast(BaseModel):
    """Broadcast received from the server. Any `type` field is ignored."""

    model_config = ConfigDict(extra="ignore")

    event: str
    args: List[Any] = Field(default_factory=list)

    @classmethod
    def from_frame(cls, frame: Dict[str, Any]) -> "InboundBroadcast":
        """Wrap a frame already checked by `validator.validate_frame`."""
        return cls.model_construct(event=frame["event"], args=frame.get("args") or [])


FRAME_MODELS = {
    FrameType.SUBSCRIBE: SubscribeFrame,
    FrameType.UNSUBSCRIBE: UnsubscribeFrame,
    FrameType.BROADCAST: BroadcastFrame,
}

__all__ = [
    "BaseFrame",
    "SubscribeFrame",
    "UnsubscribeFrame",
    "BroadcastFrame",
    "InboundBroadcast",
    "FRAME_MODELS",
]
