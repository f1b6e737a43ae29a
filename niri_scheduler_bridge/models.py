"""
Pydantic data models for niri IPC messages.

niri encodes events and replies as externally tagged JSON objects, one per
line: {"WindowsChanged": {"windows": [...]}}, {"WindowFocusChanged": {"id": 3}},
{"Ok": "Handled"}. Only the two window events are decoded; every other tag
becomes an OtherEvent.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class BridgeState(str, Enum):
    """Lifecycle of the bridge process."""
    CONNECTING = "connecting"
    STREAMING = "streaming"
    TERMINATED = "terminated"


class WindowRecord(BaseModel):
    """A window as reported by niri. Read-only copy."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int = Field(..., description="niri window id, unique within a snapshot")
    title: Optional[str] = Field(None, description="Window title")
    app_id: Optional[str] = Field(None, description="Wayland app_id")
    pid: Optional[int] = Field(None, description="Owning process id")


class WindowsChanged(BaseModel):
    """Full snapshot of all windows known to niri."""

    model_config = ConfigDict(extra="ignore")

    windows: List[WindowRecord] = Field(default_factory=list)


class WindowFocusChanged(BaseModel):
    """Keyboard focus moved to a window, or to nothing (id is None)."""

    model_config = ConfigDict(extra="ignore")

    id: Optional[int] = None


class OtherEvent(BaseModel):
    """Any event the bridge does not act on."""

    kind: str


NiriEvent = Union[WindowsChanged, WindowFocusChanged, OtherEvent]

_EVENT_TYPES = {
    "WindowsChanged": WindowsChanged,
    "WindowFocusChanged": WindowFocusChanged,
}


def parse_event(message: Dict[str, Any]) -> NiriEvent:
    """Decode one tagged event object.

    Args:
        message: Decoded JSON object with a single tag key

    Returns:
        WindowsChanged, WindowFocusChanged or OtherEvent

    Raises:
        ValueError: If the message is not a single-key object
        pydantic.ValidationError: If a known event has a malformed payload
    """
    if not isinstance(message, dict) or len(message) != 1:
        raise ValueError(f"Expected a single-key event object, got: {message!r}")

    kind, payload = next(iter(message.items()))
    event_type = _EVENT_TYPES.get(kind)
    if event_type is None:
        return OtherEvent(kind=kind)
    return event_type.model_validate(payload)


class Reply(BaseModel):
    """Reply to a niri request: Ok(<response>) or Err(<message>)."""

    ok: Optional[Any] = None
    err: Optional[str] = None

    @classmethod
    def from_message(cls, message: Any) -> "Reply":
        """Decode {"Ok": ...} / {"Err": "..."}; anything else is an error reply."""
        if isinstance(message, dict):
            if "Ok" in message:
                return cls(ok=message["Ok"])
            if "Err" in message:
                return cls(err=str(message["Err"]))
        return cls(err=f"Unexpected reply: {message!r}")

    @property
    def is_handled(self) -> bool:
        """True when niri answered Ok("Handled")."""
        return self.err is None and self.ok == "Handled"
