from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LongPollServer(BaseModel):
    """Long-poll descriptor: where to poll and from which cursor."""

    server: str
    key: str
    ts: str

    @field_validator("ts", mode="before")
    @classmethod
    def coerce_ts(cls, value: Any) -> str:
        return str(value)


class LongPollServerResponse(BaseModel):
    response: Optional[LongPollServer] = None
    error: Optional[dict[str, Any]] = None


class VkUpdate(BaseModel):
    type: str
    object: dict[str, Any] = Field(default_factory=dict)
    group_id: Optional[int] = None
    event_id: Optional[str] = None

    model_config = ConfigDict(extra="ignore")


class LongPollResponse(BaseModel):
    ts: Optional[str] = None
    failed: Optional[int] = None
    updates: list[dict[str, Any]] = Field(default_factory=list)

    @field_validator("ts", mode="before")
    @classmethod
    def coerce_ts(cls, value: Any) -> Optional[str]:
        return None if value is None else str(value)


class PermissionGranted(BaseModel):
    kind: Literal["permission_granted"] = "permission_granted"
    user_id: int
    peer_id: Optional[int] = None
    text: Optional[str] = None
    payload: Optional[Any] = None


class MessageReceived(BaseModel):
    kind: Literal["message_received"] = "message_received"
    user_id: int
    peer_id: Optional[int] = None
    text: Optional[str] = None
    payload: Optional[Any] = None


class ButtonClicked(BaseModel):
    kind: Literal["button_clicked"] = "button_clicked"
    user_id: int
    peer_id: Optional[int] = None
    text: Optional[str] = None
    payload: Optional[Any] = None
    event_id: Optional[str] = None


NormalizedEvent = Union[PermissionGranted, MessageReceived, ButtonClicked]


class OutboundReply(BaseModel):
    text: str
    keyboard: Optional[dict[str, Any]] = None
