"""Convert raw VK long-poll updates into NormalizedEvent objects."""

import json
from typing import Any, Optional

from pydantic import ValidationError

from aquabot.logging_config import get_logger
from aquabot.schemas.vk import ButtonClicked, MessageReceived, NormalizedEvent, PermissionGranted, VkUpdate
from aquabot.services.intents import command_name

logger = get_logger("event_normalizer")

PAYLOAD_COMMAND_KEYS = ("command", "action", "type")
PAYLOAD_TEXT_KEYS = ("text", "label", "command", "action")


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _message_event(obj: dict[str, Any]) -> Optional[MessageReceived]:
    message = obj.get("message") if isinstance(obj.get("message"), dict) else obj
    user_id = _as_int(message.get("from_id")) or _as_int(message.get("user_id"))
    if user_id is None:
        return None
    peer_id = _as_int(message.get("peer_id")) or user_id
    text = message.get("text") if isinstance(message.get("text"), str) else None
    return MessageReceived(user_id=user_id, peer_id=peer_id, text=text, payload=message.get("payload"))


def normalize_update(raw: Any) -> Optional[NormalizedEvent]:
    """Map a raw update to an event; unknown or broken updates yield None."""
    try:
        update = VkUpdate.model_validate(raw)
    except ValidationError:
        logger.warning("Discarding malformed update", extra={"context": {"update": str(raw)[:500]}})
        return None

    obj = update.object
    if update.type == "message_allow":
        user_id = _as_int(obj.get("user_id"))
        if user_id is not None:
            return PermissionGranted(user_id=user_id, peer_id=user_id)

    elif update.type == "message_new":
        event = _message_event(obj)
        if event is not None:
            return event

    elif update.type == "message_event":
        user_id = _as_int(obj.get("user_id"))
        if user_id is not None:
            event_id = obj.get("event_id")
            return ButtonClicked(
                user_id=user_id,
                peer_id=_as_int(obj.get("peer_id")) or user_id,
                payload=obj.get("payload"),
                event_id=str(event_id) if event_id is not None else None,
            )

    else:
        logger.warning(f"Unsupported update type: {update.type}")
        return None

    logger.warning(f"Update {update.type} without a user id", extra={"context": {"object": str(obj)[:500]}})
    return None


def parse_payload(payload: Any) -> Optional[dict[str, Any]]:
    """Button payloads arrive either as objects or as JSON strings."""
    if isinstance(payload, dict):
        return payload
    if isinstance(payload, str):
        stripped = payload.strip()
        if stripped.startswith("{") and stripped.endswith("}"):
            try:
                parsed = json.loads(stripped)
            except ValueError:
                return None
            return parsed if isinstance(parsed, dict) else None
    return None


def _first_string_field(data: Optional[dict[str, Any]], keys: tuple[str, ...]) -> Optional[str]:
    if not data:
        return None
    for key in keys:
        value = data.get(key)
        if isinstance(value, str) and value.strip():
            return value
    return None


def extract_command(event: NormalizedEvent) -> str:
    """Command name for usage stats. Never raises."""
    if isinstance(event, PermissionGranted):
        return "message_allow"

    if isinstance(event, ButtonClicked):
        command = _first_string_field(parse_payload(event.payload), PAYLOAD_COMMAND_KEYS)
        if command:
            return command
        if event.event_id:
            return event.event_id
        if isinstance(event.payload, str) and event.payload.strip():
            return event.payload
        return "unknown"

    return command_name(event.text)


def button_text(event: ButtonClicked) -> str:
    """Text a button click is routed by."""
    text = _first_string_field(parse_payload(event.payload), PAYLOAD_TEXT_KEYS)
    if text:
        return text
    if isinstance(event.payload, str):
        return event.payload
    return ""
