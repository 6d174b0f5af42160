"""Webhook body parsing."""

from typing import Any

from ..logging_config import get_logger
from ..models import EventKind, InboundEvent, StickerEvent

logger = get_logger(__name__)


def parse_events(body: Any) -> list[InboundEvent]:
    """
    Turn a webhook body into inbound message events, in platform order.

    Malformed entries, non-message events and unsupported message types
    are skipped.

    Raises:
        ValueError: if the body has no `events` list.
    """
    events = body.get("events") if isinstance(body, dict) else None
    if not isinstance(events, list):
        raise ValueError("Invalid event data")

    parsed = []
    for raw in events:
        if not isinstance(raw, dict) or raw.get("type") != "message":
            continue

        message = raw.get("message")
        if not isinstance(message, dict):
            continue
        source = raw.get("source")
        user_id = source.get("userId", "") if isinstance(source, dict) else ""
        reply_token = raw.get("replyToken", "")
        message_type = message.get("type")

        if message_type == EventKind.TEXT.value:
            payload = message.get("text", "")
        elif message_type == EventKind.IMAGE.value:
            payload = message.get("id", "")
        elif message_type == EventKind.STICKER.value:
            payload = StickerEvent(
                package_id=message.get("packageId"),
                sticker_id=message.get("stickerId"),
            )
        else:
            logger.debug(f"Skipping unsupported message type: {message_type}")
            continue

        parsed.append(
            InboundEvent(
                user_id=user_id,
                reply_token=reply_token,
                kind=EventKind(message_type),
                payload=payload,
            )
        )
    return parsed
