"""Inbound event data models."""

from dataclasses import dataclass
from enum import Enum
from typing import Union


class EventKind(str, Enum):
    """Kinds of inbound message events handled by the bridge."""

    TEXT = "text"
    IMAGE = "image"
    STICKER = "sticker"


@dataclass(frozen=True)
class StickerEvent:
    """Sticker payload of an inbound message."""

    package_id: str | None = None
    sticker_id: str | None = None


@dataclass
class InboundEvent:
    """One message event from a webhook delivery.

    `payload` is the message text for TEXT, a StickerEvent for STICKER and the
    platform message id (used to fetch the image content) for IMAGE.
    """

    user_id: str
    reply_token: str
    kind: EventKind
    payload: Union[str, StickerEvent]


@dataclass
class TravelPlanRequest:
    """A submitted travel-preference form."""

    user_id: str
    start_location: str
    destination: str
    budget: str
    preference: str
    travel_with: str
    transport: str
    travel_date_start: str
    travel_date_end: str
