"""Outbound reply message models.

Each variant maps one-to-one onto a LINE Messaging API message object and
serialises itself with `to_payload()`. `ReplyMessage` is the union of all
variants; the dispatcher returns an ordered list of them.
"""

from dataclasses import dataclass, field
from typing import Any, Union


@dataclass(frozen=True)
class QuickReplyAction:
    """A quick-reply button: sends `text` as a message, or opens `uri`."""

    label: str
    text: str | None = None
    uri: str | None = None

    def to_payload(self) -> dict[str, Any]:
        if self.uri is not None:
            action = {"type": "uri", "label": self.label, "uri": self.uri}
        else:
            action = {"type": "message", "label": self.label, "text": self.text}
        return {"type": "action", "action": action}


@dataclass(frozen=True)
class QuickReply:
    """Suggested next actions attached to a message."""

    items: tuple[QuickReplyAction, ...]

    def to_payload(self) -> dict[str, Any]:
        return {"items": [item.to_payload() for item in self.items]}


def _attach(payload: dict[str, Any], quick_reply: QuickReply | None) -> dict[str, Any]:
    if quick_reply is not None:
        payload["quickReply"] = quick_reply.to_payload()
    return payload


@dataclass
class FlexText:
    """A text component inside a flex bubble."""

    text: str
    size: str | None = None
    weight: str | None = None
    wrap: bool = False

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"type": "text", "text": self.text}
        if self.weight:
            payload["weight"] = self.weight
        if self.size:
            payload["size"] = self.size
        if self.wrap:
            payload["wrap"] = True
        return payload


@dataclass
class UriButton:
    """A button component that opens a URI."""

    label: str
    uri: str
    style: str = "primary"
    color: str = "#1DB446"

    def to_payload(self) -> dict[str, Any]:
        return {
            "type": "button",
            "action": {"type": "uri", "label": self.label, "uri": self.uri},
            "style": self.style,
            "color": self.color,
        }


@dataclass
class FlexBubble:
    """A single card: hero image, text body, optional map button."""

    hero_url: str
    body: list[FlexText]
    body_button: UriButton | None = None
    footer_button: UriButton | None = None

    def to_payload(self) -> dict[str, Any]:
        body_contents = [component.to_payload() for component in self.body]
        if self.body_button is not None:
            body_contents.append(self.body_button.to_payload())

        payload: dict[str, Any] = {
            "type": "bubble",
            "hero": {
                "type": "image",
                "url": self.hero_url,
                "size": "full",
                "aspectRatio": "20:13",
            },
            "body": {"type": "box", "layout": "vertical", "contents": body_contents},
        }
        if self.footer_button is not None:
            payload["footer"] = {
                "type": "box",
                "layout": "vertical",
                "contents": [self.footer_button.to_payload()],
            }
        return payload


@dataclass
class TextMessage:
    text: str
    quick_reply: QuickReply | None = None

    def to_payload(self) -> dict[str, Any]:
        return _attach({"type": "text", "text": self.text}, self.quick_reply)


@dataclass
class ImageMessage:
    original_content_url: str
    preview_image_url: str
    quick_reply: QuickReply | None = None

    def to_payload(self) -> dict[str, Any]:
        return _attach(
            {
                "type": "image",
                "originalContentUrl": self.original_content_url,
                "previewImageUrl": self.preview_image_url,
            },
            self.quick_reply,
        )


@dataclass
class LocationMessage:
    title: str
    address: str
    latitude: float
    longitude: float
    quick_reply: QuickReply | None = None

    def to_payload(self) -> dict[str, Any]:
        return _attach(
            {
                "type": "location",
                "title": self.title,
                "address": self.address,
                "latitude": self.latitude,
                "longitude": self.longitude,
            },
            self.quick_reply,
        )


@dataclass
class FlexCardMessage:
    alt_text: str
    bubble: FlexBubble
    quick_reply: QuickReply | None = None

    def to_payload(self) -> dict[str, Any]:
        return _attach(
            {"type": "flex", "altText": self.alt_text, "contents": self.bubble.to_payload()},
            self.quick_reply,
        )


@dataclass
class FlexCarouselMessage:
    alt_text: str
    bubbles: list[FlexBubble]
    quick_reply: QuickReply | None = None

    def to_payload(self) -> dict[str, Any]:
        return _attach(
            {
                "type": "flex",
                "altText": self.alt_text,
                "contents": {
                    "type": "carousel",
                    "contents": [bubble.to_payload() for bubble in self.bubbles],
                },
            },
            self.quick_reply,
        )


@dataclass(frozen=True)
class ImagemapArea:
    """A tappable region of an imagemap that opens `link_uri`."""

    link_uri: str
    x: int
    y: int
    width: int
    height: int

    def to_payload(self) -> dict[str, Any]:
        return {
            "type": "uri",
            "linkUri": self.link_uri,
            "area": {"x": self.x, "y": self.y, "width": self.width, "height": self.height},
        }


@dataclass
class ImagemapMessage:
    base_url: str
    alt_text: str
    areas: list[ImagemapArea] = field(default_factory=list)
    base_width: int = 1040
    base_height: int = 1040
    quick_reply: QuickReply | None = None

    def to_payload(self) -> dict[str, Any]:
        return _attach(
            {
                "type": "imagemap",
                "baseUrl": self.base_url,
                "altText": self.alt_text,
                "baseSize": {"width": self.base_width, "height": self.base_height},
                "actions": [area.to_payload() for area in self.areas],
            },
            self.quick_reply,
        )


ReplyMessage = Union[
    TextMessage,
    ImageMessage,
    LocationMessage,
    FlexCardMessage,
    FlexCarouselMessage,
    ImagemapMessage,
]
