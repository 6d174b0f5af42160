"""Core data models for Tripster."""

from .chat import MAX_TURNS, ChatHistory, ChatTurn
from .events import EventKind, InboundEvent, StickerEvent, TravelPlanRequest
from .places import HotelRecord, ImageAnalysis, PlaceDetails, PlaceRecord, SearchResult
from .replies import (
    FlexBubble,
    FlexCardMessage,
    FlexCarouselMessage,
    FlexText,
    ImagemapArea,
    ImagemapMessage,
    ImageMessage,
    LocationMessage,
    QuickReply,
    QuickReplyAction,
    ReplyMessage,
    TextMessage,
    UriButton,
)
from .tracing import TraceEvent

__all__ = [
    # Chat
    "MAX_TURNS",
    "ChatHistory",
    "ChatTurn",
    # Events
    "EventKind",
    "InboundEvent",
    "StickerEvent",
    "TravelPlanRequest",
    # Places
    "HotelRecord",
    "ImageAnalysis",
    "PlaceDetails",
    "PlaceRecord",
    "SearchResult",
    # Replies
    "FlexBubble",
    "FlexCardMessage",
    "FlexCarouselMessage",
    "FlexText",
    "ImagemapArea",
    "ImagemapMessage",
    "ImageMessage",
    "LocationMessage",
    "QuickReply",
    "QuickReplyAction",
    "ReplyMessage",
    "TextMessage",
    "UriButton",
    # Tracing
    "TraceEvent",
]
