"""LINE transport module."""

from .client import ILineClient, LineMessagingClient, validate_messages
from .events import parse_events

__all__ = ["ILineClient", "LineMessagingClient", "parse_events", "validate_messages"]
