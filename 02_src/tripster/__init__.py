"""Tripster: LINE travel assistant for Northern Thailand."""

from .app import Application, IApplication
from .config import Settings
from .conversation import ConversationAgent, IConversationAgent
from .dispatch import IIntentDispatcher, Intent, IntentDispatcher, classify
from .errors import ConfigError, LineApiError, MessageValidationError, TripsterError
from .formatting import MessageFormatter
from .line import ILineClient, LineMessagingClient
from .llm import ILLMProvider, LLMProvider
from .models import (
    ChatHistory,
    ChatTurn,
    HotelRecord,
    InboundEvent,
    PlaceRecord,
    ReplyMessage,
    SearchResult,
    TraceEvent,
)
from .places import HotelFinder, PlaceResolver, SearchEnricher
from .storage import IStorage, Storage
from .tracker import ITracker, Tracker
from .translation import LanguageNormalizer
from .webhook import EventHandler, IEventHandler

__all__ = [
    # Application
    "Application",
    "IApplication",
    "Settings",
    # Errors
    "TripsterError",
    "ConfigError",
    "LineApiError",
    "MessageValidationError",
    # Models
    "ChatHistory",
    "ChatTurn",
    "HotelRecord",
    "InboundEvent",
    "PlaceRecord",
    "ReplyMessage",
    "SearchResult",
    "TraceEvent",
    # Components
    "IStorage",
    "Storage",
    "ITracker",
    "Tracker",
    "ILLMProvider",
    "LLMProvider",
    "IConversationAgent",
    "ConversationAgent",
    "LanguageNormalizer",
    "PlaceResolver",
    "HotelFinder",
    "SearchEnricher",
    "MessageFormatter",
    "Intent",
    "classify",
    "IIntentDispatcher",
    "IntentDispatcher",
    "ILineClient",
    "LineMessagingClient",
    "IEventHandler",
    "EventHandler",
]
