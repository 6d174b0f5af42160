"""Dispatch module: intent classification and reply assembly."""

from .dispatcher import IIntentDispatcher, IntentDispatcher
from .intents import Classification, Intent, classify, extract_place_names

__all__ = [
    "Classification",
    "IIntentDispatcher",
    "Intent",
    "IntentDispatcher",
    "classify",
    "extract_place_names",
]
