"""Formatting module."""

from .formatter import NO_HOTELS_TEXT, NO_PLACES_TEXT, MessageFormatter

__all__ = ["MessageFormatter", "NO_HOTELS_TEXT", "NO_PLACES_TEXT"]
