"""Tracker implementation for creating TraceEvents."""

import uuid
from datetime import datetime, timezone
from typing import Protocol

import aiosqlite

from ..logging_config import get_logger
from ..models import TraceEvent
from ..storage import IStorage

logger = get_logger(__name__)


class ITracker(Protocol):
    """Records observability events for later inspection."""

    async def track(self, event_type: str, actor: str, data: dict) -> None:
        """Create TraceEvent and save to Storage. Never raises on storage errors."""
        ...


class Tracker:
    """Creates TraceEvents from direct track() calls."""

    def __init__(self, storage: IStorage):
        self._storage = storage

    async def track(self, event_type: str, actor: str, data: dict) -> None:
        """
        Create TraceEvent and save to Storage.

        Storage failures are logged and dropped so callers can rely on
        track() while recovering from another error.
        """
        trace_event = TraceEvent(
            id=str(uuid.uuid4()),
            event_type=event_type,
            actor=actor,
            data=data,
            timestamp=datetime.now(timezone.utc),
        )
        try:
            await self._storage.save_trace_event(trace_event)
        except (aiosqlite.Error, RuntimeError) as e:
            logger.error(f"Failed to save trace event {event_type}: {e}")
