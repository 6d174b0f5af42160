"""Tests for Tracker."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, Mock

import aiosqlite

from tripster.storage import Storage
from tripster.tracker import Tracker


class TestTrackerTrack:
    """Tests for Tracker.track() method."""

    async def test_track_creates_event(self, tracker, storage):
        """Test that track() creates a TraceEvent."""
        await tracker.track(
            event_type="test_event",
            actor="test_actor",
            data={"key": "value"},
        )

        events = await storage.get_trace_events()
        assert len(events) == 1
        assert events[0].event_type == "test_event"
        assert events[0].actor == "test_actor"
        assert events[0].data == {"key": "value"}

    async def test_track_generates_id_and_timestamp(self, tracker, storage):
        before = datetime.now(timezone.utc)
        await tracker.track(event_type="test_event", actor="test_actor", data={})
        after = datetime.now(timezone.utc)

        events = await storage.get_trace_events()
        assert events[0].id
        assert before <= events[0].timestamp <= after

    async def test_storage_failure_is_not_raised(self):
        storage = Mock()
        storage.save_trace_event = AsyncMock(
            side_effect=aiosqlite.OperationalError("database is locked")
        )

        await Tracker(storage=storage).track(event_type="e", actor="a", data={})

        storage.save_trace_event.assert_awaited_once()

    async def test_uninitialized_storage_is_not_raised(self):
        await Tracker(storage=Storage(":memory:")).track(event_type="e", actor="a", data={})
