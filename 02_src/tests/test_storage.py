"""Tests for Storage."""

from datetime import datetime, timedelta, timezone

from tripster.models import ChatTurn, TraceEvent


class TestStorageInit:
    """Tests for Storage initialization."""

    async def test_init_creates_tables(self, storage):
        """Test that init creates all tables."""
        async with storage._conn.execute(
            "SELECT name FROM sqlite_master WHERE type='table'"
        ) as cursor:
            tables = [row[0] for row in await cursor.fetchall()]
            assert "chat_histories" in tables
            assert "trace_events" in tables


class TestChatHistories:
    """Tests for chat history storage."""

    async def test_unknown_user(self, storage):
        assert await storage.get_chat_history("nobody") is None

    async def test_append_and_get(self, storage):
        await storage.append_turns(
            "u1", [ChatTurn("user", "สวัสดี"), ChatTurn("model", "สวัสดีครับ")]
        )

        history = await storage.get_chat_history("u1")

        assert history.user_id == "u1"
        assert history.turns == [ChatTurn("user", "สวัสดี"), ChatTurn("model", "สวัสดีครับ")]
        assert history.last_updated.tzinfo is not None

    async def test_append_merges_and_trims(self, storage):
        """Test that stored history is capped at the ten most recent turns."""
        for i in range(7):
            await storage.append_turns(
                "u1", [ChatTurn("user", f"q{i}"), ChatTurn("model", f"a{i}")]
            )

        history = await storage.get_chat_history("u1")

        assert len(history.turns) == 10
        assert history.turns[0] == ChatTurn("user", "q2")
        assert history.turns[-1] == ChatTurn("model", "a6")

    async def test_users_are_isolated(self, storage):
        await storage.append_turns("u1", [ChatTurn("user", "one")])
        await storage.append_turns("u2", [ChatTurn("user", "two")])

        assert (await storage.get_chat_history("u1")).turns == [ChatTurn("user", "one")]


class TestStorageTraceEvents:
    """Tests for TraceEvent storage."""

    async def test_save_and_filter(self, storage):
        now = datetime.now(timezone.utc)
        await storage.save_trace_event(
            TraceEvent(id="e1", event_type="a", actor="x", data={"k": "ค่า"}, timestamp=now)
        )
        await storage.save_trace_event(
            TraceEvent(
                id="e2",
                event_type="b",
                actor="y",
                data={},
                timestamp=now + timedelta(seconds=1),
            )
        )

        events = await storage.get_trace_events()
        assert [e.id for e in events] == ["e2", "e1"]
        assert events[1].data == {"k": "ค่า"}

        assert [e.id for e in await storage.get_trace_events(event_types=["a"])] == ["e1"]
        assert [e.id for e in await storage.get_trace_events(actor="y")] == ["e2"]
        assert [e.id for e in await storage.get_trace_events(after=now)] == ["e2"]
        assert len(await storage.get_trace_events(limit=1)) == 1

    async def test_clear(self, storage):
        await storage.append_turns("u1", [ChatTurn("user", "hi")])

        await storage.clear()

        assert await storage.get_chat_history("u1") is None
