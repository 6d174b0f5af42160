"""SQLite storage implementation."""

import json
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Protocol

import aiosqlite

from ..config import resolve_db_path
from ..models import MAX_TURNS, ChatHistory, ChatTurn, TraceEvent


class IStorage(Protocol):
    """Persistent storage for chat histories and trace events (SQLite)."""

    async def init(self) -> None:
        """Initialize database and create tables."""
        ...

    async def close(self) -> None:
        """Close database connection."""
        ...

    # Chat history
    async def get_chat_history(self, user_id: str) -> ChatHistory | None:
        """Get the chat history of a user, or None if the user never chatted."""
        ...

    async def append_turns(self, user_id: str, turns: list[ChatTurn]) -> ChatHistory:
        """Merge turns into the user's history, keeping the last MAX_TURNS."""
        ...

    # TraceEvents
    async def save_trace_event(self, event: TraceEvent) -> None:
        """Save a trace event."""
        ...

    async def get_trace_events(
        self,
        after: datetime | None = None,
        event_types: list[str] | None = None,
        actor: str | None = None,
        limit: int = 100,
    ) -> list[TraceEvent]:
        """Get trace events with optional filters."""
        ...

    # Lifecycle
    async def clear(self) -> None:
        """Clear all data."""
        ...


def _parse_timestamp(value: str) -> datetime:
    ts = datetime.fromisoformat(value)
    return ts if ts.tzinfo else ts.replace(tzinfo=timezone.utc)


class Storage:
    """SQLite storage implementation."""

    def __init__(self, db_path: str | Path | None = None):
        if db_path is None:
            self._db_path = resolve_db_path()
        else:
            self._db_path = resolve_db_path(db_path)
        self._conn: aiosqlite.Connection | None = None

    async def init(self) -> None:
        """Initialize database and create tables."""
        self._conn = await aiosqlite.connect(self._db_path)

        schema_path = Path(__file__).parent / "schema.sql"
        with open(schema_path, "r", encoding="utf-8") as f:
            schema_sql = f.read()
        await self._conn.executescript(schema_sql)
        await self._conn.commit()

    async def close(self) -> None:
        """Close database connection."""
        if self._conn:
            await self._conn.close()
            self._conn = None

    # Chat history
    async def get_chat_history(self, user_id: str) -> ChatHistory | None:
        """Get the chat history of a user, or None if the user never chatted."""
        if not self._conn:
            raise RuntimeError("Storage not initialized")

        cursor = await self._conn.execute(
            """
            SELECT user_id, turns, last_updated
            FROM chat_histories
            WHERE user_id = ?
            """,
            (user_id,),
        )
        row = await cursor.fetchone()

        if not row:
            return None

        turns = [ChatTurn(role=t["role"], text=t["text"]) for t in json.loads(row[1])]
        return ChatHistory(
            user_id=row[0],
            turns=turns,
            last_updated=_parse_timestamp(row[2]),
        )

    async def append_turns(self, user_id: str, turns: list[ChatTurn]) -> ChatHistory:
        """
        Merge turns into the user's history, keeping the last MAX_TURNS.

        Read-modify-write without a lock: concurrent deliveries for the same
        user resolve as last-writer-wins.
        """
        if not self._conn:
            raise RuntimeError("Storage not initialized")

        history = await self.get_chat_history(user_id) or ChatHistory(user_id=user_id)
        history.append(*turns)

        await self._conn.execute(
            """
            INSERT OR REPLACE INTO chat_histories (user_id, turns, last_updated)
            VALUES (?, ?, ?)
            """,
            (
                user_id,
                json.dumps(
                    [{"role": t.role, "text": t.text} for t in history.turns[-MAX_TURNS:]],
                    ensure_ascii=False,
                ),
                history.last_updated.isoformat(),
            ),
        )
        await self._conn.commit()

        return history

    # TraceEvents
    async def save_trace_event(self, event: TraceEvent) -> None:
        """Save a trace event."""
        if not self._conn:
            raise RuntimeError("Storage not initialized")

        await self._conn.execute(
            """
            INSERT INTO trace_events (id, event_type, actor, data, timestamp)
            VALUES (?, ?, ?, ?, ?)
            """,
            (
                event.id or str(uuid.uuid4()),
                event.event_type,
                event.actor,
                json.dumps(event.data, ensure_ascii=False, default=str),
                event.timestamp.isoformat(),
            ),
        )
        await self._conn.commit()

    async def get_trace_events(
        self,
        after: datetime | None = None,
        event_types: list[str] | None = None,
        actor: str | None = None,
        limit: int = 100,
    ) -> list[TraceEvent]:
        """Get trace events with optional filters (newest first)."""
        if not self._conn:
            raise RuntimeError("Storage not initialized")

        conditions = []
        params: list = []

        if after:
            conditions.append("timestamp > ?")
            params.append(after.isoformat())
        if event_types:
            placeholders = ",".join("?" * len(event_types))
            conditions.append(f"event_type IN ({placeholders})")
            params.extend(event_types)
        if actor:
            conditions.append("actor = ?")
            params.append(actor)

        where_clause = f"WHERE {' AND '.join(conditions)}" if conditions else ""

        query = f"""
            SELECT id, event_type, actor, data, timestamp
            FROM trace_events
            {where_clause}
            ORDER BY timestamp DESC
            LIMIT ?
        """
        params.append(limit)

        cursor = await self._conn.execute(query, params)
        rows = await cursor.fetchall()

        return [
            TraceEvent(
                id=row[0],
                event_type=row[1],
                actor=row[2],
                data=json.loads(row[3]),
                timestamp=_parse_timestamp(row[4]),
            )
            for row in rows
        ]

    # Lifecycle
    async def clear(self) -> None:
        """Clear all data."""
        if not self._conn:
            raise RuntimeError("Storage not initialized")

        for table in ("chat_histories", "trace_events"):
            await self._conn.execute(f"DELETE FROM {table}")

        await self._conn.commit()
