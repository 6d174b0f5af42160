"""Chat history data models."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Literal

MAX_TURNS = 10


@dataclass(frozen=True)
class ChatTurn:
    """A single turn in a user's conversation with the completion model."""

    role: Literal["user", "model"]
    text: str


@dataclass
class ChatHistory:
    """Bounded per-user conversation history."""

    user_id: str
    turns: list[ChatTurn] = field(default_factory=list)
    last_updated: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc)
    )

    def trimmed(self, limit: int = MAX_TURNS) -> list[ChatTurn]:
        """Return the most recent `limit` turns."""
        if limit <= 0:
            return []
        return self.turns[-limit:]

    def append(self, *turns: ChatTurn) -> None:
        """Append turns and drop everything older than MAX_TURNS."""
        self.turns = (self.turns + list(turns))[-MAX_TURNS:]
        self.last_updated = datetime.now(timezone.utc)
