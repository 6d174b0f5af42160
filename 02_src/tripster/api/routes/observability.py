"""Trace event routes."""

from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel

from ...app import IApplication
from ...models import TraceEvent


class TraceEventResponse(BaseModel):
    id: str
    event_type: str
    actor: str
    data: dict[str, Any]
    timestamp: datetime

    @classmethod
    def from_event(cls, event: TraceEvent) -> "TraceEventResponse":
        return cls(
            id=event.id,
            event_type=event.event_type,
            actor=event.actor,
            data=event.data,
            timestamp=event.timestamp,
        )


def parse_after(value: str | None) -> datetime | None:
    """Parse an ISO timestamp; naive values are taken as UTC."""
    if not value:
        return None
    try:
        after = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid after timestamp format")
    return after if after.tzinfo else after.replace(tzinfo=timezone.utc)


def create_observability_router(app: IApplication) -> APIRouter:
    """Create the router serving persisted trace events (newest first)."""
    router = APIRouter(prefix="/api", tags=["observability"])

    @router.get("/trace-events", response_model=list[TraceEventResponse])
    async def get_trace_events(
        after: str | None = Query(None, description="ISO timestamp filter"),
        limit: int = Query(100, ge=1, le=1000),
        event_type: list[str] | None = Query(None, description="Event types to include"),
        actor: str | None = Query(None, description="User id or component name"),
    ) -> list[TraceEventResponse]:
        events = await app.storage.get_trace_events(
            after=parse_after(after),
            event_types=event_type,
            actor=actor,
            limit=limit,
        )
        return [TraceEventResponse.from_event(e) for e in events]

    return router
