"""Webhook API routes."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from ...app import IApplication
from ...line import parse_events
from ...logging_config import get_logger

logger = get_logger(__name__)


def create_webhook_router(app: IApplication) -> APIRouter:
    """Create webhook router."""
    router = APIRouter(tags=["webhook"])

    @router.post("/webhook")
    async def receive_webhook(request: Request):
        """Handle the message events of one platform delivery."""
        try:
            events = parse_events(await request.json())
        except ValueError:
            logger.error("Invalid webhook event data")
            return JSONResponse(status_code=400, content={"error": "Invalid event data"})

        await app.handler.handle_events(events)
        return PlainTextResponse("Webhook received!")

    return router
