"""LINE Messaging API client."""

from typing import Any, Protocol, Sequence

import httpx

from ..errors import LineApiError, MessageValidationError
from ..logging_config import get_logger
from ..models import ReplyMessage

logger = get_logger(__name__)

API_BASE_URL = "https://api.line.me/v2/bot"
DATA_API_BASE_URL = "https://api-data.line.me/v2/bot"

DEFAULT_LOADING_SECONDS = 5
MAX_LOADING_SECONDS = 60


class ILineClient(Protocol):
    """Outbound transport to the chat platform."""

    async def reply(self, reply_token: str, messages: Sequence[ReplyMessage]) -> None:
        ...

    async def push(self, user_id: str, messages: Sequence[ReplyMessage]) -> None:
        ...

    async def start_loading(self, user_id: str, seconds: int = DEFAULT_LOADING_SECONDS) -> bool:
        ...

    async def fetch_content(self, message_id: str) -> bytes:
        ...


def validate_messages(payloads: Sequence[dict[str, Any]], check_quick_reply: bool = True) -> None:
    """
    Reject structurally invalid message payloads before they are sent.

    Raises:
        MessageValidationError: on a payload without a type, a text message
            whose text is empty or not a string, or a quick reply without an
            items list.
    """
    for payload in payloads:
        if not payload.get("type"):
            raise MessageValidationError("Invalid message structure: missing type")
        if payload["type"] == "text":
            text = payload.get("text")
            if not text or not isinstance(text, str):
                raise MessageValidationError("Invalid text message: text is missing or not a string")
        if check_quick_reply and "quickReply" in payload:
            items = payload["quickReply"].get("items")
            if not isinstance(items, list):
                raise MessageValidationError("Invalid quick reply: missing or invalid items")


def normalize_loading_seconds(seconds: int) -> int:
    """Loading duration must be a multiple of 5 between 5 and 60."""
    if seconds < DEFAULT_LOADING_SECONDS or seconds > MAX_LOADING_SECONDS or seconds % 5:
        logger.warning(f"Invalid loading seconds {seconds}, using {DEFAULT_LOADING_SECONDS}")
        return DEFAULT_LOADING_SECONDS
    return seconds


class LineMessagingClient:
    """Sends replies and pushes, starts the typing indicator, downloads media."""

    def __init__(self, http: httpx.AsyncClient, access_token: str):
        self._http = http
        self._headers = {"Authorization": f"Bearer {access_token}"}

    async def _post(self, url: str, body: dict[str, Any]) -> httpx.Response:
        try:
            response = await self._http.post(url, json=body, headers=self._headers)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise LineApiError(
                f"LINE API error {e.response.status_code}: {e.response.text}"
            ) from e
        except httpx.HTTPError as e:
            raise LineApiError(f"LINE API request failed: {e}") from e
        return response

    async def reply(self, reply_token: str, messages: Sequence[ReplyMessage]) -> None:
        """Answer a webhook event. Raises MessageValidationError or LineApiError."""
        payloads = [message.to_payload() for message in messages]
        validate_messages(payloads)

        logger.debug(f"Replying with {len(payloads)} message(s)")
        await self._post(
            f"{API_BASE_URL}/message/reply",
            {"replyToken": reply_token, "messages": payloads},
        )
        logger.info(f"Sent {len(payloads)} reply message(s)")

    async def push(self, user_id: str, messages: Sequence[ReplyMessage]) -> None:
        """Send unsolicited messages to a user."""
        payloads = [message.to_payload() for message in messages]
        validate_messages(payloads, check_quick_reply=False)

        await self._post(f"{API_BASE_URL}/message/push", {"to": user_id, "messages": payloads})
        logger.info(f"Pushed {len(payloads)} message(s) to {user_id}")

    async def start_loading(self, user_id: str, seconds: int = DEFAULT_LOADING_SECONDS) -> bool:
        """Show the typing indicator. Returns False instead of raising."""
        seconds = normalize_loading_seconds(seconds)
        try:
            await self._post(
                f"{API_BASE_URL}/chat/loading/start",
                {"chatId": user_id, "loadingSeconds": seconds},
            )
        except LineApiError as e:
            logger.warning(f"Loading animation failed: {e}")
            return False
        return True

    async def fetch_content(self, message_id: str) -> bytes:
        """Download the binary content of an image message."""
        try:
            response = await self._http.get(
                f"{DATA_API_BASE_URL}/message/{message_id}/content",
                headers=self._headers,
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise LineApiError(f"Content download failed for {message_id}: {e}") from e
        return response.content
