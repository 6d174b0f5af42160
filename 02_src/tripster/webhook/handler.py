"""Event Handler: per-event orchestration for webhook deliveries."""

from typing import Protocol, Sequence

from ..conversation import IConversationAgent
from ..dispatch import IIntentDispatcher
from ..dispatch import texts
from ..errors import LineApiError
from ..formatting import MessageFormatter
from ..line import ILineClient
from ..logging_config import get_logger
from ..models import (
    EventKind,
    ImageAnalysis,
    InboundEvent,
    TextMessage,
    TravelPlanRequest,
)
from ..tracker import ITracker
from ..translation import DEFAULT_LANG, LanguageNormalizer
from ..vision import IVisionService

logger = get_logger(__name__)

TEXT_LOADING_SECONDS = 5
IMAGE_LOADING_SECONDS = 10


class IEventHandler(Protocol):
    async def handle_events(self, events: Sequence[InboundEvent]) -> None:
        ...

    async def submit_plan(self, request: TravelPlanRequest) -> None:
        ...


class EventHandler:
    """
    Handles the message events of one webhook delivery.

    Events are processed one after another in platform order. A failure while
    handling an event is answered with a generic apology; a failure to send
    that apology is logged and the next event is processed.
    """

    def __init__(
        self,
        dispatcher: IIntentDispatcher,
        conversation: IConversationAgent,
        line: ILineClient,
        vision: IVisionService,
        normalizer: LanguageNormalizer,
        formatter: MessageFormatter,
        tracker: ITracker,
    ):
        self._dispatcher = dispatcher
        self._conversation = conversation
        self._line = line
        self._vision = vision
        self._normalizer = normalizer
        self._formatter = formatter
        self._tracker = tracker

    async def handle_events(self, events: Sequence[InboundEvent]) -> None:
        for event in events:
            await self.handle_event(event)

    async def handle_event(self, event: InboundEvent) -> None:
        logger.info(
            f"Received {event.kind.value} message", extra={"user_id": event.user_id}
        )
        await self._tracker.track(
            event_type="message_received",
            actor=event.user_id,
            data={"kind": event.kind.value},
        )

        try:
            if event.kind == EventKind.TEXT:
                await self._handle_text(event)
            elif event.kind == EventKind.IMAGE:
                await self._handle_image(event)
            elif event.kind == EventKind.STICKER:
                messages = await self._dispatcher.dispatch(event.user_id, event.payload)
                await self._line.reply(event.reply_token, messages)
        except Exception as e:
            logger.error(
                f"Webhook processing error: {e}",
                exc_info=True,
                extra={"user_id": event.user_id},
            )
            await self._tracker.track(
                event_type="event_failed",
                actor="event_handler",
                data={"user_id": event.user_id, "kind": event.kind.value, "error": str(e)},
            )
            await self._reply_error(event.reply_token)

    async def _handle_text(self, event: InboundEvent) -> None:
        first_contact = not await self._conversation.has_history(event.user_id)

        if not await self._line.start_loading(event.user_id, TEXT_LOADING_SECONDS):
            logger.info("Loading animation failed")

        messages = await self._dispatcher.dispatch(event.user_id, event.payload)

        if first_contact and messages and messages[-1].quick_reply is None:
            lang = await self._normalizer.detect(event.payload)
            welcome = await self._normalizer.localize(texts.WELCOME, lang)
            messages.append(TextMessage(welcome, quick_reply=self._formatter.quick_reply(lang)))

        if messages:
            await self._line.reply(event.reply_token, messages)

    async def _handle_image(self, event: InboundEvent) -> None:
        if not await self._line.start_loading(event.user_id, IMAGE_LOADING_SECONDS):
            logger.info("Loading animation failed for image")

        try:
            image = await self._line.fetch_content(event.payload)
        except LineApiError as e:
            logger.error(f"Error downloading image: {e}")
            await self._line.reply(event.reply_token, [await self._text(texts.IMAGE_NOT_DOWNLOADED)])
            return

        analysis = await self._vision.annotate(image)
        await self._line.reply(event.reply_token, [await self._text(describe_image(analysis))])

    async def _text(self, text: str, lang: str = DEFAULT_LANG) -> TextMessage:
        localized = await self._normalizer.localize(text, lang)
        return TextMessage(localized, quick_reply=self._formatter.quick_reply(lang))

    async def _reply_error(self, reply_token: str) -> None:
        try:
            await self._line.reply(reply_token, [await self._text(texts.PROCESSING_FAILED)])
        except Exception as e:
            logger.error(f"Failed to send error message: {e}")

    async def submit_plan(self, request: TravelPlanRequest) -> None:
        """Build a travel plan and push it to the user."""
        messages = await self._dispatcher.plan(request)
        await self._line.push(request.user_id, messages)
        await self._tracker.track(
            event_type="plan_pushed",
            actor="event_handler",
            data={"user_id": request.user_id, "destination": request.destination},
        )
        logger.info(f"Pushed travel plan to {request.user_id}")


def describe_image(analysis: ImageAnalysis | None) -> str:
    """Thai description of an image analysis result."""
    if analysis is None:
        return texts.IMAGE_NOT_ANALYZED

    labels = ", ".join(analysis.labels) if analysis.labels else None
    if analysis.landmark:
        text = texts.IMAGE_LANDMARK.format(
            landmark=analysis.landmark, confidence=analysis.confidence or 0
        )
        if labels:
            text += texts.IMAGE_LABELS_DETAIL.format(labels=labels)
        return text

    if labels:
        return texts.IMAGE_LABELS_ONLY.format(labels=labels)
    return texts.IMAGE_NOT_ANALYZED
