"""Tests for EventHandler."""

from unittest.mock import AsyncMock, Mock

import aiosqlite
import pytest

from tripster.dispatch import texts
from tripster.errors import LineApiError, MessageValidationError
from tripster.models import (
    EventKind,
    ImageAnalysis,
    InboundEvent,
    StickerEvent,
    TextMessage,
    TravelPlanRequest,
)
from tripster.tracker import Tracker
from tripster.webhook import EventHandler


@pytest.fixture
def mock_dispatcher(formatter):
    dispatcher = Mock()
    dispatcher.dispatch = AsyncMock(
        side_effect=lambda user_id, message: [
            TextMessage("answer", quick_reply=formatter.quick_reply("th"))
        ]
    )
    dispatcher.plan = AsyncMock(return_value=[TextMessage("plan")])
    return dispatcher


@pytest.fixture
def mock_line():
    line = Mock()
    line.reply = AsyncMock()
    line.push = AsyncMock()
    line.start_loading = AsyncMock(return_value=True)
    line.fetch_content = AsyncMock(return_value=b"img")
    return line


@pytest.fixture
def mock_vision():
    vision = Mock()
    vision.annotate = AsyncMock(return_value=ImageAnalysis(labels=["Mountain"]))
    return vision


@pytest.fixture
def handler(
    mock_dispatcher, mock_conversation, mock_line, mock_vision, normalizer, formatter, mock_tracker
):
    return EventHandler(
        dispatcher=mock_dispatcher,
        conversation=mock_conversation,
        line=mock_line,
        vision=mock_vision,
        normalizer=normalizer,
        formatter=formatter,
        tracker=mock_tracker,
    )


def text_event(text="สวัสดี", token="r1"):
    return InboundEvent(user_id="u1", reply_token=token, kind=EventKind.TEXT, payload=text)


class TestTextEvents:
    """Tests for text message handling."""

    async def test_dispatch_and_reply(self, handler, mock_dispatcher, mock_line):
        await handler.handle_events([text_event()])

        mock_line.start_loading.assert_awaited_once_with("u1", 5)
        mock_dispatcher.dispatch.assert_awaited_once_with("u1", "สวัสดี")
        token, messages = mock_line.reply.call_args.args
        assert token == "r1"
        assert [m.text for m in messages] == ["answer"]

    async def test_first_contact_gets_welcome(
        self, handler, mock_dispatcher, mock_conversation, mock_line
    ):
        """Test that a welcome is appended when the last reply has no menu."""
        mock_conversation.has_history.return_value = False
        mock_dispatcher.dispatch.side_effect = None
        mock_dispatcher.dispatch.return_value = [TextMessage("no menu")]

        await handler.handle_events([text_event()])

        messages = mock_line.reply.call_args.args[1]
        assert messages[-1].text == texts.WELCOME
        assert messages[-1].quick_reply is not None

    async def test_first_contact_with_menu_gets_no_welcome(
        self, handler, mock_conversation, mock_line
    ):
        mock_conversation.has_history.return_value = False

        await handler.handle_events([text_event()])

        assert len(mock_line.reply.call_args.args[1]) == 1

    async def test_loading_failure_is_not_fatal(self, handler, mock_line):
        mock_line.start_loading.return_value = False

        await handler.handle_events([text_event()])

        mock_line.reply.assert_awaited_once()


class TestStickerEvents:
    async def test_sticker_is_dispatched(self, handler, mock_dispatcher, mock_line):
        sticker = StickerEvent(package_id="1", sticker_id="2")
        event = InboundEvent("u1", "r1", EventKind.STICKER, sticker)

        await handler.handle_events([event])

        mock_dispatcher.dispatch.assert_awaited_once_with("u1", sticker)
        mock_line.start_loading.assert_not_called()


class TestImageEvents:
    """Tests for the image flow."""

    async def test_image_is_described(self, handler, mock_line, mock_vision):
        event = InboundEvent("u1", "r1", EventKind.IMAGE, "m1")

        await handler.handle_events([event])

        mock_line.start_loading.assert_awaited_once_with("u1", 10)
        mock_line.fetch_content.assert_awaited_once_with("m1")
        mock_vision.annotate.assert_awaited_once_with(b"img")
        message = mock_line.reply.call_args.args[1][0]
        assert message.text == texts.IMAGE_LABELS_ONLY.format(labels="Mountain")
        assert message.quick_reply is not None

    async def test_download_failure(self, handler, mock_line, mock_vision):
        mock_line.fetch_content.side_effect = LineApiError("404")

        await handler.handle_events([InboundEvent("u1", "r1", EventKind.IMAGE, "m1")])

        assert mock_line.reply.call_args.args[1][0].text == texts.IMAGE_NOT_DOWNLOADED
        mock_vision.annotate.assert_not_called()


class TestErrors:
    """Tests for the generic error reply."""

    async def test_failure_sends_apology(self, handler, mock_dispatcher, mock_line, mock_tracker):
        mock_dispatcher.dispatch.side_effect = RuntimeError("boom")

        await handler.handle_events([text_event()])

        message = mock_line.reply.call_args.args[1][0]
        assert message.text == texts.PROCESSING_FAILED
        assert message.quick_reply is not None
        event_types = [c.kwargs["event_type"] for c in mock_tracker.track.call_args_list]
        assert "event_failed" in event_types

    async def test_failed_apology_is_swallowed(self, handler, mock_line):
        """Test that later events are still handled when sends keep failing."""
        mock_line.reply.side_effect = MessageValidationError("bad")

        await handler.handle_events([text_event(token="r1"), text_event(token="r2")])

        tokens = [c.args[0] for c in mock_line.reply.call_args_list]
        assert tokens == ["r1", "r1", "r2", "r2"]

    async def test_events_are_sequential(self, handler, mock_dispatcher):
        await handler.handle_events([text_event("a"), text_event("b")])

        assert [c.args[1] for c in mock_dispatcher.dispatch.call_args_list] == ["a", "b"]


class TestSubmitPlan:
    async def test_plan_is_pushed(self, handler, mock_dispatcher, mock_line):
        request = TravelPlanRequest(
            "u1", "กรุงเทพ", "เชียงใหม่", "5000", "ธรรมชาติ", "เพื่อน", "รถไฟ", "d1", "d2"
        )

        await handler.submit_plan(request)

        mock_dispatcher.plan.assert_awaited_once_with(request)
        user_id, messages = mock_line.push.call_args.args
        assert user_id == "u1"
        assert messages[0].text == "plan"


class TestTraceStorageFailure:
    """Tests that a broken trace store never costs the user a reply."""

    @pytest.fixture
    def locked_handler(
        self, mock_dispatcher, mock_conversation, mock_line, mock_vision, normalizer, formatter
    ):
        storage = Mock()
        storage.save_trace_event = AsyncMock(
            side_effect=aiosqlite.OperationalError("database is locked")
        )
        return EventHandler(
            dispatcher=mock_dispatcher,
            conversation=mock_conversation,
            line=mock_line,
            vision=mock_vision,
            normalizer=normalizer,
            formatter=formatter,
            tracker=Tracker(storage=storage),
        )

    async def test_every_event_gets_a_reply(self, locked_handler, mock_line):
        await locked_handler.handle_events([text_event(token="r1"), text_event(token="r2")])

        assert [c.args[0] for c in mock_line.reply.call_args_list] == ["r1", "r2"]

    async def test_apology_is_still_sent(self, locked_handler, mock_dispatcher, mock_line):
        mock_dispatcher.dispatch.side_effect = RuntimeError("boom")

        await locked_handler.handle_events([text_event()])

        assert mock_line.reply.call_args.args[1][0].text == texts.PROCESSING_FAILED
