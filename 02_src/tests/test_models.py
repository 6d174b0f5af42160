"""Tests for data models."""

from datetime import datetime, timezone

from tripster.models import (
    MAX_TURNS,
    ChatHistory,
    ChatTurn,
    ImageMessage,
    LocationMessage,
    PlaceDetails,
    QuickReply,
    QuickReplyAction,
    TextMessage,
)
from conftest import make_place


class TestChatHistory:
    """Tests for ChatHistory."""

    def test_append_caps_turns(self):
        """Test that history never grows beyond MAX_TURNS."""
        history = ChatHistory(user_id="u1")
        for i in range(8):
            history.append(ChatTurn("user", f"q{i}"), ChatTurn("model", f"a{i}"))

        assert len(history.turns) == MAX_TURNS
        assert history.turns[0].text == "q3"
        assert history.turns[-1].text == "a7"

    def test_append_updates_timestamp(self):
        old = datetime(2020, 1, 1, tzinfo=timezone.utc)
        history = ChatHistory(user_id="u1", last_updated=old)

        history.append(ChatTurn("user", "hi"))

        assert history.last_updated > old

    def test_trimmed(self):
        history = ChatHistory(user_id="u1", turns=[ChatTurn("user", str(i)) for i in range(4)])

        assert [t.text for t in history.trimmed(2)] == ["2", "3"]
        assert history.trimmed(0) == []


class TestReplyPayloads:
    """Tests for LINE wire shapes."""

    def test_text_with_quick_reply(self):
        message = TextMessage(
            "hi",
            quick_reply=QuickReply(items=(QuickReplyAction(label="Go", text="go"),)),
        )

        assert message.to_payload() == {
            "type": "text",
            "text": "hi",
            "quickReply": {
                "items": [
                    {"type": "action", "action": {"type": "message", "label": "Go", "text": "go"}}
                ]
            },
        }

    def test_text_without_quick_reply(self):
        assert "quickReply" not in TextMessage("hi").to_payload()

    def test_image(self):
        payload = ImageMessage("https://a.test/o.jpg", "https://a.test/p.jpg").to_payload()

        assert payload["originalContentUrl"] == "https://a.test/o.jpg"
        assert payload["previewImageUrl"] == "https://a.test/p.jpg"

    def test_location(self):
        payload = LocationMessage("Doi", "Road", 18.8, 98.9).to_payload()

        assert payload == {
            "type": "location",
            "title": "Doi",
            "address": "Road",
            "latitude": 18.8,
            "longitude": 98.9,
        }


class TestPlaceRecord:
    def test_with_details_keeps_coordinates(self):
        place = make_place("Doi")

        merged = place.with_details(
            PlaceDetails(name="Doi Suthep", rating=4.9, website="https://w.test")
        )

        assert merged.name == "Doi Suthep"
        assert merged.rating == 4.9
        assert merged.website == "https://w.test"
        assert (merged.latitude, merged.longitude) == (place.latitude, place.longitude)

    def test_with_no_details(self):
        place = make_place("Doi")

        assert place.with_details(None) is place
