"""Tests for intent classification and list extraction."""

import pytest

from tripster.dispatch import Intent, classify, extract_place_names
from tripster.dispatch.intents import extract_plan_places, preference_hints
from tripster.models import StickerEvent


class TestClassify:
    """Tests for classify() rule order."""

    def test_sticker_is_greeting(self):
        """Test that any sticker is a greeting."""
        result = classify(StickerEvent(package_id="1", sticker_id="2"))
        assert result.intent == Intent.GREETING

    @pytest.mark.parametrize(
        "text,argument",
        [
            ("แนะนำที่เที่ยว เชียงใหม่", "เชียงใหม่"),
            ("แนะนำสถานที่ น่าน", "น่าน"),
            ("ขอที่เที่ยว เชียงราย", "เชียงราย"),
            ("แนะนำที่เที่ยว", "ภาคเหนือ"),
        ],
    )
    def test_recommend_places(self, text, argument):
        """Test places keywords and the default region argument."""
        result = classify(text)
        assert result.intent == Intent.RECOMMEND_PLACES
        assert result.argument == argument

    def test_place_info(self):
        result = classify("ข้อมูล ดอยสุเทพ")
        assert result.intent == Intent.PLACE_INFO
        assert result.argument == "ดอยสุเทพ"

    def test_recommend_hotels_prefix(self):
        result = classify("แนะนำโรงแรม เชียงใหม่")
        assert result.intent == Intent.RECOMMEND_HOTELS
        assert result.argument == "เชียงใหม่"

    def test_recommend_hotels_substring(self):
        """Test that the lodging keyword matches anywhere in the text."""
        result = classify("ช่วย ขอที่พัก ลำปาง")
        assert result.intent == Intent.RECOMMEND_HOTELS

    def test_recommend_hotels_default_region(self):
        assert classify("แนะนำโรงแรม").argument == "ภาคเหนือ"

    def test_weather(self):
        result = classify("สภาพอากาศ เชียงใหม่")
        assert result.intent == Intent.WEATHER
        assert result.argument == "เชียงใหม่"

    def test_weather_default_place(self):
        result = classify("สภาพอากาศปัจจุบัน")
        assert result.intent == Intent.WEATHER
        assert result.argument == "กรุงเทพมหานคร"

    def test_map(self):
        result = classify("แผนที่ วัดพระธาตุดอยสุเทพ")
        assert result.intent == Intent.MAP
        assert result.argument == "วัดพระธาตุดอยสุเทพ"

    def test_contact_requires_exact_text(self):
        """Test that only the exact contact command is matched."""
        assert classify("ติดต่อหน่วยงานที่เกี่ยวข้อง").intent == Intent.CONTACT_AUTHORITIES
        assert classify("ติดต่อหน่วยงานที่เกี่ยวข้อง ด่วน").intent == Intent.FREE_TEXT

    def test_free_text(self):
        result = classify("hello there")
        assert result.intent == Intent.FREE_TEXT
        assert result.argument == "hello there"

    def test_places_rule_wins_over_lodging_keyword(self):
        """Test first-match-wins ordering."""
        result = classify("แนะนำที่เที่ยว ขอที่พัก")
        assert result.intent == Intent.RECOMMEND_PLACES


class TestExtractPlaceNames:
    """Tests for numbered-list extraction."""

    def test_extracts_numbered_lines(self):
        """Test the documented example: bold and text after a colon are dropped."""
        text = "Here you go:\n1. **Doi Suthep**: temple\n2. Nimman\nEnjoy"
        assert extract_place_names(text) == ["Doi Suthep", "Nimman"]

    def test_prose_and_markup(self):
        text = "1. Doi Suthep: temple\n2. **Night Bazaar**\nsome prose"
        assert extract_place_names(text) == ["Doi Suthep", "Night Bazaar"]

    def test_ignores_non_numbered_lines(self):
        assert extract_place_names("no list here\n- bullet") == []

    def test_strips_indented_lines(self):
        assert extract_place_names("   3.   วัดเจดีย์หลวง  ") == ["วัดเจดีย์หลวง"]

    def test_drops_empty_names(self):
        assert extract_place_names("1. **: nothing") == []

    def test_requires_space_after_numeral(self):
        assert extract_place_names("1.Doi Inthanon") == []


class TestPreferenceHints:
    def test_maps_keywords(self):
        assert preference_hints("แนะนำที่เที่ยว ธรรมชาติ ผจญภัย") == [
            "natural_feature",
            "park|amusement_park",
        ]

    def test_none(self):
        assert preference_hints("แนะนำที่เที่ยว") == []


class TestExtractPlanPlaces:
    def test_lines_with_attraction_keyword(self):
        plan = (
            "วันแรก\n"
            "สถานที่ท่องเที่ยว: ดอยสุเทพ - วัดบนดอย\n"
            "ที่เที่ยว: ถนนนิมมาน - ย่านคาเฟ่\n"
            "โรงแรม: Hotel A - ใจกลางเมือง"
        )
        assert extract_plan_places(plan) == ["ดอยสุเทพ", "ถนนนิมมาน"]
