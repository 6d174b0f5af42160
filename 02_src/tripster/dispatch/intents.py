"""Intent classification by prefix and substring rules."""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Union

from ..models import StickerEvent
from ..regions import REGION_NAME


class Intent(str, Enum):
    """Request categories, in classification priority order."""

    GREETING = "greeting"
    RECOMMEND_PLACES = "recommend_places"
    PLACE_INFO = "place_info"
    RECOMMEND_HOTELS = "recommend_hotels"
    WEATHER = "weather"
    MAP = "map"
    CONTACT_AUTHORITIES = "contact_authorities"
    FREE_TEXT = "free_text"


@dataclass(frozen=True)
class Classification:
    intent: Intent
    argument: str = ""


PLACES_KEYWORDS = ("แนะนำที่เที่ยว", "แนะนำสถานที่", "ขอที่เที่ยว")
INFO_PREFIX = "ข้อมูล "
HOTELS_PREFIX = "แนะนำโรงแรม"
LODGING_KEYWORD = "ขอที่พัก"
WEATHER_PREFIXES = ("สภาพอากาศ ", "สภาพอากาศปัจจุบัน")
MAP_PREFIX = "แผนที่"
CONTACT_COMMAND = "ติดต่อหน่วยงานที่เกี่ยวข้อง"

DEFAULT_WEATHER_PLACE = "กรุงเทพมหานคร"

_PLACES_RE = re.compile("|".join(PLACES_KEYWORDS))
_HOTELS_RE = re.compile(f"{HOTELS_PREFIX}|{LODGING_KEYWORD}")
_WEATHER_RE = re.compile("สภาพอากาศ(ปัจจุบัน)?")
_NUMBERED_LINE_RE = re.compile(r"^\d+\.\s+(.*)$")

PREFERENCE_HINTS = (
    ("ธรรมชาติ", "natural_feature"),
    ("วัฒนธรรม", "museum|church|historical"),
    ("ผจญภัย", "park|amusement_park"),
)


def _strip_first(pattern: re.Pattern, text: str) -> str:
    return pattern.sub("", text, count=1).strip()


def classify(message: Union[str, StickerEvent]) -> Classification:
    """First matching rule wins; unmatched text falls through to FREE_TEXT."""
    if isinstance(message, StickerEvent):
        return Classification(Intent.GREETING)

    text = message

    if text.startswith(PLACES_KEYWORDS):
        return Classification(
            Intent.RECOMMEND_PLACES, _strip_first(_PLACES_RE, text) or REGION_NAME
        )

    if text.startswith(INFO_PREFIX):
        return Classification(Intent.PLACE_INFO, text[len(INFO_PREFIX):].strip())

    if text.startswith(HOTELS_PREFIX) or LODGING_KEYWORD in text:
        return Classification(
            Intent.RECOMMEND_HOTELS, _strip_first(_HOTELS_RE, text) or REGION_NAME
        )

    if text.startswith(WEATHER_PREFIXES):
        return Classification(
            Intent.WEATHER, _strip_first(_WEATHER_RE, text) or DEFAULT_WEATHER_PLACE
        )

    if text.startswith(MAP_PREFIX):
        return Classification(Intent.MAP, text[len(MAP_PREFIX):].strip())

    if text == CONTACT_COMMAND:
        return Classification(Intent.CONTACT_AUTHORITIES)

    return Classification(Intent.FREE_TEXT, text)


def extract_place_names(text: str) -> list[str]:
    """
    Candidate place names from a numbered list in a model response.

    Keeps lines of the form "N. name", strips the numeral and markdown bold
    and drops anything after the first colon. Other lines are ignored.
    """
    names = []
    for line in text.split("\n"):
        match = _NUMBERED_LINE_RE.match(line.strip())
        if not match:
            continue
        name = match.group(1).replace("**", "").split(":")[0].strip()
        if name:
            names.append(name)
    return names


def preference_hints(text: str) -> list[str]:
    """Place-type hints for preferences mentioned in `text`."""
    return [hint for keyword, hint in PREFERENCE_HINTS if keyword in text]


def extract_plan_places(plan: str) -> list[str]:
    """Place names from lines of a travel plan that mention attractions."""
    names = []
    for line in plan.split("\n"):
        line = line.strip()
        if not line or not ("สถานที่ท่องเที่ยว" in line or "ที่เที่ยว" in line):
            continue
        line = re.sub("สถานที่ท่องเที่ยว: |ที่เที่ยว: ", "", line, count=1)
        name = line.split(" - ")[0].strip()
        if name:
            names.append(name)
    return names
