"""Message Formatter: domain records to LINE reply messages."""

from typing import Sequence
from urllib.parse import quote

from ..concurrency import gather_successes
from ..config import DEFAULT_TRIP_PLANNER_URL
from ..logging_config import get_logger
from ..models import (
    FlexBubble,
    FlexCardMessage,
    FlexCarouselMessage,
    FlexText,
    HotelRecord,
    ImagemapArea,
    ImagemapMessage,
    PlaceRecord,
    QuickReply,
    QuickReplyAction,
    SearchResult,
    TextMessage,
    UriButton,
)
from ..places import IPlaceResolver

logger = get_logger(__name__)

PLACEHOLDER_PHOTO_URL = "https://example.com/placeholder.jpg"
PHOTO_URL = "https://maps.googleapis.com/maps/api/place/photo"
MAPS_SEARCH_URL = "https://www.google.com/maps/search/"

NO_PLACES_TEXT = "ขออภัย ไม่พบสถานที่ท่องเที่ยวที่แนะนำในขณะนี้"
NO_HOTELS_TEXT = "ขออภัย ไม่พบโรงแรมที่แนะนำในขณะนี้"
NO_DATA = "ไม่มีข้อมูล"
MAP_BUTTON_LABEL = "ดูในแผนที่"

RECOMMEND_PLACES_COMMAND = "แนะนำที่เที่ยว"
RECOMMEND_HOTELS_COMMAND = "แนะนำโรงแรม"

# label per language; anything other than Thai gets English
QUICK_REPLY_LABELS = {
    "th": ("แนะนำที่เที่ยว", "แนะนำโรงแรม", "สร้างแผนการเดินทาง"),
    "en": ("Recommend Places", "Recommend Hotels", "Create Travel Plan"),
}

CONTACT_IMAGEMAP_BASE = "https://tripster-plans.netlify.app/images"
CONTACT_ALT_TEXT = "ติดต่อหน่วยงานที่เกี่ยวข้อง"
CONTACT_NUMBERS = (
    ("tel:1669", "tel:191", "tel:1155"),
    ("tel:1196", "tel:1860", "tel:+6622831500"),
)
CONTACT_AREAS = (
    ((0, 300, 1040, 350), (0, 540, 1040, 340), (0, 778, 1040, 346)),
    ((0, 300, 1040, 347), (0, 540, 1040, 347), (0, 778, 1040, 346)),
)


def _format_rating(value) -> str:
    return str(value) if value else "N/A"


class MessageFormatter:
    """Builds reply messages. Everything except `recommendation_carousel` is pure."""

    def __init__(self, places_api_key: str, trip_planner_url: str = DEFAULT_TRIP_PLANNER_URL):
        self._places_api_key = places_api_key
        self._trip_planner_url = trip_planner_url

    def photo_url(self, photo_ref: str | None) -> str:
        if not photo_ref:
            return PLACEHOLDER_PHOTO_URL
        return (
            f"{PHOTO_URL}?maxwidth=400&photo_reference={photo_ref}"
            f"&key={self._places_api_key}"
        )

    @staticmethod
    def maps_url(latitude: float | None, longitude: float | None, name: str) -> str | None:
        if latitude is None or longitude is None:
            return None
        return (
            f"{MAPS_SEARCH_URL}?api=1&query={latitude},{longitude}"
            f"&query_place={quote(name, safe='')}"
        )

    def quick_reply(self, lang: str = "th") -> QuickReply:
        """The standard menu: two intent shortcuts and the trip-planner link."""
        places_label, hotels_label, plan_label = QUICK_REPLY_LABELS.get(
            lang, QUICK_REPLY_LABELS["en"]
        )
        return QuickReply(
            items=(
                QuickReplyAction(label=places_label, text=RECOMMEND_PLACES_COMMAND),
                QuickReplyAction(label=hotels_label, text=RECOMMEND_HOTELS_COMMAND),
                QuickReplyAction(label=plan_label, uri=self._trip_planner_url),
            )
        )

    def place_card(self, place: PlaceRecord) -> FlexCardMessage:
        """Single info card with address, rating, opening hours and a map button."""
        hours = ", ".join(place.opening_hours) if place.opening_hours else NO_DATA
        body = [
            FlexText(place.name, size="xl", weight="bold"),
            FlexText(f"ที่อยู่: {place.address}"),
            FlexText(
                f"เรตติ้ง: {_format_rating(place.rating)} "
                f"(รีวิว: {_format_rating(place.rating_count)})"
            ),
            FlexText(f"ชั่วโมงเปิด/ปิด: {hours}", size="xs", wrap=True),
        ]
        map_url = self.maps_url(place.latitude, place.longitude, place.name)

        return FlexCardMessage(
            alt_text=f"ข้อมูลสถานที่: {place.name}",
            bubble=FlexBubble(
                hero_url=self.photo_url(place.photo_ref),
                body=body,
                body_button=UriButton(MAP_BUTTON_LABEL, map_url) if map_url else None,
            ),
        )

    def _carousel_bubble(
        self,
        name: str,
        subtitle: str,
        address: str,
        rating,
        photo_ref: str | None,
        latitude: float | None,
        longitude: float | None,
    ) -> FlexBubble:
        map_url = self.maps_url(latitude, longitude, name)
        return FlexBubble(
            hero_url=self.photo_url(photo_ref),
            body=[
                FlexText(name, size="lg", weight="bold"),
                FlexText(subtitle, size="sm"),
                FlexText(f"ที่อยู่: {address}", size="sm", wrap=True),
                FlexText(f"เรตติ้ง: {_format_rating(rating)}", size="xs"),
            ],
            footer_button=UriButton(MAP_BUTTON_LABEL, map_url) if map_url else None,
        )

    def place_carousel(self, places: Sequence[PlaceRecord]) -> FlexCarouselMessage | TextMessage:
        if not places:
            return TextMessage(NO_PLACES_TEXT)
        return FlexCarouselMessage(
            alt_text="แนะนำที่เที่ยว",
            bubbles=[
                self._carousel_bubble(
                    p.name,
                    "สถานที่ท่องเที่ยวยอดนิยม",
                    p.address,
                    p.rating,
                    p.photo_ref,
                    p.latitude,
                    p.longitude,
                )
                for p in places
            ],
        )

    def hotel_carousel(self, hotels: Sequence[HotelRecord]) -> FlexCarouselMessage | TextMessage:
        if not hotels:
            logger.warning("No hotels found for carousel")
            return TextMessage(NO_HOTELS_TEXT)
        return FlexCarouselMessage(
            alt_text="แนะนำโรงแรม",
            bubbles=[
                self._carousel_bubble(
                    h.name,
                    "โรงแรมแนะนำ",
                    h.address,
                    h.rating,
                    h.photo_ref,
                    h.latitude,
                    h.longitude,
                )
                for h in hotels
            ],
        )

    async def recommendation_carousel(
        self, names: Sequence[str], resolver: IPlaceResolver
    ) -> FlexCarouselMessage | TextMessage:
        """Dedupe `names`, resolve them concurrently and build the carousel."""
        unique = list(dict.fromkeys(names))
        places = await gather_successes(resolver.resolve, unique)
        if not places:
            logger.warning("No valid places found for carousel")
        return self.place_carousel(places)

    @staticmethod
    def search_links(results: Sequence[SearchResult], limit: int = 3) -> str:
        return "\n".join(f"- {r.title}: {r.link}" for r in list(results)[:limit])

    @staticmethod
    def contact_imagemaps() -> list[ImagemapMessage]:
        """Two imagemaps whose rows dial emergency and tourist-help numbers."""
        imagemaps = []
        for group, (numbers, areas) in enumerate(zip(CONTACT_NUMBERS, CONTACT_AREAS), start=1):
            imagemaps.append(
                ImagemapMessage(
                    base_url=f"{CONTACT_IMAGEMAP_BASE}/contact_imagemap{group}.png?w=auto",
                    alt_text=f"{CONTACT_ALT_TEXT} (กลุ่ม {group})",
                    areas=[
                        ImagemapArea(number, *area) for number, area in zip(numbers, areas)
                    ],
                )
            )
        return imagemaps
