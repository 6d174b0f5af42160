"""IntentDispatcher: classify an inbound message and assemble the replies."""

import asyncio
from datetime import date
from typing import Awaitable, Callable, Protocol, Union

from ..concurrency import gather_successes
from ..conversation import IConversationAgent
from ..formatting import MessageFormatter
from ..logging_config import get_logger
from ..models import (
    FlexCarouselMessage,
    ImageMessage,
    LocationMessage,
    PlaceRecord,
    ReplyMessage,
    SearchResult,
    StickerEvent,
    TextMessage,
    TravelPlanRequest,
)
from ..places import (
    ATTRACTION_CONTEXT,
    HOTEL_CONTEXT,
    IHotelFinder,
    IPlaceResolver,
    ISearchEnricher,
)
from ..regions import is_supported_region
from ..tracker import ITracker
from ..translation import DEFAULT_LANG, LanguageNormalizer
from . import texts
from .intents import (
    Intent,
    classify,
    extract_place_names,
    extract_plan_places,
    preference_hints,
)

logger = get_logger(__name__)

IMAGE_MARKER = "แสดงรูปภาพ"
MAX_CAROUSEL_PLACES = 5
MAX_PLAN_PLACES = 3
MAX_PLAN_HOTELS = 2
MAX_TEXT_LENGTH = 5000

Message = Union[str, StickerEvent]
Branch = Callable[[str, Message, str, str], Awaitable[list[ReplyMessage]]]


class IIntentDispatcher(Protocol):
    async def dispatch(self, user_id: str, message: Message) -> list[ReplyMessage]:
        ...

    async def plan(self, request: TravelPlanRequest) -> list[ReplyMessage]:
        ...


class IntentDispatcher:
    """Runs the intent-specific call sequence and returns ordered replies."""

    def __init__(
        self,
        conversation: IConversationAgent,
        normalizer: LanguageNormalizer,
        resolver: IPlaceResolver,
        hotels: IHotelFinder,
        search: ISearchEnricher,
        formatter: MessageFormatter,
        tracker: ITracker,
        today: Callable[[], date] = date.today,
    ):
        self._conversation = conversation
        self._normalizer = normalizer
        self._resolver = resolver
        self._hotels = hotels
        self._search = search
        self._formatter = formatter
        self._tracker = tracker
        self._today = today

        self._branches: dict[Intent, Branch] = {
            Intent.GREETING: self._greeting,
            Intent.RECOMMEND_PLACES: self._recommend_places,
            Intent.PLACE_INFO: self._place_info,
            Intent.RECOMMEND_HOTELS: self._recommend_hotels,
            Intent.WEATHER: self._weather,
            Intent.MAP: self._map,
            Intent.CONTACT_AUTHORITIES: self._contact_authorities,
            Intent.FREE_TEXT: self._free_text,
        }

    async def dispatch(self, user_id: str, message: Message) -> list[ReplyMessage]:
        """
        Classify `message` and run its branch.

        Always returns at least one message, the last one carrying the quick
        reply menu. A failure inside a branch is traced and answered with a
        localized apology instead of propagating.
        """
        lang = DEFAULT_LANG
        if isinstance(message, str):
            lang = await self._normalizer.detect(message)

        classification = classify(message)
        log_extra = {"user_id": user_id, "intent": classification.intent.value}
        logger.info("Dispatching message", extra=log_extra)

        branch = self._branches[classification.intent]
        try:
            return await branch(user_id, message, classification.argument, lang)
        except Exception as e:
            logger.error(
                f"Branch failed: {e}",
                extra=log_extra,
                exc_info=True,
            )
            await self._tracker.track(
                event_type="branch_failed",
                actor="intent_dispatcher",
                data={
                    "user_id": user_id,
                    "intent": classification.intent.value,
                    "error": str(e),
                },
            )
            return [await self._closing(texts.BRANCH_FAILED, lang)]

    async def plan(self, request: TravelPlanRequest) -> list[ReplyMessage]:
        """Build a travel plan from a submitted preference form."""
        prompt = texts.PLAN_PROMPT.format(
            start_location=request.start_location,
            destination=request.destination,
            budget=request.budget,
            preference=request.preference,
            travel_with=request.travel_with,
            transport=request.transport,
            travel_date_start=request.travel_date_start,
            travel_date_end=request.travel_date_end,
        )
        logger.info(f"Planning trip for {request.user_id}: {request.destination}")

        response = await self._conversation.complete(request.user_id, prompt)
        place_names = extract_plan_places(response)[:MAX_PLAN_PLACES]

        place_carousel, hotels = await asyncio.gather(
            self._formatter.recommendation_carousel(place_names, self._resolver),
            self._hotels.find_hotels(request.destination),
        )

        header = texts.PLAN_HEADER.format(
            start_location=request.start_location,
            destination=request.destination,
            plan=response,
        )
        messages: list[ReplyMessage] = [TextMessage(header[:MAX_TEXT_LENGTH])]
        if isinstance(place_carousel, FlexCarouselMessage):
            messages.append(place_carousel)
        if hotels:
            messages.append(self._formatter.hotel_carousel(hotels[:MAX_PLAN_HOTELS]))
        messages.append(
            TextMessage(texts.MORE_INFO, quick_reply=self._formatter.quick_reply(DEFAULT_LANG))
        )
        return messages

    # Helpers

    async def _closing(self, text: str, lang: str) -> TextMessage:
        """Localized text message carrying the quick reply menu."""
        localized = await self._normalizer.localize(text, lang)
        return TextMessage(localized or text, quick_reply=self._formatter.quick_reply(lang))

    def _source_note(self) -> str:
        return texts.data_source_line(self._today())

    async def _links_message(
        self, header: str, results: list[SearchResult], lang: str
    ) -> TextMessage | None:
        if not results:
            return None
        links = self._formatter.search_links(results)
        return TextMessage(await self._normalizer.localize(f"{header}\n{links}", lang))

    async def _enrich(self, names: list[str], context: str) -> list[SearchResult]:
        """Search every name concurrently and flatten the hits in name order."""
        per_name = await gather_successes(
            lambda name: self._search.search(name, context), names
        )
        return [result for results in per_name for result in results]

    async def _place_recommendations(
        self,
        candidates: list[str],
        lang: str,
        follow_up: str,
        destination: str | None = None,
    ) -> list[ReplyMessage]:
        """Resolve candidates, enrich them, and optionally add nearby hotels."""
        resolved = await gather_successes(self._resolver.resolve, candidates)
        places = _unique_places(resolved)[:MAX_CAROUSEL_PLACES]
        names = [place.name for place in places]

        if destination is not None:
            search_results, hotels = await asyncio.gather(
                self._enrich(names, ATTRACTION_CONTEXT),
                self._hotels.find_hotels(destination),
            )
        else:
            search_results, hotels = await self._enrich(names, ATTRACTION_CONTEXT), None

        messages: list[ReplyMessage] = [self._formatter.place_carousel(places)]
        links = await self._links_message(texts.PLACES_LINKS_HEADER, search_results, lang)
        if links:
            messages.append(links)
        if hotels is not None:
            messages.append(self._formatter.hotel_carousel(hotels))
        messages.append(await self._closing(follow_up, lang))
        return messages

    # Branches

    async def _greeting(
        self, user_id: str, message: Message, argument: str, lang: str
    ) -> list[ReplyMessage]:
        return [await self._closing(texts.GREETING, lang)]

    async def _recommend_places(
        self, user_id: str, message: Message, destination: str, lang: str
    ) -> list[ReplyMessage]:
        if not is_supported_region(destination):
            return [await self._closing(texts.REGION_GUIDANCE, lang)]

        prompt = texts.RECOMMEND_PROMPT.format(destination=destination)
        hints = preference_hints(message)
        if hints:
            prompt += f" ที่เหมาะกับ {', '.join(hints)}"

        response = await self._conversation.complete(user_id, prompt)
        logger.info(f"Recommended places for {destination}: {response[:200]}")

        return await self._place_recommendations(
            extract_place_names(response),
            lang,
            follow_up=f"{self._source_note()}\n{texts.TRIP_QUESTIONS}",
            destination=destination,
        )

    async def _place_info(
        self, user_id: str, message: Message, name: str, lang: str
    ) -> list[ReplyMessage]:
        place = await self._resolver.resolve(name) if name else None
        if place is None:
            return [await self._closing(texts.PLACE_NOT_FOUND.format(name=name), lang)]

        details, search_results = await asyncio.gather(
            self._resolver.details(place.place_id),
            self._search.search(name, ATTRACTION_CONTEXT),
        )

        messages: list[ReplyMessage] = [self._formatter.place_card(place.with_details(details))]
        links = await self._links_message(
            f"ข้อมูลเพิ่มเติมเกี่ยวกับ {name}:", search_results, lang
        )
        if links:
            messages.append(links)
        messages.append(await self._closing(f"{self._source_note()}\n{texts.MORE_INFO}", lang))
        return messages

    async def _recommend_hotels(
        self, user_id: str, message: Message, destination: str, lang: str
    ) -> list[ReplyMessage]:
        if not is_supported_region(destination):
            return [await self._closing(texts.REGION_GUIDANCE, lang)]

        hotels = await self._hotels.find_hotels(destination)
        search_results = await self._enrich([h.name for h in hotels], HOTEL_CONTEXT)

        messages: list[ReplyMessage] = [self._formatter.hotel_carousel(hotels)]
        links = await self._links_message(texts.HOTELS_LINKS_HEADER, search_results, lang)
        if links:
            messages.append(links)
        messages.append(await self._closing(f"{self._source_note()}\n{texts.MORE_INFO}", lang))
        return messages

    async def _weather(
        self, user_id: str, message: Message, name: str, lang: str
    ) -> list[ReplyMessage]:
        # No weather source: the reply is the place's info card
        place = await self._resolver.resolve(name)
        if place is None:
            return [await self._closing(texts.WEATHER_NOT_FOUND.format(name=name), lang)]
        return [self._formatter.place_card(place), await self._closing(texts.MORE_INFO, lang)]

    async def _map(
        self, user_id: str, message: Message, name: str, lang: str
    ) -> list[ReplyMessage]:
        place = await self._resolver.resolve(name) if name else None
        if place is None:
            return [await self._closing(texts.MAP_NOT_FOUND.format(name=name), lang)]

        location = LocationMessage(
            title=name,
            address=place.address,
            latitude=place.latitude,
            longitude=place.longitude,
        )
        return [location, await self._closing(texts.MORE_INFO, lang)]

    async def _contact_authorities(
        self, user_id: str, message: Message, argument: str, lang: str
    ) -> list[ReplyMessage]:
        return [*self._formatter.contact_imagemaps(), await self._closing(texts.MORE_INFO, lang)]

    async def _free_text(
        self, user_id: str, message: Message, text: str, lang: str
    ) -> list[ReplyMessage]:
        response = await self._conversation.complete(user_id, text)

        candidates = extract_place_names(response)
        if candidates:
            return await self._place_recommendations(
                candidates, lang, follow_up=f"{self._source_note()}\n{texts.MORE_INFO}"
            )

        if IMAGE_MARKER in response:
            image = ImageMessage(
                original_content_url=texts.PLACEHOLDER_IMAGE_URL,
                preview_image_url=texts.PLACEHOLDER_IMAGE_URL,
            )
            return [image, await self._closing(texts.MORE_INFO, lang)]

        return [await self._closing(response, lang)]


def _unique_places(places: list[PlaceRecord]) -> list[PlaceRecord]:
    """Drop repeated places (two candidates can resolve to the same place)."""
    seen: set[str] = set()
    unique = []
    for place in places:
        key = place.place_id or place.name
        if key not in seen:
            seen.add(key)
            unique.append(place)
    return unique
