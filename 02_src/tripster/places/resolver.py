"""Place Resolver: free-text place name to coordinates and metadata."""

from typing import Any, Protocol

import httpx

from ..logging_config import get_logger
from ..models import PlaceDetails, PlaceRecord
from ..regions import REGION_NAME, mentions_province
from .client import IPlacesService, first_photo_ref, rating_sort_key

logger = get_logger(__name__)

DEFAULT_CATEGORY = "tourist_attraction"
NO_ADDRESS = "ไม่มีข้อมูลที่อยู่"
REGION_SUFFIX = f"{REGION_NAME} Thailand"


class IPlaceResolver(Protocol):
    """Resolves place names to PlaceRecords."""

    async def resolve(
        self, name: str, category: str = DEFAULT_CATEGORY
    ) -> PlaceRecord | None:
        ...

    async def details(self, place_id: str) -> PlaceDetails | None:
        ...


def clean_place_name(name: str) -> str:
    """Trim, strip markdown bold and drop anything after the first colon."""
    return name.strip().replace("**", "").split(":")[0].strip()


def build_query(name: str) -> str:
    """Names outside the known provinces get a region disambiguation suffix."""
    cleaned = clean_place_name(name)
    return cleaned if mentions_province(cleaned) else f"{cleaned} {REGION_SUFFIX}"


def _coordinates(raw: dict[str, Any]) -> tuple[float, float] | None:
    location = (raw.get("geometry") or {}).get("location") or {}
    lat, lng = location.get("lat"), location.get("lng")
    if lat is None or lng is None:
        return None
    return lat, lng


def has_coordinates(raw: dict[str, Any]) -> bool:
    return _coordinates(raw) is not None


class PlaceResolver:
    """Best-rated text-search match for a place name."""

    def __init__(self, places: IPlacesService):
        self._places = places

    async def resolve(
        self, name: str, category: str = DEFAULT_CATEGORY
    ) -> PlaceRecord | None:
        """
        Resolve `name` to the best-rated place that has coordinates.

        Candidates without geometry are discarded; the rest are ordered by
        rating then rating count (missing values count as 0). Returns None when
        nothing usable is found or the lookup fails.
        """
        query = build_query(name)
        logger.info(f"Searching places for: {query}")

        try:
            candidates = await self._places.text_search(query, category)
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Places text search failed for {query!r}: {e}")
            return None

        located = sorted(
            (c for c in candidates if has_coordinates(c)), key=rating_sort_key
        )
        if not located:
            logger.warning(f"No valid location found for: {query}")
            return None

        best = located[0]
        lat, lng = _coordinates(best)
        record = PlaceRecord(
            place_id=best.get("place_id", ""),
            name=best.get("name", clean_place_name(name)),
            address=best.get("formatted_address") or NO_ADDRESS,
            latitude=lat,
            longitude=lng,
            photo_ref=first_photo_ref(best),
            rating=best.get("rating"),
            rating_count=best.get("user_ratings_total") or 0,
        )
        logger.info(
            f"Found location: {record.name} "
            f"(rating: {record.rating}, reviews: {record.rating_count})"
        )
        return record

    async def details(self, place_id: str) -> PlaceDetails | None:
        """Extended details (opening hours, website, canonical url) of a place."""
        try:
            raw = await self._places.details(place_id)
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Place details failed for {place_id}: {e}")
            return None

        if not raw:
            return None

        return PlaceDetails(
            name=raw.get("name"),
            address=raw.get("formatted_address"),
            photo_ref=first_photo_ref(raw),
            rating=raw.get("rating"),
            rating_count=raw.get("user_ratings_total") or 0,
            types=raw.get("types") or [],
            website=raw.get("website"),
            url=raw.get("url"),
            opening_hours=(raw.get("opening_hours") or {}).get("weekday_text"),
        )
