"""Hotel Finder: lodging near a destination."""

from typing import Protocol

import httpx

from ..logging_config import get_logger
from ..models import HotelRecord
from .client import IPlacesService, first_photo_ref, rating_sort_key
from .resolver import IPlaceResolver, NO_ADDRESS, has_coordinates

logger = get_logger(__name__)

FALLBACK_CITIES = ("Chiang Mai, Thailand", "Bangkok, Thailand")
FALLBACK_COORDINATES = (18.7883, 98.9857)  # Chiang Mai
SEARCH_RADIUS_M = 20000
LODGING_TYPE = "lodging"
MAX_HOTELS = 3


class IHotelFinder(Protocol):
    async def find_hotels(self, destination: str) -> list[HotelRecord]:
        ...


class HotelFinder:
    """Top-rated lodging around an anchor location."""

    def __init__(self, resolver: IPlaceResolver, places: IPlacesService):
        self._resolver = resolver
        self._places = places

    async def anchor(self, destination: str) -> tuple[float, float]:
        """
        Search center for `destination`.

        Tries the destination, then each fallback city, and finally the
        hard-coded Chiang Mai coordinates.
        """
        for name in (destination, *FALLBACK_CITIES):
            place = await self._resolver.resolve(name)
            if place is not None:
                return place.latitude, place.longitude
            logger.warning(f"No location found for {name}, trying next fallback")

        logger.warning("Using hard-coded coordinates for Chiang Mai as fallback")
        return FALLBACK_COORDINATES

    async def find_hotels(self, destination: str) -> list[HotelRecord]:
        """Up to three best-rated hotels within 20 km of the destination."""
        lat, lng = await self.anchor(destination)

        try:
            results = await self._places.nearby_search(
                lat, lng, SEARCH_RADIUS_M, LODGING_TYPE
            )
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Nearby search failed around {lat},{lng}: {e}")
            return []

        ranked = sorted((r for r in results if has_coordinates(r)), key=rating_sort_key)
        hotels = [
            HotelRecord(
                name=raw.get("name", ""),
                address=raw.get("vicinity") or NO_ADDRESS,
                latitude=raw["geometry"]["location"]["lat"],
                longitude=raw["geometry"]["location"]["lng"],
                photo_ref=first_photo_ref(raw),
                rating=raw.get("rating"),
                rating_count=raw.get("user_ratings_total") or 0,
            )
            for raw in ranked[:MAX_HOTELS]
        ]
        logger.info(f"Found {len(hotels)} hotels near {destination}: {[h.name for h in hotels]}")
        return hotels
