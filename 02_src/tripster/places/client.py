"""Google Places web service client."""

from typing import Any, Protocol

import httpx

PLACES_BASE_URL = "https://maps.googleapis.com/maps/api/place"

TEXT_SEARCH_FIELDS = "place_id,geometry,formatted_address,name,photos,rating,user_ratings_total"
DETAILS_FIELDS = "name,formatted_address,photo,rating,user_ratings_total,types,website,url,opening_hours"


class IPlacesService(Protocol):
    """Place text search, details and nearby search."""

    async def text_search(self, query: str, place_type: str) -> list[dict[str, Any]]:
        ...

    async def details(self, place_id: str) -> dict[str, Any] | None:
        ...

    async def nearby_search(
        self, latitude: float, longitude: float, radius: int, place_type: str
    ) -> list[dict[str, Any]]:
        ...


class GooglePlacesClient:
    """Thin async wrapper over the Places web service. Raises httpx errors."""

    def __init__(self, http: httpx.AsyncClient, api_key: str):
        self._http = http
        self._api_key = api_key

    async def _get(self, path: str, params: dict[str, Any]) -> dict[str, Any]:
        response = await self._http.get(
            f"{PLACES_BASE_URL}/{path}/json", params={**params, "key": self._api_key}
        )
        response.raise_for_status()
        return response.json()

    async def text_search(self, query: str, place_type: str) -> list[dict[str, Any]]:
        data = await self._get(
            "textsearch",
            {"query": query, "fields": TEXT_SEARCH_FIELDS, "type": place_type},
        )
        return data.get("results") or []

    async def details(self, place_id: str) -> dict[str, Any] | None:
        data = await self._get("details", {"place_id": place_id, "fields": DETAILS_FIELDS})
        return data.get("result")

    async def nearby_search(
        self, latitude: float, longitude: float, radius: int, place_type: str
    ) -> list[dict[str, Any]]:
        data = await self._get(
            "nearbysearch",
            {"location": f"{latitude},{longitude}", "radius": radius, "type": place_type},
        )
        return data.get("results") or []


def first_photo_ref(raw: dict[str, Any]) -> str | None:
    photos = raw.get("photos") or []
    return photos[0].get("photo_reference") if photos else None


def rating_sort_key(raw: dict[str, Any]) -> tuple[float, int]:
    """Sort key for (rating desc, rating count desc); missing values count as 0."""
    return (-(raw.get("rating") or 0), -(raw.get("user_ratings_total") or 0))
