"""Web search client and the Search Enricher."""

from typing import Any, Protocol

import httpx

from ..logging_config import get_logger
from ..models import SearchResult

logger = get_logger(__name__)

CUSTOM_SEARCH_URL = "https://www.googleapis.com/customsearch/v1"

ATTRACTION_CONTEXT = "สถานที่ท่องเที่ยว"
HOTEL_CONTEXT = "โรงแรม"
RESULT_COUNT = 3


class IWebSearchService(Protocol):
    async def query(
        self, q: str, result_count: int, lang: str, country: str
    ) -> list[dict[str, Any]]:
        ...


class GoogleCustomSearchClient:
    """Google Custom Search JSON API client. Raises httpx errors."""

    def __init__(self, http: httpx.AsyncClient, api_key: str, engine_id: str):
        self._http = http
        self._api_key = api_key
        self._engine_id = engine_id

    async def query(
        self, q: str, result_count: int, lang: str, country: str
    ) -> list[dict[str, Any]]:
        response = await self._http.get(
            CUSTOM_SEARCH_URL,
            params={
                "key": self._api_key,
                "cx": self._engine_id,
                "q": q,
                "num": result_count,
                "lr": lang,
                "cr": country,
            },
        )
        response.raise_for_status()
        return response.json().get("items") or []


class ISearchEnricher(Protocol):
    async def search(
        self, place_name: str, context: str = ATTRACTION_CONTEXT
    ) -> list[SearchResult]:
        ...


def build_search_query(place_name: str, context: str) -> str:
    if context == HOTEL_CONTEXT:
        return f"{place_name} โรงแรม รีวิว ประเทศไทย"
    return f"{place_name} {context} ภาคเหนือ ประเทศไทย"


def is_relevant(item: dict[str, Any], place_name: str, context: str) -> bool:
    """Title+snippet must mention the place, and for hotels the hotel keyword."""
    text = f"{item.get('title', '')} {item.get('snippet', '')}".lower()
    if place_name.lower() not in text:
        return False
    return context != HOTEL_CONTEXT or HOTEL_CONTEXT in text


class SearchEnricher:
    """Relevant Thai-language web links for a place."""

    def __init__(self, web_search: IWebSearchService):
        self._web_search = web_search

    async def search(
        self, place_name: str, context: str = ATTRACTION_CONTEXT
    ) -> list[SearchResult]:
        query = build_search_query(place_name, context)
        logger.info(f"Custom search query: {query}")

        try:
            items = await self._web_search.query(
                query, RESULT_COUNT, lang="lang_th", country="countryTH"
            )
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Custom search failed for {query!r}: {e}")
            return []

        results = [
            SearchResult(
                title=item.get("title", ""),
                link=item.get("link", ""),
                snippet=item.get("snippet", ""),
            )
            for item in items
            if is_relevant(item, place_name, context)
        ][:RESULT_COUNT]

        if not results:
            logger.warning(f"No search results found for {place_name} ({context})")
        return results
