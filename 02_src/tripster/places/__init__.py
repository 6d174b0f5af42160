"""Places module: resolution, hotels and web search enrichment."""

from .client import GooglePlacesClient, IPlacesService
from .hotels import HotelFinder, IHotelFinder
from .resolver import IPlaceResolver, PlaceResolver, clean_place_name
from .search import (
    ATTRACTION_CONTEXT,
    HOTEL_CONTEXT,
    GoogleCustomSearchClient,
    ISearchEnricher,
    IWebSearchService,
    SearchEnricher,
)

__all__ = [
    "ATTRACTION_CONTEXT",
    "HOTEL_CONTEXT",
    "GoogleCustomSearchClient",
    "GooglePlacesClient",
    "HotelFinder",
    "IHotelFinder",
    "IPlaceResolver",
    "IPlacesService",
    "ISearchEnricher",
    "IWebSearchService",
    "PlaceResolver",
    "SearchEnricher",
    "clean_place_name",
]
