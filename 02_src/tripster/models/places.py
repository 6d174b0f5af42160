"""Place, hotel, search and image-analysis data models."""

from dataclasses import dataclass, field, replace


@dataclass
class PlaceRecord:
    """Normalized projection of a place lookup. Lives for one request."""

    place_id: str
    name: str
    address: str
    latitude: float
    longitude: float
    photo_ref: str | None = None
    rating: float | None = None
    rating_count: int = 0
    opening_hours: list[str] | None = None
    website: str | None = None
    url: str | None = None

    def with_details(self, details: "PlaceDetails | None") -> "PlaceRecord":
        """Overlay extended details; coordinates and id always come from self."""
        if details is None:
            return self
        return replace(
            self,
            name=details.name or self.name,
            address=details.address or self.address,
            photo_ref=details.photo_ref or self.photo_ref,
            rating=details.rating if details.rating is not None else self.rating,
            rating_count=details.rating_count or self.rating_count,
            opening_hours=details.opening_hours,
            website=details.website,
            url=details.url,
        )


@dataclass
class PlaceDetails:
    """Extended information from a place-details lookup."""

    name: str | None = None
    address: str | None = None
    photo_ref: str | None = None
    rating: float | None = None
    rating_count: int = 0
    types: list[str] = field(default_factory=list)
    website: str | None = None
    url: str | None = None
    opening_hours: list[str] | None = None


@dataclass
class HotelRecord:
    """A lodging result from a nearby search."""

    name: str
    address: str
    latitude: float | None
    longitude: float | None
    photo_ref: str | None = None
    rating: float | None = None
    rating_count: int = 0


@dataclass
class SearchResult:
    """A single web search hit."""

    title: str
    link: str
    snippet: str = ""


@dataclass
class ImageAnalysis:
    """Labels and the best landmark guess for an image."""

    landmark: str | None = None
    confidence: float | None = None  # percent, 0-100
    labels: list[str] | None = None
