"""Pytest configuration and fixtures."""

import sys
from datetime import date
from pathlib import Path
from unittest.mock import AsyncMock, Mock

import pytest
import pytest_asyncio

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))


@pytest_asyncio.fixture
async def storage():
    """Create in-memory storage for testing."""
    from tripster.storage import Storage

    st = Storage(":memory:")
    await st.init()
    yield st
    await st.close()


@pytest.fixture
def tracker(storage):
    """Create Tracker with storage."""
    from tripster.tracker import Tracker

    return Tracker(storage=storage)


@pytest.fixture
def mock_tracker():
    """Create mock tracker."""
    tr = Mock()
    tr.track = AsyncMock()
    return tr


@pytest.fixture
def mock_llm():
    """Create mock LLM provider."""
    llm = Mock()
    llm.complete = AsyncMock(return_value="Test response")
    return llm


@pytest.fixture
def translation_service():
    """Translation service that detects Thai and tags translations."""
    service = Mock()
    service.detect = AsyncMock(return_value="th")
    service.translate = AsyncMock(side_effect=lambda text, target: f"[{target}] {text}")
    return service


@pytest.fixture
def normalizer(translation_service):
    from tripster.translation import LanguageNormalizer

    return LanguageNormalizer(translation_service)


@pytest.fixture
def formatter():
    from tripster.formatting import MessageFormatter

    return MessageFormatter(places_api_key="places_key", trip_planner_url="https://plans.test/")


@pytest.fixture
def mock_conversation():
    """Create mock conversation agent."""
    conv = Mock()
    conv.complete = AsyncMock(return_value="Test response")
    conv.has_history = AsyncMock(return_value=True)
    return conv


@pytest.fixture
def mock_resolver():
    """Resolver that finds nothing unless a test says otherwise."""
    resolver = Mock()
    resolver.resolve = AsyncMock(return_value=None)
    resolver.details = AsyncMock(return_value=None)
    return resolver


@pytest.fixture
def mock_hotels():
    hotels = Mock()
    hotels.find_hotels = AsyncMock(return_value=[])
    return hotels


@pytest.fixture
def mock_search():
    search = Mock()
    search.search = AsyncMock(return_value=[])
    return search


@pytest.fixture
def dispatcher(
    mock_conversation,
    normalizer,
    mock_resolver,
    mock_hotels,
    mock_search,
    formatter,
    mock_tracker,
):
    """Create IntentDispatcher with mocked remote collaborators."""
    from tripster.dispatch import IntentDispatcher

    return IntentDispatcher(
        conversation=mock_conversation,
        normalizer=normalizer,
        resolver=mock_resolver,
        hotels=mock_hotels,
        search=mock_search,
        formatter=formatter,
        tracker=mock_tracker,
        today=lambda: date(2025, 3, 1),
    )


def make_place(name: str, place_id: str | None = None, rating: float | None = 4.5):
    """Build a resolved PlaceRecord for tests."""
    from tripster.models import PlaceRecord

    return PlaceRecord(
        place_id=place_id or f"id-{name}",
        name=name,
        address=f"{name} address",
        latitude=18.8,
        longitude=98.9,
        photo_ref=f"photo-{name}",
        rating=rating,
        rating_count=100,
    )


def make_hotel(name: str, rating: float | None = 4.0):
    from tripster.models import HotelRecord

    return HotelRecord(
        name=name,
        address=f"{name} road",
        latitude=18.79,
        longitude=98.98,
        photo_ref=None,
        rating=rating,
        rating_count=10,
    )
