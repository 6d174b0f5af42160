"""Tests for SearchEnricher and the custom search client."""

from unittest.mock import AsyncMock, Mock

import httpx
import pytest

from tripster.places import GoogleCustomSearchClient, SearchEnricher
from tripster.places.search import build_search_query


@pytest.fixture
def web_search():
    service = Mock()
    service.query = AsyncMock(return_value=[])
    return service


class TestBuildSearchQuery:
    def test_attraction(self):
        assert build_search_query("ดอยสุเทพ", "สถานที่ท่องเที่ยว") == (
            "ดอยสุเทพ สถานที่ท่องเที่ยว ภาคเหนือ ประเทศไทย"
        )

    def test_hotel(self):
        assert build_search_query("Hotel A", "โรงแรม") == "Hotel A โรงแรม รีวิว ประเทศไทย"


class TestSearchEnricher:
    """Tests for SearchEnricher.search()."""

    async def test_filters_irrelevant_results(self, web_search):
        """Test that results must mention the place name."""
        web_search.query.return_value = [
            {"title": "Doi Suthep temple", "link": "https://a.test", "snippet": ""},
            {"title": "Unrelated", "link": "https://b.test", "snippet": "nothing"},
            {"title": "Guide", "link": "https://c.test", "snippet": "visit DOI SUTHEP"},
        ]

        results = await SearchEnricher(web_search).search("Doi Suthep")

        assert [r.link for r in results] == ["https://a.test", "https://c.test"]
        web_search.query.assert_called_once_with(
            "Doi Suthep สถานที่ท่องเที่ยว ภาคเหนือ ประเทศไทย",
            3,
            lang="lang_th",
            country="countryTH",
        )

    async def test_hotel_results_need_hotel_keyword(self, web_search):
        web_search.query.return_value = [
            {"title": "Hotel A", "link": "https://a.test", "snippet": "review"},
            {"title": "Hotel A โรงแรม", "link": "https://b.test", "snippet": ""},
        ]

        results = await SearchEnricher(web_search).search("Hotel A", "โรงแรม")

        assert [r.link for r in results] == ["https://b.test"]

    async def test_caps_at_three(self, web_search):
        web_search.query.return_value = [
            {"title": f"Nimman {i}", "link": f"https://{i}.test"} for i in range(5)
        ]

        assert len(await SearchEnricher(web_search).search("Nimman")) == 3

    async def test_error_returns_empty(self, web_search):
        web_search.query.side_effect = httpx.ConnectError("down")

        assert await SearchEnricher(web_search).search("Nimman") == []


class TestGoogleCustomSearchClient:
    async def test_query_params(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["params"] = request.url.params
            return httpx.Response(200, json={"items": [{"title": "t", "link": "l"}]})

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
            client = GoogleCustomSearchClient(http, "key", "engine")
            items = await client.query("q", 3, lang="lang_th", country="countryTH")

        assert items == [{"title": "t", "link": "l"}]
        assert seen["params"]["cx"] == "engine"
        assert seen["params"]["num"] == "3"
        assert seen["params"]["lr"] == "lang_th"
        assert seen["params"]["cr"] == "countryTH"

    async def test_no_items(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json={}))

        async with httpx.AsyncClient(transport=transport) as http:
            assert await GoogleCustomSearchClient(http, "k", "e").query("q", 3, "l", "c") == []
