"""Tests for HttpxOmdbClient (OMDb API adapter)."""

from __future__ import annotations

import httpx
import pytest
import respx

from movie_explorer.domain.entities.catalog import EMPTY_PAGE, NOT_AVAILABLE
from movie_explorer.domain.entities.errors import (
    NETWORK_ERROR_MESSAGE,
    CatalogNetworkError,
    CatalogUpstreamError,
)
from movie_explorer.infrastructure.omdb.client import HttpxOmdbClient

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

_API_KEY = "test-api-key-123"
_BASE = "https://www.omdbapi.com/"


@pytest.fixture()
def http_client() -> httpx.AsyncClient:
    return httpx.AsyncClient()


@pytest.fixture()
def client(http_client: httpx.AsyncClient) -> HttpxOmdbClient:
    return HttpxOmdbClient(api_key=_API_KEY, http_client=http_client)


# ---------------------------------------------------------------------------
# OMDb JSON response fixtures
# ---------------------------------------------------------------------------

_SEARCH_CLUELESS = {
    "Search": [
        {
            "Title": "Clueless",
            "Year": "1995",
            "imdbID": "tt0112697",
            "Type": "movie",
            "Poster": "https://m.media-amazon.com/images/M/clueless.jpg",
        }
    ],
    "totalResults": "1",
    "Response": "True",
}

_SEARCH_BATMAN_PAGE_2 = {
    "Search": [
        {
            "Title": f"Batman {i}",
            "Year": "2000",
            "imdbID": f"tt10000{i:02d}",
            "Type": "movie",
            "Poster": "N/A",
        }
        for i in range(10)
    ],
    "totalResults": "230",
    "Response": "True",
}

_NOT_FOUND = {"Response": "False", "Error": "Movie not found!"}

_DETAIL_DARK_KNIGHT = {
    "Title": "The Dark Knight",
    "Year": "2008",
    "Rated": "PG-13",
    "Runtime": "152 min",
    "Genre": "Action, Crime, Drama",
    "Director": "Christopher Nolan",
    "Actors": "Christian Bale, Heath Ledger, Aaron Eckhart",
    "Plot": "When the menace known as the Joker wreaks havoc...",
    "Poster": "https://m.media-amazon.com/images/M/dark-knight.jpg",
    "Ratings": [
        {"Source": "Internet Movie Database", "Value": "9.0/10"},
        {"Source": "Rotten Tomatoes", "Value": "94%"},
        {"Source": "Metacritic", "Value": "84/100"},
    ],
    "imdbID": "tt0468569",
    "Type": "movie",
    "Response": "True",
}


# ---------------------------------------------------------------------------
# search
# ---------------------------------------------------------------------------


class TestSearch:
    @respx.mock
    @pytest.mark.asyncio()
    async def test_single_result(self, client: HttpxOmdbClient) -> None:
        route = respx.get(_BASE).respond(json=_SEARCH_CLUELESS)

        page = await client.search("Clueless", 1)

        assert page.total_count == 1
        assert page.page_count == 1
        assert page.error_message is None
        assert len(page.items) == 1
        item = page.items[0]
        assert item.imdb_id == "tt0112697"
        assert item.title == "Clueless"
        assert item.year == "1995"
        assert item.page == 1
        assert item.has_poster

        params = route.calls.last.request.url.params
        assert params["apikey"] == _API_KEY
        assert params["s"] == "Clueless"
        assert params["page"] == "1"

    @respx.mock
    @pytest.mark.asyncio()
    async def test_page_number_and_total_parsed(self, client: HttpxOmdbClient) -> None:
        route = respx.get(_BASE).respond(json=_SEARCH_BATMAN_PAGE_2)

        page = await client.search("batman", 2)

        assert page.total_count == 230
        assert page.page_count == 23
        assert all(item.page == 2 for item in page.items)
        assert page.items[0].poster == NOT_AVAILABLE
        assert not page.items[0].has_poster
        assert route.calls.last.request.url.params["page"] == "2"

    @respx.mock
    @pytest.mark.asyncio()
    async def test_empty_term_makes_no_request(self, client: HttpxOmdbClient) -> None:
        route = respx.get(_BASE).respond(json=_SEARCH_CLUELESS)

        page = await client.search("   ", 1)

        assert page == EMPTY_PAGE
        assert not route.called

    @respx.mock
    @pytest.mark.asyncio()
    async def test_upstream_failure_returned_not_raised(
        self, client: HttpxOmdbClient
    ) -> None:
        respx.get(_BASE).respond(json=_NOT_FOUND)

        page = await client.search("zzzzqx", 1)

        assert page.items == ()
        assert page.total_count == 0
        assert page.error_message == "Movie not found!"

    @respx.mock
    @pytest.mark.asyncio()
    async def test_page_below_one_is_sent_as_one(self, client: HttpxOmdbClient) -> None:
        route = respx.get(_BASE).respond(json=_SEARCH_CLUELESS)

        await client.search("Clueless", 0)

        assert route.calls.last.request.url.params["page"] == "1"

    @respx.mock
    @pytest.mark.asyncio()
    async def test_unparseable_total_is_zero(self, client: HttpxOmdbClient) -> None:
        body = {**_SEARCH_CLUELESS, "totalResults": "lots"}
        respx.get(_BASE).respond(json=body)

        page = await client.search("Clueless", 1)

        assert page.total_count == 0

    @respx.mock
    @pytest.mark.asyncio()
    async def test_exactly_one_request(self, client: HttpxOmdbClient) -> None:
        route = respx.get(_BASE).respond(json=_SEARCH_CLUELESS)

        await client.search("Clueless", 1)

        assert route.call_count == 1


# ---------------------------------------------------------------------------
# fetch_by_id / fetch_by_title
# ---------------------------------------------------------------------------


class TestFetchById:
    @respx.mock
    @pytest.mark.asyncio()
    async def test_detail_record(self, client: HttpxOmdbClient) -> None:
        route = respx.get(_BASE).respond(json=_DETAIL_DARK_KNIGHT)

        record = await client.fetch_by_id("tt0468569")

        assert record.imdb_id == "tt0468569"
        assert record.title == "The Dark Knight"
        assert record.year == "2008"
        assert record.rated == "PG-13"
        assert record.runtime == "152 min"
        assert record.actors.startswith("Christian Bale")
        assert [(r.source, r.value) for r in record.ratings] == [
            ("Internet Movie Database", "9.0/10"),
            ("Rotten Tomatoes", "94%"),
            ("Metacritic", "84/100"),
        ]
        params = route.calls.last.request.url.params
        assert params["i"] == "tt0468569"
        assert params["plot"] == "full"
        assert params["apikey"] == _API_KEY

    @respx.mock
    @pytest.mark.asyncio()
    async def test_missing_ratings(self, client: HttpxOmdbClient) -> None:
        body = {k: v for k, v in _DETAIL_DARK_KNIGHT.items() if k != "Ratings"}
        respx.get(_BASE).respond(json=body)

        record = await client.fetch_by_id("tt0468569")

        assert record.ratings == ()

    @respx.mock
    @pytest.mark.asyncio()
    async def test_null_fields_become_empty(self, client: HttpxOmdbClient) -> None:
        body = {**_DETAIL_DARK_KNIGHT, "Year": None, "Plot": None, "Poster": None}
        respx.get(_BASE).respond(json=body)

        record = await client.fetch_by_id("tt0468569")

        assert record.year == ""
        assert record.plot == ""
        assert record.poster == NOT_AVAILABLE

    @respx.mock
    @pytest.mark.asyncio()
    async def test_upstream_error_raises_with_message(
        self, client: HttpxOmdbClient
    ) -> None:
        respx.get(_BASE).respond(json={"Response": "False", "Error": "Incorrect IMDb ID."})

        with pytest.raises(CatalogUpstreamError, match="Incorrect IMDb ID."):
            await client.fetch_by_id("tt0")

    @respx.mock
    @pytest.mark.asyncio()
    async def test_fetch_by_title(self, client: HttpxOmdbClient) -> None:
        route = respx.get(_BASE).respond(json=_DETAIL_DARK_KNIGHT)

        record = await client.fetch_by_title("The Dark Knight")

        assert record.imdb_id == "tt0468569"
        params = route.calls.last.request.url.params
        assert params["t"] == "The Dark Knight"
        assert "plot" not in params


# ---------------------------------------------------------------------------
# Transport errors
# ---------------------------------------------------------------------------


class TestTransportErrors:
    @respx.mock
    @pytest.mark.asyncio()
    async def test_connection_error(self, client: HttpxOmdbClient) -> None:
        respx.get(_BASE).mock(side_effect=httpx.ConnectError("refused"))

        with pytest.raises(CatalogNetworkError) as exc_info:
            await client.search("batman", 1)

        assert str(exc_info.value) == NETWORK_ERROR_MESSAGE
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    @respx.mock
    @pytest.mark.asyncio()
    async def test_server_error_status(self, client: HttpxOmdbClient) -> None:
        respx.get(_BASE).respond(status_code=503)

        with pytest.raises(CatalogNetworkError):
            await client.fetch_by_id("tt0468569")

    @respx.mock
    @pytest.mark.asyncio()
    async def test_malformed_json(self, client: HttpxOmdbClient) -> None:
        respx.get(_BASE).respond(text="<html>oops</html>")

        with pytest.raises(CatalogNetworkError):
            await client.search("batman", 1)

    @respx.mock
    @pytest.mark.asyncio()
    async def test_json_that_is_not_an_object(self, client: HttpxOmdbClient) -> None:
        respx.get(_BASE).respond(json=["not", "an", "object"])

        with pytest.raises(CatalogNetworkError):
            await client.fetch_by_title("Clueless")

    @respx.mock
    @pytest.mark.asyncio()
    async def test_object_without_response_flag(self, client: HttpxOmdbClient) -> None:
        respx.get(_BASE).respond(json={"unexpected": 1})

        with pytest.raises(CatalogNetworkError) as exc_info:
            await client.search("batman", 1)

        assert str(exc_info.value) == NETWORK_ERROR_MESSAGE

    @respx.mock
    @pytest.mark.asyncio()
    async def test_unknown_response_flag(self, client: HttpxOmdbClient) -> None:
        respx.get(_BASE).respond(json={"Response": "maybe", "Title": "Clueless"})

        with pytest.raises(CatalogNetworkError):
            await client.fetch_by_id("tt0112697")

    @respx.mock
    @pytest.mark.asyncio()
    async def test_timeout(self, client: HttpxOmdbClient) -> None:
        respx.get(_BASE).mock(side_effect=httpx.ReadTimeout("slow"))

        with pytest.raises(CatalogNetworkError):
            await client.search("batman", 1)
