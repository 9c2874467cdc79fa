"""Shared test fixtures for the movie-explorer test suite."""

from __future__ import annotations

import asyncio
from typing import Any
from unittest.mock import AsyncMock

import pytest

from movie_explorer.domain.entities.catalog import (
    DetailRecord,
    Rating,
    SearchPage,
    SearchResultItem,
    WatchlistEntry,
)
from movie_explorer.domain.entities.errors import CatalogUpstreamError

# ---------------------------------------------------------------------------
# Domain entity fixtures
# ---------------------------------------------------------------------------


def make_page(
    term: str, page: int, total: int, *, count: int = 10, prefix: str = "tt9"
) -> SearchPage:
    """A SearchPage whose items encode term and page in the title."""
    items = tuple(
        SearchResultItem(
            imdb_id=f"{prefix}{page:03d}{i:03d}",
            title=f"{term} p{page} #{i}",
            page=page,
        )
        for i in range(count)
    )
    return SearchPage(items=items, total_count=total)


def make_detail(imdb_id: str, title: str = "Some Title") -> DetailRecord:
    return DetailRecord(imdb_id=imdb_id, title=title, year="2000")


@pytest.fixture()
def clueless_page() -> SearchPage:
    return SearchPage(
        items=(
            SearchResultItem(
                imdb_id="tt0112697",
                title="Clueless",
                poster="https://m.media-amazon.com/images/M/clueless.jpg",
                year="1995",
                type="movie",
            ),
        ),
        total_count=1,
    )


@pytest.fixture()
def dark_knight() -> DetailRecord:
    return DetailRecord(
        imdb_id="tt0468569",
        title="The Dark Knight",
        year="2008",
        plot="When the menace known as the Joker wreaks havoc...",
        rated="PG-13",
        runtime="152 min",
        ratings=(
            Rating(source="Internet Movie Database", value="9.0/10"),
            Rating(source="Rotten Tomatoes", value="94%"),
        ),
        actors="Christian Bale, Heath Ledger, Aaron Eckhart",
        genre="Action, Crime, Drama",
        director="Christopher Nolan",
    )


@pytest.fixture()
def superbad() -> WatchlistEntry:
    return WatchlistEntry(imdb_id="tt0829482", title="Superbad", year="2007")


@pytest.fixture()
def juno() -> WatchlistEntry:
    return WatchlistEntry(imdb_id="tt0467406", title="Juno", year="2007")


# ---------------------------------------------------------------------------
# Mock port fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def mock_cache() -> AsyncMock:
    """Mock CachePort."""
    cache = AsyncMock()
    cache.get = AsyncMock(return_value=None)
    cache.set = AsyncMock()
    cache.delete = AsyncMock(return_value=True)
    cache.clear = AsyncMock()
    cache.aclose = AsyncMock()
    return cache


@pytest.fixture()
def mock_watchlist_repo() -> AsyncMock:
    """Mock WatchlistRepository."""
    repo = AsyncMock()
    repo.load = AsyncMock(return_value=())
    repo.save = AsyncMock()
    return repo


class GatedCatalog:
    """Fake CatalogClientPort whose responses can be held back.

    ``gate(kind, key)`` returns an event; the matching request blocks until
    the event is set, which lets tests control arrival order.
    """

    def __init__(self) -> None:
        self.pages: dict[tuple[str, int], SearchPage | Exception] = {}
        self.details: dict[str, DetailRecord | Exception] = {}
        self.gates: dict[tuple[str, Any], asyncio.Event] = {}
        self.calls: list[tuple[str, Any]] = []

    def gate(self, kind: str, key: Any) -> asyncio.Event:
        event = asyncio.Event()
        self.gates[(kind, key)] = event
        return event

    async def _wait(self, kind: str, key: Any) -> None:
        event = self.gates.get((kind, key))
        if event is not None:
            await event.wait()

    async def search(self, term: str, page: int = 1) -> SearchPage:
        self.calls.append(("search", (term, page)))
        await self._wait("search", (term, page))
        result = self.pages[(term, page)]
        if isinstance(result, Exception):
            raise result
        return result

    async def fetch_by_id(self, imdb_id: str) -> DetailRecord:
        self.calls.append(("detail", imdb_id))
        await self._wait("detail", imdb_id)
        result = self.details[imdb_id]
        if isinstance(result, Exception):
            raise result
        return result

    async def fetch_by_title(self, title: str) -> DetailRecord:
        self.calls.append(("title", title))
        for record in self.details.values():
            if isinstance(record, DetailRecord) and record.title == title:
                return record
        raise CatalogUpstreamError("Movie not found!")


@pytest.fixture()
def catalog() -> GatedCatalog:
    return GatedCatalog()


async def settle() -> None:
    """Let every ready task run until it blocks."""
    for _ in range(5):
        await asyncio.sleep(0)


@pytest.fixture()
def page_factory():
    return make_page


@pytest.fixture()
def detail_factory():
    return make_detail


@pytest.fixture()
def drain():
    return settle
