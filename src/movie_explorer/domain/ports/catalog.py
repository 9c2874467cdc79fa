"""Port for movie catalog lookups."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from movie_explorer.domain.entities.catalog import DetailRecord, SearchPage


@runtime_checkable
class CatalogClientPort(Protocol):
    """Async interface for the external movie catalog.

    Every call issues exactly one request. Transport problems raise
    ``CatalogNetworkError``; catalog-reported failures are returned on the
    ``SearchPage`` (search) or raised as ``CatalogUpstreamError`` (lookups).
    """

    async def search(self, term: str, page: int = 1) -> SearchPage:
        """Search by term. An empty term returns an empty page without I/O."""
        ...

    async def fetch_by_id(self, imdb_id: str) -> DetailRecord:
        """Fetch the full detail record for an identifier."""
        ...

    async def fetch_by_title(self, title: str) -> DetailRecord:
        """Fetch the detail record of the best title match."""
        ...
