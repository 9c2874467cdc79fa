"""Presentation surface: read models and commands for a rendering layer."""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from movie_explorer.application.use_cases.details import DetailsController
from movie_explorer.application.use_cases.search import SearchController
from movie_explorer.application.use_cases.watchlist import WatchlistStore
from movie_explorer.domain.entities.catalog import (
    DetailRecord,
    SearchResultItem,
    WatchlistEntry,
)
from movie_explorer.domain.entities.state import error_message, is_loading
from movie_explorer.domain.ports.catalog import CatalogClientPort

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class SearchView:
    term: str
    page: int
    page_count: int
    show_pager: bool
    items: tuple[SearchResultItem, ...]
    total_count: int
    loading: bool
    error: str | None


@dataclass(frozen=True)
class DetailView:
    selected_id: str | None
    record: DetailRecord | None
    loading: bool
    error: str | None


class MovieExplorer:
    """Wires the three controllers behind one command/read-model surface.

    The rendering layer only talks to this class; it never touches the
    catalog client or the persistence surface directly.
    """

    def __init__(
        self,
        *,
        catalog: CatalogClientPort,
        search: SearchController,
        details: DetailsController,
        watchlist: WatchlistStore,
    ) -> None:
        self._catalog = catalog
        self.search = search
        self.details = details
        self.watchlist = watchlist

    async def start(self) -> None:
        """Load the persisted watchlist (once, at startup)."""
        await self.watchlist.load()
        log.debug("explorer_started")

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    async def submit_search(self, term: str) -> SearchView:
        await self.search.submit(term)
        return self.search_view()

    async def change_page(self, page: int) -> SearchView:
        await self.search.go_to_page(page)
        return self.search_view()

    async def select_item(self, imdb_id: str) -> DetailView:
        await self.details.select(imdb_id)
        return self.detail_view()

    def dismiss(self) -> DetailView:
        self.details.dismiss()
        return self.detail_view()

    async def lookup_title(self, title: str) -> DetailRecord:
        """Single-title lookup; does not touch the selection.

        Raises:
            CatalogError: When the catalog has no match or is unreachable.
        """
        return await self._catalog.fetch_by_title(title)

    async def toggle_watch(self, entry: WatchlistEntry) -> tuple[WatchlistEntry, ...]:
        await self.watchlist.toggle_watch(entry)
        return self.watchlist.entries

    # ------------------------------------------------------------------
    # Read models
    # ------------------------------------------------------------------

    def search_view(self) -> SearchView:
        result = self.search.result
        return SearchView(
            term=self.search.query.term,
            page=self.search.query.page,
            page_count=self.search.page_count,
            show_pager=self.search.show_pager,
            items=result.items,
            total_count=self.search.total_count,
            loading=is_loading(self.search.state),
            error=error_message(self.search.state),
        )

    def detail_view(self) -> DetailView:
        return DetailView(
            selected_id=self.details.selected_id,
            record=self.details.record,
            loading=is_loading(self.details.state),
            error=error_message(self.details.state),
        )

    def watchlist_view(self) -> tuple[WatchlistEntry, ...]:
        return self.watchlist.entries

    def is_watched(self, imdb_id: str) -> bool:
        return self.watchlist.contains(imdb_id)
