"""Search/pagination controller: owns the query and the current result page."""

from __future__ import annotations

import structlog

from movie_explorer.domain.entities.catalog import (
    EMPTY_PAGE,
    Query,
    SearchPage,
    clamp_page,
)
from movie_explorer.domain.entities.errors import CatalogError
from movie_explorer.domain.entities.state import (
    IDLE,
    Failed,
    Loaded,
    Loading,
    RequestState,
)
from movie_explorer.domain.ports.catalog import CatalogClientPort

log = structlog.get_logger(__name__)


class SearchController:
    """Drives catalog searches for a (term, page) query.

    Only the most recently issued request may commit to ``state``. Every
    request captures the generation counter at issue time; a response whose
    generation no longer matches is dropped on arrival.
    """

    def __init__(self, catalog: CatalogClientPort) -> None:
        self._catalog = catalog
        self._generation = 0
        self._query = Query()
        self._state: RequestState = IDLE
        # Last successful page; used for clamping while a new page loads.
        self._last_page: SearchPage = EMPTY_PAGE

    # ------------------------------------------------------------------
    # Read model
    # ------------------------------------------------------------------

    @property
    def query(self) -> Query:
        return self._query

    @property
    def state(self) -> RequestState:
        return self._state

    @property
    def result(self) -> SearchPage:
        """Currently visible page (empty unless the state is Loaded)."""
        if isinstance(self._state, Loaded):
            return self._state.data
        return EMPTY_PAGE

    @property
    def total_count(self) -> int:
        return self._last_page.total_count

    @property
    def page_count(self) -> int:
        return self._last_page.page_count

    @property
    def show_pager(self) -> bool:
        return self.page_count > 1

    def clamp_page(self, page: int) -> int:
        return clamp_page(page, self._last_page.total_count)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    async def submit(self, term: str) -> RequestState:
        """Start a new search for *term* at page 1.

        An empty term clears the results and supersedes any request that is
        still in flight.
        """
        query = Query.of(term, 1)
        self._last_page = EMPTY_PAGE
        if not query.is_active:
            self._generation += 1
            self._query = query
            self._state = IDLE
            log.debug("search_cleared", generation=self._generation)
            return self._state
        return await self._run(query)

    async def go_to_page(self, page: int) -> RequestState:
        """Re-query the current term at *page*, clamped to the known range."""
        if not self._query.is_active:
            log.debug("search_page_ignored", page=page, reason="no_active_term")
            return self._state
        target = self.clamp_page(page)
        if target != page:
            log.debug("search_page_clamped", requested=page, page=target)
        return await self._run(Query(term=self._query.term, page=target))

    async def next_page(self) -> RequestState:
        return await self.go_to_page(self._query.page + 1)

    async def previous_page(self) -> RequestState:
        return await self.go_to_page(self._query.page - 1)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _run(self, query: Query) -> RequestState:
        self._generation += 1
        token = self._generation
        self._query = query
        self._state = Loading(query)
        log.debug(
            "search_started", term=query.term, page=query.page, generation=token
        )

        try:
            page = await self._catalog.search(query.term, query.page)
        except CatalogError as e:
            return self._commit(token, Failed(query, str(e)))

        if page.error_message is not None:
            return self._commit(token, Failed(query, page.error_message))

        if token == self._generation:
            self._last_page = page
        return self._commit(token, Loaded(query, page))

    def _commit(self, token: int, state: RequestState) -> RequestState:
        if token != self._generation:
            log.debug(
                "search_result_discarded",
                generation=token,
                current_generation=self._generation,
            )
            return self._state
        if isinstance(state, Failed):
            self._last_page = EMPTY_PAGE
            log.info(
                "search_failed",
                term=state.key.term,
                page=state.key.page,
                error=state.message,
            )
        self._state = state
        return state
