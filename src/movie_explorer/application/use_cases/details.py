"""Selection/details controller: owns the selected id and its detail record."""

from __future__ import annotations

import structlog

from movie_explorer.domain.entities.catalog import DetailRecord
from movie_explorer.domain.entities.errors import CatalogError
from movie_explorer.domain.entities.state import (
    IDLE,
    Failed,
    Idle,
    Loaded,
    Loading,
    RequestState,
)
from movie_explorer.domain.ports.catalog import CatalogClientPort

log = structlog.get_logger(__name__)


class DetailsController:
    """Fetches the detail record for the current selection.

    Selecting a new id or dismissing bumps the generation counter, so a
    response for an earlier selection never reaches ``state``.
    """

    def __init__(self, catalog: CatalogClientPort) -> None:
        self._catalog = catalog
        self._generation = 0
        self._state: RequestState = IDLE

    @property
    def state(self) -> RequestState:
        return self._state

    @property
    def selected_id(self) -> str | None:
        if isinstance(self._state, Idle):
            return None
        return self._state.key

    @property
    def record(self) -> DetailRecord | None:
        if isinstance(self._state, Loaded):
            return self._state.data
        return None

    async def select(self, imdb_id: str) -> RequestState:
        """Select *imdb_id* and fetch its details. An empty id dismisses."""
        imdb_id = imdb_id.strip()
        if not imdb_id:
            self.dismiss()
            return self._state

        self._generation += 1
        token = self._generation
        self._state = Loading(imdb_id)
        log.debug("detail_started", imdb_id=imdb_id, generation=token)

        try:
            record = await self._catalog.fetch_by_id(imdb_id)
        except CatalogError as e:
            return self._commit(token, Failed(imdb_id, str(e)))
        return self._commit(token, Loaded(imdb_id, record))

    def dismiss(self) -> None:
        """Clear the selection and drop any pending or ready record."""
        self._generation += 1
        if not isinstance(self._state, Idle):
            log.debug("detail_dismissed", imdb_id=self.selected_id)
        self._state = IDLE

    def _commit(self, token: int, state: RequestState) -> RequestState:
        if token != self._generation:
            log.debug(
                "detail_result_discarded",
                generation=token,
                current_generation=self._generation,
            )
            return self._state
        if isinstance(state, Failed):
            log.info("detail_failed", imdb_id=state.key, error=state.message)
        self._state = state
        return state
