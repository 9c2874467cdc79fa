"""Watchlist store: toggle semantics over a persisted, ordered list."""

from __future__ import annotations

from collections.abc import Iterable

import structlog

from movie_explorer.domain.entities.catalog import WatchlistEntry
from movie_explorer.domain.entities.errors import StorageError
from movie_explorer.domain.ports.watchlist_repository import WatchlistRepository

log = structlog.get_logger(__name__)


def toggle(
    current: Iterable[WatchlistEntry], entry: WatchlistEntry
) -> tuple[WatchlistEntry, ...]:
    """Flip the presence of *entry* in *current*.

    If an entry with the same identifier exists it is removed and the
    remaining order is kept; otherwise *entry* is appended at the end.
    """
    current = tuple(current)
    if any(e.imdb_id == entry.imdb_id for e in current):
        return tuple(e for e in current if e.imdb_id != entry.imdb_id)
    return (*current, entry)


class WatchlistStore:
    """Holds the in-memory watchlist and mirrors it to the repository.

    The store is the only writer of the persistence surface. When a write
    fails the in-memory list stays authoritative for the session.
    """

    def __init__(self, repository: WatchlistRepository) -> None:
        self._repository = repository
        self._entries: tuple[WatchlistEntry, ...] = ()
        self._loaded = False

    @property
    def entries(self) -> tuple[WatchlistEntry, ...]:
        return self._entries

    def contains(self, imdb_id: str) -> bool:
        return any(e.imdb_id == imdb_id for e in self._entries)

    async def load(self) -> tuple[WatchlistEntry, ...]:
        """Read the stored list once; later calls return the in-memory list."""
        if not self._loaded:
            self._entries = await self._repository.load()
            self._loaded = True
            log.info("watchlist_loaded", count=len(self._entries))
        return self._entries

    async def save(self, entries: tuple[WatchlistEntry, ...]) -> bool:
        """Persist *entries*. Returns False (and logs) when the write fails."""
        try:
            await self._repository.save(entries)
        except StorageError:
            log.error("watchlist_save_failed", count=len(entries), exc_info=True)
            return False
        return True

    async def toggle_watch(self, entry: WatchlistEntry) -> bool:
        """Toggle *entry* and persist the result.

        Returns:
            True if the list was persisted, False if only memory was updated.
        """
        self._entries = toggle(self._entries, entry)
        log.info(
            "watchlist_toggled",
            imdb_id=entry.imdb_id,
            watched=self.contains(entry.imdb_id),
            count=len(self._entries),
        )
        return await self.save(self._entries)
