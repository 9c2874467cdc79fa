"""Port for watchlist persistence."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from movie_explorer.domain.entities.catalog import WatchlistEntry


@runtime_checkable
class WatchlistRepository(Protocol):
    """Loads and stores the full watchlist under a single key."""

    async def load(self) -> tuple[WatchlistEntry, ...]:
        """Stored entries; empty on missing or unreadable data. Never raises."""
        ...

    async def save(self, entries: tuple[WatchlistEntry, ...]) -> None:
        """Replace the stored list. Raises ``StorageError`` on failure."""
        ...
