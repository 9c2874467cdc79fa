"""Watchlist repository backed by CachePort (diskcache/memory)."""

from __future__ import annotations

import json

import structlog

from movie_explorer.domain.entities.catalog import WatchlistEntry
from movie_explorer.domain.entities.errors import StorageError
from movie_explorer.domain.ports.cache import CachePort

log = structlog.get_logger(__name__)

DEFAULT_WATCHLIST_KEY = "watchlist"


def _serialize_entries(entries: tuple[WatchlistEntry, ...]) -> str:
    """Serialize the watchlist to a JSON array string."""
    return json.dumps([e.to_dict() for e in entries])


def _deserialize_entries(data: str) -> tuple[WatchlistEntry, ...]:
    """Deserialize a JSON array string; raises on any malformed content."""
    raw = json.loads(data)
    if not isinstance(raw, list):
        raise ValueError(f"expected a JSON array, got {type(raw).__name__}")
    entries: list[WatchlistEntry] = []
    seen: set[str] = set()
    for item in raw:
        if not isinstance(item, dict):
            raise ValueError(f"expected a JSON object, got {type(item).__name__}")
        entry = WatchlistEntry.from_dict(item)
        # Stored data may predate the uniqueness rule; keep the first copy.
        if entry.imdb_id in seen:
            continue
        seen.add(entry.imdb_id)
        entries.append(entry)
    return tuple(entries)


class CacheWatchlistRepository:
    """Stores the whole watchlist as one JSON value under a single key."""

    def __init__(self, cache: CachePort, key: str = DEFAULT_WATCHLIST_KEY) -> None:
        self.cache = cache
        self.key = key

    async def load(self) -> tuple[WatchlistEntry, ...]:
        """Load the watchlist. Missing or unreadable data yields ``()``."""
        try:
            data = await self.cache.get(self.key)
        except Exception:
            log.warning("watchlist_read_error", key=self.key, exc_info=True)
            return ()

        if data is None:
            log.debug("watchlist_not_found", key=self.key)
            return ()

        try:
            if isinstance(data, bytes):
                data = data.decode("utf-8")
            entries = _deserialize_entries(data)
        except (KeyError, TypeError, ValueError, RecursionError) as e:
            log.warning("watchlist_deserialize_error", key=self.key, error=str(e))
            return ()

        log.debug("watchlist_loaded", key=self.key, count=len(entries))
        return entries

    async def save(self, entries: tuple[WatchlistEntry, ...]) -> None:
        """Write the full list (no expiry)."""
        payload = _serialize_entries(entries)
        try:
            await self.cache.set(self.key, payload, ttl=None)
        except Exception as e:
            raise StorageError(f"could not write {self.key!r}") from e
        log.debug("watchlist_saved", key=self.key, count=len(entries))
