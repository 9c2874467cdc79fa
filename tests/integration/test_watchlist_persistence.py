"""Integration tests for the watchlist on a real diskcache directory.

Wires WatchlistStore -> CacheWatchlistRepository -> DiskcacheAdapter and
checks what survives closing and reopening the store.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from movie_explorer.application.use_cases.watchlist import WatchlistStore
from movie_explorer.domain.entities.catalog import WatchlistEntry
from movie_explorer.infrastructure.cache.diskcache_adapter import DiskcacheAdapter
from movie_explorer.infrastructure.persistence.watchlist_cache import (
    CacheWatchlistRepository,
)

pytestmark = pytest.mark.integration

_SUPERBAD = WatchlistEntry(imdb_id="tt0829482", title="Superbad", year="2007")
_JUNO = WatchlistEntry(imdb_id="tt0467406", title="Juno", year="2007")


async def _load(directory: Path) -> tuple[WatchlistEntry, ...]:
    async with DiskcacheAdapter(directory=directory) as cache:
        store = WatchlistStore(CacheWatchlistRepository(cache))
        return await store.load()


class TestWatchlistPersistence:
    async def test_fresh_directory_is_empty(self, tmp_path: Path) -> None:
        assert await _load(tmp_path) == ()

    async def test_toggles_survive_reopen(self, tmp_path: Path) -> None:
        async with DiskcacheAdapter(directory=tmp_path) as cache:
            store = WatchlistStore(CacheWatchlistRepository(cache))
            await store.load()
            assert await store.toggle_watch(_SUPERBAD)
            assert await store.toggle_watch(_JUNO)

        assert await _load(tmp_path) == (_SUPERBAD, _JUNO)

    async def test_removal_survives_reopen(self, tmp_path: Path) -> None:
        async with DiskcacheAdapter(directory=tmp_path) as cache:
            store = WatchlistStore(CacheWatchlistRepository(cache))
            await store.load()
            await store.toggle_watch(_SUPERBAD)
            await store.toggle_watch(_JUNO)
            await store.toggle_watch(_SUPERBAD)

        assert await _load(tmp_path) == (_JUNO,)

    async def test_corrupt_value_loads_empty(self, tmp_path: Path) -> None:
        async with DiskcacheAdapter(directory=tmp_path) as cache:
            await cache.set("watchlist", "{this is not json")

        assert await _load(tmp_path) == ()

    async def test_keys_are_independent(self, tmp_path: Path) -> None:
        async with DiskcacheAdapter(directory=tmp_path) as cache:
            first = WatchlistStore(CacheWatchlistRepository(cache, key="a"))
            second = WatchlistStore(CacheWatchlistRepository(cache, key="b"))
            await first.load()
            await second.load()
            await first.toggle_watch(_SUPERBAD)

            assert await CacheWatchlistRepository(cache, key="b").load() == ()
            assert await CacheWatchlistRepository(cache, key="a").load() == (_SUPERBAD,)
