from __future__ import annotations

from contextlib import AsyncExitStack, asynccontextmanager
from typing import AsyncIterator

import httpx
import structlog

from movie_explorer.application.explorer import MovieExplorer
from movie_explorer.application.use_cases.details import DetailsController
from movie_explorer.application.use_cases.search import SearchController
from movie_explorer.application.use_cases.watchlist import WatchlistStore
from movie_explorer.infrastructure.cache.cache_factory import create_cache
from movie_explorer.infrastructure.config.schema import AppConfig
from movie_explorer.infrastructure.omdb.client import HttpxOmdbClient
from movie_explorer.infrastructure.persistence.watchlist_cache import (
    CacheWatchlistRepository,
)

log = structlog.get_logger(__name__)


@asynccontextmanager
async def build_explorer(config: AppConfig) -> AsyncIterator[MovieExplorer]:
    """Composition root: create, wire and later close every resource.

    Order matters:
        1. Persistence surface (watchlist repository depends on it)
        2. HTTP client (catalog client depends on it)
        3. Catalog client
        4. Controllers + watchlist store, then the initial watchlist load

    Every resource is registered on the exit stack as soon as it is open,
    so a failure in a later step still closes the earlier ones.
    """
    async with AsyncExitStack() as stack:
        stack.callback(log.debug, "explorer_closed")

        # ========== 1) Persistence surface ==========
        cache = create_cache(
            backend=config.storage_backend,
            directory=config.storage_dir,
        )
        await stack.enter_async_context(cache)
        log.debug("storage_initialized", backend=config.storage_backend)

        # ========== 2) HTTP client (shared resource) ==========
        http_client = await stack.enter_async_context(
            httpx.AsyncClient(
                timeout=httpx.Timeout(config.http_timeout_seconds),
                headers={"User-Agent": config.http_user_agent},
            )
        )

        # ========== 3) Catalog client ==========
        catalog = HttpxOmdbClient(
            api_key=config.omdb_api_key,
            http_client=http_client,
            base_url=config.omdb_base_url,
        )

        # ========== 4) Controllers ==========
        explorer = MovieExplorer(
            catalog=catalog,
            search=SearchController(catalog),
            details=DetailsController(catalog),
            watchlist=WatchlistStore(
                CacheWatchlistRepository(cache, key=config.watchlist_key)
            ),
        )
        await explorer.start()
        log.debug("explorer_ready")

        yield explorer
