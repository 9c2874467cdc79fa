"""Cache factory - builds the persistence adapter from configuration."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

import structlog

from movie_explorer.domain.ports.cache import CachePort
from movie_explorer.infrastructure.cache.diskcache_adapter import DiskcacheAdapter
from movie_explorer.infrastructure.cache.memory_adapter import MemoryCacheAdapter

log = structlog.get_logger(__name__)

CacheBackend = Literal["diskcache", "memory"]


def create_cache(
    backend: CacheBackend = "diskcache",
    *,
    directory: str | Path = "./.cache/movie-explorer",
    max_concurrent: int = 4,
) -> CachePort:
    """Create the persistence adapter for *backend*.

    Args:
        backend: "diskcache" (survives restarts) or "memory" (session only).
        directory: Diskcache directory.
        max_concurrent: Semaphore limit for diskcache.

    Raises:
        ValueError: If `backend` is unknown.
    """
    if backend == "diskcache":
        log.debug("cache_factory_create", backend=backend, directory=str(directory))
        return DiskcacheAdapter(directory=directory, max_concurrent=max_concurrent)
    elif backend == "memory":
        log.debug("cache_factory_create", backend=backend)
        return MemoryCacheAdapter()
    else:
        raise ValueError(
            f"Unknown cache backend: {backend!r}. Must be 'diskcache' or 'memory'."
        )
