"""In-process key-value store scoped to a single session."""

from __future__ import annotations

from typing import Any

import structlog

log = structlog.get_logger(__name__)


class MemoryCacheAdapter:
    """CachePort backed by a plain dict.

    Values live as long as the adapter; ``ttl`` is accepted for interface
    compatibility and ignored.
    """

    def __init__(self) -> None:
        self._data: dict[str, Any] = {}

    async def __aenter__(self) -> MemoryCacheAdapter:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        log.debug("memory_cache_closed", keys=len(self._data))

    async def get(self, key: str) -> Any:
        return self._data.get(key)

    async def set(self, key: str, value: Any, *, ttl: int | None = None) -> None:
        self._data[key] = value

    async def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None

    async def clear(self) -> None:
        self._data.clear()
