"""OMDb API client: async httpx implementation."""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from movie_explorer.domain.entities.catalog import (
    EMPTY_PAGE,
    NOT_AVAILABLE,
    DetailRecord,
    Rating,
    SearchPage,
    SearchResultItem,
    text_field,
)
from movie_explorer.domain.entities.errors import (
    CatalogNetworkError,
    CatalogUpstreamError,
)

log = structlog.get_logger(__name__)

DEFAULT_BASE_URL = "https://www.omdbapi.com/"


class HttpxOmdbClient:
    """Async OMDb client using a shared httpx.AsyncClient.

    Implements ``CatalogClientPort`` from domain.ports.catalog. No caching
    and no retries: every public call is exactly one GET.
    """

    def __init__(
        self,
        *,
        api_key: str,
        http_client: httpx.AsyncClient,
        base_url: str = DEFAULT_BASE_URL,
    ) -> None:
        self._api_key = api_key
        self._http = http_client
        self._base_url = base_url

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _params(self, **extra: Any) -> dict[str, Any]:
        return {"apikey": self._api_key, **extra}

    async def _get(self, **extra: Any) -> dict[str, Any]:
        """GET the catalog endpoint and return the decoded JSON object.

        Raises:
            CatalogNetworkError: On transport errors, non-2xx status or a
                body that is not a JSON object with a "True"/"False"
                ``Response`` flag.
        """
        try:
            resp = await self._http.get(self._base_url, params=self._params(**extra))
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPStatusError as e:
            log.warning(
                "omdb_http_error",
                status=e.response.status_code,
                params=extra,
            )
            raise CatalogNetworkError() from e
        except httpx.HTTPError as e:
            log.warning("omdb_network_error", params=extra, exc_info=True)
            raise CatalogNetworkError() from e
        except (ValueError, RecursionError) as e:
            log.warning("omdb_malformed_body", params=extra)
            raise CatalogNetworkError() from e

        if not isinstance(data, dict):
            log.warning(
                "omdb_malformed_body",
                params=extra,
                body_type=type(data).__name__,
            )
            raise CatalogNetworkError()
        if text_field(data.get("Response")).lower() not in ("true", "false"):
            log.warning(
                "omdb_malformed_body",
                params=extra,
                response_flag=data.get("Response"),
            )
            raise CatalogNetworkError()
        return data

    @staticmethod
    def _is_failure(data: dict[str, Any]) -> bool:
        return text_field(data.get("Response")).lower() == "false"

    @staticmethod
    def _upstream_message(data: dict[str, Any]) -> str:
        return str(data.get("Error") or "Unknown catalog error.")

    @staticmethod
    def _parse_total(raw: Any) -> int:
        try:
            return max(0, int(str(raw).replace(",", "")))
        except (TypeError, ValueError):
            return 0

    @staticmethod
    def _to_item(raw: dict[str, Any], page: int) -> SearchResultItem:
        return SearchResultItem(
            imdb_id=text_field(raw.get("imdbID")),
            title=text_field(raw.get("Title")),
            poster=str(raw.get("Poster") or NOT_AVAILABLE),
            page=page,
            year=text_field(raw.get("Year")),
            type=text_field(raw.get("Type")),
        )

    @staticmethod
    def _to_detail(data: dict[str, Any]) -> DetailRecord:
        ratings = tuple(
            Rating(
                source=text_field(r.get("Source")),
                value=text_field(r.get("Value")),
            )
            for r in data.get("Ratings") or []
            if isinstance(r, dict)
        )
        return DetailRecord(
            imdb_id=text_field(data.get("imdbID")),
            title=text_field(data.get("Title")),
            year=text_field(data.get("Year")),
            plot=text_field(data.get("Plot")),
            rated=text_field(data.get("Rated")),
            runtime=text_field(data.get("Runtime")),
            ratings=ratings,
            actors=text_field(data.get("Actors")),
            genre=text_field(data.get("Genre")),
            director=text_field(data.get("Director")),
            poster=str(data.get("Poster") or NOT_AVAILABLE),
        )

    async def _fetch_detail(self, **extra: Any) -> DetailRecord:
        data = await self._get(**extra)
        if self._is_failure(data):
            message = self._upstream_message(data)
            log.info("omdb_upstream_error", params=extra, error=message)
            raise CatalogUpstreamError(message)
        return self._to_detail(data)

    # ------------------------------------------------------------------
    # Public API (CatalogClientPort)
    # ------------------------------------------------------------------

    async def search(self, term: str, page: int = 1) -> SearchPage:
        """Search titles by *term* (10 hits per page)."""
        term = term.strip()
        if not term:
            return EMPTY_PAGE
        page = max(1, page)

        data = await self._get(s=term, page=page)
        if self._is_failure(data):
            message = self._upstream_message(data)
            log.info("omdb_search_no_results", term=term, page=page, error=message)
            return SearchPage(items=(), total_count=0, error_message=message)

        items = tuple(
            self._to_item(raw, page)
            for raw in data.get("Search") or []
            if isinstance(raw, dict)
        )
        total = self._parse_total(data.get("totalResults"))
        log.debug("omdb_search", term=term, page=page, items=len(items), total=total)
        return SearchPage(items=items, total_count=total)

    async def fetch_by_id(self, imdb_id: str) -> DetailRecord:
        """Fetch the full-plot detail record for *imdb_id*."""
        return await self._fetch_detail(i=imdb_id, plot="full")

    async def fetch_by_title(self, title: str) -> DetailRecord:
        """Fetch the detail record of the closest match for *title*."""
        return await self._fetch_detail(t=title)

