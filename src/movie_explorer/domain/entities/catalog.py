"""Domain entities for the movie catalog.

Pure value objects without framework dependencies or I/O.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any

# The catalog always pages search results in groups of ten.
PAGE_SIZE = 10

# Sentinel the catalog uses for missing fields (poster, rating, ...).
NOT_AVAILABLE = "N/A"


def text_field(value: Any, default: str = "") -> str:
    """Catalog text value; null or missing becomes *default*."""
    if value is None:
        return default
    return str(value)


@dataclass(frozen=True)
class SearchResultItem:
    """A single hit from a catalog search."""

    imdb_id: str  # e.g. "tt0112697"
    title: str
    poster: str = NOT_AVAILABLE
    page: int = 1  # Page the item was retrieved under
    year: str = ""
    type: str = ""  # "movie", "series", "episode"

    @property
    def has_poster(self) -> bool:
        return bool(self.poster) and self.poster != NOT_AVAILABLE


@dataclass(frozen=True)
class Rating:
    """One (source, value) pair, e.g. ("Rotten Tomatoes", "81%")."""

    source: str
    value: str


@dataclass(frozen=True)
class DetailRecord:
    """Full detail record for one catalog entry."""

    imdb_id: str
    title: str
    year: str = ""
    plot: str = ""
    rated: str = ""
    runtime: str = ""
    ratings: tuple[Rating, ...] = ()
    actors: str = ""
    genre: str = ""
    director: str = ""
    poster: str = NOT_AVAILABLE


@dataclass(frozen=True)
class SearchPage:
    """One page of search results plus the total hit count.

    ``error_message`` is set when the catalog answered but reported a
    failure (e.g. "Movie not found!"); ``items`` is then empty.
    """

    items: tuple[SearchResultItem, ...] = ()
    total_count: int = 0
    error_message: str | None = None

    @property
    def page_count(self) -> int:
        return page_count(self.total_count)

    @property
    def ok(self) -> bool:
        return self.error_message is None


EMPTY_PAGE = SearchPage()


def page_count(total_count: int) -> int:
    """Number of pages needed for *total_count* hits (0 when there are none)."""
    if total_count <= 0:
        return 0
    return math.ceil(total_count / PAGE_SIZE)


def clamp_page(page: int, total_count: int) -> int:
    """Clamp *page* into ``[1, max(1, page_count(total_count))]``."""
    last = max(1, page_count(total_count))
    return min(max(1, page), last)


@dataclass(frozen=True)
class Query:
    """Search term plus 1-based page number.

    Use :meth:`of` to build a query from untrusted input; it trims the term
    and raises the page to at least 1.
    """

    term: str = ""
    page: int = 1

    @classmethod
    def of(cls, term: str, page: int = 1) -> Query:
        return cls(term=term.strip(), page=max(1, page))

    @property
    def is_active(self) -> bool:
        """An empty term means "no active search"."""
        return bool(self.term)


@dataclass(frozen=True)
class WatchlistEntry:
    """The subset of an item needed to render a watchlist row."""

    imdb_id: str
    title: str
    year: str = ""
    poster: str = NOT_AVAILABLE
    extra: dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    @classmethod
    def from_item(cls, item: SearchResultItem) -> WatchlistEntry:
        return cls(
            imdb_id=item.imdb_id,
            title=item.title,
            year=item.year,
            poster=item.poster,
        )

    @classmethod
    def from_detail(cls, record: DetailRecord) -> WatchlistEntry:
        return cls(
            imdb_id=record.imdb_id,
            title=record.title,
            year=record.year,
            poster=record.poster,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "imdbID": self.imdb_id,
            "Title": self.title,
            "Year": self.year,
            "Poster": self.poster,
            **self.extra,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> WatchlistEntry:
        """Build an entry from its stored form.

        Raises:
            KeyError: When the identifier or title is missing.
            TypeError: When they are not strings.
        """
        imdb_id = data["imdbID"]
        title = data["Title"]
        if not isinstance(imdb_id, str) or not isinstance(title, str):
            raise TypeError("imdbID and Title must be strings")
        known = {"imdbID", "Title", "Year", "Poster"}
        return cls(
            imdb_id=imdb_id,
            title=title,
            year=text_field(data.get("Year")),
            poster=text_field(data.get("Poster"), NOT_AVAILABLE),
            extra={k: v for k, v in data.items() if k not in known},
        )
