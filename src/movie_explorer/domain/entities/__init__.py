from .catalog import (
    EMPTY_PAGE,
    NOT_AVAILABLE,
    PAGE_SIZE,
    DetailRecord,
    Query,
    Rating,
    SearchPage,
    SearchResultItem,
    WatchlistEntry,
    clamp_page,
    page_count,
    text_field,
)
from .errors import (
    NETWORK_ERROR_MESSAGE,
    CatalogError,
    CatalogNetworkError,
    CatalogUpstreamError,
    StorageError,
)
from .state import IDLE, Failed, Idle, Loaded, Loading, RequestState

__all__ = [
    "EMPTY_PAGE",
    "IDLE",
    "NETWORK_ERROR_MESSAGE",
    "NOT_AVAILABLE",
    "PAGE_SIZE",
    "CatalogError",
    "CatalogNetworkError",
    "CatalogUpstreamError",
    "DetailRecord",
    "Failed",
    "Idle",
    "Loaded",
    "Loading",
    "Query",
    "Rating",
    "RequestState",
    "SearchPage",
    "SearchResultItem",
    "StorageError",
    "WatchlistEntry",
    "clamp_page",
    "page_count",
    "text_field",
]
