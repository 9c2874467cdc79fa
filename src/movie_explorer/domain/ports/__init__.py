from .cache import CachePort
from .catalog import CatalogClientPort
from .watchlist_repository import WatchlistRepository

__all__ = [
    "CachePort",
    "CatalogClientPort",
    "WatchlistRepository",
]
