from .details import DetailsController
from .search import SearchController
from .watchlist import WatchlistStore, toggle

__all__ = ["DetailsController", "SearchController", "WatchlistStore", "toggle"]
