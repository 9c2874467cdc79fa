from .watchlist_cache import DEFAULT_WATCHLIST_KEY, CacheWatchlistRepository

__all__ = ["DEFAULT_WATCHLIST_KEY", "CacheWatchlistRepository"]
