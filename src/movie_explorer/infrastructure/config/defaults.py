"""Hardcoded default configuration values."""

from __future__ import annotations

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {
    "app_name": "movie-explorer",
    "environment": "dev",
    "omdb": {
        "api_key": "",
        "base_url": "https://www.omdbapi.com/",
    },
    "http": {
        "timeout_seconds": 10.0,
        "user_agent": "movie-explorer/0.1.0",
    },
    "logging": {
        "level": "WARNING",
        "format": None,  # Derived from environment in schema.py
    },
    "storage": {
        "backend": "diskcache",
        "dir": "./.cache/movie-explorer",
        "watchlist_key": "watchlist",
    },
}
