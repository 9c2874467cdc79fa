"""Movie search, details and watchlist client core backed by the OMDb catalog."""

__version__ = "0.1.0"
