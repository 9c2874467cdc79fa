from __future__ import annotations

NETWORK_ERROR_MESSAGE = "Network error, please try again."


class CatalogError(Exception):
    """Base error for catalog lookups."""


class CatalogNetworkError(CatalogError):
    """Transport failure or malformed response body.

    The message shown to users is always the generic one; the underlying
    cause is kept on ``__cause__`` for logging.
    """

    def __init__(self, message: str = NETWORK_ERROR_MESSAGE) -> None:
        super().__init__(message)


class CatalogUpstreamError(CatalogError):
    """The catalog answered with ``Response: "False"``.

    ``str(err)`` is the upstream ``Error`` text, e.g. "Incorrect IMDb ID.".
    """


class StorageError(Exception):
    """Persistence surface could not be read or written."""
