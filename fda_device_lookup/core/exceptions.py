"""Custom exception hierarchy for device classification lookups."""

from __future__ import annotations


class DeviceLookupError(Exception):
    """Base error for the FDA device lookup package."""


class ConfigurationError(DeviceLookupError):
    """Raised when settings hold values the resolver cannot work with."""


class SearchError(DeviceLookupError):
    """Raised when a search port invocation fails."""

    def __init__(self, message: str, *, endpoint: str | None = None) -> None:
        self.endpoint = endpoint
        self.message = message
        prefix = f"[{endpoint}] " if endpoint else ""
        super().__init__(f"{prefix}{message}")


class NetworkError(SearchError):
    """Raised when the search service cannot be reached."""


class RateLimitedError(SearchError):
    """Raised when the search service rejects a request for exceeding its rate limit."""


class BadQueryError(SearchError):
    """Raised when the search service rejects a query."""

    def __init__(self, message: str, *, endpoint: str | None = None, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message, endpoint=endpoint)
