"""Shared core utilities for the FDA device classification resolver."""

from .config import Settings, get_settings
from .exceptions import (
    BadQueryError,
    ConfigurationError,
    DeviceLookupError,
    NetworkError,
    RateLimitedError,
    SearchError,
)
from .logging import configure_logging, get_logger
from .models import (
    Attempt,
    BridgedEntry,
    BridgedMatch,
    BridgeRecord,
    CandidateRecord,
    DirectMatch,
    QueryInvocation,
    Resolution,
    ResolutionOutcome,
    SearchFilters,
    SearchPage,
    StrongMatch,
    Suggestion,
    Unresolved,
    WeakMatch,
)

__all__ = [
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    "DeviceLookupError",
    "ConfigurationError",
    "SearchError",
    "NetworkError",
    "RateLimitedError",
    "BadQueryError",
    "Attempt",
    "BridgedEntry",
    "BridgedMatch",
    "BridgeRecord",
    "CandidateRecord",
    "DirectMatch",
    "QueryInvocation",
    "Resolution",
    "ResolutionOutcome",
    "SearchFilters",
    "SearchPage",
    "StrongMatch",
    "Suggestion",
    "Unresolved",
    "WeakMatch",
]
