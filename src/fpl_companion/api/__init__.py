"""
FPL API Integration Module.

Provides clients for interacting with the Fantasy Premier League API.
"""

from .cache import CacheEntry, CachedFPLClient, TTLCache
from .client import (
    FPLAPIError,
    FPLClient,
    FPLNotFoundError,
    FPLRateLimitError,
)

__all__ = [
    # Client
    "FPLClient",
    # Cache
    "CacheEntry",
    "TTLCache",
    "CachedFPLClient",
    # Errors
    "FPLAPIError",
    "FPLNotFoundError",
    "FPLRateLimitError",
]
