"""
API Response Caching Layer.

In-memory, time-expiring cache for FPL API responses keyed by request name.
Entries expire by elapsed wall-clock time; reads never extend an entry's life
and nothing is evicted in the background.
"""

import logging
import time
from typing import Any, Awaitable, Callable

from .client import FPLClient

logger = logging.getLogger(__name__)


class CacheEntry:
    """Represents a cached item with metadata."""

    def __init__(self, data: Any, timestamp: float, key: str):
        self.data = data
        self.timestamp = timestamp
        self.key = key

    def age(self, now: float) -> float:
        """Get age of cache entry in seconds."""
        return now - self.timestamp


class TTLCache:
    """
    Key-value cache with a fixed time-to-live.

    Features:
    - One TTL for every entry, checked on read
    - Expired entries are dropped lazily when looked up
    - Injectable clock for tests
    """

    DEFAULT_TTL = 300  # 5 minutes

    def __init__(
        self,
        ttl: float = DEFAULT_TTL,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the cache.

        Args:
            ttl: Seconds an entry stays fresh after insertion
            clock: Time source in seconds
        """
        self.ttl = ttl
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    def get(self, key: str) -> CacheEntry | None:
        """
        Get item from cache.

        Returns:
            CacheEntry if found and fresh, None otherwise
        """
        entry = self._entries.get(key)
        if entry is None:
            logger.debug(f"Cache miss: {key}")
            return None

        age = entry.age(self._clock())
        if age >= self.ttl:
            logger.debug(f"Cache expired: {key} (age: {age:.0f}s)")
            del self._entries[key]
            return None

        logger.debug(f"Cache hit: {key} (age: {age:.0f}s)")
        return entry

    def set(self, key: str, data: Any) -> None:
        """Store item in cache, stamped with the current time."""
        self._entries[key] = CacheEntry(data=data, timestamp=self._clock(), key=key)
        logger.debug(f"Cached: {key} (ttl: {self.ttl}s)")

    def invalidate(self, key: str) -> bool:
        """
        Invalidate (delete) a cache entry.

        Returns:
            True if entry was deleted, False if not found
        """
        return self._entries.pop(key, None) is not None

    def clear(self) -> int:
        """
        Clear all cache entries.

        Returns:
            Number of entries cleared
        """
        count = len(self._entries)
        self._entries.clear()
        logger.info(f"Cleared {count} cache entries")
        return count

    async def get_or_fetch(
        self,
        key: str,
        fetch: Callable[[], Awaitable[Any]],
    ) -> Any:
        """Return the cached value for key, fetching and storing it on a miss."""
        entry = self.get(key)
        if entry is not None:
            return entry.data

        data = await fetch()
        self.set(key, data)
        return data


class CachedFPLClient:
    """
    FPL Client wrapper with automatic caching.

    Bootstrap and fixtures are cached; manager and league lookups always
    go to the API.
    """

    BOOTSTRAP_KEY = "bootstrap"
    FIXTURES_KEY = "fixtures"

    def __init__(self, client: FPLClient, cache: TTLCache | None = None):
        """
        Initialize cached client.

        Args:
            client: FPLClient instance
            cache: TTLCache instance (creates default if None)
        """
        self.client = client
        self.cache = cache or TTLCache()

    async def get_bootstrap_static(self, force_refresh: bool = False) -> dict[str, Any]:
        """
        Get bootstrap-static with caching.

        Args:
            force_refresh: Bypass cache and fetch fresh data
        """
        if force_refresh:
            self.cache.invalidate(self.BOOTSTRAP_KEY)
        return await self.cache.get_or_fetch(
            self.BOOTSTRAP_KEY, self.client.get_bootstrap_static
        )

    async def get_fixtures(self, force_refresh: bool = False) -> list[dict[str, Any]]:
        """Get fixtures with caching."""
        if force_refresh:
            self.cache.invalidate(self.FIXTURES_KEY)
        return await self.cache.get_or_fetch(self.FIXTURES_KEY, self.client.get_fixtures)

    # Pass-through methods (no caching - always fresh)

    async def get_element_summary(self, element_id: int) -> dict[str, Any]:
        """Get player element summary."""
        return await self.client.get_element_summary(element_id)

    async def get_manager_team(self, manager_id: int) -> dict[str, Any]:
        """Get manager info and current picks."""
        return await self.client.get_manager_team(manager_id)

    async def search_teams_in_league(
        self, league_id: int, query: str, max_pages: int = 10
    ) -> tuple[list[dict[str, Any]], int]:
        """Search league standings by team or manager name."""
        return await self.client.search_teams_in_league(league_id, query, max_pages)

    async def get_player_photo(self, code: int | str) -> bytes:
        """Fetch a player's photo."""
        return await self.client.get_player_photo(code)

    async def close(self) -> None:
        """Close the client."""
        await self.client.close()
