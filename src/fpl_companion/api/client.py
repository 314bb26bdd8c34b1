"""
FPL API Client.

Async HTTP client for interacting with the Fantasy Premier League API.
One attempt per request: failures surface as FPLAPIError and the caller
decides whether to re-trigger the action.
"""

import logging
from typing import Any

import httpx

from .endpoints import (
    BOOTSTRAP_STATIC,
    FIXTURES,
    FPL_BASE_URL,
    build_url,
    get_classic_league_url,
    get_element_summary_url,
    get_entry_picks_url,
    get_entry_url,
    get_player_photo_url,
)

logger = logging.getLogger(__name__)

# Photo host rejects requests without a browser UA and an FPL referer
PHOTO_HEADERS = {
    "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36",
    "Referer": "https://fantasy.premierleague.com/",
}

SEARCH_RESULT_LIMIT = 10


class FPLAPIError(Exception):
    """Base exception for FPL API errors."""

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class FPLRateLimitError(FPLAPIError):
    """Raised when rate limited by the API."""

    pass


class FPLNotFoundError(FPLAPIError):
    """Raised when resource not found."""

    pass


class FPLClient:
    """
    Async client for the FPL API.

    Handles HTTP requests with timeouts and status-code mapping.
    """

    DEFAULT_TIMEOUT = 30.0
    DEFAULT_USER_AGENT = "FPL-Assistant/1.0"

    def __init__(
        self,
        base_url: str = FPL_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the FPL client.

        Args:
            base_url: API base URL
            timeout: Request timeout in seconds
            user_agent: User-Agent sent with every API request
            transport: Optional httpx transport (tests pass a MockTransport)
        """
        self.base_url = base_url
        self.timeout = timeout
        self.user_agent = user_agent
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def from_settings(cls, settings: Any) -> "FPLClient":
        """Build a client from the `fpl` settings section."""
        return cls(
            base_url=settings.base_url,
            timeout=settings.timeout,
            user_agent=settings.user_agent,
        )

    async def __aenter__(self) -> "FPLClient":
        """Async context manager entry."""
        await self._ensure_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()

    async def _ensure_client(self) -> None:
        """Ensure HTTP client is initialized."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                follow_redirects=True,
                transport=self._transport,
                headers={
                    "User-Agent": self.user_agent,
                    "Accept": "application/json",
                },
            )

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _send(self, url: str, **kwargs: Any) -> httpx.Response:
        """Send a GET request and map failure statuses to exceptions."""
        await self._ensure_client()
        assert self._client is not None

        logger.debug(f"GET {url}")
        try:
            response = await self._client.get(url, **kwargs)
        except httpx.TimeoutException as e:
            logger.warning(f"Request timeout: {url}")
            raise FPLAPIError(f"Request timed out: {url}") from e
        except httpx.RequestError as e:
            logger.warning(f"Request error: {e}")
            raise FPLAPIError(f"Request failed: {e}") from e

        if response.status_code == 200:
            return response

        if response.status_code == 404:
            raise FPLNotFoundError(f"Resource not found: {url}", status_code=404)

        if response.status_code == 429:
            raise FPLRateLimitError("Rate limited by FPL API", status_code=429)

        raise FPLAPIError(
            f"FPL API responded with status: {response.status_code}",
            status_code=response.status_code,
        )

    async def get(self, url: str, **kwargs: Any) -> dict[str, Any] | list[Any]:
        """Make a GET request and decode the JSON body."""
        response = await self._send(url, **kwargs)
        try:
            return response.json()
        except ValueError as e:
            raise FPLAPIError(f"Invalid JSON from {url}") from e

    # =========================================================================
    # Public API Methods
    # =========================================================================

    async def get_bootstrap_static(self) -> dict[str, Any]:
        """
        Get bootstrap-static data.

        Returns all players, teams, and gameweek info.
        This is the main data endpoint - cache aggressively.
        """
        data = await self.get(build_url(BOOTSTRAP_STATIC, self.base_url))
        self._validate_bootstrap(data)
        return data  # type: ignore

    async def get_fixtures(self) -> list[dict[str, Any]]:
        """Get the full fixture list."""
        data = await self.get(build_url(FIXTURES, self.base_url))
        if not isinstance(data, list):
            raise FPLAPIError("Invalid fixtures response: expected list")
        return data

    async def get_element_summary(self, element_id: int) -> dict[str, Any]:
        """
        Get detailed data for a specific player.

        Includes past gameweek history and upcoming fixtures.
        Use sparingly - don't bulk fetch all players.
        """
        data = await self.get(get_element_summary_url(element_id, self.base_url))
        return data  # type: ignore

    async def get_entry(self, manager_id: int) -> dict[str, Any]:
        """Get public manager information."""
        data = await self.get(get_entry_url(manager_id, self.base_url))
        return data  # type: ignore

    async def get_entry_picks(
        self, manager_id: int, event_id: int
    ) -> dict[str, Any]:
        """
        Get manager's team for a specific gameweek.

        Note: Only works if team is public.
        """
        url = get_entry_picks_url(manager_id, event_id, self.base_url)
        data = await self.get(url)
        return data  # type: ignore

    async def get_classic_league(
        self, league_id: int, page: int = 1
    ) -> dict[str, Any]:
        """Get one page of classic league standings."""
        data = await self.get(get_classic_league_url(league_id, page, self.base_url))
        return data  # type: ignore

    async def get_manager_team(self, manager_id: int) -> dict[str, Any]:
        """
        Get a manager's info together with their picks for the current event.

        Returns:
            {"manager": ..., "picks": ..., "currentEvent": int}
        """
        manager = await self.get_entry(manager_id)
        current_event = manager.get("current_event")
        if not current_event:
            raise FPLAPIError(f"Manager {manager_id} has no current event")

        picks = await self.get_entry_picks(manager_id, current_event)
        return {
            "manager": manager,
            "picks": picks,
            "currentEvent": current_event,
        }

    async def search_teams_in_league(
        self,
        league_id: int,
        query: str,
        max_pages: int = 10,
    ) -> tuple[list[dict[str, Any]], int]:
        """
        Search a league's standings for teams or managers matching a query.

        Pages through the standings until enough matches are found, the
        league has no further pages, a page fails, or max_pages is reached.

        Returns:
            (matching raw standings entries, pages searched)
        """
        needle = query.lower()
        matches: list[dict[str, Any]] = []
        page = 1

        while page <= max_pages and len(matches) < SEARCH_RESULT_LIMIT:
            try:
                data = await self.get_classic_league(league_id, page)
            except FPLNotFoundError:
                if page == 1:
                    raise
                break
            except FPLAPIError as e:
                logger.warning(f"Standings page {page} failed: {e}")
                break

            standings = data.get("standings") or {}
            for entry in standings.get("results") or []:
                entry_name = (entry.get("entry_name") or "").lower()
                player_name = (entry.get("player_name") or "").lower()
                if needle in entry_name or needle in player_name:
                    matches.append(entry)

            if not standings.get("has_next"):
                break

            page += 1

        return matches, page

    async def get_player_photo(self, code: int | str) -> bytes:
        """Fetch a player's PNG photo."""
        response = await self._send(get_player_photo_url(code), headers=PHOTO_HEADERS)
        return response.content

    # =========================================================================
    # Validation
    # =========================================================================

    def _validate_bootstrap(self, data: Any) -> None:
        """Validate bootstrap-static response structure."""
        if not isinstance(data, dict):
            raise FPLAPIError("Invalid bootstrap response: expected dict")

        required_fields = ["elements", "teams", "events"]
        missing = [f for f in required_fields if f not in data]

        if missing:
            raise FPLAPIError(
                f"Invalid bootstrap response: missing fields {missing}. "
                "The FPL API structure may have changed."
            )
