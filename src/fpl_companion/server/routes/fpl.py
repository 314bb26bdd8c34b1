"""Statistics API passthrough endpoints: bootstrap, fixtures, teams, search and photos."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from ...api.cache import CachedFPLClient
from ...api.client import SEARCH_RESULT_LIMIT, FPLAPIError, FPLNotFoundError
from ...config import Settings
from ...data.processors import process_league_search
from ..dependencies import error_response, get_app_settings, get_fpl_client

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["fpl"])

MIN_QUERY_LENGTH = 3
PHOTO_CACHE_CONTROL = "public, max-age=86400"


@router.get("/bootstrap")
async def bootstrap(client: CachedFPLClient = Depends(get_fpl_client)):
    try:
        return await client.get_bootstrap_static()
    except FPLAPIError as e:
        logger.error(f"Error fetching bootstrap data: {e}")
        return error_response("Failed to fetch FPL data", 500)


@router.get("/fixtures")
async def fixtures(client: CachedFPLClient = Depends(get_fpl_client)):
    try:
        return await client.get_fixtures()
    except FPLAPIError as e:
        logger.error(f"Error fetching fixtures: {e}")
        return error_response("Failed to fetch fixtures", 500)


@router.get("/team/{team_id}")
async def team(team_id: int, client: CachedFPLClient = Depends(get_fpl_client)):
    """Manager info plus their picks for the current gameweek."""
    try:
        return await client.get_manager_team(team_id)
    except FPLNotFoundError:
        return error_response("Team not found", 404)
    except FPLAPIError as e:
        logger.error(f"Error fetching team data: {e}")
        return error_response("Failed to fetch team data", 500)


@router.get("/search-team")
async def search_team(
    q: str | None = None,
    league: int | None = None,
    client: CachedFPLClient = Depends(get_fpl_client),
    settings: Settings = Depends(get_app_settings),
):
    """Search a classic league's standings by team or manager name."""
    if not q or len(q) < MIN_QUERY_LENGTH:
        return error_response(
            f"Search query must be at least {MIN_QUERY_LENGTH} characters", 400
        )

    league_id = league or settings.fpl.default_league_id
    try:
        entries, searched_pages = await client.search_teams_in_league(
            league_id, q, settings.fpl.max_search_pages
        )
    except FPLNotFoundError:
        return error_response("League not found. Please check the League ID.", 404)
    except FPLAPIError as e:
        logger.error(f"Error searching teams: {e}")
        return error_response("Failed to search teams", 500)

    results = process_league_search(entries)[:SEARCH_RESULT_LIMIT]
    return {
        "results": [r.model_dump(by_alias=True) for r in results],
        "searchedPages": searched_pages,
    }


@router.get("/player-image/{code}")
async def player_image(code: int, client: CachedFPLClient = Depends(get_fpl_client)):
    try:
        content = await client.get_player_photo(code)
    except FPLAPIError as e:
        logger.warning(f"Error fetching player image {code}: {e}")
        return Response(status_code=404)

    return Response(
        content=content,
        media_type="image/png",
        headers={"Cache-Control": PHOTO_CACHE_CONTROL},
    )
