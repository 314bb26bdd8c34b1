"""
FPL API endpoint definitions.

All URLs for the Fantasy Premier League API endpoints used by the companion.
Note: The FPL API is undocumented and unofficial - URLs may change.
"""

# Base URLs
FPL_BASE_URL = "https://fantasy.premierleague.com/api"
PLAYER_PHOTO_BASE_URL = "https://resources.premierleague.com/premierleague/photos/players/110x140"

# Bootstrap Static - Main data endpoint
# Contains: all players, teams, game settings, gameweek info
BOOTSTRAP_STATIC = "/bootstrap-static/"

# Fixtures - All match fixtures
# Contains: fixture IDs, teams, difficulties, kickoff times, scores
FIXTURES = "/fixtures/"

# Element Summary - Individual player details
# Contains: past gameweek history, upcoming fixtures
ELEMENT_SUMMARY = "/element-summary/{element_id}/"

# Entry (Manager) - Public manager info
# Contains: team name, manager name, current_event
ENTRY = "/entry/{manager_id}/"

# Entry Picks - Manager's team for a specific gameweek
# Note: Only works if team is public
ENTRY_PICKS = "/entry/{manager_id}/event/{event_id}/picks/"

# Classic league standings, 50 entries per page
CLASSIC_LEAGUE = "/leagues-classic/{league_id}/standings/"


def build_url(path: str, base_url: str = FPL_BASE_URL) -> str:
    """Join an endpoint path onto the API base URL."""
    return base_url.rstrip("/") + path


def get_element_summary_url(element_id: int, base_url: str = FPL_BASE_URL) -> str:
    """Get URL for player element summary."""
    return build_url(ELEMENT_SUMMARY.format(element_id=element_id), base_url)


def get_entry_url(manager_id: int, base_url: str = FPL_BASE_URL) -> str:
    """Get URL for manager entry."""
    return build_url(ENTRY.format(manager_id=manager_id), base_url)


def get_entry_picks_url(
    manager_id: int, event_id: int, base_url: str = FPL_BASE_URL
) -> str:
    """Get URL for manager's picks in a gameweek."""
    return build_url(
        ENTRY_PICKS.format(manager_id=manager_id, event_id=event_id), base_url
    )


def get_classic_league_url(
    league_id: int, page: int = 1, base_url: str = FPL_BASE_URL
) -> str:
    """Get URL for one page of classic league standings."""
    url = build_url(CLASSIC_LEAGUE.format(league_id=league_id), base_url)
    return f"{url}?page_standings={page}"


def get_player_photo_url(code: int | str) -> str:
    """Get URL of a player's 110x140 photo."""
    return f"{PLAYER_PHOTO_BASE_URL}/p{code}.png"

