"""Display helpers shared by the CLI, prompts and API responses."""

from ..api.endpoints import get_player_photo_url
from .models import PlayerStatus, Position, Team

UNKNOWN_TEAM = "Unknown"

POSITION_FULL_NAMES = {
    Position.GK: "Goalkeeper",
    Position.DEF: "Defender",
    Position.MID: "Midfielder",
    Position.FWD: "Forward",
}

STATUS_LABELS = {
    PlayerStatus.AVAILABLE: "Available",
    PlayerStatus.DOUBTFUL: "Doubtful",
    PlayerStatus.INJURED: "Injured",
    PlayerStatus.SUSPENDED: "Suspended",
}

DIFFICULTY_RATINGS = {
    1: ("Very Easy", "green", "Excellent fixture for points"),
    2: ("Easy", "green", "Good fixture for points"),
    3: ("Moderate", "yellow", "Average fixture"),
    4: ("Hard", "red", "Tough fixture"),
}


def format_price(price: int) -> str:
    """Format a price in tenths: 45 -> £4.5m."""
    return f"£{price / 10:.1f}m"


def position_name(element_type: int) -> str:
    """Short position name for an element_type, or UNKNOWN."""
    try:
        return Position(element_type).name
    except ValueError:
        return "UNKNOWN"


def position_full_name(element_type: int) -> str:
    try:
        return POSITION_FULL_NAMES[Position(element_type)]
    except ValueError:
        return "Unknown"


def status_label(status: PlayerStatus | str) -> str:
    """Readable availability; anything unrecognised reads as Unavailable."""
    try:
        return STATUS_LABELS.get(PlayerStatus(status), "Unavailable")
    except ValueError:
        return "Unavailable"


def fixture_difficulty_rating(difficulty: int) -> dict[str, str]:
    """Rating, colour and description for an FDR value (5 and above read as Very Hard)."""
    rating, color, description = DIFFICULTY_RATINGS.get(
        difficulty, ("Very Hard", "red", "Very difficult fixture")
    )
    return {"rating": rating, "color": color, "description": description}


def team_short_name(teams: list[Team], team_id: int | None) -> str:
    """Short name of a team, falling back to Unknown."""
    team = next((t for t in teams if t.id == team_id), None)
    return team.short_name if team else UNKNOWN_TEAM


def fixture_run(difficulties: list[int]) -> float:
    """Average difficulty of the next 5 fixtures; neutral 3 with no fixtures."""
    if not difficulties:
        return 3.0
    window = difficulties[:5]
    return sum(window) / len(window)


def player_photo_url(code: int) -> str:
    return get_player_photo_url(code)
