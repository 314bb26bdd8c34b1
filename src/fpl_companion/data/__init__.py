"""
Data Models and Processing Module.

Contains Pydantic models for FPL entities and the processors that build
them from raw API responses.
"""

from .formatting import (
    fixture_difficulty_rating,
    fixture_run,
    format_price,
    player_photo_url,
    position_full_name,
    position_name,
    status_label,
    team_short_name,
)
from .models import (
    BootstrapSnapshot,
    Confidence,
    DifferentialPick,
    EntryHistory,
    EntryPicks,
    Fixture,
    Gameweek,
    GameweekPrediction,
    ManagerInfo,
    Pick,
    PlannedTransfer,
    Player,
    PlayerHistory,
    PlayerStatus,
    Position,
    Prediction,
    Team,
    TeamSearchResult,
    TopPick,
    TransferMetrics,
    TransferPlan,
    TransferSuggestion,
)
from .processors import (
    next_fixture_for_team,
    process_bootstrap_static,
    process_entry_picks,
    process_fixtures,
    process_gameweeks,
    process_history,
    process_league_search,
    process_manager,
    process_players,
    process_teams,
    upcoming_fixtures_for_team,
)

__all__ = [
    # Models
    "BootstrapSnapshot",
    "Confidence",
    "DifferentialPick",
    "EntryHistory",
    "EntryPicks",
    "Fixture",
    "Gameweek",
    "GameweekPrediction",
    "ManagerInfo",
    "Pick",
    "PlannedTransfer",
    "Player",
    "PlayerHistory",
    "PlayerStatus",
    "Position",
    "Prediction",
    "Team",
    "TeamSearchResult",
    "TopPick",
    "TransferMetrics",
    "TransferPlan",
    "TransferSuggestion",
    # Processors
    "process_bootstrap_static",
    "process_players",
    "process_teams",
    "process_gameweeks",
    "process_fixtures",
    "process_history",
    "process_manager",
    "process_entry_picks",
    "process_league_search",
    "next_fixture_for_team",
    "upcoming_fixtures_for_team",
    # Formatting
    "format_price",
    "position_name",
    "position_full_name",
    "status_label",
    "fixture_difficulty_rating",
    "team_short_name",
    "fixture_run",
    "player_photo_url",
]
