"""
Predictions Module for FPL Companion.

Rule-based player projections and transfer scoring:
- Form, fixture difficulty, venue strength and minutes certainty
- Captain and differential rankings
- Out/in transfer suggestions
- Fixture-driven transfer planning
"""

from .planner import (
    ScoredPlayer,
    build_transfer_plan,
    score_players,
    team_fixture_difficulty,
)
from .scorer import (
    classify_confidence,
    differential_captains,
    differential_score,
    fixture_difficulty_score,
    form_score,
    home_away_score,
    minutes_certainty_score,
    predict_multiple_gameweeks,
    predict_player_points,
    team_predicted_points,
    top_captain_picks,
)
from .transfers import TransferScorer, suggest_transfers

__all__ = [
    # Scorer
    "form_score",
    "fixture_difficulty_score",
    "home_away_score",
    "minutes_certainty_score",
    "classify_confidence",
    "predict_player_points",
    "predict_multiple_gameweeks",
    "top_captain_picks",
    "differential_score",
    "differential_captains",
    "team_predicted_points",
    # Transfers
    "TransferScorer",
    "suggest_transfers",
    # Planner
    "ScoredPlayer",
    "build_transfer_plan",
    "score_players",
    "team_fixture_difficulty",
]
