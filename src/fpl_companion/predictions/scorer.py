"""
Rule-based points prediction.

Each player gets four 0-10 sub-scores which are blended into a predicted
points value:

- Form (40%): average points over the last 5 matches
- Fixture Difficulty (30%): easier opponent = higher score
- Home/Away (10%): relevant team strength for the venue
- Minutes Certainty (20%): rotation risk and injury status

All functions here are pure; predictions are recomputed on demand.
"""

import math
from typing import Callable

from ..data.models import (
    Confidence,
    DifferentialPick,
    Fixture,
    GameweekPrediction,
    Player,
    PlayerHistory,
    PlayerStatus,
    Position,
    Prediction,
    Team,
)

WEIGHTS = {
    "form": 0.4,
    "fixture_difficulty": 0.3,
    "home_away": 0.1,
    "minutes_certainty": 0.2,
}

# Weighted 0-10 score -> realistic points range
POINTS_SCALE = 1.5

NEUTRAL_SCORE = 5.0
MAX_SCORE = 10.0
FORM_WINDOW = 5

# Team strengths sit roughly in 800-1400
STRENGTH_DIVISOR = 140

# Minutes ratio assumes ~20 matches of 90 minutes
ASSUMED_MATCHES = 20
MINUTES_PER_MATCH = 90

FixtureLookup = Callable[[Player], Fixture | None]


def clamp(value: float, low: float = 0.0, high: float = MAX_SCORE) -> float:
    return max(low, min(value, high))


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (not banker's rounding)."""
    return int(math.floor(value + 0.5))


def _find_team(teams: list[Team], team_id: int) -> Team | None:
    return next((t for t in teams if t.id == team_id), None)


# =============================================================================
# Sub-scores
# =============================================================================


def form_score(player: Player, history: list[PlayerHistory] | None = None) -> float:
    """
    Form score (0-10).

    With match history: mean points of the last 5 matches.
    Without: the API form value doubled.
    """
    if history:
        last_games = history[-FORM_WINDOW:]
        avg_points = sum(h.total_points for h in last_games) / len(last_games)
        return clamp(avg_points)

    return clamp(player.form * 2)


def fixture_difficulty_score(
    player: Player, fixture: Fixture | None, teams: list[Team]
) -> float:
    """
    Fixture difficulty score (0-10).

    Difficulty 1 -> 9, difficulty 5 -> 1. Neutral when fixture or team unknown.
    """
    if fixture is None or _find_team(teams, player.team_id) is None:
        return NEUTRAL_SCORE

    difficulty = fixture.difficulty_for(player.team_id)
    return clamp(11 - difficulty * 2)


def home_away_score(player: Player, fixture: Fixture | None, teams: list[Team]) -> float:
    """
    Home/away score (0-10) from the venue-specific team strength.

    GK/DEF use defensive strength, MID/FWD use attacking strength.
    """
    if fixture is None:
        return NEUTRAL_SCORE

    team = _find_team(teams, player.team_id)
    if team is None:
        return NEUTRAL_SCORE

    is_home = fixture.is_home(player.team_id)
    if player.position in (Position.GK, Position.DEF):
        strength = team.strength_defence_home if is_home else team.strength_defence_away
    else:
        strength = team.strength_attack_home if is_home else team.strength_attack_away

    return clamp(strength / STRENGTH_DIVISOR)


def minutes_certainty_score(player: Player) -> float:
    """
    Minutes certainty score (0-10).

    Higher = more likely to play the full 90 minutes.
    """
    score = NEUTRAL_SCORE

    if player.status != PlayerStatus.AVAILABLE:
        if player.status in (PlayerStatus.INJURED, PlayerStatus.SUSPENDED):
            return 0.0
        score -= 3  # doubtful or unavailable

    chance = player.chance_of_playing_this_round
    if chance is not None:
        if chance == 0:
            return 0.0
        # Thresholds stack: below 50 loses 3 in total
        if chance < 50:
            score -= 2
        if chance < 75:
            score -= 1

    possible_minutes = MINUTES_PER_MATCH * ASSUMED_MATCHES
    minutes_ratio = player.minutes / possible_minutes

    if minutes_ratio > 0.8:
        score += 3  # regular starter
    elif minutes_ratio > 0.6:
        score += 1
    elif minutes_ratio < 0.3:
        score -= 2  # rotation risk

    return clamp(score)


def classify_confidence(minutes: float, form: float, fixture: float) -> Confidence:
    """Confidence label from minutes certainty, form and fixture sub-scores."""
    if minutes >= 7 and form >= 5 and fixture >= 6:
        return Confidence.HIGH

    if minutes < 4 or form < 3 or fixture < 3:
        return Confidence.LOW

    return Confidence.MEDIUM


def combine_scores(
    form: float, fixture: float, home_away: float, minutes: float
) -> int:
    """Blend the four sub-scores into predicted points."""
    weighted = (
        form * WEIGHTS["form"]
        + fixture * WEIGHTS["fixture_difficulty"]
        + home_away * WEIGHTS["home_away"]
        + minutes * WEIGHTS["minutes_certainty"]
    )
    return round_half_up(weighted * POINTS_SCALE)


# =============================================================================
# Predictions
# =============================================================================


def predict_player_points(
    player: Player,
    fixture: Fixture | None,
    teams: list[Team],
    history: list[PlayerHistory] | None = None,
) -> Prediction:
    """Predict a player's points against a single fixture."""
    form = form_score(player, history)
    fixture_difficulty = fixture_difficulty_score(player, fixture, teams)
    home_away = home_away_score(player, fixture, teams)
    minutes = minutes_certainty_score(player)

    if fixture is not None and not fixture.is_home(player.team_id):
        venue = "away"
    else:
        venue = "home"

    return Prediction(
        player_id=player.id,
        predicted_points=combine_scores(form, fixture_difficulty, home_away, minutes),
        confidence=classify_confidence(minutes, form, fixture_difficulty),
        form=form,
        fixture_difficulty=fixture_difficulty,
        home_away=home_away,
        minutes_certainty=minutes,
        venue=venue,
    )


def predict_multiple_gameweeks(
    player: Player,
    fixtures: list[Fixture],
    teams: list[Team],
    num_gameweeks: int = 3,
    history: list[PlayerHistory] | None = None,
) -> list[GameweekPrediction]:
    """Predict the player's next N fixtures (in the order given)."""
    return [
        GameweekPrediction(
            gameweek=fixture.gameweek or 0,
            prediction=predict_player_points(player, fixture, teams, history),
        )
        for fixture in fixtures[:num_gameweeks]
    ]


def top_captain_picks(
    players: list[Player],
    fixture_lookup: FixtureLookup,
    teams: list[Team],
    limit: int = 10,
) -> list[Prediction]:
    """Rank players by predicted points, best first."""
    predictions = [
        predict_player_points(player, fixture_lookup(player), teams)
        for player in players
    ]
    predictions.sort(key=lambda p: p.predicted_points, reverse=True)
    return predictions[:limit]


def differential_score(player: Player) -> float:
    """Invert ownership to a 0-100 differential score (1% owned -> 99)."""
    return max(0.0, 100 - player.selected_by_percent)


def differential_captains(
    players: list[Player],
    fixture_lookup: FixtureLookup,
    teams: list[Team],
    max_ownership: float = 10,
    limit: int = 10,
) -> list[DifferentialPick]:
    """Low-ownership captain options ranked by points and differential value."""
    picks = [
        DifferentialPick(
            prediction=predict_player_points(player, fixture_lookup(player), teams),
            ownership=player.selected_by_percent,
            differential_score=differential_score(player),
        )
        for player in players
        if player.selected_by_percent <= max_ownership
    ]
    picks.sort(key=lambda p: p.combined_score, reverse=True)
    return picks[:limit]


def team_predicted_points(
    players: list[Player],
    fixture_lookup: FixtureLookup,
    teams: list[Team],
    captain_id: int | None,
) -> int:
    """Total predicted points for a squad; the captain counts double."""
    total = 0
    for player in players:
        prediction = predict_player_points(player, fixture_lookup(player), teams)
        multiplier = 2 if player.id == captain_id else 1
        total += prediction.predicted_points * multiplier
    return total
