"""
Fixture-Driven Transfer Planner.

Heuristic (non-LLM) plan over a gameweek horizon: finds the teams with the
easiest and hardest fixture runs, scores in-form players, and turns the best
of them into concrete transfers plus a short written strategy.
"""

import logging
from dataclasses import dataclass

from fpl_companion.data.formatting import team_short_name
from fpl_companion.data.models import (
    Fixture,
    PlannedTransfer,
    Player,
    Position,
    Team,
    TopPick,
    TransferPlan,
)

logger = logging.getLogger(__name__)

NEUTRAL_DIFFICULTY = 3.0
EASY_TEAM_COUNT = 6
HARD_TEAM_COUNT = 4

# Picks kept per position from easy-fixture teams
PICKS_PER_POSITION = {
    Position.GK: 3,
    Position.DEF: 5,
    Position.MID: 5,
    Position.FWD: 4,
}

EXTRA_TRANSFERS_WITH_HITS = 2


@dataclass
class ScoredPlayer:
    """A player with their planner score."""

    player: Player
    score: float
    fixture_difficulty: float
    minutes_certainty: int


def team_fixture_difficulty(
    teams: list[Team],
    fixtures: list[Fixture],
    current_gameweek: int,
    horizon: int,
) -> dict[int, float]:
    """
    Average FDR for each team over [current_gameweek, current_gameweek + horizon).

    Teams without fixtures in the window get a neutral 3.
    """
    window = [
        f
        for f in fixtures
        if f.gameweek is not None
        and current_gameweek <= f.gameweek < current_gameweek + horizon
    ]

    difficulties = {}
    for team in teams:
        team_fixtures = [f for f in window if f.involves(team.id)]
        if team_fixtures:
            difficulties[team.id] = sum(
                f.difficulty_for(team.id) for f in team_fixtures
            ) / len(team_fixtures)
        else:
            difficulties[team.id] = NEUTRAL_DIFFICULTY

    return difficulties


def minutes_certainty(player: Player) -> int:
    """Coarse 30/60/90 minutes certainty from season minutes."""
    if player.minutes > 500:
        return 90
    if player.minutes > 200:
        return 60
    return 30


def score_players(
    players: list[Player],
    difficulties: dict[int, float],
    risk_appetite: int,
) -> list[ScoredPlayer]:
    """
    Score available players who have played this season, best first.

    score = form*10 + ppg*5 + (5 - fdr)*20 + differential bonus + minutes*0.3
    """
    scored = []
    for player in players:
        if not player.is_available or player.minutes <= 0:
            continue

        fdr = difficulties.get(player.team_id, NEUTRAL_DIFFICULTY)
        fixture_score = (5 - fdr) * 20

        differential_bonus = 0.0
        if risk_appetite > 50:
            differential_bonus = max(0.0, (100 - player.selected_by_percent) / 5)

        certainty = minutes_certainty(player)
        total = (
            player.form * 10
            + player.points_per_game * 5
            + fixture_score
            + differential_bonus
            + certainty * 0.3
        )
        scored.append(
            ScoredPlayer(
                player=player,
                score=total,
                fixture_difficulty=fdr,
                minutes_certainty=certainty,
            )
        )

    scored.sort(key=lambda s: s.score, reverse=True)
    return scored


def _strategy_text(
    *,
    horizon: int,
    free_transfers: int,
    allow_hits: bool,
    risk_appetite: int,
    current_gameweek: int,
    easy_names: list[str],
    hard_names: list[str],
    by_position: dict[Position, list[ScoredPlayer]],
    scored: list[ScoredPlayer],
    teams: list[Team],
) -> str:
    last_gw = current_gameweek + horizon - 1
    parts = []

    if free_transfers == 1 and not allow_hits:
        parts.append(
            f"For the next {horizon} gameweeks, consider banking your free transfer "
            "this week to have 2 FTs next gameweek."
        )
        parts.append(
            f"This allows you to make a double move at GW{current_gameweek + 1} "
            "targeting the fixture swing."
        )
    elif free_transfers >= 2:
        parts.append(
            f"With {free_transfers} free transfers, make your moves NOW before "
            f"GW{current_gameweek} deadline."
        )
        parts.append(
            f"Target players from {' and '.join(easy_names[:2])} who have favorable "
            f"fixtures through GW{last_gw}."
        )
    elif allow_hits:
        parts.append(
            "Taking a -4 hit can be worth it if the expected points gain exceeds 4 "
            "over your horizon."
        )
        if easy_names:
            parts.append(
                f"Consider a double transfer now: 1 free + 1 hit to capitalize on "
                f"{easy_names[0]}'s excellent run."
            )

    parts.append(
        f"\n\nPRIORITY TEAMS: {', '.join(easy_names)} have the easiest fixtures "
        f"through GW{last_gw}."
    )
    parts.append(f"AVOID: {', '.join(hard_names)} face tough opposition in this period.")

    top_mid = by_position[Position.MID][0] if by_position[Position.MID] else None
    top_fwd = by_position[Position.FWD][0] if by_position[Position.FWD] else None
    if top_mid:
        parts.append(
            f"\n\nKEY TARGET: {top_mid.player.web_name} "
            f"({team_short_name(teams, top_mid.player.team_id)}) - "
            f"Form: {top_mid.player.form}, "
            f"Fixture difficulty: {top_mid.fixture_difficulty:.1f}"
        )
    if top_fwd and (top_mid is None or top_fwd.player.id != top_mid.player.id):
        parts.append(
            f"FORWARD PICK: {top_fwd.player.web_name} "
            f"({team_short_name(teams, top_fwd.player.team_id)}) - "
            f"Form: {top_fwd.player.form}"
        )

    if risk_appetite > 70:
        differential = next(
            (
                s
                for s in scored
                if s.player.selected_by_percent < 10 and s.score > 50
            ),
            None,
        )
        if differential:
            parts.append(
                f"\n\nDIFFERENTIAL: {differential.player.web_name} "
                f"({differential.player.selected_by_percent:.1f}% owned) could be a "
                "rank-climbing pick."
            )

    return " ".join(parts)


def _top_pick(scored: ScoredPlayer, teams: list[Team]) -> TopPick:
    return TopPick(
        id=scored.player.id,
        name=scored.player.web_name,
        team=team_short_name(teams, scored.player.team_id),
        form=scored.player.form,
        price=scored.player.price / 10,
    )


def build_transfer_plan(
    players: list[Player],
    teams: list[Team],
    fixtures: list[Fixture],
    current_gameweek: int,
    *,
    horizon: int = 3,
    free_transfers: int = 1,
    risk_appetite: int = 50,
    allow_hits: bool = False,
    team_player_ids: list[int] | None = None,
) -> TransferPlan:
    """
    Build a fixture-driven transfer plan.

    Args:
        players: Every player in the game
        teams: All teams
        fixtures: All fixtures
        current_gameweek: Gameweek the horizon starts at
        horizon: Number of gameweeks to plan over
        free_transfers: Free transfers available now
        risk_appetite: 0-100; above 50 rewards low ownership
        allow_hits: Whether extra transfers at -4 are acceptable
        team_player_ids: Current squad, used as outgoing players in order

    Returns:
        TransferPlan with strategy text, transfers and top picks
    """
    team_player_ids = team_player_ids or []

    difficulties = team_fixture_difficulty(teams, fixtures, current_gameweek, horizon)
    ranked_teams = sorted(difficulties.items(), key=lambda item: item[1])
    easy_team_ids = [team_id for team_id, _ in ranked_teams[:EASY_TEAM_COUNT]]
    hard_team_ids = [team_id for team_id, _ in ranked_teams[-HARD_TEAM_COUNT:]]

    scored = score_players(players, difficulties, risk_appetite)

    by_position: dict[Position, list[ScoredPlayer]] = {}
    for position, limit in PICKS_PER_POSITION.items():
        by_position[position] = [
            s
            for s in scored
            if s.player.position == position and s.player.team_id in easy_team_ids
        ][:limit]

    candidates = (
        by_position[Position.MID][:2]
        + by_position[Position.FWD][:2]
        + by_position[Position.DEF][:2]
    )
    max_moves = free_transfers + (EXTRA_TRANSFERS_WITH_HITS if allow_hits else 0)

    transfers = []
    for index, candidate in enumerate(candidates[:max_moves]):
        player_out_id = (
            team_player_ids[index % len(team_player_ids)] if team_player_ids else 0
        )
        transfers.append(
            PlannedTransfer(
                player_out_id=player_out_id,
                player_in_id=candidate.player.id,
                gameweek=(
                    current_gameweek if index < free_transfers else current_gameweek + 1
                ),
            )
        )

    easy_names = [team_short_name(teams, tid) for tid in easy_team_ids][:4]
    hard_names = [team_short_name(teams, tid) for tid in hard_team_ids]

    strategy = _strategy_text(
        horizon=horizon,
        free_transfers=free_transfers,
        allow_hits=allow_hits,
        risk_appetite=risk_appetite,
        current_gameweek=current_gameweek,
        easy_names=easy_names,
        hard_names=hard_names,
        by_position=by_position,
        scored=scored,
        teams=teams,
    )

    logger.info(
        f"Built transfer plan GW{current_gameweek}-{current_gameweek + horizon - 1}: "
        f"{len(transfers)} transfers"
    )

    return TransferPlan(
        strategy=strategy,
        transfers=transfers,
        priority_teams=easy_names,
        avoid_teams=hard_names,
        current_gameweek=current_gameweek,
        horizon_end=current_gameweek + horizon - 1,
        top_picks={
            "midfielders": [_top_pick(s, teams) for s in by_position[Position.MID][:3]],
            "forwards": [_top_pick(s, teams) for s in by_position[Position.FWD][:3]],
            "defenders": [_top_pick(s, teams) for s in by_position[Position.DEF][:3]],
        },
    )
