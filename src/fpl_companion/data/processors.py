"""
Data Processors for FPL API Responses.

Transforms raw API JSON responses into typed Pydantic models.
Handles the API's string-encoded numbers and skips malformed rows.
"""

import logging
from datetime import datetime
from typing import Any

from pydantic import ValidationError

from .models import (
    BootstrapSnapshot,
    EntryPicks,
    Fixture,
    Gameweek,
    ManagerInfo,
    Player,
    PlayerHistory,
    PlayerStatus,
    Position,
    Team,
    TeamSearchResult,
)

logger = logging.getLogger(__name__)


def _to_float(value: Any) -> float:
    """Parse the API's numeric strings ("5.2", "", None) to float."""
    try:
        return float(value or 0)
    except (TypeError, ValueError):
        return 0.0


def _parse_datetime(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


# =============================================================================
# Bootstrap Static Processing
# =============================================================================


def process_players(elements: list[dict[str, Any]]) -> list[Player]:
    """
    Process player data from bootstrap-static 'elements' array.

    Args:
        elements: List of player dictionaries from API

    Returns:
        List of Player models
    """
    players = []

    for elem in elements:
        try:
            try:
                status = PlayerStatus(elem.get("status", "a"))
            except ValueError:
                status = PlayerStatus.UNAVAILABLE

            player = Player(
                id=elem["id"],
                code=elem.get("code", 0) or 0,
                first_name=elem.get("first_name", "") or "",
                second_name=elem.get("second_name", "") or "",
                web_name=elem.get("web_name", ""),
                team_id=elem.get("team", 0),
                position=Position(elem.get("element_type", 1)),
                price=elem.get("now_cost", 0),
                status=status,
                news=elem.get("news", "") or "",
                chance_of_playing_this_round=elem.get("chance_of_playing_this_round"),
                chance_of_playing_next_round=elem.get("chance_of_playing_next_round"),
                total_points=elem.get("total_points", 0) or 0,
                points_per_game=_to_float(elem.get("points_per_game")),
                form=_to_float(elem.get("form")),
                selected_by_percent=_to_float(elem.get("selected_by_percent")),
                ict_index=_to_float(elem.get("ict_index")),
                minutes=elem.get("minutes", 0) or 0,
                cost_change_event=elem.get("cost_change_event", 0) or 0,
                goals_scored=elem.get("goals_scored", 0) or 0,
                assists=elem.get("assists", 0) or 0,
                clean_sheets=elem.get("clean_sheets", 0) or 0,
                goals_conceded=elem.get("goals_conceded", 0) or 0,
                yellow_cards=elem.get("yellow_cards", 0) or 0,
                red_cards=elem.get("red_cards", 0) or 0,
                saves=elem.get("saves", 0) or 0,
                bonus=elem.get("bonus", 0) or 0,
            )
            players.append(player)

        except (KeyError, ValueError, ValidationError) as e:
            logger.warning(f"Failed to process player {elem.get('id')}: {e}")
            continue

    logger.info(f"Processed {len(players)} players")
    return players


def process_teams(teams_data: list[dict[str, Any]]) -> list[Team]:
    """Process team data from bootstrap-static 'teams' array."""
    teams = []

    for t in teams_data:
        try:
            teams.append(
                Team(
                    id=t["id"],
                    name=t.get("name", ""),
                    short_name=t.get("short_name", ""),
                    code=t.get("code", 0) or 0,
                    strength_overall_home=t.get("strength_overall_home", 0) or 0,
                    strength_overall_away=t.get("strength_overall_away", 0) or 0,
                    strength_attack_home=t.get("strength_attack_home", 0) or 0,
                    strength_attack_away=t.get("strength_attack_away", 0) or 0,
                    strength_defence_home=t.get("strength_defence_home", 0) or 0,
                    strength_defence_away=t.get("strength_defence_away", 0) or 0,
                )
            )
        except (KeyError, ValidationError) as e:
            logger.warning(f"Failed to process team {t.get('id')}: {e}")

    return teams


def process_gameweeks(events: list[dict[str, Any]]) -> list[Gameweek]:
    """Process gameweek data from bootstrap-static 'events' array."""
    gameweeks = []

    for event in events:
        try:
            gameweeks.append(
                Gameweek(
                    id=event["id"],
                    name=event.get("name", f"Gameweek {event['id']}"),
                    deadline=_parse_datetime(event.get("deadline_time")),
                    is_current=event.get("is_current", False),
                    is_next=event.get("is_next", False),
                    finished=event.get("finished", False),
                )
            )
        except (KeyError, ValidationError) as e:
            logger.warning(f"Failed to process gameweek {event.get('id')}: {e}")

    return gameweeks


def process_bootstrap_static(data: dict[str, Any]) -> BootstrapSnapshot:
    """
    Process complete bootstrap-static response.

    Args:
        data: Raw bootstrap-static JSON

    Returns:
        BootstrapSnapshot with players, teams and gameweeks
    """
    return BootstrapSnapshot(
        players=process_players(data.get("elements", [])),
        teams=process_teams(data.get("teams", [])),
        gameweeks=process_gameweeks(data.get("events", [])),
    )


# =============================================================================
# Fixtures Processing
# =============================================================================


def process_fixtures(fixtures_data: list[dict[str, Any]]) -> list[Fixture]:
    """
    Process fixtures from the fixtures endpoint.

    Unscheduled fixtures keep gameweek=None.
    """
    fixtures = []

    for f in fixtures_data:
        try:
            fixtures.append(
                Fixture(
                    id=f["id"],
                    gameweek=f.get("event"),
                    home_team_id=f["team_h"],
                    away_team_id=f["team_a"],
                    home_difficulty=f.get("team_h_difficulty", 3),
                    away_difficulty=f.get("team_a_difficulty", 3),
                    kickoff_time=_parse_datetime(f.get("kickoff_time")),
                    finished=f.get("finished", False),
                    home_score=f.get("team_h_score"),
                    away_score=f.get("team_a_score"),
                )
            )
        except (KeyError, ValidationError) as e:
            logger.warning(f"Failed to process fixture {f.get('id')}: {e}")
            continue

    return fixtures


def upcoming_fixtures_for_team(
    fixtures: list[Fixture],
    team_id: int,
    from_gameweek: int,
    count: int | None = None,
) -> list[Fixture]:
    """
    Get a team's unfinished, scheduled fixtures from a gameweek onwards.

    Args:
        fixtures: All fixtures
        team_id: Team to filter by
        from_gameweek: First gameweek to include
        count: Maximum number of fixtures to return

    Returns:
        Fixtures sorted by gameweek
    """
    upcoming = sorted(
        (
            f
            for f in fixtures
            if f.involves(team_id)
            and f.gameweek is not None
            and f.gameweek >= from_gameweek
            and not f.finished
        ),
        key=lambda f: f.gameweek,
    )
    return upcoming if count is None else upcoming[:count]


def next_fixture_for_team(
    fixtures: list[Fixture], team_id: int, from_gameweek: int
) -> Fixture | None:
    """The team's next unfinished fixture at or after a gameweek."""
    upcoming = upcoming_fixtures_for_team(fixtures, team_id, from_gameweek, count=1)
    return upcoming[0] if upcoming else None


# =============================================================================
# Player / Manager Processing
# =============================================================================


def process_history(summary: dict[str, Any]) -> list[PlayerHistory]:
    """Process the 'history' array of an element-summary response."""
    history = []

    for row in summary.get("history", []):
        try:
            history.append(
                PlayerHistory(
                    round=row["round"],
                    total_points=row.get("total_points", 0) or 0,
                    minutes=row.get("minutes", 0) or 0,
                    opponent_team_id=row.get("opponent_team"),
                    was_home=row.get("was_home", False),
                )
            )
        except (KeyError, ValidationError) as e:
            logger.warning(f"Failed to process history row: {e}")

    return sorted(history, key=lambda h: h.round)


def process_manager(data: dict[str, Any]) -> ManagerInfo:
    """Process an entry (manager) response."""
    return ManagerInfo.model_validate(data)


def process_entry_picks(data: dict[str, Any]) -> EntryPicks:
    """Process an entry picks response."""
    return EntryPicks.model_validate(data)


def process_league_search(entries: list[dict[str, Any]]) -> list[TeamSearchResult]:
    """Convert matching league standings rows into search results."""
    return [
        TeamSearchResult(
            team_id=entry["entry"],
            team_name=entry.get("entry_name", ""),
            manager_name=entry.get("player_name", ""),
            rank=entry.get("rank"),
            total_points=entry.get("total"),
        )
        for entry in entries
        if "entry" in entry
    ]
