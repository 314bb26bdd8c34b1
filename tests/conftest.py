"""Shared fixtures: model factories and raw FPL API payloads."""

import pytest

from fpl_companion.data.models import Fixture, Player, PlayerStatus, Position, Team


def build_player(**overrides) -> Player:
    data = {
        "id": 1,
        "code": 100,
        "web_name": "Player",
        "team_id": 1,
        "position": Position.MID,
        "price": 60,
        "status": PlayerStatus.AVAILABLE,
        "form": 5.0,
        "points_per_game": 5.0,
        "selected_by_percent": 20.0,
        "minutes": 1000,
    }
    data.update(overrides)
    return Player(**data)


def build_team(**overrides) -> Team:
    data = {
        "id": 1,
        "name": "Arsenal",
        "short_name": "ARS",
        "strength_attack_home": 1200,
        "strength_attack_away": 1100,
        "strength_defence_home": 1250,
        "strength_defence_away": 1150,
    }
    data.update(overrides)
    return Team(**data)


def build_fixture(**overrides) -> Fixture:
    data = {
        "id": 1,
        "gameweek": 10,
        "home_team_id": 1,
        "away_team_id": 2,
        "home_difficulty": 2,
        "away_difficulty": 4,
    }
    data.update(overrides)
    return Fixture(**data)


@pytest.fixture
def make_player():
    return build_player


@pytest.fixture
def make_team():
    return build_team


@pytest.fixture
def make_fixture():
    return build_fixture


@pytest.fixture
def teams():
    """Four teams with distinct strengths."""
    return [
        build_team(id=1, name="Arsenal", short_name="ARS"),
        build_team(
            id=2,
            name="Brentford",
            short_name="BRE",
            strength_attack_home=1050,
            strength_attack_away=1000,
            strength_defence_home=1080,
            strength_defence_away=1020,
        ),
        build_team(id=3, name="Chelsea", short_name="CHE"),
        build_team(id=4, name="Everton", short_name="EVE"),
    ]


@pytest.fixture
def full_squad():
    """A valid 15-man squad (2/5/5/3), at most 3 per club, costing 830."""
    layout = [Position.GK] * 2 + [Position.DEF] * 5 + [Position.MID] * 5 + [Position.FWD] * 3
    return [
        build_player(
            id=index + 1,
            web_name=f"P{index + 1}",
            team_id=index // 3 + 1,
            position=position,
            price=50 if position in (Position.GK, Position.DEF) else 60,
        )
        for index, position in enumerate(layout)
    ]


# =============================================================================
# Raw API payloads
# =============================================================================


@pytest.fixture
def raw_bootstrap():
    return {
        "elements": [
            {
                "id": 10,
                "code": 223340,
                "first_name": "Bukayo",
                "second_name": "Saka",
                "web_name": "Saka",
                "team": 1,
                "element_type": 3,
                "now_cost": 100,
                "status": "a",
                "form": "7.5",
                "points_per_game": "6.1",
                "selected_by_percent": "45.2",
                "ict_index": "120.3",
                "total_points": 80,
                "minutes": 1500,
                "goals_scored": 6,
                "assists": 7,
            },
            {
                "id": 11,
                "web_name": "Mbeumo",
                "team": 2,
                "element_type": 3,
                "now_cost": 75,
                "status": "d",
                "form": "4.0",
                "points_per_game": "4.4",
                "selected_by_percent": "8.3",
                "minutes": 900,
                "chance_of_playing_this_round": 75,
            },
            {
                "id": 12,
                "web_name": "Broken",
                "team": 2,
                "element_type": 9,
                "now_cost": 45,
            },
        ],
        "teams": [
            {"id": 1, "name": "Arsenal", "short_name": "ARS", "strength_attack_home": 1300},
            {"id": 2, "name": "Brentford", "short_name": "BRE"},
        ],
        "events": [
            {"id": 9, "name": "Gameweek 9", "is_current": False, "finished": True},
            {"id": 10, "name": "Gameweek 10", "is_current": True, "deadline_time": "2024-11-02T11:00:00Z"},
            {"id": 11, "name": "Gameweek 11", "is_next": True},
        ],
    }


@pytest.fixture
def raw_fixtures():
    return [
        {
            "id": 1,
            "event": 10,
            "team_h": 1,
            "team_a": 2,
            "team_h_difficulty": 2,
            "team_a_difficulty": 4,
            "kickoff_time": "2024-11-02T15:00:00Z",
            "finished": False,
        },
        {
            "id": 2,
            "event": None,
            "team_h": 2,
            "team_a": 1,
            "team_h_difficulty": 4,
            "team_a_difficulty": 3,
        },
        {"id": 3, "event": 9, "team_h": 2, "team_a": 1, "finished": True,
         "team_h_score": 1, "team_a_score": 3},
    ]
