"""Tests for the fixture-driven transfer planner."""

import pytest

from fpl_companion.data.models import PlayerStatus, Position
from fpl_companion.predictions.planner import (
    build_transfer_plan,
    minutes_certainty,
    score_players,
    team_fixture_difficulty,
)


@pytest.fixture
def league(make_team):
    return [make_team(id=i, name=f"Team {i}", short_name=f"T{i}") for i in range(1, 11)]


@pytest.fixture
def gw10_fixtures(make_fixture):
    # Team FDRs: 1:1, 3:2, 5:2, 7:3, 8:3, 9:3, 6:4, 10:4, 2:5, 4:5
    pairs = [(1, 2, 1, 5), (3, 4, 2, 5), (5, 6, 2, 4), (7, 8, 3, 3), (9, 10, 3, 4)]
    return [
        make_fixture(
            id=index,
            gameweek=10,
            home_team_id=home,
            away_team_id=away,
            home_difficulty=hd,
            away_difficulty=ad,
        )
        for index, (home, away, hd, ad) in enumerate(pairs, 1)
    ]


@pytest.fixture
def pool(make_player):
    return [
        make_player(id=101, web_name="Mid One", team_id=1, form=6.0, points_per_game=6.0),
        make_player(id=102, web_name="Mid Three", team_id=3, form=4.0, points_per_game=4.0),
        make_player(id=103, web_name="Mid Two", team_id=2, form=9.0, points_per_game=8.0),
        make_player(
            id=201,
            web_name="Fwd Five",
            team_id=5,
            position=Position.FWD,
            selected_by_percent=5.0,
        ),
        make_player(id=301, web_name="Def Seven", team_id=7, position=Position.DEF, form=3.0),
        make_player(id=401, web_name="Gk Eight", team_id=8, position=Position.GK),
        make_player(id=501, web_name="Injured", team_id=1, status=PlayerStatus.INJURED),
    ]


class TestTeamFixtureDifficulty:
    def test_average_over_horizon(self, make_fixture, make_team, teams):
        fixtures = [
            make_fixture(id=1, gameweek=10, home_difficulty=2, away_difficulty=4),
            make_fixture(id=2, gameweek=11, home_team_id=2, away_team_id=1,
                         home_difficulty=4, away_difficulty=2),
            make_fixture(id=3, gameweek=10, home_team_id=3, away_team_id=4,
                         home_difficulty=3, away_difficulty=3),
            make_fixture(id=4, gameweek=13, home_difficulty=5, away_difficulty=5),
            make_fixture(id=5, gameweek=None, home_difficulty=5, away_difficulty=5),
        ]
        all_teams = teams + [make_team(id=5, short_name="FUL")]

        difficulties = team_fixture_difficulty(all_teams, fixtures, 10, 3)

        assert difficulties == {1: 2.0, 2: 4.0, 3: 3.0, 4: 3.0, 5: 3.0}


class TestScorePlayers:
    def test_score_formula(self, make_player):
        player = make_player(team_id=1, form=5.0, points_per_game=5.0, minutes=1000)
        scored = score_players([player], {1: 2.0}, risk_appetite=50)

        # 5*10 + 5*5 + (5-2)*20 + 90*0.3
        assert scored[0].score == pytest.approx(162.0)
        assert scored[0].minutes_certainty == 90

    def test_differential_bonus_above_fifty_risk(self, make_player):
        player = make_player(team_id=1, form=5.0, points_per_game=5.0, selected_by_percent=20.0)
        scored = score_players([player], {1: 2.0}, risk_appetite=80)

        assert scored[0].score == pytest.approx(178.0)

    def test_skips_unavailable_and_unused(self, make_player):
        players = [
            make_player(id=1, status=PlayerStatus.INJURED),
            make_player(id=2, minutes=0),
            make_player(id=3, status=PlayerStatus.DOUBTFUL),
        ]
        assert [s.player.id for s in score_players(players, {}, 50)] == [3]

    def test_unknown_team_is_neutral(self, make_player):
        scored = score_players([make_player(team_id=99)], {}, 50)
        assert scored[0].fixture_difficulty == 3.0

    @pytest.mark.parametrize("minutes,expected", [(600, 90), (500, 60), (201, 60), (200, 30)])
    def test_minutes_certainty_bands(self, make_player, minutes, expected):
        assert minutes_certainty(make_player(minutes=minutes)) == expected


class TestBuildTransferPlan:
    def test_priority_and_avoid_teams(self, pool, league, gw10_fixtures):
        plan = build_transfer_plan(pool, league, gw10_fixtures, 10)

        assert plan.priority_teams == ["T1", "T3", "T5", "T7"]
        assert plan.avoid_teams == ["T6", "T10", "T2", "T4"]
        assert plan.current_gameweek == 10
        assert plan.horizon_end == 12

    def test_single_free_transfer(self, pool, league, gw10_fixtures):
        plan = build_transfer_plan(
            pool, league, gw10_fixtures, 10, team_player_ids=[7, 8, 9]
        )

        assert len(plan.transfers) == 1
        move = plan.transfers[0]
        assert (move.player_out_id, move.player_in_id, move.gameweek) == (7, 101, 10)
        assert "banking your free transfer" in plan.strategy
        assert "KEY TARGET: Mid One (T1)" in plan.strategy

    def test_hits_add_two_moves_next_gameweek(self, pool, league, gw10_fixtures):
        plan = build_transfer_plan(
            pool, league, gw10_fixtures, 10, allow_hits=True, team_player_ids=[7, 8]
        )

        assert [(t.player_out_id, t.player_in_id, t.gameweek) for t in plan.transfers] == [
            (7, 101, 10),
            (8, 102, 11),
            (7, 201, 11),
        ]
        assert "-4 hit" in plan.strategy

    def test_without_squad_outgoing_is_zero(self, pool, league, gw10_fixtures):
        plan = build_transfer_plan(pool, league, gw10_fixtures, 10, free_transfers=2)

        assert [t.player_out_id for t in plan.transfers] == [0, 0]
        assert "With 2 free transfers" in plan.strategy

    def test_hard_fixture_players_are_not_picked(self, pool, league, gw10_fixtures):
        plan = build_transfer_plan(pool, league, gw10_fixtures, 10, free_transfers=6)

        picked = {t.player_in_id for t in plan.transfers}
        assert picked == {101, 102, 201, 301}
        assert [p.id for p in plan.top_picks["midfielders"]] == [101, 102]

    def test_top_picks_shape(self, pool, league, gw10_fixtures):
        plan = build_transfer_plan(pool, league, gw10_fixtures, 10)

        forward = plan.top_picks["forwards"][0]
        assert forward.name == "Fwd Five"
        assert forward.team == "T5"
        assert forward.price == 6.0
        assert set(plan.top_picks) == {"midfielders", "forwards", "defenders"}

    def test_differential_mentioned_for_high_risk(self, pool, league, gw10_fixtures):
        plan = build_transfer_plan(pool, league, gw10_fixtures, 10, risk_appetite=80)
        assert "DIFFERENTIAL: Fwd Five (5.0% owned)" in plan.strategy

    def test_camel_case_payload(self, pool, league, gw10_fixtures):
        payload = build_transfer_plan(pool, league, gw10_fixtures, 10).model_dump(by_alias=True)

        assert {"priorityTeams", "avoidTeams", "currentGameweek", "horizonEnd", "topPicks"} <= set(payload)
        assert "playerInId" in payload["transfers"][0]
