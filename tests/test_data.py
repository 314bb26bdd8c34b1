"""Tests for API response processing, models and display helpers."""

from datetime import timezone

import pytest

from fpl_companion.data import (
    PlayerStatus,
    Position,
    fixture_difficulty_rating,
    fixture_run,
    format_price,
    next_fixture_for_team,
    player_photo_url,
    position_full_name,
    position_name,
    process_bootstrap_static,
    process_fixtures,
    process_history,
    process_league_search,
    status_label,
    team_short_name,
    upcoming_fixtures_for_team,
)


class TestBootstrapProcessing:
    def test_players_parsed_from_strings(self, raw_bootstrap):
        snapshot = process_bootstrap_static(raw_bootstrap)
        saka = snapshot.player_by_id()[10]

        assert saka.position == Position.MID
        assert saka.price == 100
        assert saka.form == 7.5
        assert saka.selected_by_percent == 45.2
        assert saka.display_price == "£10.0m"
        assert saka.value_metric == pytest.approx(8.0)
        assert saka.form_momentum == pytest.approx(1.4)

    def test_malformed_player_skipped(self, raw_bootstrap):
        snapshot = process_bootstrap_static(raw_bootstrap)
        assert [p.id for p in snapshot.players] == [10, 11]

    def test_doubtful_player(self, raw_bootstrap):
        mbeumo = process_bootstrap_static(raw_bootstrap).player_by_id()[11]

        assert mbeumo.status == PlayerStatus.DOUBTFUL
        assert mbeumo.chance_of_playing_this_round == 75
        assert mbeumo.is_available

    def test_unknown_status_is_unavailable(self, raw_bootstrap):
        raw_bootstrap["elements"][0]["status"] = "z"
        saka = process_bootstrap_static(raw_bootstrap).player_by_id()[10]
        assert saka.status == PlayerStatus.UNAVAILABLE
        assert not saka.is_available

    def test_teams_default_missing_strengths(self, raw_bootstrap):
        teams = process_bootstrap_static(raw_bootstrap).teams

        assert teams[0].strength_attack_home == 1300
        assert teams[1].strength_attack_home == 0

    def test_gameweeks(self, raw_bootstrap):
        snapshot = process_bootstrap_static(raw_bootstrap)

        assert snapshot.current_gameweek.id == 10
        assert snapshot.next_gameweek.id == 11
        assert snapshot.current_gameweek.deadline.tzinfo == timezone.utc

    def test_empty_payload(self):
        snapshot = process_bootstrap_static({})
        assert snapshot.players == []
        assert snapshot.current_gameweek is None


class TestFixtureProcessing:
    def test_fixture_fields(self, raw_fixtures):
        fixtures = process_fixtures(raw_fixtures)
        first = fixtures[0]

        assert first.gameweek == 10
        assert first.difficulty_for(1) == 2
        assert first.difficulty_for(2) == 4
        assert first.opponent_of(2) == 1
        assert first.kickoff_time is not None

    def test_unscheduled_and_finished(self, raw_fixtures):
        fixtures = {f.id: f for f in process_fixtures(raw_fixtures)}

        assert fixtures[2].gameweek is None
        assert fixtures[2].kickoff_time is None
        assert fixtures[3].finished
        assert (fixtures[3].home_score, fixtures[3].away_score) == (1, 3)

    def test_upcoming_skips_finished_and_unscheduled(self, raw_fixtures):
        fixtures = process_fixtures(raw_fixtures)

        assert [f.id for f in upcoming_fixtures_for_team(fixtures, 1, 9)] == [1]
        assert next_fixture_for_team(fixtures, 2, 10).id == 1
        assert next_fixture_for_team(fixtures, 2, 11) is None

    def test_upcoming_sorted_and_limited(self, make_fixture):
        fixtures = [
            make_fixture(id=3, gameweek=12),
            make_fixture(id=1, gameweek=10),
            make_fixture(id=2, gameweek=11),
        ]
        upcoming = upcoming_fixtures_for_team(fixtures, 1, 10, count=2)
        assert [f.id for f in upcoming] == [1, 2]


class TestOtherProcessing:
    def test_history_sorted_by_round(self):
        summary = {
            "history": [
                {"round": 3, "total_points": 8, "was_home": True},
                {"round": 1, "total_points": 2},
                {"total_points": 5},
            ]
        }
        history = process_history(summary)

        assert [h.round for h in history] == [1, 3]
        assert history[1].was_home

    def test_league_search_results(self):
        entries = [
            {"entry": 7, "entry_name": "Klopp Kids", "player_name": "Ann Lee", "rank": 3, "total": 512},
            {"entry_name": "No id"},
        ]
        results = process_league_search(entries)

        assert len(results) == 1
        assert results[0].model_dump(by_alias=True) == {
            "teamId": 7,
            "teamName": "Klopp Kids",
            "managerName": "Ann Lee",
            "rank": 3,
            "totalPoints": 512,
        }


class TestFormatting:
    def test_format_price(self):
        assert format_price(45) == "£4.5m"
        assert format_price(130) == "£13.0m"

    def test_position_names(self):
        assert position_name(1) == "GK"
        assert position_name(9) == "UNKNOWN"
        assert position_full_name(2) == "Defender"
        assert position_full_name(0) == "Unknown"

    def test_status_label(self):
        assert status_label("d") == "Doubtful"
        assert status_label(PlayerStatus.SUSPENDED) == "Suspended"
        assert status_label("n") == "Unavailable"
        assert status_label("?") == "Unavailable"

    def test_difficulty_rating(self):
        assert fixture_difficulty_rating(2)["rating"] == "Easy"
        assert fixture_difficulty_rating(4)["color"] == "red"
        assert fixture_difficulty_rating(5)["rating"] == "Very Hard"
        assert fixture_difficulty_rating(9)["rating"] == "Very Hard"

    def test_team_short_name(self, teams):
        assert team_short_name(teams, 2) == "BRE"
        assert team_short_name(teams, 99) == "Unknown"
        assert team_short_name(teams, None) == "Unknown"

    def test_fixture_run(self):
        assert fixture_run([]) == 3.0
        assert fixture_run([2, 2, 2, 2, 2, 5]) == 2.0
        assert fixture_run([1, 5]) == 3.0

    def test_photo_url(self):
        assert player_photo_url(223340).endswith("/110x140/p223340.png")
