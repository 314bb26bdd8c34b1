"""Tests for out/in transfer suggestions."""

import pytest

from fpl_companion.data.models import PlayerStatus, Position
from fpl_companion.predictions.transfers import TransferScorer, suggest_transfers


@pytest.fixture
def outgoing(make_player):
    return make_player(id=1, team_id=1, price=60, points_per_game=3.0, form=2.0)


class TestCandidates:
    def test_same_position_affordable_only(self, make_player, outgoing):
        pool = [
            outgoing,
            make_player(id=2, team_id=2, price=70),
            make_player(id=3, team_id=2, price=71),
            make_player(id=4, team_id=2, price=50, position=Position.FWD),
        ]
        scorer = TransferScorer([outgoing], pool, bank=10)

        assert [p.id for p in scorer.candidates_for(outgoing)] == [2]

    def test_excludes_unavailable_statuses(self, make_player, outgoing):
        pool = [
            make_player(id=2, team_id=2, status=PlayerStatus.INJURED),
            make_player(id=3, team_id=2, status=PlayerStatus.SUSPENDED),
            make_player(id=4, team_id=2, status=PlayerStatus.DOUBTFUL),
        ]
        scorer = TransferScorer([outgoing], pool, bank=0)

        assert [p.id for p in scorer.candidates_for(outgoing)] == [4]

    def test_respects_club_limit_unless_same_club(self, make_player, outgoing):
        squad = [
            outgoing,
            make_player(id=20, team_id=3, position=Position.DEF),
            make_player(id=21, team_id=3, position=Position.DEF),
            make_player(id=22, team_id=3, position=Position.FWD),
        ]
        pool = [make_player(id=30, team_id=3, price=60)]

        assert TransferScorer(squad, pool, bank=0).candidates_for(outgoing) == []

        # Replacing one of the club's own players frees a slot
        squad_out = make_player(id=23, team_id=3, price=60)
        squad[3] = squad_out
        candidates = TransferScorer(squad, pool, bank=0).candidates_for(squad_out)
        assert [p.id for p in candidates] == [30]

    def test_capped_at_first_hundred_in_pool_order(self, make_player, outgoing):
        pool = [make_player(id=100 + i, team_id=2 + i % 10, price=50) for i in range(150)]
        candidates = TransferScorer([outgoing], pool, bank=0).candidates_for(outgoing)

        assert len(candidates) == 100
        assert candidates[0].id == 100
        assert candidates[-1].id == 199


class TestScoring:
    def test_expected_gain(self, make_player, outgoing):
        incoming = make_player(id=2, team_id=2, price=70, points_per_game=6.0, form=6.0)
        suggestion = TransferScorer([outgoing], [incoming], bank=10).score_pair(outgoing, incoming)

        assert suggestion.metrics.base == pytest.approx(80.0)
        assert suggestion.metrics.minutes == 80.0
        assert suggestion.metrics.fixture == 70.0
        assert suggestion.metrics.form == 100.0
        # (80*0.3 + 80*0.2 + 70*0.2 + 100*0.3) / 10
        assert suggestion.expected_gain == pytest.approx(8.4)

    def test_doubtful_player_gets_lower_minutes_metric(self, make_player, outgoing):
        incoming = make_player(id=2, team_id=2, status=PlayerStatus.DOUBTFUL)
        suggestion = TransferScorer([outgoing], [incoming], bank=0).score_pair(outgoing, incoming)

        assert suggestion.metrics.minutes == 40.0

    def test_metrics_floor_at_zero(self, make_player):
        star = make_player(id=1, points_per_game=12.0, form=9.0)
        weak = make_player(id=2, team_id=2, points_per_game=1.0, form=0.0)
        suggestion = TransferScorer([star], [weak], bank=0).score_pair(star, weak)

        assert suggestion.metrics.base == 0.0
        assert suggestion.metrics.form == 0.0


class TestSuggest:
    def test_drops_low_gain_pairs(self, make_player, outgoing):
        worse = make_player(id=2, team_id=2, price=50, points_per_game=0.0, form=0.0)
        assert suggest_transfers([outgoing], [worse], bank=0) == []

    def test_gain_of_exactly_five_is_dropped(self, make_player, outgoing, monkeypatch):
        pool = [make_player(id=2, team_id=2, price=50), make_player(id=3, team_id=3, price=50)]
        scorer = TransferScorer([outgoing], pool, bank=0)
        gains = {2: 5.0, 3: 5.01}
        score_pair = scorer.score_pair

        def fixed_gain(player_out, player_in):
            suggestion = score_pair(player_out, player_in)
            return suggestion.model_copy(update={"expected_gain": gains[player_in.id]})

        monkeypatch.setattr(scorer, "score_pair", fixed_gain)

        assert [s.player_in.id for s in scorer.suggest()] == [3]

    def test_ranked_and_capped(self, make_player, outgoing):
        pool = [
            make_player(id=10 + i, team_id=2 + i % 10, price=55, form=2.0 + i * 0.1)
            for i in range(15)
        ]
        suggestions = suggest_transfers([outgoing], pool, bank=0)

        assert len(suggestions) == 9
        gains = [s.expected_gain for s in suggestions]
        assert gains == sorted(gains, reverse=True)
        assert suggestions[0].player_in.id == 24

    def test_squad_players_never_suggested_in(self, full_squad):
        suggestions = suggest_transfers(full_squad, full_squad, bank=100)
        assert suggestions == []
