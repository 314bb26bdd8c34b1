"""
Transfer Suggestion Module.

Pairs each squad player with affordable same-position replacements and ranks
the pairs by a weighted blend of form delta, points-per-game delta, and
availability.
"""

from collections import Counter

from fpl_companion.data.models import (
    Player,
    PlayerStatus,
    TransferMetrics,
    TransferSuggestion,
)
from fpl_companion.squad.rules import MAX_PER_TEAM


class TransferScorer:
    """
    Scores out/in transfer pairs for a squad.

    Every metric is on a 0-100 scale; expected gain is their weighted sum
    divided by 10.
    """

    MAX_CANDIDATES_PER_PLAYER = 100  # first matches in pool order, unsorted
    MAX_SUGGESTIONS = 9
    MIN_EXPECTED_GAIN = 5.0  # pairs at or below this are dropped

    # Constant until fixture data is wired into transfer scoring
    FIXTURE_PLACEHOLDER_SCORE = 70.0

    MINUTES_SCORE_AVAILABLE = 80.0
    MINUTES_SCORE_DOUBTFUL = 40.0

    WEIGHTS = {
        "base": 0.3,
        "minutes": 0.2,
        "fixture": 0.2,
        "form": 0.3,
    }

    ELIGIBLE_STATUSES = (PlayerStatus.AVAILABLE, PlayerStatus.DOUBTFUL)

    def __init__(self, squad: list[Player], pool: list[Player], bank: int):
        """
        Initialize scorer.

        Args:
            squad: Players currently in the squad
            pool: Every player in the game
            bank: Money in the bank (tenths)
        """
        self.squad = squad
        self.pool = pool
        self.bank = bank
        self._squad_ids = {p.id for p in squad}
        self._club_counts = Counter(p.team_id for p in squad)

    def candidates_for(self, player_out: Player) -> list[Player]:
        """Affordable, eligible same-position replacements for one player."""
        available_budget = self.bank + player_out.price
        candidates = []

        for player in self.pool:
            if player.position != player_out.position:
                continue
            if player.id in self._squad_ids:
                continue
            if player.price > available_budget:
                continue
            if (
                player.team_id != player_out.team_id
                and self._club_counts[player.team_id] >= MAX_PER_TEAM
            ):
                continue
            if player.status not in self.ELIGIBLE_STATUSES:
                continue

            candidates.append(player)
            if len(candidates) >= self.MAX_CANDIDATES_PER_PLAYER:
                break

        return candidates

    def score_pair(self, player_out: Player, player_in: Player) -> TransferSuggestion:
        """Score a single out/in pairing."""
        ppg_diff = player_in.points_per_game - player_out.points_per_game
        form_diff = player_in.form - player_out.form

        metrics = TransferMetrics(
            base=_clamp_percent(50 + ppg_diff * 10),
            minutes=(
                self.MINUTES_SCORE_AVAILABLE
                if player_in.status == PlayerStatus.AVAILABLE
                else self.MINUTES_SCORE_DOUBTFUL
            ),
            fixture=self.FIXTURE_PLACEHOLDER_SCORE,
            form=_clamp_percent(50 + form_diff * 20),
        )

        expected_gain = (
            metrics.base * self.WEIGHTS["base"]
            + metrics.minutes * self.WEIGHTS["minutes"]
            + metrics.fixture * self.WEIGHTS["fixture"]
            + metrics.form * self.WEIGHTS["form"]
        ) / 10

        return TransferSuggestion(
            player_out=player_out,
            player_in=player_in,
            expected_gain=expected_gain,
            metrics=metrics,
        )

    def suggest(self) -> list[TransferSuggestion]:
        """
        Generate ranked transfer suggestions.

        Returns:
            At most MAX_SUGGESTIONS pairs across all positions, best first
        """
        results = []
        for player_out in self.squad:
            for player_in in self.candidates_for(player_out):
                suggestion = self.score_pair(player_out, player_in)
                if suggestion.expected_gain > self.MIN_EXPECTED_GAIN:
                    results.append(suggestion)

        results.sort(key=lambda s: s.expected_gain, reverse=True)
        return results[: self.MAX_SUGGESTIONS]


def _clamp_percent(value: float) -> float:
    return min(100.0, max(0.0, value))


def suggest_transfers(
    squad: list[Player],
    pool: list[Player],
    bank: int,
) -> list[TransferSuggestion]:
    """
    Convenience function for ranked transfer suggestions.

    Args:
        squad: Players currently in the squad
        pool: Every player in the game
        bank: Money in the bank (tenths)

    Returns:
        Up to 9 suggestions with expected gain above 5, best first
    """
    return TransferScorer(squad, pool, bank).suggest()
