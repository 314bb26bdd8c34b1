"""
User squad state.

An explicitly owned squad object. Every mutation is validated before it is
applied; failures leave the squad untouched and come back as a
MutationResult with a human-readable reason (also kept in `error` for the
interface to display).
"""

import logging
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, Field

from ..data.models import EntryPicks, ManagerInfo, Player, Position
from .rules import (
    BUDGET_CEILING,
    DEFAULT_FORMATION,
    MAX_PER_TEAM,
    POSITION_LIMITS,
    SQUAD_SIZE,
    VALID_FORMATIONS,
    is_squad_complete,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MutationResult:
    """Outcome of a squad mutation."""

    ok: bool
    reason: str | None = None

    def __bool__(self) -> bool:
        return self.ok


OK = MutationResult(ok=True)


def _rejected(reason: str) -> MutationResult:
    return MutationResult(ok=False, reason=reason)


class SquadState(BaseModel):
    """The user's squad, captaincy, formation and budget."""

    team_id: int | None = Field(default=None, description="FPL manager ID if loaded")
    team_name: str = Field(default="")
    manager_name: str = Field(default="")
    players: list[Player] = Field(default_factory=list)
    formation: str = Field(default=DEFAULT_FORMATION)
    bank: int = Field(default=BUDGET_CEILING, description="Money in bank (tenths)")
    team_value: int = Field(default=0, description="Sum of member prices (tenths)")
    captain: int | None = Field(default=None)
    vice_captain: int | None = Field(default=None)
    error: str | None = Field(default=None, description="Last rejection reason")

    # =========================================================================
    # Queries
    # =========================================================================

    def has_player(self, player_id: int) -> bool:
        return any(p.id == player_id for p in self.players)

    def position_count(self, position: Position) -> int:
        """Count squad players in a position."""
        return sum(1 for p in self.players if p.position == position)

    def team_player_count(self, team_id: int) -> int:
        """Count squad players from one club."""
        return sum(1 for p in self.players if p.team_id == team_id)

    def remaining_budget(self, budget_ceiling: int = BUDGET_CEILING) -> int:
        """Bank plus unspent ceiling (tenths)."""
        return self.bank + (budget_ceiling - self.team_value)

    @property
    def is_complete(self) -> bool:
        return is_squad_complete(self.players)

    def can_add_player(self, player: Player) -> MutationResult:
        """Check whether a player could join the squad, without changing it."""
        if len(self.players) >= SQUAD_SIZE:
            return _rejected(f"Squad is full ({SQUAD_SIZE} players maximum)")

        if self.has_player(player.id):
            return _rejected("Player already in team")

        limit = POSITION_LIMITS[player.position]
        if self.position_count(player.position) >= limit:
            return _rejected(f"Maximum {limit} {player.position.name} allowed")

        if self.team_player_count(player.team_id) >= MAX_PER_TEAM:
            return _rejected(f"Maximum {MAX_PER_TEAM} players from same team allowed")

        spending_limit = self.bank + self.team_value
        if self.team_value + player.price > spending_limit:
            return _rejected("Insufficient budget")

        return OK

    # =========================================================================
    # Mutations
    # =========================================================================

    def _record(self, result: MutationResult) -> MutationResult:
        self.error = result.reason
        if not result.ok:
            logger.debug(f"Squad mutation rejected: {result.reason}")
        return result

    def _recompute_value(self) -> None:
        self.team_value = sum(p.price for p in self.players)

    def add_player(self, player: Player) -> MutationResult:
        """Add a player if every squad rule allows it."""
        result = self.can_add_player(player)
        if result.ok:
            self.players = [*self.players, player]
            self._recompute_value()
        return self._record(result)

    def remove_player(self, player_id: int) -> MutationResult:
        """Remove a player, clearing any captaincy they held."""
        if not self.has_player(player_id):
            return self._record(_rejected("Player not in team"))

        self.players = [p for p in self.players if p.id != player_id]
        self._recompute_value()
        if self.captain == player_id:
            self.captain = None
        if self.vice_captain == player_id:
            self.vice_captain = None
        return self._record(OK)

    def set_captain(self, player_id: int) -> MutationResult:
        """Make a squad member captain; a vice-captain promoted loses the vice role."""
        if not self.has_player(player_id):
            return self._record(_rejected("Player not in team"))

        self.captain = player_id
        if self.vice_captain == player_id:
            self.vice_captain = None
        return self._record(OK)

    def set_vice_captain(self, player_id: int) -> MutationResult:
        """Make a squad member vice-captain."""
        if not self.has_player(player_id):
            return self._record(_rejected("Player not in team"))

        if self.captain == player_id:
            return self._record(_rejected("Captain cannot be vice-captain"))

        self.vice_captain = player_id
        return self._record(OK)

    def set_formation(self, formation: str) -> MutationResult:
        if formation not in VALID_FORMATIONS:
            return self._record(_rejected(f"Invalid formation: {formation}"))

        self.formation = formation
        return self._record(OK)

    def update_budget(self, amount: int) -> MutationResult:
        """Set money in the bank (tenths)."""
        if amount < 0:
            return self._record(_rejected("Budget cannot be negative"))

        self.bank = amount
        return self._record(OK)

    def load_from_picks(
        self,
        manager: ManagerInfo,
        picks: EntryPicks,
        pool: list[Player],
    ) -> MutationResult:
        """
        Replace the squad with a manager's current picks.

        Picks that don't match a player in the pool are dropped.
        """
        by_id = {p.id: p for p in pool}
        squad_players = [by_id[pick.element] for pick in picks.picks if pick.element in by_id]

        missing = len(picks.picks) - len(squad_players)
        if missing:
            logger.warning(f"{missing} picks not found in player pool")

        self.team_id = manager.id
        self.team_name = manager.name
        self.manager_name = manager.manager_name
        self.players = squad_players
        # Armbands only stick to players that made it into the squad
        self.captain = picks.captain_id if picks.captain_id in by_id else None
        self.vice_captain = picks.vice_captain_id if picks.vice_captain_id in by_id else None
        self.bank = picks.entry_history.bank
        self._recompute_value()

        logger.info(f"Loaded {len(squad_players)} players for team {manager.id}")
        return self._record(OK)

    def reset(self) -> None:
        """Clear every field back to the empty initial state."""
        initial = SquadState()
        for name in type(self).model_fields:
            setattr(self, name, getattr(initial, name))

    def reset_error(self) -> None:
        self.error = None

    # =========================================================================
    # Persistence
    # =========================================================================

    def snapshot(self) -> dict[str, Any]:
        """The persisted subset of the state (everything except `error`)."""
        return self.model_dump(mode="json", exclude={"error"})

    @classmethod
    def from_snapshot(cls, data: dict[str, Any]) -> "SquadState":
        return cls.model_validate(data)
