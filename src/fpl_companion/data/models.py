"""
Pydantic data models for FPL Companion.

These models represent the core data structures for players, teams, fixtures,
gameweeks, manager picks, and the derived prediction/transfer records.
"""

from datetime import datetime
from enum import IntEnum, StrEnum

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel


class Position(IntEnum):
    """Player positions in FPL (matches FPL element_type)."""

    GK = 1
    DEF = 2
    MID = 3
    FWD = 4


class PlayerStatus(StrEnum):
    """Player availability status."""

    AVAILABLE = "a"
    DOUBTFUL = "d"
    INJURED = "i"
    SUSPENDED = "s"
    UNAVAILABLE = "u"
    NOT_AVAILABLE = "n"


class Confidence(StrEnum):
    """Confidence label attached to a points prediction."""

    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class CamelModel(BaseModel):
    """Base for response payloads exposed to the presentation layer in camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# Core Data Models
# =============================================================================


class Player(BaseModel):
    """Represents a Premier League player in FPL."""

    id: int = Field(description="FPL element ID")
    code: int = Field(default=0, description="Photo code")
    first_name: str = Field(default="")
    second_name: str = Field(default="")
    web_name: str = Field(description="Short name shown in FPL")
    team_id: int = Field(description="Premier League team ID")
    position: Position = Field(description="Playing position")
    price: int = Field(ge=0, description="Current price in tenths (e.g., 105 = £10.5m)")
    status: PlayerStatus = Field(
        default=PlayerStatus.AVAILABLE, description="Availability status"
    )
    news: str = Field(default="", description="Injury/suspension news")
    chance_of_playing_this_round: int | None = Field(
        default=None, description="Chance of playing this round (0-100)"
    )
    chance_of_playing_next_round: int | None = Field(
        default=None, description="Chance of playing next round (0-100)"
    )

    # Stats
    total_points: int = Field(default=0, description="Total FPL points this season")
    points_per_game: float = Field(default=0.0, description="Average points per game")
    form: float = Field(default=0.0, description="Recent form rating")
    selected_by_percent: float = Field(default=0.0, description="Ownership percentage")
    ict_index: float = Field(default=0.0, description="ICT index score")
    minutes: int = Field(default=0)
    cost_change_event: int = Field(default=0, description="Price change this GW (tenths)")

    goals_scored: int = Field(default=0)
    assists: int = Field(default=0)
    clean_sheets: int = Field(default=0)
    goals_conceded: int = Field(default=0)
    yellow_cards: int = Field(default=0)
    red_cards: int = Field(default=0)
    saves: int = Field(default=0)
    bonus: int = Field(default=0)

    @computed_field
    @property
    def is_available(self) -> bool:
        """Check if player is likely available to play."""
        return self.status in (PlayerStatus.AVAILABLE, PlayerStatus.DOUBTFUL)

    @computed_field
    @property
    def position_name(self) -> str:
        """Short position name (GK, DEF, MID, FWD)."""
        return self.position.name

    @property
    def display_price(self) -> str:
        """Price formatted as £x.ym."""
        return f"£{self.price / 10:.1f}m"

    @property
    def value_metric(self) -> float:
        """Total points per million spent."""
        if self.price == 0:
            return 0.0
        return self.total_points / self.price * 10

    @property
    def form_momentum(self) -> float:
        """Recent form minus season average; positive means improving."""
        return self.form - self.points_per_game


class Team(BaseModel):
    """Represents a Premier League team."""

    id: int = Field(description="FPL team ID")
    name: str = Field(description="Full team name")
    short_name: str = Field(description="3-letter abbreviation")
    code: int = Field(default=0, description="Badge code")
    strength_overall_home: int = Field(default=0)
    strength_overall_away: int = Field(default=0)
    strength_attack_home: int = Field(default=0)
    strength_attack_away: int = Field(default=0)
    strength_defence_home: int = Field(default=0)
    strength_defence_away: int = Field(default=0)


class Fixture(BaseModel):
    """Represents a Premier League fixture."""

    id: int = Field(description="Fixture ID")
    gameweek: int | None = Field(default=None, description="Gameweek, None if unscheduled")
    home_team_id: int = Field(description="Home team ID")
    away_team_id: int = Field(description="Away team ID")
    home_difficulty: int = Field(default=3, ge=1, le=5, description="FDR for home team")
    away_difficulty: int = Field(default=3, ge=1, le=5, description="FDR for away team")
    kickoff_time: datetime | None = Field(default=None, description="Match kickoff time")
    finished: bool = Field(default=False, description="Has the match finished")

    # Results (if finished)
    home_score: int | None = Field(default=None)
    away_score: int | None = Field(default=None)

    def involves(self, team_id: int) -> bool:
        """Check if a team plays in this fixture."""
        return team_id in (self.home_team_id, self.away_team_id)

    def is_home(self, team_id: int) -> bool:
        """Check if a team is the home side."""
        return self.home_team_id == team_id

    def difficulty_for(self, team_id: int) -> int:
        """FDR from the given team's side of the fixture."""
        return self.home_difficulty if self.is_home(team_id) else self.away_difficulty

    def opponent_of(self, team_id: int) -> int:
        """Opponent team ID for the given team."""
        return self.away_team_id if self.is_home(team_id) else self.home_team_id


class Gameweek(BaseModel):
    """Information about a specific gameweek."""

    id: int = Field(description="Gameweek number")
    name: str = Field(description="Display name (e.g., 'Gameweek 10')")
    deadline: datetime | None = Field(default=None, description="Transfer deadline")
    is_current: bool = Field(default=False)
    is_next: bool = Field(default=False)
    finished: bool = Field(default=False)


class PlayerHistory(BaseModel):
    """One match from a player's element-summary history."""

    round: int = Field(description="Gameweek of the match")
    total_points: int = Field(default=0)
    minutes: int = Field(default=0)
    opponent_team_id: int | None = Field(default=None)
    was_home: bool = Field(default=False)


class BootstrapSnapshot(BaseModel):
    """Processed bootstrap-static payload."""

    players: list[Player] = Field(default_factory=list)
    teams: list[Team] = Field(default_factory=list)
    gameweeks: list[Gameweek] = Field(default_factory=list)

    @property
    def current_gameweek(self) -> Gameweek | None:
        """The gameweek flagged current, if any."""
        return next((gw for gw in self.gameweeks if gw.is_current), None)

    @property
    def next_gameweek(self) -> Gameweek | None:
        """The gameweek flagged next, if any."""
        return next((gw for gw in self.gameweeks if gw.is_next), None)

    def player_by_id(self) -> dict[int, Player]:
        """Index players by ID."""
        return {p.id: p for p in self.players}


# =============================================================================
# Manager Models
# =============================================================================


class ManagerInfo(BaseModel):
    """Public manager entry."""

    id: int
    name: str = Field(default="", description="Team name")
    player_first_name: str = Field(default="")
    player_last_name: str = Field(default="")
    current_event: int | None = Field(default=None)
    summary_overall_points: int | None = Field(default=None)
    summary_overall_rank: int | None = Field(default=None)

    @property
    def manager_name(self) -> str:
        """Manager's full name."""
        return f"{self.player_first_name} {self.player_last_name}".strip()


class Pick(BaseModel):
    """A single squad slot in a manager's picks."""

    element: int = Field(description="Player element ID")
    position: int = Field(ge=1, le=15, description="Slot in squad (1-15)")
    multiplier: int = Field(default=1)
    is_captain: bool = Field(default=False)
    is_vice_captain: bool = Field(default=False)


class EntryHistory(BaseModel):
    """Manager's gameweek summary attached to picks."""

    event: int = Field(default=0)
    points: int = Field(default=0)
    total_points: int = Field(default=0)
    bank: int = Field(default=0, description="Money in bank (tenths)")
    value: int = Field(default=0, description="Squad value (tenths)")
    event_transfers: int = Field(default=0)


class EntryPicks(BaseModel):
    """Manager's picks for one gameweek."""

    picks: list[Pick] = Field(default_factory=list)
    entry_history: EntryHistory = Field(default_factory=EntryHistory)
    active_chip: str | None = Field(default=None)

    @property
    def captain_id(self) -> int | None:
        return next((p.element for p in self.picks if p.is_captain), None)

    @property
    def vice_captain_id(self) -> int | None:
        return next((p.element for p in self.picks if p.is_vice_captain), None)


class TeamSearchResult(CamelModel):
    """A team found in league standings."""

    team_id: int
    team_name: str
    manager_name: str
    rank: int | None = None
    total_points: int | None = None


# =============================================================================
# Derived Models (recomputed on demand, never stored)
# =============================================================================


class Prediction(BaseModel):
    """Expected points for a player against one fixture."""

    player_id: int
    predicted_points: int
    confidence: Confidence
    form: float = Field(ge=0, le=10)
    fixture_difficulty: float = Field(ge=0, le=10)
    home_away: float = Field(ge=0, le=10)
    minutes_certainty: float = Field(ge=0, le=10)
    venue: str = Field(default="home", description="'home' or 'away'")


class GameweekPrediction(BaseModel):
    """Prediction tagged with its gameweek."""

    gameweek: int
    prediction: Prediction


class DifferentialPick(BaseModel):
    """Prediction for a low-ownership player."""

    prediction: Prediction
    ownership: float
    differential_score: float

    @property
    def combined_score(self) -> float:
        """Ranking key: 70% predicted points, 30% differential score."""
        return self.prediction.predicted_points * 0.7 + self.differential_score * 0.3


class TransferMetrics(BaseModel):
    """Display sub-metrics of a transfer suggestion (each 0-100)."""

    base: float
    minutes: float
    fixture: float
    form: float


class TransferSuggestion(BaseModel):
    """An outgoing/incoming player pairing with its expected gain."""

    player_out: Player
    player_in: Player
    expected_gain: float
    metrics: TransferMetrics


class PlannedTransfer(CamelModel):
    """A concrete move from the heuristic planner."""

    player_out_id: int
    player_in_id: int
    gameweek: int


class TopPick(BaseModel):
    """Summary of a recommended player."""

    id: int
    name: str
    team: str
    form: float
    price: float


class TransferPlan(CamelModel):
    """Fixture-driven transfer plan for a planning horizon."""

    strategy: str
    transfers: list[PlannedTransfer] = Field(default_factory=list)
    priority_teams: list[str] = Field(default_factory=list)
    avoid_teams: list[str] = Field(default_factory=list)
    current_gameweek: int
    horizon_end: int
    top_picks: dict[str, list[TopPick]] = Field(default_factory=dict)
