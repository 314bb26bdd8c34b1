"""Request bodies for the HTTP interface (camelCase on the wire)."""

from typing import Any

from pydantic import Field

from ..data.models import CamelModel

RawRecords = list[dict[str, Any]]


class AnalysisRequest(CamelModel):
    """Body of POST /api/ai-analysis; players, teams and fixtures are raw FPL records."""

    type: str | None = None
    players: RawRecords | None = None
    teams: RawRecords | None = None
    fixtures: RawRecords = Field(default_factory=list)
    all_players: RawRecords | None = None
    budget: int = 0
    team_value: int = 0
    gameweek: int = 1


class StrategyRequest(CamelModel):
    players: RawRecords | None = None
    teams: RawRecords | None = None
    fixtures: RawRecords = Field(default_factory=list)
    budget: int = 0
    free_transfers: int = 1
    horizon: int = 3
    risk_appetite: str = "medium"
    allow_hits: bool = False


class ChatTeamContext(CamelModel):
    players: RawRecords = Field(default_factory=list)
    teams: RawRecords = Field(default_factory=list)
    budget: int = 0
    gameweek: int = 1


class ChatRequest(CamelModel):
    messages: list[dict[str, Any]] | None = None
    team_context: ChatTeamContext | None = None


class PlanRequest(CamelModel):
    team_id: int | None = None
    horizon: int = Field(default=3, ge=1, le=10)
    free_transfers: int = Field(default=1, ge=0)
    risk_appetite: int = Field(default=50, ge=0, le=100)
    allow_hits: bool = False
    team_player_ids: list[int] = Field(default_factory=list)
    budget: int = 0


class SuggestionsRequest(CamelModel):
    """Squad to score transfers for: element IDs plus money in the bank (tenths)."""

    player_ids: list[int]
    bank: int = 0
