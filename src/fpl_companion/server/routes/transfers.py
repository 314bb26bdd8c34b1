"""Heuristic (non-LLM) transfer endpoints."""

import logging

from fastapi import APIRouter, Depends

from ...api.cache import CachedFPLClient
from ...api.client import FPLAPIError
from ...data.processors import process_bootstrap_static, process_fixtures
from ...predictions.planner import build_transfer_plan
from ...predictions.transfers import suggest_transfers
from ..dependencies import error_response, get_fpl_client
from ..schemas import PlanRequest, SuggestionsRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/transfers", tags=["transfers"])


@router.post("/plan")
async def transfer_plan(
    body: PlanRequest,
    client: CachedFPLClient = Depends(get_fpl_client),
):
    """Fixture-driven plan over the requested horizon."""
    try:
        snapshot = process_bootstrap_static(await client.get_bootstrap_static())
    except FPLAPIError as e:
        logger.error(f"Error generating transfer plan: {e}")
        return error_response("Failed to generate transfer plan", 500)

    # The plan still works from neutral difficulties without fixtures
    try:
        fixtures = process_fixtures(await client.get_fixtures())
    except FPLAPIError as e:
        logger.warning(f"Fixtures unavailable for transfer plan: {e}")
        fixtures = []

    current = snapshot.current_gameweek
    plan = build_transfer_plan(
        snapshot.players,
        snapshot.teams,
        fixtures,
        current.id if current else 1,
        horizon=body.horizon,
        free_transfers=body.free_transfers,
        risk_appetite=body.risk_appetite,
        allow_hits=body.allow_hits,
        team_player_ids=body.team_player_ids,
    )
    return plan.model_dump(by_alias=True)


@router.post("/suggestions")
async def transfer_suggestions(
    body: SuggestionsRequest,
    client: CachedFPLClient = Depends(get_fpl_client),
):
    """Ranked out/in pairs for a squad given by element IDs."""
    try:
        snapshot = process_bootstrap_static(await client.get_bootstrap_static())
    except FPLAPIError as e:
        logger.error(f"Error generating transfer suggestions: {e}")
        return error_response("Failed to generate transfer suggestions", 500)

    by_id = snapshot.player_by_id()
    squad = [by_id[pid] for pid in body.player_ids if pid in by_id]
    suggestions = suggest_transfers(squad, snapshot.players, body.bank)

    return {
        "suggestions": [
            {
                "playerOut": {"id": s.player_out.id, "name": s.player_out.web_name},
                "playerIn": {"id": s.player_in.id, "name": s.player_in.web_name},
                "expectedGain": round(s.expected_gain, 2),
                "metrics": s.metrics.model_dump(),
            }
            for s in suggestions
        ]
    }
