"""LLM-backed endpoints: analyses, transfer strategy and chat."""

import logging

from fastapi import APIRouter, Depends
from pydantic import ValidationError

from ...assistant.client import AssistantClient, AssistantError, ChatMessage
from ...assistant.prompts import StrategyOptions, TeamContext
from ...data.processors import process_fixtures, process_players, process_teams
from ..dependencies import error_response, get_assistant
from ..schemas import AnalysisRequest, ChatRequest, StrategyRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["ai"])

ANALYSIS_LABELS = {
    "team": "team analysis",
    "captain": "captain analysis",
    "lineup": "lineup suggestion",
}


@router.post("/ai-analysis")
async def ai_analysis(
    body: AnalysisRequest,
    assistant: AssistantClient = Depends(get_assistant),
):
    """Run one of the team, captain, lineup or watchlist analyses."""
    if not body.type:
        return error_response("Analysis type is required", 400)

    if body.type in ANALYSIS_LABELS and (not body.players or not body.teams):
        return error_response(
            f"Players and teams data required for {ANALYSIS_LABELS[body.type]}", 400
        )
    if body.type == "watchlist" and (not body.all_players or not body.teams):
        return error_response("All players and teams data required for watchlist", 400)
    if body.type not in ANALYSIS_LABELS and body.type != "watchlist":
        return error_response("Invalid analysis type", 400)

    teams = process_teams(body.teams or [])
    fixtures = process_fixtures(body.fixtures)

    try:
        if body.type == "team":
            result = await assistant.team_analysis(
                process_players(body.players), teams, fixtures, body.budget, body.team_value
            )
        elif body.type == "captain":
            result = await assistant.captain_analysis(
                process_players(body.players), teams, fixtures, body.gameweek
            )
        elif body.type == "lineup":
            result = await assistant.lineup_suggestion(
                process_players(body.players), teams, fixtures, body.gameweek
            )
        else:
            result = await assistant.players_to_watch(
                process_players(body.all_players), teams, fixtures
            )
    except AssistantError as e:
        logger.error(f"Error in AI analysis: {e}")
        return error_response("Failed to generate analysis. Please try again.", 500)

    return {"result": result}


@router.post("/ai-strategy")
async def ai_strategy(
    body: StrategyRequest,
    assistant: AssistantClient = Depends(get_assistant),
):
    if not body.players or not body.teams:
        return error_response("Missing required data", 400)

    options = StrategyOptions(
        bank=body.budget,
        free_transfers=body.free_transfers,
        horizon=body.horizon,
        risk_appetite=body.risk_appetite,
        allow_hits=body.allow_hits,
    )
    try:
        strategy = await assistant.transfer_strategy(
            process_players(body.players),
            process_teams(body.teams),
            process_fixtures(body.fixtures),
            options,
        )
    except AssistantError as e:
        logger.error(f"Error generating AI strategy: {e}")
        return error_response("Failed to generate strategy. Please try again.", 500)

    return {"strategy": strategy}


@router.post("/ai-chat")
async def ai_chat(
    body: ChatRequest,
    assistant: AssistantClient = Depends(get_assistant),
):
    """Free-form chat, grounded in the user's squad when a team context is sent."""
    if body.messages is None:
        return error_response("Messages array is required", 400)

    try:
        messages = [ChatMessage.model_validate(m) for m in body.messages]
    except ValidationError:
        return error_response("Messages must have a user or assistant role and content", 400)

    team_context = None
    if body.team_context is not None:
        team_context = TeamContext(
            players=process_players(body.team_context.players),
            teams=process_teams(body.team_context.teams),
            budget=body.team_context.budget,
            gameweek=body.team_context.gameweek,
        )

    try:
        response = await assistant.chat(messages, team_context)
    except AssistantError as e:
        logger.error(f"Error in AI chat: {e}")
        return error_response("Failed to get response. Please try again.", 500)

    return {"response": response}
