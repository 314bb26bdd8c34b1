"""
Assistant Module for FPL Companion.

Prompt builders and the OpenAI-compatible client behind the AI features.
"""

from .client import AssistantClient, AssistantError, ChatMessage
from .prompts import (
    SYSTEM_PROMPT,
    StrategyOptions,
    TeamContext,
    captain_analysis_prompt,
    chat_system_message,
    lineup_prompt,
    players_to_watch_prompt,
    team_analysis_prompt,
    transfer_strategy_prompt,
    watchlist_candidates,
)

__all__ = [
    "AssistantClient",
    "AssistantError",
    "ChatMessage",
    "SYSTEM_PROMPT",
    "StrategyOptions",
    "TeamContext",
    "team_analysis_prompt",
    "captain_analysis_prompt",
    "lineup_prompt",
    "transfer_strategy_prompt",
    "players_to_watch_prompt",
    "watchlist_candidates",
    "chat_system_message",
]
