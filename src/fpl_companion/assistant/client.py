"""
LLM assistant client.

Thin async wrapper over any OpenAI-compatible chat completions endpoint
(Groq by default). Each operation builds a data-grounded prompt, sends it
with the fixed system prompt and returns free text.
"""

import logging
from typing import Any, Literal

from openai import AsyncOpenAI, OpenAIError
from pydantic import BaseModel

from ..data.models import Fixture, Player, Team
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
)

logger = logging.getLogger(__name__)


class AssistantError(Exception):
    """Raised when the LLM provider cannot produce a response."""


class ChatMessage(BaseModel):
    role: Literal["user", "assistant"]
    content: str


class AssistantClient:
    """
    Async client for LLM-backed FPL advice.

    Usage:
        assistant = AssistantClient.from_settings(settings.llm)
        text = await assistant.captain_analysis(players, teams, fixtures, gameweek=12)
    """

    MAX_TOKENS = {
        "team": 1200,
        "captain": 1000,
        "lineup": 800,
        "strategy": 1500,
        "watchlist": 800,
        "chat": 1000,
    }

    FALLBACKS = {
        "team": "Unable to generate team analysis.",
        "captain": "Unable to generate captain analysis.",
        "lineup": "Unable to generate lineup suggestion.",
        "strategy": "Unable to generate strategy. Please try again.",
        "watchlist": "Unable to generate players to watch.",
        "chat": "I couldn't generate a response. Please try again.",
    }

    def __init__(
        self,
        api_key: str,
        base_url: str,
        model: str,
        temperature: float = 0.7,
        client: Any = None,
    ):
        """
        Initialize the assistant.

        Args:
            api_key: Provider API key
            base_url: OpenAI-compatible endpoint
            model: Chat model name
            temperature: Sampling temperature
            client: Pre-built chat client (anything exposing chat.completions.create)
        """
        self.model = model
        self.temperature = temperature
        if client is None and api_key:
            client = AsyncOpenAI(api_key=api_key, base_url=base_url)
        self._client = client

    @classmethod
    def from_settings(cls, settings: Any) -> "AssistantClient":
        """Create an assistant from LLMSettings; a disabled assistant has no client."""
        api_key = settings.api_key.get_secret_value() if settings.enabled else ""
        return cls(
            api_key=api_key,
            base_url=settings.base_url,
            model=settings.model,
            temperature=settings.temperature,
        )

    @property
    def is_configured(self) -> bool:
        return self._client is not None

    async def _complete(
        self,
        kind: str,
        messages: list[dict[str, str]],
    ) -> str:
        if self._client is None:
            raise AssistantError("LLM is not configured. Set LLM_API_KEY to enable AI features.")

        logger.debug(f"Requesting {kind} completion from {self.model}")
        try:
            response = await self._client.chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=self.temperature,
                max_tokens=self.MAX_TOKENS[kind],
            )
        except OpenAIError as e:
            logger.error(f"LLM request failed ({kind}): {e}")
            raise AssistantError(f"Failed to generate {kind} response") from e

        choices = getattr(response, "choices", None) or []
        message = getattr(choices[0], "message", None) if choices else None
        content = getattr(message, "content", None) if message is not None else None
        if not content:
            logger.warning(f"Empty {kind} completion, using fallback text")
            return self.FALLBACKS[kind]
        return content

    async def _ask(self, kind: str, prompt: str) -> str:
        return await self._complete(
            kind,
            [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
        )

    # =========================================================================
    # Operations
    # =========================================================================

    async def team_analysis(
        self,
        players: list[Player],
        teams: list[Team],
        fixtures: list[Fixture],
        bank: int = 0,
        team_value: int = 0,
    ) -> str:
        prompt = team_analysis_prompt(players, teams, fixtures, bank, team_value)
        return await self._ask("team", prompt)

    async def captain_analysis(
        self,
        players: list[Player],
        teams: list[Team],
        fixtures: list[Fixture],
        gameweek: int = 1,
    ) -> str:
        prompt = captain_analysis_prompt(players, teams, fixtures, gameweek)
        return await self._ask("captain", prompt)

    async def lineup_suggestion(
        self,
        players: list[Player],
        teams: list[Team],
        fixtures: list[Fixture],
        gameweek: int = 1,
    ) -> str:
        prompt = lineup_prompt(players, teams, fixtures, gameweek)
        return await self._ask("lineup", prompt)

    async def transfer_strategy(
        self,
        players: list[Player],
        teams: list[Team],
        fixtures: list[Fixture],
        options: StrategyOptions | None = None,
    ) -> str:
        prompt = transfer_strategy_prompt(players, teams, fixtures, options or StrategyOptions())
        return await self._ask("strategy", prompt)

    async def players_to_watch(
        self,
        players: list[Player],
        teams: list[Team],
        fixtures: list[Fixture],
    ) -> str:
        prompt = players_to_watch_prompt(players, teams, fixtures)
        return await self._ask("watchlist", prompt)

    async def chat(
        self,
        messages: list[ChatMessage],
        team_context: TeamContext | None = None,
    ) -> str:
        """Free-form chat, optionally grounded in the user's squad."""
        api_messages = [{"role": "system", "content": chat_system_message(team_context)}]
        api_messages.extend({"role": m.role, "content": m.content} for m in messages)
        return await self._complete("chat", api_messages)

    async def close(self) -> None:
        if self._client is not None and hasattr(self._client, "close"):
            await self._client.close()
