"""
Prompt builders for the LLM assistant.

Every builder is a pure function of structured players, teams and fixtures.
Prompts only ever list data that was passed in, and each one reminds the
model not to invent names or fixtures.
"""

from dataclasses import dataclass

from ..data.formatting import format_price, status_label, team_short_name
from ..data.models import Fixture, Player, Team

SYSTEM_PROMPT = """You are an expert Fantasy Premier League (FPL) analyst and strategist.

CRITICAL INSTRUCTIONS:
- You MUST ONLY use the player names, team names, fixtures, and data provided to you in the user's message
- DO NOT make up or invent any player names, team names, fixtures, or statistics
- DO NOT reference players, teams, or fixtures that are not explicitly provided in the data
- If you don't have specific data about something, say "Data not available" rather than making something up
- All player names, team names, and fixture information must come EXACTLY from the provided data
- Use ONLY the statistics, form, and fixture difficulty ratings provided in the data

When providing advice:
- Reference ONLY the players and teams provided in the data
- Use ONLY the fixture information provided (team names, FDR ratings, home/away status)
- Base recommendations on the actual statistics provided (form, points per game, ownership, etc.)
- Consider ownership percentages for differential impact
- Factor in injury status and availability from the provided data
- Provide actionable, clear recommendations based on the real data provided
- Use data-driven reasoning from the actual statistics given
- Be concise but thorough

If the data provided doesn't include certain information, acknowledge this rather than inventing it."""

GROUNDING_REMINDER = (
    "IMPORTANT: Only reference players and teams listed above. "
    "Do not make up player names, team names, or fixtures."
)

WATCHLIST_MIN_FORM = 4.0
WATCHLIST_SIZE = 20
WATCHLIST_FIXTURE_PLAYERS = 10
TEAM_FIXTURES_SHOWN = 10


@dataclass
class TeamContext:
    """The user's squad as background for free-form chat."""

    players: list[Player]
    teams: list[Team]
    budget: int
    gameweek: int


@dataclass
class StrategyOptions:
    """User preferences for an LLM transfer strategy."""

    bank: int = 0
    free_transfers: int = 1
    horizon: int = 3
    risk_appetite: str = "medium"
    allow_hits: bool = False


# =============================================================================
# Line formatting
# =============================================================================


def _player_line(player: Player, teams: list[Team], *, with_price: bool = True) -> str:
    team = team_short_name(teams, player.team_id)
    line = f"{player.web_name} ({team}, {player.position.name})"
    if with_price:
        line += f" - {format_price(player.price)} |"
    else:
        line += " -"
    return (
        f"{line} Form: {player.form} | PPG: {player.points_per_game} | "
        f"Total: {player.total_points}pts | Owned: {player.selected_by_percent}% | "
        f"Goals: {player.goals_scored} | Assists: {player.assists} | "
        f"Status: {status_label(player.status)}"
    )


def _fixture_for(player: Player, fixtures: list[Fixture], gameweek: int) -> Fixture | None:
    return next(
        (f for f in fixtures if f.involves(player.team_id) and f.gameweek == gameweek),
        None,
    )


def _fixture_label(player: Player, fixture: Fixture | None, teams: list[Team]) -> str:
    """H/A, opponent and FDR for a player's fixture."""
    if fixture is None:
        return "No fixture data"
    venue = "H" if fixture.is_home(player.team_id) else "A"
    opponent = team_short_name(teams, fixture.opponent_of(player.team_id))
    return f"{venue} vs {opponent} (FDR: {fixture.difficulty_for(player.team_id)})"


def _gameweek_label(fixture: Fixture) -> str:
    return f"GW{fixture.gameweek or 'TBD'}"


def _fixtures_by_team(fixtures: list[Fixture], teams: list[Team]) -> str:
    """Group fixtures under each team, in first-seen order."""
    grouped: dict[int, list[str]] = {}
    for fixture in fixtures:
        home = team_short_name(teams, fixture.home_team_id)
        away = team_short_name(teams, fixture.away_team_id)
        grouped.setdefault(fixture.home_team_id, []).append(
            f"{_gameweek_label(fixture)}: vs {away} (H) - FDR: {fixture.home_difficulty}"
        )
        grouped.setdefault(fixture.away_team_id, []).append(
            f"{_gameweek_label(fixture)}: vs {home} (A) - FDR: {fixture.away_difficulty}"
        )

    return "\n\n".join(
        f"{team_short_name(teams, team_id)} fixtures:\n" + "\n".join(lines)
        for team_id, lines in grouped.items()
    )


# =============================================================================
# Prompt builders
# =============================================================================


def team_analysis_prompt(
    players: list[Player],
    teams: list[Team],
    fixtures: list[Fixture],
    bank: int,
    team_value: int,
) -> str:
    """Strengths, weaknesses and a rating for a whole squad."""
    squad = "\n".join(_player_line(p, teams) for p in players)
    fixture_lines = "\n".join(
        f"{_gameweek_label(f)}: {team_short_name(teams, f.home_team_id)} vs "
        f"{team_short_name(teams, f.away_team_id)} "
        f"(H FDR: {f.home_difficulty}, A FDR: {f.away_difficulty})"
        for f in fixtures[:TEAM_FIXTURES_SHOWN]
    )

    return f"""Analyze this FPL team using ONLY the data provided below. DO NOT reference any players, teams, or fixtures not listed here.

SQUAD ({len(players)} players - use ONLY these names):
{squad}

TEAM VALUE: {format_price(team_value)}
MONEY IN BANK: {format_price(bank)}

UPCOMING FIXTURES (use ONLY these fixtures):
{fixture_lines or "No upcoming fixtures data available"}

{GROUNDING_REMINDER}

Provide a detailed analysis including:
1. STRENGTHS: What's working well in this team? (based on the actual stats provided)
2. WEAKNESSES: Areas that need improvement (based on the actual stats provided)
3. SUGGESTED IMPROVEMENTS: Specific changes to consider (only suggest players/teams from the data if available)
4. RISK ASSESSMENT: Injury concerns, rotation risks (based on status field in the data)
5. BUDGET OPTIMIZATION: Are funds being used efficiently?
6. OVERALL RATING: Rate this team out of 10 with justification

Be honest and constructive in your analysis. If you don't have data about something, say so rather than making it up."""


def captain_analysis_prompt(
    players: list[Player],
    teams: list[Team],
    fixtures: list[Fixture],
    gameweek: int,
) -> str:
    lines = "\n".join(
        f"{_player_line(p, teams, with_price=False)} | "
        f"GW{gameweek}: {_fixture_label(p, _fixture_for(p, fixtures, gameweek), teams)}"
        for p in players
    )

    return f"""Analyze these players for GW{gameweek} captain selection using ONLY the data provided below. DO NOT reference any players, teams, or fixtures not listed here.

PLAYERS IN MY TEAM (use ONLY these players):
{lines}

{GROUNDING_REMINDER}

Provide:
1. TOP 3 captain picks with detailed reasoning (based on actual form, fixtures, and stats provided)
2. Best differential captain (low ownership, high upside from the data)
3. Safe captain pick (consistent, high floor based on actual stats)
4. Risk/reward analysis for each option (consider status field for injury/availability)
5. Your #1 recommendation with confidence level

Base all recommendations on the actual statistics, form, fixture difficulty, and ownership data provided. If data is missing, acknowledge it rather than inventing it."""


def lineup_prompt(
    players: list[Player],
    teams: list[Team],
    fixtures: list[Fixture],
    gameweek: int,
) -> str:
    lines = "\n".join(
        f"{p.web_name} ({p.position.name}, {team_short_name(teams, p.team_id)}) - "
        f"Form: {p.form} | PPG: {p.points_per_game} | Total: {p.total_points}pts | "
        f"{_fixture_label(p, _fixture_for(p, fixtures, gameweek), teams)} | "
        f"Status: {status_label(p.status)}"
        for p in players
    )

    return f"""Select the optimal starting 11 from these {len(players)} players for GW{gameweek} using ONLY the data provided below. DO NOT reference any players, teams, or fixtures not listed here.

SQUAD (use ONLY these players):
{lines}

{GROUNDING_REMINDER}

Requirements:
- Must pick exactly 11 starters from the squad above
- Formation must be valid (1 GK, 3-5 DEF, 2-5 MID, 1-3 FWD)
- 4 players on bench in priority order
- Select captain and vice-captain from the squad
- Consider player status (injured/suspended players should not start if possible)

Provide:
1. STARTING XI with formation (use exact player names from the data)
2. CAPTAIN pick with reasoning (based on form, fixture, and stats provided)
3. VICE-CAPTAIN pick (based on form, fixture, and stats provided)
4. BENCH ORDER (1st to 4th sub - use exact player names)
5. Key considerations for this lineup (based on the actual data provided)"""


def transfer_strategy_prompt(
    players: list[Player],
    teams: list[Team],
    fixtures: list[Fixture],
    options: StrategyOptions,
) -> str:
    """
    Multi-gameweek transfer strategy for a squad.

    Fixtures are capped at ten per gameweek of the horizon.
    """
    squad = "\n".join(_player_line(p, teams) for p in players)
    fixture_summary = _fixtures_by_team(fixtures[: options.horizon * 10], teams)

    return f"""Analyze this FPL team and provide a detailed transfer strategy for the next {options.horizon} gameweeks using ONLY the data provided below. DO NOT reference any players, teams, or fixtures not listed here.

CURRENT TEAM (use ONLY these players):
{squad}

UPCOMING FIXTURES (use ONLY these fixtures):
{fixture_summary or "No fixture data available"}

BUDGET IN BANK: {format_price(options.bank)}
FREE TRANSFERS: {options.free_transfers}
RISK APPETITE: {options.risk_appetite}
WILLING TO TAKE HITS: {"Yes" if options.allow_hits else "No"}

{GROUNDING_REMINDER} If suggesting transfers, only suggest players/teams from the data if available, otherwise provide general strategic advice.

Based on this information:
1. Identify the weakest players who should be transferred out (from the current team data)
2. Recommend specific replacements with reasoning (only if replacement data is available, otherwise provide general guidance)
3. Suggest optimal timing for transfers (which gameweek based on fixture data)
4. Provide a priority order for transfers
5. Mention any differentials worth considering (based on ownership data)
6. Note any players to monitor for price rises/falls (based on actual price change data if available)

Be specific and actionable. Format your response clearly with sections. If you don't have data about something, say so rather than making it up."""


def watchlist_candidates(players: list[Player]) -> list[Player]:
    """Available players with form above 4, best form first, top 20."""
    in_form = [p for p in players if p.is_available and p.form > WATCHLIST_MIN_FORM]
    in_form.sort(key=lambda p: p.form, reverse=True)
    return in_form[:WATCHLIST_SIZE]


def players_to_watch_prompt(
    players: list[Player],
    teams: list[Team],
    fixtures: list[Fixture],
) -> str:
    candidates = watchlist_candidates(players)
    lines = "\n".join(_player_line(p, teams) for p in candidates)

    fixture_lines = []
    for player in candidates[:WATCHLIST_FIXTURE_PLAYERS]:
        upcoming = [f for f in fixtures if f.involves(player.team_id) and f.gameweek][:3]
        labels = ", ".join(
            f"{_gameweek_label(f)}: {_fixture_label(player, f, teams)}" for f in upcoming
        )
        fixture_lines.append(f"{player.web_name}: {labels or 'No fixture data'}")

    return f"""From these in-form players, identify 5 "Players to Watch" for FPL managers using ONLY the data provided below. DO NOT reference any players, teams, or fixtures not listed here.

TOP FORM PLAYERS (use ONLY these players):
{lines}

UPCOMING FIXTURES (use ONLY these fixtures):
{chr(10).join(fixture_lines) or "No fixture data available"}

{GROUNDING_REMINDER}

For each of the 5 selected players, provide:
1. Player name and team (from the data above)
2. Why they're worth watching (based on actual form, stats, and price provided)
3. Upcoming fixtures outlook (based on fixture data provided)
4. Buy recommendation (Buy Now / Wait / Monitor) with reasoning based on the actual data

Focus on a mix of premium and budget options. Base all recommendations on the actual statistics, form, and fixture data provided."""


def chat_system_message(team_context: TeamContext | None = None) -> str:
    """System prompt for chat, with the user's squad appended when known."""
    if team_context is None:
        return SYSTEM_PROMPT

    squad = "\n".join(
        f"{p.web_name} ({team_short_name(team_context.teams, p.team_id)}, "
        f"{p.position.name}) - Form: {p.form}, PPG: {p.points_per_game}, "
        f"Total: {p.total_points}pts"
        for p in team_context.players
    )

    return f"""{SYSTEM_PROMPT}

USER'S CURRENT TEAM (use ONLY these players when referencing their team):
{squad}
BUDGET: {format_price(team_context.budget)}
CURRENT GAMEWEEK: {team_context.gameweek}

IMPORTANT: When answering questions, only reference players and teams from the data provided. Do not make up player names, team names, or statistics."""
