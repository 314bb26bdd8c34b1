"""
FPL Squad Rules.

Squad composition constants and the formation checks built on them.
"""

from collections import Counter

from ..data.models import Player, Position

# =============================================================================
# Squad Composition Constants
# =============================================================================

SQUAD_SIZE = 15

# Exact squad quota per position
POSITION_LIMITS = {
    Position.GK: 2,
    Position.DEF: 5,
    Position.MID: 5,
    Position.FWD: 3,
}

# Max players per Premier League team
MAX_PER_TEAM = 3

# Initial budget in tenths
BUDGET_CEILING = 1000  # £100 million

DEFAULT_FORMATION = "3-4-3"

VALID_FORMATIONS = (
    "3-4-3",
    "3-5-2",
    "4-3-3",
    "4-4-2",
    "4-5-1",
    "5-3-2",
    "5-4-1",
)


def parse_formation(formation: str) -> dict[Position, int]:
    """
    Parse a formation string into starters per position.

    "4-4-2" -> {GK: 1, DEF: 4, MID: 4, FWD: 2}

    Raises:
        ValueError: If the string is not three dash-separated numbers
    """
    parts = formation.split("-")
    if len(parts) != 3:
        raise ValueError(f"Invalid formation: {formation}")

    defenders, midfielders, forwards = (int(part) for part in parts)
    return {
        Position.GK: 1,
        Position.DEF: defenders,
        Position.MID: midfielders,
        Position.FWD: forwards,
    }


def is_valid_formation(formation: str, players: list[Player]) -> bool:
    """Check the squad has enough players in each line to field a formation."""
    if formation not in VALID_FORMATIONS:
        return False

    counts = Counter(p.position for p in players)
    return all(
        counts[position] >= needed
        for position, needed in parse_formation(formation).items()
    )


def is_squad_complete(players: list[Player]) -> bool:
    """Check for 15 players in exactly 2/5/5/3 composition."""
    if len(players) != SQUAD_SIZE:
        return False

    counts = Counter(p.position for p in players)
    return all(counts[pos] == limit for pos, limit in POSITION_LIMITS.items())


def remaining_budget(players: list[Player], total_budget: int = BUDGET_CEILING) -> int:
    """Budget left after paying for the given players (tenths)."""
    return total_budget - sum(p.price for p in players)
