"""
Squad Module for FPL Companion.

User squad state, the composition rules it enforces, and SQLite persistence.
"""

from .rules import (
    BUDGET_CEILING,
    DEFAULT_FORMATION,
    MAX_PER_TEAM,
    POSITION_LIMITS,
    SQUAD_SIZE,
    VALID_FORMATIONS,
    is_squad_complete,
    is_valid_formation,
    parse_formation,
    remaining_budget,
)
from .state import MutationResult, SquadState
from .storage import SquadRepository

__all__ = [
    # Rules
    "SQUAD_SIZE",
    "POSITION_LIMITS",
    "MAX_PER_TEAM",
    "BUDGET_CEILING",
    "DEFAULT_FORMATION",
    "VALID_FORMATIONS",
    "parse_formation",
    "is_valid_formation",
    "is_squad_complete",
    "remaining_budget",
    # State
    "MutationResult",
    "SquadState",
    "SquadRepository",
]
