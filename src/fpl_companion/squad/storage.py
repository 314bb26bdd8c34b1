"""
SQLite persistence for the user squad.

Stores the squad snapshot (identity, members, formation, budget, captaincy)
so it survives restarts. The last-error field is never persisted.
"""

import json
import logging
import sqlite3
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Generator

from ..data.models import Player
from .state import SquadState

logger = logging.getLogger(__name__)


# =============================================================================
# Database Schema
# =============================================================================

SCHEMA = """
-- Squad members, in the order they were added
CREATE TABLE IF NOT EXISTS squad_players (
    player_id INTEGER PRIMARY KEY,
    slot INTEGER NOT NULL,
    data TEXT NOT NULL,
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

-- Single-row squad state
CREATE TABLE IF NOT EXISTS squad_state (
    id INTEGER PRIMARY KEY DEFAULT 1,
    team_id INTEGER,
    team_name TEXT DEFAULT '',
    manager_name TEXT DEFAULT '',
    formation TEXT NOT NULL,
    bank INTEGER NOT NULL,
    team_value INTEGER NOT NULL,
    captain INTEGER,
    vice_captain INTEGER,
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);
"""


class SquadRepository:
    """SQLite store for a single user squad."""

    def __init__(self, db_path: str | Path = "data/squad.db"):
        """Initialize database connection.

        Args:
            db_path: Path to SQLite database file
        """
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_schema()

    def _init_schema(self) -> None:
        with self.connection() as conn:
            conn.executescript(SCHEMA)

    @contextmanager
    def connection(self) -> Generator[sqlite3.Connection, None, None]:
        """Context manager for database connections."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def save(self, squad: SquadState) -> None:
        """Replace the stored squad with this one."""
        snapshot = squad.snapshot()
        now = datetime.now()

        with self.connection() as conn:
            conn.execute("DELETE FROM squad_players")
            conn.execute("DELETE FROM squad_state")

            conn.executemany(
                """
                INSERT INTO squad_players (player_id, slot, data, updated_at)
                VALUES (?, ?, ?, ?)
                """,
                [
                    (player["id"], slot, json.dumps(player), now)
                    for slot, player in enumerate(snapshot["players"])
                ],
            )

            conn.execute(
                """
                INSERT INTO squad_state
                (id, team_id, team_name, manager_name, formation, bank,
                 team_value, captain, vice_captain, updated_at)
                VALUES (1, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    snapshot["team_id"],
                    snapshot["team_name"],
                    snapshot["manager_name"],
                    snapshot["formation"],
                    snapshot["bank"],
                    snapshot["team_value"],
                    snapshot["captain"],
                    snapshot["vice_captain"],
                    now,
                ),
            )

        logger.debug(f"Saved squad with {len(snapshot['players'])} players")

    def load(self) -> SquadState | None:
        """Load the stored squad, or None if nothing has been saved."""
        with self.connection() as conn:
            state_row = conn.execute(
                "SELECT * FROM squad_state WHERE id = 1"
            ).fetchone()
            if not state_row:
                return None

            player_rows = conn.execute(
                "SELECT data FROM squad_players ORDER BY slot"
            ).fetchall()

        players = [Player.model_validate(json.loads(row["data"])) for row in player_rows]

        return SquadState(
            team_id=state_row["team_id"],
            team_name=state_row["team_name"],
            manager_name=state_row["manager_name"],
            players=players,
            formation=state_row["formation"],
            bank=state_row["bank"],
            team_value=state_row["team_value"],
            captain=state_row["captain"],
            vice_captain=state_row["vice_captain"],
        )

    def clear(self) -> None:
        """Delete the stored squad."""
        with self.connection() as conn:
            conn.execute("DELETE FROM squad_players")
            conn.execute("DELETE FROM squad_state")
