# Area: Store
"""
mandate_engine._store.repo_players — Players Repository
=======================================================

Repository for players table operations.
"""

from typing import Any, Dict, List, Optional
from .database import BaseRepository


class PlayerRepository(BaseRepository):
    """
    Repository for players table.

    Active players are returned in turn order, observers last.
    """

    def add_player(
        self,
        session_id: int,
        name: str,
        user_uid: str,
        role: str,
        capital: int,
        turn_order: Optional[int],
    ) -> int:
        """
        Save a new player.

        Args:
            session_id: Owning session
            name: Display name
            user_uid: External identity
            role: Assigned character role
            capital: Starting capital
            turn_order: Dense turn order, None for observers

        Returns:
            The new player id
        """
        query = """
            INSERT INTO players
            (game_session_id, name, user_uid, character_role, capital, turn_order)
            VALUES (?, ?, ?, ?, ?, ?)
        """
        return self._insert(query, (session_id, name, user_uid, role, capital, turn_order))

    def get_players(self, session_id: int) -> List[Dict[str, Any]]:
        """Get all players of a session, active ones first by turn order."""
        query = """
            SELECT * FROM players
            WHERE game_session_id = ?
            ORDER BY turn_order IS NULL, turn_order, id
        """
        return self._execute(query, (session_id,), fetch=True) or []

    def get_by_uid(self, session_id: int, user_uid: str) -> Optional[Dict[str, Any]]:
        query = "SELECT * FROM players WHERE game_session_id = ? AND user_uid = ?"
        return self._execute_one(query, (session_id, user_uid))

    def get_by_turn_order(self, session_id: int, turn_order: int) -> Optional[Dict[str, Any]]:
        query = "SELECT * FROM players WHERE game_session_id = ? AND turn_order = ?"
        return self._execute_one(query, (session_id, turn_order))

    def count_active(self, session_id: int) -> int:
        query = """
            SELECT COUNT(*) AS n FROM players
            WHERE game_session_id = ? AND turn_order IS NOT NULL
        """
        row = self._execute_one(query, (session_id,))
        return row["n"] if row else 0

    def update_capital(self, player_id: int, capital: int) -> None:
        query = "UPDATE players SET capital = ? WHERE id = ?"
        self._execute(query, (capital, player_id))

    def update_role(self, player_id: int, role: str) -> None:
        query = "UPDATE players SET character_role = ? WHERE id = ?"
        self._execute(query, (role, player_id))

    def reset_capital(self, session_id: int) -> None:
        """Zero the capital of every player in a session."""
        query = "UPDATE players SET capital = 0 WHERE game_session_id = ?"
        self._execute(query, (session_id,))
