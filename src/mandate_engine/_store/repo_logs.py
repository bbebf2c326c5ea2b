# Area: Store
"""
mandate_engine._store.repo_logs — Game Log Repository
=====================================================

Append-only log of resolved decisions.
"""

from typing import Any, Dict, List
from .database import BaseRepository


class LogRepository(BaseRepository):
    """Repository for game_logs table."""

    def append(
        self,
        session_id: int,
        turn_number: int,
        player_name: str,
        player_role: str,
        choice_text: str,
        effects_text: str,
    ) -> int:
        """
        Append a log row for a resolved decision.

        Args:
            session_id: Owning session
            turn_number: Round the decision was made in
            player_name: Acting player's name
            player_role: Acting player's role
            choice_text: Text of the chosen option
            effects_text: Rendered effect deltas

        Returns:
            The new log id
        """
        query = """
            INSERT INTO game_logs
            (game_session_id, turn_number, player_name, player_role, choice_text, effects_text)
            VALUES (?, ?, ?, ?, ?, ?)
        """
        return self._insert(query, (
            session_id, turn_number, player_name, player_role, choice_text, effects_text,
        ))

    def get_logs(self, session_id: int) -> List[Dict[str, Any]]:
        """Get all logs, most recent first."""
        query = """
            SELECT * FROM game_logs
            WHERE game_session_id = ?
            ORDER BY id DESC
        """
        return self._execute(query, (session_id,), fetch=True) or []

    def delete_logs(self, session_id: int) -> None:
        query = "DELETE FROM game_logs WHERE game_session_id = ?"
        self._execute(query, (session_id,))
