# Area: Store
"""
mandate_engine._store.repo_sessions — Sessions Repository
=========================================================

Repository for game_sessions table operations, including the
composite turn-row read that the turn engine locks and acts on.
"""

from typing import Any, Dict, Optional
from .database import BaseRepository


class SessionRepository(BaseRepository):
    """
    Repository for game_sessions table.

    Handles creating, locking, advancing and resetting sessions.
    """

    def code_exists(self, game_code: str) -> bool:
        query = "SELECT 1 FROM game_sessions WHERE game_code = ?"
        return self._execute_one(query, (game_code,)) is not None

    def create_session(self, game_code: str, creator_uid: str, difficulty: str) -> int:
        """
        Save a new session in the waiting room.

        Args:
            game_code: Unique room code
            creator_uid: Identity of the creator
            difficulty: 'easy' or 'hard'

        Returns:
            The new session id
        """
        query = """
            INSERT INTO game_sessions
            (game_code, status, difficulty, creator_user_uid, current_turn, current_player_index)
            VALUES (?, 'waiting', ?, ?, 1, 0)
        """
        return self._insert(query, (game_code, difficulty, creator_uid))

    def get_by_code(self, game_code: str) -> Optional[Dict[str, Any]]:
        """
        Get a session by room code.

        Args:
            game_code: Room code to look up

        Returns:
            Session record dict or None if not found
        """
        query = "SELECT * FROM game_sessions WHERE game_code = ?"
        return self._execute_one(query, (game_code,))

    def lock_turn_row(self, game_code: str) -> Optional[Dict[str, Any]]:
        """
        Read session, nation state and the player holding the turn.

        Must be called inside SessionStore.transaction(), which already
        holds the write lock for the duration of the unit of work.

        Args:
            game_code: Room code

        Returns:
            Flat composite row, or None if any part is missing
        """
        query = """
            SELECT
                gs.id AS session_id, gs.game_code, gs.status, gs.difficulty,
                gs.current_turn, gs.current_player_index,
                ns.economy, ns.education, ns.wellbeing, ns.popular_support,
                ns.hunger, ns.military_religion, ns.board_position,
                p.id AS player_id, p.name AS player_name, p.user_uid,
                p.character_role, p.capital
            FROM game_sessions gs
            JOIN nation_states ns ON ns.game_session_id = gs.id
            JOIN players p
                ON p.game_session_id = gs.id
                AND p.turn_order = gs.current_player_index
            WHERE gs.game_code = ?
        """
        return self._execute_one(query, (game_code,))

    def set_status(self, session_id: int, status: str) -> None:
        query = "UPDATE game_sessions SET status = ? WHERE id = ?"
        self._execute(query, (status, session_id))

    def finish(self, session_id: int, end_reason: str, end_message: str) -> None:
        """Mark session as finished with its end reason and message."""
        query = """
            UPDATE game_sessions
            SET status = 'finished', end_reason = ?, end_message = ?
            WHERE id = ?
        """
        self._execute(query, (end_reason, end_message, session_id))

    def advance(self, session_id: int, player_index: int, turn: int) -> None:
        """Move the turn pointer."""
        query = """
            UPDATE game_sessions
            SET current_player_index = ?, current_turn = ?
            WHERE id = ?
        """
        self._execute(query, (player_index, turn, session_id))

    def reset(self, session_id: int) -> None:
        """Return session to the waiting room with a cleared end state."""
        query = """
            UPDATE game_sessions
            SET status = 'waiting', current_turn = 1, current_player_index = 0,
                end_reason = NULL, end_message = NULL
            WHERE id = ?
        """
        self._execute(query, (session_id,))
