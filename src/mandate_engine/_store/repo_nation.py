# Area: Store
"""
mandate_engine._store.repo_nation — Nation State Repository
===========================================================

Repository for nation_states table operations. The education history
is stored as a JSON array.
"""

import json
from typing import Any, Dict, Optional, Sequence

from .database import BaseRepository
from .._engine.indicators import Indicators


class NationStateRepository(BaseRepository):
    """Repository for nation_states table."""

    def save_state(
        self,
        session_id: int,
        indicators: Indicators,
        board_position: int,
        education_history: Sequence[int],
    ) -> None:
        """
        Insert or overwrite a session's nation state.

        Args:
            session_id: Owning session
            indicators: The six indicators
            board_position: Board position
            education_history: Past education values
        """
        query = """
            INSERT OR REPLACE INTO nation_states
            (game_session_id, economy, education, wellbeing, popular_support,
             hunger, military_religion, board_position, education_history)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
        """
        self._execute(query, (
            session_id,
            indicators.economy,
            indicators.education,
            indicators.wellbeing,
            indicators.popular_support,
            indicators.hunger,
            indicators.military_religion,
            board_position,
            json.dumps(list(education_history)),
        ))

    def get_state(self, session_id: int) -> Optional[Dict[str, Any]]:
        """Get nation state with the history decoded to a list."""
        query = "SELECT * FROM nation_states WHERE game_session_id = ?"
        row = self._execute_one(query, (session_id,))
        if row is not None:
            row["education_history"] = json.loads(row["education_history"] or "[]")
        return row
