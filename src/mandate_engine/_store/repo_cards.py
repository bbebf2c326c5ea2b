# Area: Store
"""
mandate_engine._store.repo_cards — Cards Repository
===================================================

Repository for the decision_cards catalog and the
session_decision_cards draw records.
"""

from typing import Any, Dict, List, Optional

from .catalog import CardModel, DecisionCard, encode_options
from .database import BaseRepository


class CardRepository(BaseRepository):
    """
    Repository for decision cards and session draws.

    A card is eligible for a role when it is scoped to that role or
    unscoped.
    """

    # ── Catalog ──────────────────────────────────────────────

    def import_cards(self, cards: List[CardModel]) -> int:
        """
        Insert validated catalog cards.

        Args:
            cards: Validated card models

        Returns:
            Number of cards inserted
        """
        query = """
            INSERT INTO decision_cards (title, dilemma, assigned_role, options)
            VALUES (?, ?, ?, ?)
        """
        for card in cards:
            self._execute(query, (
                card.title,
                card.dilemma,
                card.assigned_role,
                encode_options(card.options),
            ))
        return len(cards)

    def count_cards(self) -> int:
        row = self._execute_one("SELECT COUNT(*) AS n FROM decision_cards")
        return row["n"] if row else 0

    # ── Draws ────────────────────────────────────────────────

    def get_active_draw(self, session_id: int) -> Optional[Dict[str, Any]]:
        """
        Get the single unresolved draw of a session with its card.

        Returns:
            Dict with 'draw_id' and 'card' (DecisionCard), or None
        """
        query = """
            SELECT sdc.id AS draw_id, sdc.decision_card_id,
                   dc.title, dc.dilemma, dc.assigned_role, dc.options
            FROM session_decision_cards sdc
            JOIN decision_cards dc ON dc.id = sdc.decision_card_id
            WHERE sdc.game_session_id = ? AND sdc.is_resolved = 0
        """
        row = self._execute_one(query, (session_id,))
        if row is None:
            return None
        return {"draw_id": row["draw_id"], "card": DecisionCard.from_row(row)}

    def eligible_card_ids(self, session_id: int, role: Optional[str]) -> List[int]:
        """Ids of cards for the role not yet drawn in this session."""
        query = """
            SELECT dc.id FROM decision_cards dc
            WHERE (dc.assigned_role = ? OR dc.assigned_role IS NULL)
              AND dc.id NOT IN (
                  SELECT decision_card_id FROM session_decision_cards
                  WHERE game_session_id = ?
              )
            ORDER BY dc.id
        """
        rows = self._execute(query, (role, session_id), fetch=True) or []
        return [row["id"] for row in rows]

    def reset_role_draws(self, session_id: int, role: Optional[str]) -> None:
        """Delete resolved draw records of the role's cards in this session."""
        query = """
            DELETE FROM session_decision_cards
            WHERE game_session_id = ? AND is_resolved = 1
              AND decision_card_id IN (
                  SELECT id FROM decision_cards
                  WHERE assigned_role = ? OR assigned_role IS NULL
              )
        """
        self._execute(query, (session_id, role))

    def insert_draw(self, session_id: int, card_id: int) -> int:
        query = """
            INSERT INTO session_decision_cards (game_session_id, decision_card_id)
            VALUES (?, ?)
        """
        return self._insert(query, (session_id, card_id))

    def resolve_draw(self, draw_id: int, chosen_option: int) -> None:
        """Mark a draw resolved with the chosen option index."""
        query = """
            UPDATE session_decision_cards
            SET is_resolved = 1, chosen_option = ?, resolved_at = CURRENT_TIMESTAMP
            WHERE id = ?
        """
        self._execute(query, (chosen_option, draw_id))

    def count_unresolved(self, session_id: int) -> int:
        query = """
            SELECT COUNT(*) AS n FROM session_decision_cards
            WHERE game_session_id = ? AND is_resolved = 0
        """
        row = self._execute_one(query, (session_id,))
        return row["n"] if row else 0

    def delete_draws(self, session_id: int) -> None:
        query = "DELETE FROM session_decision_cards WHERE game_session_id = ?"
        self._execute(query, (session_id,))
