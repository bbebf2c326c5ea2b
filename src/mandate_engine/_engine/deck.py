# Area: Engine
"""
mandate_engine._engine.deck — Card Draw
=======================================

Draws the next decision card for a role inside the caller's
transaction. Fallback chain:

1. A random card for the role (scoped to it or unscoped) not yet drawn
   in this session.
2. Reset the role's draw history for the session and draw again from
   the full pool.
3. DeckExhaustedError, which aborts the enclosing transaction.
"""

import logging
import random
from typing import Optional

from .._store.repo_cards import CardRepository
from ..errors import DeckExhaustedError

logger = logging.getLogger("mandate_engine.engine.deck")


def draw_card(
    cards: CardRepository,
    session_id: int,
    role: Optional[str],
    rng: random.Random,
) -> int:
    """
    Draw a card for the role and record the draw.

    Args:
        cards: Card repository bound to the current transaction
        session_id: Session drawing the card
        role: Role of the player who will decide
        rng: Random generator

    Returns:
        The id of the inserted draw record

    Raises:
        DeckExhaustedError: If no card is eligible even after a reset
    """
    candidates = cards.eligible_card_ids(session_id, role)
    if not candidates:
        logger.info("Deck for role '%s' exhausted in session %s, reshuffling", role, session_id)
        cards.reset_role_draws(session_id, role)
        candidates = cards.eligible_card_ids(session_id, role)
    if not candidates:
        logger.error("No decision card available for role '%s' in session %s", role, session_id)
        raise DeckExhaustedError(session_id, role)

    card_id = rng.choice(candidates)
    draw_id = cards.insert_draw(session_id, card_id)
    logger.debug("Drew card %s for role '%s' (draw %s)", card_id, role, draw_id)
    return draw_id
