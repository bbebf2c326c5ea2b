# Area: Engine
"""
mandate_engine._engine.roles — Role Allocation and Turn Rotation
================================================================

Assigns character roles to joining players, rolls the secret
Opportunist at session start, and advances the turn pointer.

Functions take the player set as plain dicts (as returned by the
repositories) and an injected random generator.
"""

import logging
import random
from typing import Any, Dict, Iterable, List, Optional, Tuple

logger = logging.getLogger("mandate_engine.engine.roles")

ROLES = (
    "Presidente",
    "Ministro da Economia",
    "General",
    "Líder Religioso",
    "Sindicalista",
)
GENERIC_ROLE = "Cidadão"
OPPORTUNIST_ROLE = "Oportunista"
OBSERVER_ROLE = "Observador"

MAX_ACTIVE_PLAYERS = 4
OPPORTUNIST_CHANCE = 0.25


def is_active(player: Dict[str, Any]) -> bool:
    """Active players hold a turn order; observers do not."""
    return player.get("turn_order") is not None


def active_players(players: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Active players sorted by turn order."""
    return sorted(
        (p for p in players if is_active(p)),
        key=lambda p: p["turn_order"],
    )


def assign_role(players: Iterable[Dict[str, Any]], rng: random.Random) -> str:
    """
    Pick a role for a joining active player.

    Args:
        players: Current players of the session
        rng: Random generator

    Returns:
        A random role not held by any active player, or the generic role
    """
    taken = {p["character_role"] for p in players if is_active(p)}
    free = [role for role in ROLES if role not in taken]
    if not free:
        return GENERIC_ROLE
    return rng.choice(free)


def next_turn_order(players: Iterable[Dict[str, Any]]) -> int:
    """Turn order for a joining active player (dense 0..N-1)."""
    return len(active_players(players))


def roll_opportunist(
    players: Iterable[Dict[str, Any]],
    rng: random.Random,
    chance: float = OPPORTUNIST_CHANCE,
) -> Optional[Dict[str, Any]]:
    """
    Decide whether one active player becomes the Opportunist.

    Args:
        players: Current players of the session
        rng: Random generator
        chance: Probability that the role is handed out

    Returns:
        The chosen player dict, or None if nobody was picked
    """
    candidates = active_players(players)
    if not candidates or rng.random() >= chance:
        return None
    chosen = rng.choice(candidates)
    logger.debug("Opportunist rolled for player id=%s", chosen["id"])
    return chosen


def advance_turn(current_index: int, current_turn: int, active_count: int) -> Tuple[int, int]:
    """
    Move the turn pointer to the next active player.

    Args:
        current_index: Current player index
        current_turn: Current round counter
        active_count: Number of active players

    Returns:
        (next_index, next_turn); the round counter grows on wraparound
    """
    if active_count <= 0:
        raise ValueError("Cannot advance turn without active players")
    next_index = (current_index + 1) % active_count
    next_turn = current_turn + 1 if next_index == 0 else current_turn
    return next_index, next_turn
