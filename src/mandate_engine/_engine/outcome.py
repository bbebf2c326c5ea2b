# Area: Engine
"""
mandate_engine._engine.outcome — Outcome Evaluator
==================================================

Decides whether a session ends after a decision. Rules are checked in
precedence order and the first match wins:

1. Collapse (hunger at max or any other indicator at zero)
2. Board victory band (finish line reached)
3. Opportunist victory (hidden capital goal with low education)
4. Timed-out collapse (round limit exceeded)
"""

from dataclasses import dataclass
from typing import Dict, Optional

from .enums import Difficulty, EndReason
from .indicators import INDICATOR_MAX, INDICATOR_MIN, Indicators

FINISH_LINE: Dict[Difficulty, int] = {
    Difficulty.EASY: 25,
    Difficulty.HARD: 25,
}

OPPORTUNIST_CAPITAL_GOAL = 100
OPPORTUNIST_EDUCATION_CEILING = 3

COLLAPSE_MESSAGE = (
    "The nation collapsed. Hunger or institutional failure brought the "
    "government down before the end of the mandate."
)
VICTORY_MESSAGE = (
    "Victory! The government reached the end of the mandate with a "
    "stable and fed nation."
)
MANDATE_ENDED_MESSAGE = (
    "The mandate ended, but inequality persists: the finish line was "
    "reached while hunger still haunts the population."
)
TIMEOUT_MESSAGE = (
    "Time ran out. The mandate expired without reaching the finish line "
    "and the nation slid into collapse."
)


@dataclass(frozen=True)
class OpportunistStanding:
    """The opportunist's name and freshest capital figure."""

    name: str
    capital: int


@dataclass(frozen=True)
class EndState:
    """A finished game with its reason and narrative message."""

    reason: EndReason
    message: str
    winner: Optional[str] = None


def is_collapsed(indicators: Indicators) -> bool:
    if indicators.hunger >= INDICATOR_MAX:
        return True
    return any(
        value <= INDICATOR_MIN
        for name, value in indicators.as_dict().items()
        if name != "hunger"
    )


def evaluate(
    indicators: Indicators,
    board_position: int,
    difficulty: Difficulty = Difficulty.EASY,
    opportunist: Optional[OpportunistStanding] = None,
    turn_number: Optional[int] = None,
    max_turns: Optional[int] = None,
) -> Optional[EndState]:
    """
    Evaluate end-of-game conditions.

    Args:
        indicators: Post-effect indicators
        board_position: Post-effect board position
        difficulty: Session difficulty (selects the finish line)
        opportunist: Opportunist standing, if the role is in play
        turn_number: Round counter the session is moving to
        max_turns: Round limit, None or 0 disables the timeout

    Returns:
        EndState if the game is over, None if it continues
    """
    if is_collapsed(indicators):
        return EndState(EndReason.COLLAPSE, COLLAPSE_MESSAGE)

    if board_position >= FINISH_LINE[difficulty]:
        if indicators.hunger < INDICATOR_MAX - 1:
            return EndState(EndReason.VICTORY, VICTORY_MESSAGE)
        return EndState(EndReason.MANDATE_ENDED, MANDATE_ENDED_MESSAGE)

    if (
        opportunist is not None
        and opportunist.capital >= OPPORTUNIST_CAPITAL_GOAL
        and indicators.education < OPPORTUNIST_EDUCATION_CEILING
    ):
        return EndState(
            EndReason.OPPORTUNIST,
            f"{opportunist.name} was the Opportunist all along and walked away "
            f"with {opportunist.capital} in capital while the people stayed uneducated.",
            winner=opportunist.name,
        )

    if max_turns and turn_number is not None and turn_number > max_turns:
        return EndState(EndReason.TIMEOUT, TIMEOUT_MESSAGE)

    return None
