# Area: Engine
"""
mandate_engine._engine.indicators — Indicator Model
===================================================

Pure value rules for the nation state: the six clamped indicators,
capital and board position arithmetic, and the board-movement
heuristic that rewards options improving the nation.

Nothing here touches the store; every function is deterministic.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Dict, List, Sequence, Tuple

from .enums import Difficulty, EffectKey

INDICATOR_MIN = 0
INDICATOR_MAX = 10

INDICATOR_FIELDS = (
    "economy",
    "education",
    "wellbeing",
    "popular_support",
    "hunger",
    "military_religion",
)

# Indicators where a lower value is better
INVERTED_INDICATORS = frozenset({EffectKey.HUNGER})

# (exclusive lower bound on positive ratio, board movement), first match wins
MOVEMENT_TABLES: Dict[Difficulty, Tuple[Tuple[float, int], ...]] = {
    Difficulty.HARD: (
        (0.50, 1),
        (0.30, 0),
    ),
    Difficulty.EASY: (
        (0.66, 2),
        (0.30, 1),
        (0.10, 0),
    ),
}
FALLBACK_MOVEMENT = -1

Effect = Tuple[EffectKey, int]


@dataclass(frozen=True)
class Indicators:
    """
    The six national indicators, each in [0, 10].

    Attributes:
        economy: Economic strength
        education: Education level
        wellbeing: Social wellbeing
        popular_support: Popular support for the government
        hunger: Hunger level (higher is worse)
        military_religion: Military and religious backing
    """

    economy: int
    education: int
    wellbeing: int
    popular_support: int
    hunger: int
    military_religion: int

    @classmethod
    def initial(cls, difficulty: Difficulty) -> "Indicators":
        """Starting indicators for a new or restarted session."""
        base = 3 if difficulty is Difficulty.HARD else 5
        return cls(
            economy=base,
            education=base,
            wellbeing=base,
            popular_support=base,
            hunger=0,
            military_religion=base,
        )

    @classmethod
    def from_row(cls, row: Dict) -> "Indicators":
        return cls(**{name: int(row[name]) for name in INDICATOR_FIELDS})

    def get(self, key: EffectKey) -> int:
        return getattr(self, key.value)

    def as_dict(self) -> Dict[str, int]:
        return {name: getattr(self, name) for name in INDICATOR_FIELDS}


@dataclass(frozen=True)
class EffectResult:
    """
    Output of apply_effects.

    Attributes:
        indicators: Post-effect indicators
        board_position: Post-effect board position (>= 0)
        capital: Post-effect capital of the acting player (>= 0)
        applied: The effect deltas in mapping order
        movement: Board movement from the heuristic alone
        education_history: History with the new education value appended
    """

    indicators: Indicators
    board_position: int
    capital: int
    applied: List[Effect]
    movement: int
    education_history: Tuple[int, ...] = field(default_factory=tuple)


def clamp(value: int, low: int = INDICATOR_MIN, high: int = INDICATOR_MAX) -> int:
    return max(low, min(high, value))


def is_positive(key: EffectKey, delta: int) -> bool:
    """True if the delta improves the indicator."""
    if key in INVERTED_INDICATORS:
        return delta < 0
    return delta > 0


def positive_ratio(effects: Sequence[Effect]) -> float:
    """
    Share of indicator deltas that improve the nation.

    Capital and board position are not classified. Returns 0.0 when no
    indicator delta is present.
    """
    classified = [(key, delta) for key, delta in effects if key.is_indicator]
    if not classified:
        return 0.0
    positives = sum(1 for key, delta in classified if is_positive(key, delta))
    return positives / len(classified)


def board_movement(ratio: float, difficulty: Difficulty) -> int:
    """Look up the board movement for a positive ratio."""
    for threshold, movement in MOVEMENT_TABLES[difficulty]:
        if ratio > threshold:
            return movement
    return FALLBACK_MOVEMENT


def apply_effects(
    indicators: Indicators,
    board_position: int,
    capital: int,
    effects: Sequence[Effect],
    difficulty: Difficulty = Difficulty.EASY,
    education_history: Sequence[int] = (),
) -> EffectResult:
    """
    Apply an option's effect deltas to the nation and the acting player.

    Args:
        indicators: Current indicators
        board_position: Current board position
        capital: Current capital of the acting player
        effects: Ordered (key, delta) pairs from the chosen option
        difficulty: Selects the board-movement table
        education_history: Past education values

    Returns:
        EffectResult with the new values
    """
    changes: Dict[str, int] = {}
    new_capital = capital
    base_board_delta = 0

    for key, delta in effects:
        if key is EffectKey.CAPITAL:
            new_capital = max(0, new_capital + delta)
        elif key is EffectKey.BOARD_POSITION:
            base_board_delta += delta
        else:
            current = changes.get(key.value, indicators.get(key))
            changes[key.value] = clamp(current + delta)

    new_indicators = replace(indicators, **changes)
    movement = board_movement(positive_ratio(effects), difficulty)
    new_board = max(0, board_position + base_board_delta + movement)

    return EffectResult(
        indicators=new_indicators,
        board_position=new_board,
        capital=new_capital,
        applied=list(effects),
        movement=movement,
        education_history=tuple(education_history) + (new_indicators.education,),
    )


def format_effects(effects: Sequence[Effect]) -> str:
    """Render deltas as 'key: +N, key: -N' in mapping order."""
    return ", ".join(f"{key.value}: {delta:+d}" for key, delta in effects)
