# Area: Engine
"""
mandate_engine._engine.enums — Game Enums
=========================================

Defines the session lifecycle states, difficulty levels, effect keys
and end reasons shared by every engine component.
"""

from enum import Enum


class SessionStatus(Enum):
    """
    Lifecycle states of a game session.

    State transitions:
    WAITING -> IN_PROGRESS (on START)
    IN_PROGRESS -> IN_PROGRESS (on DECISION)
    IN_PROGRESS -> FINISHED (on GAME_END)
    Any state -> WAITING (on RESTART)
    """
    WAITING = "waiting"
    IN_PROGRESS = "in_progress"
    FINISHED = "finished"


class SessionEvent(Enum):
    """
    Events that drive session lifecycle transitions.

    - START: creator starts the session
    - DECISION: a decision resolved and the game continues
    - GAME_END: the outcome evaluator reported an end state
    - RESTART: creator restarts the session
    """
    START = "START"
    DECISION = "DECISION"
    GAME_END = "GAME_END"
    RESTART = "RESTART"


class Difficulty(Enum):
    """Difficulty selected when the session is created."""
    EASY = "easy"
    HARD = "hard"

    @classmethod
    def parse(cls, value) -> "Difficulty":
        """Parse a difficulty, treating None as the default (easy)."""
        if value is None:
            return cls.EASY
        if isinstance(value, cls):
            return value
        return cls(str(value).lower())


class EffectKey(Enum):
    """Keys an option's effect mapping may change."""
    ECONOMY = "economy"
    EDUCATION = "education"
    WELLBEING = "wellbeing"
    POPULAR_SUPPORT = "popular_support"
    HUNGER = "hunger"
    MILITARY_RELIGION = "military_religion"
    CAPITAL = "capital"
    BOARD_POSITION = "board_position"

    @property
    def is_indicator(self) -> bool:
        return self not in (EffectKey.CAPITAL, EffectKey.BOARD_POSITION)


class EndReason(Enum):
    """Why a session finished."""
    COLLAPSE = "collapse"
    VICTORY = "victory"
    MANDATE_ENDED = "mandate_ended"
    OPPORTUNIST = "opportunist"
    TIMEOUT = "timeout"
