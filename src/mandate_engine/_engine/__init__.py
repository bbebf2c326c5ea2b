# Area: Engine
"""
Engine - Game rules and turn resolution.

This package handles:
- Indicator arithmetic and board movement
- End-of-game evaluation
- Role assignment, the Opportunist roll and turn rotation
- Card draws with reshuffle fallback
- Atomic decision resolution
"""

from .enums import Difficulty, EffectKey, EndReason, SessionEvent, SessionStatus
from .indicators import EffectResult, Indicators, apply_effects
from .outcome import EndState, OpportunistStanding, evaluate
from .state_machine import SessionStateMachine
from .turn_engine import DecisionOutcome, TurnEngine

__all__ = [
    "Difficulty",
    "EffectKey",
    "EndReason",
    "SessionEvent",
    "SessionStatus",
    "EffectResult",
    "Indicators",
    "apply_effects",
    "EndState",
    "OpportunistStanding",
    "evaluate",
    "SessionStateMachine",
    "DecisionOutcome",
    "TurnEngine",
]
