"""
mandate_engine — Turn Resolution Engine for the national-mandate board game
===========================================================================

Players take turns deciding on ethical or corrupt options printed on
decision cards. Each decision moves six shared national indicators and
a board token toward victory or collapse.

Quick Start:
    from mandate_engine import GameService, SessionStore

    store = SessionStore("mandate.db")
    store.init_schema()
    service = GameService(store)

    created = service.create_session("uid-1", "Ana")
    service.start_session(created["session_code"])
    outcome = service.resolve_decision(created["session_code"], "uid-1", 0)

Error Categories
----------------
Every error raised by the service subclasses MandateEngineError and
carries a stable ``category``:

    not_found, invalid_input, forbidden, illegal_state, deck_exhausted,
    code_generation
"""

from ._engine.enums import Difficulty, EffectKey, EndReason, SessionStatus
from ._engine.indicators import Indicators, apply_effects
from ._engine.outcome import EndState, OpportunistStanding, evaluate
from ._engine.turn_engine import DecisionOutcome, TurnEngine
from ._config import EngineConfig, load_config
from ._store.catalog import load_catalog
from ._store.database import SessionStore
from .service import GameService
from .errors import (
    MandateEngineError,
    NotFoundError,
    InvalidInputError,
    ForbiddenError,
    IllegalStateError,
    DeckExhaustedError,
    CodeGenerationError,
    NoActiveCardError,
    InvalidOptionError,
    NotYourTurnError,
    NotActiveError,
    AlreadyStartedError,
    RoomFullError,
)
from .types import (
    CreatedSession,
    JoinAck,
    SessionView,
    NationStateView,
    PlayerView,
    OptionView,
    CardView,
    LogView,
    FullState,
)

__all__ = [
    # Main classes
    "GameService",
    "SessionStore",
    "TurnEngine",
    "DecisionOutcome",
    "EngineConfig",
    "load_config",
    "load_catalog",
    # Rules
    "Difficulty",
    "EffectKey",
    "EndReason",
    "SessionStatus",
    "Indicators",
    "apply_effects",
    "EndState",
    "OpportunistStanding",
    "evaluate",
    # Errors
    "MandateEngineError",
    "NotFoundError",
    "InvalidInputError",
    "ForbiddenError",
    "IllegalStateError",
    "DeckExhaustedError",
    "CodeGenerationError",
    "NoActiveCardError",
    "InvalidOptionError",
    "NotYourTurnError",
    "NotActiveError",
    "AlreadyStartedError",
    "RoomFullError",
    # Result types
    "CreatedSession",
    "JoinAck",
    "SessionView",
    "NationStateView",
    "PlayerView",
    "OptionView",
    "CardView",
    "LogView",
    "FullState",
]
__version__ = "1.0.0"
