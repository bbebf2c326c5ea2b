"""
mandate_engine.types — TypedDict schemas for service results
============================================================

Documents the exact structure of the dictionaries returned by
GameService. All types are exported from the main package:

    from mandate_engine import FullState, PlayerView, ...
"""

from typing import Dict, List, Optional, TypedDict


# ============================================
# create_session() / join_session()
# ============================================

class CreatedSession(TypedDict):
    """Returned by create_session()."""
    session_code: str       # e.g., "XJ3K9M"
    session_id: int


class JoinAck(TypedDict):
    """Returned by join_session().

    Fields
    ------
    success : bool
        Always True; failures raise.
    rejoined : bool
        True if the identity was already in the room (nothing changed).
    player_id : int
    """
    success: bool
    rejoined: bool
    player_id: int


# ============================================
# get_full_state() projection
# ============================================

class SessionView(TypedDict):
    session_id: int
    game_code: str
    status: str             # "waiting" | "in_progress" | "finished"
    difficulty: str         # "easy" | "hard"
    current_turn: int
    current_player_index: int
    end_reason: Optional[str]
    end_message: Optional[str]
    creator_user_uid: str


class NationStateView(TypedDict):
    economy: int
    education: int
    wellbeing: int
    popular_support: int
    hunger: int
    military_religion: int
    board_position: int
    education_history: List[int]


class PlayerView(TypedDict):
    """A player in the room. Observers have turn_order None."""
    id: int
    name: str
    user_uid: str
    character_role: str
    capital: int
    turn_order: Optional[int]
    is_observer: bool


class OptionView(TypedDict):
    index: int
    text: str
    stance: Optional[str]   # "ethical" | "corrupt" | None
    effects: Dict[str, int]


class CardView(TypedDict):
    draw_id: int
    card_id: int
    title: str
    dilemma: str
    assigned_role: Optional[str]
    options: List[OptionView]


class LogView(TypedDict):
    id: int
    turn_number: int
    player_name: str
    player_role: str
    choice_text: str
    effects_text: str       # e.g., "economy: +1, hunger: -2"
    created_at: str


class FullState(TypedDict):
    """Returned by get_full_state(). Logs are most recent first."""
    session: SessionView
    nation: NationStateView
    players: List[PlayerView]
    current_card: Optional[CardView]
    logs: List[LogView]
