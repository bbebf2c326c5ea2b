"""
mandate_engine.service — Game Service
=====================================

GameService is what the routing layer instantiates and calls. It owns
no session state: every operation is one unit of work against the
injected SessionStore.

Usage
-----
    from mandate_engine import GameService, SessionStore

    store = SessionStore("mandate.db")
    store.init_schema()
    service = GameService(store)

    created = service.create_session("uid-1", "Ana", difficulty="easy")
    service.join_session(created["session_code"], "uid-2", "Bruno")
    service.start_session(created["session_code"])
    service.resolve_decision(created["session_code"], "uid-1", 0)
"""

from __future__ import annotations
import logging
import random
import sqlite3
import string
from typing import Any, Dict, Optional

from ._engine.deck import draw_card
from ._engine.enums import Difficulty, SessionEvent, SessionStatus
from ._engine.indicators import Indicators
from ._engine.roles import (
    MAX_ACTIVE_PLAYERS,
    OBSERVER_ROLE,
    OPPORTUNIST_CHANCE,
    OPPORTUNIST_ROLE,
    active_players,
    assign_role,
    next_turn_order,
    roll_opportunist,
)
from ._engine.state_machine import SessionStateMachine
from ._engine.turn_engine import DecisionOutcome, TurnEngine
from ._store.database import SessionStore
from ._store.repo_cards import CardRepository
from ._store.repo_logs import LogRepository
from ._store.repo_nation import NationStateRepository
from ._store.repo_players import PlayerRepository
from ._store.repo_sessions import SessionRepository
from .errors import (
    AlreadyStartedError,
    CodeGenerationError,
    ForbiddenError,
    IllegalStateError,
    InvalidInputError,
    NotFoundError,
    RoomFullError,
)
from .types import CardView, CreatedSession, FullState, JoinAck

logger = logging.getLogger("mandate_engine.service")

CODE_ALPHABET = string.ascii_uppercase + string.digits
CODE_LENGTH = 6
FALLBACK_CODE_LENGTH = 8
MAX_CODE_ATTEMPTS = 10
# Inserts tried when the UNIQUE constraint catches a concurrent create
CODE_RACE_ATTEMPTS = 2
STARTING_CAPITAL = 10


def generate_game_code(rng: random.Random, length: int = CODE_LENGTH) -> str:
    """Generate a room code such as 'XJ3K9M'."""
    return "".join(rng.choice(CODE_ALPHABET) for _ in range(length))


def normalize_code(game_code: str) -> str:
    return (game_code or "").strip().upper()


def _require(**fields: Any) -> None:
    missing = [name for name, value in fields.items() if not value or not str(value).strip()]
    if missing:
        raise InvalidInputError(
            f"Missing required fields: {', '.join(missing)}",
            validation_errors=[f"{name}: required" for name in missing],
        )


class GameService:
    """
    The inbound operations of the game.

    Attributes:
        store: Transactional store client
        rng: Random generator for codes, roles, the opportunist roll and draws
        opportunist_chance: Probability of rolling an Opportunist at start
        turn_engine: Resolves decisions
    """

    def __init__(
        self,
        store: SessionStore,
        rng: Optional[random.Random] = None,
        opportunist_chance: float = OPPORTUNIST_CHANCE,
        max_turns: Optional[int] = None,
    ):
        self.store = store
        self.rng = rng or random.Random()
        self.opportunist_chance = opportunist_chance
        self.turn_engine = TurnEngine(store, rng=self.rng, max_turns=max_turns)

    # ── Lobby ────────────────────────────────────────────────

    def create_session(
        self,
        creator_uid: str,
        creator_name: str,
        difficulty: str = "easy",
        is_observer: bool = False,
    ) -> CreatedSession:
        """
        Create a session in the waiting room with its nation state.

        Args:
            creator_uid: Identity of the creator
            creator_name: Creator's display name
            difficulty: 'easy' or 'hard'
            is_observer: If True, the creator watches without a turn

        Returns:
            CreatedSession with the room code and session id

        Raises:
            InvalidInputError: Missing fields or unknown difficulty
            CodeGenerationError: No free room code could be inserted
        """
        _require(creator_uid=creator_uid, creator_name=creator_name)
        try:
            level = Difficulty.parse(difficulty)
        except ValueError:
            raise InvalidInputError(
                f"Unknown difficulty: {difficulty!r}",
                validation_errors=["difficulty: must be 'easy' or 'hard'"],
            ) from None

        for _ in range(CODE_RACE_ATTEMPTS):
            game_code = self._unique_code()
            try:
                session_id = self._insert_session(
                    game_code, creator_uid, creator_name, level, is_observer
                )
                break
            except sqlite3.IntegrityError as e:
                if "game_sessions.game_code" not in str(e):
                    raise
                logger.warning("Room code %s was taken concurrently, retrying", game_code)
        else:
            raise CodeGenerationError("Could not generate a unique room code")

        logger.info("Session %s created by %s (%s)", game_code, creator_name, level.value)
        return {"session_code": game_code, "session_id": session_id}

    def _insert_session(
        self,
        game_code: str,
        creator_uid: str,
        creator_name: str,
        level: Difficulty,
        is_observer: bool,
    ) -> int:
        """Insert session, nation state and creator in one transaction."""
        indicators = Indicators.initial(level)
        with self.store.transaction() as conn:
            session_id = SessionRepository(conn).create_session(
                game_code, creator_uid, level.value
            )
            NationStateRepository(conn).save_state(
                session_id, indicators, 0, [indicators.education]
            )
            if is_observer:
                role, turn_order = OBSERVER_ROLE, None
            else:
                role, turn_order = assign_role([], self.rng), 0
            PlayerRepository(conn).add_player(
                session_id, creator_name, creator_uid, role, STARTING_CAPITAL, turn_order
            )
        return session_id

    def _unique_code(self) -> str:
        """
        Pick a room code not in use.

        Tries MAX_CODE_ATTEMPTS short codes, then as many long ones. The
        check runs outside the creating transaction; the UNIQUE constraint
        catches the rare race and create_session picks a new code.
        """
        with self.store.read() as conn:
            sessions = SessionRepository(conn)
            for length in (CODE_LENGTH, FALLBACK_CODE_LENGTH):
                for _ in range(MAX_CODE_ATTEMPTS):
                    code = generate_game_code(self.rng, length)
                    if not sessions.code_exists(code):
                        return code
                logger.warning("Room code collisions at length %d", length)
        raise CodeGenerationError("Could not generate a unique room code")

    def join_session(
        self,
        game_code: str,
        user_uid: str,
        player_name: str,
        is_observer: bool = False,
    ) -> JoinAck:
        """
        Add a player to a waiting session.

        Re-joining with an identity already in the room succeeds without
        changing anything, whatever the session status.

        Args:
            game_code: Room code
            user_uid: Identity of the joining player
            player_name: Display name
            is_observer: If True, join without a role or turn

        Returns:
            JoinAck

        Raises:
            NotFoundError: Unknown room code
            AlreadyStartedError: Session left the waiting room
            RoomFullError: Four active players already joined
        """
        _require(game_code=game_code, user_uid=user_uid, player_name=player_name)
        game_code = normalize_code(game_code)

        with self.store.transaction() as conn:
            sessions = SessionRepository(conn)
            players = PlayerRepository(conn)

            session = sessions.get_by_code(game_code)
            if session is None:
                raise NotFoundError(f"Session '{game_code}' not found", game_code=game_code)

            existing = players.get_by_uid(session["id"], user_uid)
            if existing is not None:
                logger.info("%s reconnected to %s", player_name, game_code)
                return {"success": True, "rejoined": True, "player_id": existing["id"]}

            if session["status"] != SessionStatus.WAITING.value:
                raise AlreadyStartedError(
                    f"Session '{game_code}' has already started",
                    status=session["status"],
                )

            roster = players.get_players(session["id"])
            if is_observer:
                role, turn_order = OBSERVER_ROLE, None
            else:
                if players.count_active(session["id"]) >= MAX_ACTIVE_PLAYERS:
                    raise RoomFullError(f"Session '{game_code}' is full")
                role, turn_order = assign_role(roster, self.rng), next_turn_order(roster)

            player_id = players.add_player(
                session["id"], player_name, user_uid, role, STARTING_CAPITAL, turn_order
            )

        logger.info("%s joined %s as %s", player_name, game_code, role)
        return {"success": True, "rejoined": False, "player_id": player_id}

    # ── Lifecycle ────────────────────────────────────────────

    def start_session(self, game_code: str) -> Dict[str, Any]:
        """
        Start a waiting session.

        Rolls the secret Opportunist and draws the first player's card.

        Raises:
            NotFoundError: Unknown room code
            AlreadyStartedError: Session is not waiting
            IllegalStateError: No active players
            DeckExhaustedError: No card for the first player's role
        """
        game_code = normalize_code(game_code)

        with self.store.transaction() as conn:
            sessions = SessionRepository(conn)
            players = PlayerRepository(conn)

            session = sessions.get_by_code(game_code)
            if session is None:
                raise NotFoundError(f"Session '{game_code}' not found", game_code=game_code)
            machine = SessionStateMachine(session["status"])
            if not machine.can_transition(SessionEvent.START):
                raise AlreadyStartedError(
                    f"Session '{game_code}' has already started",
                    status=session["status"],
                )

            roster = active_players(players.get_players(session["id"]))
            if not roster:
                raise IllegalStateError(f"Session '{game_code}' has no active players")

            chosen = roll_opportunist(roster, self.rng, self.opportunist_chance)
            if chosen is not None:
                players.update_role(chosen["id"], OPPORTUNIST_ROLE)
                chosen["character_role"] = OPPORTUNIST_ROLE

            status = machine.transition(SessionEvent.START)
            sessions.set_status(session["id"], status.value)
            draw_card(
                CardRepository(conn),
                session["id"],
                roster[session["current_player_index"]]["character_role"],
                self.rng,
            )

        logger.info("Session %s started with %d players", game_code, len(roster))
        return {"success": True, "status": status.value}

    def resolve_decision(
        self,
        game_code: str,
        acting_uid: str,
        option_index: Any,
        difficulty: Optional[str] = None,
    ) -> DecisionOutcome:
        """Resolve the current player's decision (see TurnEngine)."""
        return self.turn_engine.resolve_decision(
            normalize_code(game_code), acting_uid, option_index, difficulty
        )

    def restart_session(self, game_code: str, requester_uid: str) -> Dict[str, Any]:
        """
        Reset a session to the waiting room.

        Only the creator may restart. Nation state is re-initialized for
        the session's difficulty, capital is zeroed, draws and logs are
        deleted, and the Opportunist gets an ordinary role back.

        Raises:
            NotFoundError: Unknown room code
            ForbiddenError: Requester is not the creator
        """
        game_code = normalize_code(game_code)

        with self.store.transaction() as conn:
            sessions = SessionRepository(conn)
            players = PlayerRepository(conn)

            session = sessions.get_by_code(game_code)
            if session is None:
                raise NotFoundError(f"Session '{game_code}' not found", game_code=game_code)
            if session["creator_user_uid"] != requester_uid:
                raise ForbiddenError("Only the creator can restart the session")

            SessionStateMachine(session["status"]).transition(SessionEvent.RESTART)
            sessions.reset(session["id"])

            indicators = Indicators.initial(Difficulty.parse(session["difficulty"]))
            NationStateRepository(conn).save_state(
                session["id"], indicators, 0, [indicators.education]
            )
            players.reset_capital(session["id"])

            roster = players.get_players(session["id"])
            for player in active_players(roster):
                if player["character_role"] == OPPORTUNIST_ROLE:
                    others = [p for p in roster if p["id"] != player["id"]]
                    role = assign_role(others, self.rng)
                    players.update_role(player["id"], role)
                    player["character_role"] = role

            CardRepository(conn).delete_draws(session["id"])
            LogRepository(conn).delete_logs(session["id"])

        logger.info("Session %s restarted by its creator", game_code)
        return {"success": True, "status": SessionStatus.WAITING.value}

    # ── Read model ───────────────────────────────────────────

    def get_full_state(self, game_code: str) -> FullState:
        """
        Read-only projection of a session for polling clients.

        Raises:
            NotFoundError: Unknown room code
        """
        game_code = normalize_code(game_code)

        with self.store.read() as conn:
            session = SessionRepository(conn).get_by_code(game_code)
            if session is None:
                raise NotFoundError(f"Session '{game_code}' not found", game_code=game_code)
            session_id = session["id"]
            nation = NationStateRepository(conn).get_state(session_id)
            roster = PlayerRepository(conn).get_players(session_id)
            draw = CardRepository(conn).get_active_draw(session_id)
            logs = LogRepository(conn).get_logs(session_id)

        nation.pop("game_session_id", None)
        return {
            "session": {
                "session_id": session_id,
                "game_code": session["game_code"],
                "status": session["status"],
                "difficulty": session["difficulty"],
                "current_turn": session["current_turn"],
                "current_player_index": session["current_player_index"],
                "end_reason": session["end_reason"],
                "end_message": session["end_message"],
                "creator_user_uid": session["creator_user_uid"],
            },
            "nation": nation,
            "players": [
                {
                    "id": p["id"],
                    "name": p["name"],
                    "user_uid": p["user_uid"],
                    "character_role": p["character_role"],
                    "capital": p["capital"],
                    "turn_order": p["turn_order"],
                    "is_observer": p["turn_order"] is None,
                }
                for p in roster
            ],
            "current_card": _card_view(draw) if draw else None,
            "logs": [
                {
                    "id": log["id"],
                    "turn_number": log["turn_number"],
                    "player_name": log["player_name"],
                    "player_role": log["player_role"],
                    "choice_text": log["choice_text"],
                    "effects_text": log["effects_text"],
                    "created_at": str(log["created_at"]),
                }
                for log in logs
            ],
        }


def _card_view(draw: Dict[str, Any]) -> CardView:
    card = draw["card"]
    return {
        "draw_id": draw["draw_id"],
        "card_id": card.id,
        "title": card.title,
        "dilemma": card.dilemma,
        "assigned_role": card.assigned_role,
        "options": [
            {
                "index": i,
                "text": option.text,
                "stance": option.stance,
                "effects": {key.value: delta for key, delta in option.effects},
            }
            for i, option in enumerate(card.options)
        ],
    }
