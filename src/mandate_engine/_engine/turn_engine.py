# Area: Engine
"""
mandate_engine._engine.turn_engine — Turn Resolution Engine
===========================================================

Resolves one decision as a single atomic unit of work:

1. Lock and load session, nation state and the player holding the turn
2. Validate session, turn ownership, active card and option index
3. Apply effects and evaluate the outcome
4. Log the decision and persist every change
5. If the game continues, advance the turn and draw the next card

Any exception rolls the whole transaction back.
"""

import logging
import random
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .deck import draw_card
from .enums import Difficulty, SessionEvent, SessionStatus
from .indicators import EffectResult, Indicators, apply_effects, format_effects
from .outcome import OpportunistStanding, evaluate
from .roles import OPPORTUNIST_ROLE, active_players, advance_turn
from .state_machine import SessionStateMachine
from .._store.database import SessionStore
from .._store.repo_cards import CardRepository
from .._store.repo_logs import LogRepository
from .._store.repo_nation import NationStateRepository
from .._store.repo_players import PlayerRepository
from .._store.repo_sessions import SessionRepository
from ..errors import (
    InvalidInputError,
    InvalidOptionError,
    NoActiveCardError,
    NotActiveError,
    NotFoundError,
    NotYourTurnError,
)

logger = logging.getLogger("mandate_engine.engine.turns")


@dataclass
class DecisionOutcome:
    """
    Result of a resolved decision.

    Attributes:
        status: Session status after the decision
        indicators: Post-effect indicator snapshot
        board_position: Post-effect board position
        capital: Acting player's updated capital
        end_reason: Why the game ended, if it did
        end_message: Narrative end message, if the game ended
        current_player_index: Turn pointer after the decision
        current_turn: Round counter after the decision
    """

    status: str
    indicators: Dict[str, int]
    board_position: int
    capital: int
    end_reason: Optional[str] = None
    end_message: Optional[str] = None
    current_player_index: int = 0
    current_turn: int = 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status,
            "indicators": dict(self.indicators),
            "board_position": self.board_position,
            "capital": self.capital,
            "end_reason": self.end_reason,
            "end_message": self.end_message,
            "current_player_index": self.current_player_index,
            "current_turn": self.current_turn,
        }


class TurnEngine:
    """
    Orchestrates decision resolution against the session store.

    Attributes:
        store: Transactional store client
        rng: Random generator used for card draws
        max_turns: Round limit for the timed-out collapse, None disables it
    """

    def __init__(
        self,
        store: SessionStore,
        rng: Optional[random.Random] = None,
        max_turns: Optional[int] = None,
    ):
        self.store = store
        self.rng = rng or random.Random()
        self.max_turns = max_turns

    def resolve_decision(
        self,
        game_code: str,
        acting_uid: str,
        option_index: Any,
        difficulty: Optional[str] = None,
    ) -> DecisionOutcome:
        """
        Resolve the current player's decision.

        Args:
            game_code: Room code
            acting_uid: Identity of the caller
            option_index: Index of the chosen option
            difficulty: Movement table override, defaults to the session's

        Returns:
            DecisionOutcome with the new state

        Raises:
            NotFoundError: Session or turn row missing
            NotActiveError: Session is not in progress
            NotYourTurnError: Caller does not hold the turn
            NoActiveCardError: No unresolved card
            InvalidOptionError: Option index out of range
            InvalidInputError: Unknown difficulty override
            DeckExhaustedError: No card can be drawn for the next player
        """
        with self.store.transaction() as conn:
            sessions = SessionRepository(conn)
            players = PlayerRepository(conn)
            nation = NationStateRepository(conn)
            cards = CardRepository(conn)
            logs = LogRepository(conn)

            row = sessions.lock_turn_row(game_code)
            if row is None:
                logger.debug("Decision for unknown session or turn row: %s", game_code)
                raise NotFoundError(f"Session '{game_code}' not found", game_code=game_code)
            if row["status"] != SessionStatus.IN_PROGRESS.value:
                logger.debug("Decision on %s session %s", row["status"], game_code)
                raise NotActiveError(
                    f"Session '{game_code}' is not in progress",
                    status=row["status"],
                )
            if row["user_uid"] != acting_uid:
                logger.debug("Out-of-turn decision in %s", game_code)
                raise NotYourTurnError("It is not your turn")

            session_id = row["session_id"]
            draw = cards.get_active_draw(session_id)
            if draw is None:
                raise NoActiveCardError("There is no active card to resolve")
            card = draw["card"]
            option_count = len(card.options)
            if (
                isinstance(option_index, bool)
                or not isinstance(option_index, int)
                or not 0 <= option_index < option_count
            ):
                raise InvalidOptionError(
                    f"Option must be an integer between 0 and {option_count - 1}",
                    option_index=option_index,
                )
            option = card.options[option_index]

            try:
                session_difficulty = Difficulty.parse(difficulty or row["difficulty"])
            except ValueError:
                raise InvalidInputError(
                    f"Unknown difficulty: {difficulty!r}",
                    validation_errors=["difficulty: must be 'easy' or 'hard'"],
                ) from None
            result = apply_effects(
                Indicators.from_row(row),
                row["board_position"],
                row["capital"],
                option.effects,
                session_difficulty,
                nation.get_state(session_id)["education_history"],
            )

            roster = players.get_players(session_id)
            active_count = len(active_players(roster))
            next_index, next_turn = advance_turn(
                row["current_player_index"], row["current_turn"], active_count
            )
            end_state = evaluate(
                result.indicators,
                result.board_position,
                session_difficulty,
                opportunist=self._opportunist_standing(roster, row["player_id"], result),
                turn_number=next_turn,
                max_turns=self.max_turns,
            )

            logs.append(
                session_id,
                row["current_turn"],
                row["player_name"],
                row["character_role"],
                option.text,
                format_effects(result.applied),
            )

            nation.save_state(
                session_id, result.indicators, result.board_position, result.education_history
            )
            players.update_capital(row["player_id"], result.capital)
            cards.resolve_draw(draw["draw_id"], option_index)

            machine = SessionStateMachine(row["status"])
            if end_state is not None:
                status = machine.transition(SessionEvent.GAME_END)
                sessions.finish(session_id, end_state.reason.value, end_state.message)
                current_index, current_turn = row["current_player_index"], row["current_turn"]
                logger.info("Session %s finished: %s", game_code, end_state.reason.value)
            else:
                status = machine.transition(SessionEvent.DECISION)
                sessions.advance(session_id, next_index, next_turn)
                next_player = players.get_by_turn_order(session_id, next_index)
                draw_card(cards, session_id, next_player["character_role"], self.rng)
                current_index, current_turn = next_index, next_turn

        logger.info(
            "Session %s: %s chose option %d on '%s' (%s)",
            game_code, row["player_name"], option_index, card.title,
            format_effects(result.applied) or "no effects",
        )
        return DecisionOutcome(
            status=status.value,
            indicators=result.indicators.as_dict(),
            board_position=result.board_position,
            capital=result.capital,
            end_reason=end_state.reason.value if end_state else None,
            end_message=end_state.message if end_state else None,
            current_player_index=current_index,
            current_turn=current_turn,
        )

    @staticmethod
    def _opportunist_standing(
        roster: List[Dict[str, Any]], acting_player_id: int, result: EffectResult
    ) -> Optional[OpportunistStanding]:
        """Opportunist with fresh capital for the actor, stored capital otherwise."""
        for player in active_players(roster):
            if player["character_role"] != OPPORTUNIST_ROLE:
                continue
            capital = result.capital if player["id"] == acting_player_id else player["capital"]
            return OpportunistStanding(name=player["name"], capital=capital)
        return None

