# Area: Engine
"""
mandate_engine._engine.state_machine — Session Lifecycle
========================================================

Validates session status transitions. The status itself lives in the
store; the machine is built from the loaded status, asked for the next
status, and the caller persists the result.
"""

import logging

from .enums import SessionEvent, SessionStatus
from ..errors import IllegalStateError

logger = logging.getLogger("mandate_engine.engine.state_machine")


# Valid state transitions: {current_state: {event: next_state}}
TRANSITIONS = {
    SessionStatus.WAITING: {
        SessionEvent.START: SessionStatus.IN_PROGRESS,
        SessionEvent.RESTART: SessionStatus.WAITING,
    },
    SessionStatus.IN_PROGRESS: {
        SessionEvent.DECISION: SessionStatus.IN_PROGRESS,
        SessionEvent.GAME_END: SessionStatus.FINISHED,
        SessionEvent.RESTART: SessionStatus.WAITING,
    },
    SessionStatus.FINISHED: {
        SessionEvent.RESTART: SessionStatus.WAITING,
    },
}


class SessionStateMachine:
    """
    State machine for a single session's lifecycle.

    Attributes:
        current_state: The status the session is in
    """

    def __init__(self, status):
        """
        Initialize from a stored status.

        Args:
            status: SessionStatus or its string value
        """
        self.current_state = SessionStatus(status)

    def can_transition(self, event: SessionEvent) -> bool:
        """
        Check if a transition is valid from current state.

        Args:
            event: The event to check

        Returns:
            True if the transition is valid, False otherwise
        """
        return event in TRANSITIONS.get(self.current_state, {})

    def transition(self, event: SessionEvent) -> SessionStatus:
        """
        Execute a state transition.

        Args:
            event: The event triggering the transition

        Returns:
            The new state after transition

        Raises:
            IllegalStateError: If the transition is not valid
        """
        if not self.can_transition(event):
            raise IllegalStateError(
                f"Invalid transition: {event.value} from {self.current_state.value}",
                status=self.current_state.value,
            )
        next_state = TRANSITIONS[self.current_state][event]
        logger.debug(
            "Session transition %s: %s -> %s",
            event.value, self.current_state.value, next_state.value,
        )
        self.current_state = next_state
        return next_state
