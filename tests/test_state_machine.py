# Area: Engine Tests
"""Tests for the session lifecycle state machine."""

import pytest

from mandate_engine._engine.enums import SessionEvent, SessionStatus
from mandate_engine._engine.state_machine import SessionStateMachine
from mandate_engine.errors import IllegalStateError


class TestSessionStateMachineBase:
    """Tests for basic state machine functionality."""

    def test_built_from_stored_value(self):
        """Test building the machine from a stored status."""
        sm = SessionStateMachine("waiting")
        assert sm.current_state == SessionStatus.WAITING

    def test_can_transition_returns_true_for_valid(self):
        """Test can_transition for a valid event."""
        sm = SessionStateMachine(SessionStatus.WAITING)
        assert sm.can_transition(SessionEvent.START) is True

    def test_can_transition_returns_false_for_invalid(self):
        """Test can_transition for an invalid event."""
        sm = SessionStateMachine(SessionStatus.WAITING)
        assert sm.can_transition(SessionEvent.DECISION) is False

    def test_transition_raises_on_invalid(self):
        """Test that an invalid transition raises."""
        sm = SessionStateMachine(SessionStatus.FINISHED)
        with pytest.raises(IllegalStateError):
            sm.transition(SessionEvent.DECISION)

    def test_unknown_status_rejected(self):
        """Test that an unknown status is rejected."""
        with pytest.raises(ValueError):
            SessionStateMachine("paused")


class TestSessionStateMachineTransitions:
    """Tests for specific state transitions."""

    def test_full_happy_path(self):
        """Test the full lifecycle from waiting to finished."""
        sm = SessionStateMachine(SessionStatus.WAITING)

        sm.transition(SessionEvent.START)
        assert sm.current_state == SessionStatus.IN_PROGRESS

        sm.transition(SessionEvent.DECISION)
        assert sm.current_state == SessionStatus.IN_PROGRESS

        sm.transition(SessionEvent.GAME_END)
        assert sm.current_state == SessionStatus.FINISHED

    def test_start_twice_rejected(self):
        """Test that an in-progress session cannot start."""
        sm = SessionStateMachine(SessionStatus.IN_PROGRESS)
        assert sm.can_transition(SessionEvent.START) is False

    @pytest.mark.parametrize("status", list(SessionStatus))
    def test_restart_from_any_state(self, status):
        """Test restarting from every status."""
        sm = SessionStateMachine(status)
        assert sm.transition(SessionEvent.RESTART) == SessionStatus.WAITING
