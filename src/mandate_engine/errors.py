"""
mandate_engine.errors — Custom exception classes
================================================

Defines the exception hierarchy raised by the engine and the service
layer. Every error carries a stable ``category`` so the presentation
layer can pick its messaging without parsing free text.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional


class MandateEngineError(Exception):
    """Base exception for all Mandate Engine errors."""

    category = "internal"

    def __init__(self, message: str, **context: Any):
        self.message = message
        self.context = context
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"error": self.category, "message": self.message}
        if self.context:
            data["context"] = self.context
        return data


# ══════════════════════════════════════════════════════════════
# CATEGORIES
# ══════════════════════════════════════════════════════════════

class NotFoundError(MandateEngineError):
    """A session, player or card does not exist."""
    category = "not_found"


class InvalidInputError(MandateEngineError):
    """Malformed choice, unknown difficulty or bad catalog content."""
    category = "invalid_input"

    def __init__(
        self,
        message: str,
        validation_errors: Optional[List[str]] = None,
        **context: Any,
    ):
        self.validation_errors = validation_errors or []
        if self.validation_errors:
            context["validation_errors"] = self.validation_errors
        super().__init__(message, **context)


class ForbiddenError(MandateEngineError):
    """The caller is not allowed to perform the operation."""
    category = "forbidden"


class IllegalStateError(MandateEngineError):
    """The session is not in the lifecycle state the operation needs."""
    category = "illegal_state"


class DeckExhaustedError(MandateEngineError):
    """No eligible decision card remains after every fallback."""
    category = "deck_exhausted"

    def __init__(self, session_id: int, role: Optional[str]):
        self.session_id = session_id
        self.role = role
        super().__init__(
            f"No decision card available for role '{role}'",
            session_id=session_id,
            role=role,
        )


class CodeGenerationError(MandateEngineError):
    """Could not generate a unique room code."""
    category = "code_generation"


# ══════════════════════════════════════════════════════════════
# NAMED FAILURES
# ══════════════════════════════════════════════════════════════

class NoActiveCardError(NotFoundError):
    """The session has no unresolved card to decide on."""


class InvalidOptionError(InvalidInputError):
    """The chosen option index is not valid for the active card."""


class NotYourTurnError(ForbiddenError):
    """The caller does not hold the current turn."""


class NotActiveError(IllegalStateError):
    """A decision was sent to a session that is not in progress."""


class AlreadyStartedError(IllegalStateError):
    """The session left the waiting room already."""


class RoomFullError(IllegalStateError):
    """The session already holds the maximum number of active players."""
