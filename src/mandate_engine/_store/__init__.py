# Area: Store
"""
Store - SQLite persistence for sessions, players, nation state, cards and logs.

This package handles:
- Schema initialization and transactional units of work
- One repository per table
- Catalog validation and import
"""

from .database import SessionStore, init_database
from .repo_sessions import SessionRepository
from .repo_players import PlayerRepository
from .repo_nation import NationStateRepository
from .repo_cards import CardRepository
from .repo_logs import LogRepository
from .catalog import CardModel, DecisionCard, load_catalog

__all__ = [
    "SessionStore",
    "init_database",
    "SessionRepository",
    "PlayerRepository",
    "NationStateRepository",
    "CardRepository",
    "LogRepository",
    "CardModel",
    "DecisionCard",
    "load_catalog",
]
