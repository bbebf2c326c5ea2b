# Area: Tests
"""Shared fixtures: temporary database, seeded catalog, started games."""

import logging
import os
import random
import tempfile

import pytest

from mandate_engine._store.catalog import validate_cards
from mandate_engine._store.database import SessionStore, init_database
from mandate_engine._store.repo_cards import CardRepository
from mandate_engine.service import GameService


def make_card(title="Budget Vote", options=None, role=None):
    """Build a raw catalog card dict."""
    if options is None:
        options = [
            {"text": "Fund schools", "stance": "ethical", "effects": {"economy": 1, "hunger": -1}},
            {"text": "Pocket the money", "stance": "corrupt", "effects": {"economy": -1, "capital": 5}},
        ]
    card = {"title": title, "dilemma": f"{title}?", "options": options}
    if role is not None:
        card["assigned_role"] = role
    return card


def seed_catalog(store, cards):
    """Validate and import raw card dicts."""
    with store.transaction() as conn:
        CardRepository(conn).import_cards(validate_cards(cards))


def execute(store, query, params=()):
    """Run a raw statement in its own transaction."""
    with store.transaction() as conn:
        conn.execute(query, params)


def fetch_one(store, query, params=()):
    with store.read() as conn:
        row = conn.execute(query, params).fetchone()
        return dict(row) if row else None


@pytest.fixture
def package_logger():
    """The package logger, restored to defaults after the test."""
    pkg_logger = logging.getLogger("mandate_engine")
    yield pkg_logger
    for handler in list(pkg_logger.handlers):
        handler.close()
        pkg_logger.removeHandler(handler)
    pkg_logger.setLevel(logging.NOTSET)
    pkg_logger.propagate = True


@pytest.fixture
def db_path():
    """Create temporary database for testing."""
    fd, path = tempfile.mkstemp(suffix=".db")
    os.close(fd)
    init_database(path)
    yield path
    os.unlink(path)


@pytest.fixture
def store(db_path):
    return SessionStore(db_path, lock_timeout=10.0)


@pytest.fixture
def service(store):
    """Service with a fixed seed and no Opportunist roll."""
    return GameService(store, rng=random.Random(7), opportunist_chance=0.0)


@pytest.fixture
def started_game(store, service):
    """
    Start a three-player easy game on a catalog of identical cards.

    Returns:
        (game_code, [uid in turn order])
    """
    seed_catalog(store, [make_card(f"Card {i}") for i in range(5)])
    code = service.create_session("uid-0", "Ana")["session_code"]
    service.join_session(code, "uid-1", "Bruno")
    service.join_session(code, "uid-2", "Carla")
    service.start_session(code)
    return code, ["uid-0", "uid-1", "uid-2"]
