# Area: Store
"""
mandate_engine._store.database — Database Initialization
========================================================

Handles SQLite schema initialization and the SessionStore, the store
client injected into the service. Every unit of work runs inside one
transaction opened by SessionStore.transaction().
"""

import sqlite3
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

logger = logging.getLogger("mandate_engine.store")

# Path to schema file
SCHEMA_PATH = Path(__file__).parent / "schema.sql"

DEFAULT_LOCK_TIMEOUT = 5.0


def get_connection(
    db_path: str = "mandate.db", lock_timeout: float = DEFAULT_LOCK_TIMEOUT
) -> sqlite3.Connection:
    """
    Get a database connection.

    Transactions are managed explicitly, so the connection runs in
    autocommit mode until BEGIN is issued.

    Args:
        db_path: Path to the SQLite database file
        lock_timeout: Seconds to wait for a locked database

    Returns:
        SQLite connection with row factory set
    """
    conn = sqlite3.connect(
        db_path,
        timeout=lock_timeout,
        isolation_level=None,
        check_same_thread=False,
    )
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def init_database(db_path: str = "mandate.db") -> None:
    """
    Initialize the database with schema.

    Args:
        db_path: Path to the SQLite database file
    """
    conn = get_connection(db_path)
    try:
        with open(SCHEMA_PATH, "r", encoding="utf-8") as f:
            schema = f.read()
        conn.executescript(schema)
        logger.info(f"Database initialized at {db_path}")
    finally:
        conn.close()


class SessionStore:
    """
    Transactional store client.

    Owned by the composition root and passed to the service. Holds no
    session state of its own; each call opens a fresh connection.
    """

    def __init__(self, db_path: str = "mandate.db", lock_timeout: float = DEFAULT_LOCK_TIMEOUT):
        self.db_path = db_path
        self.lock_timeout = lock_timeout

    def init_schema(self) -> None:
        init_database(self.db_path)

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        """
        Open a write transaction.

        BEGIN IMMEDIATE takes the write lock before the first read, so
        concurrent units of work serialize instead of racing on stale
        reads. Commits on success and rolls back on any exception.
        """
        conn = get_connection(self.db_path, self.lock_timeout)
        try:
            conn.execute("BEGIN IMMEDIATE")
            try:
                yield conn
            except BaseException:
                if conn.in_transaction:
                    conn.execute("ROLLBACK")
                raise
            conn.execute("COMMIT")
        finally:
            conn.close()

    @contextmanager
    def read(self) -> Iterator[sqlite3.Connection]:
        """Open a read-only snapshot for projections."""
        conn = get_connection(self.db_path, self.lock_timeout)
        try:
            conn.execute("BEGIN")
            try:
                yield conn
            finally:
                if conn.in_transaction:
                    conn.execute("ROLLBACK")
        finally:
            conn.close()


class BaseRepository:
    """
    Base class for database repositories.

    Repositories wrap the connection of the current unit of work; they
    never commit on their own.
    """

    def __init__(self, conn: sqlite3.Connection):
        """
        Initialize repository.

        Args:
            conn: Connection of the enclosing transaction
        """
        self.conn = conn

    def _execute(
        self, query: str, params: tuple = (), fetch: bool = False
    ) -> Optional[list]:
        """
        Execute a query.

        Args:
            query: SQL query string
            params: Query parameters
            fetch: If True, fetch and return results

        Returns:
            Query results if fetch=True, else None
        """
        cursor = self.conn.execute(query, params)
        if fetch:
            return [dict(row) for row in cursor.fetchall()]
        return None

    def _execute_one(self, query: str, params: tuple = ()) -> Optional[dict]:
        """Execute query and return single result."""
        results = self._execute(query, params, fetch=True)
        return results[0] if results else None

    def _insert(self, query: str, params: tuple = ()) -> int:
        """Execute an INSERT and return the new row id."""
        return self.conn.execute(query, params).lastrowid
