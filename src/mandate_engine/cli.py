# Area: Shared
"""
mandate_engine.cli — Command-line interface
===========================================

Composition root for local play and administration: builds the
configuration, logging, store and service, then runs one operation.

Usage:
    mandate-engine init-db
    mandate-engine load-cards --catalog cards.json
    mandate-engine create --uid u1 --name Ana --difficulty hard
    mandate-engine join XJ3K9M --uid u2 --name Bruno
    mandate-engine start XJ3K9M
    mandate-engine decide XJ3K9M --uid u1 --option 0
    mandate-engine state XJ3K9M
    mandate-engine restart XJ3K9M --uid u1

Settings come from MANDATE_* environment variables or a .env file.
"""

import argparse
import json
import logging
import sys
from typing import Any, List, Optional

from ._config import load_config
from ._shared.logging_config import log_engine_error, setup_logging
from ._store.catalog import load_catalog
from ._store.database import SessionStore
from ._store.repo_cards import CardRepository
from .errors import MandateEngineError
from .service import GameService

logger = logging.getLogger("mandate_engine.cli")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Mandate Engine - run and inspect game sessions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  mandate-engine init-db
  mandate-engine load-cards
  mandate-engine create --uid u1 --name Ana
  MANDATE_DB_PATH=/tmp/game.db mandate-engine state XJ3K9M
        """,
    )
    parser.add_argument("--db", type=str, help="SQLite database path (overrides MANDATE_DB_PATH)")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("init-db", help="Create the database schema")

    cards = sub.add_parser(
        "load-cards", help="Validate and import a card catalog (skipped if one is loaded)"
    )
    cards.add_argument("--catalog", type=str, help="Catalog JSON (default: bundled catalog)")

    create = sub.add_parser("create", help="Create a session")
    create.add_argument("--uid", required=True)
    create.add_argument("--name", required=True)
    create.add_argument("--difficulty", default="easy", choices=["easy", "hard"])
    create.add_argument("--observer", action="store_true", help="Creator watches without a turn")

    join = sub.add_parser("join", help="Join a waiting session")
    join.add_argument("code")
    join.add_argument("--uid", required=True)
    join.add_argument("--name", required=True)
    join.add_argument("--observer", action="store_true")

    start = sub.add_parser("start", help="Start a waiting session")
    start.add_argument("code")

    decide = sub.add_parser("decide", help="Resolve the current card")
    decide.add_argument("code")
    decide.add_argument("--uid", required=True)
    decide.add_argument("--option", type=int, required=True)

    restart = sub.add_parser("restart", help="Restart a session (creator only)")
    restart.add_argument("code")
    restart.add_argument("--uid", required=True)

    state = sub.add_parser("state", help="Print the full session state")
    state.add_argument("code")

    return parser.parse_args(argv)


def run_command(args: argparse.Namespace, store: SessionStore, service: GameService,
                catalog_path: Optional[str] = None) -> Any:
    """Run one subcommand and return its JSON-serializable result."""
    if args.command == "init-db":
        store.init_schema()
        return {"success": True, "db_path": store.db_path}
    if args.command == "load-cards":
        cards = load_catalog(args.catalog or catalog_path)
        with store.transaction() as conn:
            repo = CardRepository(conn)
            existing = repo.count_cards()
            if existing:
                # The catalog is imported once per database
                logger.info("Catalog already holds %d cards, skipping import", existing)
                return {"success": True, "imported": 0, "existing": existing}
            imported = repo.import_cards(cards)
        return {"success": True, "imported": imported, "existing": 0}
    if args.command == "create":
        return service.create_session(args.uid, args.name, args.difficulty, args.observer)
    if args.command == "join":
        return service.join_session(args.code, args.uid, args.name, args.observer)
    if args.command == "start":
        return service.start_session(args.code)
    if args.command == "decide":
        return service.resolve_decision(args.code, args.uid, args.option).to_dict()
    if args.command == "restart":
        return service.restart_session(args.code, args.uid)
    if args.command == "state":
        return service.get_full_state(args.code)
    raise ValueError(f"Unknown command: {args.command}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    args = parse_args(argv)
    try:
        config = load_config()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    if args.db:
        config.db_path = args.db

    setup_logging(config.log_file, config.level)
    store = SessionStore(config.db_path, config.lock_timeout_seconds)
    service = GameService(
        store,
        opportunist_chance=config.opportunist_chance,
        max_turns=config.max_turns or None,
    )

    try:
        result = run_command(args, store, service, config.catalog_path)
    except MandateEngineError as e:
        log_engine_error(e)
        print(json.dumps(e.to_dict(), ensure_ascii=False, default=str), file=sys.stderr)
        return 2

    print(json.dumps(result, indent=2, ensure_ascii=False, default=str))
    return 0


if __name__ == "__main__":
    sys.exit(main())
