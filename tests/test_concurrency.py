# Area: Engine Tests
"""Concurrent decisions on the same session serialize."""

import threading

from mandate_engine.errors import NotYourTurnError

from conftest import fetch_one


def run_concurrently(targets):
    """Release every target at once and collect results or errors."""
    barrier = threading.Barrier(len(targets))
    results = [None] * len(targets)

    def worker(i, target):
        barrier.wait()
        try:
            results[i] = target()
        except Exception as exc:
            results[i] = exc

    threads = [threading.Thread(target=worker, args=(i, t)) for i, t in enumerate(targets)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=30)
    return results


class TestConcurrentDecisions:
    """Tests for racing resolve_decision() calls."""

    def test_double_submit_resolves_once(self, service, store, started_game):
        """Test that a double submit resolves exactly once."""
        code, uids = started_game
        results = run_concurrently([
            lambda: service.resolve_decision(code, uids[0], 0),
            lambda: service.resolve_decision(code, uids[0], 0),
        ])

        errors = [r for r in results if isinstance(r, Exception)]
        outcomes = [r for r in results if not isinstance(r, Exception)]
        assert len(outcomes) == 1
        assert len(errors) == 1
        assert isinstance(errors[0], NotYourTurnError)

        state = service.get_full_state(code)
        assert state["nation"]["economy"] == 6
        assert len(state["logs"]) == 1
        assert state["session"]["current_player_index"] == 1

    def test_racing_players_keep_one_unresolved_card(self, service, store, started_game):
        """Test that racing players leave one unresolved card."""
        code, uids = started_game
        results = run_concurrently([
            lambda uid=uid: service.resolve_decision(code, uid, 1) for uid in uids
        ])

        assert sum(1 for r in results if not isinstance(r, Exception)) >= 1
        assert all(
            isinstance(r, NotYourTurnError) for r in results if isinstance(r, Exception)
        )
        unresolved = fetch_one(
            store, "SELECT COUNT(*) AS n FROM session_decision_cards WHERE is_resolved = 0"
        )
        assert unresolved["n"] == 1
