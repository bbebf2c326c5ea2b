# Area: Tests
"""End-to-end tests for the command-line interface."""

import json
import sqlite3

import pytest

from mandate_engine.cli import main, parse_args


@pytest.fixture
def run(tmp_path, monkeypatch, capsys, package_logger):
    """Run the CLI against a temporary database and return (code, stdout JSON, stderr)."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("MANDATE_LOG_FILE", str(tmp_path / "engine.log"))
    monkeypatch.setenv("MANDATE_OPPORTUNIST_CHANCE", "0")
    db = str(tmp_path / "cli.db")

    def _run(*argv):
        exit_code = main(["--db", db, *argv])
        captured = capsys.readouterr()
        payload = json.loads(captured.out) if captured.out.strip() else None
        return exit_code, payload, captured.err

    return _run


def last_json_line(text):
    return json.loads(text.strip().splitlines()[-1])


class TestParseArgs:
    """Tests for parse_args()."""

    def test_decide_option_is_int(self):
        """Test that the decide option is parsed as an int."""
        args = parse_args(["decide", "ABC123", "--uid", "u1", "--option", "1"])
        assert args.option == 1
        assert args.db is None

    def test_command_required(self):
        """Test that a subcommand is required."""
        with pytest.raises(SystemExit):
            parse_args([])


class TestMain:
    """Tests for main()."""

    def test_full_game_flow(self, run):
        """Test a full create, join, start, decide and restart flow."""
        assert run("init-db")[0] == 0

        exit_code, loaded, _ = run("load-cards")
        assert exit_code == 0
        assert loaded["imported"] > 0

        _, created, _ = run("create", "--uid", "u1", "--name", "Ana", "--difficulty", "hard")
        code = created["session_code"]
        assert run("join", code, "--uid", "u2", "--name", "Bruno")[1]["rejoined"] is False
        assert run("start", code)[1]["status"] == "in_progress"

        _, state, _ = run("state", code)
        assert state["session"]["difficulty"] == "hard"
        assert state["current_card"] is not None

        exit_code, outcome, _ = run("decide", code, "--uid", "u1", "--option", "0")
        assert exit_code == 0
        assert outcome["current_player_index"] == 1

        assert run("restart", code, "--uid", "u1")[1]["status"] == "waiting"

    def test_load_cards_twice_keeps_one_catalog(self, run, tmp_path):
        """Test that a second load-cards run does not duplicate the catalog."""
        run("init-db")
        _, first, _ = run("load-cards")
        exit_code, second, _ = run("load-cards")

        assert exit_code == 0
        assert second["imported"] == 0
        assert second["existing"] == first["imported"]

        conn = sqlite3.connect(str(tmp_path / "cli.db"))
        try:
            count = conn.execute("SELECT COUNT(*) FROM decision_cards").fetchone()[0]
        finally:
            conn.close()
        assert count == first["imported"]

    def test_engine_error_exit_code(self, run):
        """Test that engine errors exit with code 2 and JSON on stderr."""
        run("init-db")
        exit_code, payload, err = run("state", "NOPE42")
        assert exit_code == 2
        assert payload is None
        assert last_json_line(err)["error"] == "not_found"

    def test_out_of_turn_decision(self, run):
        """Test that an out-of-turn decision reports forbidden."""
        run("init-db")
        run("load-cards")
        code = run("create", "--uid", "u1", "--name", "Ana")[1]["session_code"]
        run("join", code, "--uid", "u2", "--name", "Bruno")
        run("start", code)
        exit_code, _, err = run("decide", code, "--uid", "u2", "--option", "0")
        assert exit_code == 2
        assert last_json_line(err)["error"] == "forbidden"

    def test_invalid_config(self, run, monkeypatch):
        """Test that invalid configuration exits with code 1."""
        monkeypatch.setenv("MANDATE_MAX_TURNS", "forever")
        exit_code, _, err = run("init-db")
        assert exit_code == 1
        assert "MANDATE_MAX_TURNS" in err

    def test_bad_catalog(self, run, tmp_path):
        """Test that an invalid catalog reports invalid_input."""
        run("init-db")
        catalog = tmp_path / "bad.json"
        catalog.write_text(json.dumps([{"title": "X", "dilemma": "?", "options": []}]))
        exit_code, _, err = run("load-cards", "--catalog", str(catalog))
        assert exit_code == 2
        assert last_json_line(err)["error"] == "invalid_input"
