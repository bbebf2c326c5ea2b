# Area: Shared Tests
"""Tests for logging setup and error logging."""

import json
import logging
import sys

from mandate_engine._shared.logging_config import log_engine_error, setup_logging
from mandate_engine._shared.logging_formatters import JSONFormatter, TerminalFormatter
from mandate_engine.errors import DeckExhaustedError, NotYourTurnError


def read_json_lines(path):
    for handler in logging.getLogger("mandate_engine").handlers:
        handler.flush()
    return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]


class TestSetupLogging:
    """Tests for setup_logging()."""

    def test_writes_json_lines(self, tmp_path, package_logger):
        """Test that the file handler writes JSON lines."""
        log_file = tmp_path / "logs" / "engine.log"
        setup_logging(str(log_file), logging.DEBUG)
        logging.getLogger("mandate_engine.service").info(
            "Session %s created", "ABC123", extra={"game_code": "ABC123"}
        )
        entries = read_json_lines(log_file)
        assert entries[-1]["message"] == "Session ABC123 created"
        assert entries[-1]["logger"] == "mandate_engine.service"
        assert entries[-1]["game_code"] == "ABC123"

    def test_respects_level(self, tmp_path, package_logger):
        """Test that records below the level are dropped."""
        log_file = tmp_path / "engine.log"
        setup_logging(str(log_file), logging.WARNING)
        logging.getLogger("mandate_engine.store").info("quiet")
        logging.getLogger("mandate_engine.store").warning("loud")
        assert [e["message"] for e in read_json_lines(log_file)] == ["loud"]

    def test_repeated_setup_does_not_stack_handlers(self, tmp_path, package_logger):
        """Test that repeated setup replaces handlers."""
        setup_logging(str(tmp_path / "a.log"))
        setup_logging(str(tmp_path / "b.log"))
        assert len(package_logger.handlers) == 2
        assert package_logger.propagate is False


class TestLogEngineError:
    """Tests for log_engine_error()."""

    def test_caller_errors_at_info(self, tmp_path, package_logger):
        """Test that caller errors are logged at INFO."""
        log_file = tmp_path / "engine.log"
        setup_logging(str(log_file), logging.DEBUG)
        log_engine_error(NotYourTurnError("It is not your turn"))
        entry = read_json_lines(log_file)[-1]
        assert entry["level"] == "INFO"
        assert entry["error_category"] == "forbidden"

    def test_operational_errors_at_error(self, tmp_path, package_logger):
        """Test that operational errors are logged at ERROR."""
        log_file = tmp_path / "engine.log"
        setup_logging(str(log_file), logging.DEBUG)
        log_engine_error(DeckExhaustedError(1, "General"))
        entry = read_json_lines(log_file)[-1]
        assert entry["level"] == "ERROR"
        assert entry["error_category"] == "deck_exhausted"


class TestFormatters:
    """Tests for the formatters themselves."""

    def test_terminal_formatter_restores_levelname(self):
        """Test that the terminal formatter restores the level name."""
        record = logging.LogRecord("mandate_engine", logging.INFO, __file__, 1, "hi", None, None)
        output = TerminalFormatter(fmt="%(levelname)s %(message)s").format(record)
        assert "\033[32m" in output
        assert record.levelname == "INFO"

    def test_json_formatter_includes_exception(self):
        """Test that the JSON formatter includes the exception."""
        try:
            raise RuntimeError("broken")
        except RuntimeError:
            record = logging.LogRecord(
                "mandate_engine", logging.ERROR, __file__, 1, "failed", None, sys.exc_info()
            )
        data = json.loads(JSONFormatter().format(record))
        assert data["level"] == "ERROR"
        assert "RuntimeError" in data["exception"]
