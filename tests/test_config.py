# Area: Tests
"""Tests for configuration loading."""

import logging

import pytest

from mandate_engine._config import DEFAULT_MAX_TURNS, EngineConfig, load_config, validate_config


class TestLoadConfig:
    """Tests for load_config()."""

    def test_defaults(self):
        """Test default configuration values."""
        config = load_config(env={})
        assert config.db_path == "mandate.db"
        assert config.max_turns == DEFAULT_MAX_TURNS
        assert config.opportunist_chance == 0.25
        assert config.level == logging.INFO
        assert config.catalog_path.endswith("cards.json")

    def test_overrides(self):
        """Test overriding every setting from the environment."""
        config = load_config(env={
            "MANDATE_DB_PATH": "/tmp/game.db",
            "MANDATE_LOG_LEVEL": "debug",
            "MANDATE_LOCK_TIMEOUT": "2.5",
            "MANDATE_MAX_TURNS": "0",
            "MANDATE_OPPORTUNIST_CHANCE": "1",
        })
        assert config.db_path == "/tmp/game.db"
        assert config.level == logging.DEBUG
        assert config.lock_timeout_seconds == 2.5
        assert config.max_turns == 0
        assert config.opportunist_chance == 1.0

    def test_unparseable_value(self):
        """Test that an unparseable value names its variable."""
        with pytest.raises(ValueError, match="MANDATE_MAX_TURNS"):
            load_config(env={"MANDATE_MAX_TURNS": "many"})

    def test_out_of_range_value(self):
        """Test that an out-of-range value is rejected."""
        with pytest.raises(ValueError, match="opportunist_chance"):
            load_config(env={"MANDATE_OPPORTUNIST_CHANCE": "1.5"})

    def test_reads_dotenv_file(self, tmp_path, monkeypatch):
        """Test reading settings from a .env file in the working directory."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("MANDATE_DB_PATH", raising=False)
        (tmp_path / ".env").write_text("MANDATE_DB_PATH=from_dotenv.db\n", encoding="utf-8")
        # monkeypatch removes the variable load_dotenv sets on teardown
        assert load_config().db_path == "from_dotenv.db"


class TestValidateConfig:
    """Tests for validate_config()."""

    def test_collects_every_error(self):
        """Test that validation reports every invalid field."""
        config = EngineConfig(max_turns=-1, lock_timeout_seconds=-1, log_level="LOUD")
        with pytest.raises(ValueError) as exc_info:
            validate_config(config)
        message = str(exc_info.value)
        assert "max_turns" in message
        assert "lock_timeout_seconds" in message
        assert "LOUD" in message
