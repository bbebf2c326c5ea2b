# Area: Shared
"""
mandate_engine._config — Engine Configuration
=============================================

Configuration values for the composition root, read from the
environment after loading an optional .env file.
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import find_dotenv, load_dotenv

from ._engine.roles import OPPORTUNIST_CHANCE
from ._store.catalog import DEFAULT_CATALOG_PATH
from ._store.database import DEFAULT_LOCK_TIMEOUT

DEFAULT_MAX_TURNS = 15

LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

# env var -> (config field, converter)
ENV_MAPPINGS = {
    "MANDATE_DB_PATH": ("db_path", str),
    "MANDATE_LOG_FILE": ("log_file", str),
    "MANDATE_LOG_LEVEL": ("log_level", lambda v: v.upper()),
    "MANDATE_LOCK_TIMEOUT": ("lock_timeout_seconds", float),
    "MANDATE_MAX_TURNS": ("max_turns", int),
    "MANDATE_OPPORTUNIST_CHANCE": ("opportunist_chance", float),
    "MANDATE_CATALOG_PATH": ("catalog_path", str),
}


@dataclass
class EngineConfig:
    """
    Settings for the store, logging and game rules.

    Attributes:
        db_path: SQLite database file
        log_file: JSON log file
        log_level: Logging level name
        lock_timeout_seconds: How long a request waits for the write lock
        max_turns: Round limit before timed-out collapse, 0 disables it
        opportunist_chance: Probability of rolling an Opportunist at start
        catalog_path: Decision card catalog JSON
    """

    db_path: str = "mandate.db"
    log_file: str = "mandate_engine.log"
    log_level: str = "INFO"
    lock_timeout_seconds: float = DEFAULT_LOCK_TIMEOUT
    max_turns: int = DEFAULT_MAX_TURNS
    opportunist_chance: float = OPPORTUNIST_CHANCE
    catalog_path: str = str(DEFAULT_CATALOG_PATH)

    @property
    def level(self) -> int:
        return getattr(logging, self.log_level)


def validate_config(config: EngineConfig) -> None:
    """
    Validate configuration values.

    Args:
        config: Configuration to check

    Raises:
        ValueError: If any value is out of range
    """
    errors = []
    if not 0.0 <= config.opportunist_chance <= 1.0:
        errors.append("opportunist_chance must be between 0 and 1")
    if config.max_turns < 0:
        errors.append("max_turns must not be negative")
    if config.lock_timeout_seconds < 0:
        errors.append("lock_timeout_seconds must not be negative")
    if config.log_level not in LOG_LEVELS:
        errors.append(f"unknown log_level: {config.log_level}")
    if errors:
        raise ValueError(f"Invalid configuration: {errors}")


def load_config(env: Optional[Mapping[str, str]] = None) -> EngineConfig:
    """
    Build configuration from environment variables.

    Args:
        env: Mapping to read instead of os.environ (.env is then skipped)

    Returns:
        Validated EngineConfig
    """
    if env is None:
        load_dotenv(find_dotenv(usecwd=True))
        env = os.environ

    values = {}
    for env_key, (field_name, convert) in ENV_MAPPINGS.items():
        if env_key in env:
            try:
                values[field_name] = convert(env[env_key])
            except ValueError as e:
                raise ValueError(f"Invalid value for {env_key}: {env[env_key]!r}") from e

    config = EngineConfig(**values)
    validate_config(config)
    return config
