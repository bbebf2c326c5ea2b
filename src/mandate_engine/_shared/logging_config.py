# Area: Shared
"""
mandate_engine._shared.logging_config — Structured logging setup
================================================================

Configures dual logging: terminal (colored) + file (JSON).
Provides the helper that logs engine errors at the level their
category deserves.
"""

from __future__ import annotations
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from .logging_formatters import JSONFormatter, TerminalFormatter

if TYPE_CHECKING:
    from ..errors import MandateEngineError

# Package logger
logger = logging.getLogger("mandate_engine")

# Categories that point at broken data or infrastructure, not at the caller
OPERATIONAL_CATEGORIES = {"deck_exhausted", "code_generation", "internal"}


def setup_logging(
    log_file_path: str = "mandate_engine.log",
    level: int = logging.INFO,
) -> None:
    """
    Configure logging for the package.

    Parameters
    ----------
    log_file_path : str
        Path to the log file. Defaults to 'mandate_engine.log' in current dir.
    level : int
        Logging level. Defaults to INFO.
    """
    pkg_logger = logging.getLogger("mandate_engine")
    pkg_logger.setLevel(level)

    # Remove existing handlers
    pkg_logger.handlers.clear()

    # Terminal handler with colors
    terminal_handler = logging.StreamHandler(sys.stderr)
    terminal_handler.setLevel(level)
    terminal_handler.setFormatter(TerminalFormatter(
        fmt="%(asctime)s │ %(levelname)s │ %(name)s │ %(message)s",
        datefmt="%H:%M:%S",
    ))
    pkg_logger.addHandler(terminal_handler)

    # File handler with JSON
    try:
        log_path = Path(log_file_path)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(JSONFormatter())
        pkg_logger.addHandler(file_handler)
    except OSError as e:
        pkg_logger.warning(f"Could not create log file: {e}")

    # Prevent propagation to root logger
    pkg_logger.propagate = False


def log_engine_error(error: "MandateEngineError") -> None:
    """
    Log an engine error surfaced to a caller.

    Caller-recoverable categories (not_found, forbidden, ...) are logged
    at INFO; operational ones at ERROR.

    Parameters
    ----------
    error : MandateEngineError
        The error returned to the caller.
    """
    level = logging.ERROR if error.category in OPERATIONAL_CATEGORIES else logging.INFO
    logger.log(
        level,
        f"{error.__class__.__name__}: {error.message}",
        extra={"error_category": error.category},
    )
