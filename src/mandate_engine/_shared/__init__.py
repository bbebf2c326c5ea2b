# Area: Shared
"""
Shared utilities used by the engine, the store and the CLI.

This package contains:
- Logging configuration
- Terminal and JSON log formatters
"""

from .logging_config import setup_logging, log_engine_error
from .logging_formatters import JSONFormatter, TerminalFormatter

__all__ = [
    "setup_logging",
    "log_engine_error",
    "JSONFormatter",
    "TerminalFormatter",
]
