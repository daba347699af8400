"""Observability module for knotwork.

Provides structured logging for the analyzer and the runtime.
"""

from knotwork.observability.logging import (
    close_file_logging,
    configure_logging,
    get_logger,
    get_logs_dir,
    verbosity_from_env,
)

__all__ = [
    "close_file_logging",
    "configure_logging",
    "get_logger",
    "get_logs_dir",
    "verbosity_from_env",
]
