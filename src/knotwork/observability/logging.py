"""Structured logging configuration for knotwork.

Provides two logging modes:
- Console logging: Controlled by verbosity (WARNING/INFO/DEBUG to stderr)
- File logging: Optional JSONL sink under a caller-chosen directory

Both are opt-in through configure_logging. Until then, knotwork events go to
the stdlib logger named after the emitting module.
"""

from __future__ import annotations

import json
import logging
import os
from datetime import UTC, datetime
from pathlib import Path  # noqa: TC003 - Used at runtime for path operations
from typing import TYPE_CHECKING

import structlog
from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from structlog.typing import Processor

VERBOSITY_ENV_VAR = "KNOTWORK_LOG_VERBOSITY"
LOG_FILE_NAME = "knotwork.jsonl"

# Module-level state
_file_handler: logging.FileHandler | None = None
_logs_dir: Path | None = None


class JSONLFileHandler(logging.FileHandler):
    """File handler that writes JSONL format."""

    def emit(self, record: logging.LogRecord) -> None:
        """Write log record as JSON line."""
        try:
            entry = {
                "timestamp": datetime.now(UTC).isoformat(),
                "level": record.levelname,
                "logger": record.name,
            }

            # structlog passes the event dict via record.msg when using wrap_for_formatter
            if isinstance(record.msg, dict):
                event_dict = record.msg.copy()
                event_dict.pop("level", None)
                event_dict.pop("timestamp", None)
                entry["message"] = event_dict.pop("event", str(record.msg))
                entry.update(event_dict)
            else:
                entry["message"] = record.getMessage()

            line = json.dumps(entry, default=str) + "\n"
            if self.stream:
                self.stream.write(line)
                self.stream.flush()
        except Exception:
            self.handleError(record)


def verbosity_from_env(default: int = 0) -> int:
    """Read console verbosity from ``KNOTWORK_LOG_VERBOSITY``.

    Non-numeric values fall back to *default*.
    """
    raw = os.getenv(VERBOSITY_ENV_VAR, "").strip()
    if not raw:
        return default
    try:
        return max(0, int(raw))
    except ValueError:
        return default


def configure_logging(
    verbosity: int | None = None,
    log_to_file: bool = False,
    log_dir: Path | None = None,
) -> None:
    """Configure logging for an application embedding knotwork.

    Replaces the root logger's handlers, so only a program that owns its
    logging setup should call this. Importing knotwork never does.

    Args:
        verbosity: 0=WARNING, 1=INFO, 2+=DEBUG. None reads ``KNOTWORK_LOG_VERBOSITY``
            (default 0).
        log_to_file: If True, also write every event to ``{log_dir}/knotwork.jsonl``.
        log_dir: Directory for file logging. Required if log_to_file=True.

    Raises:
        ValueError: If log_to_file=True but log_dir is not provided.
    """
    global _file_handler, _logs_dir

    if verbosity is None:
        verbosity = verbosity_from_env()

    if log_to_file and log_dir is None:
        raise ValueError("log_dir is required when log_to_file=True")

    # Close existing file handler if reconfiguring
    if _file_handler is not None:
        _file_handler.close()
        _file_handler = None

    levels = {0: logging.WARNING, 1: logging.INFO}
    console_level = levels.get(verbosity, logging.DEBUG)

    console = Console(stderr=True)
    console_handler = RichHandler(
        console=console,
        rich_tracebacks=True,
        tracebacks_show_locals=verbosity >= 2,
        show_time=verbosity >= 1,
        show_path=verbosity >= 2,
        markup=False,
        level=console_level,
    )

    handlers: list[logging.Handler] = [console_handler]

    if log_to_file and log_dir:
        _logs_dir = log_dir
        _logs_dir.mkdir(parents=True, exist_ok=True)

        _file_handler = JSONLFileHandler(str(_logs_dir / LOG_FILE_NAME), mode="a")
        _file_handler.setLevel(logging.DEBUG)
        handlers.append(_file_handler)
    else:
        _logs_dir = None

    root_level = logging.DEBUG if (verbosity > 0 or log_to_file) else logging.WARNING
    logging.basicConfig(
        level=root_level,
        format="%(message)s",
        handlers=handlers,
        force=True,
    )

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(root_level),
        cache_logger_on_first_use=True,
    )



def _route_to_stdlib() -> None:
    """Send events through stdlib ``logging`` without touching its handlers.

    Used until the host configures structlog or calls configure_logging, so
    knotwork events obey whatever handlers and levels the host has set up.
    """
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.render_to_log_kwargs,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> structlog.typing.FilteringBoundLogger:
    """Get a structured logger instance.

    Never configures handlers: console and file output are opt-in through
    configure_logging. If structlog itself is unconfigured, events are
    handed to the stdlib logger of the same name.

    Args:
        name: Logger name (typically __name__).

    Returns:
        Bound logger instance.
    """
    if not structlog.is_configured():
        _route_to_stdlib()

    logger: structlog.typing.FilteringBoundLogger = structlog.get_logger(name)
    return logger


def get_logs_dir() -> Path | None:
    """Get the configured logs directory.

    Returns:
        Path to logs directory if file logging is enabled, None otherwise.
    """
    return _logs_dir


def close_file_logging() -> None:
    """Close file logging handler."""
    global _file_handler
    if _file_handler:
        _file_handler.close()
        _file_handler = None
