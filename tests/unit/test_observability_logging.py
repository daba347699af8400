"""Tests for structured logging configuration."""

from __future__ import annotations

import json
import logging
import os
import subprocess
import sys
from typing import TYPE_CHECKING

import pytest

from knotwork.observability import (
    close_file_logging,
    configure_logging,
    get_logger,
    get_logs_dir,
    verbosity_from_env,
)

if TYPE_CHECKING:
    from pathlib import Path


def test_configure_logging_sets_level_warning() -> None:
    """Default verbosity (0) sets WARNING level."""
    configure_logging(verbosity=0)

    root_logger = logging.getLogger()
    assert root_logger.level == logging.WARNING


def test_configure_logging_verbose_sets_debug_root() -> None:
    """verbosity=1 opens the root logger; the console handler filters at INFO."""
    configure_logging(verbosity=1)

    root_logger = logging.getLogger()
    assert root_logger.level == logging.DEBUG
    assert root_logger.handlers[0].level == logging.INFO


def test_configure_logging_very_verbose_sets_debug() -> None:
    """verbosity=2 sets DEBUG level."""
    configure_logging(verbosity=2)

    root_logger = logging.getLogger()
    assert root_logger.level == logging.DEBUG
    assert root_logger.handlers[0].level == logging.DEBUG


def test_get_logger_returns_bound_logger() -> None:
    """get_logger returns a structlog logger with expected methods."""
    logger = get_logger(__name__)

    assert hasattr(logger, "info")
    assert hasattr(logger, "debug")
    assert hasattr(logger, "error")
    assert hasattr(logger, "warning")


def test_get_logger_leaves_root_logger_alone() -> None:
    """get_logger never installs or removes handlers."""
    root_logger = logging.getLogger()
    handlers_before = list(root_logger.handlers)
    level_before = root_logger.level

    get_logger("test")

    assert root_logger.handlers == handlers_before
    assert root_logger.level == level_before


def test_configure_logging_reads_env_verbosity(monkeypatch: pytest.MonkeyPatch) -> None:
    """Without an explicit verbosity, KNOTWORK_LOG_VERBOSITY is used."""
    monkeypatch.setenv("KNOTWORK_LOG_VERBOSITY", "2")

    configure_logging()

    assert logging.getLogger().handlers[0].level == logging.DEBUG


_HOST_APP = """
import logging
import sys

stream = logging.StreamHandler(sys.stdout)
stream.setFormatter(logging.Formatter("%(name)s %(message)s"))
root = logging.getLogger()
root.addHandler(stream)
root.setLevel(logging.INFO)

from knotwork import Story, analyze_story

analyze_story(
    Story.from_dict(
        {
            "entryKnot": "intro",
            "knots": {
                "intro": {
                    "id": "intro",
                    "entryNode": "start",
                    "nodes": {"start": {"id": "start"}},
                }
            },
        }
    )
)
print("kept", stream in root.handlers, logging.getLevelName(root.level), len(root.handlers))
"""


def test_import_keeps_host_logging_setup() -> None:
    """An embedding application's handlers and level survive import and use."""
    env = {**os.environ, "PYTHONPATH": os.pathsep.join(p for p in sys.path if p)}

    result = subprocess.run(
        [sys.executable, "-c", _HOST_APP],
        capture_output=True,
        text=True,
        env=env,
        check=True,
    )

    lines = result.stdout.splitlines()
    assert lines[-1] == "kept True INFO 1"
    # Events reach the host's own handler under the emitting module's name.
    assert "knotwork.graph.analyzer story_analyzed" in lines


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("", 0), ("1", 1), (" 2 ", 2), ("-3", 0), ("loud", 0)],
)
def test_verbosity_from_env(monkeypatch: pytest.MonkeyPatch, raw: str, expected: int) -> None:
    """Unset, negative and non-numeric values fall back safely."""
    monkeypatch.setenv("KNOTWORK_LOG_VERBOSITY", raw)

    assert verbosity_from_env() == expected


def test_verbosity_from_env_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("KNOTWORK_LOG_VERBOSITY", "loud")

    assert verbosity_from_env(default=1) == 1


def test_configure_logging_with_file_logging(tmp_path: Path) -> None:
    """File logging creates the logs directory."""
    logs_dir = tmp_path / "logs"

    configure_logging(verbosity=0, log_to_file=True, log_dir=logs_dir)

    assert logs_dir.exists()
    assert get_logs_dir() == logs_dir
    close_file_logging()


def test_configure_logging_without_file_logging(tmp_path: Path) -> None:
    """Without file logging flag, logs directory is not created."""
    logs_dir = tmp_path / "logs"

    configure_logging(verbosity=0, log_to_file=False, log_dir=logs_dir)

    assert not logs_dir.exists()
    assert get_logs_dir() is None


def test_configure_logging_requires_log_dir_for_file_logging() -> None:
    """log_to_file=True without log_dir raises ValueError."""
    with pytest.raises(ValueError, match="log_dir is required"):
        configure_logging(verbosity=0, log_to_file=True, log_dir=None)


def test_configure_logging_reconfiguration_closes_handler(tmp_path: Path) -> None:
    """Reconfiguring logging closes previous file handler."""
    import knotwork.observability.logging as log_module

    configure_logging(verbosity=0, log_to_file=True, log_dir=tmp_path)
    first_handler = log_module._file_handler
    assert first_handler is not None

    configure_logging(verbosity=0, log_to_file=True, log_dir=tmp_path)
    second_handler = log_module._file_handler

    # stream is None after close
    assert first_handler.stream is None or first_handler.stream.closed
    assert second_handler is not None
    close_file_logging()


def test_close_file_logging_clears_handler(tmp_path: Path) -> None:
    """close_file_logging closes handler and clears reference."""
    import knotwork.observability.logging as log_module

    configure_logging(verbosity=0, log_to_file=True, log_dir=tmp_path)
    assert log_module._file_handler is not None

    close_file_logging()

    assert log_module._file_handler is None


def test_jsonl_file_handler_writes_structlog_context(tmp_path: Path) -> None:
    """JSONLFileHandler correctly extracts structlog context to JSONL."""
    configure_logging(verbosity=2, log_to_file=True, log_dir=tmp_path)

    logger = get_logger("test.context")
    logger.info("test_event", key1="value1", key2=42, where=tmp_path)

    close_file_logging()

    log_file = tmp_path / "knotwork.jsonl"
    assert log_file.exists()

    found = False
    with log_file.open() as f:
        for line in f:
            entry = json.loads(line)
            if entry.get("message") == "test_event":
                found = True
                assert entry["key1"] == "value1"
                assert entry["key2"] == 42
                assert entry["level"] == "INFO"
                # Non-JSON values are stringified
                assert entry["where"] == str(tmp_path)
                break

    assert found, "Log entry with structlog context not found in JSONL"
