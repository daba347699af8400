"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from typing import Any

import pytest

from knotwork.models import Story
from tests.fixtures.stories import make_locked_door_story, make_walkthrough_story


@pytest.fixture
def walkthrough_story() -> Story[Any]:
    """Two-knot story: start -> look -> hallway.entry (ending)."""
    return make_walkthrough_story()


@pytest.fixture
def locked_door_story() -> Story[Any]:
    """Story whose entry node has one hook-gated choice."""
    return make_locked_door_story()
