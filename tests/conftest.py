"""
Pytest fixtures for Woodland engine tests.

Provides the standard board, empty and scenario states, forced dice and
a fresh event bus per test.
"""

import pytest
from pathlib import Path

# Add project root to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from woodland.rules import WOODLAND_BOARD
from woodland.scenarios import build_eyrie_dominion, create_base_state
from woodland.state.event_bus import EventBus, reset_event_bus


@pytest.fixture
def board():
    """The twelve-clearing Woodland board."""
    return WOODLAND_BOARD


@pytest.fixture
def base_state(board):
    """Empty board with full supplies, Marquise birdsong of round 1."""
    return create_base_state(board)


@pytest.fixture
def dominion_state(board):
    """The Eyrie Dominion scenario."""
    return build_eyrie_dominion(board)


@pytest.fixture
def forced_dice():
    """Dice where the attacker rolls 3 and the defender 0."""
    return (3, 0)


@pytest.fixture
def event_bus():
    """Private event bus; the global bus is reset around each test."""
    reset_event_bus()
    yield EventBus()
    reset_event_bus()
