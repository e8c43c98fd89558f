"""Shared pytest fixtures for Pong tests."""

import os
import random

import pytest

from pong_logic import GameState

# Qt tests run without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture
def state():
    """800x600 game with a seeded random source."""
    return GameState(800, 600, random.Random(1234))


@pytest.fixture
def still_state(state):
    """Same game with the ball parked at the centre, not moving."""
    state.ball_vx = 0.0
    state.ball_vy = 0.0
    return state
