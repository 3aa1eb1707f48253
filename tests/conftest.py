"""Shared fixtures for the engine and front-end tests."""
import os
import sys
from pathlib import Path

import pytest

# Add project root to path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# pygame must never open a real window during tests
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

from jump_engine import GameConfig, GameEngine, ManualScheduler  # noqa: E402


class FixedRandom:
    """Random source whose randrange() hands out preset values, recording each call."""

    def __init__(self, *values):
        self.values = list(values)
        self.calls = []

    def randrange(self, start, stop):
        self.calls.append((start, stop))
        return self.values.pop(0)


@pytest.fixture
def config():
    return GameConfig()


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def rng():
    return FixedRandom(123, 150, 170, 399, 0)


@pytest.fixture
def engine(scheduler, config, rng):
    return GameEngine(scheduler, config, rng=rng)
