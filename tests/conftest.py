"""
Shared fixtures for the gitsim test suite.
"""

import pytest

from gitsim.config import Config
from gitsim.operations import GitOperations
from gitsim.session import Simulator
from gitsim.state import StateManager, create_initial_state


class FakeClock:
    """Manually advanced time source."""

    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def cfg() -> Config:
    """Default configuration, independent of the environment."""
    return Config()


@pytest.fixture
def state_manager(cfg):
    return StateManager(create_initial_state(cfg))


@pytest.fixture
def ops(state_manager, cfg):
    """Operations engine over a fresh one-commit repository."""
    return GitOperations(state_manager, cfg)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def simulator(cfg, clock):
    """Session without saved-state storage."""
    return Simulator(cfg=cfg, clock=clock)
