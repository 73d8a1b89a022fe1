"""
Pytest fixtures for Tictac tests.
"""

import pytest

from ..config import Config
from ..engine_core.state import Game
from ..session import GameManager
from ..storage import MemoryStore
from ..api.service import GameService


PLAYER_ONE = "11" * 32
PLAYER_TWO = "22" * 32
OUTSIDER = "33" * 32


@pytest.fixture
def player_one() -> str:
    return PLAYER_ONE


@pytest.fixture
def player_two() -> str:
    return PLAYER_TWO


@pytest.fixture
def outsider() -> str:
    return OUTSIDER


@pytest.fixture
def new_game() -> Game:
    """A fresh game between player one and player two."""
    return Game.create(PLAYER_ONE, PLAYER_TWO)


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def manager(store: MemoryStore) -> GameManager:
    """Manager with an initialized registry."""
    manager = GameManager(store)
    manager.initialize_registry()
    return manager


@pytest.fixture
def service(manager: GameManager) -> GameService:
    return GameService(manager=manager)


@pytest.fixture
def debug_config() -> Config:
    """Trust X-Player-Id without signatures."""
    return Config(debug=True)


@pytest.fixture
def secret_config() -> Config:
    return Config(auth_secret="test-secret")
