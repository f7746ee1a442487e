import pytest

from game.asteroids.config import GameConfig
from game.asteroids.utils import make_rng


@pytest.fixture
def config():
    """Default 200x200 field."""
    return GameConfig()


@pytest.fixture
def rng():
    return make_rng(1234)
