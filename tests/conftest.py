import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from delve import create_app  # noqa: E402
from delve.routes.game_api import clear_games  # noqa: E402
from delve.world.entities import make_player  # noqa: E402
from delve.world.registry import EntityRegistry  # noqa: E402
from tests.dungeon_test_utils import World, open_grid  # noqa: E402


@pytest.fixture(scope="session")
def test_app():
    app = create_app({"TESTING": True, "DELVE_MAX_GAMES": 8})
    return app


@pytest.fixture()
def client(test_app):
    clear_games()
    yield test_app.test_client()
    clear_games()


@pytest.fixture()
def world():
    """20x20 open arena with the player at (5, 5)."""
    grid = open_grid()
    registry = EntityRegistry([make_player(5, 5, hp=30, defence=2, power=5)])
    return World(grid, registry)
