import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from mazequest import create_app  # noqa: E402
from mazequest.maze import Grid  # noqa: E402
from mazequest.routes.maze_api import reset_game_store  # noqa: E402

# Entry (1,1) with a corridor east to (1,3) and a side pocket south of the entry.
CORRIDOR_LINES = [
    "#####",
    "#...#",
    "#.###",
    "#.###",
    "#####",
]


@pytest.fixture(scope="session")
def test_app():
    app = create_app({"TESTING": True, "MAZE_ROWS": 11, "MAZE_COLS": 11})
    return app


@pytest.fixture()
def client(test_app):
    reset_game_store()
    c = test_app.test_client()
    yield c
    reset_game_store()


@pytest.fixture
def corridor_grid():
    return Grid.from_strings(CORRIDOR_LINES)


@pytest.fixture(autouse=True)
def _quiet_structured_logs(monkeypatch):
    """Keep key=value log lines out of captured output unless a test opts in."""
    monkeypatch.setenv("MAZEQUEST_LOG_LEVEL", "error")
    yield


def pytest_configure(config):  # register custom marker
    config.addinivalue_line("markers", "performance: generation speed guardrails (large grids)")
