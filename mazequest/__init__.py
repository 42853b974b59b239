"""
project: Maze Quest
module: __init__.py
License: MIT

Flask application object and configuration.

Configuration is sourced from environment variables (optionally via a .env
file) with reasonable defaults for development. Maze defaults use the
``MAZE_*`` keys understood by ``MazeConfig.from_mapping``. A local
`instance/` directory holds runtime files such as the rotating log.
"""

import logging
import os
import uuid

from dotenv import load_dotenv
from flask import Flask, jsonify

from mazequest.maze.errors import MazeGenerationError

__version__ = "0.2.0"

# Load .env if present so `SECRET_KEY`, `MAZE_ROWS`, etc. can be supplied
# without exporting shell variables during development.
load_dotenv()

app = Flask(__name__, instance_relative_config=True)

try:
    os.makedirs(app.instance_path, exist_ok=True)
except OSError:
    # Read-only checkouts still work; only the log file needs the folder.
    pass

app.config.update(
    SECRET_KEY=os.getenv("SECRET_KEY", "dev-secret-change-me"),
    # Upper bound on concurrently tracked games in the in-process store
    MAZE_GAME_STORE_MAX=int(os.getenv("MAZE_GAME_STORE_MAX", "256")),
)
# Maze defaults pass through untyped; MazeConfig.from_mapping converts them.
app.config.update({k: v for k, v in os.environ.items() if k.startswith("MAZE_") and k != "MAZE_GAME_STORE_MAX"})

# Register HTTP blueprints (import after app created)
from mazequest.routes.maze_api import bp_maze  # noqa: E402

app.register_blueprint(bp_maze)


def create_app(overrides: dict | None = None):
    """Return the Flask app instance with optional config overrides applied."""
    if overrides:
        app.config.update(overrides)
    return app


@app.errorhandler(MazeGenerationError)
def maze_generation_error(e):
    error_id = uuid.uuid4().hex[:8]
    logging.getLogger(__name__).error("Maze generation failed (id=%s, seed=%s): %s", error_id, e.seed, e)
    return jsonify({"error": "maze generation failed", "error_id": error_id, "seed": e.seed}), 500
