"""
project: Maze Quest
module: maze_api.py
License: MIT

Maze round API routes.

Each browser session owns one game, tracked by an id in the Flask session and
kept in a small in-process store. Endpoints expose what a renderer needs
(walls, goal, player trace, route, status) and accept discrete movement
intents plus the retry / new-game round commands.
"""

import threading
import uuid
from collections import OrderedDict

from flask import Blueprint, current_app, jsonify, request, session

from mazequest.logging_utils import get_logger
from mazequest.maze import (
    InvalidConfigError,
    InvalidDimensionsError,
    InvalidDirectionError,
    MazeConfig,
    MazeGame,
    available_exits,
    parse_direction,
)
from mazequest.maze.config import normalize_variant
from mazequest.validation import MOVE, NEW_GAME, validate

log = get_logger("mazequest.api")

bp_maze = Blueprint("maze", __name__)

# game id -> MazeGame. The dev server may serve requests from several threads:
# _games_lock guards the store, each game's own lock guards its round state.
_games: "OrderedDict[str, MazeGame]" = OrderedDict()
_games_lock = threading.Lock()


def _store_game(game: MazeGame) -> str:
    game_id = uuid.uuid4().hex
    cap = int(current_app.config.get("MAZE_GAME_STORE_MAX", 256))
    with _games_lock:
        _games[game_id] = game
        while len(_games) > cap:
            _games.popitem(last=False)
    session["maze_game_id"] = game_id
    return game_id


def _current_game():
    game_id = session.get("maze_game_id")
    if not game_id:
        return None
    with _games_lock:
        game = _games.get(game_id)
        if game is not None:
            _games.move_to_end(game_id)
        return game


def _no_game():
    return jsonify({"error": "no active game", "code": "no_game"}), 404


def _bad_request(field: str, message: str, code: str):
    return jsonify({"field": field, "error": message, "code": code}), 400


def reset_game_store():
    """Drop every tracked game (test and admin helper)."""
    with _games_lock:
        _games.clear()


@bp_maze.route("/api/maze/new", methods=["POST"])
def new_game():
    """
    Start a new round. Body (all optional): { rows, cols, seed, variant }.
    Missing values fall back to the MAZE_* defaults in app config.
    """
    ok, data = validate(request.get_json(silent=True) or {}, NEW_GAME)
    if not ok:
        return jsonify(data), 400
    variant = data.pop("variant", None)
    try:
        config = MazeConfig.from_mapping(current_app.config, **data)
        if variant is not None:
            config.variant = normalize_variant(variant)
        config.validate()
    except InvalidDimensionsError as e:
        return _bad_request("dimensions", str(e), "dimensions")
    except InvalidConfigError as e:
        return _bad_request("variant", str(e), "config")
    game = MazeGame(config)
    game_id = _store_game(game)
    log.info(event="api_new_game", game=game_id, seed=game.round.seed, rows=config.rows, cols=config.cols)
    return jsonify(game.snapshot()), 201


@bp_maze.route("/api/maze/state")
def state():
    """Return the full round snapshot for the session's game."""
    game = _current_game()
    if game is None:
        return _no_game()
    return jsonify(game.snapshot())


@bp_maze.route("/api/maze/map")
def maze_map():
    """
    Return static round data: { rows, cols, grid: [str], walls, entry, goal, route, markers, seed }.
    """
    game = _current_game()
    if game is None:
        return _no_game()
    with game.lock:
        snap = game.snapshot()
        snap["grid"] = game.grid.to_strings()
    for transient in ("player", "exits", "status"):
        snap.pop(transient, None)
    return jsonify(snap)


@bp_maze.route("/api/maze/move", methods=["POST"])
def move():
    """Apply one movement intent. Body: { dir }. Returns { pos, moved, status, exits }."""
    game = _current_game()
    if game is None:
        return _no_game()
    ok, data = validate(request.get_json(silent=True) or {}, MOVE)
    if not ok:
        return jsonify(data), 400
    try:
        direction = parse_direction(data["dir"])
    except InvalidDirectionError as e:
        return _bad_request("dir", str(e), "direction")
    # One move at a time per game; the reply reflects this move only.
    with game.lock:
        moved = game.move(direction)
        pos = game.player.position
        body = {
            "pos": list(pos),
            "moved": moved,
            "status": game.status,
            "exits": available_exits(game.grid, pos),
        }
    return jsonify(body)


@bp_maze.route("/api/maze/retry", methods=["POST"])
def retry():
    """Restart the current round with the same maze and route."""
    game = _current_game()
    if game is None:
        return _no_game()
    with game.lock:
        game.retry()
        snap = game.snapshot()
    return jsonify(snap)
