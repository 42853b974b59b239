"""
project: Maze Quest
module: server.py
License: MIT

Server bootstrap and terminal play shell.

Exposes helpers to start the Flask server, print a generated maze, and run an
interactive terminal round driven by typed movement commands.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler

from mazequest import app
from mazequest.logging_utils import get_logger
from mazequest.maze import (
    WON_OPTIMAL,
    InvalidDirectionError,
    MazeConfig,
    MazeGame,
    MazeGenerator,
    parse_direction,
    prepare_round,
)
from mazequest.maze.render import render_text

log = get_logger("mazequest.server")


def start_server(host="0.0.0.0", port=5000, debug: bool = False):  # pragma: no cover (runtime only)
    """Start the Flask development server with file + console logging configured."""
    _configure_logging()
    try:
        print(f"[INFO] Starting maze server on {host}:{port}")
        app.run(host=host, port=port, debug=debug)
    except KeyboardInterrupt:
        print("\n[INFO] Server stopped by user (Ctrl+C)")
        sys.exit(0)


def _configure_logging():
    """Configure logging to both console and a rotating file in instance/.

    The file path will be instance/app.log. Retains a few backups to avoid growth.
    """
    log_dir = app.instance_path
    try:
        os.makedirs(log_dir, exist_ok=True)
    except OSError:
        pass
    log_path = os.path.join(log_dir, "app.log")

    root = logging.getLogger()
    root.setLevel(logging.INFO)

    file_handler = RotatingFileHandler(log_path, maxBytes=1_000_000, backupCount=3)
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))

    console = logging.StreamHandler()
    console.setLevel(logging.INFO)
    console.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))

    # Avoid duplicate handlers if reconfigured
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()

    root.addHandler(file_handler)
    root.addHandler(console)


def show_maze(config: MazeConfig, show_route: bool = False, show_markers: bool = False, color: bool = False) -> str:
    """Generate a maze and return its text rendering (goal and optional route overlaid)."""
    result = MazeGenerator(config).run()
    rnd = prepare_round(result.grid, seed=result.seed, markers=result.markers, metrics=result.metrics)
    text = render_text(
        rnd.grid,
        goal=rnd.goal,
        route=rnd.route if show_route else None,
        markers=rnd.markers if show_markers else None,
        color=color,
    )
    header = f"seed={rnd.seed} size={rnd.grid.rows}x{rnd.grid.cols} goal={rnd.goal} route_len={len(rnd.route)}"
    return header + "\n" + text


def play_shell(config: MazeConfig, color: bool = False):
    """
    Interactive terminal round.
    Commands:
      w/a/s/d, up/down/left/right   Move one cell
      route                         Toggle the optimal route overlay
      retry                         Restart this maze
      new                           Generate a new maze
      help                          Show this help message
      quit                          Leave the game
    """
    game = MazeGame(config)
    show_route = False

    def draw():
        print(
            render_text(
                game.grid,
                player=game.player.position,
                goal=game.goal,
                route=game.route if show_route else None,
                trace=game.player.history,
                color=color,
            )
        )
        print(f"seed={game.round.seed} steps={len(game.player.history) - 1} status={game.status}")

    def print_help():
        print(
            """
Available commands:
  w/a/s/d, up/down/left/right   Move one cell
  route                         Toggle the optimal route overlay
  retry                         Restart this maze
  new                           Generate a new maze
  help                          Show this help message
  quit                          Leave the game
"""
        )

    print("Maze shell. Type 'help' for commands. Type 'quit' to leave.")
    draw()
    while True:
        try:
            cmd = input("> ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nExiting maze shell.")
            break
        if not cmd:
            continue
        word = cmd.lower()
        if word in ("quit", "exit"):
            break
        elif word == "help":
            print_help()
            continue
        elif word == "route":
            show_route = not show_route
        elif word == "retry":
            game.retry()
        elif word == "new":
            game.new_game()
        else:
            # A line of WASD letters is replayed as a sequence of moves.
            keys = list(word) if word.isalpha() and set(word) <= set("wasd") else [word]
            try:
                directions = [parse_direction(k) for k in keys]
            except InvalidDirectionError as e:
                print(f"[ERROR] {e}")
                continue
            for d in directions:
                game.move(d)
        draw()
        if game.is_finished:
            if game.status == WON_OPTIMAL:
                print("You have reached the goal via the shortest path!")
            else:
                print("You reached the goal, but not by the shortest path.")
            print("Type 'retry' to replay this maze or 'new' for another.")
    return game
