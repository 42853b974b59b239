"""Maze Quest CLI entry point.

Provides subcommands for running the web server, printing a generated maze,
and playing a round in the terminal. Accepts configuration via flags and
environment variables, with optional .env loading.

Run `python run.py --help` for details.
"""

import argparse
import os
import signal
import sys
from textwrap import dedent

from colorama import Fore, Style
from colorama import init as _color_init
from dotenv import load_dotenv

_color_init()
_COLOR_ENABLED = True

# Disable colors if output is not a real terminal (e.g., during pytest capture)
try:
    if not sys.stdout.isatty():  # pragma: no cover - environment dependent
        _COLOR_ENABLED = False
except (AttributeError, ValueError):  # pragma: no cover
    _COLOR_ENABLED = False


def _load_version() -> str:
    try:
        with open("VERSION", "r", encoding="utf-8") as f:
            return f.read().strip()
    except OSError:
        from mazequest import __version__ as pkg_version

        return pkg_version


__version__ = _load_version()


def _add_maze_arguments(p: argparse.ArgumentParser) -> None:
    p.add_argument("--rows", type=int, default=None, help="Maze rows, odd, >= 3 (default: env MAZE_ROWS or 21)")
    p.add_argument("--cols", type=int, default=None, help="Maze cols, odd, >= 3 (default: env MAZE_COLS or 21)")
    p.add_argument("--seed", type=int, default=None, help="Seed for reproducible mazes (default: random)")
    p.add_argument(
        "--variant",
        choices=["perfect", "extra_connections", "misleading"],
        default=None,
        help="Generation variant (default: env MAZE_VARIANT or perfect)",
    )
    p.add_argument("--no-color", dest="no_color", action="store_true", help="Disable colored output")


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    Maze Quest

    Generate mazes, compute their shortest route, and play rounds either over
    the JSON API or directly in the terminal. Configuration can be provided via
    CLI flags or environment variables. If both are present, CLI flags take
    precedence.
    """

    epilog = dedent(
        """
        Environment variables:
          HOST            Bind address for the web server (default: 0.0.0.0)
          PORT            Port for the web server (default: 5000)
          MAZE_ROWS       Default maze rows (default: 21)
          MAZE_COLS       Default maze cols (default: 21)
          MAZE_VARIANT    perfect | extra_connections | misleading

        Examples:
          # Run the server on the default host and port
          python run.py server

          # Print a seeded maze with its shortest route
          python run.py show --seed 42 --route

          # Play a 15x31 maze in the terminal
          python run.py play --rows 15 --cols 31
        """
    )

    parser = argparse.ArgumentParser(
        prog="mazequest",
        description=dedent(description),
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )

    parser.add_argument(
        "--env-file",
        dest="env_file",
        help="Path to a .env file to load before processing flags",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"Maze Quest {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    server_parser = subparsers.add_parser(
        "server",
        help="Run the JSON API web server",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Run the Flask server exposing /api/maze/*",
    )
    server_parser.add_argument(
        "--host",
        default=None,
        help="Host interface to bind (default: env HOST or 0.0.0.0)",
    )
    server_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to listen on (default: env PORT or 5000)",
    )
    server_parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable Flask debug mode with verbose error pages",
    )
    server_parser.set_defaults(command="server")

    show_parser = subparsers.add_parser(
        "show",
        help="Print a generated maze",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Generate one maze and print it with its goal marked.",
    )
    _add_maze_arguments(show_parser)
    show_parser.add_argument("--route", action="store_true", help="Overlay the shortest route")
    show_parser.add_argument("--markers", action="store_true", help="Overlay loop/dead-end/misleading markers")
    show_parser.set_defaults(command="show")

    play_parser = subparsers.add_parser(
        "play",
        help="Play a round in the terminal",
        formatter_class=argparse.RawTextHelpFormatter,
        description=dedent(
            """
            Play a maze round in the terminal.

            Inside the shell, use commands such as:
              w/a/s/d or up/down/left/right   Move one cell
              route                           Toggle the optimal route overlay
              retry                           Restart this maze
              new                             Generate a new maze
              quit                            Leave the game
            """
        ),
    )
    _add_maze_arguments(play_parser)
    play_parser.set_defaults(command="play")

    # If no subcommand provided, default to server
    if len(argv) == 0:
        argv = ["server"]

    args = parser.parse_args(argv)
    return args


def _maze_config(args: argparse.Namespace):
    from mazequest.maze import MazeConfig

    config = MazeConfig.from_mapping(
        os.environ,
        rows=getattr(args, "rows", None),
        cols=getattr(args, "cols", None),
        seed=getattr(args, "seed", None),
    )
    variant = getattr(args, "variant", None)
    if variant is not None:
        config.variant = None if variant == "perfect" else variant
    return config


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    if args and getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        # Load default .env if present (no error if missing)
        load_dotenv()

    mode = (getattr(args, "command", None) or "server").lower()
    color = _COLOR_ENABLED and not getattr(args, "no_color", False)

    from mazequest.logging_utils import log
    from mazequest.maze import MazeError

    if mode in ("show", "play"):
        from mazequest.server import play_shell, show_maze

        try:
            config = _maze_config(args).validate()
            if mode == "show":
                print(show_maze(config, show_route=args.route, show_markers=args.markers, color=color))
            else:
                play_shell(config, color=color)
        except MazeError as e:
            print(f"[ERROR] {e}")
            return 1
        return 0

    # Resolve configuration from CLI flags or env vars
    env_host = os.getenv("HOST", "0.0.0.0")
    env_port = int(os.getenv("PORT", "5000"))
    host = getattr(args, "host", None) or env_host
    port = int(getattr(args, "port", None) or env_port)
    debug = bool(getattr(args, "debug", False) or os.getenv("FLASK_DEBUG") == "1")

    def handle_sigint(sig, frame):
        print("\n[INFO] Shutting down server...")
        sys.exit(0)

    signal.signal(signal.SIGINT, handle_sigint)

    # Import server entrypoints only after environment is ready
    from mazequest.server import start_server

    title = f"{Fore.CYAN}{Style.BRIGHT}Maze Quest Server{Style.RESET_ALL}" if color else "Maze Quest Server"

    def label(text: str) -> str:
        return f"{Fore.YELLOW}{text}{Style.RESET_ALL}" if color else text

    def value(val: str | int) -> str:
        return f"{Fore.GREEN}{val}{Style.RESET_ALL}" if color else str(val)

    divider = (Fore.MAGENTA + "=" * 40 + Style.RESET_ALL) if color else "=" * 40
    lines = [
        divider,
        f"  {title}",
        divider,
        f"  {label('Host:'):12} {value(host)}",
        f"  {label('Port:'):12} {value(port)}",
        f"  {label('Debug:'):12} {value('YES' if debug else 'NO')}",
        f"  {label('Maze size:'):12} {value(os.getenv('MAZE_ROWS', '21') + 'x' + os.getenv('MAZE_COLS', '21'))}",
        divider,
        "",
    ]
    print("\n".join(lines))
    log.info(event="startup", mode=mode, host=host, port=port, debug=debug)
    start_server(host=host, port=port, debug=debug)
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
