"""Public maze package interface.

Generation, goal placement, shortest routes, movement and round state.
"""

from .config import EXTRA_CONNECTIONS, MISLEADING, MazeConfig, validate_dimensions
from .errors import (
    InvalidConfigError,
    InvalidDimensionsError,
    InvalidDirectionError,
    MazeError,
    MazeGenerationError,
)
from .game import PLAYING, WON_OPTIMAL, WON_SUBOPTIMAL, MazeGame, Round, build_round, judge_route, prepare_round
from .generator import DEAD_END, LOOP, MAIN_PATH, MISLEADING_PATH, GenerationResult, MazeGenerator, PathMarker, generate
from .goal import is_fallback_goal, select_goal
from .grid import ENTRY, Coord, Grid
from .movement import DIRECTIONS, PlayerState, attempt_move, available_exits, parse_direction
from .pathfinding import bfs_depths, reachable_from, shortest_path
from .tiles import OPEN, WALL

__all__ = [
    "Grid",
    "Coord",
    "ENTRY",
    "WALL",
    "OPEN",
    "MazeConfig",
    "validate_dimensions",
    "EXTRA_CONNECTIONS",
    "MISLEADING",
    "MazeGenerator",
    "GenerationResult",
    "PathMarker",
    "generate",
    "MAIN_PATH",
    "MISLEADING_PATH",
    "DEAD_END",
    "LOOP",
    "select_goal",
    "is_fallback_goal",
    "shortest_path",
    "bfs_depths",
    "reachable_from",
    "DIRECTIONS",
    "PlayerState",
    "attempt_move",
    "available_exits",
    "parse_direction",
    "MazeGame",
    "Round",
    "build_round",
    "prepare_round",
    "judge_route",
    "PLAYING",
    "WON_OPTIMAL",
    "WON_SUBOPTIMAL",
    "MazeError",
    "InvalidDimensionsError",
    "InvalidConfigError",
    "InvalidDirectionError",
    "MazeGenerationError",
]
