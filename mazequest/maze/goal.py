"""Goal placement: the open cell furthest along reverse row-major order."""

from __future__ import annotations

from ..logging_utils import get_logger
from .grid import Coord, Grid
from .tiles import OPEN

log = get_logger("mazequest.goal")


def fallback_goal(grid: Grid) -> Coord:
    return grid.rows - 2, grid.cols - 2


def select_goal(grid: Grid) -> Coord:
    """Return the last open cell scanning rows bottom-up and columns right-to-left.

    Row 0 and column 0 are border and never scanned. When no open cell exists the
    near-corner fallback ``(rows-2, cols-2)`` is returned unchecked; callers must
    treat that as a generation failure (see ``is_fallback_goal``).
    """
    for r in range(grid.rows - 1, 0, -1):
        row = grid[r]
        for c in range(grid.cols - 1, 0, -1):
            if row[c] == OPEN:
                return r, c
    goal = fallback_goal(grid)
    log.warn(event="goal_fallback", rows=grid.rows, cols=grid.cols, goal=goal)
    return goal


def is_fallback_goal(grid: Grid, goal: Coord) -> bool:
    """True when ``goal`` is the unchecked fallback rather than a real open cell."""
    return goal == fallback_goal(grid) and not grid.is_open(goal)


__all__ = ["select_goal", "is_fallback_goal", "fallback_goal"]
