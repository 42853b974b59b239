"""Maze error taxonomy.

Rejected moves are not represented here: they are an expected, local outcome
reported through return values, never raised.
"""

from __future__ import annotations

from typing import Optional


class MazeError(Exception):
    """Base class for all maze-core errors."""


class InvalidDimensionsError(MazeError, ValueError):
    """Grid dimensions fail the generation precondition (too small or even)."""

    def __init__(self, rows: int, cols: int, reason: str):
        super().__init__(f"invalid maze dimensions {rows}x{cols}: {reason}")
        self.rows = rows
        self.cols = cols
        self.reason = reason


class InvalidConfigError(MazeError, ValueError):
    pass


class InvalidDirectionError(MazeError, ValueError):
    def __init__(self, key):
        super().__init__(f"unknown direction {key!r}")
        self.key = key


class MazeGenerationError(MazeError, RuntimeError):
    """A freshly generated round cannot be proven solvable.

    Raised instead of retrying: whether to regenerate with another seed is the
    caller's decision.
    """

    def __init__(self, message: str, seed: Optional[int] = None):
        super().__init__(message)
        self.seed = seed


__all__ = [
    "MazeError",
    "InvalidDimensionsError",
    "InvalidConfigError",
    "InvalidDirectionError",
    "MazeGenerationError",
]
