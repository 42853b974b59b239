"""Discrete player movement over a maze grid.

A move is one unit step up/down/left/right. Moves into a wall or off the grid
are rejected: the state is returned untouched and no error is raised.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple, Union

from .errors import InvalidDirectionError
from .grid import Coord, Grid

DIRECTIONS = {"up": (-1, 0), "down": (1, 0), "left": (0, -1), "right": (0, 1)}

# Keyboard aliases accepted from input layers.
_ALIASES = {
    "w": "up",
    "s": "down",
    "a": "left",
    "d": "right",
    "arrowup": "up",
    "arrowdown": "down",
    "arrowleft": "left",
    "arrowright": "right",
}

Direction = Union[str, Tuple[int, int]]


def parse_direction(key: Direction) -> str:
    """Normalize a direction name, alias, key name or unit vector to a DIRECTIONS key."""
    if isinstance(key, tuple):
        for name, delta in DIRECTIONS.items():
            if delta == key:
                return name
        raise InvalidDirectionError(key)
    if not isinstance(key, str):
        raise InvalidDirectionError(key)
    k = key.strip().lower()
    if k in DIRECTIONS:
        return k
    if k in _ALIASES:
        return _ALIASES[k]
    raise InvalidDirectionError(key)


@dataclass
class PlayerState:
    position: Coord
    history: List[Coord] = field(default_factory=list)

    @classmethod
    def start(cls, entry: Coord) -> "PlayerState":
        return cls(position=entry, history=[entry])

    def to_dict(self):
        return {"position": list(self.position), "history": [list(c) for c in self.history]}


def attempt_move(player: PlayerState, grid: Grid, direction: Direction) -> Tuple[PlayerState, bool]:
    """Apply one step if the target cell is open; returns (player, moved)."""
    dr, dc = DIRECTIONS[parse_direction(direction)]
    r, c = player.position
    target = (r + dr, c + dc)
    if not grid.is_open(target):
        return player, False
    player.position = target
    player.history.append(target)
    return player, True


def available_exits(grid: Grid, coord: Coord) -> List[str]:
    r, c = coord
    return [name for name, (dr, dc) in DIRECTIONS.items() if grid.is_open((r + dr, c + dc))]


__all__ = ["DIRECTIONS", "PlayerState", "attempt_move", "parse_direction", "available_exits"]
