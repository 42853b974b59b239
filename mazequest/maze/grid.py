from __future__ import annotations

from typing import Iterable, Iterator, List, Sequence, Tuple

from .tiles import OPEN, TILES, WALL

Coord = Tuple[int, int]

# Entry cell; the carve starts here and every round's player spawns here.
ENTRY: Coord = (1, 1)


class Grid:
    """Immutable rows x cols matrix of WALL / OPEN tiles, indexed ``grid[row][col]``."""

    __slots__ = ("_cells", "rows", "cols")

    def __init__(self, cells: Iterable[Iterable[str]]):
        frozen = tuple(tuple(row) for row in cells)
        if not frozen or not frozen[0]:
            raise ValueError("grid must have at least one row and one column")
        width = len(frozen[0])
        for r, row in enumerate(frozen):
            if len(row) != width:
                raise ValueError(f"row {r} has {len(row)} cells, expected {width}")
            bad = set(row) - TILES
            if bad:
                raise ValueError(f"row {r} contains unknown tiles {sorted(bad)}")
        self._cells = frozen
        self.rows = len(frozen)
        self.cols = width

    @classmethod
    def from_strings(cls, lines: Sequence[str]) -> "Grid":
        return cls([list(line) for line in lines])

    def __getitem__(self, row: int) -> Tuple[str, ...]:
        return self._cells[row]

    def __eq__(self, other) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self._cells == other._cells

    def __hash__(self) -> int:
        return hash(self._cells)

    def __repr__(self) -> str:
        return f"Grid({self.rows}x{self.cols})"

    @property
    def size(self) -> Tuple[int, int]:
        return self.rows, self.cols

    def in_bounds(self, coord: Coord) -> bool:
        r, c = coord
        return 0 <= r < self.rows and 0 <= c < self.cols

    def is_open(self, coord: Coord) -> bool:
        return self.in_bounds(coord) and self._cells[coord[0]][coord[1]] == OPEN

    def is_wall(self, coord: Coord) -> bool:
        # Out-of-bounds behaves like solid rock for movement purposes.
        return not self.is_open(coord)

    def open_cells(self) -> Iterator[Coord]:
        for r, row in enumerate(self._cells):
            for c, tile in enumerate(row):
                if tile == OPEN:
                    yield r, c

    def wall_positions(self) -> List[Coord]:
        """Every WALL coordinate, row-major; the obstacle list for renderers."""
        return [(r, c) for r, row in enumerate(self._cells) for c, tile in enumerate(row) if tile == WALL]

    def border_is_wall(self) -> bool:
        last_r, last_c = self.rows - 1, self.cols - 1
        for c in range(self.cols):
            if self._cells[0][c] != WALL or self._cells[last_r][c] != WALL:
                return False
        for r in range(self.rows):
            if self._cells[r][0] != WALL or self._cells[r][last_c] != WALL:
                return False
        return True

    def to_strings(self) -> List[str]:
        return ["".join(row) for row in self._cells]

    def to_dict(self):
        return {"rows": self.rows, "cols": self.cols, "cells": self.to_strings()}


__all__ = ["Grid", "Coord", "ENTRY"]
