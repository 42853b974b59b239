"""Maze carving phases: wall fill, backtracking carve, optional relaxation, border seal.

The primary carve is a randomized depth-first backtracker over odd cells with a
stride of two: each step opens the target cell plus the connector midway to it.
The backtracker runs on an explicit stack of frames instead of recursion, so
large grids never hit the interpreter's recursion limit; the order of random
draws (one shuffle when a cell is entered) matches the recursive form exactly.

Left alone the carve yields a perfect maze. Two optional variants relax it:

* ``extra_connections``: when a frame is exhausted, with a fixed chance, open
  the connector toward one of its neighbours again, creating a cycle.
* ``misleading``: a pass over odd interior anchors opens one walled connector
  per anchor and tags it dead_end / loop / misleading for presentation.

Both only ever add open cells, so reachability from the entry is preserved.
Classification markers are part of the return value; nothing is kept globally.
"""
from __future__ import annotations

import random
import time
from typing import Any, Dict, List, NamedTuple, Optional

from ..logging_utils import get_logger
from .config import EXTRA_CONNECTIONS, MISLEADING, MazeConfig
from .grid import ENTRY, Coord, Grid
from .metrics import init_metrics
from .tiles import OPEN, WALL

log = get_logger("mazequest.generator")

MAIN_PATH = "main_path"
MISLEADING_PATH = "misleading"
DEAD_END = "dead_end"
LOOP = "loop"

PATH_TAGS = (MAIN_PATH, MISLEADING_PATH, DEAD_END, LOOP)

# Up, down, left, right two cells away; the connector sits at half the offset.
CARVE_STEPS = ((-2, 0), (2, 0), (0, -2), (0, 2))


class PathMarker(NamedTuple):
    tag: str
    coord: Coord


class GenerationResult(NamedTuple):
    grid: Grid
    markers: List[PathMarker]
    seed: int
    metrics: Dict[str, Any]


class MazeGenerator:
    def __init__(self, config: MazeConfig):
        self.config = config.validate()
        self.rows = config.rows
        self.cols = config.cols
        self.seed = config.seed if config.seed is not None else random.randint(0, 2**31 - 1)
        # Local RNG so external random usage does not affect generation
        self._rng = random.Random(self.seed)
        self._max_depth = 0

    def _interior(self, r: int, c: int) -> bool:
        return 0 < r < self.rows - 1 and 0 < c < self.cols - 1

    def _shuffled_steps(self) -> List[tuple]:
        steps = list(CARVE_STEPS)
        self._rng.shuffle(steps)
        return steps

    def init_cells(self) -> List[List[str]]:
        return [[WALL for _ in range(self.cols)] for _ in range(self.rows)]

    def carve(self, cells: List[List[str]], markers: List[PathMarker]) -> None:
        er, ec = ENTRY
        cells[er][ec] = OPEN
        relax = self.config.variant == EXTRA_CONNECTIONS
        # frame: [cell, shuffled steps, index of next step to try]
        stack = [[ENTRY, self._shuffled_steps(), 0]]
        self._max_depth = 1
        while stack:
            frame = stack[-1]
            (r, c), steps, idx = frame
            if idx < len(steps):
                frame[2] = idx + 1
                dr, dc = steps[idx]
                nr, nc = r + dr, c + dc
                if self._interior(nr, nc) and cells[nr][nc] == WALL:
                    mr, mc = r + dr // 2, c + dc // 2
                    cells[nr][nc] = OPEN
                    cells[mr][mc] = OPEN
                    markers.append(PathMarker(MAIN_PATH, (mr, mc)))
                    stack.append([(nr, nc), self._shuffled_steps(), 0])
                    if len(stack) > self._max_depth:
                        self._max_depth = len(stack)
                continue
            stack.pop()
            if relax:
                self._open_extra_connection(cells, (r, c), steps, markers)

    def _open_extra_connection(self, cells, cell: Coord, steps, markers: List[PathMarker]) -> None:
        if self._rng.random() >= self.config.extra_connection_chance:
            return
        r, c = cell
        candidates = [(dr, dc) for dr, dc in steps if self._interior(r + dr, c + dc)]
        if not candidates:
            return
        dr, dc = self._rng.choice(candidates)
        if cells[r + dr][c + dc] != OPEN:
            return
        mr, mc = r + dr // 2, c + dc // 2
        if cells[mr][mc] == WALL:
            cells[mr][mc] = OPEN
            markers.append(PathMarker(LOOP, (mr, mc)))

    def add_misleading_paths(self, cells: List[List[str]], markers: List[PathMarker]) -> None:
        cfg = self.config
        for i in range(1, self.rows - 1, 2):
            for j in range(1, self.cols - 1, 2):
                if self._rng.random() >= cfg.misleading_chance:
                    continue
                for dr, dc in self._shuffled_steps():
                    nr, nc = i + dr, j + dc
                    mr, mc = i + dr // 2, j + dc // 2
                    if not self._interior(nr, nc) or cells[i][j] != OPEN or cells[mr][mc] != WALL:
                        continue
                    cells[mr][mc] = OPEN
                    cells[nr][nc] = OPEN
                    kind = self._rng.random()
                    if kind < cfg.dead_end_threshold:
                        tag = DEAD_END
                    elif kind < cfg.loop_threshold:
                        tag = LOOP
                    else:
                        tag = MISLEADING_PATH
                    markers.append(PathMarker(tag, (mr, mc)))
                    break

    def seal_border(self, cells: List[List[str]]) -> None:
        for r in range(self.rows):
            cells[r][0] = WALL
            cells[r][self.cols - 1] = WALL
        for c in range(self.cols):
            cells[0][c] = WALL
            cells[self.rows - 1][c] = WALL

    def run(self) -> GenerationResult:
        """Execute the generation phases, timing each one when metrics are enabled."""
        start = time.perf_counter()
        phase_times: Dict[str, int] = {}

        def _phase(label, fn, *a):
            ps = time.perf_counter()
            r = fn(*a)
            phase_times[label] = int((time.perf_counter() - ps) * 1000)
            return r

        markers: List[PathMarker] = []
        cells = _phase('init', self.init_cells)
        _phase('carve', self.carve, cells, markers)
        if self.config.variant == MISLEADING:
            _phase('misleading', self.add_misleading_paths, cells, markers)
        _phase('seal_border', self.seal_border, cells)
        grid = Grid(cells)

        metrics: Dict[str, Any] = {}
        if self.config.enable_metrics:
            metrics = init_metrics()
            open_count = sum(1 for _ in grid.open_cells())
            metrics['open_cells'] = open_count
            metrics['wall_cells'] = grid.rows * grid.cols - open_count
            metrics['max_stack_depth'] = self._max_depth
            for m in markers:
                if m.tag == MAIN_PATH:
                    metrics['main_path_connectors'] += 1
                elif m.tag == DEAD_END:
                    metrics['dead_ends'] += 1
                elif m.tag == LOOP:
                    metrics['loops'] += 1
                else:
                    metrics['misleading'] += 1
            metrics['extra_connections'] = len(markers) - metrics['main_path_connectors']
            metrics['runtime_ms'] = int((time.perf_counter() - start) * 1000)
            metrics['phase_ms'] = phase_times
        log.debug(
            event="maze_generated",
            rows=self.rows,
            cols=self.cols,
            seed=self.seed,
            variant=self.config.variant or "perfect",
            markers=len(markers),
        )
        return GenerationResult(grid, markers, self.seed, metrics)


def generate(rows: int, cols: int, seed: Optional[int] = None, variant: Optional[str] = None, **options) -> GenerationResult:
    """Shortcut for ``MazeGenerator(MazeConfig(rows, cols, seed, variant, ...)).run()``."""
    return MazeGenerator(MazeConfig(rows=rows, cols=cols, seed=seed, variant=variant, **options)).run()


__all__ = [
    "MazeGenerator",
    "GenerationResult",
    "PathMarker",
    "generate",
    "MAIN_PATH",
    "MISLEADING_PATH",
    "DEAD_END",
    "LOOP",
    "PATH_TAGS",
]
