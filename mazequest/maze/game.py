"""Round lifecycle and win judging.

Status transitions:
    playing --goal reached--> won_optimal | won_suboptimal
    any     --retry-------->  playing (same grid/route, fresh player)
    any     --new_game----->  playing (new grid/route, fresh player)

Winning is judged by exact, order-sensitive comparison of the player's history
with the precomputed route: any detour or backtrack makes the win suboptimal.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Sequence, Tuple

from ..logging_utils import get_logger
from .config import MazeConfig
from .errors import MazeGenerationError
from .generator import MazeGenerator, PathMarker
from .goal import is_fallback_goal, select_goal
from .grid import ENTRY, Coord, Grid
from .movement import Direction, PlayerState, attempt_move, available_exits
from .pathfinding import shortest_path

log = get_logger("mazequest.game")

PLAYING = "playing"
WON_OPTIMAL = "won_optimal"
WON_SUBOPTIMAL = "won_suboptimal"

STATUSES = (PLAYING, WON_OPTIMAL, WON_SUBOPTIMAL)


@dataclass(frozen=True)
class Round:
    grid: Grid
    goal: Coord
    route: Tuple[Coord, ...]
    seed: Optional[int] = None
    markers: Tuple[PathMarker, ...] = ()
    metrics: Dict[str, Any] = field(default_factory=dict)
    entry: Coord = ENTRY


def prepare_round(
    grid: Grid,
    seed: Optional[int] = None,
    markers=None,
    metrics=None,
    entry: Coord = ENTRY,
    goal: Optional[Coord] = None,
) -> Round:
    """Derive goal (unless given) and route for ``grid``; raise MazeGenerationError if unsolvable."""
    if goal is None:
        goal = select_goal(grid)
    else:
        goal = tuple(goal)
    if not grid.is_open(goal):
        reason = "goal_fallback" if is_fallback_goal(grid, goal) else "goal_not_open"
        log.error(event="round_rejected", reason=reason, seed=seed, goal=goal)
        raise MazeGenerationError(f"goal {goal} is not an open cell", seed=seed)
    if goal == entry:
        log.error(event="round_rejected", reason="goal_is_entry", seed=seed, rows=grid.rows, cols=grid.cols)
        raise MazeGenerationError(f"goal coincides with entry {entry}; maze too small to play", seed=seed)
    route = shortest_path(grid, entry, goal)
    if route is None:
        log.error(event="round_rejected", reason="goal_unreachable", seed=seed, goal=goal)
        raise MazeGenerationError(f"goal {goal} unreachable from entry {entry}", seed=seed)
    return Round(
        grid=grid,
        goal=goal,
        route=tuple(route),
        seed=seed,
        markers=tuple(markers or ()),
        metrics=dict(metrics or {}),
        entry=entry,
    )


def build_round(config: MazeConfig) -> Round:
    result = MazeGenerator(config).run()
    return prepare_round(result.grid, seed=result.seed, markers=result.markers, metrics=result.metrics)


def judge_route(history: Sequence[Coord], route: Sequence[Coord]) -> str:
    if len(history) == len(route) and all(tuple(h) == tuple(r) for h, r in zip(history, route)):
        return WON_OPTIMAL
    return WON_SUBOPTIMAL


class MazeGame:
    """One player's session: current round, player state and status.

    Either pass a config (rounds are generated) or a prepared ``Round``
    (fixed mazes; ``new_game`` then still generates from the config).

    State changes and snapshots hold ``lock``; callers that read several
    fields after a move (the HTTP layer) take it around the whole exchange.
    """

    def __init__(self, config: Optional[MazeConfig] = None, rnd: Optional[Round] = None):
        self.config = config or MazeConfig()
        self.lock = threading.RLock()
        self.status = PLAYING
        self.moves_rejected = 0
        if rnd is None:
            rnd = build_round(self.config)
        self._start(rnd)

    def _start(self, rnd: Round) -> None:
        self.round = rnd
        self.player = PlayerState.start(rnd.entry)
        self.status = PLAYING
        self.moves_rejected = 0
        log.info(
            event="round_start",
            seed=rnd.seed,
            rows=rnd.grid.rows,
            cols=rnd.grid.cols,
            goal=rnd.goal,
            route_len=len(rnd.route),
        )

    @property
    def grid(self) -> Grid:
        return self.round.grid

    @property
    def goal(self) -> Coord:
        return self.round.goal

    @property
    def route(self) -> Tuple[Coord, ...]:
        return self.round.route

    @property
    def is_finished(self) -> bool:
        return self.status != PLAYING

    def new_game(self, seed: Optional[int] = None, **overrides) -> Round:
        """Replace the round with a freshly generated maze.

        The current round is kept if generation fails.
        """
        config = self.config.with_overrides(**overrides)
        config.seed = seed
        rnd = build_round(config)
        with self.lock:
            self.config = config
            self._start(rnd)
        return rnd

    def retry(self) -> None:
        """Restart the current round: same grid and route, fresh player."""
        with self.lock:
            self._start(self.round)

    def move(self, direction: Direction) -> bool:
        """Apply one movement intent; returns whether the player moved.

        Ignored once the round is won, until ``retry`` or ``new_game``.
        """
        with self.lock:
            if self.is_finished:
                return False
            _, moved = attempt_move(self.player, self.round.grid, direction)
            if not moved:
                self.moves_rejected += 1
                log.debug(event="move_rejected", pos=self.player.position, direction=direction)
                return False
            if self.player.position == self.round.goal:
                self._on_goal_reached()
            return True

    def _on_goal_reached(self) -> None:
        self.status = judge_route(self.player.history, self.round.route)
        log.info(
            event="goal_reached",
            seed=self.round.seed,
            status=self.status,
            steps=len(self.player.history) - 1,
            optimal_steps=len(self.round.route) - 1,
        )

    def snapshot(self) -> Dict[str, Any]:
        """Collaborator view of the round: obstacles, goal, player trace, route and status."""
        with self.lock:
            rnd = self.round
            return {
                "rows": rnd.grid.rows,
                "cols": rnd.grid.cols,
                "seed": rnd.seed,
                "entry": list(rnd.entry),
                "goal": list(rnd.goal),
                "walls": [list(c) for c in rnd.grid.wall_positions()],
                "route": [list(c) for c in rnd.route],
                "markers": [{"tag": m.tag, "pos": list(m.coord)} for m in rnd.markers],
                "player": self.player.to_dict(),
                "exits": available_exits(rnd.grid, self.player.position),
                "status": self.status,
            }


__all__ = [
    "MazeGame",
    "Round",
    "build_round",
    "prepare_round",
    "judge_route",
    "PLAYING",
    "WON_OPTIMAL",
    "WON_SUBOPTIMAL",
    "STATUSES",
]
