"""Plain-text maze rendering for terminals and logs.

Overlay precedence per cell: player > goal > entry > route > marker > tile.
Colors are applied with colorama only when requested.
"""

from __future__ import annotations

from typing import Iterable, Optional

from colorama import Fore, Style

from .generator import DEAD_END, LOOP, MAIN_PATH, MISLEADING_PATH, PathMarker
from .grid import ENTRY, Coord, Grid
from .tiles import WALL

PLAYER_CHAR = "@"
GOAL_CHAR = "G"
ENTRY_CHAR = "S"
ROUTE_CHAR = "*"

MARKER_CHARS = {MAIN_PATH: ".", MISLEADING_PATH: "m", DEAD_END: "x", LOOP: "o"}

_COLORS = {
    WALL: Fore.BLUE,
    PLAYER_CHAR: Fore.WHITE + Style.BRIGHT,
    GOAL_CHAR: Fore.RED + Style.BRIGHT,
    ENTRY_CHAR: Fore.CYAN,
    ROUTE_CHAR: Fore.GREEN,
    "m": Fore.YELLOW,
    "x": Fore.RED,
    "o": Fore.BLUE + Style.BRIGHT,
}


def render_text(
    grid: Grid,
    player: Optional[Coord] = None,
    goal: Optional[Coord] = None,
    route: Optional[Iterable[Coord]] = None,
    markers: Optional[Iterable[PathMarker]] = None,
    trace: Optional[Iterable[Coord]] = None,
    color: bool = False,
) -> str:
    overlay = {}
    for m in markers or ():
        ch = MARKER_CHARS.get(m.tag)
        # main_path connectors render as plain floor
        if ch and m.tag != MAIN_PATH:
            overlay[m.coord] = ch
    for c in trace or ():
        overlay[tuple(c)] = ROUTE_CHAR
    for c in route or ():
        overlay[tuple(c)] = ROUTE_CHAR
    overlay[ENTRY] = ENTRY_CHAR
    if goal is not None:
        overlay[tuple(goal)] = GOAL_CHAR
    if player is not None:
        overlay[tuple(player)] = PLAYER_CHAR

    lines = []
    for r in range(grid.rows):
        out = []
        for c in range(grid.cols):
            ch = overlay.get((r, c), grid[r][c])
            if color and ch in _COLORS:
                out.append(f"{_COLORS[ch]}{ch}{Style.RESET_ALL}")
            else:
                out.append(ch)
        lines.append("".join(out))
    return "\n".join(lines)


__all__ = ["render_text", "PLAYER_CHAR", "GOAL_CHAR", "ENTRY_CHAR", "ROUTE_CHAR", "MARKER_CHARS"]
