"""Breadth-first search utilities over 4-connected open cells."""

from __future__ import annotations

from collections import deque
from typing import Dict, List, Optional, Set

from .grid import Coord, Grid

# Expansion order up, down, left, right; fixes which shortest route wins ties.
NEIGHBOR_STEPS = ((-1, 0), (1, 0), (0, -1), (0, 1))


def shortest_path(grid: Grid, start: Coord, goal: Coord) -> Optional[List[Coord]]:
    """Return the minimal route ``[start, ..., goal]`` or None when goal is unreachable.

    Both endpoints must be open cells; otherwise there is no route.
    """
    if not grid.is_open(start) or not grid.is_open(goal):
        return None
    parents: Dict[Coord, Optional[Coord]] = {start: None}
    q = deque([start])
    while q:
        cur = q.popleft()
        if cur == goal:
            route = []
            node: Optional[Coord] = cur
            while node is not None:
                route.append(node)
                node = parents[node]
            route.reverse()
            return route
        r, c = cur
        for dr, dc in NEIGHBOR_STEPS:
            nxt = (r + dr, c + dc)
            if nxt not in parents and grid.is_open(nxt):
                parents[nxt] = cur
                q.append(nxt)
    return None


def bfs_depths(grid: Grid, start: Coord) -> Dict[Coord, int]:
    """Map every open cell reachable from ``start`` to its step distance."""
    if not grid.is_open(start):
        return {}
    depths = {start: 0}
    q = deque([start])
    while q:
        r, c = q.popleft()
        d = depths[(r, c)]
        for dr, dc in NEIGHBOR_STEPS:
            nxt = (r + dr, c + dc)
            if nxt not in depths and grid.is_open(nxt):
                depths[nxt] = d + 1
                q.append(nxt)
    return depths


def reachable_from(grid: Grid, start: Coord) -> Set[Coord]:
    return set(bfs_depths(grid, start))


__all__ = ["shortest_path", "bfs_depths", "reachable_from", "NEIGHBOR_STEPS"]
