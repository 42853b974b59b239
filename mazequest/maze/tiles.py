# Tile constants centralized for modular imports
WALL = "#"
OPEN = "."

TILES = frozenset({WALL, OPEN})

__all__ = ["WALL", "OPEN", "TILES"]
