"""Public dungeon package interface."""

from .generator import Level, make_level
from .rooms import Rect, carve_room
from .tiles import Tile, in_bounds, is_blocked, new_grid, tile_at

__all__ = [
    "Level",
    "make_level",
    "Rect",
    "carve_room",
    "Tile",
    "in_bounds",
    "is_blocked",
    "new_grid",
    "tile_at",
]
