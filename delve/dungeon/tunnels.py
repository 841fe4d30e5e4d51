"""Corridor carving between room centers.

Corridors are one tile wide and L-shaped: a horizontal run and a vertical run
meeting at a corner. Which run comes first is a coin flip per corridor.
"""

import random
from typing import Tuple

from .tiles import Grid, tile_at


def _open(grid: Grid, x: int, y: int) -> None:
    tile = tile_at(grid, x, y)
    tile.blocked = False
    tile.block_sight = False


def carve_h_tunnel(x1: int, x2: int, y: int, grid: Grid) -> None:
    for x in range(min(x1, x2), max(x1, x2) + 1):
        _open(grid, x, y)


def carve_v_tunnel(y1: int, y2: int, x: int, grid: Grid) -> None:
    for y in range(min(y1, y2), max(y1, y2) + 1):
        _open(grid, x, y)


def carve_l_tunnel(a: Tuple[int, int], b: Tuple[int, int], grid: Grid, rng: random.Random) -> bool:
    """Connect a to b; returns True when the horizontal leg was carved first."""
    (ax, ay), (bx, by) = a, b
    horizontal_first = rng.random() < 0.5
    if horizontal_first:
        carve_h_tunnel(ax, bx, ay, grid)
        carve_v_tunnel(ay, by, bx, grid)
    else:
        carve_v_tunnel(ay, by, ax, grid)
        carve_h_tunnel(ax, bx, by, grid)
    return horizontal_first


__all__ = ["carve_h_tunnel", "carve_v_tunnel", "carve_l_tunnel"]
