"""Ray-cast field of view.

For every tile within a Euclidean radius of the origin a Bresenham line is
walked from the origin; the tile is visible when nothing strictly between the
two endpoints blocks sight. Walls are therefore visible themselves but hide
what lies behind them. The result depends only on grid contents, origin and
radius.
"""

from __future__ import annotations

from typing import Iterator, Set, Tuple

from delve.dungeon.tiles import Grid, grid_size, tile_at

Coord = Tuple[int, int]


def line(x0: int, y0: int, x1: int, y1: int) -> Iterator[Coord]:
    """Integer Bresenham line from (x0,y0) to (x1,y1), both endpoints included."""
    dx = abs(x1 - x0)
    dy = -abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1
    err = dx + dy
    x, y = x0, y0
    while True:
        yield x, y
        if (x, y) == (x1, y1):
            return
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x += sx
        if e2 <= dx:
            err += dx
            y += sy


def _clear_between(grid: Grid, origin: Coord, target: Coord) -> bool:
    for cx, cy in line(origin[0], origin[1], target[0], target[1]):
        if (cx, cy) == origin or (cx, cy) == target:
            continue
        if grid[cx][cy].block_sight:
            return False
    return True


def compute_fov(grid: Grid, origin: Coord, radius: int) -> Set[Coord]:
    ox, oy = origin
    tile_at(grid, ox, oy)  # origin must be on the grid
    w, h = grid_size(grid)
    r2 = radius * radius
    visible = {origin}
    for x in range(max(0, ox - radius), min(w, ox + radius + 1)):
        for y in range(max(0, oy - radius), min(h, oy + radius + 1)):
            if (x - ox) ** 2 + (y - oy) ** 2 > r2:
                continue
            if _clear_between(grid, origin, (x, y)):
                visible.add((x, y))
    return visible


def clear_visibility(grid: Grid) -> None:
    for column in grid:
        for tile in column:
            tile.currently_visible = False


def update_visibility(grid: Grid, origin: Coord, radius: int) -> Set[Coord]:
    """Recompute ``currently_visible`` and accumulate ``ever_seen``."""
    clear_visibility(grid)
    visible = compute_fov(grid, origin, radius)
    for x, y in visible:
        tile = grid[x][y]
        tile.currently_visible = True
        tile.ever_seen = True
    return visible


__all__ = ["line", "compute_fov", "clear_visibility", "update_visibility"]
