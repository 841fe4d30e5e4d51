"""Flood fill over walkable terrain.

Used by the seed diagnostics script and the connectivity tests; entities are
ignored so a monster standing in a corridor does not split the level.
"""
from __future__ import annotations

from collections import deque
from typing import List, Set, Tuple

from .rooms import Rect
from .tiles import Grid, grid_size

Coord2D = Tuple[int, int]


def flood_walkable(grid: Grid, start: Coord2D) -> Set[Coord2D]:
    w, h = grid_size(grid)
    sx, sy = start
    if not (0 <= sx < w and 0 <= sy < h) or grid[sx][sy].blocked:
        return set()
    visited = {start}
    q = deque([start])
    while q:
        cx, cy = q.popleft()
        for dx, dy in [(-1, 0), (1, 0), (0, -1), (0, 1)]:
            nx, ny = cx + dx, cy + dy
            if 0 <= nx < w and 0 <= ny < h and (nx, ny) not in visited and not grid[nx][ny].blocked:
                visited.add((nx, ny))
                q.append((nx, ny))
    return visited


def unreachable_rooms(grid: Grid, rooms: List[Rect], start: Coord2D) -> List[int]:
    """Indices of rooms whose center the flood from ``start`` never reaches."""
    reach = flood_walkable(grid, start)
    return [i for i, r in enumerate(rooms) if r.center() not in reach]


__all__ = ["flood_walkable", "unreachable_rooms"]
