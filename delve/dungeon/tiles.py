from typing import List, Tuple


class Tile:
    """One grid cell: terrain flags plus exploration memory."""

    __slots__ = ("blocked", "block_sight", "ever_seen", "currently_visible")

    def __init__(self, blocked: bool, block_sight: bool):
        self.blocked = blocked
        self.block_sight = block_sight
        self.ever_seen = False
        self.currently_visible = False

    @classmethod
    def floor(cls) -> "Tile":
        return cls(False, False)

    @classmethod
    def wall(cls) -> "Tile":
        return cls(True, True)


# Column-major like the rest of the codebase: grid[x][y]
Grid = List[List[Tile]]
Coord = Tuple[int, int]


def new_grid(width: int, height: int) -> Grid:
    return [[Tile.wall() for _ in range(height)] for _ in range(width)]


def grid_size(grid: Grid) -> Tuple[int, int]:
    return len(grid), (len(grid[0]) if grid else 0)


def in_bounds(grid: Grid, x: int, y: int) -> bool:
    w, h = grid_size(grid)
    return 0 <= x < w and 0 <= y < h


def tile_at(grid: Grid, x: int, y: int) -> Tile:
    """Bounds-checked lookup; negative indices are not allowed to wrap."""
    if not in_bounds(grid, x, y):
        raise IndexError(f"tile ({x}, {y}) outside {grid_size(grid)} grid")
    return grid[x][y]


def is_blocked(x: int, y: int, grid: Grid, entities) -> bool:
    """True if terrain or a blocking entity occupies (x, y)."""
    if tile_at(grid, x, y).blocked:
        return True
    return any(e.blocks and e.pos() == (x, y) for e in entities)


__all__ = ["Tile", "Grid", "Coord", "new_grid", "grid_size", "in_bounds", "tile_at", "is_blocked"]
