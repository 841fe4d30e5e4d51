from dataclasses import dataclass
from typing import Iterator, Tuple

from .tiles import Grid, tile_at


@dataclass(frozen=True)
class Rect:
    x1: int
    y1: int
    x2: int
    y2: int

    @classmethod
    def from_size(cls, x: int, y: int, w: int, h: int) -> "Rect":
        return cls(x, y, x + w, y + h)

    @property
    def width(self) -> int:
        return self.x2 - self.x1

    @property
    def height(self) -> int:
        return self.y2 - self.y1

    def center(self) -> Tuple[int, int]:
        return ((self.x1 + self.x2) // 2, (self.y1 + self.y2) // 2)

    def intersects(self, other: "Rect") -> bool:
        # Touching edges count as overlap so neighbouring rooms never share a wall
        return self.x1 <= other.x2 and self.x2 >= other.x1 and self.y1 <= other.y2 and self.y2 >= other.y1

    def interior(self) -> Iterator[Tuple[int, int]]:
        """Cells carved for this room; the rect's own edges stay wall."""
        for ix in range(self.x1 + 1, self.x2):
            for iy in range(self.y1 + 1, self.y2):
                yield ix, iy


def carve_room(room: Rect, grid: Grid) -> None:
    for ix, iy in room.interior():
        tile = tile_at(grid, ix, iy)
        tile.blocked = False
        tile.block_sight = False


__all__ = ["Rect", "carve_room"]
