"""Level generation invariant tests.

Invariants covered:
1. Every carved room lies inside the map with at least a 1-tile wall border.
2. Flood fill from the player's start reaches every room and the stairs.
3. Same seed -> identical level.
4. A single-room level puts the player at the exact center and carves exactly that rectangle.
5. Spawns for rejected candidates are kept (classic ordering) unless spawn_after_carve is set.
"""

from __future__ import annotations

import random

import pytest

from delve.config import LevelConfig
from delve.dungeon.connectivity import flood_walkable, unreachable_rooms
from delve.dungeon.generator import Level, _place_exit, make_level
from delve.dungeon.rooms import Rect, carve_room
from delve.dungeon.tiles import new_grid
from delve.world.entities import make_player
from delve.world.registry import PLAYER, EntityRegistry
from tests.dungeon_test_utils import carved_cells

SEEDS = [101, 202, 303, 404, 505, 606, 707, 808]


def gen(seed: int, config: LevelConfig | None = None):
    return make_level(make_player(hp=30, defence=2, power=5), config or LevelConfig(), random.Random(seed))


@pytest.mark.parametrize("seed", SEEDS)
def test_rooms_inside_border(seed):
    level = gen(seed)
    cfg = LevelConfig()
    assert level.rooms, "first candidate is always carved"
    for r in level.candidates:
        assert r.x1 >= 1 and r.y1 >= 1
        assert r.x2 <= cfg.width - 1 and r.y2 <= cfg.height - 1
    # Outer ring of the map is never carved
    for x in range(cfg.width):
        assert level.grid[x][0].blocked and level.grid[x][cfg.height - 1].blocked
    for y in range(cfg.height):
        assert level.grid[0][y].blocked and level.grid[cfg.width - 1][y].blocked


@pytest.mark.parametrize("seed", SEEDS)
def test_start_reaches_rooms_and_exit(seed):
    level = gen(seed)
    start = level.registry[PLAYER].pos()
    reach = flood_walkable(level.grid, start)
    assert not unreachable_rooms(level.grid, level.rooms, start), f"Seed {seed} has unreachable rooms"
    assert level.exit is not None
    assert level.exit.pos() in reach, f"Seed {seed} exit at {level.exit.pos()} unreachable"


def test_accepted_rooms_do_not_overlap():
    level = gen(4242)
    for i, a in enumerate(level.rooms):
        for b in level.rooms[i + 1 :]:
            assert not a.intersects(b)


def test_same_seed_same_level():
    a = gen(314159)
    b = gen(314159)
    assert a.rooms == b.rooms
    assert [(e.name, e.pos()) for e in a.registry] == [(e.name, e.pos()) for e in b.registry]
    assert carved_cells(a.grid) == carved_cells(b.grid)


def test_single_room_level():
    level = gen(99, LevelConfig(max_rooms=1))
    assert len(level.rooms) == 1
    room = level.rooms[0]
    assert level.registry[PLAYER].pos() == room.center()
    assert carved_cells(level.grid) == set(room.interior())
    # Border walls of the room are intact
    for x in range(room.x1, room.x2 + 1):
        assert level.grid[x][room.y1].blocked and level.grid[x][room.y2].blocked
    for y in range(room.y1, room.y2 + 1):
        assert level.grid[room.x1][y].blocked and level.grid[room.x2][y].blocked


def test_exit_is_stairs_and_not_blocking():
    level = gen(7)
    stairs = level.exit
    assert stairs.name == "stairs" and stairs.glyph == ">"
    assert not stairs.blocks
    assert not level.grid[stairs.x][stairs.y].blocked
    assert stairs.pos() != level.registry[PLAYER].pos()


def test_zero_rooms_yields_solid_grid_without_exit():
    level = gen(1, LevelConfig(max_rooms=0))
    assert level.rooms == []
    assert level.exit is None
    assert not carved_cells(level.grid)
    assert len(level.registry) == 1


def _spawn_positions_outside_rooms(level):
    rooms = level.rooms
    return [
        e
        for idx, e in level.registry.enumerate()
        if idx != PLAYER and e.name != "stairs" and not any(_inside(r, e.x, e.y) for r in rooms)
    ]


def _inside(room: Rect, x: int, y: int) -> bool:
    return room.x1 < x < room.x2 and room.y1 < y < room.y2


def test_rejected_candidates_can_keep_spawns():
    found = False
    for seed in range(40):
        level = gen(seed)
        if len(level.candidates) > len(level.rooms) and _spawn_positions_outside_rooms(level):
            found = True
            break
    assert found, "expected at least one seed where a rejected room kept a spawn"


def test_spawn_after_carve_only_populates_rooms():
    for seed in range(10):
        level = gen(seed, LevelConfig(spawn_after_carve=True))
        assert not _spawn_positions_outside_rooms(level)


class _ScriptedRng(random.Random):
    """Jitter always steps up-left; records every reseed pool."""

    def __init__(self):
        super().__init__(0)
        self.pools = []

    def randint(self, a, b):
        return -1

    def choice(self, seq):
        self.pools.append(list(seq))
        return seq[0]


def test_exit_reseeds_from_an_earlier_room():
    grid = new_grid(20, 20)
    first, last = Rect(1, 1, 5, 5), Rect(10, 10, 14, 14)
    carve_room(first, grid)  # ``last`` stays solid so the jitter walks off the map
    level = Level(grid, EntityRegistry([make_player(18, 18, hp=30, defence=2, power=5)]), rooms=[first, last])
    rng = _ScriptedRng()
    stairs = _place_exit(level, rng)
    assert rng.pools == [[first]]
    assert stairs.pos() == first.center()
    assert level.registry[len(level.registry) - 1] is stairs
