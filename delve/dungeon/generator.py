"""Level generator (rooms + L-shaped tunnels).

Phases, all driven by the caller's ``random.Random`` so a seed reproduces a level:
    * Scatter ``max_rooms`` candidate rectangles inside a 1-tile border.
    * Spawn monsters/items for each candidate before the overlap test. Rejected
      candidates keep their spawns unless ``LevelConfig.spawn_after_carve`` is set.
    * Carve candidates that overlap no earlier candidate; the first one hosts
      the player, later ones tunnel back to the previous carved room's center.
    * Drop the stairs near the last carved room's center, jittering off blocked
      cells and reseeding from an earlier carved room's center when the jitter
      leaves the map.

Every candidate is recorded in ``Level.candidates`` whether carved or not and
later candidates are tested against all of them. Tunnels only anchor on carved
rooms so every room stays reachable from the player's start.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import List, Optional

from delve.config import LevelConfig
from delve.logging_utils import get_logger
from delve.world.entities import Entity, make_stairs
from delve.world.registry import PLAYER, EntityRegistry

from .rooms import Rect, carve_room
from .spawns import spawn
from .tiles import Grid, in_bounds, is_blocked, new_grid
from .tunnels import carve_l_tunnel

log = get_logger("delve.dungeon")


@dataclass
class Level:
    grid: Grid
    registry: EntityRegistry
    rooms: List[Rect] = field(default_factory=list)
    candidates: List[Rect] = field(default_factory=list)
    stairs: Optional[Entity] = None
    depth: int = 1

    @property
    def width(self) -> int:
        return len(self.grid)

    @property
    def height(self) -> int:
        return len(self.grid[0]) if self.grid else 0

    @property
    def exit_index(self) -> Optional[int]:
        """Slot currently holding the stairs; resolved on every access as swap_remove moves slots."""
        if self.stairs is None:
            return None
        return self.registry.find(lambda e: e is self.stairs)

    @property
    def exit(self) -> Optional[Entity]:
        return None if self.exit_index is None else self.stairs


def _random_candidate(config: LevelConfig, rng: random.Random) -> Rect:
    w = rng.randint(config.min_size, config.max_size)
    h = rng.randint(config.min_size, config.max_size)
    x = rng.randint(1, config.width - w - 1)
    y = rng.randint(1, config.height - h - 1)
    return Rect.from_size(x, y, w, h)


def make_level(player: Entity, config: LevelConfig | None = None, rng: random.Random | None = None, depth: int = 1) -> Level:
    """Build a fresh grid and registry; ``player`` becomes slot 0."""
    config = config or LevelConfig()
    rng = rng or random.Random()
    grid = new_grid(config.width, config.height)
    registry = EntityRegistry([player])
    level = Level(grid, registry, depth=depth)

    for _ in range(config.max_rooms):
        candidate = _random_candidate(config, rng)
        if not config.spawn_after_carve:
            spawn(candidate, registry, grid, config, rng)

        overlaps = any(candidate.intersects(other) for other in level.candidates)
        if not overlaps:
            carve_room(candidate, grid)
            cx, cy = candidate.center()
            if not level.rooms:
                registry[PLAYER].move_to(cx, cy)
            else:
                prev = level.rooms[-1].center()
                carve_l_tunnel(prev, (cx, cy), grid, rng)
            if config.spawn_after_carve:
                spawn(candidate, registry, grid, config, rng)
            level.rooms.append(candidate)
            log.debug(event="room_carved", depth=depth, x1=candidate.x1, y1=candidate.y1, x2=candidate.x2, y2=candidate.y2)
        else:
            log.debug(event="room_rejected", depth=depth, x1=candidate.x1, y1=candidate.y1)
        level.candidates.append(candidate)

    level.stairs = _place_exit(level, rng)
    log.info(
        event="level_generated",
        depth=depth,
        rooms=len(level.rooms),
        candidates=len(level.candidates),
        entities=len(registry),
    )
    return level


def _place_exit(level: Level, rng: random.Random) -> Optional[Entity]:
    if not level.rooms:
        log.warn(event="exit_skipped", reason="no_rooms", depth=level.depth)
        return None
    grid, registry = level.grid, level.registry
    x, y = level.rooms[-1].center()
    rerolls = 0
    while is_blocked(x, y, grid, registry):
        x += rng.randint(-1, 1)
        y += rng.randint(-1, 1)
        if not in_bounds(grid, x, y):
            # Reseed from an earlier room; a single-room level can only retry its own center
            x, y = rng.choice(level.rooms[:-1] or level.rooms).center()
            rerolls += 1
    if rerolls:
        log.debug(event="exit_rerolled", rerolls=rerolls, depth=level.depth)
    stairs = make_stairs(x, y)
    registry.push(stairs)
    return stairs


__all__ = ["Level", "make_level"]
