"""Per-room spawn table.

Monsters: 0..max_room_monsters per room, 80% orc / 20% troll, dropped on a
random interior cell with no blocked check. Items: 0..max_room_items healing
potions, each placed only if its cell is free at spawn time.
"""

from __future__ import annotations

import random
from typing import List

from delve.config import LevelConfig
from delve.world.entities import Entity, make_healing_potion, make_orc, make_troll
from delve.world.registry import EntityRegistry

from .rooms import Rect
from .tiles import Grid, is_blocked

ORC_CHANCE = 0.8


def _interior_point(room: Rect, rng: random.Random):
    return rng.randint(room.x1 + 1, room.x2 - 1), rng.randint(room.y1 + 1, room.y2 - 1)


def choose_monster(x: int, y: int, rng: random.Random) -> Entity:
    if rng.random() < ORC_CHANCE:
        return make_orc(x, y)
    return make_troll(x, y)


def spawn(room: Rect, registry: EntityRegistry, grid: Grid, config: LevelConfig, rng: random.Random) -> List[int]:
    """Populate ``room``; returns the registry slots that were added."""
    added: List[int] = []
    for _ in range(rng.randint(0, config.max_room_monsters)):
        x, y = _interior_point(room, rng)
        added.append(registry.push(choose_monster(x, y, rng)))
    for _ in range(rng.randint(0, config.max_room_items)):
        x, y = _interior_point(room, rng)
        if not is_blocked(x, y, grid, registry):
            added.append(registry.push(make_healing_potion(x, y)))
    return added


__all__ = ["ORC_CHANCE", "choose_monster", "spawn"]
