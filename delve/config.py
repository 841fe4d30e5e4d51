import os
from dataclasses import dataclass, field
from typing import Optional

MAP_WIDTH = 100
MAP_HEIGHT = 30

ROOM_MIN_SIZE = 6
ROOM_MAX_SIZE = 10
MAX_ROOMS = 30

MAX_ROOM_MONSTERS = 3
MAX_ROOM_ITEMS = 2

SIGHT_RADIUS = 10
INVENTORY_CAPACITY = 26
REGEN_INTERVAL = 4
HEAL_AMOUNT = 4
DAMAGE_FLOOR = 0

PLAYER_HP = 30
PLAYER_DEFENCE = 2
PLAYER_POWER = 5


@dataclass
class LevelConfig:
    width: int = MAP_WIDTH
    height: int = MAP_HEIGHT
    max_rooms: int = MAX_ROOMS
    min_size: int = ROOM_MIN_SIZE
    max_size: int = ROOM_MAX_SIZE
    max_room_monsters: int = MAX_ROOM_MONSTERS
    max_room_items: int = MAX_ROOM_ITEMS
    # False keeps the classic ordering: spawn for every candidate room, even rejected ones
    spawn_after_carve: bool = False


@dataclass
class GameConfig:
    level: LevelConfig = field(default_factory=LevelConfig)
    seed: Optional[int] = None
    sight_radius: int = SIGHT_RADIUS
    inventory_capacity: int = INVENTORY_CAPACITY
    regen_interval: int = REGEN_INTERVAL
    heal_amount: int = HEAL_AMOUNT

    @classmethod
    def from_env(cls, **overrides) -> "GameConfig":
        """Build a config from DELVE_* environment variables; keyword overrides win."""
        cfg = cls(**overrides)
        if "seed" not in overrides and os.getenv("DELVE_SEED"):
            cfg.seed = int(os.environ["DELVE_SEED"])
        if "sight_radius" not in overrides and os.getenv("DELVE_SIGHT_RADIUS"):
            cfg.sight_radius = int(os.environ["DELVE_SIGHT_RADIUS"])
        return cfg


__all__ = ["LevelConfig", "GameConfig"]
