"""World actors and objects.

Every actor or object on the map (player, monsters, potions, stairs) is an
``Entity``. Optional components hang off it: ``fighter`` for anything that can
take part in combat, ``ai`` naming a behaviour in ``delve.world.ai``, and
``item`` naming what happens when it is used from the inventory.

Entities are addressed by their slot in the ``EntityRegistry``; ``eq=False``
keeps dataclass equality from standing in for slot identity.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

BASIC_AI = "basic"
HEAL_ITEM = "heal"

CORPSE_GLYPH = "%"
CORPSE_COLOR = "dark_red"


@dataclass
class Fighter:
    max_hp: int
    hp: int
    defence: int
    power: int

    def set_hp(self, value: int) -> int:
        self.hp = max(0, min(self.max_hp, value))
        return self.hp


@dataclass(eq=False)
class Entity:
    x: int
    y: int
    glyph: str
    color: str
    blocks: bool
    name: str
    alive: bool = False
    fighter: Optional[Fighter] = None
    ai: Optional[str] = None
    item: Optional[str] = None

    def pos(self) -> Tuple[int, int]:
        return (self.x, self.y)

    def move_to(self, x: int, y: int) -> None:
        self.x, self.y = x, y

    def distance_to(self, x: int, y: int) -> float:
        return ((x - self.x) ** 2 + (y - self.y) ** 2) ** 0.5

    def to_dict(self, index: int) -> Dict[str, Any]:
        return {
            "index": index,
            "x": self.x,
            "y": self.y,
            "glyph": self.glyph,
            "color": self.color,
            "name": self.name,
            "alive": self.alive,
            "blocks": self.blocks,
        }


def make_player(x: int = 0, y: int = 0, *, hp: int, defence: int, power: int) -> Entity:
    return Entity(
        x,
        y,
        "@",
        "white",
        True,
        "player",
        alive=True,
        fighter=Fighter(max_hp=hp, hp=hp, defence=defence, power=power),
    )


def make_orc(x: int, y: int) -> Entity:
    return Entity(x, y, "o", "green", True, "orc", alive=True, fighter=Fighter(10, 10, 0, 3), ai=BASIC_AI)


def make_troll(x: int, y: int) -> Entity:
    return Entity(x, y, "T", "yellow", True, "troll", alive=True, fighter=Fighter(16, 16, 1, 4), ai=BASIC_AI)


def make_healing_potion(x: int, y: int) -> Entity:
    return Entity(x, y, "!", "magenta", False, "healing potion", item=HEAL_ITEM)


def make_stairs(x: int, y: int) -> Entity:
    return Entity(x, y, ">", "red", False, "stairs")


__all__ = [
    "BASIC_AI",
    "HEAL_ITEM",
    "CORPSE_GLYPH",
    "CORPSE_COLOR",
    "Fighter",
    "Entity",
    "make_player",
    "make_orc",
    "make_troll",
    "make_healing_potion",
    "make_stairs",
]
