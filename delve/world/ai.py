"""Monster behaviours.

Each behaviour is a plain function ``(index, world) -> str`` registered under
a tag; an entity's ``ai`` field names its tag. The scheduler only ever calls
``take_turn``, so new behaviours plug in by registering another tag.

``world`` must expose ``grid``, ``registry`` and ``statuses`` (``Game`` does).
The returned string names what happened ('idle', 'attack', 'move',
'blocked') for logging and tests.
"""

from __future__ import annotations

from typing import Callable, Dict

from delve.logging_utils import get_logger

from .combat import attack
from .movement import move_towards
from .registry import PLAYER

log = get_logger("delve.ai")

Behaviour = Callable[[int, object], str]

BEHAVIOURS: Dict[str, Behaviour] = {}


def register(tag: str):
    def deco(fn: Behaviour) -> Behaviour:
        BEHAVIOURS[tag] = fn
        return fn

    return deco


@register("basic")
def basic_take_turn(index: int, world) -> str:
    monster = world.registry[index]
    if not monster.alive:
        return "idle"
    # A monster acts only while it stands on a tile the player can see
    if not world.grid[monster.x][monster.y].currently_visible:
        return "idle"
    player = world.registry[PLAYER]
    if max(abs(player.x - monster.x), abs(player.y - monster.y)) <= 1:
        if player.alive and player.fighter is not None:
            attack(world.registry, index, PLAYER, world.statuses)
            return "attack"
        return "idle"
    if move_towards(index, player.x, player.y, world.grid, world.registry):
        return "move"
    return "blocked"


def take_turn(index: int, world) -> str:
    tag = world.registry[index].ai
    behaviour = BEHAVIOURS.get(tag)
    if behaviour is None:
        raise KeyError(f"unknown ai behaviour {tag!r} on slot {index}")
    outcome = behaviour(index, world)
    log.debug(event="ai_turn", index=index, ai=tag, outcome=outcome)
    return outcome


__all__ = ["BEHAVIOURS", "register", "basic_take_turn", "take_turn"]
