"""Melee resolution between two registry slots.

Rules:
  - Both slots must hold a fighter; attacking yourself is a contract breach.
  - damage = power - defence, floored at DAMAGE_FLOOR (0: armour can fully absorb a hit).
  - Defender hp is clamped into [0, max_hp].
  - At hp 0 the defender dies in place: it stops blocking, turns into a corpse
    glyph and is skipped by target search and the AI phase, but keeps its slot.
"""

from __future__ import annotations

from delve.config import DAMAGE_FLOOR
from delve.logging_utils import get_logger

from .entities import CORPSE_COLOR, CORPSE_GLYPH, Entity
from .messages import StatusLog
from .registry import PLAYER, EntityRegistry

log = get_logger("delve.combat")


def compute_damage(power: int, defence: int, floor: int = DAMAGE_FLOOR) -> int:
    return max(floor, power - defence)


def attack(registry: EntityRegistry, attacker_index: int, defender_index: int, statuses: StatusLog) -> int:
    """Resolve one attack; returns the damage dealt."""
    attacker, defender = registry.pair(attacker_index, defender_index)
    if attacker.fighter is None or defender.fighter is None:
        raise ValueError(f"slots {attacker_index} and {defender_index} must both be fighters")
    damage = compute_damage(attacker.fighter.power, defender.fighter.defence)
    if damage > 0:
        statuses.add(f"{attacker.name.capitalize()} attacks {defender.name} for {damage} hit points.")
    else:
        statuses.add(f"{attacker.name.capitalize()} attacks {defender.name} but it has no effect!")
    hp = defender.fighter.set_hp(defender.fighter.hp - damage)
    log.debug(event="attack", attacker=attacker_index, defender=defender_index, damage=damage, hp=hp)
    if hp == 0 and defender.alive:
        _kill(defender, defender_index == PLAYER, statuses)
    return damage


def _kill(entity: Entity, is_player: bool, statuses: StatusLog) -> None:
    entity.alive = False
    entity.blocks = False
    entity.glyph = CORPSE_GLYPH
    entity.color = CORPSE_COLOR
    if is_player:
        statuses.add("You died!", 3)
    else:
        statuses.add(f"{entity.name.capitalize()} is dead!", 2)
        entity.name = f"remains of {entity.name}"
    log.debug(event="death", name=entity.name)


__all__ = ["compute_damage", "attack"]
