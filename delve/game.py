"""Turn scheduler.

One call to ``Game.step`` is one turn:

    AwaitingInput -> resolve player command -> (TookTurn) visibility + AI phase -> AwaitingInput
                                            -> (DidntTakeTurn) AwaitingInput
                  -> Exit

Player resolution always finishes before any monster acts. The AI phase walks
a snapshot of living AI slots in ascending order and each monster finishes its
whole action (including combat) before the next one starts.

``Game.run`` drives the loop from a caller-supplied command source; that call
is the only place the pipeline waits.
"""

from __future__ import annotations

import dataclasses
import enum
import random
from typing import Any, Callable, Dict, List, Optional, Tuple

from delve.config import PLAYER_DEFENCE, PLAYER_HP, PLAYER_POWER, GameConfig
from delve.dungeon.generator import Level, make_level
from delve.logging_utils import get_logger
from delve.world import ai
from delve.world.combat import attack
from delve.world.entities import HEAL_ITEM, Entity, make_player
from delve.world.fov import update_visibility
from delve.world.messages import StatusLog
from delve.world.movement import move_by
from delve.world.registry import PLAYER

log = get_logger("delve.game")


class Command(enum.Enum):
    EXIT = "exit"
    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    PICK_UP = "pick_up"
    REST = "rest"
    UNRECOGNIZED = "unrecognized"

    @classmethod
    def parse(cls, raw: Any) -> "Command":
        if isinstance(raw, Command):
            return raw
        try:
            return cls(str(raw).strip().lower())
        except ValueError:
            return cls.UNRECOGNIZED


class PlayerAction(enum.Enum):
    TOOK_TURN = "took_turn"
    DIDNT_TAKE_TURN = "didnt_take_turn"
    EXIT = "exit"


DIRECTIONS: Dict[Command, Tuple[int, int]] = {
    Command.MOVE_UP: (0, -1),
    Command.MOVE_DOWN: (0, 1),
    Command.MOVE_LEFT: (-1, 0),
    Command.MOVE_RIGHT: (1, 0),
}


class Game:
    def __init__(self, config: Optional[GameConfig] = None, *, seed: Optional[int] = None):
        # Private copy: the seed chosen below must not leak into a shared config
        self.config = dataclasses.replace(config) if config is not None else GameConfig()
        if seed is not None:
            self.config.seed = seed
        if self.config.seed is None:
            self.config.seed = random.randint(0, 2**31 - 1)
        self.seed = self.config.seed
        self.log = log.bind(seed=self.seed)
        # Local RNG so outside random usage never perturbs a seeded run
        self.rng = random.Random(self.seed)
        self.statuses = StatusLog()
        self.inventory: List[Entity] = []
        self.turn = 0
        self.exited = False
        player = make_player(hp=PLAYER_HP, defence=PLAYER_DEFENCE, power=PLAYER_POWER)
        self.level: Level = make_level(player, self.config.level, self.rng, depth=1)
        self.recompute_visibility()
        self.log.info(event="game_start", depth=self.level.depth)

    # ------------------------------------------------------------------
    # Level state shortcuts
    # ------------------------------------------------------------------
    @property
    def grid(self):
        return self.level.grid

    @property
    def registry(self):
        return self.level.registry

    @property
    def player(self) -> Entity:
        return self.level.registry[PLAYER]

    @property
    def depth(self) -> int:
        return self.level.depth

    def recompute_visibility(self):
        return update_visibility(self.grid, self.player.pos(), self.config.sight_radius)

    # ------------------------------------------------------------------
    # Turn pipeline
    # ------------------------------------------------------------------
    def run(self, next_command: Callable[[], Any]) -> int:
        """Loop until an exit command; returns the number of turns taken."""
        while True:
            if self.step(next_command()) is PlayerAction.EXIT:
                return self.turn

    def step(self, command: Any) -> PlayerAction:
        action = self.handle_command(Command.parse(command))
        if action is PlayerAction.EXIT:
            self.exited = True
            self.log.info(event="game_exit", turn=self.turn)
            return action
        if action is PlayerAction.TOOK_TURN and self.player.alive:
            self.turn += 1
            self.statuses.turn = self.turn
            self.recompute_visibility()
            self.run_ai_phase()
            self._regenerate()
            self._report_names_under_player()
        return action

    def handle_command(self, command: Command) -> PlayerAction:
        if command is Command.EXIT:
            return PlayerAction.EXIT
        if not self.player.alive:
            return PlayerAction.DIDNT_TAKE_TURN
        if command in DIRECTIONS:
            dx, dy = DIRECTIONS[command]
            self.player_move_or_attack(dx, dy)
            return PlayerAction.TOOK_TURN
        if command is Command.PICK_UP:
            item_index = self.registry.find(lambda e: e.pos() == self.player.pos() and e.item is not None)
            if item_index is not None:
                self.pick_item_up(item_index)
            return PlayerAction.TOOK_TURN
        if command is Command.REST:
            return PlayerAction.TOOK_TURN
        return PlayerAction.DIDNT_TAKE_TURN

    def player_move_or_attack(self, dx: int, dy: int) -> None:
        x, y = self.player.x + dx, self.player.y + dy
        target = self.registry.find(lambda e: e.pos() == (x, y) and e.alive and e.fighter is not None)
        if target is not None and target != PLAYER:
            attack(self.registry, PLAYER, target, self.statuses)
        elif not move_by(PLAYER, dx, dy, self.grid, self.registry):
            self.log.debug(event="move_blocked", turn=self.turn, x=x, y=y)

    def pick_item_up(self, index: int) -> bool:
        """Move slot ``index`` into the inventory. Slot indices after it may shift."""
        if len(self.inventory) >= self.config.inventory_capacity:
            self.statuses.add(f"Your inventory is full, cannot pick up {self.registry[index].name}.")
            return False
        item = self.registry.swap_remove(index)
        self.statuses.add(f"You picked up a {item.name}!")
        self.inventory.append(item)
        return True

    def run_ai_phase(self) -> List[int]:
        eligible = [idx for idx, e in self.registry.enumerate() if e.ai is not None and e.alive]
        for idx in eligible:
            ai.take_turn(idx, self)
        return eligible

    def _regenerate(self) -> None:
        fighter = self.player.fighter
        if self.config.regen_interval <= 0 or self.turn % self.config.regen_interval:
            return
        if self.player.alive and fighter.hp < fighter.max_hp:
            fighter.set_hp(fighter.hp + 1)

    def names_under_player(self) -> str:
        names = [self.registry[idx].name for idx in self.registry.at(*self.player.pos()) if idx != PLAYER]
        return ", ".join(names)

    def _report_names_under_player(self) -> None:
        names = self.names_under_player()
        if names:
            self.statuses.add(names, 1)

    # ------------------------------------------------------------------
    # Inventory and level transitions
    # ------------------------------------------------------------------
    def use_item(self, slot: int) -> bool:
        """Apply inventory slot ``slot``; the item is consumed only when it had an effect."""
        if not 0 <= slot < len(self.inventory):
            raise IndexError(f"inventory slot {slot} out of range")
        item = self.inventory[slot]
        if item.item == HEAL_ITEM:
            fighter = self.player.fighter
            if fighter.hp >= fighter.max_hp:
                self.statuses.add("You are already at full health.")
                return False
            fighter.set_hp(fighter.hp + self.config.heal_amount)
            self.statuses.add("Your wounds start to feel better!")
            self.inventory.pop(slot)
            return True
        self.statuses.add(f"The {item.name} cannot be used.")
        return False

    def on_stairs(self) -> bool:
        stairs = self.level.exit
        return stairs is not None and stairs.pos() == self.player.pos()

    def descend(self) -> bool:
        """Replace grid and registry with the next level; player stats and inventory carry over."""
        if not self.player.alive or not self.on_stairs():
            return False
        player = self.player
        self.level = make_level(player, self.config.level, self.rng, depth=self.level.depth + 1)
        self.recompute_visibility()
        self.statuses.add("You descend deeper into the dungeon...", 2)
        self.log.info(event="descend", depth=self.level.depth)
        return True

    # ------------------------------------------------------------------
    # Read-only view for renderers
    # ------------------------------------------------------------------
    def snapshot(self, status_tail: int = 20) -> Dict[str, Any]:
        grid = self.grid
        w, h = self.level.width, self.level.height
        rows = []
        visible = []
        for y in range(h):
            chars = []
            for x in range(w):
                tile = grid[x][y]
                if tile.currently_visible:
                    visible.append([x, y])
                if not tile.ever_seen:
                    chars.append(" ")
                else:
                    chars.append("#" if tile.block_sight else ".")
            rows.append("".join(chars))
        entities = []
        for idx, e in self.registry.enumerate():
            data = e.to_dict(idx)
            data["visible"] = grid[e.x][e.y].currently_visible
            entities.append(data)
        fighter = self.player.fighter
        return {
            "seed": self.seed,
            "level": self.level.depth,
            "turn": self.turn,
            "width": w,
            "height": h,
            "tiles": rows,
            "visible": visible,
            "entities": entities,
            "player": {
                "x": self.player.x,
                "y": self.player.y,
                "alive": self.player.alive,
                "hp": fighter.hp,
                "max_hp": fighter.max_hp,
                "power": fighter.power,
                "defence": fighter.defence,
            },
            "inventory": [{"letter": chr(ord("a") + i), "name": it.name} for i, it in enumerate(self.inventory)],
            "statuses": [s.to_dict() for s in self.statuses.tail(status_tail)],
            "on_stairs": self.on_stairs(),
        }


__all__ = ["Command", "PlayerAction", "DIRECTIONS", "Game"]
