"""Index-addressed entity arena.

The registry is the single owner of the level's mutable actors. Slot 0 is
always the player for the lifetime of a level. Identity is the slot index:
two entities are "the same" only when their indices match.

``swap_remove`` moves the last entity into the vacated slot, so any index
captured before a removal must be re-resolved afterwards.
"""

from __future__ import annotations

from typing import Iterator, List, Optional, Tuple

from .entities import Entity

PLAYER = 0


class EntityRegistry:
    def __init__(self, entities: Optional[List[Entity]] = None):
        self._entities: List[Entity] = list(entities or [])

    def __len__(self) -> int:
        return len(self._entities)

    def __iter__(self) -> Iterator[Entity]:
        return iter(self._entities)

    def __getitem__(self, index: int) -> Entity:
        return self._entities[self._check(index)]

    def _check(self, index: int) -> int:
        if not 0 <= index < len(self._entities):
            raise IndexError(f"entity slot {index} out of range (size {len(self._entities)})")
        return index

    @property
    def player(self) -> Entity:
        return self[PLAYER]

    def push(self, entity: Entity) -> int:
        self._entities.append(entity)
        return len(self._entities) - 1

    def swap_remove(self, index: int) -> Entity:
        """Remove slot ``index``; the former last entity now lives at ``index``."""
        self._check(index)
        last = self._entities.pop()
        if index == len(self._entities):
            return last
        removed = self._entities[index]
        self._entities[index] = last
        return removed

    def pair(self, a: int, b: int) -> Tuple[Entity, Entity]:
        """Two simultaneous views into distinct slots (attacker/defender style)."""
        self._check(a)
        self._check(b)
        if a == b:
            raise ValueError(f"cannot borrow entity slot {a} twice")
        return self._entities[a], self._entities[b]

    def enumerate(self) -> Iterator[Tuple[int, Entity]]:
        return enumerate(self._entities)

    def find(self, predicate) -> Optional[int]:
        """Lowest index whose entity satisfies predicate, or None."""
        for idx, entity in enumerate(self._entities):
            if predicate(entity):
                return idx
        return None

    def at(self, x: int, y: int) -> List[int]:
        return [idx for idx, e in enumerate(self._entities) if e.pos() == (x, y)]


__all__ = ["PLAYER", "EntityRegistry"]
