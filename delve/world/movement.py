from __future__ import annotations

from delve.dungeon.tiles import Grid, in_bounds, is_blocked

from .registry import EntityRegistry


def move_by(index: int, dx: int, dy: int, grid: Grid, registry: EntityRegistry) -> bool:
    """Step slot ``index`` by (dx, dy) unless terrain or a blocking entity is in the way.

    Returns True when the entity moved. Off-grid destinations count as blocked.
    """
    entity = registry[index]
    nx, ny = entity.x + dx, entity.y + dy
    if not in_bounds(grid, nx, ny) or is_blocked(nx, ny, grid, registry):
        return False
    entity.move_to(nx, ny)
    return True


def move_towards(index: int, target_x: int, target_y: int, grid: Grid, registry: EntityRegistry) -> bool:
    """Greedy single step that shrinks the Euclidean distance to the target."""
    entity = registry[index]
    dx = target_x - entity.x
    dy = target_y - entity.y
    distance = entity.distance_to(target_x, target_y)
    if distance == 0:
        return False
    # Normalise to a unit step on each axis
    step_x = int(round(dx / distance))
    step_y = int(round(dy / distance))
    return move_by(index, step_x, step_y, grid, registry)


__all__ = ["move_by", "move_towards"]
