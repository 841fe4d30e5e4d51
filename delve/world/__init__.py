from .entities import Entity, Fighter
from .messages import Status, StatusLog
from .registry import PLAYER, EntityRegistry

__all__ = ["Entity", "Fighter", "Status", "StatusLog", "PLAYER", "EntityRegistry"]
