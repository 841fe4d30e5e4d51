"""Append-only status message queue.

Renderers read entries and decide how long to show each one; ``duration`` is
a hint in turns. Entries are serialized as ``{"m": message, "d": duration,
"turn": n}``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterator, List

from delve.logging_utils import get_logger

log = get_logger("delve.status")


@dataclass(frozen=True)
class Status:
    message: str
    duration: int = 1
    turn: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {"m": self.message, "d": self.duration, "turn": self.turn}


class StatusLog:
    def __init__(self):
        self._entries: List[Status] = []
        self.turn = 0

    def add(self, message: str, duration: int = 1) -> Status:
        status = Status(message, max(1, int(duration)), self.turn)
        self._entries.append(status)
        log.debug(event="status", turn=self.turn, m=message)
        return status

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Status]:
        return iter(self._entries)

    def messages(self) -> List[str]:
        return [s.message for s in self._entries]

    def tail(self, n: int = 10) -> List[Status]:
        return self._entries[-n:] if n > 0 else []


__all__ = ["Status", "StatusLog"]
