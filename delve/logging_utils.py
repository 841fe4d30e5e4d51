"""Minimal structured logging helper.

Emits key=value pairs (or one JSON object per line) with a timestamp and
level. Generation and turn events are logged at debug level so a normal run
stays quiet.

Usage:
    from delve.logging_utils import get_logger
    log = get_logger("delve.dungeon")
    log.debug(event="room_carved", x1=3, y1=4)
    game_log = log.bind(seed=42)   # every line now carries seed=42

Non-numeric values are str()'d with spaces replaced. Reserved keys: level, ts.
"""

from __future__ import annotations

import json
import os
import sys
import time

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}


def _current_level() -> int:
    return LEVELS.get(os.getenv("DELVE_LOG_LEVEL", "info").lower(), 20)


def _json_mode() -> bool:
    return os.getenv("DELVE_LOG_JSON", "0") in ("1", "true", "TRUE", "yes", "on")


def _format(level: str, **fields):
    if _json_mode():
        rec = {k: v for k, v in fields.items() if v is not None}
        rec["level"] = level
        rec["ts"] = int(time.time())
        return json.dumps(rec, separators=(",", ":"), default=str)
    parts = [f"level={level}", f"ts={int(time.time())}"]
    for k, v in fields.items():
        if v is None:
            continue
        if isinstance(v, (int, float)):
            parts.append(f"{k}={v}")
        else:
            s = str(v).replace(" ", "_")
            parts.append(f"{k}={s}")
    return " ".join(parts)


class _Logger:
    def __init__(self, name: str | None = None, context: dict | None = None):
        self.name = name or "delve"
        self.context = dict(context or {})

    def bind(self, **context) -> "_Logger":
        """Child logger stamping ``context`` on every line; per-call fields win on clashes."""
        return _Logger(self.name, {**self.context, **context})

    def enabled_for(self, lvl: str) -> bool:
        return LEVELS[lvl] >= _current_level()

    def _log(self, lvl: str, **fields):
        if not self.enabled_for(lvl):
            return
        fields = {**self.context, **fields}
        if "logger" not in fields:
            fields["logger"] = self.name
        print(_format(lvl, **fields), file=sys.stdout if lvl != "error" else sys.stderr)

    def debug(self, **fields):
        self._log("debug", **fields)

    def info(self, **fields):
        self._log("info", **fields)

    def warn(self, **fields):
        self._log("warn", **fields)

    def error(self, **fields):
        self._log("error", **fields)


_LOGGER_CACHE = {}


def get_logger(name: str):
    if name not in _LOGGER_CACHE:
        _LOGGER_CACHE[name] = _Logger(name)
    return _LOGGER_CACHE[name]


log = get_logger("delve")
