#!/usr/bin/env python3
"""Level structural diagnostics for specific seeds.

Usage:
  python scripts/diagnose_seeds.py 292372 730727

If no seeds are provided as CLI args, a default list is used.
Exits with non-zero status if structural issues are detected.
"""

from __future__ import annotations

import json
import os
import random
import sys
from typing import List

# Ensure project root on path if executed directly
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from delve.config import LevelConfig  # noqa: E402 import after path fix
from delve.dungeon.connectivity import flood_walkable, unreachable_rooms  # noqa: E402
from delve.dungeon.generator import make_level  # noqa: E402
from delve.world.entities import make_player  # noqa: E402

DEFAULT_SEEDS = [292372, 730727]


def run_for_seed(seed: int) -> dict:
    config = LevelConfig()
    level = make_level(make_player(hp=30, defence=2, power=5), config, random.Random(seed))
    start = level.registry[0].pos()
    reach = flood_walkable(level.grid, start)
    out_of_bounds = [
        i
        for i, r in enumerate(level.rooms)
        if r.x1 < 1 or r.y1 < 1 or r.x2 > config.width - 1 or r.y2 > config.height - 1
    ]
    exit_pos = level.exit.pos() if level.exit is not None else None
    issues = {
        "unreachable_rooms": len(unreachable_rooms(level.grid, level.rooms, start)),
        "rooms_out_of_bounds": len(out_of_bounds),
        "exit_unreachable": int(exit_pos is not None and exit_pos not in reach),
    }
    return {
        "seed": seed,
        "rooms": len(level.rooms),
        "candidates": len(level.candidates),
        "entities": len(level.registry),
        "issues": issues,
        "ok": all(v == 0 for v in issues.values()),
    }


def main(argv: List[str]) -> int:
    seeds = [int(a) for a in argv] if argv else DEFAULT_SEEDS
    results = [run_for_seed(s) for s in seeds]
    print(json.dumps({"results": results}, indent=2))
    # Non-zero exit if any failure
    if not all(r["ok"] for r in results):
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
