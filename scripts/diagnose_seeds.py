#!/usr/bin/env python3
"""Dungeon structural diagnostics for specific seeds.

Usage:
  DELVE_STRATEGY=hall_first python scripts/diagnose_seeds.py 292372 730727

If no seeds are provided as CLI args, a default list is used. Other DELVE_*
variables (size, strategy, ...) apply as they do for run.py.
Exits with non-zero status if structural issues are detected.
"""

from __future__ import annotations

import json
import os
import sys
from typing import List

# Ensure project root on path if executed directly
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from delve.dungeon import DiggerConfig, Dungeon  # noqa: E402 import after path fix
from delve.dungeon.cells import CellRole  # noqa: E402
from delve.dungeon.connectivity import unreachable_rooms  # noqa: E402

DEFAULT_SEEDS = [292372, 730727, 1, 42]


def run_for_seed(seed: int) -> dict:
    d = Dungeon(DiggerConfig.from_env(seed=seed))
    cells = d.cells
    bad_doors = [
        tuple(p)
        for room in d.rooms
        for p in room.doors
        if d.grid.get(*p) != d.thing
        and not cells.is_any(
            d.grid.get(*p),
            (CellRole.ROOM_DOOR, CellRole.HALL_DOOR, CellRole.ROOM_FLOOR, CellRole.HALL_FLOOR),
        )
    ]
    issues = {
        "unreachable_rooms": len(unreachable_rooms(d.grid, cells, d.rooms, [d.thing])),
        "undug_rooms": sum(1 for r in d.rooms if not r.is_dug),
        "rooms_without_doors": sum(1 for r in d.rooms if not r.doors) if len(d.rooms) > 1 else 0,
        "doors_not_passable": len(bad_doors),
    }
    return {
        "seed": seed,
        "strategy": d.config.strategy,
        "rooms": len(d.rooms),
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
