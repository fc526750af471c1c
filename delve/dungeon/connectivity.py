"""Reachability checks over a carved grid.

Read-only: nothing here changes the grid. Used by the diagnostics script
and the pipeline metrics. `extra` lists further cell values to walk over
(placed objects, for instance).
"""
from __future__ import annotations

from collections import deque
from typing import Iterable, List, Set

from .cells import CellConfig, PASSABLE_ROLES
from .regions import Point


def _walkable(cells: CellConfig, value, extra) -> bool:
    return cells.is_any(value, PASSABLE_ROLES) or value in extra


def flood_passable(grid, cells: CellConfig, start, extra: Iterable = ()) -> Set[Point]:
    """Cells reachable from `start` through 4-way passable adjacency."""
    extra = list(extra)
    start = Point(*start)
    if not grid.contains(*start) or not _walkable(cells, grid.get(*start), extra):
        return set()
    seen = {start}
    q = deque([start])
    while q:
        y, x = q.popleft()
        for dy, dx in ((-1, 0), (1, 0), (0, -1), (0, 1)):
            n = Point(y + dy, x + dx)
            if n in seen or not grid.contains(*n):
                continue
            if _walkable(cells, grid.get(*n), extra):
                seen.add(n)
                q.append(n)
    return seen


def passable_components(grid, cells: CellConfig, extra: Iterable = ()) -> List[Set[Point]]:
    extra = list(extra)
    components: List[Set[Point]] = []
    covered: Set[Point] = set()
    for y, x, value in grid.cells():
        p = Point(y, x)
        if p in covered or not _walkable(cells, value, extra):
            continue
        comp = flood_passable(grid, cells, p, extra)
        covered |= comp
        components.append(comp)
    return components


def unreachable_rooms(grid, cells: CellConfig, rooms, extra: Iterable = ()) -> list:
    """Rooms whose centre is not in the same passable area as the first room's."""
    if not rooms:
        return []
    reach = flood_passable(grid, cells, rooms[0].center(), extra)
    return [room for room in rooms if room.center() not in reach]


__all__ = ["flood_passable", "passable_components", "unreachable_rooms"]
