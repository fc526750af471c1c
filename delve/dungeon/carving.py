"""Room carving.

dig_room() fills a rectangle's inside with room floor and draws its edge
with wall symbols. Whatever was already built there (halls, other rooms)
is kept connected: built cells inside become floor and built cells on the
edge become doors. That overlap is reported as an "intrusion".
"""
from __future__ import annotations

import logging
from typing import List, Optional

from .cells import CellConfig, CellRole, ensure_resolved
from .regions import Point, Side

logger = logging.getLogger(__name__)

_SIDE_WALL = {
    Side.TOP: CellRole.WALL_TOP,
    Side.BOTTOM: CellRole.WALL_BOTTOM,
    Side.LEFT: CellRole.WALL_LEFT,
    Side.RIGHT: CellRole.WALL_RIGHT,
    Side.CORNER: CellRole.ROOM_WALL,
}

_RUN_ENDS = {
    Side.TOP: (CellRole.WALL_TOP_LEFT, CellRole.WALL_TOP_RIGHT),
    Side.BOTTOM: (CellRole.WALL_BOTTOM_LEFT, CellRole.WALL_BOTTOM_RIGHT),
}

_ROCK = (CellRole.DIGGABLE, CellRole.HALL_WALL)
_BUILT_INSIDE = (CellRole.ROOM_WALL, CellRole.HALL_FLOOR)
_BUILT_EDGE = (CellRole.HALL_FLOOR, CellRole.ROOM_FLOOR)
_DOORS = (CellRole.ROOM_DOOR, CellRole.HALL_DOOR)


def dig_room(grid, cells: CellConfig, region, openings: Optional[List[Point]] = None) -> bool:
    """Carve `region` into `grid`; return True if it met existing structure.

    When `openings` is given, every edge cell left passable (new doors,
    merged floor, doors that were already there) is appended to it.
    """
    cells = ensure_resolved(cells)
    intrusion = _dig_inside(grid, cells, region)
    if _dig_edge(grid, cells, region, openings):
        intrusion = True
    logger.debug("dig_room %sx%s@(%s,%s) intrusion=%s",
                 region.height, region.width, region.y, region.x, intrusion)
    return intrusion


def _dig_inside(grid, cells: CellConfig, region) -> bool:
    intrusion = False
    floor = cells[CellRole.ROOM_FLOOR]
    wall = cells[CellRole.ROOM_WALL]
    pat_idx = 0
    for run in region.inside_runs():
        for y, x in run.cells():
            state = True
            if run.patterned:
                state = run.pattern[pat_idx]
                pat_idx = (pat_idx + 1) % len(run.pattern)
            cell = grid.get(y, x)
            if cells.is_any(cell, _ROCK):
                grid.set_copy(y, x, floor if state else wall)
            elif cells.is_any(cell, _BUILT_INSIDE):
                grid.set_copy(y, x, floor)
                intrusion = True
    return intrusion


def _dig_edge(grid, cells: CellConfig, region, openings: Optional[List[Point]]) -> bool:
    intrusion = False
    floor = cells[CellRole.ROOM_FLOOR]
    door = cells[CellRole.ROOM_DOOR]
    for run in region.edge_runs():
        wall = cells[_SIDE_WALL[run.side]]
        ends = _RUN_ENDS.get(run.side)
        points = list(run.cells())
        last = len(points) - 1
        last_door = False
        last_floor = False
        prev: Optional[Point] = None
        for i, p in enumerate(points):
            cell = grid.get(p.y, p.x)
            if cells.is_any(cell, _ROCK):
                if ends is not None and i == 0:
                    grid.set_copy(p.y, p.x, cells[ends[0]])
                elif ends is not None and i == last:
                    grid.set_copy(p.y, p.x, cells[ends[1]])
                else:
                    grid.set_copy(p.y, p.x, wall)
                last_door = last_floor = False
            elif _wide_opening(grid, cells, points, i, last_door or last_floor):
                # already part of an opening merged by an earlier dig
                if last_door:
                    grid.set_copy(prev.y, prev.x, floor)
                _note(openings, p)
                last_door = False
                last_floor = True
            elif cells.is_any(cell, _BUILT_EDGE):
                if last_door or last_floor:
                    grid.set_copy(p.y, p.x, floor)
                    if last_door:
                        # two doors side by side become one wide opening
                        grid.set_copy(prev.y, prev.x, floor)
                    last_door = False
                    last_floor = True
                else:
                    grid.set_copy(p.y, p.x, door)
                    last_door = True
                _note(openings, p)
                intrusion = True
            elif cells.is_any(cell, _DOORS):
                _note(openings, p)
                last_door = True
                last_floor = False
            else:
                last_door = last_floor = False
            prev = p
    return intrusion


def _wide_opening(grid, cells: CellConfig, points: List[Point], i: int, after_opening: bool) -> bool:
    """Room floor on the edge next to another opening cell of the same run."""
    p = points[i]
    if not cells.is_role(grid.get(p.y, p.x), CellRole.ROOM_FLOOR):
        return False
    if after_opening:
        return True
    if i + 1 < len(points):
        ahead = points[i + 1]
        return cells.is_role(grid.get(ahead.y, ahead.x), CellRole.ROOM_FLOOR)
    return False


def _note(openings: Optional[List[Point]], p: Point) -> None:
    if openings is not None and p not in openings:
        openings.append(p)


__all__ = ["dig_room"]
