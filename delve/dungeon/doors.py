"""Door bookkeeping between a Room and the grid it was dug into."""
from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from .cells import CellConfig, CellRole, ROOM_WALL_ROLES, ensure_resolved
from .regions import Point, Side

logger = logging.getLogger(__name__)


def add_door(room, cells: CellConfig, door, grid) -> bool:
    """Register `door` on `room`; once the room is dug, make the cell a door.

    A wall cell is turned into a room door. Any other cell that is not
    already a room door means the position cannot hold one; the door is
    unregistered again and False returned.
    """
    cells = ensure_resolved(cells)
    door = Point(*door)
    if not room.add_door(door):
        return False
    if room.is_dug:
        spot = grid.get(door.y, door.x)
        if cells.is_any(spot, ROOM_WALL_ROLES):
            grid.set_copy(door.y, door.x, cells[CellRole.ROOM_DOOR])
        elif not cells.is_role(spot, CellRole.ROOM_DOOR):
            room.remove_door(door)
            logger.debug("door %s rejected on %r: cell %r", tuple(door), room, spot)
            return False
    return True


def door_exit(room, door) -> Optional[Point]:
    """Cell just outside `room` next to an edge position, or None."""
    door = Point(*door)
    if not room.contains(door.y, door.x):
        return None
    if door.y == room.y:
        return Point(door.y - 1, door.x)
    if door.y == room.y + room.height - 1:
        return Point(door.y + 1, door.x)
    if door.x == room.x:
        return Point(door.y, door.x - 1)
    if door.x == room.x + room.width - 1:
        return Point(door.y, door.x + 1)
    return None


def shared_wall_doors(a, b) -> Optional[Tuple[Point, Point]]:
    """Facing wall cells of two rooms that sit flush against each other.

    Returns a door position on each room, opposite one another and clear of
    both rooms' corners, or None when the rooms do not touch along a wall.
    """
    a_bottom, b_bottom = a.y + a.height - 1, b.y + b.height - 1
    a_right, b_right = a.x + a.width - 1, b.x + b.width - 1
    if a_right + 1 == b.x or b_right + 1 == a.x:
        lo, hi = max(a.y, b.y) + 1, min(a_bottom, b_bottom) - 1
        if lo > hi:
            return None
        y = (lo + hi) // 2
        if a_right + 1 == b.x:
            return Point(y, a_right), Point(y, b.x)
        return Point(y, a.x), Point(y, b_right)
    if a_bottom + 1 == b.y or b_bottom + 1 == a.y:
        lo, hi = max(a.x, b.x) + 1, min(a_right, b_right) - 1
        if lo > hi:
            return None
        x = (lo + hi) // 2
        if a_bottom + 1 == b.y:
            return Point(a_bottom, x), Point(b.y, x)
        return Point(a.y, x), Point(b_bottom, x)
    return None


def door_spots(room) -> List[Point]:
    """Every edge position of `room` that can hold a door (corners excluded)."""
    spots: List[Point] = []
    for run in room.edge_runs():
        if run.side == Side.CORNER:
            continue
        points = list(run.cells())
        if run.side in (Side.TOP, Side.BOTTOM):
            points = points[1:-1]
        spots.extend(points)
    return spots


__all__ = ["add_door", "door_exit", "door_spots", "shared_wall_doors"]
