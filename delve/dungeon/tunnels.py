"""Corridor carving.

dig_line() is the primitive: a straight, axis-aligned run of hall floor
flanked by hall walls, turning into a door where it runs into floor.
tunnel() joins two points with up to three such lines (a Z, or a single
line when the points share a row or column). avoidance_hall() draws the
same shapes but only through untouched rock and never inside the regions
it is told to avoid. route_around() is the fallback when no such shape
fits: a breadth-first path through the same open cells.
"""
from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from .cells import CellConfig, CellRole, PASSABLE_ROLES, ensure_resolved
from .regions import Point

logger = logging.getLogger(__name__)

Segment = Tuple[Point, Point]

_ROCK = (CellRole.DIGGABLE, CellRole.HALL_WALL)


@dataclass
class Cursor:
    y: int = 0
    x: int = 0

    def set_position(self, y: int, x: int) -> None:
        self.y = y
        self.x = x

    @property
    def point(self) -> Point:
        return Point(self.y, self.x)


def dig_line(grid, ya: int, xa: int, yb: int, xb: int, cells: CellConfig,
             cursor: Optional[Cursor] = None, interruptable: bool = False) -> bool:
    """Carve a straight line from (ya, xa) to (yb, xb) inclusive.

    Returns True when the line ran into existing structure. With
    `interruptable` the walk stops right after the first such cell.
    """
    cells = ensure_resolved(cells)
    logger.debug("dig_line (%s,%s) -> (%s,%s)", ya, xa, yb, xb)
    horizontal = ya == yb
    if horizontal:
        step = 1 if xa < xb else -1
        dy, dx = 0, step
        count = abs(xb - xa) + 1
    else:
        step = 1 if ya < yb else -1
        dy, dx = step, 0
        count = abs(yb - ya) + 1
    start, end = Point(ya, xa), Point(yb, xb)
    flank = not cells.is_role(cells[CellRole.HALL_WALL], CellRole.DIGGABLE)
    room_floor = cells[CellRole.ROOM_FLOOR]
    room_door = cells[CellRole.ROOM_DOOR]

    intrusion = False
    y, x = ya, xa
    reached = start
    for _ in range(count):
        if interruptable and intrusion:
            break
        cell = grid.get(y, x)
        door_mode = False
        if cells.is_role(cell, CellRole.DIGGABLE) or cells.is_role(cell, CellRole.HALL_WALL):
            ahead = grid.peek(y + dy, x + dx)
            if cells.is_role(ahead, CellRole.ROOM_FLOOR):
                grid.set_copy(y, x, room_door)
                door_mode = True
                intrusion = True
            elif cells.is_role(ahead, CellRole.HALL_FLOOR):
                if cells.is_role(cell, CellRole.HALL_WALL) and (y, x) in (start, end):
                    # line ends are already inside whatever they connect
                    grid.set_copy(y, x, room_floor)
                else:
                    grid.set_copy(y, x, cells[CellRole.HALL_DOOR])
                    intrusion = True
            else:
                grid.set_copy(y, x, cells[CellRole.HALL_FLOOR])
        else:
            intrusion = True

        if flank:
            for side in (-1, 1):
                sy, sx = (y + side, x) if horizontal else (y, x + side)
                if not grid.contains(sy, sx):
                    continue
                side_cell = grid.get(sy, sx)
                if cells.is_role(side_cell, CellRole.DIGGABLE):
                    if cells.is_role(grid.peek(sy + dy, sx + dx), CellRole.ROOM_FLOOR):
                        if door_mode:
                            grid.set_copy(y, x, room_floor)
                        grid.set_copy(sy, sx, room_floor if door_mode else room_door)
                        intrusion = True
                    else:
                        grid.set_copy(sy, sx, cells[CellRole.HALL_WALL])
                elif not cells.is_role(side_cell, CellRole.HALL_WALL):
                    intrusion = True
        reached = Point(y, x)
        y += dy
        x += dx

    if cursor is not None:
        cursor.set_position(reached.y, reached.x)
    return intrusion


def z_segments(a: Point, b: Point, split_y: bool) -> List[Segment]:
    """Three legs joining a and b, bending halfway along y or x."""
    if split_y:
        mid_y = a.y + int((b.y - a.y) / 2)
        return [
            (a, Point(mid_y, a.x)),
            (Point(mid_y, a.x), Point(mid_y, b.x)),
            (b, Point(mid_y, b.x)),
        ]
    mid_x = a.x + int((b.x - a.x) / 2)
    return [
        (a, Point(a.y, mid_x)),
        (Point(a.y, mid_x), Point(b.y, mid_x)),
        (b, Point(b.y, mid_x)),
    ]


def tunnel(grid, a, b, cells: CellConfig, rng, cursor: Optional[Cursor] = None,
           interruptable: bool = False) -> bool:
    a, b = Point(*a), Point(*b)
    cells = ensure_resolved(cells)
    logger.info("tunnel %s -> %s", tuple(a), tuple(b))
    if a.y == b.y or a.x == b.x:
        return dig_line(grid, a.y, a.x, b.y, b.x, cells, cursor, interruptable)
    first, middle, last = z_segments(a, b, rng.random() < 0.5)
    intrusion = False
    if dig_line(grid, *first[0], *first[1], cells, cursor, interruptable):
        intrusion = True
    if dig_line(grid, *middle[0], *middle[1], cells, cursor, interruptable):
        if interruptable:
            # finish the middle leg from its far end
            dig_line(grid, *middle[1], *middle[0], cells, cursor, interruptable)
        intrusion = True
    if dig_line(grid, *last[0], *last[1], cells, cursor, interruptable):
        intrusion = True
    return intrusion


def _segment_cells(seg: Segment) -> Iterable[Point]:
    (ya, xa), (yb, xb) = seg
    if ya == yb:
        step = 1 if xb >= xa else -1
        for x in range(xa, xb + step, step):
            yield Point(ya, x)
    else:
        step = 1 if yb >= ya else -1
        for y in range(ya, yb + step, step):
            yield Point(y, xa)


def _blocked(grid, route: Sequence[Segment], cells: CellConfig, avoid) -> bool:
    for seg in route:
        for p in _segment_cells(seg):
            if not _open_cell(grid, p, cells, avoid):
                return True
    return False


def _open_cell(grid, p: Point, cells: CellConfig, avoid) -> bool:
    """True where a hall may run: on the map, outside `avoid`, rock or passable."""
    if not grid.contains(p.y, p.x) or any(r.contains(p.y, p.x) for r in avoid):
        return False
    cell = grid.get(p.y, p.x)
    return cells.is_any(cell, _ROCK) or cells.is_any(cell, PASSABLE_ROLES)


def hall_routes(a: Point, b: Point, rng) -> List[List[Segment]]:
    """Candidate shapes from a to b: the coin's Z, the other Z, then both Ls."""
    if a.y == b.y or a.x == b.x:
        return [[(a, b)]]
    split_y = rng.random() < 0.5
    return [
        z_segments(a, b, split_y),
        z_segments(a, b, not split_y),
        [(a, Point(b.y, a.x)), (Point(b.y, a.x), b)],
        [(a, Point(a.y, b.x)), (Point(a.y, b.x), b)],
    ]


def clear_route(grid, a, b, cells: CellConfig, rng, avoid=()) -> Optional[List[Segment]]:
    """First of hall_routes() that runs only through open cells, or None."""
    a, b = Point(*a), Point(*b)
    cells = ensure_resolved(cells)
    avoid = list(avoid)
    return next((r for r in hall_routes(a, b, rng) if not _blocked(grid, r, cells, avoid)), None)


def carve_route(grid, route: Sequence[Segment], cells: CellConfig, avoid=()) -> bool:
    """Carve each leg of `route`; True if any cell had to be skipped."""
    cells = ensure_resolved(cells)
    avoid = list(avoid)
    skipped = False
    for seg in route:
        if _carve_hall(grid, seg, cells, avoid):
            skipped = True
    return skipped


def avoidance_hall(grid, a, b, cells: CellConfig, rng, avoid=()) -> bool:
    """Carve a hall from a to b through rock only, never inside `avoid`.

    The coin picks which Z to try first; when both Zs cross an avoided
    region the two L-shaped routes are tried before giving up and carving
    the first Z around the obstacle. Returns True if any cell on the chosen
    route had to be skipped.
    """
    a, b = Point(*a), Point(*b)
    cells = ensure_resolved(cells)
    avoid = list(avoid)
    logger.info("avoidance hall %s -> %s", tuple(a), tuple(b))
    routes = hall_routes(a, b, rng)
    route = next((r for r in routes if not _blocked(grid, r, cells, avoid)), routes[0])
    return carve_route(grid, route, cells, avoid)


def route_around(grid, starts, goals, cells: CellConfig, avoid=()) -> Optional[List[Point]]:
    """Shortest 4-way path of open cells from any of `starts` to any of `goals`.

    Breadth-first, so the first start listed wins ties. Returns the path
    including both ends, or None when the goals cannot be reached.
    """
    cells = ensure_resolved(cells)
    avoid = list(avoid)
    goals = {Point(*g) for g in goals}
    came_from = {}
    q = deque()
    for s in starts:
        s = Point(*s)
        if s not in came_from and _open_cell(grid, s, cells, avoid):
            came_from[s] = None
            q.append(s)
    while q:
        p = q.popleft()
        if p in goals:
            path = []
            while p is not None:
                path.append(p)
                p = came_from[p]
            return path[::-1]
        for dy, dx in ((-1, 0), (1, 0), (0, -1), (0, 1)):
            n = p.offset(dy, dx)
            if n not in came_from and _open_cell(grid, n, cells, avoid):
                came_from[n] = p
                q.append(n)
    return None


def carve_path(grid, path: Sequence[Point], cells: CellConfig, avoid=()) -> None:
    """Turn a route_around() path into hall floor with hall walls beside it."""
    cells = ensure_resolved(cells)
    avoid = list(avoid)
    on_path = set(path)
    flank = not cells.is_role(cells[CellRole.HALL_WALL], CellRole.DIGGABLE)
    for p in path:
        if cells.is_any(grid.get(p.y, p.x), _ROCK):
            grid.set_copy(p.y, p.x, cells[CellRole.HALL_FLOOR])
    if not flank:
        return
    for p in path:
        for dy, dx in ((-1, 0), (1, 0), (0, -1), (0, 1)):
            n = p.offset(dy, dx)
            if n in on_path or not grid.contains(n.y, n.x) or any(r.contains(n.y, n.x) for r in avoid):
                continue
            if cells.is_role(grid.get(n.y, n.x), CellRole.DIGGABLE):
                grid.set_copy(n.y, n.x, cells[CellRole.HALL_WALL])


def _carve_hall(grid, seg: Segment, cells: CellConfig, avoid) -> bool:
    horizontal = seg[0].y == seg[1].y
    flank = not cells.is_role(cells[CellRole.HALL_WALL], CellRole.DIGGABLE)
    skipped = False
    for p in _segment_cells(seg):
        if not grid.contains(p.y, p.x) or any(r.contains(p.y, p.x) for r in avoid):
            skipped = True
            continue
        cell = grid.get(p.y, p.x)
        if cells.is_any(cell, _ROCK):
            grid.set_copy(p.y, p.x, cells[CellRole.HALL_FLOOR])
        elif not cells.is_any(cell, PASSABLE_ROLES):
            skipped = True
            continue
        if not flank:
            continue
        for side in (-1, 1):
            sy, sx = (p.y + side, p.x) if horizontal else (p.y, p.x + side)
            if not grid.contains(sy, sx) or any(r.contains(sy, sx) for r in avoid):
                continue
            if cells.is_role(grid.get(sy, sx), CellRole.DIGGABLE):
                grid.set_copy(sy, sx, cells[CellRole.HALL_WALL])
    return skipped


__all__ = [
    "Cursor",
    "dig_line",
    "tunnel",
    "avoidance_hall",
    "z_segments",
    "hall_routes",
    "clear_route",
    "carve_route",
    "route_around",
    "carve_path",
]
