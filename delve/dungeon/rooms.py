"""Rooms: a rectangle plus the bookkeeping carving and placement need.

A Room keeps its bounds for life. What changes is whether it has been dug,
which of its edge cells are doors, and what has been assigned to its
containers. Containers whose sizing is ROOM_LIMIT track the room's floor
space; fixed sizings (ONE/TWO/THREE) keep their own cap.
"""
from __future__ import annotations

from collections import OrderedDict
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional

from ..errors import CapacityError, ContainerError
from .containers import TypedContainer
from .regions import BoxRegion, EdgeRun, InsideRun, Point, edge_runs, inside_runs


class RoomSize(Enum):
    NO_LIMIT = "no_limit"
    ROOM_LIMIT = "room_limit"
    ONE = "one"
    TWO = "two"
    THREE = "three"

    def cap(self, floor_space: int) -> int:
        if self is RoomSize.NO_LIMIT:
            return -1
        if self is RoomSize.ROOM_LIMIT:
            return floor_space
        return _FIXED[self]


_FIXED = {RoomSize.ONE: 1, RoomSize.TWO: 2, RoomSize.THREE: 3}


class Room:
    def __init__(self, region):
        self.y = region.y
        self.x = region.x
        self.height = region.height
        self.width = region.width
        self.floor_space = self.height * self.width
        self.containers: "OrderedDict[str, TypedContainer]" = OrderedDict()
        self.sizing: Dict[str, RoomSize] = {}
        self.dug = False
        self.doors: List[Point] = []

    def __repr__(self) -> str:
        return (
            f"Room({self.height}x{self.width}@({self.y},{self.x}) "
            f"dug={self.dug} doors={len(self.doors)})"
        )

    # -- geometry ---------------------------------------------------------
    def bounds(self) -> BoxRegion:
        return BoxRegion(self.height, self.width, self.y, self.x)

    def contains(self, y: int, x: int) -> bool:
        return self.y <= y < self.y + self.height and self.x <= x < self.x + self.width

    def intersects(self, other) -> bool:
        return self.bounds().intersects(other)

    def center(self) -> Point:
        return Point(self.y + self.height // 2, self.x + self.width // 2)

    def edge_runs(self) -> Iterator[EdgeRun]:
        return edge_runs(self)

    def inside_runs(self) -> Iterator[InsideRun]:
        return inside_runs(self)

    # -- containers -------------------------------------------------------
    def assign_container(self, role: str, container: TypedContainer, sizing: Optional[RoomSize] = None) -> None:
        if sizing is None:
            sizing = RoomSize.ROOM_LIMIT if container.has_size_limit else RoomSize.NO_LIMIT
        container.set_size_limit(sizing.cap(self.floor_space))
        self.containers[role] = container
        self.sizing[role] = sizing

    def container(self, role: str) -> TypedContainer:
        try:
            return self.containers[role]
        except KeyError:
            raise ContainerError(f"Room has no {role!r} container") from None

    def assign_to_container(self, item: Any) -> TypedContainer:
        """Add item to the first container that accepts its kind."""
        for container in self.containers.values():
            if container.can_fit(item):
                container.add(item)
                return container
        raise ContainerError(f"No container in {self!r} accepts {item!r}")

    def all_contents(self) -> List[Any]:
        items: List[Any] = []
        for container in self.containers.values():
            items.extend(container)
        return items

    def set_floor_space(self, floor_space: int) -> None:
        """Resize the room; only ROOM_LIMIT containers follow, fixed sizings keep their cap."""
        limited = [
            (role, c) for role, c in self.containers.items()
            if self.sizing.get(role) is RoomSize.ROOM_LIMIT
        ]
        if floor_space < 0:
            raise ValueError(f"Floor space must not be negative: {floor_space}")
        for role, c in limited:
            if len(c) > floor_space:
                raise CapacityError(
                    f"Container {role!r} holds {len(c)}; cannot shrink room to {floor_space}",
                    limit=floor_space,
                    size=len(c),
                )
        self.floor_space = floor_space
        for _, c in limited:
            c.set_size_limit(floor_space)

    # -- doors ------------------------------------------------------------
    def find_best_door_position(self, target) -> Optional[Point]:
        """Edge cell facing `target` (a point or anything with center()).

        None when the target lies inside the room. Corners are never chosen;
        an existing door on the chosen edge wins over the edge's midpoint.
        """
        point = target.center() if hasattr(target, "center") else Point(*target)
        y1, x1 = self.y, self.x
        y2, x2 = self.y + self.height - 1, self.x + self.width - 1
        yd = xd = 0
        if point.x < x1:
            xd = point.x - x1
        elif point.x > x2:
            xd = point.x - x2
        if point.y < y1:
            yd = point.y - y1
        elif point.y > y2:
            yd = point.y - y2
        if yd == 0 and xd == 0:
            return None
        if abs(yd) > abs(xd):
            span = BoxRegion(1, self.width - 2, y2 if yd > 0 else y1, x1 + 1)
        else:
            span = BoxRegion(self.height - 2, 1, y1 + 1, x2 if xd > 0 else x1)
        for door in self.doors:
            if span.contains(door.y, door.x):
                return door
        return span.center()

    def add_door(self, p) -> bool:
        p = Point(*p)
        if not self.contains(p.y, p.x) or p in self.doors:
            return False
        self.doors.append(p)
        return True

    def has_door(self, p) -> bool:
        return Point(*p) in self.doors

    def remove_door(self, p) -> bool:
        p = Point(*p)
        if p not in self.doors:
            return False
        self.doors.remove(p)
        return True

    # -- lifecycle --------------------------------------------------------
    def mark_dug(self) -> None:
        self.dug = True

    @property
    def is_dug(self) -> bool:
        return self.dug


__all__ = ["Room", "RoomSize"]
