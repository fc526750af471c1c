"""Finding an empty cell for an object inside a region.

The search first makes a handful of random probes, then falls back to a
full toroidal scan from a random start so a free cell is always found when
one exists and a full region is reported after at most height*width steps.
"""
from __future__ import annotations

import logging
import random
from typing import Any, Dict, Iterable, Optional

from ..errors import PlacementError, RoomStateError
from .regions import Point

logger = logging.getLogger(__name__)

RANDOM_PROBES = 10


class PlacementSearch:
    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng if rng is not None else random.Random()

    def find_location(self, grid, empties: Iterable[Any], region) -> Optional[Point]:
        empties = list(empties)
        if region.height <= 0 or region.width <= 0:
            return None
        for _ in range(RANDOM_PROBES):
            y = self.rng.randrange(region.height) + region.y
            x = self.rng.randrange(region.width) + region.x
            if grid.get(y, x) in empties:
                return Point(y, x)

        start = Point(self.rng.randrange(region.height) + region.y,
                      self.rng.randrange(region.width) + region.x)
        if self.rng.random() < 0.5:
            # walk along x, wrap into the next/previous row
            row_add, col_add = ((1, 0), (0, 1)) if self.rng.random() < 0.5 else ((-1, 0), (0, -1))
        else:
            row_add, col_add = ((0, 1), (1, 0)) if self.rng.random() < 0.5 else ((0, -1), (-1, 0))
        y0, x0 = region.y, region.x
        y2, x2 = region.y + region.height - 1, region.x + region.width - 1
        y, x = start
        while True:
            y, x = y + col_add[0], x + col_add[1]
            if y > y2:
                y, x = y0, x + row_add[1]
            elif x > x2:
                y, x = y + row_add[0], x0
            elif y < y0:
                y, x = y2, x + row_add[1]
            elif x < x0:
                y, x = y + row_add[0], x2
            # secondary axis wraps too
            if y > y2:
                y = y0
            elif x > x2:
                x = x0
            elif y < y0:
                y = y2
            elif x < x0:
                x = x2
            if grid.get(y, x) in empties:
                return Point(y, x)
            if (y, x) == start:
                logger.debug("find_location: region %sx%s@(%s,%s) full",
                             region.height, region.width, region.y, region.x)
                return None

    def place_it(self, grid, empty: Any, what: Any, region) -> Point:
        """Write a copy of `what` into an empty cell of `region`."""
        spot = self.find_location(grid, [empty], region)
        if spot is None:
            raise PlacementError(
                f"No {empty!r} cell left in {region.height}x{region.width}@({region.y},{region.x})"
            )
        grid.set_copy(spot.y, spot.x, what)
        return spot

    def place_thing(self, grid, room, empty: Any, what: Any) -> Point:
        if not room.is_dug:
            raise RoomStateError(f"{room!r} must be dug before placing things in it")
        room.assign_to_container(what)
        return self.place_it(grid, empty, what, room)

    def assign_contents(self, grid, room, empty: Any, marker: Any = None) -> Dict[int, Point]:
        """Place everything the room's containers already hold.

        Each item (or `marker`, when given) is written to its own empty
        cell. Returns item index (in all_contents() order) -> position.
        """
        if not room.is_dug:
            raise RoomStateError(f"{room!r} must be dug before placing its contents")
        placed: Dict[int, Point] = {}
        for i, item in enumerate(room.all_contents()):
            placed[i] = self.place_it(grid, empty, item if marker is None else marker, room)
        return placed


__all__ = ["PlacementSearch", "RANDOM_PROBES"]
