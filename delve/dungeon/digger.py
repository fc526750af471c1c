"""Whole-map carving strategies over a BSP layout.

Two ways of turning a partitioned map into rooms and corridors:

* hall first: tunnel between consecutive leaf centres (closing the loop at
  the root centre), then dig the rooms on top. Rooms dug over existing
  corridors get their doors from the overlap.
* avoidance: dig every room, then link consecutive rooms through rock
  only, with a door pair through the wall where two rooms sit flush.
"""
from __future__ import annotations

import logging
import random
from typing import Any, Dict, List, Optional

from .bsp import BSPTree
from .carving import dig_room
from .cells import CellConfig, CellRole, ROOM_WALL_ROLES, ensure_resolved
from .connectivity import unreachable_rooms
from .doors import add_door, door_exit, door_spots, shared_wall_doors
from .factory import RoomFactory
from .metrics import init_metrics
from .regions import Point
from .rooms import Room
from .tunnels import carve_path, carve_route, clear_route, route_around, tunnel

logger = logging.getLogger(__name__)

DOOR_HOLDERS = ROOM_WALL_ROLES + (CellRole.ROOM_DOOR,)


class Digger:
    def __init__(self, rng: Optional[random.Random] = None, metrics: Optional[Dict[str, Any]] = None):
        self.rng = rng if rng is not None else random.Random()
        self.metrics = metrics if metrics is not None else init_metrics()

    def _count(self, key: str, n: int = 1) -> None:
        self.metrics[key] = self.metrics.get(key, 0) + n

    def setup(self, bounds, factory: Optional[RoomFactory] = None, depth: int = 50,
              min_size: int = 4, per: int = 200, min_width: Optional[int] = None,
              max_ratio: int = 2) -> BSPTree:
        """Partition `bounds` and attach an approximate room to every leaf."""
        if factory is None:
            factory = RoomFactory.simple(rng=self.rng)
        bsp = BSPTree(bounds)
        bsp.split_recursive(self.rng, depth, min_size, min_width or min_size, max_ratio, max_ratio)
        for leaf in bsp.leaves():
            bsp.set_contained(leaf.id, factory.create_approximate_room(leaf.region, per))
        self._count('leaves', len(bsp.leaves()))
        self._count('rooms', len(bsp.contained()))
        logger.info("setup: %d nodes, %d rooms", len(bsp), len(bsp.contained()))
        return bsp

    def dig_room(self, grid, cells: CellConfig, room) -> bool:
        """Carve one room (or plain region); rooms are marked dug and get
        their edge openings registered as doors."""
        openings: List[Point] = []
        intrusion = dig_room(grid, cells, room, openings)
        if isinstance(room, Room):
            room.mark_dug()
            added = sum(1 for p in openings if room.add_door(p))
            self._count('rooms_dug')
            self._count('doors_created', added)
        if intrusion:
            self._count('room_intrusions')
        return intrusion

    def _tunnel(self, grid, a, b, cells, interruptable: bool) -> None:
        self._count('tunnels')
        if tunnel(grid, a, b, cells, self.rng, interruptable=interruptable):
            self._count('tunnel_intrusions')

    def dig_hall_first(self, bsp: BSPTree, grid, cells: CellConfig, interruptable: bool = False) -> None:
        cells = ensure_resolved(cells)
        last = None
        targets = []
        for node in bsp.leaves():
            target = node.contained if node.contained is not None else node
            if node.contained is None:
                logger.info("node: %s", node.region)
            else:
                logger.info("room: %r; node: %s", target, node.region)
            if last is not None:
                self._tunnel(grid, last.center(), target.center(), cells, interruptable)
            targets.append(target)
            last = target
        if last is not None:
            self._tunnel(grid, last.center(), bsp.center(), cells, interruptable)
        for target in targets:
            self.dig_room(grid, cells, target)

    def dig_room_avoidance_halls(self, bsp: BSPTree, grid, cells: CellConfig) -> None:
        cells = ensure_resolved(cells)
        rooms = [room for room in bsp.contained() if isinstance(room, Room)]
        for room in rooms:
            self.dig_room(grid, cells, room)
        if len(rooms) < 2:
            return
        avoid = [room.bounds() for room in rooms]
        for prev, room in zip(rooms, rooms[1:]):
            self._connect(grid, cells, prev, room, avoid)
        self._connect(grid, cells, rooms[-1], rooms[0], avoid)
        self._reconnect(grid, cells, rooms, avoid)

    def _connect(self, grid, cells: CellConfig, a: Room, b: Room, avoid) -> bool:
        """Link two dug rooms; False if no passage could be made.

        Rooms flush against each other get a door pair through the shared
        wall. Otherwise a hall runs between their facing door positions,
        and when no straight shape fits there, the shortest path through
        rock between any of their door positions is carved instead.
        """
        shared = shared_wall_doors(a, b)
        if shared is not None:
            logger.debug("shared wall door %s between %r and %r", tuple(shared[0]), a, b)
            return self._open_doors(grid, cells, ((a, shared[0]), (b, shared[1])))
        door_a = a.find_best_door_position(b)
        door_b = b.find_best_door_position(a)
        if door_a is None or door_b is None:
            logger.warning("rooms overlap, no hall between %r and %r", a, b)
            return False
        exit_a, exit_b = door_exit(a, door_a), door_exit(b, door_b)
        route = clear_route(grid, exit_a, exit_b, cells, self.rng, avoid)
        if route is not None:
            self._count('tunnels')
            carve_route(grid, route, cells, avoid)
            return self._open_doors(grid, cells, ((a, door_a), (b, door_b)))
        starts = self._exits(grid, cells, a)
        goals = self._exits(grid, cells, b)
        path = route_around(grid, list(starts), list(goals), cells, avoid)
        if path is None:
            logger.warning("no route between %r and %r", a, b)
            self._count('halls_skipped')
            return False
        logger.debug("hall around obstacles %s -> %s (%d cells)",
                     tuple(path[0]), tuple(path[-1]), len(path))
        self._count('tunnels')
        carve_path(grid, path, cells, avoid)
        return self._open_doors(grid, cells, ((a, starts[path[0]]), (b, goals[path[-1]])))

    def _exits(self, grid, cells: CellConfig, room: Room) -> Dict[Point, Point]:
        # exit cell -> the door position it belongs to
        exits: Dict[Point, Point] = {}
        for spot in door_spots(room):
            if not cells.is_any(grid.get(*spot), DOOR_HOLDERS):
                continue
            exit_ = door_exit(room, spot)
            if exit_ is not None and grid.contains(*exit_):
                exits.setdefault(exit_, spot)
        return exits

    def _open_doors(self, grid, cells: CellConfig, pairs) -> bool:
        linked = True
        for room, door in pairs:
            if add_door(room, cells, door, grid):
                self._count('doors_created')
            if not room.has_door(door):
                linked = False
        return linked

    def _reconnect(self, grid, cells: CellConfig, rooms: List[Room], avoid) -> None:
        """Join rooms the ring of links left cut off to the nearest reached room."""
        remaining = len(rooms)
        while True:
            lost = unreachable_rooms(grid, cells, rooms)
            if not lost:
                return
            if len(lost) >= remaining:
                logger.warning("%d rooms could not be reached", len(lost))
                return
            remaining = len(lost)
            lost_ids = {id(room) for room in lost}
            reached = [room for room in rooms if id(room) not in lost_ids]
            joined = False
            for room in lost:
                c = room.center()
                by_distance = sorted(reached, key=lambda r: abs(r.center().y - c.y) + abs(r.center().x - c.x))
                if any(self._connect(grid, cells, room, other, avoid) for other in by_distance):
                    self._count('halls_repaired')
                    joined = True
                    break
            if not joined:
                logger.warning("%d rooms could not be reached", len(lost))
                return


__all__ = ["Digger"]
