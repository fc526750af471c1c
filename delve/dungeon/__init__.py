"""Public dungeon package interface.

Generation building blocks (cells, grid, regions, BSP, rooms, carving,
placement) plus the Dungeon pipeline that strings them together.
"""

from .bsp import BSPNode, BSPTree
from .carving import dig_room
from .cells import CellConfig, CellRole, PASSABLE_ROLES, ROOM_WALL_ROLES
from .config import DiggerConfig
from .containers import TypedContainer
from .digger import Digger
from .factory import RoleSpec, RoomFactory
from .grid import Grid
from .pipeline import Dungeon
from .placement import PlacementSearch
from .regions import BoxRegion, EdgeRun, InsideRun, Point, Side
from .rooms import Room, RoomSize
from .tiles import default_cells, render_ascii
from .tunnels import Cursor, avoidance_hall, dig_line, tunnel

__all__ = [
    "BSPNode",
    "BSPTree",
    "BoxRegion",
    "CellConfig",
    "CellRole",
    "Cursor",
    "DiggerConfig",
    "Digger",
    "Dungeon",
    "EdgeRun",
    "Grid",
    "InsideRun",
    "PASSABLE_ROLES",
    "PlacementSearch",
    "Point",
    "ROOM_WALL_ROLES",
    "RoleSpec",
    "Room",
    "RoomFactory",
    "RoomSize",
    "Side",
    "TypedContainer",
    "avoidance_hall",
    "default_cells",
    "dig_line",
    "dig_room",
    "render_ascii",
    "tunnel",
]
