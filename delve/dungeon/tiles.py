# Default single-character cell values, used by the pipeline and the CLI.
from __future__ import annotations

from .cells import CellConfig

DIGGABLE = "#"
ROOM_FLOOR = "."
HALL_FLOOR = ","
ROOM_DOOR = "+"
HALL_DOOR = "'"
HALL_WALL = "%"
WALL_TOP = "-"
WALL_BOTTOM = "-"
WALL_LEFT = "|"
WALL_RIGHT = "|"
ROOM_WALL = "="
THING = "*"

CORNER_TL = "/"
CORNER_TR = "\\"
CORNER_BL = "\\"
CORNER_BR = "/"


def default_cells() -> CellConfig:
    return CellConfig(
        {
            "diggable": DIGGABLE,
            "room:floor": ROOM_FLOOR,
            "hall:floor": HALL_FLOOR,
            "room:door": ROOM_DOOR,
            "hall:door": HALL_DOOR,
            "room:wall": ROOM_WALL,
            "hall:wall": HALL_WALL,
            "room:wall:top": WALL_TOP,
            "room:wall:bottom": WALL_BOTTOM,
            "room:wall:left": WALL_LEFT,
            "room:wall:right": WALL_RIGHT,
            "room:wall:top-left": CORNER_TL,
            "room:wall:top-right": CORNER_TR,
            "room:wall:bottom-left": CORNER_BL,
            "room:wall:bottom-right": CORNER_BR,
        }
    ).resolve()


def render_ascii(grid) -> str:
    """Plain text dump of a grid whose cells are printable (str() of each cell)."""
    lines = []
    for y in range(grid.y, grid.y + grid.height):
        lines.append("".join(str(grid.get(y, x)) for x in range(grid.x, grid.x + grid.width)))
    return "\n".join(lines)


__all__ = [
    "DIGGABLE",
    "ROOM_FLOOR",
    "HALL_FLOOR",
    "ROOM_DOOR",
    "HALL_DOOR",
    "HALL_WALL",
    "ROOM_WALL",
    "THING",
    "default_cells",
    "render_ascii",
]
