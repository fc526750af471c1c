"""Symbolic cell roles and their mapping onto concrete grid values.

The carving code never looks at a concrete cell type. It asks a CellConfig
what value plays a role ("room:floor", "diggable", ...) and compares grid
contents against that value with ==. Any hashable or comparable value works
as a cell: single characters, ints, small objects with __eq__.

Several roles fall back to others when left unset. The fall-back is applied
once by resolve(); lookups on an unresolved config return exactly what was
given (possibly None).
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Iterable, Iterator, Mapping, Optional, Tuple, Union

from ..errors import ConfigError


class CellRole(Enum):
    FLOOR = "floor"
    ROOM_FLOOR = "room:floor"
    HALL_FLOOR = "hall:floor"
    ROOM_DOOR = "room:door"
    HALL_DOOR = "hall:door"
    DIGGABLE = "diggable"
    WALL = "wall"
    ROOM_WALL = "room:wall"
    HALL_WALL = "hall:wall"
    WALL_HORIZONTAL = "room:wall:horizontal"
    WALL_TOP = "room:wall:top"
    WALL_BOTTOM = "room:wall:bottom"
    WALL_VERTICAL = "room:wall:vertical"
    WALL_LEFT = "room:wall:left"
    WALL_RIGHT = "room:wall:right"
    WALL_TOP_LEFT = "room:wall:top-left"
    WALL_TOP_RIGHT = "room:wall:top-right"
    WALL_BOTTOM_LEFT = "room:wall:bottom-left"
    WALL_BOTTOM_RIGHT = "room:wall:bottom-right"
    WALL_CORNER = "room:wall:corner"


RoleKey = Union[CellRole, str]

# Roles that count as walkable once dug.
PASSABLE_ROLES = (
    CellRole.ROOM_FLOOR,
    CellRole.HALL_FLOOR,
    CellRole.ROOM_DOOR,
    CellRole.HALL_DOOR,
)

# Every symbol a room edge can be drawn with.
ROOM_WALL_ROLES = (
    CellRole.ROOM_WALL,
    CellRole.WALL_TOP,
    CellRole.WALL_BOTTOM,
    CellRole.WALL_LEFT,
    CellRole.WALL_RIGHT,
    CellRole.WALL_TOP_LEFT,
    CellRole.WALL_TOP_RIGHT,
    CellRole.WALL_BOTTOM_LEFT,
    CellRole.WALL_BOTTOM_RIGHT,
    CellRole.WALL_CORNER,
)


def _role(key: RoleKey) -> CellRole:
    if isinstance(key, CellRole):
        return key
    try:
        return CellRole(key)
    except ValueError:
        raise ConfigError(f"Unknown cell role: {key!r}") from None


class CellConfig:
    """Mapping of CellRole -> concrete cell value."""

    def __init__(self, mapping: Optional[Mapping[RoleKey, Any]] = None):
        self._values: Dict[CellRole, Any] = {}
        self._resolved = False
        for key, value in (mapping or {}).items():
            self._values[_role(key)] = value

    def __getitem__(self, key: RoleKey) -> Any:
        return self._values.get(_role(key))

    def get(self, key: RoleKey, default: Any = None) -> Any:
        value = self._values.get(_role(key))
        return default if value is None else value

    def __setitem__(self, key: RoleKey, value: Any) -> None:
        self._values[_role(key)] = value
        self._resolved = False

    def __contains__(self, key: RoleKey) -> bool:
        return self._values.get(_role(key)) is not None

    def __iter__(self) -> Iterator[CellRole]:
        return iter(self._values)

    def items(self) -> Iterable[Tuple[CellRole, Any]]:
        return self._values.items()

    def __repr__(self) -> str:
        inner = ", ".join(f"{k.value}={v!r}" for k, v in self._values.items())
        return f"CellConfig({inner})"

    @property
    def resolved(self) -> bool:
        return self._resolved

    def is_role(self, value: Any, role: RoleKey) -> bool:
        """Value-equality test of a grid cell against a role."""
        target = self._values.get(_role(role))
        if target is None:
            return value is None
        return value == target

    def is_any(self, value: Any, roles: Iterable[RoleKey]) -> bool:
        return any(self.is_role(value, r) for r in roles)

    def role_of(self, value: Any) -> Optional[CellRole]:
        """First role (in declaration order) that resolves to `value`."""
        for role in CellRole:
            if role in self._values and self.is_role(value, role):
                return role
        return None

    def copy(self) -> "CellConfig":
        clone = CellConfig(self._values)
        clone._resolved = self._resolved
        return clone

    def resolve(self) -> "CellConfig":
        """Return a copy with every fall-back chain applied.

        Order matters and nothing is recursive: a role filled in by an
        earlier step is visible to later steps, never the other way round.
        """
        if self._resolved:
            return self.copy()
        v = dict(self._values)

        floor = v.get(CellRole.FLOOR)
        room_floor = v.get(CellRole.ROOM_FLOOR)
        hall_floor = v.get(CellRole.HALL_FLOOR)
        if floor is None:
            floor = room_floor if room_floor is not None else hall_floor
            v[CellRole.FLOOR] = floor
        if room_floor is None:
            v[CellRole.ROOM_FLOOR] = floor
        if hall_floor is None:
            v[CellRole.HALL_FLOOR] = floor

        if v.get(CellRole.ROOM_DOOR) is None:
            v[CellRole.ROOM_DOOR] = v[CellRole.ROOM_FLOOR]
        if v.get(CellRole.HALL_DOOR) is None:
            v[CellRole.HALL_DOOR] = v[CellRole.HALL_FLOOR]

        if v.get(CellRole.FLOOR) is None and v.get(CellRole.DIGGABLE) is None:
            raise ConfigError("Cannot dig with neither a floor nor a diggable value")

        _fill_triplet(v, CellRole.WALL, CellRole.ROOM_WALL, CellRole.HALL_WALL,
                      default=v.get(CellRole.DIGGABLE))
        _fill_triplet(v, CellRole.WALL_HORIZONTAL, CellRole.WALL_TOP, CellRole.WALL_BOTTOM,
                      default=v.get(CellRole.ROOM_WALL))
        _fill_triplet(v, CellRole.WALL_VERTICAL, CellRole.WALL_RIGHT, CellRole.WALL_LEFT,
                      default=v.get(CellRole.ROOM_WALL))

        corner = v.get(CellRole.WALL_CORNER)
        top = corner if corner is not None else v.get(CellRole.WALL_TOP)
        for role in (CellRole.WALL_TOP_RIGHT, CellRole.WALL_TOP_LEFT):
            if v.get(role) is None:
                v[role] = top
        bottom = corner if corner is not None else v.get(CellRole.WALL_BOTTOM)
        for role in (CellRole.WALL_BOTTOM_RIGHT, CellRole.WALL_BOTTOM_LEFT):
            if v.get(role) is None:
                v[role] = bottom
        if corner is None:
            v[CellRole.WALL_CORNER] = v.get(CellRole.ROOM_WALL)

        out = CellConfig(v)
        out._resolved = True
        return out


def _fill_triplet(v: Dict[CellRole, Any], general: CellRole, first: CellRole, second: CellRole, default: Any) -> None:
    """general <- first <- second <- default; then unset first/second <- general."""
    a = v.get(general)
    if a is None:
        if v.get(first) is not None:
            a = v[first]
        elif v.get(second) is not None:
            a = v[second]
        else:
            a = default
            v[first] = a
            v[second] = a
        v[general] = a
    if v.get(first) is None:
        v[first] = a
    if v.get(second) is None:
        v[second] = a


def ensure_resolved(cells: Union[CellConfig, Mapping[RoleKey, Any]]) -> CellConfig:
    if isinstance(cells, CellConfig):
        return cells if cells.resolved else cells.resolve()
    return CellConfig(cells).resolve()


__all__ = [
    "CellRole",
    "CellConfig",
    "PASSABLE_ROLES",
    "ROOM_WALL_ROLES",
    "ensure_resolved",
]
