"""Rectangular cell storage shared by every carving pass.

Coordinates are (y, x) throughout; a grid may be offset so its top-left
cell is not (0, 0).
"""
from __future__ import annotations

import copy
from typing import Any, Iterable, Iterator, List, Tuple

from .regions import BoxRegion, Point


class Grid:
    __slots__ = ("y", "x", "height", "width", "_rows")

    def __init__(self, height: int, width: int, fill: Any = None, y: int = 0, x: int = 0):
        if height < 0 or width < 0:
            raise ValueError(f"Grid size must not be negative: {height}x{width}")
        self.y = y
        self.x = x
        self.height = height
        self.width = width
        self._rows: List[List[Any]] = [[copy.copy(fill) for _ in range(width)] for _ in range(height)]

    def contains(self, y: int, x: int) -> bool:
        return self.y <= y < self.y + self.height and self.x <= x < self.x + self.width

    def bounds(self) -> BoxRegion:
        return BoxRegion(self.height, self.width, self.y, self.x)

    def get(self, y: int, x: int) -> Any:
        if not self.contains(y, x):
            raise IndexError(f"({y},{x}) outside grid {self.height}x{self.width}@({self.y},{self.x})")
        return self._rows[y - self.y][x - self.x]

    def peek(self, y: int, x: int) -> Any:
        """Like get() but None for positions outside the grid."""
        if not self.contains(y, x):
            return None
        return self._rows[y - self.y][x - self.x]

    def set(self, y: int, x: int, value: Any) -> Any:
        """Store value and return what was there."""
        if value is None:
            raise ValueError(f"Cannot store None at ({y},{x}) in a regular grid")
        old = self.get(y, x)
        self._rows[y - self.y][x - self.x] = value
        return old

    def set_copy(self, y: int, x: int, value: Any) -> Any:
        return self.set(y, x, copy.copy(value))

    def clear(self, value: Any) -> None:
        for row in self._rows:
            for i in range(len(row)):
                row[i] = copy.copy(value)

    def cells(self) -> Iterator[Tuple[int, int, Any]]:
        for iy, row in enumerate(self._rows):
            for ix, value in enumerate(row):
                yield iy + self.y, ix + self.x, value

    def positions(self, values: Iterable[Any]) -> List[Point]:
        wanted = list(values)
        return [Point(y, x) for y, x, v in self.cells() if v in wanted]

    def count(self, values: Iterable[Any]) -> int:
        wanted = list(values)
        return sum(1 for _, _, v in self.cells() if v in wanted)

    def __repr__(self) -> str:
        return f"Grid({self.height}x{self.width}@({self.y},{self.x}))"


__all__ = ["Grid"]
