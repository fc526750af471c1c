"""Rectangles and the two ways of walking them.

A BoxRegion has an edge (its outermost ring of cells) and an inside
(everything strictly within the edge). Carving walks the inside row by row
and the edge as up to four straight runs, each tagged with the side it
belongs to so walls and corners can be told apart.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, NamedTuple, Optional, Tuple


class Point(NamedTuple):
    y: int
    x: int

    def offset(self, dy: int, dx: int) -> "Point":
        return Point(self.y + dy, self.x + dx)


class Side(Enum):
    TOP = "top"
    BOTTOM = "bottom"
    LEFT = "left"
    RIGHT = "right"
    CORNER = "corner"  # degenerate single-cell region


class EdgeRun(NamedTuple):
    side: Side
    start: Point
    end: Point

    @property
    def horizontal(self) -> bool:
        return self.start.y == self.end.y

    @property
    def length(self) -> int:
        if self.horizontal:
            return abs(self.end.x - self.start.x) + 1
        return abs(self.end.y - self.start.y) + 1

    def cells(self) -> Iterator[Point]:
        if self.horizontal:
            step = 1 if self.end.x >= self.start.x else -1
            for x in range(self.start.x, self.end.x + step, step):
                yield Point(self.start.y, x)
        else:
            step = 1 if self.end.y >= self.start.y else -1
            for y in range(self.start.y, self.end.y + step, step):
                yield Point(y, self.start.x)


class InsideRun(NamedTuple):
    start: Point
    end: Point  # inclusive, same row as start
    pattern: Optional[Tuple[bool, ...]] = None

    @property
    def patterned(self) -> bool:
        return self.pattern is not None

    def cells(self) -> Iterator[Point]:
        for x in range(self.start.x, self.end.x + 1):
            yield Point(self.start.y, x)


@dataclass
class BoxRegion:
    height: int
    width: int
    y: int = 0
    x: int = 0
    pattern: Optional[Tuple[bool, ...]] = None

    @classmethod
    def of(cls, region) -> "BoxRegion":
        """Copy the bounds of anything exposing y/x/height/width."""
        return cls(region.height, region.width, region.y, region.x)

    @property
    def bottom(self) -> int:
        return self.y + self.height - 1

    @property
    def right(self) -> int:
        return self.x + self.width - 1

    def contains(self, y: int, x: int) -> bool:
        return self.y <= y < self.y + self.height and self.x <= x < self.x + self.width

    def contains_region(self, other) -> bool:
        return (
            other.y >= self.y
            and other.x >= self.x
            and other.y + other.height <= self.y + self.height
            and other.x + other.width <= self.x + self.width
        )

    def intersects(self, other) -> bool:
        return (
            other.y < self.y + self.height
            and self.y < other.y + other.height
            and other.x < self.x + self.width
            and self.x < other.x + other.width
        )

    def center(self) -> Point:
        return Point(self.y + self.height // 2, self.x + self.width // 2)

    def on_edge(self, y: int, x: int) -> bool:
        return self.contains(y, x) and (y in (self.y, self.bottom) or x in (self.x, self.right))

    def edge_runs(self) -> Iterator[EdgeRun]:
        return edge_runs(self)

    def inside_runs(self) -> Iterator[InsideRun]:
        return inside_runs(self, self.pattern)

    def cells(self) -> Iterator[Point]:
        for y in range(self.y, self.y + self.height):
            for x in range(self.x, self.x + self.width):
                yield Point(y, x)


def edge_runs(region) -> Iterator[EdgeRun]:
    """Perimeter as straight runs: top and bottom left->right, then the
    left and right sides top->bottom without their corner cells."""
    if region.height <= 0 or region.width <= 0:
        return
    top, left = region.y, region.x
    bottom = region.y + region.height - 1
    right = region.x + region.width - 1
    if region.height == 1 and region.width == 1:
        yield EdgeRun(Side.CORNER, Point(top, left), Point(top, left))
        return
    if region.height == 1:
        yield EdgeRun(Side.TOP, Point(top, left), Point(top, right))
        return
    if region.width == 1:
        yield EdgeRun(Side.LEFT, Point(top, left), Point(bottom, left))
        return
    yield EdgeRun(Side.TOP, Point(top, left), Point(top, right))
    yield EdgeRun(Side.BOTTOM, Point(bottom, left), Point(bottom, right))
    if region.height > 2:
        yield EdgeRun(Side.LEFT, Point(top + 1, left), Point(bottom - 1, left))
        yield EdgeRun(Side.RIGHT, Point(top + 1, right), Point(bottom - 1, right))


def inside_runs(region, pattern: Optional[Tuple[bool, ...]] = None) -> Iterator[InsideRun]:
    """One run per row of cells strictly inside the edge."""
    if region.height < 3 or region.width < 3:
        return
    if pattern is not None and len(pattern) == 0:
        pattern = None
    for y in range(region.y + 1, region.y + region.height - 1):
        yield InsideRun(Point(y, region.x + 1), Point(y, region.x + region.width - 2), pattern)


__all__ = [
    "Point",
    "Side",
    "EdgeRun",
    "InsideRun",
    "BoxRegion",
    "edge_runs",
    "inside_runs",
]
