"""Binary space partition over a rectangle.

Nodes live in a flat list and refer to each other by index, so a tree can be
walked, copied or inspected without parent/child reference cycles. Every
node can carry one attached object ("contained"), normally the Room built
for a leaf.
"""
from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Any, Iterator, List, Optional

from .regions import BoxRegion, Point


@dataclass
class BSPNode:
    id: int
    region: BoxRegion
    parent: Optional[int] = None
    left: Optional[int] = None
    right: Optional[int] = None
    horizontal: bool = False
    position: int = 0
    level: int = 0
    contained: Any = None

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    # region-like surface so nodes can be dug or tunnelled to directly
    @property
    def y(self) -> int:
        return self.region.y

    @property
    def x(self) -> int:
        return self.region.x

    @property
    def height(self) -> int:
        return self.region.height

    @property
    def width(self) -> int:
        return self.region.width

    def center(self) -> Point:
        return self.region.center()

    def contains(self, y: int, x: int) -> bool:
        return self.region.contains(y, x)

    def edge_runs(self):
        return self.region.edge_runs()

    def inside_runs(self):
        return self.region.inside_runs()


class BSPTree:
    def __init__(self, bounds):
        self.nodes: List[BSPNode] = [BSPNode(0, BoxRegion.of(bounds))]

    @property
    def root(self) -> BSPNode:
        return self.nodes[0]

    def node(self, node_id: int) -> BSPNode:
        return self.nodes[node_id]

    def __len__(self) -> int:
        return len(self.nodes)

    def center(self) -> Point:
        return self.root.center()

    def split_once(self, node_id: int, horizontal: bool, position: int) -> None:
        """Split a leaf at `position` (a row when horizontal, else a column)."""
        node = self.nodes[node_id]
        if not node.is_leaf:
            raise ValueError(f"Node {node_id} is already split")
        r = node.region
        if horizontal:
            if not r.y < position < r.y + r.height:
                raise ValueError(f"Split row {position} outside node {node_id}")
            first = BoxRegion(position - r.y, r.width, r.y, r.x)
            second = BoxRegion(r.y + r.height - position, r.width, position, r.x)
        else:
            if not r.x < position < r.x + r.width:
                raise ValueError(f"Split column {position} outside node {node_id}")
            first = BoxRegion(r.height, position - r.x, r.y, r.x)
            second = BoxRegion(r.height, r.x + r.width - position, r.y, position)
        node.horizontal = horizontal
        node.position = position
        node.left = self._add(first, node)
        node.right = self._add(second, node)

    def _add(self, region: BoxRegion, parent: BSPNode) -> int:
        child = BSPNode(len(self.nodes), region, parent=parent.id, level=parent.level + 1)
        self.nodes.append(child)
        return child.id

    def split_recursive(
        self,
        rng: random.Random,
        depth: int,
        min_v: int,
        min_h: int,
        max_v_ratio: int = 2,
        max_h_ratio: int = 2,
        node_id: int = 0,
    ) -> None:
        """Split until `depth` runs out or children would be smaller than
        min_v rows / min_h columns. Orientation is forced when the node's
        aspect ratio exceeds the max ratio, otherwise picked at random."""
        stack = [(node_id, depth)]
        while stack:
            nid, remaining = stack.pop()
            r = self.nodes[nid].region
            can_h = r.height >= 2 * min_v
            can_v = r.width >= 2 * min_h
            if remaining <= 0 or not (can_h or can_v):
                continue
            if not (can_h and can_v):
                horizontal = can_h
            elif r.width > r.height * max_h_ratio:
                horizontal = False
            elif r.height > r.width * max_v_ratio:
                horizontal = True
            else:
                horizontal = rng.random() < 0.5
            if horizontal:
                position = rng.randint(r.y + min_v, r.y + r.height - min_v)
            else:
                position = rng.randint(r.x + min_h, r.x + r.width - min_h)
            self.split_once(nid, horizontal, position)
            node = self.nodes[nid]
            # right pushed first so the left subtree draws from rng first
            stack.append((node.right, remaining - 1))
            stack.append((node.left, remaining - 1))

    def in_order(self, node_id: int = 0) -> Iterator[BSPNode]:
        node = self.nodes[node_id]
        if node.left is not None:
            yield from self.in_order(node.left)
        yield node
        if node.right is not None:
            yield from self.in_order(node.right)

    def pre_order(self, node_id: int = 0) -> Iterator[BSPNode]:
        node = self.nodes[node_id]
        yield node
        if node.left is not None:
            yield from self.pre_order(node.left)
        if node.right is not None:
            yield from self.pre_order(node.right)

    def leaves(self) -> List[BSPNode]:
        return [n for n in self.in_order() if n.is_leaf]

    def find_node(self, y: int, x: int) -> Optional[BSPNode]:
        """Leaf containing (y, x), or None outside the tree."""
        node = self.root
        if not node.contains(y, x):
            return None
        while not node.is_leaf:
            left = self.nodes[node.left]
            node = left if left.contains(y, x) else self.nodes[node.right]
        return node

    def set_contained(self, node_id: int, obj: Any) -> None:
        self.nodes[node_id].contained = obj

    def contained(self) -> List[Any]:
        return [n.contained for n in self.in_order() if n.contained is not None]


__all__ = ["BSPNode", "BSPTree"]
