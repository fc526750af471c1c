import random

import pytest

from delve.dungeon import BoxRegion, BSPTree, Grid, Point, Side


def test_edge_runs_cover_perimeter_once():
    region = BoxRegion(4, 5, 1, 2)
    runs = list(region.edge_runs())
    assert [r.side for r in runs] == [Side.TOP, Side.BOTTOM, Side.LEFT, Side.RIGHT]
    assert (runs[0].start, runs[0].end) == (Point(1, 2), Point(1, 6))
    assert (runs[1].start, runs[1].end) == (Point(4, 2), Point(4, 6))
    assert (runs[2].start, runs[2].end) == (Point(2, 2), Point(3, 2))
    assert (runs[3].start, runs[3].end) == (Point(2, 6), Point(3, 6))
    cells = [p for r in runs for p in r.cells()]
    assert len(cells) == len(set(cells)) == 14
    assert all(region.on_edge(*p) for p in cells)


@pytest.mark.parametrize(
    "h,w,sides",
    [
        (1, 1, [Side.CORNER]),
        (1, 6, [Side.TOP]),
        (5, 1, [Side.LEFT]),
        (2, 3, [Side.TOP, Side.BOTTOM]),
    ],
)
def test_edge_runs_degenerate_regions(h, w, sides):
    runs = list(BoxRegion(h, w).edge_runs())
    assert [r.side for r in runs] == sides
    assert sum(r.length for r in runs) == h * w


def test_inside_runs_rows():
    runs = list(BoxRegion(4, 5, 1, 2).inside_runs())
    assert [(r.start, r.end) for r in runs] == [
        (Point(2, 3), Point(2, 5)),
        (Point(3, 3), Point(3, 5)),
    ]
    assert not runs[0].patterned
    assert list(BoxRegion(2, 9).inside_runs()) == []


def test_region_geometry():
    a = BoxRegion(4, 4, 2, 2)
    assert a.center() == Point(4, 4)
    assert a.contains(5, 5) and not a.contains(6, 2)
    assert a.intersects(BoxRegion(2, 2, 5, 5))
    assert not a.intersects(BoxRegion(2, 2, 6, 2))
    assert BoxRegion(10, 10).contains_region(a)


def test_grid_access_and_offset():
    g = Grid(3, 4, "#", y=-1, x=2)
    assert g.contains(-1, 2) and g.contains(1, 5)
    assert not g.contains(2, 2)
    assert g.peek(5, 5) is None
    with pytest.raises(IndexError):
        g.get(-2, 2)
    assert g.set(0, 3, ".") == "#"
    assert g.get(0, 3) == "."
    assert g.count(["."]) == 1
    assert g.positions(["."]) == [Point(0, 3)]
    with pytest.raises(ValueError):
        g.set(0, 3, None)


def test_grid_fill_and_set_copy_do_not_share():
    g = Grid(2, 2, [0])
    g.get(0, 0).append(1)
    assert g.get(1, 1) == [0]
    value = ["x"]
    g.set_copy(0, 1, value)
    value.append("y")
    assert g.get(0, 1) == ["x"]


def test_split_once_children_tile_parent():
    bsp = BSPTree(BoxRegion(10, 20))
    bsp.split_once(0, horizontal=False, position=8)
    left, right = bsp.node(bsp.root.left), bsp.node(bsp.root.right)
    assert (left.region.width, right.region.width) == (8, 12)
    assert right.region.x == 8
    assert left.parent == 0 and left.level == 1
    with pytest.raises(ValueError):
        bsp.split_once(0, horizontal=True, position=5)
    with pytest.raises(ValueError):
        bsp.split_once(left.id, horizontal=True, position=10)


def test_leaves_and_find_node():
    bsp = BSPTree(BoxRegion(20, 20))
    bsp.split_once(0, False, 10)
    bsp.split_once(bsp.root.left, True, 5)
    leaves = bsp.leaves()
    assert [(n.region.y, n.region.x) for n in leaves] == [(0, 0), (5, 0), (0, 10)]
    assert bsp.find_node(7, 3) is leaves[1]
    assert bsp.find_node(19, 19) is leaves[2]
    assert bsp.find_node(20, 0) is None


def test_split_recursive_respects_minimums():
    for seed in range(20):
        bsp = BSPTree(BoxRegion(48, 80))
        bsp.split_recursive(random.Random(seed), 50, 8, 10)
        leaves = bsp.leaves()
        assert len(leaves) > 1
        area = 0
        for leaf in leaves:
            assert leaf.height >= 8 and leaf.width >= 10, f"seed {seed}: {leaf.region}"
            area += leaf.height * leaf.width
        assert area == 48 * 80


def test_split_recursive_depth_zero_keeps_root():
    bsp = BSPTree(BoxRegion(30, 30))
    bsp.split_recursive(random.Random(1), 0, 4, 4)
    assert len(bsp) == 1
    assert bsp.leaves() == [bsp.root]


def test_contained_in_order():
    bsp = BSPTree(BoxRegion(10, 10))
    bsp.split_once(0, True, 5)
    bsp.set_contained(bsp.root.right, "b")
    bsp.set_contained(bsp.root.left, "a")
    assert bsp.contained() == ["a", "b"]
