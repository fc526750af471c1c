import random

import pytest

from delve.dungeon import BoxRegion, Digger, Grid, PlacementSearch, RoomFactory
from delve.errors import PlacementError, RoomStateError
from delve.dungeon.placement import RANDOM_PROBES
from delve.dungeon.tiles import ROOM_FLOOR, THING


class CountingGrid(Grid):
    """Grid that records every read."""

    def __init__(self, *a, **k):
        super().__init__(*a, **k)
        self.reads = []

    def get(self, y, x):
        self.reads.append((y, x))
        return super().get(y, x)


def test_finds_the_only_empty_cell():
    for seed in range(25):
        grid = Grid(6, 6, "#")
        grid.set(2, 3, ".")
        spot = PlacementSearch(random.Random(seed)).find_location(grid, ["."], BoxRegion(3, 3, 1, 1))
        assert spot == (2, 3), f"seed {seed}"


def test_found_cell_is_empty_and_inside_region():
    grid = Grid(8, 8, ".")
    region = BoxRegion(3, 4, 2, 3)
    search = PlacementSearch(random.Random(9))
    for _ in range(10):
        spot = search.find_location(grid, ["."], region)
        assert region.contains(*spot)


@pytest.mark.parametrize("seed", range(6))
def test_full_region_scans_each_cell_once(seed):
    grid = CountingGrid(7, 7, "#")
    region = BoxRegion(4, 5, 1, 2)
    assert PlacementSearch(random.Random(seed)).find_location(grid, ["."], region) is None
    scan = grid.reads[RANDOM_PROBES:]
    assert len(scan) == 4 * 5
    assert set(scan) == set(region.cells())


def test_place_it_writes_a_copy():
    grid = Grid(3, 3, ".")
    thing = ["gold"]
    spot = PlacementSearch(random.Random(2)).place_it(grid, ".", thing, BoxRegion(3, 3))
    assert grid.get(*spot) == ["gold"]
    assert grid.get(*spot) is not thing


def test_place_it_raises_when_full():
    grid = Grid(3, 3, "#")
    with pytest.raises(PlacementError):
        PlacementSearch(random.Random(2)).place_it(grid, ".", THING, BoxRegion(3, 3))


def test_place_thing_needs_a_dug_room(rock_grid, cells):
    grid = rock_grid(8, 8)
    room = RoomFactory.simple().create_room(BoxRegion(5, 5, 1, 1))
    search = PlacementSearch(random.Random(4))
    with pytest.raises(RoomStateError):
        search.place_thing(grid, room, ROOM_FLOOR, THING)
    assert room.all_contents() == []


def test_place_thing_registers_and_writes(rock_grid, cells):
    grid = rock_grid(8, 8)
    room = RoomFactory.simple().create_room(BoxRegion(5, 5, 1, 1))
    Digger().dig_room(grid, cells, room)
    search = PlacementSearch(random.Random(4))
    spot = search.place_thing(grid, room, ROOM_FLOOR, THING)
    assert grid.get(*spot) == THING
    assert room.all_contents() == [THING]
    # only inside cells are floor
    assert 2 <= spot.y <= 4 and 2 <= spot.x <= 4


def test_assign_contents_places_every_item(rock_grid, cells):
    grid = rock_grid(8, 8)
    room = RoomFactory.simple().create_room(BoxRegion(5, 5, 1, 1))
    for item in ("a", "b", "c"):
        room.assign_to_container(item)
    search = PlacementSearch(random.Random(6))
    with pytest.raises(RoomStateError):
        search.assign_contents(grid, room, ROOM_FLOOR)
    Digger().dig_room(grid, cells, room)
    placed = search.assign_contents(grid, room, ROOM_FLOOR)
    assert sorted(placed) == [0, 1, 2]
    assert [grid.get(*placed[i]) for i in range(3)] == ["a", "b", "c"]
    assert len(set(placed.values())) == 3


def test_assign_contents_overflow_raises(rock_grid, cells):
    grid = rock_grid(5, 5)
    room = RoomFactory.simple().create_room(BoxRegion(3, 3, 1, 1))
    Digger().dig_room(grid, cells, room)
    room.assign_to_container("a")
    room.assign_to_container("b")
    with pytest.raises(PlacementError):
        PlacementSearch(random.Random(1)).assign_contents(grid, room, ROOM_FLOOR, marker=THING)
