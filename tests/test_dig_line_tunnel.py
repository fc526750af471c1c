import random

import pytest

from delve.dungeon import BoxRegion, Cursor, Grid, avoidance_hall, dig_line, tunnel
from delve.dungeon.cells import CellConfig
from delve.dungeon.tiles import HALL_FLOOR, ROOM_FLOOR
from delve.dungeon.tunnels import carve_path, route_around

from dungeon_test_utils import DOORS, bfs_reachable, text_rows

pytestmark = pytest.mark.structure


def test_line_through_rock_is_flanked_by_walls(cells):
    grid = Grid(3, 7, "#", y=-1)
    assert dig_line(grid, 0, 0, 0, 4, cells) is False
    assert text_rows(grid) == [
        "%%%%%##",
        ",,,,,##",
        "%%%%%##",
    ]
    assert not any(v in DOORS for _, _, v in grid.cells())


def test_vertical_line_flanks_columns(rock_grid, cells):
    grid = rock_grid(5, 3)
    dig_line(grid, 4, 1, 0, 1, cells)
    assert text_rows(grid) == ["%,%"] * 5


def test_cursor_ends_on_last_cell(rock_grid, cells):
    grid = rock_grid(3, 7)
    cursor = Cursor()
    dig_line(grid, 1, 5, 1, 1, cells, cursor)
    assert cursor.point == (1, 1)


def test_line_into_room_floor_makes_room_door(rock_grid, cells):
    grid = rock_grid(3, 7)
    grid.set(1, 5, ROOM_FLOOR)
    assert dig_line(grid, 1, 0, 1, 4, cells) is True
    assert text_rows(grid)[1] == ",,,,+.#"


def test_line_into_hall_makes_hall_door(rock_grid, cells):
    grid = rock_grid(3, 7)
    grid.set(1, 5, HALL_FLOOR)
    assert dig_line(grid, 1, 0, 1, 4, cells) is True
    assert text_rows(grid)[1] == ",,,,',#"


def test_interruptable_line_stops_after_first_structure(rock_grid, cells):
    grid = rock_grid(3, 9)
    grid.set(1, 3, HALL_FLOOR)
    cursor = Cursor()
    assert dig_line(grid, 1, 0, 1, 8, cells, cursor, interruptable=True) is True
    assert text_rows(grid)[1] == ",,',#####"
    assert cursor.point == (1, 2)


def test_uninterruptable_line_runs_to_the_end(rock_grid, cells):
    grid = rock_grid(3, 9)
    grid.set(1, 3, HALL_FLOOR)
    assert dig_line(grid, 1, 0, 1, 8, cells) is True
    assert text_rows(grid)[1] == ",,',,,,,,"


def test_no_flanks_when_hall_wall_is_rock(rock_grid):
    plain = CellConfig({"floor": ".", "diggable": "#"})
    grid = rock_grid(3, 5)
    assert dig_line(grid, 1, 0, 1, 4, plain) is False
    assert text_rows(grid) == ["#####", ".....", "#####"]


def test_aligned_tunnel_draws_no_random_numbers(rock_grid, cells):
    rng = random.Random(3)
    state = rng.getstate()
    grid = rock_grid(10, 10)
    tunnel(grid, (2, 2), (2, 8), cells, rng)
    assert rng.getstate() == state
    assert text_rows(grid)[2] == "##,,,,,,,#"


@pytest.mark.parametrize("seed", range(8))
def test_z_tunnel_connects_endpoints(rock_grid, cells, seed):
    grid = rock_grid(21, 21)
    tunnel(grid, (2, 2), (18, 14), cells, random.Random(seed))
    reach = bfs_reachable(grid, (2, 2))
    assert (18, 14) in reach, f"seed {seed}: tunnel not connected"
    bends = {(10, 2), (10, 14), (2, 8), (18, 8)}
    assert bends & reach, "tunnel did not bend halfway"


@pytest.mark.parametrize("seed", range(4))
def test_avoidance_hall_goes_around_region(rock_grid, cells, seed):
    grid = rock_grid(12, 12)
    block = BoxRegion(4, 4, 4, 4)
    skipped = avoidance_hall(grid, (9, 2), (2, 9), cells, random.Random(seed), [block])
    assert skipped is False
    assert all(grid.get(y, x) == "#" for y, x in block.cells())
    assert (2, 9) in bfs_reachable(grid, (9, 2))
    assert grid.get(2, 2) == HALL_FLOOR


def test_avoidance_hall_skips_unavoidable_cells(rock_grid, cells):
    grid = rock_grid(12, 12)
    wall = BoxRegion(12, 2, 0, 5)
    assert avoidance_hall(grid, (5, 0), (5, 11), cells, random.Random(1), [wall]) is True
    assert all(grid.get(y, x) == "#" for y, x in wall.cells())
    assert grid.get(5, 4) == HALL_FLOOR and grid.get(5, 7) == HALL_FLOOR


def test_avoidance_hall_leaves_floor_alone(rock_grid, cells):
    grid = rock_grid(5, 9)
    grid.set(2, 4, ROOM_FLOOR)
    assert avoidance_hall(grid, (2, 0), (2, 8), cells, random.Random(1)) is False
    assert grid.get(2, 4) == ROOM_FLOOR
    assert text_rows(grid)[2] == ",,,,.,,,,"


def test_route_around_finds_shortest_detour(rock_grid, cells):
    grid = rock_grid(10, 12)
    wall = BoxRegion(8, 2, 0, 5)
    path = route_around(grid, [(0, 0)], [(0, 11)], cells, [wall])
    assert path[0] == (0, 0) and path[-1] == (0, 11)
    assert len(path) == 28
    assert not any(wall.contains(y, x) for y, x in path)
    for (ya, xa), (yb, xb) in zip(path, path[1:]):
        assert abs(ya - yb) + abs(xa - xb) == 1
    carve_path(grid, path, cells, [wall])
    assert all(grid.get(y, x) == HALL_FLOOR for y, x in path)
    assert all(grid.get(y, x) == "#" for y, x in wall.cells())
    assert (0, 11) in bfs_reachable(grid, (0, 0))


def test_route_around_gives_up_when_sealed(rock_grid, cells):
    grid = rock_grid(10, 12)
    wall = BoxRegion(10, 2, 0, 5)
    assert route_around(grid, [(0, 0)], [(0, 11)], cells, [wall]) is None
    assert route_around(grid, [(0, 6)], [(0, 11)], cells, [wall]) is None
