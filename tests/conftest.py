import os
import random
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from delve.dungeon import BSPTree, BoxRegion, Grid, RoomFactory  # noqa: E402
from delve.dungeon.tiles import DIGGABLE, default_cells  # noqa: E402


def pytest_configure(config):  # register custom markers
    config.addinivalue_line("markers", "structure: carving / layout structure checks")
    config.addinivalue_line("markers", "connectivity: whole-map reachability checks")


@pytest.fixture(autouse=True)
def _clean_delve_env(monkeypatch):
    """Keep DELVE_* variables from the developer shell out of the tests."""
    for key in list(os.environ):
        if key.startswith("DELVE_") and key not in ("DELVE_LOG_LEVEL", "DELVE_LOG_JSON"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture()
def rng():
    return random.Random(1234)


@pytest.fixture()
def cells():
    return default_cells()


@pytest.fixture()
def rock_grid():
    """Factory for an all-diggable grid."""
    def make(height, width, y=0, x=0):
        return Grid(height, width, DIGGABLE, y=y, x=x)
    return make


@pytest.fixture()
def four_room_layout(rng):
    """40x40 map split into four 20x20 leaves, each holding a 16x16 room.

    Leaves (in order): top-left, bottom-left, top-right, bottom-right.
    Room centres: (10,10), (30,10), (10,30), (30,30); root centre (20,20).
    """
    bsp = BSPTree(BoxRegion(40, 40))
    bsp.split_once(0, horizontal=False, position=20)
    root = bsp.root
    bsp.split_once(root.left, horizontal=True, position=20)
    bsp.split_once(root.right, horizontal=True, position=20)
    factory = RoomFactory.simple(rng=rng)
    for leaf in bsp.leaves():
        r = leaf.region
        bsp.set_contained(leaf.id, factory.create_room(BoxRegion(r.height - 4, r.width - 4, r.y + 2, r.x + 2)))
    grid = Grid(40, 40, DIGGABLE)
    return bsp, grid
