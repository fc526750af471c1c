import pytest

from delve import ConfigError, DiggerConfig, Dungeon
from delve.dungeon.cells import CellConfig
from delve.dungeon.tiles import THING

from dungeon_test_utils import bfs_reachable


def small(**kw):
    base = dict(width=60, height=40)
    base.update(kw)
    return DiggerConfig(**base)


def test_same_seed_same_map():
    a = Dungeon(small(seed=7))
    b = Dungeon(small(seed=7))
    assert a.to_text() == b.to_text()
    assert [r.bounds() for r in a.rooms] == [r.bounds() for r in b.rooms]


def test_different_seeds_usually_differ():
    texts = {Dungeon(small(seed=s)).to_text() for s in (1, 2, 3)}
    assert len(texts) > 1


def test_map_has_configured_size():
    d = Dungeon(small(seed=3, width=50, height=30))
    rows = d.to_text().splitlines()
    assert len(rows) == 30
    assert all(len(r) == 50 for r in rows)


def test_seed_zero_is_kept_and_none_is_filled():
    assert Dungeon(small(seed=0)).seed == 0
    d = Dungeon(small())
    assert isinstance(d.seed, int) and d.config.seed == d.seed


def test_seedless_config_is_left_untouched():
    cfg = small()
    first = Dungeon(cfg)
    assert cfg.seed is None
    assert first.config is not cfg
    second = Dungeon(cfg)
    assert cfg.seed is None
    assert isinstance(second.seed, int)


def test_metrics_present():
    m = Dungeon(small(seed=11)).metrics
    for key in ('leaves', 'rooms', 'rooms_dug', 'tunnels', 'doors_created',
                'things_placed', 'unreachable_rooms', 'runtime_ms', 'phase_ms'):
        assert key in m, f"missing metric {key}"
    assert m['rooms'] == m['rooms_dug'] == m['leaves']
    assert {'grid', 'setup', 'dig', 'connectivity'} <= set(m['phase_ms'])


@pytest.mark.connectivity
@pytest.mark.parametrize("seed", [1, 2, 3, 42, 292372])
def test_hall_first_reaches_every_room(seed):
    d = Dungeon(small(seed=seed))
    assert d.metrics['unreachable_rooms'] == 0, f"seed {seed}"
    reach = bfs_reachable(d.grid, d.rooms[0].center())
    for room in d.rooms:
        assert room.is_dug
        assert room.center() in reach
        if len(d.rooms) > 1:
            assert room.doors, f"seed {seed}: {room!r} has no door"


@pytest.mark.connectivity
@pytest.mark.parametrize("seed", [0, 4, 5, 17, 31])
def test_avoidance_digs_every_room(seed):
    d = Dungeon(small(seed=seed, strategy="avoidance"))
    assert d.rooms
    assert all(room.is_dug for room in d.rooms)
    assert d.metrics['tunnels'] >= 1
    assert d.metrics['unreachable_rooms'] == 0, f"seed {seed}"
    reach = bfs_reachable(d.grid, d.rooms[0].center())
    for room in d.rooms:
        assert room.center() in reach, f"seed {seed}: {room!r} unreachable"


@pytest.mark.connectivity
@pytest.mark.parametrize("size", [(40, 40), (80, 48)])
def test_avoidance_reaches_every_room_at_full_size(size):
    width, height = size
    for seed in range(10):
        d = Dungeon(DiggerConfig(width=width, height=height, seed=seed, strategy="avoidance"))
        assert d.metrics['unreachable_rooms'] == 0, f"{width}x{height} seed {seed}"


def test_populate_places_markers():
    d = Dungeon(small(seed=8, populate=2))
    placed = d.metrics['things_placed']
    assert placed == d.to_text().count(THING)
    assert placed > 0
    for room in d.rooms:
        assert len(room.all_contents()) <= 2


def test_summary_is_plain_data():
    s = Dungeon(small(seed=9)).summary()
    assert s['seed'] == 9
    assert s['width'] == 60 and s['height'] == 40
    assert len(s['map']) == 40
    assert len(s['rooms']) == s['metrics']['rooms']
    assert set(s['rooms'][0]) == {'y', 'x', 'height', 'width', 'doors', 'contents'}


@pytest.mark.parametrize(
    "bad",
    [
        dict(strategy="bogus"),
        dict(approximate_per=0),
        dict(width=2),
        dict(min_leaf_height=2),
        dict(populate=-1),
    ],
)
def test_invalid_config_rejected(bad):
    with pytest.raises(ConfigError):
        Dungeon(small(seed=1, **bad))


def test_cells_without_diggable_rejected():
    with pytest.raises(ConfigError):
        Dungeon(small(seed=1), cells=CellConfig({"floor": "."}))


def test_from_env_then_overrides(monkeypatch):
    monkeypatch.setenv('DELVE_WIDTH', '50')
    monkeypatch.setenv('DELVE_SEED', '9')
    monkeypatch.setenv('DELVE_INTERRUPTABLE', 'yes')
    monkeypatch.setenv('DELVE_STRATEGY', 'avoidance')
    cfg = DiggerConfig.from_env(seed=12, height=None)
    assert cfg.width == 50
    assert cfg.seed == 12
    assert cfg.height == 48
    assert cfg.interruptable is True
    assert cfg.strategy == 'avoidance'


def test_from_env_bool_and_int_parsing():
    cfg = DiggerConfig.from_env({'DELVE_INTERRUPTABLE': 'false', 'DELVE_POPULATE': '3'})
    assert cfg.interruptable is False
    assert cfg.populate == 3
    with pytest.raises(ConfigError):
        DiggerConfig.from_env({'DELVE_HEIGHT': 'tall'})
