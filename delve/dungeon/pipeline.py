"""Pipeline orchestration for dungeon generation.

Provides the Dungeon class used by the CLI and the diagnostics script. It
owns one seeded random.Random and runs the generation phases in a fixed
order so a seed plus a config always reproduces the same map:

    grid -> setup (BSP + rooms) -> dig (strategy) -> populate
"""
from __future__ import annotations

import random
import time
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional

from ..errors import ConfigError
from ..logging_utils import get_logger
from .bsp import BSPTree
from .cells import CellConfig, CellRole, ensure_resolved
from .config import DiggerConfig
from .connectivity import unreachable_rooms
from .digger import Digger
from .factory import RoomFactory
from .grid import Grid
from .metrics import init_metrics
from .placement import PlacementSearch
from .rooms import Room
from .tiles import THING, default_cells, render_ascii

log = get_logger("delve.pipeline")


@dataclass
class Dungeon:
    config: DiggerConfig = field(default_factory=DiggerConfig)
    cells: Optional[CellConfig] = None
    factory: Optional[RoomFactory] = None
    thing: Any = THING

    def __post_init__(self):
        self.config = replace(self.config)
        self.config.validate()
        # 0 is a valid deterministic seed; None => random
        if self.config.seed is None:
            self.config.seed = random.randint(1, 1_000_000)
        self.seed: int = self.config.seed
        self.rng = random.Random(self.seed)
        self.cells = ensure_resolved(self.cells if self.cells is not None else default_cells())
        if self.cells[CellRole.DIGGABLE] is None:
            raise ConfigError("A generated map needs a 'diggable' cell value to start from")
        if self.factory is None:
            self.factory = RoomFactory.simple(rng=self.rng)
        self.metrics: Dict[str, Any] = init_metrics()
        self.grid: Optional[Grid] = None
        self.bsp: Optional[BSPTree] = None
        self.rooms: List[Room] = []
        self._run_pipeline()

    @property
    def width(self) -> int:
        return self.config.width

    @property
    def height(self) -> int:
        return self.config.height

    def _run_pipeline(self):
        """Execute the generation phases, timing each one into metrics['phase_ms']."""
        start = time.perf_counter()
        phase_times: Dict[str, int] = {}

        def _phase(label, fn, *a, **k):
            ps = time.perf_counter()
            r = fn(*a, **k)
            phase_times[label] = int((time.perf_counter() - ps) * 1000)
            return r

        cfg = self.config
        digger = Digger(self.rng, self.metrics)
        self.grid = _phase('grid', Grid, cfg.height, cfg.width, self.cells[CellRole.DIGGABLE])
        self.bsp = _phase(
            'setup', digger.setup, self.grid.bounds(), self.factory,
            depth=cfg.bsp_depth, min_size=cfg.min_leaf_height, per=cfg.approximate_per,
            min_width=cfg.min_leaf_width, max_ratio=cfg.max_ratio,
        )
        self.rooms = [r for r in self.bsp.contained() if isinstance(r, Room)]
        if cfg.strategy == "avoidance":
            _phase('dig', digger.dig_room_avoidance_halls, self.bsp, self.grid, self.cells)
        else:
            _phase('dig', digger.dig_hall_first, self.bsp, self.grid, self.cells, cfg.interruptable)
        if cfg.populate:
            _phase('populate', self._populate)
        lost = _phase('connectivity', unreachable_rooms, self.grid, self.cells, self.rooms, [self.thing])
        self.metrics['unreachable_rooms'] = len(lost)

        self.metrics['runtime_ms'] = int((time.perf_counter() - start) * 1000)
        self.metrics['phase_ms'] = phase_times
        log.info(
            event="dungeon_generated",
            seed=self.seed,
            size=f"{cfg.height}x{cfg.width}",
            strategy=cfg.strategy,
            rooms=len(self.rooms),
            doors=self.metrics.get('doors_created', 0),
            unreachable=self.metrics['unreachable_rooms'],
            runtime_ms=self.metrics['runtime_ms'],
        )

    def _populate(self):
        """Drop up to `populate` markers into each room's free floor."""
        search = PlacementSearch(self.rng)
        floor = self.cells[CellRole.ROOM_FLOOR]
        for room in self.rooms:
            free = sum(
                1 for y, x in room.bounds().cells() if self.cells.is_role(self.grid.get(y, x), CellRole.ROOM_FLOOR)
            )
            wanted = min(self.config.populate, free)
            if wanted < self.config.populate:
                log.debug(event="populate_short", room=repr(room), wanted=self.config.populate, free=free)
            for _ in range(wanted):
                search.place_thing(self.grid, room, floor, self.thing)
                self.metrics['things_placed'] += 1

    def to_text(self) -> str:
        return render_ascii(self.grid)

    def summary(self) -> Dict[str, Any]:
        """Plain-data description of the generated level (for --json)."""
        return {
            'seed': self.seed,
            'width': self.width,
            'height': self.height,
            'strategy': self.config.strategy,
            'rooms': [
                {
                    'y': r.y,
                    'x': r.x,
                    'height': r.height,
                    'width': r.width,
                    'doors': [list(d) for d in r.doors],
                    'contents': len(r.all_contents()),
                }
                for r in self.rooms
            ],
            'map': self.to_text().splitlines(),
            'metrics': self.metrics,
        }


__all__ = ["Dungeon"]
