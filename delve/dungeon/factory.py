"""Room construction for BSP leaves.

A factory is a fixed list of container roles. Each room it builds gets one
fresh TypedContainer per role, wired with the role's verifier and sizing.
"""
from __future__ import annotations

import logging
import random
from collections import OrderedDict
from typing import NamedTuple, Optional

from .containers import TypedContainer, Verifier
from .regions import BoxRegion
from .rooms import Room, RoomSize

logger = logging.getLogger(__name__)

MIN_ROOM_SIDE = 3


class RoleSpec(NamedTuple):
    verifier: Optional[Verifier]
    sizing: RoomSize


class RoomFactory:
    def __init__(self, roles=None, rng: Optional[random.Random] = None):
        self.roles: "OrderedDict[str, RoleSpec]" = OrderedDict(roles or {})
        self.rng = rng if rng is not None else random.Random()

    @classmethod
    def simple(cls, verifier: Optional[Verifier] = None, rng=None) -> "RoomFactory":
        return cls([("simple", RoleSpec(verifier, RoomSize.NO_LIMIT))], rng=rng)

    @classmethod
    def large_small(cls, large: Verifier, small: Verifier, piles: bool = False, rng=None) -> "RoomFactory":
        return cls(
            [
                ("large", RoleSpec(large, RoomSize.ROOM_LIMIT)),
                ("small", RoleSpec(small, _small_sizing(piles))),
            ],
            rng=rng,
        )

    @classmethod
    def terrain_large_small(cls, terrain: Verifier, large: Verifier, small: Verifier,
                            piles: bool = False, rng=None) -> "RoomFactory":
        return cls(
            [
                ("terrain", RoleSpec(terrain, RoomSize.ROOM_LIMIT)),
                ("large", RoleSpec(large, RoomSize.ROOM_LIMIT)),
                ("small", RoleSpec(small, _small_sizing(piles))),
            ],
            rng=rng,
        )

    @classmethod
    def terrain_item_monster(cls, terrain: Verifier, item: Verifier, monster: Verifier,
                             item_size: RoomSize = RoomSize.ROOM_LIMIT, rng=None) -> "RoomFactory":
        return cls(
            [
                ("terrain", RoleSpec(terrain, RoomSize.ROOM_LIMIT)),
                ("item", RoleSpec(item, item_size)),
                ("monster", RoleSpec(monster, RoomSize.ROOM_LIMIT)),
            ],
            rng=rng,
        )

    @classmethod
    def with_flag(cls, terrain: Verifier, large: Verifier, small: Verifier, flag: Verifier,
                  piles: bool = False, rng=None) -> "RoomFactory":
        return cls(
            [
                ("terrain", RoleSpec(terrain, RoomSize.ROOM_LIMIT)),
                ("large", RoleSpec(large, RoomSize.ROOM_LIMIT)),
                ("small", RoleSpec(small, _small_sizing(piles))),
                ("flag", RoleSpec(flag, RoomSize.ONE)),
            ],
            rng=rng,
        )

    def create_room(self, region) -> Room:
        room = Room(region)
        for role, spec in self.roles.items():
            capacity = -1 if spec.sizing is RoomSize.NO_LIMIT else 1
            room.assign_container(role, TypedContainer(spec.verifier, capacity), spec.sizing)
        return room

    def create_approximate_room(self, region, per: int) -> Room:
        """Room somewhat smaller than `region`, jittered inside it.

        `per` is parts-per-1000 of each side that may be given up. An axis
        that would end up under MIN_ROOM_SIDE is left alone.
        """
        if not 1 <= per <= 1000:
            raise ValueError(f"per must be within 1..1000, got {per}")
        max_y = _max_shrink(region.height, per)
        max_x = _max_shrink(region.width, per)
        shrink_y = self.rng.randint(1, max_y) if max_y else 0
        shrink_x = self.rng.randint(1, max_x) if max_x else 0
        move_y = self.rng.randint(0, shrink_y) if shrink_y else 0
        move_x = self.rng.randint(0, shrink_x) if shrink_x else 0
        r = BoxRegion(
            region.height - shrink_y,
            region.width - shrink_x,
            region.y + move_y,
            region.x + move_x,
        )
        logger.debug("approximate room %s -> %s", BoxRegion.of(region), r)
        return self.create_room(r)


def _small_sizing(piles: bool) -> RoomSize:
    return RoomSize.NO_LIMIT if piles else RoomSize.ROOM_LIMIT


def _max_shrink(size: int, per: int) -> int:
    shrink = size * per // 1000
    if size < MIN_ROOM_SIDE or size - shrink < MIN_ROOM_SIDE:
        return 0
    return shrink


__all__ = ["RoomFactory", "RoleSpec", "MIN_ROOM_SIDE"]
