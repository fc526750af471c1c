"""delve: BSP dungeon generation for grid-based roguelikes."""

from .dungeon import Dungeon, DiggerConfig  # noqa: F401
from .errors import (  # noqa: F401
    CapacityError,
    ConfigError,
    ContainerError,
    DelveError,
    PlacementError,
    RoomStateError,
    VerifierError,
)

__all__ = [
    "Dungeon",
    "DiggerConfig",
    "DelveError",
    "ConfigError",
    "ContainerError",
    "CapacityError",
    "VerifierError",
    "PlacementError",
    "RoomStateError",
]
