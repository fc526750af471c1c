"""Exception types raised by the generator.

Everything derives from DelveError so an orchestrator can catch a whole
generation failure in one place and retry with another seed. Each class also
derives from the builtin it refines, so callers that only know about
ValueError / RuntimeError keep working.
"""
from __future__ import annotations


class DelveError(Exception):
    """Base class for generation failures."""


class ConfigError(DelveError, ValueError):
    """Cell configuration or generator settings cannot be used."""


class ContainerError(DelveError, ValueError):
    """An item could not be stored in a room container."""


class CapacityError(ContainerError):
    def __init__(self, message: str, limit: int, size: int):
        super().__init__(message)
        self.limit = limit
        self.size = size


class VerifierError(ContainerError):
    def __init__(self, message: str, item=None):
        super().__init__(message)
        self.item = item


class PlacementError(DelveError, RuntimeError):
    """No empty cell was left for an object that had to be placed."""


class RoomStateError(DelveError, RuntimeError):
    """A room was used before it was ready (e.g. placing into an undug room)."""


__all__ = [
    "DelveError",
    "ConfigError",
    "ContainerError",
    "CapacityError",
    "VerifierError",
    "PlacementError",
    "RoomStateError",
]
