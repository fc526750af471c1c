import os
from dataclasses import dataclass, replace
from typing import Optional

from ..errors import ConfigError

STRATEGIES = ("hall_first", "avoidance")

# environment variable -> (DiggerConfig field, kind)
ENV_MAP = {
    'DELVE_WIDTH': ('width', int),
    'DELVE_HEIGHT': ('height', int),
    'DELVE_SEED': ('seed', int),
    'DELVE_STRATEGY': ('strategy', str),
    'DELVE_INTERRUPTABLE': ('interruptable', bool),
    'DELVE_PER': ('approximate_per', int),
    'DELVE_POPULATE': ('populate', int),
}


@dataclass
class DiggerConfig:
    width: int = 80
    height: int = 48
    bsp_depth: int = 50
    min_leaf_height: int = 8
    min_leaf_width: int = 8
    max_ratio: int = 2
    approximate_per: int = 200
    strategy: str = "hall_first"
    interruptable: bool = False
    populate: int = 0
    seed: Optional[int] = None

    @classmethod
    def from_env(cls, environ=None, **overrides) -> "DiggerConfig":
        """Defaults, then DELVE_* environment values, then explicit overrides."""
        environ = os.environ if environ is None else environ
        values = {}
        for env_key, (attr, kind) in ENV_MAP.items():
            raw = environ.get(env_key)
            if raw is None or raw == '':
                continue
            values[attr] = _coerce(env_key, raw, kind)
        values.update({k: v for k, v in overrides.items() if v is not None})
        return replace(cls(), **values)

    def validate(self) -> "DiggerConfig":
        if self.width < 3 or self.height < 3:
            raise ConfigError(f"Map must be at least 3x3, got {self.height}x{self.width}")
        if self.min_leaf_height < 3 or self.min_leaf_width < 3:
            raise ConfigError("BSP leaves must be at least 3x3")
        if self.bsp_depth < 0:
            raise ConfigError(f"bsp_depth must not be negative: {self.bsp_depth}")
        if self.max_ratio < 1:
            raise ConfigError(f"max_ratio must be >= 1: {self.max_ratio}")
        if not 1 <= self.approximate_per <= 1000:
            raise ConfigError(f"approximate_per must be within 1..1000: {self.approximate_per}")
        if self.strategy not in STRATEGIES:
            raise ConfigError(f"Unknown strategy {self.strategy!r}; expected one of {', '.join(STRATEGIES)}")
        if self.populate < 0:
            raise ConfigError(f"populate must not be negative: {self.populate}")
        return self


def _coerce(env_key: str, raw: str, kind) -> object:
    if kind is bool:
        return raw.lower() not in {'0', 'false', 'no', ''}
    if kind is int:
        try:
            return int(raw)
        except ValueError:
            raise ConfigError(f"{env_key} must be an integer, got {raw!r}") from None
    return raw


__all__ = ["DiggerConfig", "STRATEGIES", "ENV_MAP"]
