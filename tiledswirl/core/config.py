from __future__ import annotations

import math
from dataclasses import dataclass, field, fields
from typing import Optional, Tuple

from .errors import InvalidConfiguration

DEFAULT_PALETTE: Tuple[Optional[str], ...] = (
    "",  # black or white, depending on the theme
    "hsl(343, 90%, 50%)",
    "hsl(43, 90%, 50%)",
    "hsl(223, 90%, 50%)",
)

# public option name -> dataclass field
OPTION_NAMES = {
    "density": "density",
    "edge": "edge_threshold",
    "ripple": "ripple",
    "speed": "speed",
    "tightness": "tightness",
    "palette": "palette",
}


def _finite(name: str, value) -> float:
    try:
        v = float(value)
    except (TypeError, ValueError) as e:
        raise InvalidConfiguration(f"{name} must be a number, got {value!r}") from e
    if not math.isfinite(v):
        raise InvalidConfiguration(f"{name} must be finite, got {value!r}")
    return v


@dataclass(frozen=True)
class SwirlConfig:
    density: float = 32.0
    tightness: float = 3.0
    ripple: float = 5.0
    edge_threshold: float = 0.1
    speed: float = 0.03
    palette: Tuple[Optional[str], ...] = field(default=DEFAULT_PALETTE)

    def __post_init__(self):
        density = _finite("density", self.density)
        tightness = _finite("tightness", self.tightness)
        ripple = _finite("ripple", self.ripple)
        edge = _finite("edge", self.edge_threshold)
        speed = _finite("speed", self.speed)
        if density <= 0:
            raise InvalidConfiguration(f"density must be > 0, got {density}")
        if tightness <= 0:
            raise InvalidConfiguration(f"tightness must be > 0, got {tightness}")
        if ripple < 0:
            raise InvalidConfiguration(f"ripple must be >= 0, got {ripple}")
        # edge2 - edge1 must stay positive for the sharpening band
        if not 0.0 < edge < 0.5:
            raise InvalidConfiguration(f"edge must be in (0, 0.5), got {edge}")
        if speed <= 0:
            raise InvalidConfiguration(f"speed must be > 0, got {speed}")
        if isinstance(self.palette, str):
            raise InvalidConfiguration("palette must be a sequence of colors, not a string")
        palette = tuple(self.palette)
        for entry in palette:
            if entry is not None and not isinstance(entry, str):
                raise InvalidConfiguration(f"palette entries must be strings or None, got {entry!r}")
        # frozen: normalize through object.__setattr__
        object.__setattr__(self, "density", density)
        object.__setattr__(self, "tightness", tightness)
        object.__setattr__(self, "ripple", ripple)
        object.__setattr__(self, "edge_threshold", edge)
        object.__setattr__(self, "speed", speed)
        object.__setattr__(self, "palette", palette)

    @classmethod
    def from_options(cls, **options) -> "SwirlConfig":
        """Build a config from the public option names (``edge`` rather than ``edge_threshold``)."""
        kwargs = {}
        for name, value in options.items():
            if name not in OPTION_NAMES:
                raise InvalidConfiguration(f"unknown option {name!r}")
            kwargs[OPTION_NAMES[name]] = value
        return cls(**kwargs)

    def to_options(self) -> dict:
        by_field = {v: k for k, v in OPTION_NAMES.items()}
        return {by_field[f.name]: getattr(self, f.name) for f in fields(self)}
