"""Tiled Swirl: a grid of tiles pulsing to a radial spiral wave."""

from tiledswirl.core.animator import Animator, DrawCommand, State
from tiledswirl.core.colors import ColorTable, blank_color
from tiledswirl.core.config import SwirlConfig
from tiledswirl.core.errors import InvalidConfiguration, MissingSurface, SwirlError
from tiledswirl.core.geometry import Grid, compute_geometry
from tiledswirl.core.wavefield import render_sizes, smoothstep, tile_render_size

__version__ = "0.1.0"

__all__ = [
    "Animator",
    "ColorTable",
    "DrawCommand",
    "Grid",
    "InvalidConfiguration",
    "MissingSurface",
    "State",
    "SwirlConfig",
    "SwirlError",
    "blank_color",
    "compute_geometry",
    "render_sizes",
    "smoothstep",
    "tile_render_size",
]
