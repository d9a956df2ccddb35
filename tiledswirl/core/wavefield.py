from __future__ import annotations

import math

import numpy as np

from .config import SwirlConfig
from .errors import InvalidConfiguration
from .geometry import Grid

MIN_SCALE = 0.2
SPAN_SCALE = 0.8  # floor + span == full tile edge


def clamp01(x):
    return np.clip(x, 0.0, 1.0)


def smoothstep(x, edge1: float, edge2: float):
    """Sharpen the transition around the band [edge1, edge2].

    Values below edge1 map to 0, above edge2 to 1, and the band in between
    follows the cubic Hermite curve. Works on floats and arrays.
    """
    if not edge2 > edge1:
        raise InvalidConfiguration(f"sharpening band is empty: edge1={edge1}, edge2={edge2}")
    if isinstance(x, np.ndarray):
        t = clamp01((x - edge1) / (edge2 - edge1))
    else:
        t = max(0.0, min(1.0, (x - edge1) / (edge2 - edge1)))
    return t * t * (3 - 2 * t)


def _band(config: SwirlConfig) -> tuple[float, float]:
    edge = config.edge_threshold
    if edge >= 0.5:
        raise InvalidConfiguration(f"edge must be < 0.5, got {edge}")
    return 0.5 - edge, 0.5 + edge


def wave_value(grid_x: int, grid_y: int, grid: Grid, t: float, config: SwirlConfig) -> float:
    size = grid.tile_edge
    dx = grid_x * size + size / 2 - grid.center_x
    dy = grid_y * size + size / 2 - grid.center_y
    dist_norm = math.sqrt(dx * dx + dy * dy) / grid.max_distance
    angle = math.atan2(dy, dx)
    ripple_factor = config.tightness * (1 + dist_norm * config.ripple)
    return math.sin(dist_norm * ripple_factor + angle - t)


def tile_render_size(grid_x: int, grid_y: int, grid: Grid, t: float, config: SwirlConfig) -> float:
    edge1, edge2 = _band(config)
    wave = wave_value(grid_x, grid_y, grid, t, config)
    sharp = smoothstep((wave + 1) / 2, edge1, edge2)
    return grid.tile_edge * MIN_SCALE + grid.tile_edge * SPAN_SCALE * sharp


def render_sizes(grid: Grid, t: float, config: SwirlConfig) -> np.ndarray:
    """Tile sizes for the whole grid, indexed ``[grid_x, grid_y]``."""
    edge1, edge2 = _band(config)
    size = grid.tile_edge
    xx, yy = np.mgrid[0:grid.cols, 0:grid.rows].astype(np.float64)
    dx = xx * size + size / 2 - grid.center_x
    dy = yy * size + size / 2 - grid.center_y
    # not clamped: corner tiles may sit a little past max_distance
    dist_norm = np.sqrt(dx * dx + dy * dy) / grid.max_distance
    angle = np.arctan2(dy, dx)
    ripple_factor = config.tightness * (1 + dist_norm * config.ripple)
    wave = np.sin(dist_norm * ripple_factor + angle - t)
    sharp = smoothstep((wave + 1) / 2, edge1, edge2)
    return size * MIN_SCALE + size * SPAN_SCALE * sharp
