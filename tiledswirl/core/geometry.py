from __future__ import annotations

import math
from dataclasses import dataclass

from .errors import InvalidConfiguration


@dataclass(frozen=True)
class Grid:
    tile_edge: float
    rows: int
    cols: int
    center_x: float
    center_y: float
    max_distance: float
    viewport_width: float
    viewport_height: float
    pixel_ratio: float


def _cells(extent: float, tile_edge: float, pixel_ratio: float) -> int:
    # rounding first keeps float noise (32.0000000001) from adding a row
    return max(1, int(math.ceil(round(extent / tile_edge / pixel_ratio, 9))))


def compute_geometry(viewport_width: float, viewport_height: float, pixel_ratio: float, density: float) -> Grid:
    """Derive the tile grid for a viewport given in raw device pixels.

    The tile edge is tied to the shorter side so the pattern never stretches;
    rows/cols use the ceiling so the partial far row and column still get
    painted. All lengths in the result are logical pixels.
    """
    for name, value in (("density", density), ("pixel ratio", pixel_ratio),
                        ("viewport width", viewport_width), ("viewport height", viewport_height)):
        if value is None or not math.isfinite(value):
            raise InvalidConfiguration(f"{name} must be a finite number, got {value}")
    if not density > 0:
        raise InvalidConfiguration(f"density must be > 0, got {density}")
    if not pixel_ratio > 0:
        raise InvalidConfiguration(f"pixel ratio must be > 0, got {pixel_ratio}")
    if not (viewport_width > 0 and viewport_height > 0):
        raise InvalidConfiguration(
            f"viewport must be non-empty, got {viewport_width}x{viewport_height}"
        )
    w = float(viewport_width)
    h = float(viewport_height)
    tile_edge = min(w, h) / density / pixel_ratio
    half_w = w / pixel_ratio / 2
    half_h = h / pixel_ratio / 2
    return Grid(
        tile_edge=tile_edge,
        rows=_cells(h, tile_edge, pixel_ratio),
        cols=_cells(w, tile_edge, pixel_ratio),
        center_x=half_w,
        center_y=half_h,
        max_distance=math.sqrt(half_w ** 2 + half_h ** 2),
        viewport_width=w,
        viewport_height=h,
        pixel_ratio=float(pixel_ratio),
    )
