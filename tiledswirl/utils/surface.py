from __future__ import annotations

import functools
from typing import Tuple

import numpy as np
from PIL import Image, ImageColor, ImageDraw

from tiledswirl.core.errors import MissingSurface


@functools.lru_cache(maxsize=64)
def parse_color(color: str) -> Tuple[int, int, int]:
    """CSS-style color string (``#rrggbb``, ``hsl(...)``, names) to RGB."""
    r, g, b = ImageColor.getrgb(color)[:3]
    return r, g, b


class ImageSurface:
    """Render surface backed by a Pillow RGB image.

    Coordinates passed to ``clear``/``fill_rect`` are logical pixels; the
    image itself is in device pixels, ``scale`` sets the factor between them.
    """

    def __init__(self, width: int, height: int, background: Tuple[int, int, int] | str = "white"):
        self.background = background
        self.factor = 1.0
        self.image: Image.Image | None = None
        self.draw: ImageDraw.ImageDraw | None = None
        self.resize(width, height)

    @property
    def available(self) -> bool:
        return self.image is not None

    @property
    def width(self) -> int:
        return self.image.width if self.image is not None else 0

    @property
    def height(self) -> int:
        return self.image.height if self.image is not None else 0

    def _bg(self) -> Tuple[int, int, int]:
        if isinstance(self.background, str):
            return parse_color(self.background)
        return tuple(self.background)

    def resize(self, width: int, height: int) -> None:
        width = int(round(width))
        height = int(round(height))
        if width <= 0 or height <= 0:
            raise MissingSurface(f"cannot allocate a {width}x{height} surface")
        self.image = Image.new("RGB", (width, height), color=self._bg())
        self.draw = ImageDraw.Draw(self.image)

    def scale(self, factor: float) -> None:
        self.factor = float(factor)

    def _box(self, x, y, w, h):
        f = self.factor
        x0 = int(round(x * f))
        y0 = int(round(y * f))
        x1 = int(round((x + w) * f)) - 1
        y1 = int(round((y + h) * f)) - 1
        return x0, y0, max(x0, x1), max(y0, y1)

    def clear(self, x, y, width, height) -> None:
        self.draw.rectangle(self._box(x, y, width, height), fill=self._bg())

    def fill_rect(self, x, y, width, height, color: str) -> None:
        self.draw.rectangle(self._box(x, y, width, height), fill=parse_color(color))

    def present(self) -> None:
        pass

    def to_array(self) -> np.ndarray:
        return np.asarray(self.image, dtype=np.uint8)
