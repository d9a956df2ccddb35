from __future__ import annotations

import logging
import secrets
from typing import List, Optional, Sequence

log = logging.getLogger(__name__)

BLANK_DARK = "hsl(0, 0%, 100%)"
BLANK_LIGHT = "hsl(0, 0%, 0%)"


def blank_color(is_dark: bool) -> str:
    """White on dark themes, black on light ones."""
    return BLANK_DARK if is_dark else BLANK_LIGHT


class ColorTable:
    """Palette entry per grid cell, indexed ``[grid_x][grid_y]``.

    Entries are drawn once from a cryptographically strong source. Resizing
    keeps every surviving cell, drops cells that fall outside the new grid
    and draws fresh entries only for newly exposed ones. Pass ``rng`` (any
    object with ``random()``) to make the draws reproducible.
    """

    def __init__(self, palette: Sequence[Optional[str]], cols: int, rows: int, rng=None):
        self.palette = tuple(palette)
        self.rng = rng if rng is not None else secrets.SystemRandom()
        self.cols = 0
        self.rows = 0
        self.cells: List[List[Optional[str]]] = []
        self.resize(cols, rows)

    def _draw(self) -> Optional[str]:
        if not self.palette:
            return None
        index = int(self.rng.random() * len(self.palette))
        return self.palette[min(index, len(self.palette) - 1)]

    def reset(self) -> None:
        cols, rows = self.cols, self.rows
        self.cells = []
        self.cols = self.rows = 0
        self.resize(cols, rows)

    def resize(self, cols: int, rows: int) -> None:
        cols = max(0, int(cols))
        rows = max(0, int(rows))
        if (cols, rows) == (self.cols, self.rows):
            return
        del self.cells[cols:]
        for column in self.cells:
            del column[rows:]
            column.extend(self._draw() for _ in range(rows - len(column)))
        for _ in range(cols - len(self.cells)):
            self.cells.append([self._draw() for _ in range(rows)])
        log.debug("color table %dx%d -> %dx%d", self.cols, self.rows, cols, rows)
        self.cols, self.rows = cols, rows

    def entry(self, grid_x: int, grid_y: int) -> Optional[str]:
        return self.cells[grid_x][grid_y]

    def color(self, grid_x: int, grid_y: int, is_dark: bool) -> str:
        return self.cells[grid_x][grid_y] or blank_color(is_dark)


def background_color(is_dark: bool) -> str:
    """Page color behind the tiles; always the opposite of the blank tile color."""
    return blank_color(not is_dark)
