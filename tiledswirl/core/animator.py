from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from .colors import ColorTable
from .config import SwirlConfig
from .errors import MissingSurface
from .geometry import Grid, compute_geometry
from .wavefield import render_sizes

log = logging.getLogger(__name__)

FrameCallback = Callable[[], None]
Scheduler = Callable[[FrameCallback], None]


class State(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"


@dataclass(frozen=True)
class DrawCommand:
    grid_x: int
    grid_y: int
    x: float
    y: float
    width: float
    height: float
    color: str


class Animator:
    """Owns the clock, grid and color table and drives one frame per tick.

    The host calls ``resize`` and ``set_dark`` whenever it likes; both only
    record the new value, which the next ``tick`` picks up before drawing.
    """

    def __init__(
        self,
        config: SwirlConfig,
        viewport_width: float,
        viewport_height: float,
        pixel_ratio: float = 1.0,
        is_dark: bool = False,
        rng=None,
    ):
        self.config = config
        self.grid: Grid = compute_geometry(viewport_width, viewport_height, pixel_ratio, config.density)
        self.colors = ColorTable(config.palette, self.grid.cols, self.grid.rows, rng=rng)
        self.time = 0.0
        self.is_dark = bool(is_dark)
        self.state = State.IDLE
        self.surface = None
        self._schedule: Optional[Scheduler] = None
        # bumped by stop(); callbacks from an older loop become no-ops
        self._generation = 0
        self._pending_viewport: Optional[Tuple[float, float, float]] = None

    # host notifications

    def resize(self, viewport_width: float, viewport_height: float, pixel_ratio: float = 1.0) -> None:
        self._pending_viewport = (viewport_width, viewport_height, pixel_ratio)

    def set_dark(self, is_dark: bool) -> None:
        self.is_dark = bool(is_dark)

    # lifecycle

    def start(self, surface, schedule_next_frame: Scheduler) -> bool:
        """Attach a surface and begin the frame loop.

        Returns False (and stays idle) when the surface is missing.
        """
        if self.state is State.RUNNING:
            return True
        try:
            self._attach(surface)
        except MissingSurface as e:
            log.error("animation not started: %s", e)
            return False
        self._schedule = schedule_next_frame
        self.state = State.RUNNING
        self._schedule(self._frame_callback())
        return True

    def _attach(self, surface) -> None:
        if surface is None or not getattr(surface, "available", True):
            raise MissingSurface("no render surface available")
        self.surface = surface
        # absolute factor, not cumulative
        surface.scale(self.grid.pixel_ratio)

    def stop(self) -> None:
        self.state = State.IDLE
        self._schedule = None
        self._generation += 1

    def _frame_callback(self) -> FrameCallback:
        generation = self._generation
        return lambda: self.tick(generation)

    # per frame

    def apply_resize(self) -> bool:
        if self._pending_viewport is None:
            return False
        w, h, ratio = self._pending_viewport
        self._pending_viewport = None
        grid = compute_geometry(w, h, ratio, self.config.density)
        log.debug("geometry %dx%d tiles, edge %.3f px", grid.cols, grid.rows, grid.tile_edge)
        self.grid = grid
        self.colors.resize(grid.cols, grid.rows)
        if self.surface is not None:
            self.surface.scale(grid.pixel_ratio)
        return True

    def render_frame(self, advance: bool = True) -> List[DrawCommand]:
        """Advance the clock one step and return this frame's draw commands.

        With ``advance=False`` the frame is drawn at the current clock value.
        """
        self.apply_resize()
        if advance:
            self.time += self.config.speed
        grid = self.grid
        edge = grid.tile_edge
        sizes = render_sizes(grid, self.time, self.config)
        commands = []
        for i in range(grid.cols):
            for j in range(grid.rows):
                size = float(sizes[i, j])
                offset = (edge - size) / 2
                commands.append(DrawCommand(
                    i,
                    j,
                    i * edge + offset,
                    j * edge + offset,
                    size,
                    size,
                    self.colors.color(i, j, self.is_dark),
                ))
        return commands

    def tick(self, generation: Optional[int] = None) -> None:
        if self.state is not State.RUNNING:
            return
        if generation is not None and generation != self._generation:
            return
        self._schedule(self._frame_callback())
        self.apply_resize()
        grid = self.grid
        surface = self.surface
        surface.clear(0, 0, grid.viewport_width / grid.pixel_ratio, grid.viewport_height / grid.pixel_ratio)
        for cmd in self.render_frame():
            surface.fill_rect(cmd.x, cmd.y, cmd.width, cmd.height, cmd.color)
        surface.present()
