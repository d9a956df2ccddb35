from __future__ import annotations

import logging
import os

from PIL import Image

from tiledswirl.core.animator import Animator
from tiledswirl.core.colors import background_color
from tiledswirl.core.config import SwirlConfig
from tiledswirl.utils.surface import ImageSurface

log = logging.getLogger(__name__)


def _paint(animator: Animator, surface: ImageSurface, advance: bool = True) -> Image.Image:
    grid = animator.grid
    surface.clear(0, 0, grid.viewport_width / grid.pixel_ratio, grid.viewport_height / grid.pixel_ratio)
    for cmd in animator.render_frame(advance=advance):
        surface.fill_rect(cmd.x, cmd.y, cmd.width, cmd.height, cmd.color)
    return surface.image.copy()


def _setup(config, width, height, pixel_ratio, dark, rng):
    animator = Animator(config, width, height, pixel_ratio=pixel_ratio, is_dark=dark, rng=rng)
    surface = ImageSurface(width, height, background=background_color(dark))
    surface.scale(pixel_ratio)
    return animator, surface


def render_still(
    config: SwirlConfig,
    width: int,
    height: int,
    time: float = 0.0,
    pixel_ratio: float = 1.0,
    dark: bool = False,
    rng=None,
) -> Image.Image:
    """Render a single frame at clock value ``time`` into an RGB image."""
    animator, surface = _setup(config, width, height, pixel_ratio, dark, rng)
    animator.time = time
    return _paint(animator, surface, advance=False)


def export_gif(
    path: str,
    config: SwirlConfig,
    width: int,
    height: int,
    frames: int = 120,
    fps: int = 30,
    pixel_ratio: float = 1.0,
    dark: bool = False,
    loop: bool = True,
    rng=None,
) -> str:
    """Write ``frames`` consecutive frames as an animated GIF; returns the path."""
    if frames <= 0:
        raise ValueError("frames must be > 0")
    animator, surface = _setup(config, width, height, pixel_ratio, dark, rng)
    out = [_paint(animator, surface) for _ in range(frames)]
    duration = int(round(1000.0 / max(1, fps)))
    folder = os.path.dirname(os.path.abspath(path))
    os.makedirs(folder, exist_ok=True)
    out[0].save(
        path,
        format="GIF",
        save_all=True,
        append_images=out[1:],
        duration=duration,
        loop=0 if loop else 1,
    )
    log.info("wrote %d frames to %s", frames, path)
    return path
