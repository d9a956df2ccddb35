"""Tests for the frame loop orchestration."""
import logging

import pytest

from tiledswirl.core.animator import Animator, State
from tiledswirl.core.colors import BLANK_DARK, BLANK_LIGHT
from tiledswirl.core.config import SwirlConfig
from tiledswirl.core.errors import InvalidConfiguration
from tiledswirl.core.wavefield import tile_render_size


class RecordingSurface:
    def __init__(self):
        self.calls = []
        self.scales = []

    def scale(self, factor):
        self.scales.append(factor)

    def clear(self, x, y, w, h):
        self.calls.append(("clear", x, y, w, h))

    def fill_rect(self, x, y, w, h, color):
        self.calls.append(("fill", x, y, w, h, color))

    def present(self):
        self.calls.append(("present",))

    def count(self, kind):
        return sum(1 for c in self.calls if c[0] == kind)


class Frames:
    def __init__(self):
        self.pending = []

    def __call__(self, callback):
        self.pending.append(callback)

    def run_next(self):
        self.pending.pop(0)()


@pytest.fixture
def config():
    return SwirlConfig(density=10, tightness=3, ripple=5, edge_threshold=0.1, speed=0.03)


class TestAnimator:
    def test_starts_idle(self, config, rng):
        a = Animator(config, 200, 100, rng=rng)
        assert a.state is State.IDLE
        assert a.time == 0.0
        assert (a.grid.cols, a.grid.rows) == (20, 10)
        assert (a.colors.cols, a.colors.rows) == (20, 10)

    def test_invalid_density_before_geometry(self):
        with pytest.raises(InvalidConfiguration):
            Animator(SwirlConfig(density=0), 800, 600)

    def test_start_schedules_first_frame(self, config, rng):
        a = Animator(config, 200, 100, pixel_ratio=2, rng=rng)
        surface = RecordingSurface()
        frames = Frames()
        assert a.start(surface, frames)
        assert a.state is State.RUNNING
        assert len(frames.pending) == 1
        assert surface.scales == [2]
        # second start is a no-op
        assert a.start(surface, frames)
        assert len(frames.pending) == 1

    def test_tick_draws_every_tile(self, config, rng):
        a = Animator(config, 200, 100, rng=rng)
        surface = RecordingSurface()
        frames = Frames()
        a.start(surface, frames)
        frames.run_next()
        assert len(frames.pending) == 1  # rescheduled itself
        assert surface.calls[0] == ("clear", 0, 0, 200.0, 100.0)
        assert surface.count("fill") == 200
        assert surface.calls[-1] == ("present",)
        assert a.time == pytest.approx(0.03)
        frames.run_next()
        assert a.time == pytest.approx(0.06)

    def test_missing_surface(self, config, rng, caplog):
        a = Animator(config, 200, 100, rng=rng)
        frames = Frames()
        with caplog.at_level(logging.ERROR, logger="tiledswirl.core.animator"):
            assert a.start(None, frames) is False
        assert a.state is State.IDLE
        assert frames.pending == []
        assert "no render surface" in caplog.text

    def test_unavailable_surface(self, config, rng):
        surface = RecordingSurface()
        surface.available = False
        a = Animator(config, 200, 100, rng=rng)
        assert a.start(surface, Frames()) is False

    def test_stop_ends_loop(self, config, rng):
        a = Animator(config, 200, 100, rng=rng)
        surface = RecordingSurface()
        frames = Frames()
        a.start(surface, frames)
        a.stop()
        frames.run_next()
        assert frames.pending == []
        assert surface.calls == []
        assert a.state is State.IDLE

    def test_commands_are_centered_squares(self, config, rng):
        a = Animator(config, 200, 100, rng=rng)
        commands = a.render_frame()
        edge = a.grid.tile_edge
        assert len(commands) == 200
        for cmd in commands:
            assert cmd.width == cmd.height
            assert cmd.x + cmd.width / 2 == pytest.approx(cmd.grid_x * edge + edge / 2)
            assert cmd.y + cmd.height / 2 == pytest.approx(cmd.grid_y * edge + edge / 2)
            assert cmd.width == pytest.approx(tile_render_size(cmd.grid_x, cmd.grid_y, a.grid, a.time, config))

    def test_theme_switch_changes_blank(self, rng):
        cfg = SwirlConfig(density=4, palette=[""])
        a = Animator(cfg, 40, 40, rng=rng)
        assert {c.color for c in a.render_frame()} == {BLANK_LIGHT}
        a.set_dark(True)
        assert {c.color for c in a.render_frame()} == {BLANK_DARK}

    def test_resize_applied_at_next_frame(self, config, rng):
        a = Animator(config, 200, 100, rng=rng)
        a.resize(100, 100)
        assert (a.grid.cols, a.grid.rows) == (20, 10)
        commands = a.render_frame()
        assert (a.grid.cols, a.grid.rows) == (10, 10)
        assert len(commands) == 100

    def test_resize_keeps_colors(self, config, rng):
        a = Animator(config, 200, 100, rng=rng)
        before = [list(col) for col in a.colors.cells]
        a.resize(100, 100)
        a.render_frame()
        a.resize(200, 100)
        a.render_frame()
        assert (a.colors.cols, a.colors.rows) == (20, 10)
        assert [list(col) for col in a.colors.cells[:10]] == before[:10]

    def test_resize_rescales_surface(self, config, rng):
        a = Animator(config, 200, 100, rng=rng)
        surface = RecordingSurface()
        frames = Frames()
        a.start(surface, frames)
        a.resize(400, 200, 2)
        frames.run_next()
        assert surface.scales == [1.0, 2]
        assert surface.calls[0] == ("clear", 0, 0, 200.0, 100.0)
        assert a.grid.tile_edge == pytest.approx(10.0)

    def test_restart_runs_a_single_loop(self, config, rng):
        a = Animator(config, 200, 100, rng=rng)
        frames = Frames()
        a.start(RecordingSurface(), frames)
        a.stop()
        surface = RecordingSurface()
        a.start(surface, frames)
        assert len(frames.pending) == 2
        # one refresh: every callback queued so far fires once
        queued, frames.pending = frames.pending, []
        for callback in queued:
            callback()
        assert a.time == pytest.approx(config.speed)
        assert len(frames.pending) == 1
        assert surface.count("present") == 1

    def test_render_frame_without_advance(self, config, rng):
        a = Animator(config, 200, 100, rng=rng)
        a.time = 0.1
        commands = a.render_frame(advance=False)
        assert a.time == 0.1
        cmd = commands[37]
        assert cmd.width == pytest.approx(tile_render_size(cmd.grid_x, cmd.grid_y, a.grid, 0.1, config))

    def test_commands_use_table_colors(self, config, rng):
        a = Animator(config, 200, 100, rng=rng)
        for cmd in a.render_frame():
            assert cmd.color == a.colors.color(cmd.grid_x, cmd.grid_y, a.is_dark)
