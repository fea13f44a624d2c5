#!/usr/bin/env python3
"""
Viewer wiring tests. No window is opened; only the handlers that sit
between pygame events and the simulator are exercised.
"""

import dataclasses
from types import SimpleNamespace

import pytest

pytest.importorskip("pygame")

from wave_cover.config import WaveConfig  # noqa: E402
from wave_cover.viewer import PANEL_WIDTH, TIME_STEP, Viewer  # noqa: E402


def make_config(**groups):
    base = WaveConfig()
    return dataclasses.replace(base, **{
        group: dataclasses.replace(getattr(base, group), **fields)
        for group, fields in groups.items()
    })


def click(x, y, button=1):
    return SimpleNamespace(button=button, pos=(x, y))


def test_panel_only_in_debug_mode():
    assert Viewer(WaveConfig(), 120, 90).total_w == 120
    assert Viewer(make_config(debug_mode={"enabled": True}), 120, 90).total_w == 120 + PANEL_WIDTH


def test_click_starts_wave_on_canvas():
    viewer = Viewer(WaveConfig(), 120, 90, seed=0)
    viewer._handle_click(click(30, 40))
    assert viewer.sim.stats["history"] == 1

    # Right button and clicks past the canvas do nothing
    viewer._handle_click(click(30, 40, button=3))
    viewer._handle_click(click(300, 40))
    assert viewer.sim.stats["history"] == 1


def test_click_ignored_when_not_interactive():
    viewer = Viewer(make_config(interaction={"interactive": False}), 120, 90, seed=0)
    seeded = viewer.sim.stats["history"]
    viewer._handle_click(click(30, 40))
    assert viewer.sim.stats["history"] == seeded


def test_pause_and_step_in_debug_mode():
    viewer = Viewer(make_config(debug_mode={"enabled": True}), 120, 90, seed=0)
    viewer._on_toggle_pause()
    assert viewer.sim.paused

    viewer._step_time(TIME_STEP)
    viewer._step_time(TIME_STEP)
    assert abs(viewer.sim.time - 2 * TIME_STEP) < 1e-9

    viewer._step_time(-1.0)
    assert viewer.sim.time == 0.0


def test_step_ignored_while_playing():
    viewer = Viewer(make_config(debug_mode={"enabled": True}), 120, 90, seed=0)
    viewer._step_time(TIME_STEP)
    assert viewer.sim.time == 0.0


def test_panel_follows_clock_and_clear():
    viewer = Viewer(make_config(debug_mode={"enabled": True}), 120, 90, seed=0)
    assert viewer.panel is not None and viewer.panel.x == 120
    viewer.sim.add_wave(60, 45)
    viewer.sim.set_time(1.5)
    viewer.panel.sync()
    assert viewer.panel.scrubber.value == 1.5
    assert viewer.sim.stats["active"] == 1

    viewer._on_clear()
    assert viewer.sim.time == 0.0
    assert viewer.sim.stats["history"] == 0


def test_no_panel_outside_debug_mode():
    assert Viewer(WaveConfig(), 120, 90).panel is None
