"""
WaveSimulator - Headless simulation core

Owns all simulation state (clock, wave history, active set, pause flag,
random source, pixel buffers) with zero pygame dependency. The viewer
drives it once per display refresh; the CLI snapshot mode drives it
directly to a chosen time.

Per frame:
    advance clock -> recompute active set -> rasterize field -> noise overlay

Usage:
    from wave_cover.simulator import WaveSimulator
    sim = WaveSimulator(seed=7)
    sim.add_wave(450, 450)
    frame = sim.tick(1 / 60)  # (H, W, 3) uint8
"""

import logging
import os
import numpy as np
from PIL import Image

from .compositor import FieldCompositor, flatten_onto
from .config import WaveConfig
from .noise_overlay import NoiseOverlay
from .waves import WaveRegistry

logger = logging.getLogger(__name__)


class WaveSimulator:
    """Simulation aggregate: one instance per independent wave canvas.

    Args:
        config: WaveConfig (defaults when omitted)
        width, height: Canvas size; defaults to config.canvas
        seed: Seed for the shared numpy Generator (noise placement,
            corruption, auto-seeded wave origins)
    """

    def __init__(self, config=None, width=None, height=None, seed=None):
        self.config = config or WaveConfig()
        self.width = int(width or self.config.canvas.width)
        self.height = int(height or self.config.canvas.height)

        self.rng = np.random.default_rng(seed)
        self.registry = WaveRegistry(self.config)
        self.compositor = FieldCompositor(self.config, self.rng)
        self.noise = NoiseOverlay(self.config, self.rng)

        self.time = 0.0
        debug = self.config.debug_mode
        self.paused = debug.enabled and debug.start_paused
        self.active = []
        self.frame = None

        if not self.config.interaction.interactive:
            self.seed_initial_waves()
        self.update()

    # -----------------------------------------------------------------------
    # Public API
    # -----------------------------------------------------------------------

    @property
    def debug_enabled(self):
        return self.config.debug_mode.enabled

    def add_wave(self, x, y, start_time=None):
        """Start a wave at (x, y), by default at the current time."""
        wave = self.registry.create_wave(x, y, self.time if start_time is None else start_time)
        if self.paused:
            self.refresh()
        return wave

    def seed_initial_waves(self):
        """Drop num_initial_waves waves at random origins, staggered over 2s."""
        n = self.config.interaction.num_initial_waves
        waves = []
        for i in range(n):
            x = self.rng.random() * self.width
            y = self.rng.random() * self.height
            waves.append(self.registry.create_wave(x, y, self.time + (i / n) * 2.0))
        logger.info(f"Seeded {n} initial waves")
        return waves

    def toggle_pause(self):
        """Flip Playing/Paused. Only honored in debug mode.

        Returns:
            New paused state
        """
        if not self.debug_enabled:
            return self.paused
        self.paused = not self.paused
        if self.paused:
            self.refresh()
        return self.paused

    def set_time(self, t):
        """Scrub to simulation time t (clamped to >= 0) and re-evaluate."""
        self.time = max(0.0, float(t))
        return self.refresh()

    def resize(self, width, height):
        """Adopt new canvas bounds; existing waves keep their origins."""
        self.width = max(1, int(width))
        self.height = max(1, int(height))
        if self.paused:
            self.refresh()

    def tick(self, dt):
        """Advance one displayed frame.

        Playing: advances the clock by dt, recomputes and renders.
        Paused: the clock is frozen and the last frame is returned.

        Returns:
            (H, W, 3) uint8 RGB frame
        """
        if self.paused and self.frame is not None:
            return self.frame
        if not self.paused:
            self.time += dt
        return self.refresh()

    def update(self):
        """Recompute the active set at the current time."""
        if not self.debug_enabled:
            # Time never runs backwards without the scrubber
            self.registry.prune_expired(self.time)
        self.active = self.registry.active_set(self.time, self.width, self.height)
        return self.active

    def render(self):
        """Rasterize the current active set into an RGB frame."""
        field = self.compositor.render(self.active, self.width, self.height)
        frame = flatten_onto(field, self.config.canvas.background_rgb)
        self.noise.draw(frame, self.active)
        np.clip(frame, 0, 255, out=frame)
        self.frame = frame.astype(np.uint8)
        return self.frame

    def refresh(self):
        """Synchronous re-evaluation at the current time."""
        self.update()
        return self.render()

    def export_frame(self, path=None, screenshots_dir="screenshots"):
        """
        Re-evaluate at the current time and save the frame as a PNG.

        Args:
            path: Output file; defaults to
                <screenshots_dir>/wave_cover_time_<t>.png
            screenshots_dir: Directory used when path is omitted

        Returns:
            Path written
        """
        frame = self.refresh()
        if path is None:
            os.makedirs(screenshots_dir, exist_ok=True)
            path = os.path.join(screenshots_dir, f"wave_cover_time_{self.time:.2f}.png")
        Image.fromarray(frame).save(path)
        logger.info(f"Frame exported as PNG for time {self.time:.2f}s: {path}")
        return path

    def reset(self):
        """Clear history and restart the clock (reseeds in auto mode)."""
        self.time = 0.0
        self.registry.clear()
        if not self.config.interaction.interactive:
            self.seed_initial_waves()
        self.refresh()

    @property
    def stats(self):
        """Current simulation statistics."""
        return {
            "time": self.time,
            "active": len(self.active),
            "disintegrating": sum(1 for s in self.active if s.is_disintegrating),
            "history": len(self.registry),
            "paused": self.paused,
        }
