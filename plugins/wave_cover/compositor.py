"""
Field Compositor

Rasterizes the active waves into an RGBA pixel buffer. The canvas is split
into square blocks of side grid_resolution and the summed field is sampled
once at each block center, so cost scales with (width * height) / res^2
times the number of waves.

Per sample:
    total      = sum of pulse(...) * amplitude_factor over nearby waves
    normalized = clip(total / max_amplitude, -1, 1)  -> colormap RGB
    alpha      = min(1, |total| / max_amplitude)     -> block opacity

Blocks with a total of exactly zero are left fully transparent.
"""

import math
import numpy as np

from .colormaps import colors_at
from .pulse import pulse


def flatten_onto(rgba, background):
    """
    Composite a straight-alpha RGBA buffer over an opaque background color.

    Args:
        rgba: (H, W, 4) uint8 buffer
        background: (r, g, b) tuple

    Returns:
        (H, W, 3) float32 RGB in [0, 255]
    """
    alpha = rgba[..., 3:4].astype(np.float32) / 255.0
    bg = np.asarray(background, dtype=np.float32)
    return rgba[..., :3].astype(np.float32) * alpha + bg * (1.0 - alpha)


class FieldCompositor:
    """Sums wave pulses on a coarse grid and paints the blocks.

    Args:
        config: WaveConfig
        rng: numpy Generator used for stochastic corruption of
            disintegrating waves (seed it for reproducible frames)
    """

    def __init__(self, config, rng=None):
        self.config = config
        self.rng = rng if rng is not None else np.random.default_rng()
        self._buffer = None

    def sample_field(self, states, xs, ys):
        """
        Evaluate the summed field at arbitrary sample points.

        Only waves whose ring lies within sig * wave_removal_edge_factor of a
        sample are evaluated there. While a wave is in its disintegration
        transition each of its contributions is dropped at random with
        probability corruption_strength * transition_progress.

        Args:
            states: Active WaveState list
            xs, ys: Broadcastable arrays of sample coordinates

        Returns:
            float64 array of summed field values
        """
        xs = np.asarray(xs, dtype=np.float64)
        ys = np.asarray(ys, dtype=np.float64)
        total = np.zeros(np.broadcast(xs, ys).shape, dtype=np.float64)
        edge_factor = self.config.wave_dynamics.wave_removal_edge_factor
        strength = self.config.disintegration.corruption_strength

        for s in states:
            amplitude = s.amplitude_factor
            if amplitude <= 0:
                continue
            dx = xs - s.x
            dy = ys - s.y
            distance = np.sqrt(dx * dx + dy * dy)
            near = np.abs(distance - s.radius) < s.sig * edge_factor
            drop = strength * s.corruption
            if drop > 0:
                near &= self.rng.random(near.shape) >= drop
            if not near.any():
                continue
            total[near] += pulse(distance[near], s.fc, s.radius, s.sig) * amplitude
        return total

    def render(self, states, width, height):
        """
        Rasterize the active set.

        The returned buffer is reused across frames and fully overwritten on
        every call; copy it to keep a frame.

        Args:
            states: Active WaveState list
            width, height: Canvas size in pixels

        Returns:
            (height, width, 4) uint8 RGBA buffer
        """
        visuals = self.config.wave_visuals
        res = visuals.grid_resolution
        max_amp = visuals.max_amplitude if visuals.max_amplitude > 0 else 1.0

        cols = math.ceil(width / res)
        rows = math.ceil(height / res)
        centers_x = np.arange(cols) * res + res / 2
        centers_y = np.arange(rows) * res + res / 2
        X, Y = np.meshgrid(centers_x, centers_y)

        total = self.sample_field(states, X, Y)
        normalized = np.clip(total / max_amp, -1.0, 1.0)
        alpha = np.minimum(1.0, np.abs(total) / max_amp)

        blocks = np.empty((rows, cols, 4), dtype=np.uint8)
        blocks[..., :3] = colors_at(normalized, visuals.colormap)
        blocks[..., 3] = np.floor(alpha * 255).astype(np.uint8)
        blocks[total == 0] = 0

        if self._buffer is None or self._buffer.shape != (height, width, 4):
            self._buffer = np.empty((height, width, 4), dtype=np.uint8)
        self._buffer[:] = np.repeat(np.repeat(blocks, res, axis=0), res, axis=1)[:height, :width]
        return self._buffer
