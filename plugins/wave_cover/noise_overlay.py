"""
Noise Overlay for Disintegrating Waves

While a wave disintegrates its smooth field fades out and a band of colored
noise blocks appears around its ring instead. Blocks are drawn on top of the
rasterized field with alpha blending.

Envelope model (overall noise opacity per wave):
    transition   rises linearly with transition_progress, 0 -> 1
    persistence  falls linearly back to 0 over the persistence window
    afterwards   0, nothing drawn (the registry removes the wave)

Block size grows linearly from noise_block_size_start to noise_block_size_end
over the transition and stays at the end size while the noise persists.
"""

import math
import numpy as np

from .colormaps import colors_at


def noise_envelope(state, disintegration):
    """Overall noise opacity factor in [0, 1] for one wave state."""
    if not state.is_disintegrating:
        return 0.0
    if state.in_transition:
        return state.transition_progress
    persistence = disintegration.noise_persistence_duration_seconds
    if persistence <= 0:
        return 0.0
    into = state.time_since_trigger - disintegration.transition_duration_seconds
    return max(0.0, 1.0 - into / persistence)


def noise_block_size(progress, disintegration):
    """Block side in pixels for a given transition progress (always >= 1)."""
    start = disintegration.noise_block_size_start
    end = disintegration.noise_block_size_end
    return max(1, int(math.floor(start + (end - start) * progress)))


class NoiseOverlay:
    """Scatters translucent noise blocks around disintegrating rings.

    Args:
        config: WaveConfig
        rng: numpy Generator for block placement, color and brightness
    """

    def __init__(self, config, rng=None):
        self.config = config
        self.rng = rng if rng is not None else np.random.default_rng()

    def draw(self, frame, states):
        """
        Blend noise blocks for every disintegrating wave into frame.

        Args:
            frame: (H, W, 3) float32 RGB frame, modified in place
            states: Active WaveState list

        Returns:
            Number of blocks drawn
        """
        dis = self.config.disintegration
        if not dis.enabled:
            return 0

        height, width = frame.shape[:2]
        drawn = 0
        for state in states:
            if not state.is_disintegrating:
                continue
            envelope = noise_envelope(state, dis)
            if envelope <= 0:
                continue
            drawn += self._draw_wave(frame, state, envelope, width, height)
        return drawn

    def _draw_wave(self, frame, state, envelope, width, height):
        dis = self.config.disintegration
        n = dis.num_noise_blocks_per_wave
        if n <= 0:
            return 0

        size = noise_block_size(state.transition_progress, dis)
        half_band = state.sig * dis.noise_spread_factor / 2

        angle = self.rng.random(n) * 2 * np.pi
        dist = state.radius + (self.rng.random(n) - 0.5) * 2 * half_band
        shade = self.rng.random(n)  # picks the color and the brightness jitter

        # Snap to the block grid
        bx = np.floor((state.x + np.cos(angle) * dist) / size) * size
        by = np.floor((state.y + np.sin(angle) * dist) / size) * size
        inside = (bx >= 0) & (bx + size <= width) & (by >= 0) & (by + size <= height)

        colors = colors_at(shade - 0.5, self.config.wave_visuals.colormap).astype(np.float32)
        if half_band > 0:
            radial = np.exp(-0.5 * ((dist - state.radius) / half_band) ** 2)
        else:
            radial = np.ones(n)
        alpha = np.minimum(1.0, envelope * radial * dis.noise_max_block_alpha * (0.5 + shade * 0.5))

        indices = np.flatnonzero(inside & (alpha > 0))
        for i in indices:
            x0, y0 = int(bx[i]), int(by[i])
            region = frame[y0:y0 + size, x0:x0 + size]
            a = np.float32(alpha[i])
            region *= 1.0 - a
            region += colors[i] * a
        return len(indices)
