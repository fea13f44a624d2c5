#!/usr/bin/env python3
"""
Tests for the disintegration noise overlay.
"""

import dataclasses
import numpy as np
from wave_cover.config import DisintegrationConfig, WaveConfig
from wave_cover.noise_overlay import NoiseOverlay, noise_block_size, noise_envelope
from wave_cover.waves import Wave, WaveState


WAVE = Wave("w", 100.0, 100.0, 0.0, 0.05, 20.0)


def disintegrating(progress, since=None, radius=50.0):
    dis = DisintegrationConfig()
    if since is None:
        since = progress * dis.transition_duration_seconds
    return WaveState(WAVE, age=dis.start_age_seconds + since, radius=radius,
                     is_disintegrating=True, time_since_trigger=since,
                     transition_progress=progress,
                     in_transition=since < dis.transition_duration_seconds)


def make_config(**fields):
    base = WaveConfig()
    return dataclasses.replace(base, disintegration=dataclasses.replace(base.disintegration, **fields))


def test_envelope_rises_then_fades():
    dis = DisintegrationConfig()
    assert noise_envelope(WaveState(WAVE, age=1.0, radius=50.0), dis) == 0.0
    assert noise_envelope(disintegrating(0.0), dis) == 0.0
    assert noise_envelope(disintegrating(0.5), dis) == 0.5

    # Persistence window: 3s after a 5s transition
    assert noise_envelope(disintegrating(1.0, since=5.0), dis) == 1.0
    assert noise_envelope(disintegrating(1.0, since=6.5), dis) == 0.5
    assert noise_envelope(disintegrating(1.0, since=8.0), dis) == 0.0


def test_block_size_grows_with_progress():
    dis = DisintegrationConfig()
    assert noise_block_size(0.0, dis) == 5
    assert noise_block_size(0.5, dis) == 10
    assert noise_block_size(1.0, dis) == 15

    tiny = DisintegrationConfig(noise_block_size_start=0, noise_block_size_end=0)
    assert noise_block_size(0.3, tiny) == 1


def test_nothing_drawn_without_disintegrating_waves():
    overlay = NoiseOverlay(WaveConfig(), np.random.default_rng(0))
    frame = np.full((200, 200, 3), 100.0, dtype=np.float32)
    healthy = WaveState(WAVE, age=1.0, radius=50.0)

    assert overlay.draw(frame, []) == 0
    assert overlay.draw(frame, [healthy]) == 0
    assert np.all(frame == 100.0)


def test_blocks_stay_in_band_around_ring():
    overlay = NoiseOverlay(WaveConfig(), np.random.default_rng(4))
    frame = np.full((200, 200, 3), 100.0, dtype=np.float32)

    drawn = overlay.draw(frame, [disintegrating(0.5)])
    assert drawn > 0
    assert np.any(frame != 100.0)

    # Band is radius 50 +/- 25 px; blocks of 10 px can't reach the middle
    assert np.all(frame[95:105, 95:105] == 100.0)
    assert np.all(frame >= 0.0) and np.all(frame <= 255.0)
    print(f"✓ {drawn} noise blocks drawn inside the band")


def test_out_of_bounds_blocks_skipped():
    overlay = NoiseOverlay(WaveConfig(), np.random.default_rng(2))
    corner = WaveState(Wave("c", 0.0, 0.0, 0.0, 0.05, 20.0), age=10.5, radius=50.0,
                       is_disintegrating=True, time_since_trigger=2.5,
                       transition_progress=0.5, in_transition=True)

    frame = np.zeros((200, 200, 3), dtype=np.float32)
    drawn = overlay.draw(frame, [corner])
    assert 0 < drawn < DisintegrationConfig().num_noise_blocks_per_wave

    small = np.zeros((5, 5, 3), dtype=np.float32)
    assert overlay.draw(small, [corner]) == 0


def test_seeded_overlay_is_reproducible():
    states = [disintegrating(0.3), disintegrating(1.0, since=6.0)]
    frames = []
    for _ in range(2):
        frame = np.full((200, 200, 3), 17.0, dtype=np.float32)
        NoiseOverlay(WaveConfig(), np.random.default_rng(99)).draw(frame, states)
        frames.append(frame)
    assert np.array_equal(frames[0], frames[1])


def test_disabled_or_empty_configs_draw_nothing():
    frame = np.zeros((200, 200, 3), dtype=np.float32)
    state = disintegrating(0.5)

    off = NoiseOverlay(make_config(enabled=False), np.random.default_rng(0))
    assert off.draw(frame, [state]) == 0

    none = NoiseOverlay(make_config(num_noise_blocks_per_wave=0), np.random.default_rng(0))
    assert none.draw(frame, [state]) == 0

    invisible = NoiseOverlay(make_config(noise_max_block_alpha=0.0), np.random.default_rng(0))
    assert invisible.draw(frame, [state]) == 0
    assert not frame.any()


if __name__ == "__main__":
    test_envelope_rises_then_fades()
    test_block_size_grows_with_progress()
    test_nothing_drawn_without_disintegrating_waves()
    test_blocks_stay_in_band_around_ring()
    test_out_of_bounds_blocks_skipped()
    test_seeded_overlay_is_reproducible()
    test_disabled_or_empty_configs_draw_nothing()
    print("\n✓ All noise overlay tests passed!\n")
