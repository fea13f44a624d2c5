#!/usr/bin/env python3
"""
Tests for colormap interpolation.

Verifies:
1. Values beyond the ends clamp to the first/last stop
2. Halfway between two stops is the per-channel average, rounded half up
3. Duplicate stop positions give a hard edge
4. The vectorized path agrees with the scalar one
5. Config parsing and validation
"""

import numpy as np
import pytest
from wave_cover.colormaps import (
    COLORMAPS, apply_colormap, color_at, colors_at, get_colormap,
    hex_to_rgb, parse_stops, two_tone, validate_stops,
)


def test_endpoints_clamp():
    for name in COLORMAPS:
        stops = get_colormap(name)
        first, last = tuple(stops[0][1]), tuple(stops[-1][1])
        assert color_at(-1.0, stops) == first, name
        assert color_at(-5.0, stops) == first, name
        assert color_at(1.0, stops) == last, name
        assert color_at(3.0, stops) == last, name


def test_midpoint_is_channel_average():
    stops = ((0.0, (0, 0, 0)), (1.0, (200, 100, 50)))
    assert color_at(0.0, stops) == (100, 50, 25)

    # 127.5 rounds up
    stops = ((0.0, (0, 0, 0)), (1.0, (255, 255, 255)))
    assert color_at(0.0, stops) == (128, 128, 128)


def test_duplicate_stops_make_hard_edge():
    stops = two_tone()
    negative, positive = stops[0][1], stops[-1][1]
    assert color_at(-0.001, stops) == negative
    assert color_at(0.001, stops) == positive
    # Exactly on the shared position the first bracketing pair wins
    assert color_at(0.0, stops) == negative


def test_vectorized_matches_scalar():
    values = np.concatenate([np.linspace(-1.0, 1.0, 401), [-0.5, 0.0, 0.5, 0.4, -0.7]])
    for name in COLORMAPS:
        stops = get_colormap(name)
        rgb = colors_at(values, stops)
        assert rgb.shape == (len(values), 3)
        assert rgb.dtype == np.uint8
        for v, got in zip(values, rgb):
            assert tuple(int(c) for c in got) == color_at(float(v), stops), (name, v)
    print("✓ colors_at agrees with color_at on every registered colormap")


def test_apply_colormap_clamps_field():
    stops = get_colormap("cover")
    field = np.array([[-4.0, 0.0], [1.0, 9.0]])
    img = apply_colormap(field, stops)
    assert img.shape == (2, 2, 3)
    assert tuple(img[0, 0]) == stops[0][1]
    assert tuple(img[0, 1]) == (0, 0, 0)
    assert tuple(img[1, 1]) == stops[-1][1]


def test_validate_stops_rejects_bad_maps():
    with pytest.raises(ValueError):
        validate_stops(((0.0, (0, 0, 0)),))
    with pytest.raises(ValueError):
        validate_stops(((0.6, (0, 0, 0)), (0.4, (255, 255, 255))))
    with pytest.raises(ValueError):
        validate_stops(((0.0, (0, 0, 0)), (1.5, (255, 255, 255))))
    with pytest.raises(ValueError):
        validate_stops(((0.0, (0, 0, 300)), (1.0, (255, 255, 255))))
    for name in COLORMAPS:
        validate_stops(get_colormap(name))


def test_parse_stops_shapes():
    from_dicts = parse_stops([
        {"pos": 0, "color": [0, 0, 255]},
        {"pos": 1, "color": [255, 0, 0]},
    ])
    assert from_dicts == ((0.0, (0, 0, 255)), (1.0, (255, 0, 0)))

    from_pairs = parse_stops([[0, [0, 0, 255]], [1, [255, 0, 0]]])
    assert from_pairs == from_dicts

    assert parse_stops("fire") == get_colormap("fire")

    with pytest.raises(KeyError):
        parse_stops("no_such_map")
    with pytest.raises(ValueError):
        parse_stops([{"pos": 1, "color": [0, 0, 0]}, {"pos": 0, "color": [0, 0, 0]}])


def test_hex_to_rgb():
    assert hex_to_rgb("#111111") == (17, 17, 17)
    assert hex_to_rgb("#ff8000") == (255, 128, 0)
    assert hex_to_rgb("#fff") == (255, 255, 255)
    with pytest.raises(ValueError):
        hex_to_rgb("#12345")
    with pytest.raises(ValueError):
        hex_to_rgb("#zzzzzz")
