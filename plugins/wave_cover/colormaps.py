"""
Diverging Colormaps for Wave Field Visualization

Maps signed field values [-1, 1] to RGB colors. Each colormap is an ordered
tuple of (position, (r, g, b)) stops with positions in [0, 1]; position 0
colors the most negative values, 0.5 sits at zero, 1 the most positive.

Stops are never re-sorted here. Positions must already be non-decreasing
(see validate_stops).
"""

import math
import numpy as np


def color_at(value, stops):
    """
    Interpolate a single color from a colormap.

    Args:
        value: Field value, expected in [-1, 1] (callers clamp first)
        stops: Sequence of (position, (r, g, b)) sorted by position

    Returns:
        (r, g, b) tuple of ints in [0, 255]
    """
    pos = (value + 1) / 2

    if pos <= stops[0][0]:
        return tuple(stops[0][1])
    if pos >= stops[-1][0]:
        return tuple(stops[-1][1])

    for j in range(len(stops) - 1):
        p1, c1 = stops[j]
        p2, c2 = stops[j + 1]
        if p1 <= pos <= p2:
            span = p2 - p1
            if span == 0:
                return tuple(c1)
            t = (pos - p1) / span
            if not math.isfinite(t):
                return tuple(c1)
            # Round half up on every channel
            return tuple(int(math.floor(c1[c] * (1 - t) + c2[c] * t + 0.5)) for c in range(3))
    return tuple(stops[-1][1])


def colors_at(values, stops):
    """
    Vectorized color_at over an array of field values.

    Picks the same bracketing stop pair as the scalar version (the first
    pair whose upper position reaches the value), so results agree
    element-wise.

    Args:
        values: Array of field values in [-1, 1]
        stops: Sequence of (position, (r, g, b)) sorted by position

    Returns:
        (..., 3) uint8 RGB array
    """
    positions = np.array([s[0] for s in stops], dtype=np.float64)
    colors = np.array([s[1] for s in stops], dtype=np.float64)
    pos = (np.asarray(values, dtype=np.float64) + 1) / 2

    idx = np.searchsorted(positions, pos, side="left") - 1
    idx = np.clip(idx, 0, len(stops) - 2)
    p1 = positions[idx]
    span = positions[idx + 1] - p1
    safe_span = np.where(span > 0, span, 1.0)
    t = np.where(span > 0, (pos - p1) / safe_span, 0.0)[..., None]

    rgb = np.floor(colors[idx] * (1 - t) + colors[idx + 1] * t + 0.5)
    rgb = np.where((pos <= positions[0])[..., None], colors[0], rgb)
    rgb = np.where((pos >= positions[-1])[..., None], colors[-1], rgb)
    return rgb.astype(np.uint8)


def apply_colormap(field, stops):
    """
    Apply a colormap to a 2D signed field.

    Args:
        field: 2D numpy array, values clamped to [-1, 1] here
        stops: Colormap stops

    Returns:
        (H, W, 3) uint8 RGB image
    """
    return colors_at(np.clip(field, -1.0, 1.0), stops)


def validate_stops(stops):
    """Raise ValueError unless stops form a usable colormap."""
    if len(stops) < 2:
        raise ValueError(f"colormap needs at least 2 stops, got {len(stops)}")
    prev = -math.inf
    for pos, color in stops:
        if not 0.0 <= pos <= 1.0:
            raise ValueError(f"stop position {pos} outside [0, 1]")
        if pos < prev:
            raise ValueError(f"stop positions must be non-decreasing ({prev} > {pos})")
        if len(color) != 3 or any(not 0 <= c <= 255 for c in color):
            raise ValueError(f"stop color {color} is not an RGB triple in [0, 255]")
        prev = pos


def parse_stops(document):
    """
    Build colormap stops from a configuration value.

    Accepts a registered colormap name, a list of {"pos": p, "color": [r, g, b]}
    objects (the config.json shape) or a list of [p, [r, g, b]] pairs.

    Raises:
        ValueError / KeyError / TypeError on malformed input
    """
    if isinstance(document, str):
        return get_colormap(document)

    stops = []
    for entry in document:
        if isinstance(entry, dict):
            pos, color = entry["pos"], entry["color"]
        else:
            pos, color = entry
        stops.append((float(pos), tuple(int(c) for c in color)))
    stops = tuple(stops)
    validate_stops(stops)
    return stops


def hex_to_rgb(color):
    """Convert '#rrggbb' (or '#rgb') to an (r, g, b) tuple."""
    digits = color.lstrip("#")
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    if len(digits) != 6:
        raise ValueError(f"not a hex color: {color!r}")
    return tuple(int(digits[i:i + 2], 16) for i in (0, 2, 4))


# --- Colormap Definitions ---

def cover():
    """Blue troughs, black zero line, orange-red crests."""
    return (
        (0.00, (0, 0, 255)),
        (0.25, (128, 0, 128)),
        (0.50, (0, 0, 0)),
        (0.75, (255, 128, 0)),
        (1.00, (255, 0, 0)),
    )


def two_tone():
    """Sign-only coloring: one color per side, intensity carried by alpha.
    The duplicated 0.5 stop makes the jump hard instead of blended."""
    return (
        (0.00, (60, 120, 255)),
        (0.50, (60, 120, 255)),
        (0.50, (255, 80, 60)),
        (1.00, (255, 80, 60)),
    )


def fire():
    """Smoky blue-grey troughs, black zero, fire crests."""
    return (
        (0.00, (120, 140, 170)),
        (0.30, (30, 35, 50)),
        (0.50, (0, 0, 0)),
        (0.70, (180, 30, 0)),
        (0.85, (240, 120, 10)),
        (1.00, (255, 230, 120)),
    )


def ocean():
    """Deep navy troughs to cyan-white crests."""
    return (
        (0.00, (0, 10, 60)),
        (0.30, (5, 40, 110)),
        (0.50, (0, 0, 0)),
        (0.70, (10, 120, 170)),
        (1.00, (200, 250, 255)),
    )


def plasma():
    """Violet troughs, warm yellow crests."""
    return (
        (0.00, (80, 10, 130)),
        (0.25, (40, 5, 70)),
        (0.50, (0, 0, 0)),
        (0.75, (230, 90, 50)),
        (1.00, (245, 240, 80)),
    )


# Registry of all colormaps
COLORMAPS = {
    "cover": cover,
    "two_tone": two_tone,
    "fire": fire,
    "ocean": ocean,
    "plasma": plasma,
}

COLORMAP_ORDER = list(COLORMAPS.keys())


def get_colormap(name):
    """Get colormap stops by name."""
    return COLORMAPS[name]()
