"""
Pulse Function - Gaussian-windowed sinusoid

One wave's scalar contribution at a radial distance from its origin:

    envelope = exp(-0.5 * ((d - tau) / sig)^2)
    sinusoid = sin(2 * pi * fc * (d - tau))
    pulse    = envelope * sinusoid

tau is the current ring radius, so the envelope peaks on the ring and the
sinusoid has a null there. Works on plain floats and numpy arrays alike.
"""

import numpy as np


def gaussian_envelope(distance, tau, sig):
    """Gaussian bell centered on the ring radius. Zero when sig == 0."""
    if sig == 0:
        return np.zeros_like(distance, dtype=np.float64) if np.ndim(distance) else 0.0
    return np.exp(-0.5 * ((distance - tau) / sig) ** 2)


def pulse(distance, fc, tau, sig):
    """Evaluate a single wave pulse.

    Args:
        distance: Radial distance(s) from the wave origin (float or array)
        fc: Carrier frequency in cycles per pixel
        tau: Current ring radius in pixels
        sig: Gaussian width in pixels

    Returns:
        Field value(s) in [-1, 1]. A degenerate wave (sig == 0) contributes 0.
    """
    if sig == 0:
        return np.zeros_like(distance, dtype=np.float64) if np.ndim(distance) else 0.0
    offset = distance - tau
    envelope = np.exp(-0.5 * (offset / sig) ** 2)
    sinusoid = np.sin(2.0 * np.pi * fc * offset)
    return envelope * sinusoid
