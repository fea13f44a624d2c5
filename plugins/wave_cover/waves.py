"""
Wave Registry & Lifecycle

Waves are immutable point sources recorded in a creation history. Every
per-frame quantity (age, ring radius, disintegration progress) is derived
from (wave, time, canvas size, config) alone, so the active set at any time
can be recomputed from scratch. Scrubbing backwards in time needs nothing
more than calling active_set() with an earlier time.

Lifecycle of a wave, as seen at time t:

    not started     age < 0
    active          ring still on canvas and age < lifetime
    disintegrating  age > start_age (if enabled); field fades out over the
                    transition while noise blocks take over, then the noise
                    fades during the persistence window
    removed         everything else
"""

import logging
import math
import uuid
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Wave:
    """A point source of an expanding ring pulse. Never mutated."""
    id: str
    x: float
    y: float
    creation_time: float
    fc: float    # carrier frequency, cycles per pixel
    sig: float   # gaussian width, pixels


@dataclass(frozen=True)
class WaveState:
    """Derived state of one wave at one evaluation time."""
    wave: Wave
    age: float
    radius: float                      # tau: current ring radius
    is_disintegrating: bool = False
    time_since_trigger: float = 0.0
    transition_progress: float = 0.0   # 0..1 over the transition window
    in_transition: bool = False        # False once into the persistence window

    @property
    def x(self):
        return self.wave.x

    @property
    def y(self):
        return self.wave.y

    @property
    def fc(self):
        return self.wave.fc

    @property
    def sig(self):
        return self.wave.sig

    @property
    def amplitude_factor(self):
        """Scale applied to this wave's field contribution."""
        if not self.is_disintegrating:
            return 1.0
        if self.in_transition:
            return 1.0 - self.transition_progress
        return 0.0

    @property
    def corruption(self):
        """Strength of random sample dropping (0 outside the transition)."""
        return self.transition_progress if self.in_transition else 0.0


def farthest_corner_distance(x, y, width, height):
    """Largest distance from (x, y) to any of the four canvas corners."""
    return max(math.hypot(x - cx, y - cy)
               for cx, cy in ((0, 0), (width, 0), (0, height), (width, height)))


class WaveRegistry:
    """
    Owns the wave creation history and classifies waves per frame.

    History is unbounded; interaction.max_waves only caps how many waves are
    rendered at once (the newest win). prune_expired() may be used to drop
    waves that can never become active again when time only moves forward.
    """

    def __init__(self, config):
        self.config = config
        self.waves = []

    def __len__(self):
        return len(self.waves)

    def __iter__(self):
        return iter(self.waves)

    def create_wave(self, x, y, start_time):
        """Record a new wave. Propagation parameters are snapshotted now.

        Args:
            x, y: Origin in canvas pixels
            start_time: Simulation time (s) the wave starts propagating

        Returns:
            The new Wave
        """
        dyn = self.config.wave_dynamics
        wave = Wave(
            id=uuid.uuid4().hex,
            x=float(x),
            y=float(y),
            creation_time=float(start_time),
            fc=dyn.carrier_frequency / 100.0,
            sig=float(dyn.gaussian_width),
        )
        self.waves.append(wave)
        logger.debug(f"Wave {wave.id[:8]} at ({wave.x:.0f}, {wave.y:.0f}) starts t={wave.creation_time:.2f}s")
        return wave

    def clear(self):
        self.waves = []

    def _left_canvas(self, wave, radius, width, height):
        inner_edge = radius - wave.sig * self.config.wave_dynamics.wave_removal_edge_factor
        return inner_edge > farthest_corner_distance(wave.x, wave.y, width, height)

    def wave_state(self, wave, t, width, height):
        """
        Classify one wave at time t.

        Returns:
            WaveState if the wave is renderable at t, else None
        """
        dyn = self.config.wave_dynamics
        dis = self.config.disintegration

        age = t - wave.creation_time
        if age < 0:
            return None
        radius = age * dyn.wave_speed

        # Age alone decides; edge and lifetime removal only apply before the trigger
        if dis.enabled and age > dis.start_age_seconds:
            since = t - (wave.creation_time + dis.start_age_seconds)
            if since >= dis.effect_window_seconds:
                return None
            duration = dis.transition_duration_seconds
            progress = min(1.0, since / duration) if duration > 0 else 1.0
            return WaveState(
                wave=wave,
                age=age,
                radius=radius,
                is_disintegrating=True,
                time_since_trigger=since,
                transition_progress=max(0.0, progress),
                in_transition=since < duration,
            )

        if age >= dyn.wave_lifetime_seconds:
            return None
        if self._left_canvas(wave, radius, width, height):
            return None
        return WaveState(wave=wave, age=age, radius=radius)

    def active_set(self, t, width, height):
        """
        Recompute the renderable waves at time t.

        Pure in (history, t, canvas size, config): repeated calls with the
        same arguments return equal results.

        Returns:
            List of WaveState in creation-history order
        """
        states = []
        for wave in self.waves:
            state = self.wave_state(wave, t, width, height)
            if state is not None:
                states.append(state)

        cap = self.config.interaction.max_waves
        if cap and len(states) > cap:
            order = sorted(range(len(states)), key=lambda i: states[i].wave.creation_time)
            keep = set(order[-cap:])
            states = [s for i, s in enumerate(states) if i in keep]
        return states

    def max_active_age(self):
        """Age beyond which no wave can be active under the current config."""
        dis = self.config.disintegration
        if dis.enabled:
            # Every wave past start_age is disintegrating, whatever its lifetime
            return dis.start_age_seconds + dis.effect_window_seconds
        return self.config.wave_dynamics.wave_lifetime_seconds

    def prune_expired(self, t):
        """Drop waves that cannot be active at t or any later time.

        Returns:
            Number of waves removed from the history
        """
        limit = self.max_active_age()
        before = len(self.waves)
        self.waves = [w for w in self.waves if t - w.creation_time < limit]
        removed = before - len(self.waves)
        if removed:
            logger.debug(f"Pruned {removed} expired waves, {len(self.waves)} remain")
        return removed
