"""
Wave Cover Configuration

Grouped, immutable settings for the wave simulation. Each group is a frozen
dataclass with documented defaults; WaveConfig aggregates them.

A configuration document (JSON object) is merged group by group: a group
present in the document only overrides the fields it names, everything else
keeps its default. Keys may be camelCase, as in config.example.json
("waveVisuals": {"maxAmplitude": ...}), or snake_case.

Loading never fails. Missing files, malformed JSON and bad values are
logged as warnings and the defaults are kept.
"""

import dataclasses
import json
import logging
import re
from dataclasses import dataclass, field
from typing import Optional, Tuple

from .colormaps import cover, hex_to_rgb, parse_stops
from .presets import get_preset

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CanvasConfig:
    width: int = 900
    height: int = 900
    background_color: str = "#111111"

    @property
    def background_rgb(self) -> Tuple[int, int, int]:
        return hex_to_rgb(self.background_color)


@dataclass(frozen=True)
class VisualsConfig:
    max_amplitude: float = 1.0
    grid_resolution: int = 4          # block side in pixels, one field sample per block
    colormap: tuple = field(default_factory=cover)


@dataclass(frozen=True)
class DynamicsConfig:
    carrier_frequency: float = 5.0    # cycles per 100 px
    gaussian_width: float = 20.0      # pulse envelope sigma, px
    wave_speed: float = 50.0          # ring growth, px/s
    wave_lifetime_seconds: float = 25.0
    wave_removal_edge_factor: float = 4.0


@dataclass(frozen=True)
class InteractionConfig:
    interactive: bool = True          # click to create; otherwise auto-seeded
    max_waves: int = 10               # rendered at once; 0 = unlimited
    num_initial_waves: int = 2


@dataclass(frozen=True)
class DisintegrationConfig:
    enabled: bool = True
    start_age_seconds: float = 8.0
    transition_duration_seconds: float = 5.0
    noise_persistence_duration_seconds: float = 3.0
    noise_block_size_start: int = 5
    noise_block_size_end: int = 15
    num_noise_blocks_per_wave: int = 250
    noise_max_block_alpha: float = 0.6
    noise_spread_factor: float = 2.5
    corruption_strength: float = 0.75  # 0 = smooth fade, no dropped samples

    @property
    def effect_window_seconds(self) -> float:
        """Seconds from trigger until a disintegrating wave is removed."""
        return self.transition_duration_seconds + self.noise_persistence_duration_seconds


@dataclass(frozen=True)
class DebugConfig:
    enabled: bool = False
    start_paused: bool = False
    time_slider_max: float = 60.0


@dataclass(frozen=True)
class WaveConfig:
    canvas: CanvasConfig = field(default_factory=CanvasConfig)
    wave_visuals: VisualsConfig = field(default_factory=VisualsConfig)
    wave_dynamics: DynamicsConfig = field(default_factory=DynamicsConfig)
    interaction: InteractionConfig = field(default_factory=InteractionConfig)
    disintegration: DisintegrationConfig = field(default_factory=DisintegrationConfig)
    debug_mode: DebugConfig = field(default_factory=DebugConfig)


GROUPS = ("canvas", "wave_visuals", "wave_dynamics", "interaction",
          "disintegration", "debug_mode")

# Top-level document keys that belong to the canvas group
TOP_LEVEL_ALIASES = {
    "canvas_width": ("canvas", "width"),
    "canvas_height": ("canvas", "height"),
    "background_color": ("canvas", "background_color"),
}

MINIMUMS = {
    ("canvas", "width"): 1,
    ("canvas", "height"): 1,
    ("wave_visuals", "grid_resolution"): 1,
    ("interaction", "max_waves"): 0,
    ("interaction", "num_initial_waves"): 0,
    ("disintegration", "noise_block_size_start"): 1,
    ("disintegration", "noise_block_size_end"): 1,
    ("disintegration", "num_noise_blocks_per_wave"): 0,
}

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def _snake_case(key):
    return _CAMEL_BOUNDARY.sub("_", key).lower()


def _coerce(name, value, default):
    """Convert a document value to the type of the field default."""
    if name == "colormap":
        return parse_stops(value)
    if name == "background_color":
        hex_to_rgb(value)
        return str(value)
    if isinstance(default, bool):
        if not isinstance(value, bool):
            raise TypeError(f"expected true/false, got {value!r}")
        return value
    if isinstance(value, bool):
        raise TypeError(f"expected a number, got {value!r}")
    if isinstance(default, int):
        return int(value)
    if isinstance(default, float):
        return float(value)
    return value


def config_from_dict(document, base=None):
    """
    Merge a configuration document over a base config.

    Args:
        document: Parsed JSON object
        base: WaveConfig to merge over (defaults to WaveConfig())

    Returns:
        New WaveConfig
    """
    base = base or WaveConfig()
    if not isinstance(document, dict):
        logger.warning(f"Configuration must be a JSON object, got {type(document).__name__}; using defaults")
        return base

    changes = {group: {} for group in GROUPS}

    def apply(group, name, value):
        current = getattr(base, group)
        if name not in {f.name for f in dataclasses.fields(current)}:
            logger.warning(f"Unknown config field '{group}.{name}' ignored")
            return
        try:
            value = _coerce(name, value, getattr(current, name))
        except (TypeError, ValueError, KeyError) as e:
            logger.warning(f"Invalid value for '{group}.{name}' ({e}); keeping {getattr(current, name)!r}")
            return
        minimum = MINIMUMS.get((group, name))
        if minimum is not None and value < minimum:
            logger.warning(f"'{group}.{name}' = {value} below minimum {minimum}; clamped")
            value = minimum
        changes[group][name] = value

    for key, value in document.items():
        skey = _snake_case(key)
        if skey in GROUPS:
            if not isinstance(value, dict):
                logger.warning(f"Config group '{key}' must be an object; ignored")
                continue
            for fkey, fvalue in value.items():
                apply(skey, _snake_case(fkey), fvalue)
        elif skey in TOP_LEVEL_ALIASES:
            apply(*TOP_LEVEL_ALIASES[skey], value)
        else:
            logger.warning(f"Unknown config key '{key}' ignored")

    groups = {
        group: dataclasses.replace(getattr(base, group), **fields)
        for group, fields in changes.items() if fields
    }
    return dataclasses.replace(base, **groups)


def load_config(path: Optional[str] = None, preset: Optional[str] = None) -> WaveConfig:
    """
    Build the session configuration: defaults, then a named preset, then a
    JSON file. Every failure degrades to the previous layer with a warning.

    Args:
        path: Optional path to a JSON configuration document
        preset: Optional preset key (see presets.py)
    """
    config = WaveConfig()

    if preset:
        p = get_preset(preset)
        if p is None:
            logger.warning(f"Unknown preset '{preset}'; using defaults")
        else:
            config = config_from_dict(p["config"], config)

    if path:
        try:
            with open(path, "r", encoding="utf-8") as f:
                document = json.load(f)
        except FileNotFoundError:
            logger.warning(f"Config file '{path}' not found; using default configuration")
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning(f"Could not parse config file '{path}': {e}; using default configuration")
        except OSError as e:
            logger.warning(f"Could not read config file '{path}': {e}; using default configuration")
        else:
            config = config_from_dict(document, config)
            logger.info(f"Configuration loaded from {path}")

    logger.debug(f"Active configuration: {config}")
    return config
