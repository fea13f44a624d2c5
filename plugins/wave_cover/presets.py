"""
Wave Cover Presets

Each preset is a partial configuration document (same shape as config.json)
merged over the defaults before any user config file. Groups not mentioned
keep their defaults.
"""

PRESETS = {
    "interactive": {
        "name": "Interactive",
        "description": "Click anywhere to start a wave (defaults)",
        "config": {},
    },
    "cover": {
        "name": "Cover",
        "description": "Self-seeding cover art, waves start on their own",
        "config": {
            "interaction": {"interactive": False, "num_initial_waves": 3},
        },
    },
    "ripple": {
        "name": "Ripple",
        "description": "Two-tone rings, no disintegration",
        "config": {
            "wave_visuals": {"colormap": "two_tone", "grid_resolution": 3},
            "wave_dynamics": {"wave_lifetime_seconds": 15, "carrier_frequency": 4},
            "disintegration": {"enabled": False},
        },
    },
    "glitch": {
        "name": "Glitch",
        "description": "Early, heavy disintegration with large noise blocks",
        "config": {
            "wave_visuals": {"colormap": "plasma"},
            "disintegration": {
                "start_age_seconds": 4,
                "transition_duration_seconds": 3,
                "noise_persistence_duration_seconds": 4,
                "noise_block_size_start": 4,
                "noise_block_size_end": 20,
                "num_noise_blocks_per_wave": 400,
                "corruption_strength": 1.0,
            },
        },
    },
    "debug": {
        "name": "Debug Timeline",
        "description": "Starts paused with the time scrubber and export controls",
        "config": {
            "interaction": {"interactive": False},
            "debug_mode": {"enabled": True, "start_paused": True},
        },
    },
}

PRESET_ORDER = ["interactive", "cover", "ripple", "glitch", "debug"]


def get_preset(name):
    """Get a preset by name. Returns None if not found."""
    return PRESETS.get(name)


def list_presets():
    """Return list of (key, name, description) for presets."""
    return [(k, PRESETS[k]["name"], PRESETS[k]["description"])
            for k in PRESET_ORDER if k in PRESETS]
