"""
Wave Cover - Entry Point

Usage:
    python -m wave_cover [preset] [--config PATH] [--window WxH] [--seed N]
                         [--debug] [--snap SECONDS] [--out PATH] [--verbose]

Examples:
    python -m wave_cover
    python -m wave_cover cover --window 1280x720
    python -m wave_cover glitch --config config.json
    python -m wave_cover cover --snap 10.5 --seed 3 --out cover.png

Presets:
    interactive  - click to start waves (default)
    cover        - self-seeding waves
    ripple       - two-tone rings, no disintegration
    glitch       - early, heavy disintegration
    debug        - paused timeline with scrubber and export

Use --list to see all available presets.
"""

import dataclasses
import logging
import sys

from .config import load_config
from .logging_config import setup_logging
from .presets import PRESET_ORDER, list_presets
from .simulator import WaveSimulator


def snap(config, at_time, seed=None, out=None):
    """Headless mode: evaluate the simulation at one time, save PNG, exit."""
    sim = WaveSimulator(config, seed=seed)
    if config.interaction.interactive:
        # Nobody can click in headless mode
        sim.seed_initial_waves()
    sim.set_time(at_time)
    path = sim.export_frame(out)
    stats = sim.stats
    print(f"  t={at_time:.2f}s: {stats['active']} active waves, "
          f"{stats['disintegrating']} disintegrating")
    print(f"  saved: {path}")
    return path


def main(argv=None):
    preset = None
    config_path = None
    window = None
    seed = None
    debug = False
    snap_time = None
    out = None
    level = logging.INFO

    args = sys.argv[1:] if argv is None else argv
    i = 0
    while i < len(args):
        arg = args[i]
        if arg == "--config" and i + 1 < len(args):
            config_path = args[i + 1]
            i += 2
        elif arg == "--window" and i + 1 < len(args):
            parts = args[i + 1].split("x")
            window = (int(parts[0]), int(parts[1]))
            i += 2
        elif arg == "--seed" and i + 1 < len(args):
            seed = int(args[i + 1])
            i += 2
        elif arg == "--snap" and i + 1 < len(args):
            snap_time = float(args[i + 1])
            i += 2
        elif arg == "--out" and i + 1 < len(args):
            out = args[i + 1]
            i += 2
        elif arg == "--debug":
            debug = True
            i += 1
        elif arg == "--verbose":
            level = logging.DEBUG
            i += 1
        elif arg == "--list":
            print("\nAvailable presets:\n")
            for key, name, desc in list_presets():
                print(f"    {key:14s} {name:16s} {desc}")
            print()
            return
        elif arg in ("--help", "-h"):
            print(__doc__)
            return
        elif arg in PRESET_ORDER:
            preset = arg
            i += 1
        else:
            print(f"Unknown argument: {arg}")
            print("Use --list to see available presets")
            return

    setup_logging(level)
    config = load_config(config_path, preset)
    if window:
        config = dataclasses.replace(
            config, canvas=dataclasses.replace(config.canvas, width=window[0], height=window[1]))
    if debug:
        config = dataclasses.replace(
            config, debug_mode=dataclasses.replace(config.debug_mode, enabled=True))

    if snap_time is not None:
        print(f"Headless snap: {preset or 'defaults'} @ "
              f"{config.canvas.width}x{config.canvas.height}, t={snap_time:.2f}s")
        snap(config, snap_time, seed=seed, out=out)
        return

    # pygame is only needed for the interactive window
    from .viewer import Viewer

    print("Starting Wave Cover")
    print(f"  Preset: {preset or 'defaults'}")
    print(f"  Window: {config.canvas.width}x{config.canvas.height}")
    print(f"  Mode: {'interactive' if config.interaction.interactive else 'auto-seeded'}"
          f"{' + debug timeline' if config.debug_mode.enabled else ''}")
    print()

    Viewer(config, seed=seed).run()


if __name__ == "__main__":
    main()
