#!/usr/bin/env python3
"""
Space Sim application entry point.

What this module does
- Parses the command line and sets up logging.
- Loads a scene (spacecore/scenes/<name>.json or a path) and builds the World.
- Takes over the terminal (alternate screen, no echo, hidden cursor), runs the tick loop
  and restores the terminal on exit, including Ctrl-C.

Units and conventions
- SI units throughout: meters [m], kilograms [kg], seconds [s].
- Colours are xterm-256 palette indices.

Running
1) Install: `pip install -e .`
2) Run: `python space_sim.py earth` (or `space-sim earth`), `--list` shows the scenes.
"""

import argparse
import logging
import os
import sys

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

from spacecore.constants import DEFAULT_DT, FRAMES_PER_SECOND, G, LOGGER_NAME, SUBSTEPS_PER_FRAME
from spacecore.data_models import World
from spacecore.logger_setup import setup_logging
from spacecore.physics import NBodyPhysics
from spacecore.renderer import SpaceRenderer
from spacecore.scene_loader import SceneError, list_scenes, load_scene
from spacecore.simulation import SpaceSimulation
from spacecore.terminal import ANSITerminal

logger = logging.getLogger(LOGGER_NAME)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="space-sim", description="Gravitational N-body simulator drawn in the terminal.")
    p.add_argument("scene", nargs="?", help="scene name from spacecore/scenes/ or path to a scene .json")
    p.add_argument("--list", action="store_true", help="list the available scenes and exit")
    p.add_argument("--substeps", type=int, default=SUBSTEPS_PER_FRAME, help="integrator steps per frame")
    p.add_argument("--dt", type=float, default=DEFAULT_DT, help="seconds of simulation time per step")
    p.add_argument("--fps", type=int, default=FRAMES_PER_SECOND, help="frames per second")
    p.add_argument("--frames", type=int, default=None, help="stop after this many frames")
    p.add_argument("--gravity", type=float, default=G, help="gravitational constant")
    p.add_argument("--incremental", action="store_true",
                   help="erase stale cells instead of clearing the screen every frame")
    p.add_argument("--log-level", default="INFO", help="log level for the run log file")
    p.add_argument("--log-dir", default="runs", help="directory for per-run log files")
    return p


def _print_scenes(stream) -> None:
    print("Found scenes: " + ", ".join(list_scenes()), file=stream)


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.list:
        _print_scenes(sys.stdout)
        return 0
    if not args.scene:
        parser.print_usage(sys.stderr)
        _print_scenes(sys.stderr)
        return 1
    if args.substeps < 0 or args.fps <= 0:
        parser.error("--substeps must be >= 0 and --fps > 0")

    setup_logging(args.log_level, args.log_dir)

    try:
        bodies, settings = load_scene(args.scene)
    except SceneError as e:
        logger.error("Cannot load scene %r: %s", args.scene, e)
        _print_scenes(sys.stderr)
        return 1

    world = World.from_bodies(bodies, g=args.gravity, trace_life=settings.trace_life)
    logger.info("World extent %.4e m, G=%g", world.extent, world.g)

    term = ANSITerminal()
    try:
        renderer = SpaceRenderer.for_world(term, world)
    except ValueError as e:
        logger.error("Cannot draw in a %dx%d terminal: %s", *term.size(), e)
        return 1
    sim = SpaceSimulation(world, NBodyPhysics(args.dt), renderer,
                          substeps=args.substeps, incremental=args.incremental)

    with term.raw_mode():
        term.alternate()
        term.clear()
        term.cursor(False)
        term.flush()
        try:
            sim.run(fps=args.fps, max_frames=args.frames)
        except KeyboardInterrupt:
            logger.info("Interrupted after %d frames", sim.frame)
        finally:
            term.soft_reset()
            term.flush()

    logger.info("Application shutting down.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
