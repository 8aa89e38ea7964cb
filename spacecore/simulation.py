#!/usr/bin/env python3
"""
Simulation controller: the fixed-period tick loop.

Each tick captures the current time, runs a fixed number of integrator sub-steps and
renders one frame. The number of sub-steps does not depend on the elapsed wall time,
so the simulation speed is set by the tick rate and the sub-step count. When a tick
takes longer than its period the loop simply falls behind real time.

Frame pacing uses pygame's Clock, which sleeps just long enough to hold the
requested frame rate.
"""
import logging
import time
from typing import Callable, Optional

import pygame

from .constants import DIAGNOSTICS_EVERY, FRAMES_PER_SECOND, LOGGER_NAME, SUBSTEPS_PER_FRAME
from .data_models import Viewport, World
from .physics import NBodyPhysics, centre_of_mass, total_momentum
from .renderer import SpaceRenderer

logger = logging.getLogger(LOGGER_NAME)


class SpaceSimulation:
    """
    Owns the world, the integrator and the renderer for one run.
    """

    def __init__(self, world: World, physics: NBodyPhysics, renderer: SpaceRenderer,
                 substeps: int = SUBSTEPS_PER_FRAME, incremental: bool = False,
                 follow_resize: bool = True):
        self.world = world
        self.physics = physics
        self.renderer = renderer
        self.substeps = int(substeps)
        self.incremental = incremental
        self.follow_resize = follow_resize
        self.frame = 0
        self._first_frame = True

    def check_resize(self) -> bool:
        """Re-derive the viewport if the terminal size changed. Returns True on change."""
        cols, rows = self.renderer.term.size()
        viewport = Viewport.for_terminal(cols, rows)
        if viewport == self.renderer.viewport:
            return False
        try:
            self.renderer.set_viewport(viewport)
        except ValueError as e:
            logger.warning("Ignoring resize to %dx%d: %s", cols, rows, e)
            return False
        self._first_frame = True
        return True

    def tick(self, now: float) -> None:
        """Integrate `substeps` steps, then draw one frame stamped `now`."""
        started = time.perf_counter()
        self.physics.advance(self.world, self.substeps)

        if self.incremental and not self._first_frame:
            self.renderer.erase_frame(now)
            self.renderer.draw_frame(self.world, now, clear=False)
        else:
            self.renderer.draw_frame(self.world, now, clear=True)
        self._first_frame = False
        self.frame += 1

        if self.frame % DIAGNOSTICS_EVERY == 0:
            px, py = total_momentum(self.world.bodies)
            cx, cy = centre_of_mass(self.world.bodies)
            logger.debug(
                f"Frame={self.frame}, "
                f"Steps={self.world.steps}, "
                f"TickSeconds={time.perf_counter() - started:.3f}, "
                f"Momentum=({px:.4e}, {py:.4e}), "
                f"CentreOfMass=({cx:.4e}, {cy:.4e}), "
                f"TrailCells={len(self.renderer.trails)}"
            )

    def run(self, fps: int = FRAMES_PER_SECOND, max_frames: Optional[int] = None,
            clock=None, now_fn: Callable[[], float] = time.monotonic) -> int:
        """
        Tick until max_frames frames were drawn, or forever when it is None.

        Returns the number of frames drawn by this call.
        """
        if clock is None:
            clock = pygame.time.Clock()
        logger.info("Running: %d sub-steps per frame, %d fps, dt=%gs",
                    self.substeps, fps, self.physics.dt)

        drawn = 0
        while max_frames is None or drawn < max_frames:
            if self.follow_resize:
                self.check_resize()
            self.tick(now_fn())
            drawn += 1
            clock.tick(fps)
        return drawn
