#!/usr/bin/env python3
"""
ASCII frame renderer.

Draws one frame per tick onto an ANSITerminal: the border and title, the fading trail
dots, then the bodies on top. Trails go first so a body glyph always hides a trail dot
on the same cell.

Two modes are supported:
- full: the screen is cleared and everything is redrawn (draw_frame).
- incremental: erase_frame() blanks only what went stale since the last frame before
  draw_frame(clear=False) paints the new one. Less flicker on slow terminals.
"""
import logging
import math
from typing import List, Tuple

from .camera import Projector
from .constants import LOGGER_NAME, TITLE, TRACE_GLYPH
from .data_models import Viewport, World
from .terminal import ANSITerminal
from .trail import TrailMap

logger = logging.getLogger(LOGGER_NAME)


class SpaceRenderer:
    """
    Projects the world onto a terminal viewport and keeps the trail map.

    Args:
        term: Drawing sink.
        viewport: Drawable region, inside the border.
        extent: World extent used for the projection scale.
        trace_life: Seconds a trail cell stays visible.
    """

    def __init__(self, term: ANSITerminal, viewport: Viewport, extent: float, trace_life: float):
        self.term = term
        self.viewport = viewport
        self.projector = Projector(viewport, extent)
        self.trails = TrailMap(trace_life)
        self._drawn_bodies: List[Tuple[int, int, int]] = []

    @classmethod
    def for_world(cls, term: ANSITerminal, world: World) -> "SpaceRenderer":
        cols, rows = term.size()
        return cls(term, Viewport.for_terminal(cols, rows), world.extent, world.trace_life)

    def set_viewport(self, viewport: Viewport) -> None:
        """
        Re-derive the projection for a new region. Old trail cells are dropped.

        Raises ValueError, leaving the current viewport in place, if the region is too small.
        """
        self.projector.set_viewport(viewport)
        logger.info("Viewport changed to %s", viewport)
        self.viewport = viewport
        self.trails.clear()
        self._drawn_bodies = []

    def draw_border(self) -> None:
        vp = self.viewport
        self.term.draw_box(vp.col_min - 1, vp.row_min - 1, vp.col_max + 1, vp.row_max + 1)
        self.term.moveto(vp.col_min - 1 + vp.width // 2 - len(TITLE) // 2 + 1, vp.row_min - 1)
        self.term.bold()
        self.term.write(TITLE)
        self.term.reset()

    def draw_trails(self, now: float) -> int:
        drawn = 0
        for cell, intensity in self.trails.live(now):
            self.term.moveto(cell.col, cell.row)
            self.term.fg8(int(math.floor(intensity)))
            self.term.write(TRACE_GLYPH)
            drawn += 1
        self.term.reset()
        return drawn

    def draw_bodies(self, world: World, now: float) -> int:
        drawn = []
        for body in world.bodies:
            if not all(math.isfinite(v) for v in body.position):
                continue
            col, row = self.projector.world_to_screen(body.position)
            if not self.viewport.contains(col, row):
                continue
            self.term.moveto(col, row)
            self.trails.visit(col, row, now)
            self.term.fg8(body.colour)
            self.term.write(body.name)
            drawn.append((col, row, len(body.name)))
        self.term.reset()
        self._drawn_bodies = drawn
        return len(drawn)

    def draw_frame(self, world: World, now: float, clear: bool = True) -> None:
        """
        Paint one frame stamped `now` (seconds) and flush it.

        With clear=False the screen is not wiped first; pair it with erase_frame().
        """
        term = self.term
        if clear:
            term.clear()
        term.reset()
        term.cursor(False)
        self.draw_border()
        self.draw_trails(now)
        self.draw_bodies(world, now)
        if clear:
            # Already wiped from the screen; incremental mode evicts in erase_frame().
            self.trails.evict_expired(now)
        term.flush()

    def erase_frame(self, now: float) -> None:
        """Blank the previous frame's body glyphs and every trail cell expired by `now`."""
        term = self.term
        for col, row, width in self._drawn_bodies:
            term.moveto(col, row)
            term.write(" " * width)
        for cell in self.trails.evict_expired(now):
            term.moveto(cell.col, cell.row)
            term.write(" ")
        self._drawn_bodies = []
