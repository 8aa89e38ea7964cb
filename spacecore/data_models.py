#!/usr/bin/env python3
"""
Data models for Space Sim.

This module defines the dataclasses shared between physics, projection and rendering.

Units and usage
- position is in meters [m], velocity in meters per second [m/s], mass in kg.
- colour is an xterm-256 palette index used for the body's glyph.
- TrailCell and Viewport are in terminal cell coordinates (1-based columns and rows).
"""
from dataclasses import dataclass, field
from typing import List, Tuple

from .constants import (
    DEFAULT_COLOUR,
    DEFAULT_TRACE_LIFE,
    G,
    VIEW_COL_MIN,
    VIEW_ROW_MIN,
)


@dataclass
class Body:
    """
    Represents a massive point object in the simulation.

    Fields:
    - name: Glyph drawn at the body's projected cell
    - mass: Mass in kilograms (must be > 0)
    - position: 2D position (x, y) in meters
    - velocity: 2D velocity (vx, vy) in meters/second
    - colour: xterm-256 colour index for the glyph
    - fixed: If set the body never moves, but it still attracts the others
    """
    name: str
    mass: float
    position: Tuple[float, float]
    velocity: Tuple[float, float] = (0.0, 0.0)
    colour: int = DEFAULT_COLOUR
    fixed: bool = False


@dataclass
class TrailCell:
    """A screen cell that recently held a body. `seen` is in seconds."""
    col: int
    row: int
    seen: float


@dataclass(frozen=True)
class Viewport:
    """Inclusive rectangle of drawable terminal cells."""
    col_min: int
    col_max: int
    row_min: int
    row_max: int

    @classmethod
    def for_terminal(cls, cols: int, rows: int) -> "Viewport":
        """Region inside a one cell border for a terminal of the given size."""
        return cls(VIEW_COL_MIN, cols - 1, VIEW_ROW_MIN, rows - 1)

    @property
    def width(self) -> int:
        return self.col_max - self.col_min

    @property
    def height(self) -> int:
        return self.row_max - self.row_min

    def contains(self, col: int, row: int) -> bool:
        return self.col_min <= col <= self.col_max and self.row_min <= row <= self.row_max


@dataclass
class World:
    """
    All bodies of a scene plus the global simulation constants.

    `extent` is the physical half-size used for scaling. It is derived once from the
    starting positions and kept for the whole run, even when bodies wander past it.
    """
    bodies: List[Body]
    extent: float
    g: float = G
    trace_life: float = DEFAULT_TRACE_LIFE
    steps: int = field(default=0, compare=False)

    @classmethod
    def from_bodies(cls, bodies: List[Body], g: float = G,
                    trace_life: float = DEFAULT_TRACE_LIFE) -> "World":
        from .camera import find_extent
        return cls(bodies=bodies, extent=find_extent(bodies), g=g, trace_life=trace_life)
