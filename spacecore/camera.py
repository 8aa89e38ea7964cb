#!/usr/bin/env python3
"""
Projection utilities for physical-to-terminal-cell transforms.
"""
from typing import Iterable, Tuple
from .constants import ASPECT_CORRECTION, EXTENT_X_WEIGHT, SPAN_MARGIN
from .data_models import Body, Viewport
from .vector_utils import round_half_up


def find_extent(bodies: Iterable[Body]) -> float:
    """
    Physical half-size of the scene used to scale the projection.

    The horizontal half-extent is weighted up (divided by 0.6) so that wide
    orbital systems do not clip; the vertical one is used as is.
    """
    xmax = 0.0
    ymax = 0.0
    for b in bodies:
        xmax = max(xmax, abs(b.position[0]) / 2)
        ymax = max(ymax, abs(b.position[1]) / 2)
    return max(xmax / EXTENT_X_WEIGHT, ymax)


class Projector:
    """
    Fixed linear map from world coordinates (meters) to terminal cells.

    The coefficients are derived once from the viewport and the world extent and reused
    for every call to world_to_screen() until either of them changes.
    """

    def __init__(self, viewport: Viewport, extent: float):
        self.viewport = viewport
        self.extent = extent
        self._derive()

    def _derive(self) -> None:
        if self.extent <= 0:
            raise ValueError(f"world extent must be > 0, got {self.extent}")
        vp = self.viewport
        if vp.width <= 0 or vp.height <= 0:
            raise ValueError(f"viewport too small to draw in: {vp}")
        self.width = vp.width
        self.height = vp.height
        self.center = (vp.col_min + self.width / 2, vp.row_min + self.height / 2)

        ratio = self.height / self.width
        self.y_span = self.extent * SPAN_MARGIN
        self.x_span = self.y_span / ratio * ASPECT_CORRECTION

    def set_viewport(self, viewport: Viewport) -> None:
        previous, self.viewport = self.viewport, viewport
        try:
            self._derive()
        except ValueError:
            self.viewport = previous
            raise

    def set_extent(self, extent: float) -> None:
        self.extent = extent
        self._derive()

    def world_to_screen(self, pos: Tuple[float, float]) -> Tuple[int, int]:
        cx, cy = self.center
        col = cx + (self.width / 2) * (pos[0] / self.x_span)
        row = cy + (self.height / 2) * (pos[1] / self.y_span)
        return (round_half_up(col), round_half_up(row))
