#!/usr/bin/env python3
"""
Fading trail of recently occupied screen cells.

Each cell remembers the last time a body was drawn on it. Its brightness falls
linearly along the xterm-256 grey ramp until the trace life runs out, after which
the cell is skipped and can be evicted.
"""
from typing import Dict, Iterator, List, Tuple
from .constants import DEFAULT_TRACE_LIFE, TRACE_BRIGHT, TRACE_DIM
from .data_models import TrailCell


def fade_intensity(age: float, life: float) -> float:
    """Linear fade from TRACE_BRIGHT at age 0 to TRACE_DIM at age == life."""
    return TRACE_BRIGHT - (age / life) * (TRACE_BRIGHT - TRACE_DIM)


class TrailMap:
    """
    Trail cells keyed by (col, row).

    Revisiting a cell refreshes its timestamp instead of adding a second entry.
    """

    def __init__(self, life: float = DEFAULT_TRACE_LIFE):
        self.life = float(life)
        self._cells: Dict[Tuple[int, int], TrailCell] = {}

    def __len__(self) -> int:
        return len(self._cells)

    def __contains__(self, key: Tuple[int, int]) -> bool:
        return key in self._cells

    def get(self, col: int, row: int):
        return self._cells.get((col, row))

    def visit(self, col: int, row: int, now: float) -> TrailCell:
        cell = self._cells.get((col, row))
        if cell is None:
            cell = TrailCell(col, row, now)
            self._cells[(col, row)] = cell
        else:
            cell.seen = now
        return cell

    def is_live(self, cell: TrailCell, now: float) -> bool:
        return now - cell.seen < self.life

    def intensity(self, cell: TrailCell, now: float) -> float:
        return fade_intensity(now - cell.seen, self.life)

    def live(self, now: float) -> Iterator[Tuple[TrailCell, float]]:
        """Yield (cell, intensity) for every cell younger than the trace life."""
        for cell in self._cells.values():
            if not self.is_live(cell, now):
                continue
            yield cell, self.intensity(cell, now)

    def evict_expired(self, now: float) -> List[TrailCell]:
        """Drop expired cells and return them so the caller can blank them."""
        expired = [c for c in self._cells.values() if not self.is_live(c, now)]
        for cell in expired:
            del self._cells[(cell.col, cell.row)]
        return expired

    def clear(self) -> None:
        self._cells.clear()
