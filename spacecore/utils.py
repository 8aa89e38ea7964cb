#!/usr/bin/env python3
"""
General utilities for Space Sim.
"""
import math
from typing import Optional


def try_float(val) -> Optional[float]:
    """Convert to a finite float, or None when that is not possible."""
    if isinstance(val, bool):
        return None
    try:
        f = float(val)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(f):
        return None
    return f
