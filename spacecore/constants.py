#!/usr/bin/env python3
"""
Shared constants for Space Sim (SI units unless stated otherwise).

Keeping constants in one place helps ensure values are consistent across the
codebase and makes tuning easier.
"""

# Physical constants
G = 6.67e-11  # m^3 kg^-1 s^-2

# Physics controls
DEFAULT_DT = 1.0  # seconds of simulation time per sub-step
SUBSTEPS_PER_FRAME = 20000  # integrator sub-steps between two rendered frames

# Frame pacing
FRAMES_PER_SECOND = 20  # one tick every 50 ms

# Trails
DEFAULT_TRACE_LIFE = 6.0  # seconds before a trail cell stops being drawn
TRACE_BRIGHT = 255  # xterm-256 grey ramp, brightest
TRACE_DIM = 232  # xterm-256 grey ramp, darkest
TRACE_GLYPH = "·"

# Bodies
DEFAULT_COLOUR = 226  # xterm-256 yellow

# Viewport: the drawable region starts inside a one cell border
VIEW_COL_MIN = 2
VIEW_ROW_MIN = 2
TITLE = "  S P A C E  "

# Projection calibration. These were tuned by eye, not derived.
SPAN_MARGIN = 1.3  # vertical span = extent * SPAN_MARGIN
ASPECT_CORRECTION = 0.444  # terminal cells are taller than they are wide
EXTENT_X_WEIGHT = 0.6  # horizontal half-extent is divided by this

# Logging
LOGGER_NAME = "space_sim"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
DIAGNOSTICS_EVERY = 100  # frames between momentum/centre-of-mass log lines
