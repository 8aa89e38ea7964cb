#!/usr/bin/env python3
"""
Logging setup for Space Sim.
"""
import logging
import os
import sys
import time
from typing import Optional

from .constants import LOG_FORMAT, LOGGER_NAME


def setup_logging(level: str = "INFO", log_dir: str = "runs", run_id: Optional[str] = None) -> logging.Logger:
    """
    Sets up logging for the application.

    Creates a run-specific log directory and configures a dedicated application logger
    (not the root logger). Everything at `level` goes to runs/<run_id>/simulation.log;
    only errors are echoed to stderr, since stdout/stderr share the terminal with the
    live frame.

    Returns the configured "space_sim" logger.
    """
    if run_id is None:
        run_id = time.strftime("%Y%m%d-%H%M%S")

    # --- Get a dedicated logger for the application ---
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level.upper())
    logger.propagate = False

    # --- Create directories for logs ---
    run_dir = os.path.join(log_dir, run_id)
    os.makedirs(run_dir, exist_ok=True)
    log_file = os.path.join(run_dir, "simulation.log")

    formatter = logging.Formatter(LOG_FORMAT)

    file_handler = logging.FileHandler(log_file)
    file_handler.setFormatter(formatter)

    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(formatter)
    stream_handler.setLevel(logging.ERROR)

    # Clear existing handlers to avoid duplication if this function is called again
    if logger.hasHandlers():
        for handler in list(logger.handlers):
            handler.close()
        logger.handlers.clear()
    logger.addHandler(file_handler)
    logger.addHandler(stream_handler)

    logger.info("Logging initialized. Run ID: %s. Log file: %s", run_id, log_file)
    return logger
