"""Logging utility configuration for the CycleStreets route pipeline.

This module provides a centralized logger for every stage of the pipeline,
from the request collaborator through to gradient smoothing. Output goes to
stdout with a consistent format across all modules.

Usage:
    from common.logging_utils import logger
    logger.info("Your message here")
"""

import logging
import sys

logger = logging.getLogger("cyclestreets_pipeline")

# Only configure once; importing from several modules must not stack handlers
if not logger.hasHandlers():
    handler = logging.StreamHandler(sys.stdout)

    # Format: "INFO - Your log message here"
    formatter = logging.Formatter(
        fmt='%(levelname)s - %(message)s'
    )

    handler.setFormatter(formatter)
    logger.addHandler(handler)

logger.setLevel(logging.INFO)

logger.propagate = True
