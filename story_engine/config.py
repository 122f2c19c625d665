"""
story_engine/config.py -- Logging setup for host applications.

The engine only logs through module loggers; a host that wants to see
those messages calls :func:`setup_logging` once at startup.
"""

from __future__ import annotations

import logging
import os

LOG_LEVEL_ENV = "STORY_ENGINE_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: str | int | None = None) -> None:
    """Configure root logging for a host application.

    *level* defaults to ``$STORY_ENGINE_LOG_LEVEL``, then ``INFO``.
    """
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, "INFO")
    if isinstance(level, str):
        level = level.upper()
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt="%H:%M:%S")
