"""Logging setup for the CLI.

Library modules just do ``from loguru import logger``. The package disables its own
records at import time; only the entrypoint re-enables them and decides sinks.
"""

from __future__ import annotations

import sys

from loguru import logger

LOG_FORMAT = "<level>{level: <7}</level> | {name}:{line} - {message}"


def configure_logging(verbose: bool = False) -> None:
    logger.remove()
    logger.enable("huffproc")
    logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING", format=LOG_FORMAT)
