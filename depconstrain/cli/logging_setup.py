"""Logging configuration for CLI runs; the library itself never configures handlers."""

from __future__ import annotations

import logging
import sys


def configure_logging(level: str) -> None:
    """Send log records to stderr at the given level name."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
        force=True,
    )
