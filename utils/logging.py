"""Logging utilities for ReleaseGate.

This module provides shared logging configuration and utilities
used across the entire application. Gate reports are printed on stdout;
log records default to stderr so the two never interleave.
"""

import logging
import sys
from typing import Optional, TextIO

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
BANNER_WIDTH = 60


def setup_logging(
    verbose: bool = False,
    level: Optional[int] = None,
    stream: Optional[TextIO] = None,
) -> None:
    """Configure logging for ReleaseGate.

    This function sets up the root logger with a consistent format.
    It can be called multiple times safely.

    Args:
        verbose: If True, set log level to DEBUG, otherwise INFO
        level: Optional explicit log level (overrides verbose)
        stream: Destination for log records (defaults to stderr)
    """
    # Clear existing handlers to avoid duplicates
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    # Determine log level
    if level is not None:
        log_level = level
    else:
        log_level = logging.DEBUG if verbose else logging.INFO

    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=stream if stream is not None else sys.stderr,
        force=True,  # Override any existing configuration
    )


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for a module.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


def log_banner(logger: logging.Logger, title: str) -> None:
    """Log a section title framed by rule lines at INFO level."""
    logger.info("=" * BANNER_WIDTH)
    logger.info(title)
    logger.info("=" * BANNER_WIDTH)
