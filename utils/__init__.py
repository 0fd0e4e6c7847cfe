"""Shared utilities for ReleaseGate.

This module provides common utilities used across the application.
"""

from .constants import (
    APP_NAME,
    APP_VERSION,
    DEFAULT_PROJECT_PATH,
    EXCLUDED_DIRECTORIES,
    EXIT_GATE_FAILED,
    EXIT_INVALID_CONFIG,
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
)
from .file_helpers import (
    PathValidationError,
    read_text_safe,
    relative_to_root,
    resolve_existing_file,
)
from .cancellation import GateCancelledError, raise_if_cancelled
from .logging import get_logger, log_banner, setup_logging

__all__ = [
    "APP_NAME",
    "APP_VERSION",
    "DEFAULT_PROJECT_PATH",
    "EXCLUDED_DIRECTORIES",
    "EXIT_GATE_FAILED",
    "EXIT_INVALID_CONFIG",
    "EXIT_RUNTIME_ERROR",
    "EXIT_SUCCESS",
    "GateCancelledError",
    "get_logger",
    "log_banner",
    "PathValidationError",
    "read_text_safe",
    "raise_if_cancelled",
    "relative_to_root",
    "setup_logging",
    "resolve_existing_file",
]
