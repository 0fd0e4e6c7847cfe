"""File helper utilities for ReleaseGate.

This module provides common file operations used across the application.
"""

import logging
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


class PathValidationError(Exception):
    """Raised when a user-supplied path cannot be used."""

    pass


def resolve_existing_file(file_path: str | Path) -> Path:
    """Resolve a user-supplied file path and check that it is a regular file.

    Relative paths (including ones that climb with ``..``) are resolved
    against the current directory; ``~`` is expanded.

    Args:
        file_path: Path given on the command line

    Returns:
        Resolved Path object

    Raises:
        PathValidationError: If the path cannot be resolved or is not a file
        FileNotFoundError: If nothing exists at the path
    """
    try:
        resolved = Path(file_path).expanduser().resolve()
    except (OSError, RuntimeError) as e:
        raise PathValidationError(f"Failed to resolve path {file_path}: {e}") from e

    if not resolved.exists():
        raise FileNotFoundError(f"Path does not exist: {file_path}")

    if not resolved.is_file():
        raise PathValidationError(f"Path is not a file: {file_path}")

    return resolved


def read_text_safe(file_path: Path) -> Optional[str]:
    """Read a project file as UTF-8 text.

    Undecodable bytes are replaced rather than rejected. A file that cannot be
    read at all is skipped: the caller gets None and the scan carries on.

    Args:
        file_path: File to read

    Returns:
        File contents, or None if the file is unreadable
    """
    try:
        return Path(file_path).read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logger.debug(f"Skipping unreadable file {file_path}: {e}")
        return None


def relative_to_root(file_path: Path, root: Path) -> str:
    """Render a scanned path relative to the project root for reports.

    Args:
        file_path: Path found during a scan
        root: Project root the scan started from

    Returns:
        POSIX-style relative path, or the path unchanged if it lies outside root
    """
    try:
        return Path(file_path).relative_to(root).as_posix()
    except ValueError:
        return Path(file_path).as_posix()
