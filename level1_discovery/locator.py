"""File locator for Level 1 discovery.

This module walks a project tree and returns the files a gate should read.
It never modifies anything and never aborts on an unreadable directory:
a directory that cannot be listed is skipped and the walk carries on.
"""

import os
import threading
from pathlib import Path
from typing import Iterable, Optional

from rules.schema import compile_pattern
from utils import EXCLUDED_DIRECTORIES, get_logger, raise_if_cancelled

logger = get_logger(__name__)


def walk_files(
    directory: Path,
    extensions: Iterable[str],
    excluded_dirs: Iterable[str] = EXCLUDED_DIRECTORIES,
    recursive: bool = True,
    cancel_event: Optional[threading.Event] = None,
) -> list[Path]:
    """List files under a directory with an allowed extension.

    Entries are visited in name order so the result is deterministic for a
    fixed filesystem. Symlinked directories are not followed.

    Args:
        directory: Directory to walk (missing directories yield nothing)
        extensions: Allowed suffixes, including the dot (e.g. ".ts")
        excluded_dirs: Directory names that are never descended into
        recursive: If False, only the directory's own files are listed
        cancel_event: Optional event checked before each directory

    Returns:
        List of matching file paths
    """
    allowed = set(extensions)
    excluded = set(excluded_dirs)
    found: list[Path] = []
    pending = [Path(directory)]

    while pending:
        raise_if_cancelled(cancel_event)
        current = pending.pop()
        try:
            with os.scandir(current) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            logger.debug(f"Skipping unreadable directory {current}: {e}")
            continue

        subdirs = []
        for entry in entries:
            try:
                if entry.is_dir(follow_symlinks=False):
                    if recursive and entry.name not in excluded:
                        subdirs.append(Path(entry.path))
                elif entry.is_file() and os.path.splitext(entry.name)[1] in allowed:
                    found.append(Path(entry.path))
            except OSError as e:
                logger.debug(f"Skipping unreadable entry {entry.path}: {e}")

        # Depth-first, preserving name order
        pending.extend(reversed(subdirs))

    return found


class FileLocator:
    """Finds candidate files under configured project locations.

    A file qualifies if its extension is allowed and, when filename filters
    are configured, its name matches at least one of them.
    """

    def __init__(
        self,
        extensions: Iterable[str],
        filename_patterns: Iterable[str] = (),
        excluded_dirs: Iterable[str] = EXCLUDED_DIRECTORIES,
    ):
        """Initialize the locator.

        Args:
            extensions: Allowed suffixes, including the dot
            filename_patterns: Regular expressions searched in the file name
            excluded_dirs: Directory names pruned from every walk
        """
        self.extensions = tuple(extensions)
        self.filename_patterns = tuple(compile_pattern(p) for p in filename_patterns)
        self.excluded_dirs = tuple(excluded_dirs)

    def matches(self, path: Path) -> bool:
        """Check a file name against the filename filters."""
        if not self.filename_patterns:
            return True
        name = Path(path).name
        return any(pattern.search(name) for pattern in self.filename_patterns)

    def locate(
        self,
        root: Path,
        candidate_dirs: Iterable[str],
        cancel_event: Optional[threading.Event] = None,
    ) -> list[Path]:
        """Locate candidate files for a project.

        Each existing candidate directory is walked recursively, then the root
        itself is scanned non-recursively. Overlapping candidates (``src/app``
        and ``src/app/api``) do not produce duplicates.

        Args:
            root: Project root
            candidate_dirs: Subdirectories (relative to root) to walk
            cancel_event: Optional event checked between directories

        Returns:
            Deduplicated list of candidate files, in first-seen order
        """
        root = Path(root)
        seen: set[Path] = set()
        located: list[Path] = []

        def collect(paths: list[Path]) -> None:
            for path in paths:
                if path not in seen and self.matches(path):
                    seen.add(path)
                    located.append(path)

        for location in candidate_dirs:
            full_path = root / location
            if not full_path.is_dir():
                continue
            logger.debug(f"Scanning candidate directory {full_path}")
            collect(
                walk_files(
                    full_path,
                    self.extensions,
                    self.excluded_dirs,
                    recursive=True,
                    cancel_event=cancel_event,
                )
            )

        collect(
            walk_files(
                root,
                self.extensions,
                self.excluded_dirs,
                recursive=False,
                cancel_event=cancel_event,
            )
        )

        logger.debug(f"Located {len(located)} candidate file(s) under {root}")
        return located
