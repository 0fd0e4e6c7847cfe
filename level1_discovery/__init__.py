"""Level 1: Discovery.

This module locates candidate files in a project tree and extracts the text
fragments the emotional gate scores.
"""

from .extractor import EXTRACTION_RULES, Fragment, extract_fragments
from .locator import FileLocator, walk_files

__all__ = [
    "EXTRACTION_RULES",
    "Fragment",
    "extract_fragments",
    "FileLocator",
    "walk_files",
]
