"""Exporter for gate results.

This module writes machine-readable (JSON) results. It does not generate
content, only serializes existing result objects.
"""

import json
from pathlib import Path
from typing import Any

from utils import get_logger

logger = get_logger(__name__)


class ExportError(Exception):
    """Raised when export operations fail."""

    pass


def to_json(result: Any) -> str:
    """Serialize a gate result (anything with ``to_dict``) to JSON text."""
    return json.dumps(result.to_dict(), indent=2, ensure_ascii=False)


def export_json(result: Any, output_path: str | Path) -> Path:
    """Write a gate result as JSON.

    Args:
        result: EmotionalGateResult, CheckGateResult or ValidationSummary
        output_path: Destination file (parent directories are created)

    Returns:
        Path written

    Raises:
        ExportError: If the file cannot be written
    """
    path = Path(output_path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(to_json(result) + "\n", encoding="utf-8")
    except OSError as e:
        raise ExportError(f"Failed to write report to {path}: {e}") from e

    logger.info(f"Report written to {path}")
    return path
