"""Level 5: Reporting.

This module converts gate results into human-readable reports and JSON
exports. It never recomputes a decision.
"""

from .exporter import ExportError, export_json, to_json
from .report_generator import ReportGenerator, score_bar

__all__ = [
    "ExportError",
    "export_json",
    "to_json",
    "ReportGenerator",
    "score_bar",
]
