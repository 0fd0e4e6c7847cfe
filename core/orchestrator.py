"""Gate orchestrator for coordinating a full release validation.

This module defines the GateOrchestrator class which runs the emotional,
security and independence gates against one project, in that order, and
combines them into a single verdict.
"""

import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union

from level2_scoring import EmotionalGateResult
from level3_checks import CheckGateResult
from level4_gates import run_emotional_gate, run_independence_gate, run_security_gate
from rules import GateConfig, get_default_config
from utils import get_logger, log_banner

logger = get_logger(__name__)

GateResult = Union[EmotionalGateResult, CheckGateResult]


@dataclass
class ValidationSummary:
    """Combined verdict of all three gates."""

    project: Path
    emotional: EmotionalGateResult
    security: CheckGateResult
    independence: CheckGateResult

    @property
    def passed(self) -> bool:
        """True only if every gate passed."""
        return self.emotional.passed and self.security.passed and self.independence.passed

    @property
    def results(self) -> dict[str, GateResult]:
        """Gate results keyed by gate name, in run order."""
        return {
            "emotional": self.emotional,
            "security": self.security,
            "independence": self.independence,
        }

    def __str__(self) -> str:
        """Human-readable representation."""
        failed = [name for name, result in self.results.items() if not result.passed]
        if not failed:
            return "Validation PASSED: all gates passed"
        return f"Validation FAILED: {', '.join(failed)}"

    def to_dict(self) -> dict[str, Any]:
        """Serializable representation."""
        return {
            "project": str(self.project),
            "passed": self.passed,
            "gates": {name: result.to_dict() for name, result in self.results.items()},
        }


class GateOrchestrator:
    """Orchestrates release validation for one project.

    Args:
        project_path: Project root
        config: Gate configuration shared by all gates (read-only)
        cancel_event: Optional event that stops a run between files
    """

    def __init__(
        self,
        project_path: str | Path = ".",
        config: Optional[GateConfig] = None,
        cancel_event: Optional[threading.Event] = None,
    ):
        """Initialize the orchestrator.

        Args:
            project_path: Project root
            config: Gate configuration (defaults to the built-in rules)
            cancel_event: Optional cancellation event
        """
        self.project_path = Path(project_path)
        self.config = config or get_default_config()
        self.cancel_event = cancel_event

        logger.debug(f"GateOrchestrator initialized for {self.project_path}")

    def run_gate(self, name: str) -> GateResult:
        """Run one gate by name ("emotional", "security" or "independence").

        Raises:
            ValueError: If the gate name is unknown
        """
        runners = {
            "emotional": run_emotional_gate,
            "security": run_security_gate,
            "independence": run_independence_gate,
        }
        if name not in runners:
            raise ValueError(f"Unknown gate: {name}. Expected one of: {', '.join(runners)}")

        log_banner(logger, f"{name.capitalize()} gate: {self.project_path}")
        return runners[name](self.project_path, self.config, self.cancel_event)

    def validate_all(self) -> ValidationSummary:
        """Run all three gates; no gate short-circuits another.

        Returns:
            ValidationSummary
        """
        summary = ValidationSummary(
            project=self.project_path,
            emotional=self.run_gate("emotional"),
            security=self.run_gate("security"),
            independence=self.run_gate("independence"),
        )

        if summary.passed:
            logger.info(f"✓ {summary}")
        else:
            logger.info(f"✗ {summary}")
        return summary
