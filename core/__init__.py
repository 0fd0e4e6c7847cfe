"""Release validation orchestration."""

from .orchestrator import GateOrchestrator, ValidationSummary

__all__ = ["GateOrchestrator", "ValidationSummary"]
