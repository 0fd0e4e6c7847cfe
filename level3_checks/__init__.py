"""Level 3: Whole-project checks.

This module runs the ordered check lists of the security and independence
policies. Checks read whole-file content directly; they never go through the
fragment extractor or the scorer.
"""

from .framework import (
    Check,
    CheckDefinition,
    CheckGateResult,
    CheckOutcome,
    CheckPolicy,
    CheckStatus,
    Finding,
    status_for,
)
from .independence import IndependencePolicy
from .project_identity import ProjectIdentity, collapse_identifier, load_project_identity
from .security import SecurityPolicy

__all__ = [
    "Check",
    "CheckDefinition",
    "CheckGateResult",
    "CheckOutcome",
    "CheckPolicy",
    "CheckStatus",
    "Finding",
    "status_for",
    "IndependencePolicy",
    "ProjectIdentity",
    "collapse_identifier",
    "load_project_identity",
    "SecurityPolicy",
]
