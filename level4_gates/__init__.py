"""Level 4: Gates.

This module exposes one entry point per policy. Each takes a project root
and returns a structured pass/fail result.
"""

from .gatekeeper import run_emotional_gate, run_independence_gate, run_security_gate

__all__ = [
    "run_emotional_gate",
    "run_independence_gate",
    "run_security_gate",
]
