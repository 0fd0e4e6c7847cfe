"""Level 2: Scoring.

This module scores extracted fragments against weighted emotional dimensions
and aggregates them into the emotional gate decision.
"""

from .aggregator import (
    REASON_NO_CONTENT,
    REASON_NO_FRAGMENTS,
    EmotionalAggregator,
    EmotionalGateResult,
)
from .scorer import (
    DimensionScore,
    DimensionScorer,
    FragmentScore,
    RuleMatch,
    clamp_score,
    round_half_up,
)

__all__ = [
    "REASON_NO_CONTENT",
    "REASON_NO_FRAGMENTS",
    "EmotionalAggregator",
    "EmotionalGateResult",
    "DimensionScore",
    "DimensionScorer",
    "FragmentScore",
    "RuleMatch",
    "clamp_score",
    "round_half_up",
]
