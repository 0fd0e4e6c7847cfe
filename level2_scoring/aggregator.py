"""Gate aggregator for the emotional policy.

This module combines per-fragment scores into one pass/fail decision.

Two aggregation paths exist and are kept separate:
- the gate score is the mean of each fragment's own overall score;
- the reported dimension averages are per-dimension means across fragments.
The two are not equivalent in general and may disagree.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from level1_discovery.extractor import Fragment
from rules.schema import EmotionalRuleSet
from utils import get_logger

from .scorer import DimensionScorer, FragmentScore, round_half_up

logger = get_logger(__name__)

REASON_NO_CONTENT = "no content located"
REASON_NO_FRAGMENTS = "no fragments extracted"


@dataclass
class EmotionalGateResult:
    """Decision of the emotional gate.

    This is an explicit result object - a failed gate is a value, not an
    exception.
    """

    passed: bool
    score: int
    threshold: int
    reason: str = ""
    dimensions: dict[str, int] = field(default_factory=dict)  # bonus included
    weakest_dimension: Optional[str] = None
    remediation_hint: Optional[str] = None
    candidate_files: list[Path] = field(default_factory=list)
    fragment_scores: list[FragmentScore] = field(default_factory=list)

    @property
    def fragment_count(self) -> int:
        """Number of fragments that were scored."""
        return len(self.fragment_scores)

    def __str__(self) -> str:
        """Human-readable representation."""
        status = "PASSED" if self.passed else "FAILED"
        return f"Emotional gate {status}: {self.reason}"

    def to_dict(self) -> dict[str, Any]:
        """Serializable representation."""
        return {
            "passed": self.passed,
            "score": self.score,
            "threshold": self.threshold,
            "reason": self.reason,
            "dimensions": dict(self.dimensions),
            "weakest_dimension": self.weakest_dimension,
            "remediation_hint": self.remediation_hint,
            "candidate_files": [str(p) for p in self.candidate_files],
            "fragment_count": self.fragment_count,
            "fragments": [
                {
                    "file": str(fs.fragment.source_file),
                    "kind": fs.fragment.kind.value,
                    "score": fs.overall,
                    "dimensions": fs.dimension_values(),
                }
                for fs in self.fragment_scores
            ],
        }


class EmotionalAggregator:
    """Scores fragments and decides the emotional gate."""

    def __init__(self, rule_set: EmotionalRuleSet):
        """Initialize the aggregator.

        Args:
            rule_set: Emotional rule set (read-only)
        """
        self.rule_set = rule_set
        self.scorer = DimensionScorer(rule_set)

    def average_dimensions(self, fragment_scores: list[FragmentScore]) -> dict[str, int]:
        """Per-dimension mean across fragments (bonus included), rounded."""
        keys = [d.key for d in self.rule_set.dimensions] + [self.rule_set.bonus_name]
        count = len(fragment_scores)
        averages = {}
        for key in keys:
            total = sum(fs.dimension_values()[key] for fs in fragment_scores)
            averages[key] = round_half_up(total / count)
        return averages

    def weakest_dimension(self, averages: dict[str, int]) -> Optional[str]:
        """Lowest-scoring primary dimension; ties go to the first declared."""
        primary = [d.key for d in self.rule_set.dimensions if d.key in averages]
        if not primary:
            return None
        return min(primary, key=lambda key: averages[key])

    def aggregate(
        self,
        candidate_files: list[Path],
        fragments: list[Fragment],
    ) -> EmotionalGateResult:
        """Make the emotional gate decision.

        Degenerate inputs short-circuit before any scoring: no candidate files
        and no extracted fragments are both failures with score 0.

        Args:
            candidate_files: Files the locator found
            fragments: Fragments extracted from those files

        Returns:
            EmotionalGateResult
        """
        threshold = self.rule_set.threshold

        if not candidate_files:
            return EmotionalGateResult(
                passed=False,
                score=0,
                threshold=threshold,
                reason=REASON_NO_CONTENT,
            )

        if not fragments:
            return EmotionalGateResult(
                passed=False,
                score=0,
                threshold=threshold,
                reason=REASON_NO_FRAGMENTS,
                candidate_files=list(candidate_files),
            )

        fragment_scores = [self.scorer.score_fragment(fragment) for fragment in fragments]
        score = round_half_up(sum(fs.overall for fs in fragment_scores) / len(fragment_scores))
        averages = self.average_dimensions(fragment_scores)
        passed = score >= threshold

        logger.debug(f"Scored {len(fragment_scores)} fragment(s): overall={score}, dimensions={averages}")

        weakest = None
        hint = None
        if passed:
            reason = f"Score {score} meets threshold {threshold}"
        else:
            reason = f"Score {score} is below threshold {threshold}"
            weakest = self.weakest_dimension(averages)
            dimension = self.rule_set.get_dimension(weakest) if weakest else None
            hint = (dimension.suggestion if dimension else "") or "more emotional language"

        return EmotionalGateResult(
            passed=passed,
            score=score,
            threshold=threshold,
            reason=reason,
            dimensions=averages,
            weakest_dimension=weakest,
            remediation_hint=hint,
            candidate_files=list(candidate_files),
            fragment_scores=fragment_scores,
        )
