"""Report generator for gate results.

This module converts gate results into human-readable console reports.
It does not recompute anything - it only reads the result objects.
"""

from typing import Optional

from level2_scoring import EmotionalGateResult
from level3_checks import CheckGateResult, CheckStatus
from rules import EmotionalRuleSet

RULE = "   " + "─" * 45

STATUS_ICONS = {
    CheckStatus.PASS: "✓",
    CheckStatus.WARNING: "!",
    CheckStatus.BLOCKER: "✗",
    CheckStatus.SKIP: "-",
}


def score_bar(score: int) -> str:
    """Ten-cell bar for a 0-100 score."""
    filled = max(0, min(10, score // 10))
    return "█" * filled + "░" * (10 - filled)


class ReportGenerator:
    """Formats gate results as plain-text reports."""

    def __init__(self, rule_set: Optional[EmotionalRuleSet] = None):
        """Initialize report generator.

        Args:
            rule_set: Emotional rule set, used for dimension display names
        """
        self.rule_set = rule_set

    def _dimension_label(self, key: str) -> str:
        if self.rule_set is not None:
            dimension = self.rule_set.get_dimension(key)
            if dimension is not None:
                return dimension.name
        return key.capitalize()

    def format_emotional_report(self, result: EmotionalGateResult) -> str:
        """Format the emotional gate result.

        Args:
            result: EmotionalGateResult

        Returns:
            Multi-line report
        """
        lines = [f"   Threshold: {result.threshold}%", ""]

        if not result.fragment_scores:
            lines.append(f"   ✗ {result.reason.capitalize()}")
            if result.candidate_files:
                lines.append(f"   Candidate files: {len(result.candidate_files)}")
            lines.append("   Add prompts to pass emotional validation.")
            return "\n".join(lines)

        lines.append(f"   Found {len(result.candidate_files)} candidate file(s)")
        lines.append(f"   Extracted {result.fragment_count} fragment(s)")
        lines.append("")
        lines.append("   DIMENSION SCORES:")
        lines.append(RULE)

        bonus_key = self.rule_set.bonus_name if self.rule_set is not None else None
        for key, score in result.dimensions.items():
            if key == bonus_key:
                continue
            status = "✓" if score >= 70 else "!" if score >= 50 else "✗"
            lines.append(f"   {self._dimension_label(key):<14} {score_bar(score)} {score:>3}% {status}")

        lines.append(RULE)
        verdict = "PASS" if result.passed else "FAIL"
        lines.append(f"   {'OVERALL':<14} {score_bar(result.score)} {result.score:>3}% {verdict}")

        if not result.passed:
            lines.append("")
            lines.append(f"   ✗ Score {result.score}% is below threshold {result.threshold}%")
            if result.weakest_dimension:
                weakest_score = result.dimensions.get(result.weakest_dimension, 0)
                lines.append(f"   → Weakest: {result.weakest_dimension} ({weakest_score}%)")
                lines.append(f"   → Add: {result.remediation_hint}")

        return "\n".join(lines)

    def format_check_report(self, result: CheckGateResult) -> str:
        """Format a security or independence gate result.

        Args:
            result: CheckGateResult

        Returns:
            Multi-line report
        """
        lines = [f"   {result.policy.upper()} CHECKS:", RULE]
        for check in result.checks:
            icon = STATUS_ICONS[check.status]
            lines.append(f"   {icon} {check.id} {check.name:<20} {check.message}")
            if check.status in (CheckStatus.WARNING, CheckStatus.BLOCKER) and check.description:
                lines.append(f"        expected: {check.description}")
        lines.append(RULE)

        if not result.passed:
            status = "FAIL"
        elif result.warning_count:
            status = "PASS (with warnings)"
        else:
            status = "PASS"
        lines.append(f"   RESULT: {status}")
        lines.append(
            f"   {result.pass_count} passed, {result.warning_count} warnings, "
            f"{result.blocker_count} blockers"
        )
        return "\n".join(lines)

    def format_summary(self, summary) -> str:
        """Format the combined verdict of a full validation.

        Args:
            summary: ValidationSummary

        Returns:
            Multi-line report
        """

        def verdict(passed: bool) -> str:
            return "✓ PASS" if passed else "✗ FAIL"

        lines = [
            "   VALIDATION SUMMARY",
            RULE,
            f"   Emotional:    {verdict(summary.emotional.passed)} ({summary.emotional.score}%)",
            f"   Security:     {verdict(summary.security.passed)} ({summary.security.blocker_count} blockers)",
            f"   Independence: {verdict(summary.independence.passed)} ({summary.independence.blocker_count} blockers)",
            RULE,
        ]

        if summary.passed:
            lines.append("   ALL GATES PASSED - Ready to ship!")
            return "\n".join(lines)

        lines.append("   VALIDATION FAILED - Fix issues before shipping")
        if not summary.emotional.passed:
            lines.append("   → Emotional: Add more warm, empathetic language to prompts")
        if not summary.security.passed:
            lines.append("   → Security: Fix security issues (RLS, secrets, patterns)")
        if not summary.independence.passed:
            lines.append("   → Independence: Remove cross-deliverable references")
        return "\n".join(lines)
