"""Dimension scorer for Level 2 scoring.

This module applies one emotional rule set to one fragment. Every rule is a
uniform (pattern, signed score) record evaluated by the same loop: each
case-insensitive match adds the rule's score once, so three occurrences of
"friend" count three times.

Scoring is pure: identical text and rule set always give identical scores.
"""

import math
from dataclasses import dataclass
from typing import Iterable

from level1_discovery.extractor import Fragment
from rules.schema import Dimension, EmotionalRuleSet, Rule, compile_pattern

MIN_SCORE = 0
MAX_SCORE = 100


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves rounding up (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(value + 0.5))


def clamp_score(value: float) -> int:
    """Round and clamp a normalized value to [0, 100]."""
    return max(MIN_SCORE, min(MAX_SCORE, round_half_up(value)))


@dataclass(frozen=True)
class RuleMatch:
    """Diagnostic record for a rule that matched at least once."""

    pattern: str
    count: int
    contribution: float


@dataclass(frozen=True)
class DimensionScore:
    """Score of one dimension (or the bonus) for one fragment."""

    key: str
    name: str
    value: int  # clamped to [0, 100]
    weight: float
    raw: float  # pre-normalization sum of contributions
    matches: tuple[RuleMatch, ...] = ()

    def to_dict(self) -> dict:
        """Serializable representation."""
        return {
            "key": self.key,
            "name": self.name,
            "value": self.value,
            "weight": self.weight,
            "raw": self.raw,
            "matches": [
                {"pattern": m.pattern, "count": m.count, "contribution": m.contribution}
                for m in self.matches
            ],
        }


@dataclass(frozen=True)
class FragmentScore:
    """All dimension scores for one fragment plus its weighted overall."""

    fragment: Fragment
    overall: int
    dimensions: tuple[DimensionScore, ...]
    bonus: DimensionScore

    def dimension_values(self) -> dict[str, int]:
        """Dimension values keyed by dimension key, bonus included."""
        values = {score.key: score.value for score in self.dimensions}
        values[self.bonus.key] = self.bonus.value
        return values


class DimensionScorer:
    """Scores fragments against an immutable emotional rule set."""

    def __init__(self, rule_set: EmotionalRuleSet):
        """Initialize the scorer.

        Args:
            rule_set: Emotional rule set (read-only)
        """
        self.rule_set = rule_set

    def score_rules(self, rules: Iterable[Rule], text: str) -> tuple[float, tuple[RuleMatch, ...]]:
        """Accumulate score x match count over a list of rules.

        Returns:
            Tuple of (raw score, matches for rules that fired)
        """
        raw = 0.0
        matches: list[RuleMatch] = []
        for rule in rules:
            regex = compile_pattern(rule.pattern, True)
            count = sum(1 for _ in regex.finditer(text))
            if count:
                contribution = rule.score * count
                raw += contribution
                matches.append(RuleMatch(pattern=rule.pattern, count=count, contribution=contribution))
        return raw, tuple(matches)

    def score_dimension(self, dimension: Dimension, text: str) -> DimensionScore:
        """Score one dimension: positive rules, then negative rules."""
        raw, matches = self.score_rules(dimension.rules, text)
        return DimensionScore(
            key=dimension.key,
            name=dimension.name,
            value=clamp_score(raw * self.rule_set.normalization),
            weight=dimension.weight,
            raw=raw,
            matches=matches,
        )

    def score_bonus(self, text: str) -> DimensionScore:
        """Score the positive-only bonus rules."""
        raw, matches = self.score_rules(self.rule_set.bonus, text)
        return DimensionScore(
            key=self.rule_set.bonus_name,
            name=self.rule_set.bonus_name.capitalize(),
            value=clamp_score(raw * self.rule_set.normalization),
            weight=self.rule_set.bonus_weight,
            raw=raw,
            matches=matches,
        )

    def score_fragment(self, fragment: Fragment) -> FragmentScore:
        """Score a fragment on every dimension and compute its weighted overall.

        Overall = (sum of value x weight + bonus x bonus weight)
                  / (sum of weights + bonus weight), rounded half up.
        """
        dimensions = tuple(self.score_dimension(d, fragment.text) for d in self.rule_set.dimensions)
        bonus = self.score_bonus(fragment.text)

        weighted_sum = sum(score.value * score.weight for score in dimensions)
        total_weight = sum(score.weight for score in dimensions)
        weighted_sum += bonus.value * bonus.weight
        total_weight += bonus.weight

        return FragmentScore(
            fragment=fragment,
            overall=round_half_up(weighted_sum / total_weight),
            dimensions=dimensions,
            bonus=bonus,
        )
