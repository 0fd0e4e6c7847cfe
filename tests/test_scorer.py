from __future__ import annotations

from pathlib import Path

import pytest

from level1_discovery import Fragment
from level2_scoring import DimensionScorer, clamp_score, round_half_up
from rules import EmotionalRuleSet, FragmentKind, get_default_config


def fragment(text: str) -> Fragment:
    return Fragment(source_file=Path("prompt.ts"), kind=FragmentKind.CONSTANT, text=text)


@pytest.fixture
def scorer() -> DimensionScorer:
    return DimensionScorer(get_default_config().emotional)


# ===================================================================
#  Rounding
# ===================================================================

class TestRounding:
    def test_halves_round_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(95.5) == 96
        assert round_half_up(-2.5) == -2

    def test_clamp_bounds(self):
        assert clamp_score(-40) == 0
        assert clamp_score(250) == 100
        assert clamp_score(99.5) == 100


# ===================================================================
#  Dimension scores
# ===================================================================

class TestDimensionScorer:
    def test_each_occurrence_counts(self, scorer):
        score = scorer.score_fragment(fragment("friend friend friend"))
        warmth = score.dimension_values()["warmth"]
        assert warmth == 90
        match = score.dimensions[0].matches[0]
        assert match.pattern == "friend"
        assert match.count == 3
        assert match.contribution == 45

    def test_matching_is_case_insensitive(self, scorer):
        lower = scorer.score_fragment(fragment("you are my friend"))
        upper = scorer.score_fragment(fragment("YOU ARE MY FRIEND"))
        assert lower.dimension_values() == upper.dimension_values()

    def test_saturates_at_100(self, scorer):
        score = scorer.score_fragment(fragment("friend " * 20))
        assert score.dimension_values()["warmth"] == 100

    def test_negative_rules_floor_at_zero(self, scorer):
        score = scorer.score_fragment(fragment("professional formal neutral"))
        warmth = score.dimensions[0]
        assert warmth.raw < 0
        assert warmth.value == 0

    def test_all_values_within_bounds(self, scorer):
        text = "proud amazing celebrate you matter, you can do this " * 10 + "simply obviously wrong"
        score = scorer.score_fragment(fragment(text))
        assert all(0 <= v <= 100 for v in score.dimension_values().values())
        assert 0 <= score.overall <= 100

    def test_scoring_is_pure(self, scorer):
        text = "I believe in you, friend. Your feelings matter."
        assert scorer.score_fragment(fragment(text)) == scorer.score_fragment(fragment(text))

    def test_adding_positive_match_never_lowers_score(self, scorer):
        base = scorer.score_fragment(fragment("I understand"))
        more = scorer.score_fragment(fragment("I understand, and I am proud of you"))
        assert more.dimension_values()["celebration"] >= base.dimension_values()["celebration"]
        assert more.overall >= base.overall

    def test_empty_text_scores_zero(self, scorer):
        score = scorer.score_fragment(fragment(""))
        assert score.overall == 0
        assert set(score.dimension_values()) == {
            "warmth",
            "empathy",
            "celebration",
            "validation",
            "encouragement",
            "mission",
        }


class TestOverall:
    def test_bonus_is_folded_in_with_its_weight(self):
        rule_set = EmotionalRuleSet(
            dimensions=[
                {"key": "a", "name": "A", "weight": 1.0, "positive": [{"pattern": "alpha", "score": 50}]}
            ],
            bonus=[{"pattern": "mission", "score": 25}],
            bonus_weight=1.0,
        )
        score = DimensionScorer(rule_set).score_fragment(fragment("alpha mission"))
        # (100 * 1.0 + 50 * 1.0) / 2.0
        assert score.bonus.value == 50
        assert score.overall == 75

    def test_single_rule_threshold_values(self, single_rule_set):
        scorer = DimensionScorer(single_rule_set)
        assert scorer.score_fragment(fragment("be kind")).overall == 96
