from __future__ import annotations

import threading
from pathlib import Path

import pytest

from level1_discovery import Fragment
from level2_scoring import REASON_NO_CONTENT, REASON_NO_FRAGMENTS, EmotionalAggregator
from level4_gates import run_emotional_gate
from rules import EmotionalRuleSet, FragmentKind, get_default_config
from utils import GateCancelledError

from conftest import write

WARM_PROMPT = (
    "friend friend friend friend\n"
    "understand understand understand understand understand\n"
    "proud proud proud proud\n"
    "worthy worthy worthy worthy worthy\n"
    "capable capable capable capable capable\n"
    "genuine genuine genuine genuine genuine\n"
)

COLD_PROMPT = "You are a friend friend friend friend.\nAnswer the user question clearly.\n"


def fragment(text: str) -> Fragment:
    return Fragment(source_file=Path("prompt.ts"), kind=FragmentKind.CONSTANT, text=text)


# ===================================================================
#  Degenerate inputs
# ===================================================================

class TestDegenerateInputs:
    def test_empty_project_fails_with_no_content(self, project):
        result = run_emotional_gate(project)
        assert result.passed is False
        assert result.score == 0
        assert result.reason == REASON_NO_CONTENT
        assert result.fragment_count == 0

    def test_candidates_without_fragments(self, project):
        write(project, "src/app/page.tsx", "export default function Page() { return null }\n")
        result = run_emotional_gate(project)
        assert result.passed is False
        assert result.score == 0
        assert result.reason == REASON_NO_FRAGMENTS
        assert result.candidate_files == [project / "src/app/page.tsx"]


# ===================================================================
#  End-to-end decisions
# ===================================================================

class TestEmotionalGate:
    def test_warm_prompt_passes(self, project):
        write(project, "prompts/system.md", WARM_PROMPT)
        result = run_emotional_gate(project)
        assert result.passed is True
        assert result.score == 100
        assert result.weakest_dimension is None
        assert result.remediation_hint is None
        assert result.reason == "Score 100 meets threshold 96"

    def test_cold_prompt_names_weakest_dimension(self, project):
        write(project, "prompts/system.md", COLD_PROMPT)
        result = run_emotional_gate(project)
        assert result.passed is False
        assert result.score < 96
        assert result.dimensions["warmth"] == 100
        # empathy is the first declared dimension among the zeros
        assert result.weakest_dimension == "empathy"
        empathy = get_default_config().emotional.get_dimension("empathy")
        assert result.remediation_hint == empathy.suggestion
        assert result.reason == f"Score {result.score} is below threshold 96"

    def test_fragments_from_code_and_markdown(self, project):
        write(project, "src/app/api/chat/route.ts", "const r = await chat({ system: `You are a friend` })\n")
        write(project, "prompts/system.md", WARM_PROMPT)
        result = run_emotional_gate(project)
        kinds = sorted(fs.fragment.kind.value for fs in result.fragment_scores)
        assert kinds == ["markdown", "system"]
        assert len(result.candidate_files) == 2

    def test_unreadable_file_is_skipped(self, project, monkeypatch):
        write(project, "prompts/broken-prompt.md", WARM_PROMPT)
        write(project, "prompts/system.md", WARM_PROMPT)
        real_read_text = Path.read_text

        def read_text(self, *args, **kwargs):
            if self.name == "broken-prompt.md":
                raise PermissionError(13, "Permission denied", str(self))
            return real_read_text(self, *args, **kwargs)

        monkeypatch.setattr(Path, "read_text", read_text)
        result = run_emotional_gate(project)
        assert len(result.candidate_files) == 2
        assert result.fragment_count == 1
        assert result.fragment_scores[0].fragment.source_file == project / "prompts/system.md"
        assert result.passed is True

    def test_cancellation(self, project):
        write(project, "prompts/system.md", WARM_PROMPT)
        cancel = threading.Event()
        cancel.set()
        with pytest.raises(GateCancelledError):
            run_emotional_gate(project, cancel_event=cancel)


# ===================================================================
#  Aggregation
# ===================================================================

class TestAggregator:
    def test_threshold_is_inclusive(self, single_rule_set):
        result = EmotionalAggregator(single_rule_set).aggregate([Path("p.ts")], [fragment("be kind")])
        assert result.score == 96
        assert result.passed is True

    def test_one_below_threshold_fails(self):
        rule_set = EmotionalRuleSet(
            dimensions=[
                {
                    "key": "kindness",
                    "name": "Kindness",
                    "weight": 1.0,
                    "positive": [{"pattern": "kind", "score": 47.5}],
                }
            ],
            bonus_weight=0,
        )
        result = EmotionalAggregator(rule_set).aggregate([Path("p.ts")], [fragment("be kind")])
        assert result.score == 95
        assert result.passed is False
        assert result.weakest_dimension == "kindness"
        assert result.remediation_hint == "more emotional language"

    def test_gate_score_is_mean_of_fragment_overalls(self, single_rule_set):
        result = EmotionalAggregator(single_rule_set).aggregate(
            [Path("p.ts")], [fragment("kind"), fragment("nothing here")]
        )
        assert [fs.overall for fs in result.fragment_scores] == [96, 0]
        assert result.score == 48
        assert result.dimensions == {"kindness": 48, "mission": 0}

    def test_weakest_ties_go_to_first_declared(self):
        rule_set = EmotionalRuleSet(
            dimensions=[
                {"key": "first", "name": "First", "weight": 1.0, "suggestion": "one"},
                {"key": "second", "name": "Second", "weight": 1.0, "suggestion": "two"},
            ],
        )
        result = EmotionalAggregator(rule_set).aggregate([Path("p.ts")], [fragment("plain")])
        assert result.weakest_dimension == "first"
        assert result.remediation_hint == "one"

    def test_bonus_never_reported_as_weakest(self):
        rule_set = EmotionalRuleSet(
            dimensions=[
                {"key": "warmth", "name": "Warmth", "weight": 1.0, "positive": [{"pattern": "warm", "score": 30}]}
            ],
            bonus=[{"pattern": "mission", "score": 10}],
        )
        result = EmotionalAggregator(rule_set).aggregate([Path("p.ts")], [fragment("warm")])
        assert result.dimensions["mission"] == 0
        assert result.weakest_dimension == "warmth"

    def test_to_dict_is_serializable(self, single_rule_set):
        result = EmotionalAggregator(single_rule_set).aggregate([Path("p.ts")], [fragment("kind")])
        data = result.to_dict()
        assert data["fragment_count"] == 1
        assert data["fragments"][0]["kind"] == "constant"
        assert data["candidate_files"] == ["p.ts"]

    def test_gate_score_and_dimension_averages_can_diverge(self):
        rule_set = EmotionalRuleSet(
            dimensions=[
                {"key": "a", "name": "A", "weight": 1.0, "positive": [{"pattern": "alpha", "score": 0.5}]},
                {"key": "b", "name": "B", "weight": 1.0, "positive": [{"pattern": "beta", "score": 0.5}]},
            ],
            bonus_weight=0,
        )
        result = EmotionalAggregator(rule_set).aggregate(
            [Path("p.ts")], [fragment("alpha"), fragment("beta"), fragment("plain")]
        )
        # each single-dimension fragment rounds (1 + 0) / 2 up to 1
        assert [fs.overall for fs in result.fragment_scores] == [1, 1, 0]
        assert result.score == 1
        # while each dimension averages 1/3, which rounds to 0
        assert result.dimensions == {"a": 0, "b": 0, "mission": 0}
        weighted = sum(result.dimensions[d.key] * d.weight for d in rule_set.dimensions) / 2.0
        assert weighted != result.score
