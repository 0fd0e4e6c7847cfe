from __future__ import annotations

from pathlib import Path

import pytest

from rules import EmotionalRuleSet


def write(root: Path, relative: str, text: str) -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def project(tmp_path: Path) -> Path:
    root = tmp_path / "app"
    root.mkdir()
    return root


@pytest.fixture
def single_rule_set() -> EmotionalRuleSet:
    """One dimension, one rule, no bonus weight: overall equals the dimension value."""
    return EmotionalRuleSet(
        dimensions=[
            {
                "key": "kindness",
                "name": "Kindness",
                "weight": 1.0,
                "positive": [{"pattern": "kind", "score": 48}],
                "suggestion": '"be kind"',
            }
        ],
        bonus_weight=0,
    )
