"""Rule sets for the release gates.

Patterns, weights and thresholds are facts, not opinions. They are validated
once into an immutable GateConfig and passed explicitly into every gate.
"""

from .defaults import DEFAULT_RULES, get_default_config
from .loader import RuleConfigError, build_config, load_config_file, load_rule_config
from .schema import (
    CrossReference,
    Dimension,
    EmotionalRuleSet,
    FragmentKind,
    GateConfig,
    IndependenceRuleSet,
    PatternEntry,
    Rule,
    SecurityRuleSet,
    Severity,
    compile_pattern,
)

__all__ = [
    "DEFAULT_RULES",
    "get_default_config",
    "RuleConfigError",
    "build_config",
    "load_config_file",
    "load_rule_config",
    "CrossReference",
    "Dimension",
    "EmotionalRuleSet",
    "FragmentKind",
    "GateConfig",
    "IndependenceRuleSet",
    "PatternEntry",
    "Rule",
    "SecurityRuleSet",
    "Severity",
    "compile_pattern",
]
