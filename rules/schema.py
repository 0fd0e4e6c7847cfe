"""Rule set schema definitions using Pydantic.

This module defines the immutable configuration contract for every gate:
weighted emotional dimensions, secret and insecure-pattern catalogues, and the
cross-deliverable registry. Once validated, a configuration is read-only for
the lifetime of a run.
"""

import re
from enum import Enum, IntEnum
from functools import lru_cache
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from utils import EXCLUDED_DIRECTORIES


@lru_cache(maxsize=None)
def compile_pattern(pattern: str, ignore_case: bool = False) -> re.Pattern:
    """Compile (and memoize) a configured regular expression."""
    flags = re.IGNORECASE if ignore_case else 0
    return re.compile(pattern, flags)


def _ensure_compiles(pattern: str) -> str:
    try:
        re.compile(pattern)
    except re.error as e:
        raise ValueError(f"invalid regular expression {pattern!r}: {e}") from e
    return pattern


class Severity(IntEnum):
    """Ordered severity of a finding; the highest one found decides a check."""

    NONE = 0
    WARNING = 1
    BLOCKER = 2


class FragmentKind(str, Enum):
    """Where an emotional fragment was extracted from."""

    SYSTEM = "system"
    CONSTANT = "constant"
    MARKDOWN = "markdown"


class Rule(BaseModel):
    """One (pattern, signed score) pair contributing to a dimension."""

    pattern: str = Field(..., min_length=1, description="Regular expression")
    score: float = Field(..., description="Signed contribution per match")

    @field_validator("pattern")
    @classmethod
    def validate_pattern(cls, v: str) -> str:
        """Reject patterns that do not compile."""
        return _ensure_compiles(v)

    model_config = ConfigDict(frozen=True, extra="forbid")


class Dimension(BaseModel):
    """A named, weighted evaluation axis of the emotional gate."""

    key: str = Field(..., min_length=1, description="Stable identifier")
    name: str = Field(..., min_length=1, description="Display name")
    description: str = ""
    weight: float = Field(..., gt=0, description="Weight in the overall mean")
    positive: tuple[Rule, ...] = Field(default=(), description="Rules that add")
    negative: tuple[Rule, ...] = Field(default=(), description="Rules that subtract")
    suggestion: str = Field(default="", description="Remediation hint")

    @field_validator("positive")
    @classmethod
    def validate_positive(cls, v: tuple[Rule, ...]) -> tuple[Rule, ...]:
        """Positive rules must add to the score."""
        for rule in v:
            if rule.score <= 0:
                raise ValueError(f"positive rule {rule.pattern!r} must have a score > 0")
        return v

    @field_validator("negative")
    @classmethod
    def validate_negative(cls, v: tuple[Rule, ...]) -> tuple[Rule, ...]:
        """Negative rules must subtract from the score."""
        for rule in v:
            if rule.score >= 0:
                raise ValueError(f"negative rule {rule.pattern!r} must have a score < 0")
        return v

    @property
    def rules(self) -> tuple[Rule, ...]:
        """Positive rules followed by negative rules, in evaluation order."""
        return self.positive + self.negative

    model_config = ConfigDict(frozen=True, extra="forbid")


class EmotionalRuleSet(BaseModel):
    """Configuration for the emotional-tone gate."""

    name: str = "emotional"
    threshold: int = Field(default=96, ge=0, le=100)
    normalization: float = Field(default=2.0, gt=0)
    dimensions: tuple[Dimension, ...] = Field(..., min_length=1)
    bonus_name: str = "mission"
    bonus: tuple[Rule, ...] = ()
    bonus_weight: float = Field(default=1.0, ge=0)
    candidate_dirs: tuple[str, ...] = ()
    extensions: tuple[str, ...] = (".ts", ".tsx", ".js", ".jsx", ".md")
    filename_patterns: tuple[str, ...] = ()
    markdown_extensions: tuple[str, ...] = (".md",)
    min_markdown_length: int = Field(default=50, ge=0)

    @field_validator("bonus")
    @classmethod
    def validate_bonus(cls, v: tuple[Rule, ...]) -> tuple[Rule, ...]:
        """Bonus rules only ever add."""
        for rule in v:
            if rule.score <= 0:
                raise ValueError(f"bonus rule {rule.pattern!r} must have a score > 0")
        return v

    @field_validator("filename_patterns")
    @classmethod
    def validate_filename_patterns(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Filename filters must compile."""
        return tuple(_ensure_compiles(p) for p in v)

    @model_validator(mode="after")
    def validate_dimension_keys(self) -> "EmotionalRuleSet":
        """Dimension keys must be unique and distinct from the bonus key."""
        keys = [d.key for d in self.dimensions]
        if len(keys) != len(set(keys)):
            raise ValueError(f"duplicate dimension keys: {keys}")
        if self.bonus_name in keys:
            raise ValueError(f"bonus name {self.bonus_name!r} clashes with a dimension key")
        return self

    def get_dimension(self, key: str) -> Dimension | None:
        """Look up a dimension by key."""
        for dimension in self.dimensions:
            if dimension.key == key:
                return dimension
        return None

    model_config = ConfigDict(frozen=True, extra="forbid")


class PatternEntry(BaseModel):
    """A named pattern in a security or independence catalogue."""

    name: str = Field(..., min_length=1)
    pattern: str = Field(..., min_length=1)
    ignore_case: bool = False
    severity: Severity = Severity.BLOCKER

    @field_validator("pattern")
    @classmethod
    def validate_pattern(cls, v: str) -> str:
        """Reject patterns that do not compile."""
        return _ensure_compiles(v)

    @field_validator("severity", mode="before")
    @classmethod
    def parse_severity(cls, v: Any) -> Any:
        """Accept severity names ("warning", "blocker") as well as ranks."""
        if isinstance(v, str):
            try:
                return Severity[v.strip().upper()]
            except KeyError as e:
                raise ValueError(f"unknown severity {v!r}") from e
        return v

    @property
    def regex(self) -> re.Pattern:
        """Compiled pattern honoring ``ignore_case``."""
        return compile_pattern(self.pattern, self.ignore_case)

    model_config = ConfigDict(frozen=True, extra="forbid")


class SecurityRuleSet(BaseModel):
    """Configuration for the security-hygiene gate."""

    name: str = "security"
    migrations_dir: str = "supabase/migrations"
    migration_extensions: tuple[str, ...] = (".sql",)
    source_extensions: tuple[str, ...] = (".ts", ".tsx", ".js", ".jsx", ".sql")
    secret_scan_dirs: tuple[str, ...] = ()
    client_dirs: tuple[str, ...] = ()
    secret_patterns: tuple[PatternEntry, ...] = ()
    service_key_patterns: tuple[PatternEntry, ...] = ()
    insecure_patterns: tuple[PatternEntry, ...] = ()

    model_config = ConfigDict(frozen=True, extra="forbid")


class CrossReference(BaseModel):
    """Another known deliverable whose identifiers must not appear here."""

    name: str = Field(..., min_length=1)
    codename: str = Field(..., min_length=1, description="Canonical hyphenated name")
    pattern: str = Field(..., min_length=1)

    @field_validator("pattern")
    @classmethod
    def validate_pattern(cls, v: str) -> str:
        """Reject patterns that do not compile."""
        return _ensure_compiles(v)

    @property
    def regex(self) -> re.Pattern:
        """Compiled, case-insensitive pattern."""
        return compile_pattern(self.pattern, True)

    model_config = ConfigDict(frozen=True, extra="forbid")


class IndependenceRuleSet(BaseModel):
    """Configuration for the isolation (independence) gate."""

    name: str = "independence"
    env_files: tuple[str, ...] = (".env", ".env.local", ".env.production")
    identifier_key: str = "PRODUCT_ID"
    template_identifier_pattern: str = "factory|portfolio|template|example"
    content_dirs: tuple[str, ...] = ()
    content_extensions: tuple[str, ...] = (".tsx", ".jsx", ".ts", ".js")
    scan_extensions: tuple[str, ...] = (".ts", ".tsx", ".js", ".jsx", ".json", ".md")
    forbidden_user_content: tuple[PatternEntry, ...] = ()
    cross_references: tuple[CrossReference, ...] = ()
    internal_leakage: tuple[PatternEntry, ...] = ()

    @field_validator("template_identifier_pattern")
    @classmethod
    def validate_template_pattern(cls, v: str) -> str:
        """Reject patterns that do not compile."""
        return _ensure_compiles(v)

    model_config = ConfigDict(frozen=True, extra="forbid")


class GateConfig(BaseModel):
    """Complete gate configuration - immutable for the lifetime of a run."""

    excluded_dirs: tuple[str, ...] = EXCLUDED_DIRECTORIES
    emotional: EmotionalRuleSet
    security: SecurityRuleSet
    independence: IndependenceRuleSet

    model_config = ConfigDict(frozen=True, extra="forbid")
