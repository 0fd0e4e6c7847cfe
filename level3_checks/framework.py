"""Check framework for the security and independence policies.

A policy declares an ordered, fixed list of checks. Every check is a function
of the project root that returns one outcome; all checks always run, in
declaration order, and the gate passes iff no check is a blocker. Warnings
never fail a gate.

Findings inside a check carry an ordered Severity; the check's status is the
maximum severity found.
"""

import threading
from dataclasses import asdict, dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Iterable, Iterator, Optional

from level1_discovery.locator import walk_files
from rules.schema import GateConfig, PatternEntry, Severity
from utils import get_logger, raise_if_cancelled, read_text_safe, relative_to_root

logger = get_logger(__name__)


class CheckStatus(str, Enum):
    """Outcome of a single check."""

    PASS = "pass"
    WARNING = "warning"
    BLOCKER = "blocker"
    SKIP = "skip"


def status_for(severity: Severity) -> CheckStatus:
    """Map the highest finding severity to a check status."""
    if severity >= Severity.BLOCKER:
        return CheckStatus.BLOCKER
    if severity >= Severity.WARNING:
        return CheckStatus.WARNING
    return CheckStatus.PASS


@dataclass(frozen=True)
class Finding:
    """One pattern matched in one file."""

    file: str
    issue: str
    severity: Severity = Severity.BLOCKER
    count: int = 1

    def to_dict(self) -> dict[str, Any]:
        """Serializable representation."""
        data = asdict(self)
        data["severity"] = self.severity.name.lower()
        return data


@dataclass(frozen=True)
class CheckOutcome:
    """What a check function returns."""

    status: CheckStatus
    message: str
    details: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class CheckDefinition:
    """A declared check: identity plus the function that runs it."""

    id: str
    name: str
    check: Callable[[Path], CheckOutcome]
    description: str = ""


@dataclass
class Check:
    """Result of one check inside a policy run."""

    id: str
    name: str
    status: CheckStatus
    message: str
    details: dict[str, Any] = field(default_factory=dict)
    description: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Serializable representation."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "status": self.status.value,
            "message": self.message,
            "details": _serialize(self.details),
        }


@dataclass
class CheckGateResult:
    """Decision of a check-based gate."""

    policy: str
    passed: bool
    blocker_count: int
    warning_count: int
    pass_count: int = 0
    skip_count: int = 0
    checks: list[Check] = field(default_factory=list)

    def __str__(self) -> str:
        """Human-readable representation."""
        status = "PASSED" if self.passed else "FAILED"
        return (
            f"{self.policy.capitalize()} gate {status}: "
            f"{self.blocker_count} blocker(s), {self.warning_count} warning(s)"
        )

    def to_dict(self) -> dict[str, Any]:
        """Serializable representation."""
        return {
            "policy": self.policy,
            "passed": self.passed,
            "blockers": self.blocker_count,
            "warnings": self.warning_count,
            "passes": self.pass_count,
            "skips": self.skip_count,
            "checks": [check.to_dict() for check in self.checks],
        }


def _serialize(value: Any) -> Any:
    if isinstance(value, Finding):
        return value.to_dict()
    if isinstance(value, dict):
        return {k: _serialize(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_serialize(v) for v in value]
    if isinstance(value, Path):
        return str(value)
    return value


class CheckPolicy:
    """Base class for a policy made of ordered whole-project checks.

    Subclasses declare their checks in ``_define_checks``; that method should
    feel like configuration, not logic.
    """

    name = "policy"

    def __init__(self, config: GateConfig, cancel_event: Optional[threading.Event] = None):
        """Initialize the policy.

        Args:
            config: Gate configuration (read-only)
            cancel_event: Optional event checked between files and between checks
        """
        self.config = config
        self.cancel_event = cancel_event
        self.checks: list[CheckDefinition] = []

        self._define_checks()

    def _define_checks(self) -> None:
        raise NotImplementedError

    def iter_files(
        self,
        root: Path,
        directories: Iterable[str],
        extensions: Iterable[str],
    ) -> Iterator[tuple[str, str]]:
        """Yield (relative path, content) for every readable file.

        Each directory (relative to root, "" or "." for the root itself) is
        walked recursively. Unreadable files are skipped.
        """
        seen: set[Path] = set()
        for directory in directories:
            full_dir = root / directory if directory not in ("", ".") else root
            if not full_dir.is_dir():
                continue
            for path in walk_files(
                full_dir,
                extensions,
                self.config.excluded_dirs,
                cancel_event=self.cancel_event,
            ):
                if path in seen:
                    continue
                seen.add(path)
                raise_if_cancelled(self.cancel_event)
                content = read_text_safe(path)
                if content is None:
                    continue
                yield relative_to_root(path, root), content

    def match_catalogue(
        self,
        relative_path: str,
        content: str,
        catalogue: Iterable[PatternEntry],
    ) -> list[Finding]:
        """Match every catalogue entry against one file's content."""
        findings = []
        for entry in catalogue:
            count = sum(1 for _ in entry.regex.finditer(content))
            if count:
                findings.append(
                    Finding(
                        file=relative_path,
                        issue=entry.name,
                        severity=entry.severity,
                        count=count,
                    )
                )
        return findings

    def run(self, root: Path) -> CheckGateResult:
        """Run every declared check in order and aggregate the outcomes.

        Args:
            root: Project root

        Returns:
            CheckGateResult; passed iff there are no blockers
        """
        root = Path(root)
        checks: list[Check] = []

        for definition in self.checks:
            raise_if_cancelled(self.cancel_event)
            outcome = definition.check(root)
            logger.debug(f"{definition.id} {definition.name}: {outcome.status.value} - {outcome.message}")
            checks.append(
                Check(
                    id=definition.id,
                    name=definition.name,
                    status=outcome.status,
                    message=outcome.message,
                    details=dict(outcome.details),
                    description=definition.description,
                )
            )

        counts = {status: 0 for status in CheckStatus}
        for check in checks:
            counts[check.status] += 1

        return CheckGateResult(
            policy=self.name,
            passed=counts[CheckStatus.BLOCKER] == 0,
            blocker_count=counts[CheckStatus.BLOCKER],
            warning_count=counts[CheckStatus.WARNING],
            pass_count=counts[CheckStatus.PASS],
            skip_count=counts[CheckStatus.SKIP],
            checks=checks,
        )
