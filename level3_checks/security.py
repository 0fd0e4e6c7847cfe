"""Security-hygiene policy.

Checks, in order:
  SEC-001 Row-level security policies exist in migrations
  SEC-002 No hardcoded secrets in source directories
  SEC-003 Service role key not exposed to client code
  SEC-004 No insecure code patterns anywhere in the project
"""

import re
from pathlib import Path

from level1_discovery.locator import walk_files
from rules.schema import Severity

from .framework import (
    CheckDefinition,
    CheckOutcome,
    CheckPolicy,
    CheckStatus,
    Finding,
    status_for,
)

_RLS_ENABLE = re.compile(r"ALTER TABLE.*ENABLE ROW LEVEL SECURITY", re.IGNORECASE)
_CREATE_POLICY = re.compile(r"CREATE POLICY", re.IGNORECASE)
_RLS_TABLE = re.compile(r"ALTER TABLE\s+(?:public\.)?(\w+)\s+ENABLE", re.IGNORECASE)


class SecurityPolicy(CheckPolicy):
    """Prevents shipping a deliverable with leaked secrets or unsafe patterns."""

    name = "security"

    def _define_checks(self) -> None:
        self.checks = [
            CheckDefinition(
                id="SEC-001",
                name="RLS Policies",
                check=self._check_rls_policies,
                description="Migrations enable row-level security",
            ),
            CheckDefinition(
                id="SEC-002",
                name="Hardcoded Secrets",
                check=self._check_hardcoded_secrets,
                description="No secret-shaped values in source directories",
            ),
            CheckDefinition(
                id="SEC-003",
                name="Service Key Exposure",
                check=self._check_service_key_exposure,
                description="Service role key is never referenced from client code",
            ),
            CheckDefinition(
                id="SEC-004",
                name="Insecure Patterns",
                check=self._check_insecure_patterns,
                description="No dynamic execution, HTML injection or interpolated SQL",
            ),
        ]

    @property
    def rules(self):
        return self.config.security

    def _check_rls_policies(self, root: Path) -> CheckOutcome:
        """Look for row-level security statements in migrations.

        A project without migrations is skipped, not penalized: the absence of
        a database is not evidence of a misconfigured one.
        """
        migrations_path = root / self.rules.migrations_dir
        if not migrations_path.is_dir():
            return CheckOutcome(
                CheckStatus.SKIP, f"No {self.rules.migrations_dir} directory found"
            )

        sql_files = walk_files(
            migrations_path,
            self.rules.migration_extensions,
            self.config.excluded_dirs,
            cancel_event=self.cancel_event,
        )
        if not sql_files:
            return CheckOutcome(CheckStatus.SKIP, "No migration files found")

        statements = 0
        tables: list[str] = []
        for _, content in self.iter_files(
            root, [self.rules.migrations_dir], self.rules.migration_extensions
        ):
            statements += len(_RLS_ENABLE.findall(content))
            statements += len(_CREATE_POLICY.findall(content))
            tables.extend(_RLS_TABLE.findall(content))

        if statements == 0:
            return CheckOutcome(
                CheckStatus.WARNING,
                "No RLS policies found in migrations. Add RLS before production.",
                {"migration_files": len(sql_files)},
            )

        return CheckOutcome(
            CheckStatus.PASS,
            f"Found {statements} RLS statements on tables: {', '.join(tables) or 'check migrations'}",
            {"policies": statements, "tables": tables},
        )

    def _check_hardcoded_secrets(self, root: Path) -> CheckOutcome:
        """Any secret-shaped match is a blocker."""
        violations: list[Finding] = []
        for relative_path, content in self.iter_files(
            root, self.rules.secret_scan_dirs, self.rules.source_extensions
        ):
            violations.extend(
                self.match_catalogue(relative_path, content, self.rules.secret_patterns)
            )

        if violations:
            return CheckOutcome(
                CheckStatus.BLOCKER,
                f"Found {len(violations)} potential hardcoded secrets",
                {"violations": violations},
            )

        return CheckOutcome(CheckStatus.PASS, "No hardcoded secrets detected")

    def _check_service_key_exposure(self, root: Path) -> CheckOutcome:
        """Client-accessible code must never reference the service role key."""
        violations: list[Finding] = []
        for relative_path, content in self.iter_files(
            root, self.rules.client_dirs, self.rules.source_extensions
        ):
            if any(entry.regex.search(content) for entry in self.rules.service_key_patterns):
                violations.append(
                    Finding(
                        file=relative_path,
                        issue="Service role key referenced in client-accessible code",
                    )
                )

        if violations:
            return CheckOutcome(
                CheckStatus.BLOCKER,
                "Service role key exposed to client!",
                {"violations": violations},
            )

        return CheckOutcome(CheckStatus.PASS, "Service role key not exposed to client")

    def _check_insecure_patterns(self, root: Path) -> CheckOutcome:
        """Scan every project file; the highest severity found wins."""
        findings: list[Finding] = []
        for relative_path, content in self.iter_files(root, ["."], self.rules.source_extensions):
            findings.extend(
                self.match_catalogue(relative_path, content, self.rules.insecure_patterns)
            )

        severity = max((f.severity for f in findings), default=Severity.NONE)
        blockers = [f for f in findings if f.severity == Severity.BLOCKER]
        warnings = [f for f in findings if f.severity == Severity.WARNING]
        status = status_for(severity)

        if status == CheckStatus.BLOCKER:
            return CheckOutcome(
                status,
                f"Found {len(blockers)} critical security issues",
                {"blockers": blockers, "warnings": warnings},
            )
        if status == CheckStatus.WARNING:
            return CheckOutcome(
                status,
                f"Found {len(warnings)} security warnings",
                {"warnings": warnings},
            )
        return CheckOutcome(CheckStatus.PASS, "No insecure patterns detected")
