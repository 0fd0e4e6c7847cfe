"""Isolation (independence) policy.

Ensures a deliverable is truly standalone, with no cross-contamination from
other deliverables or from the tooling that produced it.

Checks, in order:
  IND-001 Product identifier is declared and does not look like a template
  IND-002 No parent/sister-app mentions in user-visible content
  IND-003 No references to other known deliverables (the one hard failure)
  IND-004 No internal infrastructure references
"""

import re
from pathlib import Path

from rules.schema import compile_pattern

from .framework import CheckDefinition, CheckOutcome, CheckPolicy, CheckStatus, Finding
from .project_identity import load_project_identity

# Text likely shown to a user: JSX text nodes and longer string literals
_JSX_TEXT = re.compile(r">([^<]+)<")
_STRING_LITERAL = re.compile(r"""["'`][^"'`]{10,}["'`]""")


class IndependencePolicy(CheckPolicy):
    """Catches cross-deliverable contamination before it ships."""

    name = "independence"

    def _define_checks(self) -> None:
        self.checks = [
            CheckDefinition(
                id="IND-001",
                name="Product ID",
                check=self._check_product_id,
                description="A unique product identifier is declared",
            ),
            CheckDefinition(
                id="IND-002",
                name="User Content",
                check=self._check_user_content,
                description="User-visible text does not reveal shared infrastructure",
            ),
            CheckDefinition(
                id="IND-003",
                name="Cross-MVP References",
                check=self._check_cross_references,
                description="No identifiers of other known deliverables",
            ),
            CheckDefinition(
                id="IND-004",
                name="Internal Leakage",
                check=self._check_internal_leakage,
                description="No internal tooling names or paths",
            ),
        ]

    @property
    def rules(self):
        return self.config.independence

    def _identity(self, root: Path):
        return load_project_identity(root, self.rules.env_files, self.rules.identifier_key)

    def _check_product_id(self, root: Path) -> CheckOutcome:
        identity = self._identity(root)
        details = {
            "product_id": identity.product_id,
            "package_name": identity.package_name,
            "found_in": identity.found_in,
        }

        identifier = identity.identifier
        if not identifier:
            return CheckOutcome(
                CheckStatus.WARNING,
                f"No {self.rules.identifier_key} found in env files. "
                f"Add {self.rules.identifier_key} for tracking.",
                {"checked": list(self.rules.env_files)},
            )

        if compile_pattern(self.rules.template_identifier_pattern, True).search(identifier):
            return CheckOutcome(
                CheckStatus.WARNING,
                f'Product ID "{identifier}" looks like a template. Use a unique name.',
                details,
            )

        source = f" (from {identity.found_in})" if identity.found_in else ""
        return CheckOutcome(CheckStatus.PASS, f"Product ID: {identifier}{source}", details)

    def _check_user_content(self, root: Path) -> CheckOutcome:
        violations: list[Finding] = []
        for relative_path, content in self.iter_files(
            root, self.rules.content_dirs, self.rules.content_extensions
        ):
            user_text = " ".join(
                _JSX_TEXT.findall(content) + _STRING_LITERAL.findall(content)
            )
            violations.extend(
                self.match_catalogue(relative_path, user_text, self.rules.forbidden_user_content)
            )

        if violations:
            return CheckOutcome(
                CheckStatus.WARNING,
                f"Found {len(violations)} factory/portfolio mentions in user content",
                {"violations": violations},
            )

        return CheckOutcome(CheckStatus.PASS, "No factory/portfolio mentions in user content")

    def _check_cross_references(self, root: Path) -> CheckOutcome:
        """Any reference to another deliverable is a blocker.

        A registry entry whose codename the project itself declares (compared
        case- and hyphen-insensitively) is the project talking about itself
        and is excluded.
        """
        identity = self._identity(root)
        registry = [
            ref for ref in self.rules.cross_references if not identity.refers_to(ref.codename)
        ]

        violations: list[Finding] = []
        for relative_path, content in self.iter_files(root, ["."], self.rules.scan_extensions):
            for ref in registry:
                count = sum(1 for _ in ref.regex.finditer(content))
                if count:
                    violations.append(Finding(file=relative_path, issue=ref.name, count=count))

        if violations:
            return CheckOutcome(
                CheckStatus.BLOCKER,
                f"Found {len(violations)} references to other deliverables!",
                {"violations": violations, "self": list(identity.identifiers)},
            )

        return CheckOutcome(CheckStatus.PASS, "No cross-deliverable references detected")

    def _check_internal_leakage(self, root: Path) -> CheckOutcome:
        violations: list[Finding] = []
        for relative_path, content in self.iter_files(root, ["."], self.rules.scan_extensions):
            violations.extend(
                self.match_catalogue(relative_path, content, self.rules.internal_leakage)
            )

        if violations:
            return CheckOutcome(
                CheckStatus.WARNING,
                f"Found {len(violations)} internal infrastructure references",
                {"violations": violations},
            )

        return CheckOutcome(CheckStatus.PASS, "No internal infrastructure leakage")
