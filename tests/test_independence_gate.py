from __future__ import annotations

import json

from level3_checks import CheckStatus, collapse_identifier, load_project_identity
from level4_gates import run_independence_gate

from conftest import write


def check(result, check_id):
    return next(c for c in result.checks if c.id == check_id)


# ===================================================================
#  Declared identity
# ===================================================================

class TestProjectIdentity:
    def test_collapse(self):
        assert collapse_identifier("Vibe_Check App") == "vibecheckapp"

    def test_product_id_from_env(self, project):
        write(project, ".env", "PRODUCT_ID=vibe-check\n")
        identity = load_project_identity(project)
        assert identity.product_id == "vibe-check"
        assert identity.found_in == ".env"

    def test_prefixed_key_is_accepted(self, project):
        write(project, ".env.local", "NEXT_PUBLIC_PRODUCT_ID=daily-affirmation\n")
        identity = load_project_identity(project)
        assert identity.identifier == "daily-affirmation"
        assert identity.found_in == ".env.local"

    def test_malformed_package_json_is_absent(self, project):
        write(project, "package.json", "{not json")
        assert load_project_identity(project).package_name is None

    def test_refers_to_ignores_case_and_separators(self, project):
        write(project, ".env", "PRODUCT_ID=Vibe_Check_App\n")
        identity = load_project_identity(project)
        assert identity.refers_to("vibe-check")
        assert not identity.refers_to("focus-timer")


# ===================================================================
#  Checks
# ===================================================================

class TestIndependenceGate:
    def test_empty_project_only_warns(self, project):
        result = run_independence_gate(project)
        assert result.passed is True
        assert [c.id for c in result.checks] == ["IND-001", "IND-002", "IND-003", "IND-004"]
        assert check(result, "IND-001").status == CheckStatus.WARNING
        assert result.warning_count == 1

    def test_template_like_product_id_warns(self, project):
        write(project, ".env", "PRODUCT_ID=example-app\n")
        ind001 = check(run_independence_gate(project), "IND-001")
        assert ind001.status == CheckStatus.WARNING
        assert "looks like a template" in ind001.message

    def test_package_name_is_fallback_identifier(self, project):
        write(project, "package.json", json.dumps({"name": "focus-timer"}))
        write(project, "README.md", "# focus-timer\n")
        result = run_independence_gate(project)
        assert check(result, "IND-001").message == "Product ID: focus-timer"
        assert check(result, "IND-003").status == CheckStatus.PASS
        assert result.passed is True

    def test_other_deliverable_is_blocker(self, project):
        write(project, ".env", "PRODUCT_ID=vibe-check\n")
        write(
            project,
            "src/app/page.tsx",
            'const slug = "vibe-check";\nimport helpers from "../recipe-genie/lib";\n',
        )
        result = run_independence_gate(project)
        ind003 = check(result, "IND-003")
        assert ind003.status == CheckStatus.BLOCKER
        assert ind003.message == "Found 1 references to other deliverables!"
        finding = ind003.details["violations"][0]
        assert finding.issue == "Recipe Genie reference"
        assert finding.file == "src/app/page.tsx"
        assert result.passed is False

    def test_separator_variants_of_own_name_are_excluded(self, project):
        write(project, ".env", "PRODUCT_ID=vibe_check_app\n")
        write(project, "src/lib/brand.ts", 'export const name = "vibe-check";\n')
        assert check(run_independence_gate(project), "IND-003").status == CheckStatus.PASS

    def test_user_content_mentions_warn(self, project):
        write(project, ".env", "PRODUCT_ID=moodboard\n")
        write(project, "src/app/page.tsx", "<footer><p>Part of the AI Factory family</p></footer>\n")
        result = run_independence_gate(project)
        ind002 = check(result, "IND-002")
        assert ind002.status == CheckStatus.WARNING
        issues = sorted(f.issue for f in ind002.details["violations"])
        assert issues == ["AI Factory mention", "Parent company reveal"]
        assert result.passed is True

    def test_internal_leakage_warns(self, project):
        write(project, ".env", "PRODUCT_ID=moodboard\n")
        write(project, "README.md", "Generated by scripts/factory/new.sh\n")
        ind004 = check(run_independence_gate(project), "IND-004")
        assert ind004.status == CheckStatus.WARNING
        assert ind004.details["violations"][0].file == "README.md"
