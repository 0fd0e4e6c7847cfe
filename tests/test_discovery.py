from __future__ import annotations

import os
from pathlib import Path

from level1_discovery import FileLocator, extract_fragments, walk_files
from rules import FragmentKind, get_default_config

from conftest import write


# ===================================================================
#  Extraction rules
# ===================================================================

class TestExtractor:
    def test_system_template_literal(self):
        content = "const res = await ai.chat({ system: `You are a warm friend`, messages })"
        fragments = extract_fragments(content, Path("route.ts"))
        assert [(f.kind, f.text) for f in fragments] == [
            (FragmentKind.SYSTEM, "You are a warm friend")
        ]

    def test_system_double_quoted(self):
        fragments = extract_fragments('{ system: "Be gentle" }', Path("route.ts"))
        assert [(f.kind, f.text) for f in fragments] == [(FragmentKind.SYSTEM, "Be gentle")]

    def test_empty_double_quoted_is_skipped(self):
        assert extract_fragments('{ system: "" }', Path("route.ts")) == []

    def test_prompt_constants(self):
        content = 'const SYSTEM_PROMPT = `Welcome, friend`;\nlet userPrompt = "Tell me more";'
        fragments = extract_fragments(content, Path("prompts.ts"))
        assert [(f.kind, f.text) for f in fragments] == [
            (FragmentKind.CONSTANT, "Welcome, friend"),
            (FragmentKind.CONSTANT, "Tell me more"),
        ]

    def test_non_prompt_constants_ignored(self):
        content = 'const greeting = `Hello there`;\nconst title = "Home";'
        assert extract_fragments(content, Path("page.tsx")) == []

    def test_every_match_is_a_fragment(self):
        content = "a({ system: `first` }); b({ system: `second` });"
        texts = [f.text for f in extract_fragments(content, Path("route.ts"))]
        assert texts == ["first", "second"]

    def test_escaped_backtick_stays_inside_literal(self):
        content = "const prompt = `say \\`hi\\` now`;"
        fragments = extract_fragments(content, Path("prompt.ts"))
        assert len(fragments) == 1
        assert fragments[0].text == "say \\`hi\\` now"

    def test_line_continuation_inside_template_literal(self):
        content = "const SYSTEM_PROMPT = `You are a warm friend \\\nwho cares`;"
        fragments = extract_fragments(content, Path("prompt.ts"))
        assert [(f.kind, f.text) for f in fragments] == [
            (FragmentKind.CONSTANT, "You are a warm friend \\\nwho cares")
        ]

    def test_line_continuation_inside_double_quoted(self):
        fragments = extract_fragments('{ system: "Be gentle \\\nand kind" }', Path("route.ts"))
        assert [(f.kind, f.text) for f in fragments] == [
            (FragmentKind.SYSTEM, "Be gentle \\\nand kind")
        ]

    def test_markdown_longer_than_minimum(self):
        text = "x" * 51
        fragments = extract_fragments(text, Path("prompts/system.md"))
        assert [(f.kind, f.text) for f in fragments] == [(FragmentKind.MARKDOWN, text)]

    def test_short_markdown_ignored(self):
        assert extract_fragments("x" * 50, Path("prompts/system.md")) == []

    def test_long_code_file_is_not_markdown(self):
        assert extract_fragments("x" * 500, Path("lib/prompt.ts")) == []


# ===================================================================
#  File locator
# ===================================================================

class TestWalkFiles:
    def test_prunes_excluded_directories(self, project):
        write(project, "src/a.ts", "")
        write(project, "src/node_modules/pkg/b.ts", "")
        write(project, "src/.next/c.ts", "")
        found = walk_files(project / "src", [".ts"])
        assert found == [project / "src" / "a.ts"]

    def test_filters_extensions(self, project):
        write(project, "a.ts", "")
        write(project, "b.py", "")
        assert walk_files(project, [".ts"]) == [project / "a.ts"]

    def test_non_recursive(self, project):
        write(project, "a.md", "")
        write(project, "docs/b.md", "")
        assert walk_files(project, [".md"], recursive=False) == [project / "a.md"]

    def test_missing_directory_yields_nothing(self, project):
        assert walk_files(project / "missing", [".ts"]) == []

    def test_sorted_order(self, project):
        for name in ("c.ts", "a.ts", "b.ts"):
            write(project, f"lib/{name}", "")
        found = walk_files(project / "lib", [".ts"])
        assert [p.name for p in found] == ["a.ts", "b.ts", "c.ts"]

    def test_unreadable_directory_is_skipped(self, project, monkeypatch):
        write(project, "src/lib/locked/prompt.ts", "")
        write(project, "src/lib/open/prompt.ts", "")
        write(project, "src/lib/prompt.ts", "")
        real_scandir = os.scandir

        def scandir(path):
            if Path(path).name == "locked":
                raise PermissionError(13, "Permission denied", str(path))
            return real_scandir(path)

        monkeypatch.setattr(os, "scandir", scandir)
        found = walk_files(project / "src/lib", [".ts"])
        assert found == [project / "src/lib/prompt.ts", project / "src/lib/open/prompt.ts"]


class TestFileLocator:
    def make_locator(self) -> FileLocator:
        rules = get_default_config().emotional
        return FileLocator(rules.extensions, rules.filename_patterns)

    def test_overlapping_candidates_are_deduplicated(self, project):
        write(project, "src/app/api/chat/route.ts", "")
        write(project, "src/app/page.tsx", "")
        rules = get_default_config().emotional
        located = self.make_locator().locate(project, rules.candidate_dirs)
        assert located == [
            project / "src/app/api/chat/route.ts",
            project / "src/app/page.tsx",
        ]

    def test_filename_filters(self, project):
        write(project, "src/lib/systemPrompt.ts", "")
        write(project, "src/lib/utils.ts", "")
        write(project, "src/lib/welcome.prompt.md", "")
        rules = get_default_config().emotional
        located = self.make_locator().locate(project, rules.candidate_dirs)
        assert [p.name for p in located] == ["systemPrompt.ts", "welcome.prompt.md"]

    def test_root_is_scanned_without_recursion(self, project):
        write(project, "system-prompt.md", "")
        write(project, "docs/prompt.md", "")
        rules = get_default_config().emotional
        located = self.make_locator().locate(project, rules.candidate_dirs)
        assert located == [project / "system-prompt.md"]

    def test_no_filters_accepts_every_allowed_extension(self, project):
        write(project, "lib/anything.ts", "")
        locator = FileLocator([".ts"])
        assert locator.locate(project, ["lib"]) == [project / "lib/anything.ts"]
