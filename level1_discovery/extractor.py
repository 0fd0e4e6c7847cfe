"""Content extractor for the emotional gate.

This module pulls scorable text fragments out of a file's full text. Each
extraction rule is independent and may yield any number of fragments; the
same text matched by two rules is submitted twice.

String literals end at the next unescaped delimiter of the same kind. A
backslash-escaped delimiter (\\` or \\") stays inside the literal, and so does a
backslash line continuation.
"""

import re
from dataclasses import dataclass
from pathlib import Path

from rules.schema import FragmentKind

_BACKTICK_LITERAL = r"`((?:\\[\s\S]|[^`\\])*)`"
_DOUBLE_QUOTED_LITERAL = r'"((?:\\[\s\S]|[^"\\])+)"'
_PROMPT_DECLARATION = r"(?:const|let)\s+\w*(?i:prompt)\w*\s*=\s*"

EXTRACTION_RULES: tuple[tuple[FragmentKind, re.Pattern], ...] = (
    (FragmentKind.SYSTEM, re.compile(r"system:\s*" + _BACKTICK_LITERAL)),
    (FragmentKind.SYSTEM, re.compile(r"system:\s*" + _DOUBLE_QUOTED_LITERAL)),
    (FragmentKind.CONSTANT, re.compile(_PROMPT_DECLARATION + _BACKTICK_LITERAL)),
    (FragmentKind.CONSTANT, re.compile(_PROMPT_DECLARATION + _DOUBLE_QUOTED_LITERAL)),
)


@dataclass(frozen=True)
class Fragment:
    """A unit of extracted text submitted for scoring."""

    source_file: Path
    kind: FragmentKind
    text: str


def extract_fragments(
    content: str,
    source_file: Path,
    markdown_extensions: tuple[str, ...] = (".md",),
    min_markdown_length: int = 50,
) -> list[Fragment]:
    """Extract scorable fragments from one file's text.

    Args:
        content: Full text of the file
        source_file: Path the text was read from (its suffix selects markdown handling)
        markdown_extensions: Suffixes treated as whole-file markdown documents
        min_markdown_length: A markdown file must be longer than this to count

    Returns:
        Fragments in rule order, then match order within each rule
    """
    fragments: list[Fragment] = []

    for kind, regex in EXTRACTION_RULES:
        for match in regex.finditer(content):
            fragments.append(Fragment(source_file=source_file, kind=kind, text=match.group(1)))

    if Path(source_file).suffix in markdown_extensions and len(content) > min_markdown_length:
        fragments.append(
            Fragment(source_file=source_file, kind=FragmentKind.MARKDOWN, text=content)
        )

    return fragments
