"""Gate entry points.

Each gate is invoked with a project root and returns a structured result.
A failing gate is a result, never an exception: missing content, unreadable
files and policy violations all come back inside the result object. Only
cancellation and genuinely unexpected errors propagate.

The three gates share no mutable state; running all of them is three
independent calls.
"""

import threading
from pathlib import Path
from typing import Optional

from level1_discovery import FileLocator, Fragment, extract_fragments
from level2_scoring import EmotionalAggregator, EmotionalGateResult
from level3_checks import CheckGateResult, IndependencePolicy, SecurityPolicy
from rules import GateConfig, get_default_config
from utils import get_logger, raise_if_cancelled, read_text_safe

logger = get_logger(__name__)


def run_emotional_gate(
    project_path: str | Path = ".",
    config: Optional[GateConfig] = None,
    cancel_event: Optional[threading.Event] = None,
) -> EmotionalGateResult:
    """Run the emotional-tone gate.

    Pipeline: locate candidate files, extract fragments, score each fragment,
    aggregate and decide.

    Args:
        project_path: Project root
        config: Gate configuration (defaults to the built-in rules)
        cancel_event: Optional event checked between files

    Returns:
        EmotionalGateResult
    """
    config = config or get_default_config()
    rule_set = config.emotional
    root = Path(project_path)

    locator = FileLocator(
        extensions=rule_set.extensions,
        filename_patterns=rule_set.filename_patterns,
        excluded_dirs=config.excluded_dirs,
    )
    candidate_files = locator.locate(root, rule_set.candidate_dirs, cancel_event=cancel_event)

    if not candidate_files:
        logger.warning(
            f"No candidate files found. Checked: {', '.join(rule_set.candidate_dirs)}"
        )
    else:
        logger.info(f"Found {len(candidate_files)} candidate file(s)")

    fragments: list[Fragment] = []
    for path in candidate_files:
        raise_if_cancelled(cancel_event)
        content = read_text_safe(path)
        if content is None:
            continue
        fragments.extend(
            extract_fragments(
                content,
                path,
                markdown_extensions=rule_set.markdown_extensions,
                min_markdown_length=rule_set.min_markdown_length,
            )
        )

    if candidate_files and not fragments:
        logger.warning("No fragments extracted; files may not contain recognizable prompt patterns")
    elif fragments:
        logger.info(f"Extracted {len(fragments)} fragment(s)")

    result = EmotionalAggregator(rule_set).aggregate(candidate_files, fragments)
    logger.info(str(result))
    return result


def run_security_gate(
    project_path: str | Path = ".",
    config: Optional[GateConfig] = None,
    cancel_event: Optional[threading.Event] = None,
) -> CheckGateResult:
    """Run the security-hygiene gate.

    Args:
        project_path: Project root
        config: Gate configuration (defaults to the built-in rules)
        cancel_event: Optional event checked between files and checks

    Returns:
        CheckGateResult
    """
    policy = SecurityPolicy(config or get_default_config(), cancel_event=cancel_event)
    result = policy.run(Path(project_path))
    logger.info(str(result))
    return result


def run_independence_gate(
    project_path: str | Path = ".",
    config: Optional[GateConfig] = None,
    cancel_event: Optional[threading.Event] = None,
) -> CheckGateResult:
    """Run the isolation (independence) gate.

    Args:
        project_path: Project root
        config: Gate configuration (defaults to the built-in rules)
        cancel_event: Optional event checked between files and checks

    Returns:
        CheckGateResult
    """
    policy = IndependencePolicy(config or get_default_config(), cancel_event=cancel_event)
    result = policy.run(Path(project_path))
    logger.info(str(result))
    return result
