"""Command-line interface for ReleaseGate.

This module provides the CLI entry point. It handles argument parsing, rule
configuration loading and gate execution, and maps the outcome to an exit
code: 0 when the invoked gate (or, for ``validate``, every gate) passes and
1 otherwise, including on any unexpected internal error.
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

from core.orchestrator import GateOrchestrator
from level5_reporting import ExportError, ReportGenerator, export_json, to_json
from rules import RuleConfigError, load_rule_config
from utils import (
    APP_NAME,
    APP_VERSION,
    DEFAULT_PROJECT_PATH,
    EXIT_GATE_FAILED,
    EXIT_INVALID_CONFIG,
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    GateCancelledError,
    get_logger,
    setup_logging,
)

logger = get_logger(__name__)

GATE_COMMANDS = ("emotional", "security", "independence")


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed arguments namespace
    """
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "path",
        nargs="?",
        default=DEFAULT_PROJECT_PATH,
        help="Project root to validate (default: current directory)",
    )
    common.add_argument(
        "--rules",
        type=str,
        default=None,
        help="YAML/JSON file overriding built-in rule sections",
    )
    common.add_argument(
        "--json",
        action="store_true",
        help="Print the result as JSON instead of a text report",
    )
    common.add_argument(
        "--output",
        type=str,
        default=None,
        help="Also write the JSON result to this file",
    )
    common.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    parser = argparse.ArgumentParser(
        prog="releasegate",
        description=f"{APP_NAME} - pre-release content-quality gates",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"{APP_NAME} {APP_VERSION}")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute", required=True)
    subparsers.add_parser(
        "emotional", parents=[common], help="Score user-facing prompts for warmth and validation"
    )
    subparsers.add_parser(
        "security", parents=[common], help="Check for leaked secrets and unsafe patterns"
    )
    subparsers.add_parser(
        "independence", parents=[common], help="Check for cross-deliverable contamination"
    )
    subparsers.add_parser("validate", parents=[common], help="Run all three gates")

    return parser.parse_args(argv)


def run_command(args: argparse.Namespace) -> int:
    """Run the gate(s) selected on the command line.

    Args:
        args: Parsed arguments

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    project_path = Path(args.path)
    if not project_path.is_dir():
        print(f"✗ Project not found: {project_path}", file=sys.stderr)
        return EXIT_GATE_FAILED

    config = load_rule_config(args.rules)
    orchestrator = GateOrchestrator(project_path, config)
    reporter = ReportGenerator(config.emotional)

    if args.command == "validate":
        result = orchestrator.validate_all()
        sections = [
            ("EMOTIONAL GATE", reporter.format_emotional_report(result.emotional)),
            ("SECURITY GATE", reporter.format_check_report(result.security)),
            ("INDEPENDENCE GATE", reporter.format_check_report(result.independence)),
        ]
        text_report = "\n\n".join(f"   {title}\n\n{body}" for title, body in sections)
        text_report += "\n\n" + "═" * 60 + "\n\n" + reporter.format_summary(result)
    elif args.command in GATE_COMMANDS:
        result = orchestrator.run_gate(args.command)
        if args.command == "emotional":
            text_report = reporter.format_emotional_report(result)
        else:
            text_report = reporter.format_check_report(result)
    else:
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if args.json:
        print(to_json(result))
    else:
        print(f"\n   {APP_NAME} - {args.command}: {project_path}\n")
        print(text_report)
        print()
        label = "All gates" if args.command == "validate" else f"{args.command.capitalize()} gate"
        print(f"{'✓' if result.passed else '✗'} {label} {'PASSED' if result.passed else 'FAILED'}")

    if args.output:
        export_json(result, args.output)

    return EXIT_SUCCESS if result.passed else EXIT_GATE_FAILED


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the CLI.

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    args = parse_args(argv)

    setup_logging(verbose=args.verbose)

    try:
        return run_command(args)
    except RuleConfigError as e:
        print(f"✗ Invalid rule configuration:\n{e}", file=sys.stderr)
        return EXIT_INVALID_CONFIG
    except ExportError as e:
        print(f"✗ {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except (GateCancelledError, KeyboardInterrupt):
        print("\n✗ Validation interrupted", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        print(f"✗ {args.command.capitalize()} gate error: {e}", file=sys.stderr)
        logger.exception("Unexpected error during gate execution")
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
