"""
Command-line argument parsing for jsmsg-export.
"""

import argparse
from pathlib import Path
from typing import NamedTuple

from ..core.version import get_version


class ParsedArgs(NamedTuple):
    """Container for parsed command-line arguments."""

    js: list[str]
    output: Path | None
    config_file: Path | None
    project_id: str | None
    allow_missing_region: bool
    check: bool
    dry_run: bool
    verbose: bool


def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create the argument parser for jsmsg-export.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="jsmsg-export",
        description="Extract goog.getMsg() messages from JavaScript and export them to a PHP translations file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  jsmsg-export --js 'js/classes/**.js' --output php/translations/javascript-runtime.php
    Export every message under js/classes

  jsmsg-export --js 'js/classes/**.js' --js '!js/classes/livechat/**' --output out.php
    Exclude a subtree

  jsmsg-export --config-file jsmsg-export.yml --check
    Verify the output file is up to date without writing it
""",
    )

    _ = parser.add_argument(
        "--js",
        action="append",
        default=[],
        metavar="PATTERN",
        help="Source file pattern; prefix with '!' to exclude (can be used multiple times)",
    )

    _ = parser.add_argument(
        "--output",
        type=Path,
        default=None,
        metavar="PATH",
        help="PHP file containing the /* START CONTENT */ ... /* END CONTENT */ region",
    )

    _ = parser.add_argument(
        "--config-file",
        type=Path,
        default=None,
        metavar="PATH",
        help="YAML configuration file; command-line values take precedence",
    )

    _ = parser.add_argument(
        "--project-id",
        default=None,
        help="Project scope mixed into generated message ids",
    )

    _ = parser.add_argument(
        "--allow-missing-region",
        action="store_true",
        help="Do not fail when the output file has no content region",
    )

    mode = parser.add_mutually_exclusive_group()
    _ = mode.add_argument(
        "--check",
        action="store_true",
        help="Exit with status 1 if the output file is out of date; never writes",
    )
    _ = mode.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the rendered translations block instead of writing it",
    )

    _ = parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")

    _ = parser.add_argument(
        "--version", action="version", version=f"%(prog)s {get_version()}"
    )

    return parser


def parse_arguments(args: list[str] | None = None) -> ParsedArgs:
    """
    Parse command-line arguments.

    Args:
        args: List of arguments to parse (defaults to sys.argv[1:])

    Raises:
        SystemExit: If argument parsing fails or --help is requested
    """
    parser = create_argument_parser()
    parsed = parser.parse_args(args)

    return ParsedArgs(
        js=list(parsed.js),  # pyright: ignore[reportAny]
        output=parsed.output,  # pyright: ignore[reportAny]
        config_file=parsed.config_file,  # pyright: ignore[reportAny]
        project_id=parsed.project_id,  # pyright: ignore[reportAny]
        allow_missing_region=parsed.allow_missing_region,  # pyright: ignore[reportAny]
        check=parsed.check,  # pyright: ignore[reportAny]
        dry_run=parsed.dry_run,  # pyright: ignore[reportAny]
        verbose=parsed.verbose,  # pyright: ignore[reportAny]
    )
