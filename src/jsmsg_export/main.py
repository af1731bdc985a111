"""
Main entry point for jsmsg-export.

This module wires the export pipeline together: it validates the output
file, discovers and scans the JavaScript sources, deduplicates and renders
the messages, and rewrites the content region of the PHP output file.
"""

import logging
import sys
from typing import NamedTuple

from .config.manager import load_config_data, merge_cli_overrides
from .config.schema import ExportConfig
from .extraction.discovery import find_js_files
from .extraction.extractor import JsMessageExtractor
from .extraction.fingerprint import FingerprintIdGenerator
from .messages.dedupe import dedupe_messages
from .output.region import RegionReplacement, check_output_path, update_output_file
from .output.renderer import render_document
from .utils.cli.args import ParsedArgs, parse_arguments
from .utils.core.exceptions import MessageExportError

logger = logging.getLogger(__name__)


class ExportResult(NamedTuple):
    """Outcome of one export run."""

    rendered: str
    message_count: int
    file_count: int
    replacement: RegionReplacement | None


def setup_logging(verbose: bool = False) -> None:
    """
    Set up logging configuration.

    Args:
        verbose: Enable verbose logging
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )


def export_messages(
    config: ExportConfig, *, write: bool = True, update_output: bool = True
) -> ExportResult:
    """
    Run the export pipeline for one configuration.

    The output path is validated before any source file is read.

    Args:
        config: Validated export settings
        write: Rewrite the output file; when False the new content is only
            computed
        update_output: When False, stop after rendering and leave the
            output file alone entirely

    Returns:
        ExportResult with the rendered block and the region replacement

    Raises:
        MessageExportError: For any failure; nothing is retried
    """
    check_output_path(config.output)

    files = find_js_files(config.js, config.base_dir)
    extractor = JsMessageExtractor(FingerprintIdGenerator(config.project_id))
    messages = extractor.extract_messages(files)

    table = dedupe_messages(messages)
    rendered = render_document(table)
    logger.info(f"Rendered {len(table)} unique message(s)")

    replacement: RegionReplacement | None = None
    if update_output:
        replacement = update_output_file(
            config.output,
            rendered,
            allow_missing_region=config.allow_missing_region,
            write=write,
        )

    return ExportResult(
        rendered=rendered,
        message_count=len(table),
        file_count=len(files),
        replacement=replacement,
    )


def build_config_from_args(args: ParsedArgs) -> ExportConfig:
    """
    Combine the optional configuration file with command-line values.

    Raises:
        ConfigurationError: If the combined settings are invalid
    """
    config_data: dict[str, object] = {}
    if args.config_file is not None:
        config_data = load_config_data(args.config_file)

    return merge_cli_overrides(
        config_data,
        {
            "js": args.js,
            "output": args.output,
            "project_id": args.project_id,
            "allow_missing_region": args.allow_missing_region,
        },
    )


def run(args: ParsedArgs) -> int:
    """
    Execute one run and translate the outcome into an exit code.

    Returns:
        0 on success, 1 if --check found the output out of date or an
        unexpected error occurred, otherwise the error's exit code
    """
    try:
        config = build_config_from_args(args)

        if args.dry_run:
            result = export_messages(config, write=False, update_output=False)
            _ = sys.stdout.write(result.rendered + "\n")
            return 0

        result = export_messages(config, write=not args.check)

        if args.check:
            if result.replacement is not None and result.replacement.changed:
                logger.info(f"Translations in {config.output} are out of date")
                return 1
            logger.info(f"Translations in {config.output} are up to date")
            return 0

        logger.info(
            f"Exported {result.message_count} message(s) from {result.file_count} file(s) to {config.output}"
        )
        return 0

    except MessageExportError as e:
        logger.error(f"Export failed: {e}")
        if args.verbose:
            logger.exception("Full traceback:")
        return e.exit_code
    except KeyboardInterrupt:
        logger.info("Operation cancelled by user")
        return 1
    except Exception as e:
        logger.exception(f"Unexpected error during export: {e}")
        return 1


def main(argv: list[str] | None = None) -> int:
    """
    Command-line entry point.

    Returns:
        Process exit code
    """
    args = parse_arguments(argv)
    setup_logging(args.verbose)
    return run(args)


if __name__ == "__main__":
    sys.exit(main())

