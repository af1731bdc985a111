"""
Replacement of the generated region inside an existing output file.

The output file marks where generated content goes with a
``/* START CONTENT */`` ... ``/* END CONTENT */`` pair. Only the text
between (and including) the markers is rewritten; every other byte of the
file is preserved.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import NamedTuple

from ..utils.core.exceptions import OutputIOError, PreconditionError, RegionNotFoundError

logger = logging.getLogger(__name__)

START_MARKER = "/* START CONTENT */"
END_MARKER = "/* END CONTENT */"

REGION_PATTERN = re.compile(
    re.escape(START_MARKER) + r".*?" + re.escape(END_MARKER), re.DOTALL
)


class RegionReplacement(NamedTuple):
    """Result of replacing generated regions in a piece of text."""

    content: str
    count: int
    changed: bool

    @property
    def matched(self) -> bool:
        return self.count > 0


def build_region(rendered: str) -> str:
    return f"{START_MARKER}\n{rendered}\n{END_MARKER}"


def replace_regions(content: str, rendered: str) -> RegionReplacement:
    """
    Replace every marked region in ``content`` with ``rendered``.

    Regions are matched left to right, each from a start marker to the
    nearest following end marker. The rendered text is inserted literally.

    Args:
        content: Existing file content
        rendered: Block to place between the markers

    Returns:
        RegionReplacement with the new content, the number of regions
        replaced and whether the text differs from the input
    """
    region = build_region(rendered)
    new_content, count = REGION_PATTERN.subn(lambda _match: region, content)
    return RegionReplacement(
        content=new_content, count=count, changed=new_content != content
    )


def check_output_path(output_file: Path) -> None:
    """
    Verify the output file exists and is a regular file.

    Raises:
        PreconditionError: If the path is missing or is a directory
    """
    if output_file.is_dir():
        raise PreconditionError(
            f"Output path is a folder: {output_file}",
            user_message="Path is a folder",
            context=output_file,
        )
    if not output_file.exists():
        raise PreconditionError(
            f"Output file does not exist: {output_file}",
            user_message="File does not exist",
            context=output_file,
        )


def update_output_file(
    output_file: Path,
    rendered: str,
    *,
    allow_missing_region: bool = False,
    write: bool = True,
) -> RegionReplacement:
    """
    Rewrite the generated region(s) of ``output_file`` in place.

    The file is read fully, transformed, then truncated and rewritten.
    Newlines are passed through untranslated.

    Args:
        output_file: File containing the START/END CONTENT markers
        rendered: Rendered document to insert
        allow_missing_region: Rewrite the file unchanged instead of failing
            when no region is found
        write: When False, compute the result without touching the file

    Returns:
        RegionReplacement for the file content

    Raises:
        OutputIOError: If the file cannot be read or written
        RegionNotFoundError: If no region is found and that is not allowed
    """
    try:
        with open(output_file, "r", encoding="utf-8", newline="") as file:
            original = file.read()
    except (OSError, UnicodeDecodeError) as e:
        raise OutputIOError(
            f"Failed to read output file {output_file}: {e}", context=output_file
        ) from e

    result = replace_regions(original, rendered)

    if not result.matched:
        if not allow_missing_region:
            raise RegionNotFoundError(
                f"No '{START_MARKER} ... {END_MARKER}' region found in {output_file}",
                context=output_file,
            )
        logger.warning(f"No content region found in {output_file}; file left unchanged")
    else:
        logger.info(f"Replaced {result.count} content region(s) in {output_file}")

    if write:
        try:
            with open(output_file, "w", encoding="utf-8", newline="") as file:
                _ = file.write(result.content)
        except OSError as e:
            raise OutputIOError(
                f"Failed to write output file {output_file}: {e}", context=output_file
            ) from e
        logger.debug(f"Wrote {len(result.content)} characters to {output_file}")

    return result
