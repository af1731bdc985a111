"""
Rendering of the PHP translations block and its placement in the output file.
"""

from .region import (
    END_MARKER,
    START_MARKER,
    RegionReplacement,
    check_output_path,
    replace_regions,
    update_output_file,
)
from .renderer import DOCUMENT_FOOTER, DOCUMENT_HEADER, render_document, render_entry

__all__ = [
    "DOCUMENT_FOOTER",
    "DOCUMENT_HEADER",
    "END_MARKER",
    "START_MARKER",
    "RegionReplacement",
    "check_output_path",
    "render_document",
    "render_entry",
    "replace_regions",
    "update_output_file",
]
