"""
Message model and the id/templating/dedupe steps of the export pipeline.
"""

from .dedupe import dedupe_messages
from .models import Message, MessageTable, Part
from .packing import UINT64_MAX, pack_id, parse_unsigned_id, unpack_id
from .templating import escape_html, render_parts, to_upper_snake

__all__ = [
    "Message",
    "MessageTable",
    "Part",
    "UINT64_MAX",
    "dedupe_messages",
    "escape_html",
    "pack_id",
    "parse_unsigned_id",
    "render_parts",
    "to_upper_snake",
    "unpack_id",
]
