"""
Conversion of message parts into the markup stored in the PHP output.

Literal text is HTML-escaped, placeholders become ``<ph name="..." />``
tags, and the whole result is made safe for a double-quoted PHP string by
backslash-escaping every double quote.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from .models import Part

# Boundaries: lower/digit -> Upper, and the last capital of an acronym
# run when it starts a new capitalised word (HTTPServer -> HTTP_Server).
_WORD_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def escape_html(text: str) -> str:
    """Escape ``&``, ``<`` and ``>``, ampersand first."""
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def to_upper_snake(name: str) -> str:
    """
    Convert a lowerCamelCase placeholder name to UPPER_SNAKE_CASE.

    Acronym runs stay together:

        >>> to_upper_snake("startName")
        'START_NAME'
        >>> to_upper_snake("startHTTPServer")
        'START_HTTP_SERVER'
        >>> to_upper_snake("userID")
        'USER_ID'
    """
    return _WORD_BOUNDARY.sub("_", name).upper()


def placeholder_tag(name: str) -> str:
    return f'<ph name="{to_upper_snake(name)}" />'


def render_parts(parts: Iterable[Part]) -> str:
    """
    Render message parts into escaped, quote-safe markup.

    Args:
        parts: Message parts in their original order

    Returns:
        The concatenated markup with every ``"`` escaped as ``\\"``
    """
    chunks: list[str] = []
    for part in parts:
        if part.is_placeholder:
            chunks.append(placeholder_tag(part.value))
        else:
            chunks.append(escape_html(part.value))

    return "".join(chunks).replace('"', '\\"')
