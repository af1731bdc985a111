"""
Rendering of a MessageTable as a PHP ``$translations`` array literal.

Each entry is preceded by a comment block carrying the description, key
and raw numeric id, and keyed by the packed id. Values are wrapped in
``_()`` so the PHP side can run them through gettext.
"""

from __future__ import annotations

from ..messages.models import Message, MessageTable
from ..messages.packing import pack_id, parse_unsigned_id
from ..messages.templating import render_parts

DOCUMENT_HEADER = "$translations = array(\n"
DOCUMENT_FOOTER = "\n);"


def render_entry(message: Message) -> str:
    """
    Render one table entry, trailing blank line included.

    Raises:
        MessageIdError: If the message id is not an unsigned 64-bit integer
    """
    packed = pack_id(parse_unsigned_id(message.id))
    return (
        "\t/*\n"
        f"\t{message.description}\n"
        f"\tKey: {message.key}\n"
        f"\tId: {message.id}\n"
        "\t*/\n"
        f'\t"{packed}" => _("{render_parts(message.parts)}"),\n'
        "\n"
    )


def render_document(table: MessageTable) -> str:
    """
    Render every entry of the table, in table order, into one block.

    Args:
        table: Deduplicated messages

    Returns:
        The complete ``$translations = array(...);`` text
    """
    chunks = [DOCUMENT_HEADER]
    chunks.extend(render_entry(message) for message in table.values())
    chunks.append(DOCUMENT_FOOTER)
    return "".join(chunks)
