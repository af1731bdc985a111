"""
Tests for rendering the PHP translations array.

Exact whitespace matters here: the block is consumed verbatim by the PHP
side, so expectations are spelled out character for character.
"""

from __future__ import annotations

from collections.abc import Callable

import pytest

from jsmsg_export.messages.dedupe import dedupe_messages
from jsmsg_export.messages.models import Message, MessageTable
from jsmsg_export.output.renderer import render_document, render_entry
from jsmsg_export.utils.core.exceptions import MessageIdError

MessageFactory = Callable[..., Message]


class TestRenderDocument:
    """Test the render_document function."""

    def test_empty_table(self) -> None:
        """Test the exact output for an empty table."""
        assert render_document(MessageTable()) == "$translations = array(\n\n);"

    def test_single_entry(self, make_message: MessageFactory) -> None:
        """Test the exact layout of one entry."""
        message = make_message(
            id="1",
            key="MSG_GREETING",
            description="Greeting on the home page",
            parts=["Hello ", ("ph", "userName"), "!"],
        )

        rendered = render_document(MessageTable([message]))

        assert rendered == (
            "$translations = array(\n"
            "\t/*\n"
            "\tGreeting on the home page\n"
            "\tKey: MSG_GREETING\n"
            "\tId: 1\n"
            "\t*/\n"
            '\t"AQAAAAAAAAA" => _("Hello <ph name=\\"USER_NAME\\" />!"),\n'
            "\n"
            "\n);"
        )

    def test_entries_in_table_order(self, make_message: MessageFactory) -> None:
        """Test that entries follow the dedupe ordering rule."""
        table = dedupe_messages(
            [
                make_message(id="1", key="A", parts=["x"]),
                make_message(id="1", key="B", parts=["y"]),
                make_message(id="2", key="C", parts=["z"]),
            ]
        )

        rendered = render_document(table)

        assert rendered.index("Key: B") < rendered.index("Key: C")
        assert "Key: A" not in rendered
        assert '_("y")' in rendered
        assert '_("x")' not in rendered

    def test_quote_in_content_escaped_once(self, make_message: MessageFactory) -> None:
        """Test that a quote in the content is escaped exactly once."""
        rendered = render_document(
            MessageTable([make_message(parts=['He said "hi"'])])
        )

        assert '_("He said \\"hi\\""),' in rendered
        assert '\\\\"' not in rendered

    def test_comment_fields_verbatim(self, make_message: MessageFactory) -> None:
        """Test that description, key and raw id are not re-encoded."""
        message = make_message(
            id="18446744073709551615",
            key="MSG_QUOTE",
            description='Uses "quotes" & <tags>',
        )

        entry = render_entry(message)

        assert '\tUses "quotes" & <tags>\n' in entry
        assert "\tKey: MSG_QUOTE\n" in entry
        assert "\tId: 18446744073709551615\n" in entry
        assert '\t"//////////8" => ' in entry

    def test_empty_description(self, make_message: MessageFactory) -> None:
        """Test that an empty description still produces its line."""
        entry = render_entry(make_message(description=""))
        assert entry.startswith("\t/*\n\t\n\tKey: ")

    def test_invalid_id_fails(self, make_message: MessageFactory) -> None:
        """Test that an unparseable id aborts rendering."""
        with pytest.raises(MessageIdError):
            _ = render_document(MessageTable([make_message(id="-5")]))
