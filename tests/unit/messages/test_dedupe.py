"""Tests for message deduplication and the MessageTable ordering rule."""

from __future__ import annotations

import logging
from collections.abc import Callable

import pytest

from jsmsg_export.messages.dedupe import dedupe_messages
from jsmsg_export.messages.models import Message, MessageTable, Part

MessageFactory = Callable[..., Message]


class TestDedupeMessages:
    """Test the dedupe_messages function."""

    def test_last_value_wins_first_position_wins(self, make_message: MessageFactory) -> None:
        """Test that a redefined id keeps its first position and its last value."""
        messages = [
            make_message(id="1", key="A", parts=["x"]),
            make_message(id="1", key="B", parts=["y"]),
            make_message(id="2", key="C", parts=["z"]),
        ]

        table = dedupe_messages(messages)

        assert list(table) == ["1", "2"]
        assert table["1"].key == "B"
        assert table["1"].parts == (Part.literal("y"),)
        assert table["2"].key == "C"
        assert table["2"].parts == (Part.literal("z"),)

    def test_reinserted_key_not_moved_to_end(self, make_message: MessageFactory) -> None:
        """Test that overwriting an early id does not move it after later ids."""
        messages = [
            make_message(id="10", key="FIRST"),
            make_message(id="20", key="SECOND"),
            make_message(id="30", key="THIRD"),
            make_message(id="10", key="FIRST_AGAIN"),
        ]

        table = dedupe_messages(messages)

        assert list(table) == ["10", "20", "30"]
        assert [m.key for m in table.values()] == ["FIRST_AGAIN", "SECOND", "THIRD"]

    def test_empty_input(self) -> None:
        """Test that no messages give an empty table."""
        assert len(dedupe_messages([])) == 0

    def test_accepts_iterator(self, make_message: MessageFactory) -> None:
        """Test that a one-shot iterator is consumed in a single pass."""
        table = dedupe_messages(iter([make_message(id="5"), make_message(id="6")]))
        assert list(table) == ["5", "6"]

    def test_duplicates_logged(
        self, make_message: MessageFactory, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test that collapsed duplicates are reported, not raised."""
        with caplog.at_level(logging.INFO, logger="jsmsg_export.messages.dedupe"):
            _ = dedupe_messages([make_message(id="1"), make_message(id="1")])

        assert "Collapsed 1 duplicate message(s)" in caplog.text


class TestMessageTable:
    """Test the MessageTable mapping."""

    def test_add_returns_replaced(self, make_message: MessageFactory) -> None:
        """Test that add reports the message it replaced."""
        table = MessageTable()
        first = make_message(id="1", key="A")

        assert table.add(first) is None
        assert table.add(make_message(id="1", key="B")) is first
        assert len(table) == 1

    def test_constructor_applies_same_rule(self, make_message: MessageFactory) -> None:
        """Test that building from an iterable follows insert-or-overwrite."""
        table = MessageTable(
            [make_message(id="2", key="A"), make_message(id="1"), make_message(id="2", key="B")]
        )

        assert list(table.items())[0][1].key == "B"
        assert list(table) == ["2", "1"]

    def test_read_only_mapping(self, make_message: MessageFactory) -> None:
        """Test Mapping behaviour."""
        table = MessageTable([make_message(id="1")])

        assert "1" in table
        assert "2" not in table
        assert table.get("2") is None
        with pytest.raises(KeyError):
            _ = table["2"]
