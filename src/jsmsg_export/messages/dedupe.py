"""Collapse extracted messages into one entry per message id."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .models import Message, MessageTable

logger = logging.getLogger(__name__)


def dedupe_messages(messages: Iterable[Message]) -> MessageTable:
    """
    Build a MessageTable from messages in extraction order.

    When an id occurs more than once the last message wins, but the id
    keeps the position where it was first seen.

    Args:
        messages: Extracted messages, in file and source order

    Returns:
        MessageTable with one entry per distinct id
    """
    table = MessageTable()
    duplicates = 0

    for message in messages:
        replaced = table.add(message)
        if replaced is not None:
            duplicates += 1
            logger.debug(
                f"Message id {message.id} redefined: {replaced.key} replaced by {message.key}"
            )

    if duplicates:
        logger.info(f"Collapsed {duplicates} duplicate message(s) by id")

    return table
