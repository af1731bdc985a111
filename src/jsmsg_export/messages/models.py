"""
Value types for extracted messages.

Messages are produced once by the extractor and never mutated afterwards,
so both Message and Part are frozen dataclasses.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import override


@dataclass(frozen=True, slots=True)
class Part:
    """
    One piece of a message: either literal text or a placeholder reference.

    Use the ``literal`` and ``placeholder`` constructors rather than the
    raw initializer.
    """

    value: str
    is_placeholder: bool = False

    @classmethod
    def literal(cls, text: str) -> Part:
        return cls(text, is_placeholder=False)

    @classmethod
    def placeholder(cls, name: str) -> Part:
        return cls(name, is_placeholder=True)


@dataclass(frozen=True, slots=True)
class Message:
    """A translatable message as produced by the extractor."""

    id: str
    key: str
    description: str
    parts: tuple[Part, ...]
    meaning: str | None = None
    source_file: str | None = field(default=None, compare=False)
    line: int | None = field(default=None, compare=False)


class MessageTable(Mapping[str, Message]):
    """
    Insertion-ordered mapping from message id to Message.

    Re-adding an existing id replaces the stored message but keeps the
    position where the id was first added.
    """

    def __init__(self, messages: Iterable[Message] = ()) -> None:
        self._entries: dict[str, Message] = {}
        for message in messages:
            _ = self.add(message)

    def add(self, message: Message) -> Message | None:
        """
        Insert or overwrite the entry for ``message.id``.

        Returns:
            The message that was replaced, or None for a new id
        """
        previous = self._entries.get(message.id)
        self._entries[message.id] = message
        return previous

    @override
    def __getitem__(self, key: str) -> Message:
        return self._entries[key]

    @override
    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    @override
    def __len__(self) -> int:
        return len(self._entries)

    @override
    def __repr__(self) -> str:
        return f"MessageTable({list(self._entries)!r})"
