"""
Message id generation using the Google message fingerprint.

The id of a message is a 64-bit fingerprint of its text, where
placeholders are written as their UPPER_SNAKE names, mixed with the
fingerprint of its project-scoped meaning. A message without ``@meaning``
uses its key as the meaning, so identical text under different keys gets
different ids. The top bit is cleared, which keeps ids in [0, 2**63).

The 32-bit building block is Bob Jenkins' lookup2 hash; two runs with
different seeds give the high and low halves of the fingerprint.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

from ..messages.models import Part
from ..messages.templating import to_upper_snake

_MASK32 = 0xFFFFFFFF
_MASK64 = 0xFFFFFFFFFFFFFFFF
_GOLDEN_RATIO = 0x9E3779B9
_LOW_SEED = 102072


def _mix(a: int, b: int, c: int) -> tuple[int, int, int]:
    a = (a - b - c) & _MASK32
    a ^= c >> 13
    b = (b - c - a) & _MASK32
    b ^= (a << 8) & _MASK32
    c = (c - a - b) & _MASK32
    c ^= b >> 13
    a = (a - b - c) & _MASK32
    a ^= c >> 12
    b = (b - c - a) & _MASK32
    b ^= (a << 16) & _MASK32
    c = (c - a - b) & _MASK32
    c ^= b >> 5
    a = (a - b - c) & _MASK32
    a ^= c >> 3
    b = (b - c - a) & _MASK32
    b ^= (a << 10) & _MASK32
    c = (c - a - b) & _MASK32
    c ^= b >> 15
    return a, b, c


def hash32(data: bytes, seed: int = 0) -> int:
    """Jenkins lookup2 hash of ``data`` as an unsigned 32-bit int."""
    a = b = _GOLDEN_RATIO
    c = seed & _MASK32
    length = len(data)
    i = 0

    while i + 12 <= length:
        a = (a + int.from_bytes(data[i : i + 4], "little")) & _MASK32
        b = (b + int.from_bytes(data[i + 4 : i + 8], "little")) & _MASK32
        c = (c + int.from_bytes(data[i + 8 : i + 12], "little")) & _MASK32
        a, b, c = _mix(a, b, c)
        i += 12

    c = (c + length) & _MASK32
    tail = data[i:]
    # The low byte of c is reserved for the length.
    a = (a + int.from_bytes(tail[0:4], "little")) & _MASK32
    b = (b + int.from_bytes(tail[4:8], "little")) & _MASK32
    c = (c + (int.from_bytes(tail[8:11], "little") << 8)) & _MASK32

    return _mix(a, b, c)[2]


def fingerprint(text: str) -> int:
    """64-bit unsigned fingerprint of the UTF-8 encoding of ``text``."""
    data = text.encode("utf-8")
    hi = hash32(data, 0)
    lo = hash32(data, _LOW_SEED)
    if hi == 0 and lo in (0, 1):
        hi ^= 0x130F9BEF
        lo ^= 0x94A0A928
    return (hi << 32) | lo


def message_text(parts: Iterable[Part]) -> str:
    """Message text used for fingerprinting, placeholders as UPPER_SNAKE names."""
    return "".join(
        to_upper_snake(part.value) if part.is_placeholder else part.value
        for part in parts
    )


def generate_message_id(parts: Iterable[Part], meaning: str, project_id: str = "") -> str:
    """
    Compute the decimal id text of a message.

    The meaning is always scoped as ``"<project_id>: <meaning>"``, so even
    an empty project id mixes a meaning fingerprint into the text one.

    Args:
        parts: Message parts in order
        meaning: The ``@meaning`` of the message, or its key when it has none
        project_id: Scope prepended to the meaning

    Returns:
        Decimal text of an id in [0, 2**63)
    """
    fp = fingerprint(message_text(parts))
    scoped_meaning = f"{project_id}: {meaning}"

    carry = 1 if fp >> 63 else 0
    fp = (fingerprint(scoped_meaning) + (fp << 1) + carry) & _MASK64

    return str(fp & 0x7FFFFFFFFFFFFFFF)


class MessageIdGenerator(Protocol):
    """Callable producing the id text for a message."""

    def __call__(self, parts: tuple[Part, ...], meaning: str) -> str: ...


class FingerprintIdGenerator:
    """MessageIdGenerator bound to a project id."""

    def __init__(self, project_id: str = "") -> None:
        self.project_id: str = project_id

    def __call__(self, parts: tuple[Part, ...], meaning: str) -> str:
        return generate_message_id(parts, meaning, self.project_id)
