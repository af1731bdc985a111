"""
Compact, reversible tokens for 64-bit message ids.

A message id is packed as its 8 little-endian bytes, base64 encoded with
the standard alphabet, with the trailing ``=`` padding removed. Every id
therefore packs to exactly 11 characters.
"""

from __future__ import annotations

import base64
import binascii
import re
import struct

from ..utils.core.exceptions import MessageIdError

UINT64_MAX = 2**64 - 1

_UNSIGNED_DECIMAL = re.compile(r"\+?[0-9]+", re.ASCII)
_ID_STRUCT = struct.Struct("<Q")


def parse_unsigned_id(text: str) -> int:
    """
    Parse a message id as an unsigned 64-bit integer.

    Accepts ASCII decimal digits with an optional leading ``+``. Values
    above the signed 64-bit range are valid.

    Args:
        text: Decimal id text as produced by the extractor

    Returns:
        The id as a non-negative int

    Raises:
        MessageIdError: If the text is not a decimal in [0, 2**64 - 1]
    """
    if not _UNSIGNED_DECIMAL.fullmatch(text):
        raise MessageIdError(
            f"Message id is not an unsigned decimal integer: {text!r}",
            context=text,
        )

    value = int(text)
    if value > UINT64_MAX:
        raise MessageIdError(
            f"Message id exceeds the unsigned 64-bit range: {text}",
            context=text,
        )
    return value


def pack_id(message_id: int) -> str:
    """
    Pack a 64-bit unsigned id into an unpadded base64 token.

    Raises:
        MessageIdError: If ``message_id`` is outside [0, 2**64 - 1]
    """
    if not 0 <= message_id <= UINT64_MAX:
        raise MessageIdError(
            f"Message id out of unsigned 64-bit range: {message_id}",
            context=message_id,
        )

    encoded = base64.b64encode(_ID_STRUCT.pack(message_id)).decode("ascii")
    return encoded.rstrip("=")


def unpack_id(token: str) -> int:
    """
    Recover the id from a token produced by pack_id.

    Raises:
        MessageIdError: If the token is not valid base64 or does not
            decode to exactly 8 bytes
    """
    padded = token + "=" * ((4 - len(token) % 4) % 4)
    try:
        raw = base64.b64decode(padded, validate=True)
    except (binascii.Error, ValueError) as e:
        raise MessageIdError(
            f"Packed id is not valid base64: {token!r}", context=token
        ) from e

    if len(raw) != _ID_STRUCT.size:
        raise MessageIdError(
            f"Packed id decodes to {len(raw)} bytes, expected {_ID_STRUCT.size}: {token!r}",
            context=token,
        )

    value: int = _ID_STRUCT.unpack(raw)[0]
    return value
