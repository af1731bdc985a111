"""
Extraction of Closure-style messages from JavaScript source files.

A message is defined by assigning ``goog.getMsg(...)`` to a name starting
with ``MSG_``:

    /** @desc Greeting shown on the dashboard. */
    const MSG_HELLO = goog.getMsg('Hello {$userName}!', {'userName': name});

The first argument must be a string literal or a ``+`` concatenation of
string literals. ``{$name}`` marks a placeholder. The JSDoc comment right
before the definition supplies the description (``@desc``) and the
optional meaning (``@meaning``).

Usage Examples:
    >>> from jsmsg_export.extraction.extractor import extract_messages_from_file
    >>> messages = extract_messages_from_file(Path("js/app.js"))
    >>> [m.key for m in messages]
    ['MSG_HELLO']
"""

from __future__ import annotations

import bisect
import logging
import re
from collections.abc import Iterable
from pathlib import Path

from ..messages.models import Message, Part
from ..utils.core.exceptions import ExtractionError, SourceReadError
from .fingerprint import FingerprintIdGenerator, MessageIdGenerator

logger = logging.getLogger(__name__)

MESSAGE_DEFINITION = re.compile(
    r"(?<![\w$.])"
    r"(?:(?:var|let|const)\s+)?"
    r"(?:[A-Za-z_$][\w$]*\s*\.\s*)*"
    r"(?P<key>MSG_[\w$]+)"
    r"\s*=\s*goog\s*\.\s*getMsg\s*\("
)

PLACEHOLDER = re.compile(r"\{\$([^}]*)\}")
PLACEHOLDER_NAME = re.compile(r"[a-z][a-zA-Z0-9]*")

_JSDOC_TAG = re.compile(r"@(\w+)\s*")
# Text allowed between a JSDoc block and the definition it documents.
_JSDOC_GAP = re.compile(r"\s*(?:export\s+)?")

_SIMPLE_ESCAPES = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "b": "\b",
    "f": "\f",
    "v": "\v",
}
_LINE_TERMINATORS = "\n\r\u2028\u2029"
_QUOTES = "'\"`"


class _SourceMap:
    """Comment and string-literal spans of a JavaScript source."""

    def __init__(self, source: str) -> None:
        self.comments: list[tuple[int, int]] = []
        self._skip_starts: list[int] = []
        self._skip_ends: list[int] = []
        self._scan(source)
        self._comment_ends: list[int] = [end for _, end in self.comments]

    def _add_skip(self, start: int, end: int) -> None:
        self._skip_starts.append(start)
        self._skip_ends.append(end)

    def _scan(self, source: str) -> None:
        length = len(source)
        i = 0
        while i < length:
            char = source[i]
            if source.startswith("//", i):
                end = source.find("\n", i)
                end = length if end == -1 else end
                self._add_skip(i, end)
                i = end
            elif source.startswith("/*", i):
                end = source.find("*/", i + 2)
                end = length if end == -1 else end + 2
                self.comments.append((i, end))
                self._add_skip(i, end)
                i = end
            elif char in _QUOTES:
                end = i + 1
                while end < length and source[end] != char:
                    if source[end] == "\\":
                        end += 1
                    elif char != "`" and source[end] == "\n":
                        break
                    end += 1
                end = min(end + 1, length)
                self._add_skip(i, end)
                i = end
            else:
                i += 1

    def is_code(self, position: int) -> bool:
        """True when ``position`` is outside every comment and string literal."""
        index = bisect.bisect_right(self._skip_starts, position) - 1
        return index < 0 or position >= self._skip_ends[index]

    def jsdoc_before(self, source: str, position: int) -> str | None:
        """Return the ``/** ... */`` block directly preceding ``position``."""
        index = bisect.bisect_right(self._comment_ends, position) - 1
        if index < 0:
            return None
        start, end = self.comments[index]
        if not source.startswith("/**", start):
            return None
        if not _JSDOC_GAP.fullmatch(source, end, position):
            return None
        return source[start:end]


def parse_jsdoc(comment: str) -> dict[str, str]:
    """
    Collect the text of each tag in a JSDoc block.

    A tag only starts at the beginning of a comment line, so an ``@`` inside
    prose stays part of the text. Continuation lines are joined with single
    spaces.

    Returns:
        Mapping from tag name (without ``@``) to its text
    """
    body = comment.removeprefix("/**").removesuffix("*/")

    tag_lines: dict[str, list[str]] = {}
    current: list[str] | None = None
    for raw_line in body.splitlines():
        line = raw_line.strip().removeprefix("*").strip()
        match = _JSDOC_TAG.match(line)
        if match:
            current = tag_lines[match.group(1)] = []
            line = line[match.end() :]
        if current is not None and line:
            current.append(line)

    return {name: " ".join(" ".join(lines).split()) for name, lines in tag_lines.items()}


def split_parts(text: str, filename: str | None = None, line: int | None = None) -> tuple[Part, ...]:
    """
    Split message text into literal and placeholder parts.

    Raises:
        ExtractionError: If a placeholder name is not lowerCamelCase
    """
    parts: list[Part] = []
    position = 0
    for match in PLACEHOLDER.finditer(text):
        name = match.group(1)
        if not PLACEHOLDER_NAME.fullmatch(name):
            raise ExtractionError(
                f"Placeholder name must be in lowerCamelCase: {name!r}",
                source_file=filename,
                line=line,
            )
        if match.start() > position:
            parts.append(Part.literal(text[position : match.start()]))
        parts.append(Part.placeholder(name))
        position = match.end()

    if position < len(text):
        parts.append(Part.literal(text[position:]))
    return tuple(parts)


class JsMessageExtractor:
    """Extracts ``goog.getMsg`` message definitions from JavaScript sources."""

    def __init__(self, id_generator: MessageIdGenerator | None = None) -> None:
        """
        Initialize the extractor.

        Args:
            id_generator: Produces message ids; defaults to the fingerprint
                generator without a project id
        """
        self.id_generator: MessageIdGenerator = id_generator or FingerprintIdGenerator()

    def extract_from_source(self, source: str, filename: str = "<source>") -> list[Message]:
        """
        Extract all messages defined in ``source``, in source order.

        Raises:
            ExtractionError: If a message definition cannot be parsed
        """
        source_map = _SourceMap(source)
        messages: list[Message] = []

        for match in MESSAGE_DEFINITION.finditer(source):
            if not source_map.is_code(match.start()):
                continue

            key = match.group("key")
            line = source.count("\n", 0, match.start()) + 1
            text = _StringExpressionReader(source, match.end(), filename, line).read()
            parts = split_parts(text, filename, line)

            tags: dict[str, str] = {}
            jsdoc = source_map.jsdoc_before(source, match.start())
            if jsdoc is not None:
                tags = parse_jsdoc(jsdoc)

            description = tags.get("desc")
            if description is None:
                logger.warning(f"{filename}:{line}: message {key} has no @desc")
                description = ""

            meaning = tags.get("meaning") or None
            message = Message(
                id=self.id_generator(parts, meaning or key),
                key=key,
                description=description,
                parts=parts,
                meaning=meaning,
                source_file=filename,
                line=line,
            )
            messages.append(message)
            logger.debug(f"Found message {key} (id {message.id}) at {filename}:{line}")

        return messages

    def extract_from_file(self, filepath: Path) -> list[Message]:
        """
        Extract messages from one JavaScript file.

        Raises:
            SourceReadError: If the file cannot be read
            ExtractionError: If a message definition cannot be parsed
        """
        try:
            with open(filepath, "r", encoding="utf-8") as file:
                source = file.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Error reading {filepath}: {e}")
            raise SourceReadError(f"Cannot read source file: {e}", source_file=str(filepath)) from e

        messages = self.extract_from_source(source, str(filepath))
        logger.debug(f"Extracted {len(messages)} message(s) from {filepath}")
        return messages

    def extract_messages(self, filepaths: Iterable[Path]) -> list[Message]:
        """Extract messages from every file, in the given file order."""
        messages: list[Message] = []
        file_count = 0
        for filepath in filepaths:
            messages.extend(self.extract_from_file(filepath))
            file_count += 1

        logger.info(f"Extracted {len(messages)} message(s) from {file_count} file(s)")
        return messages


def extract_messages_from_file(
    filepath: Path, id_generator: MessageIdGenerator | None = None
) -> list[Message]:
    """Convenience wrapper around JsMessageExtractor.extract_from_file."""
    return JsMessageExtractor(id_generator).extract_from_file(filepath)


class _StringExpressionReader:
    """Reads a ``'a' + "b"`` string-literal expression and decodes it."""

    def __init__(self, source: str, position: int, filename: str, line: int) -> None:
        self.source: str = source
        self.position: int = position
        self.filename: str = filename
        self.line: int = line

    def _error(self, message: str) -> ExtractionError:
        return ExtractionError(message, source_file=self.filename, line=self.line)

    def _skip_trivia(self) -> None:
        source = self.source
        while self.position < len(source):
            if source[self.position].isspace():
                self.position += 1
            elif source.startswith("//", self.position):
                end = source.find("\n", self.position)
                self.position = len(source) if end == -1 else end
            elif source.startswith("/*", self.position):
                end = source.find("*/", self.position + 2)
                if end == -1:
                    raise self._error("Unterminated comment in goog.getMsg() call")
                self.position = end + 2
            else:
                break

    def read(self) -> str:
        chunks: list[str] = []
        while True:
            self._skip_trivia()
            chunks.append(self._read_literal())
            self._skip_trivia()
            if self.source.startswith("+", self.position):
                self.position += 1
                continue
            break

        if not self.source.startswith((",", ")"), self.position):
            raise self._error(
                "goog.getMsg() message must be a string literal or a concatenation of string literals"
            )

        # \uXXXX escapes may spell a surrogate pair; join it into one code point.
        try:
            return "".join(chunks).encode("utf-16", "surrogatepass").decode("utf-16")
        except UnicodeDecodeError as e:
            raise self._error("Unpaired surrogate escape in goog.getMsg() message") from e

    def _read_literal(self) -> str:
        source = self.source
        if self.position >= len(source) or source[self.position] not in _QUOTES:
            raise self._error(
                "goog.getMsg() message must be a string literal or a concatenation of string literals"
            )

        quote = source[self.position]
        self.position += 1
        chunks: list[str] = []

        while True:
            if self.position >= len(source):
                raise self._error("Unterminated string literal in goog.getMsg() call")

            char = source[self.position]
            if char == quote:
                self.position += 1
                return "".join(chunks)
            if char == "\\":
                chunks.append(self._read_escape())
                continue
            if quote == "`" and source.startswith("${", self.position):
                raise self._error("Template substitutions are not allowed in goog.getMsg()")
            if quote != "`" and char in _LINE_TERMINATORS:
                raise self._error("Unterminated string literal in goog.getMsg() call")

            chunks.append(char)
            self.position += 1

    def _read_hex(self, count: int) -> int:
        digits = self.source[self.position : self.position + count]
        if len(digits) != count or not all(c in "0123456789abcdefABCDEF" for c in digits):
            raise self._error(f"Invalid hexadecimal escape: \\{digits}")
        self.position += count
        return int(digits, 16)

    def _read_escape(self) -> str:
        source = self.source
        self.position += 1
        if self.position >= len(source):
            raise self._error("Unterminated string literal in goog.getMsg() call")

        char = source[self.position]
        self.position += 1

        if char in _SIMPLE_ESCAPES:
            return _SIMPLE_ESCAPES[char]
        if char == "0" and not source[self.position : self.position + 1].isdigit():
            return "\0"
        if char == "x":
            return chr(self._read_hex(2))
        if char == "u":
            if source.startswith("{", self.position):
                end = source.find("}", self.position)
                if end == -1:
                    raise self._error("Unterminated \\u{...} escape")
                digits = source[self.position + 1 : end]
                self.position = end + 1
                try:
                    return chr(int(digits, 16))
                except ValueError as e:
                    raise self._error(f"Invalid unicode escape: \\u{{{digits}}}") from e
            return chr(self._read_hex(4))
        if char == "\r":
            if source.startswith("\n", self.position):
                self.position += 1
            return ""
        if char in _LINE_TERMINATORS:
            return ""
        return char
