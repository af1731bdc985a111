"""
Exception classes for jsmsg-export.

Every failure the export pipeline can report derives from
MessageExportError. Each carries an ErrorCategory, and the category
decides the process exit code, so a caller can tell a missing output file
apart from a malformed message id without parsing log output.
"""

from __future__ import annotations

from enum import Enum


class ErrorCategory(Enum):
    """Categories of errors and the exit status each one maps to."""

    PRECONDITION = "precondition"
    PARSE = "parse"
    IO = "io"
    EXTRACTION = "extraction"
    REGION = "region"
    CONFIGURATION = "configuration"
    UNKNOWN = "unknown"


EXIT_CODES: dict[ErrorCategory, int] = {
    ErrorCategory.UNKNOWN: 1,
    ErrorCategory.CONFIGURATION: 2,
    ErrorCategory.PRECONDITION: 3,
    ErrorCategory.PARSE: 4,
    ErrorCategory.IO: 5,
    ErrorCategory.EXTRACTION: 6,
    ErrorCategory.REGION: 7,
}


class MessageExportError(Exception):
    """Base exception class for jsmsg-export specific errors."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.UNKNOWN,
        user_message: str | None = None,
        context: object | None = None,
    ) -> None:
        super().__init__(message)
        self.category: ErrorCategory = category
        self.user_message: str = user_message or message
        self.context: object | None = context

    @property
    def exit_code(self) -> int:
        """Process exit status for this error."""
        return EXIT_CODES[self.category]


class PreconditionError(MessageExportError):
    """The output file is missing or is a directory."""

    def __init__(
        self,
        message: str,
        user_message: str | None = None,
        context: object | None = None,
    ) -> None:
        super().__init__(
            message,
            category=ErrorCategory.PRECONDITION,
            user_message=user_message,
            context=context,
        )


class MessageIdError(MessageExportError):
    """A message id is not a valid unsigned 64-bit integer or packed token."""

    def __init__(
        self,
        message: str,
        user_message: str | None = None,
        context: object | None = None,
    ) -> None:
        super().__init__(
            message,
            category=ErrorCategory.PARSE,
            user_message=user_message,
            context=context,
        )


class OutputIOError(MessageExportError):
    """Reading or writing the output file failed."""

    def __init__(
        self,
        message: str,
        user_message: str | None = None,
        context: object | None = None,
    ) -> None:
        super().__init__(
            message,
            category=ErrorCategory.IO,
            user_message=user_message,
            context=context,
        )


class ExtractionError(MessageExportError):
    """A message definition in a source file could not be extracted."""

    def __init__(
        self,
        message: str,
        source_file: str | None = None,
        line: int | None = None,
        user_message: str | None = None,
    ) -> None:
        location = source_file or "<unknown>"
        if line is not None:
            location = f"{location}:{line}"
        super().__init__(
            f"{location}: {message}",
            category=ErrorCategory.EXTRACTION,
            user_message=user_message,
            context={"source_file": source_file, "line": line},
        )
        self.source_file: str | None = source_file
        self.line: int | None = line


class SourceReadError(ExtractionError):
    """A source file selected for extraction could not be read."""


class RegionNotFoundError(MessageExportError):
    """The output file has no START/END CONTENT region to replace."""

    def __init__(
        self,
        message: str,
        user_message: str | None = None,
        context: object | None = None,
    ) -> None:
        super().__init__(
            message,
            category=ErrorCategory.REGION,
            user_message=user_message,
            context=context,
        )


class ConfigurationError(MessageExportError):
    """Configuration-related errors."""

    def __init__(
        self,
        message: str,
        user_message: str | None = None,
        context: object | None = None,
    ) -> None:
        super().__init__(
            message,
            category=ErrorCategory.CONFIGURATION,
            user_message=user_message,
            context=context,
        )
