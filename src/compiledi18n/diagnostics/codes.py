"""Diagnostic codes and data structures.

Defines error codes, source spans, and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "SourceSpan",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Configuration errors (locale set, locale files, fallbacks)
        2000-2999: Key errors (call-site rewrite validation)
        3000-3999: Bundle errors (marker scanning in generated code)
        4000-4999: Build reports (informational, never raised)
    """

    # Configuration errors (1000-1999)
    LOCALE_INVALID = 1001
    LOCALE_UNKNOWN = 1002
    LOCALE_MISMATCH = 1003
    FALLBACK_UNKNOWN = 1004
    FALLBACK_CYCLE = 1005
    LOCALE_FILE_INVALID = 1006

    # Key errors (2000-2999)
    KEY_MULTILINE = 2001

    # Bundle errors (3000-3999)
    MARKER_UNBALANCED = 3001
    MARKER_NO_ARGUMENTS = 3002
    MARKER_KEY_INVALID = 3003
    MARKER_LEFTOVER = 3004

    # Build reports (4000-4999)
    KEYS_MISSING = 4001
    KEYS_UNUSED = 4002


@dataclass(frozen=True, slots=True)
class SourceSpan:
    """Location inside generated code for error reporting.

    Note:
        Python strings measure positions in characters (Unicode code points),
        not bytes. For multi-byte UTF-8 characters, character offset differs
        from byte offset.

    Attributes:
        start: Starting character offset (0-indexed)
        end: Ending character offset (exclusive)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """

    start: int
    end: int
    line: int
    column: int

    def __post_init__(self) -> None:
        """Validate SourceSpan invariants.

        Raises:
            ValueError: If start is negative, end precedes start, or line/column
                is less than 1.
        """
        if self.start < 0:
            msg = f"SourceSpan.start must be >= 0, got {self.start}"
            raise ValueError(msg)
        if self.end < self.start:
            msg = f"SourceSpan.end ({self.end}) must be >= start ({self.start})"
            raise ValueError(msg)
        if self.line < 1:
            msg = f"SourceSpan.line must be >= 1 (1-indexed), got {self.line}"
            raise ValueError(msg)
        if self.column < 1:
            msg = f"SourceSpan.column must be >= 1 (1-indexed), got {self.column}"
            raise ValueError(msg)

    @classmethod
    def at(cls, source: str, start: int, end: int | None = None) -> "SourceSpan":
        """Build a span for an offset, computing line and column.

        Args:
            source: Text the offsets point into
            start: Starting character offset
            end: Ending offset (defaults to start)

        Returns:
            SourceSpan with 1-indexed line and column
        """
        line = source.count("\n", 0, start) + 1
        column = start - (source.rfind("\n", 0, start) + 1) + 1
        return cls(start=start, end=start if end is None else end, line=line, column=column)


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Inspired by Rust compiler diagnostics. Provides rich error information
    for both humans and tools.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        span: Location in generated code (bundle errors only)
        hint: Suggestion for fixing the error
        locale: Locale the diagnostic concerns, if any
        location: File the diagnostic concerns, if any
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    span: SourceSpan | None = None
    hint: str | None = None
    locale: str | None = None
    location: str | None = None
    severity: Literal["error", "warning", "info"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like Rust compiler.

        Example output:
            error[FALLBACK_CYCLE]: Circular fallback: en -> nl -> en
              --> i18n/en.json
              = help: Remove one of the fallback entries

        Returns:
            Formatted error message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
