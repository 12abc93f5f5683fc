"""Enumerations for compiledi18n type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class ScanState(StrEnum):
    """Lexical state of the marker-call argument scanner.

    StrEnum provides automatic string conversion: str(ScanState.NORMAL) == "normal"
    """

    NORMAL = "normal"
    """Outside any string: structural characters are honored."""

    SINGLE_QUOTE = "single_quote"
    """Inside a '...' string literal."""

    DOUBLE_QUOTE = "double_quote"
    """Inside a "..." string literal."""

    TEMPLATE_LITERAL = "template_literal"
    """Inside the text part of a `...` template literal."""

    ESCAPE = "escape"
    """After a backslash: the next character has no meaning."""


class LoadStatus(StrEnum):
    """Outcome of loading one locale file.

    StrEnum provides automatic string conversion: str(LoadStatus.LOADED) == "loaded"
    """

    LOADED = "loaded"
    """Locale file existed and was read."""

    CREATED = "created"
    """Locale file was missing; empty data synthesized and written to disk."""

    SYNTHESIZED = "synthesized"
    """Locale file was missing; empty data synthesized in memory only."""


__all__ = [
    "LoadStatus",
    "ScanState",
]
