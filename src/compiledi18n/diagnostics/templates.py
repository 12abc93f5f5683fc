"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

import json
from collections.abc import Iterable, Sequence

from .codes import Diagnostic, DiagnosticCode, SourceSpan

__all__ = ["ErrorTemplate"]


def _quoted(keys: Iterable[str]) -> str:
    return " ".join(json.dumps(key, ensure_ascii=False) for key in keys)


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    This provides:
        - Testable error messages
        - Consistent formatting
        - Documentation of all error cases
    """

    @staticmethod
    def locale_invalid(locale: str) -> Diagnostic:
        """Locale code does not have the xx or xx_XX shape.

        Args:
            locale: The rejected locale code

        Returns:
            Diagnostic for LOCALE_INVALID
        """
        msg = f"Invalid locale: {locale} (does not match xx or xx_XX)"
        return Diagnostic(
            code=DiagnosticCode.LOCALE_INVALID,
            message=msg,
            hint="Use a two-letter language code, optionally with a two-letter region",
            locale=locale,
        )

    @staticmethod
    def locale_unknown(locale: str, operation: str) -> Diagnostic:
        """Locale is not in the configured set.

        Args:
            locale: The unknown locale code
            operation: Operation that needed the locale

        Returns:
            Diagnostic for LOCALE_UNKNOWN
        """
        msg = f"{operation}: Invalid locale {locale}"
        return Diagnostic(
            code=DiagnosticCode.LOCALE_UNKNOWN,
            message=msg,
            hint="Add the locale to the configured locales",
            locale=locale,
        )

    @staticmethod
    def locale_mismatch(path: str, declared: str, expected: str) -> Diagnostic:
        """Locale file declares another locale.

        Args:
            path: Locale file path
            declared: Locale named inside the file
            expected: Locale implied by the file name

        Returns:
            Diagnostic for LOCALE_MISMATCH
        """
        msg = f"Invalid locale file: {path} (locale mismatch {declared} !== {expected})"
        return Diagnostic(
            code=DiagnosticCode.LOCALE_MISMATCH,
            message=msg,
            hint=f'Set "locale" to "{expected}" in the file',
            locale=expected,
            location=path,
        )

    @staticmethod
    def locale_file_invalid(path: str, reason: str) -> Diagnostic:
        """Locale file is not a valid locale data document.

        Args:
            path: Locale file path
            reason: What is wrong with it

        Returns:
            Diagnostic for LOCALE_FILE_INVALID
        """
        msg = f"Invalid locale file: {path} ({reason})"
        return Diagnostic(
            code=DiagnosticCode.LOCALE_FILE_INVALID,
            message=msg,
            hint='Expected {"locale": ..., "translations": {...}}',
            location=path,
        )

    @staticmethod
    def fallback_unknown(path: str, fallback: str) -> Diagnostic:
        """Fallback points outside the configured locale set.

        Args:
            path: Locale file path
            fallback: The unknown fallback locale

        Returns:
            Diagnostic for FALLBACK_UNKNOWN
        """
        msg = f"Invalid locale file: {path} (invalid fallback {fallback})"
        return Diagnostic(
            code=DiagnosticCode.FALLBACK_UNKNOWN,
            message=msg,
            hint="A fallback must be one of the configured locales",
            locale=fallback,
            location=path,
        )

    @staticmethod
    def fallback_cycle(cycle: Sequence[str]) -> Diagnostic:
        """Fallback pointers loop back onto themselves.

        Args:
            cycle: Locales along the cycle, first element repeated at the end

        Returns:
            Diagnostic for FALLBACK_CYCLE
        """
        path = " -> ".join(cycle)
        msg = f"Circular fallback: {path}"
        return Diagnostic(
            code=DiagnosticCode.FALLBACK_CYCLE,
            message=msg,
            hint="Remove the fallback entry of one locale in the cycle",
            locale=cycle[0] if cycle else None,
        )

    @staticmethod
    def key_multiline(fragments: Sequence[str]) -> Diagnostic:
        """Template fragments produce a key with a line break.

        Args:
            fragments: Literal fragments of the template

        Returns:
            Diagnostic for KEY_MULTILINE
        """
        msg = (
            "Keys cannot contain newlines. Please change this to a short, "
            f"descriptive key and use translations instead: {json.dumps(list(fragments))}"
        )
        return Diagnostic(
            code=DiagnosticCode.KEY_MULTILINE,
            message=msg,
            hint="Move long text into the locale files and keep the key on one line",
        )

    @staticmethod
    def marker_unbalanced(code: str, position: int) -> Diagnostic:
        """Marker call has no matching closing delimiter.

        Args:
            code: Generated code being scanned
            position: Offset of the marker call

        Returns:
            Diagnostic for MARKER_UNBALANCED
        """
        return Diagnostic(
            code=DiagnosticCode.MARKER_UNBALANCED,
            message="Unbalanced parenthesis",
            span=SourceSpan.at(code, position),
            hint="The generated code around the localize call is truncated or malformed",
        )

    @staticmethod
    def marker_no_arguments(marker: str, code: str, position: int) -> Diagnostic:
        """Marker call has no arguments at all.

        Args:
            marker: Marker function name
            code: Generated code being scanned
            position: Offset of the marker call

        Returns:
            Diagnostic for MARKER_NO_ARGUMENTS
        """
        return Diagnostic(
            code=DiagnosticCode.MARKER_NO_ARGUMENTS,
            message=f"No arguments found for {marker}",
            span=SourceSpan.at(code, position),
        )

    @staticmethod
    def marker_key_invalid(key_source: str, code: str, position: int) -> Diagnostic:
        """First marker argument is not a double-quoted string literal.

        Args:
            key_source: Source text of the first argument
            code: Generated code being scanned
            position: Offset of the marker call

        Returns:
            Diagnostic for MARKER_KEY_INVALID
        """
        return Diagnostic(
            code=DiagnosticCode.MARKER_KEY_INVALID,
            message=f"Marker key is not a string literal: {key_source}",
            span=SourceSpan.at(code, position),
            hint="A minifier may have rewritten the key; keep marker keys as literals",
        )

    @staticmethod
    def marker_leftover(marker: str, code: str, position: int) -> Diagnostic:
        """A marker survived substitution.

        Args:
            marker: The leftover token
            code: Substituted output
            position: Offset of the token

        Returns:
            Diagnostic for MARKER_LEFTOVER
        """
        return Diagnostic(
            code=DiagnosticCode.MARKER_LEFTOVER,
            message=f"Marker {marker} left in output after substitution",
            span=SourceSpan.at(code, position),
        )

    @staticmethod
    def keys_missing(locale: str, keys: Sequence[str]) -> Diagnostic:
        """Keys used in code but absent from a locale.

        Args:
            locale: Locale being reported
            keys: Missing keys

        Returns:
            Informational Diagnostic for KEYS_MISSING
        """
        return Diagnostic(
            code=DiagnosticCode.KEYS_MISSING,
            message=f"i18n {locale}: missing {len(keys)} keys: {_quoted(keys)}",
            locale=locale,
            severity="info",
        )

    @staticmethod
    def keys_unused(locale: str, keys: Sequence[str]) -> Diagnostic:
        """Keys present in a locale but never used in code.

        Args:
            locale: Locale being reported
            keys: Unused keys

        Returns:
            Informational Diagnostic for KEYS_UNUSED
        """
        return Diagnostic(
            code=DiagnosticCode.KEYS_UNUSED,
            message=f"i18n {locale}: unused {len(keys)} keys: {_quoted(keys)}",
            locale=locale,
            severity="info",
        )
