"""Exception hierarchy with structured diagnostics.

All exceptions optionally carry a Diagnostic object for rich error output.
Configuration and bundle errors are fatal: they signal a broken build, not
a runtime condition to recover from. Missing translations are never errors.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Sequence

from .codes import Diagnostic


class I18nError(Exception):
    """Base exception for all compiledi18n errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize I18nError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class ConfigurationError(I18nError):
    """Locale set or locale file is inconsistent.

    Raised while loading locale data at build or process start.
    """


class LocaleFormatError(ConfigurationError, ValueError):
    """Locale code does not match the xx or xx_XX shape."""


class UnknownLocaleError(ConfigurationError):
    """Locale is not part of the configured locale set.

    Raised when merging translations into, or selecting, a locale the
    store does not know.
    """


class UnknownFallbackError(ConfigurationError):
    """Locale file names a fallback outside the configured locale set."""


class FallbackCycleError(ConfigurationError):
    """Fallback pointers form a cycle.

    Attributes:
        cycle: Locale codes along the cycle, first element repeated at the end
    """

    def __init__(self, message: str | Diagnostic, cycle: Sequence[str] = ()) -> None:
        """Initialize FallbackCycleError.

        Args:
            message: Error message string OR Diagnostic object
            cycle: Locale codes forming the cycle
        """
        super().__init__(message)
        self.cycle = tuple(cycle)


class LocaleMismatchError(ConfigurationError):
    """Locale file declares a different locale than its file name."""


class KeyFormatError(I18nError, ValueError):
    """Template fragments produce a key that cannot be used.

    Keys must be short and descriptive; line breaks are rejected.

    Attributes:
        fragments: Literal fragments of the offending template
    """

    def __init__(self, message: str | Diagnostic, fragments: Sequence[str] = ()) -> None:
        """Initialize KeyFormatError.

        Args:
            message: Error message string OR Diagnostic object
            fragments: Literal fragments of the offending template
        """
        super().__init__(message)
        self.fragments = tuple(fragments)


class MalformedBundleError(I18nError):
    """Generated code around a marker call cannot be scanned.

    Signals that the upstream rewrite produced unparseable output. The build
    must stop rather than emit corrupted code.

    Attributes:
        position: Offset of the marker call in the scanned text, or -1
    """

    def __init__(self, message: str | Diagnostic, position: int = -1) -> None:
        """Initialize MalformedBundleError.

        Args:
            message: Error message string OR Diagnostic object
            position: Offset of the offending marker call
        """
        super().__init__(message)
        self.position = position
