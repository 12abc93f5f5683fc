"""Diagnostic system for compiledi18n errors.

Provides structured error diagnostics with codes, spans, and hints.
Inspired by Rust compiler diagnostics and Elm error messages.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceSpan
from .errors import (
    ConfigurationError,
    FallbackCycleError,
    I18nError,
    KeyFormatError,
    LocaleFormatError,
    LocaleMismatchError,
    MalformedBundleError,
    UnknownFallbackError,
    UnknownLocaleError,
)
from .formatter import DiagnosticFormatter, OutputFormat
from .templates import ErrorTemplate

__all__ = [
    "ConfigurationError",
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "ErrorTemplate",
    "FallbackCycleError",
    "I18nError",
    "KeyFormatError",
    "LocaleFormatError",
    "LocaleMismatchError",
    "MalformedBundleError",
    "OutputFormat",
    "SourceSpan",
    "UnknownFallbackError",
    "UnknownLocaleError",
]
