"""Type aliases for the localization domain.

Provides semantic type aliases used throughout the package and by user code
when annotating localize call sites and locale data.

Python 3.13+. Zero external dependencies.
"""

from typing import TypeAlias

__all__ = [
    "Key",
    "LocaleCode",
    "RawPlural",
    "RawTranslation",
    "TranslationMap",
]

Key: TypeAlias = str
"""Message key derived from template fragments (e.g., 'Hello $1!')."""

LocaleCode: TypeAlias = str
"""Locale code of the form xx or xx_XX (e.g., 'en', 'nl_BE')."""

RawPlural: TypeAlias = "dict[str, RawTranslation | int]"
"""Plural dispatch object as stored in locale JSON (tag -> text, redirect, nested)."""

RawTranslation: TypeAlias = "str | RawPlural"
"""Translation as stored in locale JSON: placeholder text or plural object."""

TranslationMap: TypeAlias = "dict[Key, RawTranslation]"
"""Translations of one locale, keyed by message key."""
