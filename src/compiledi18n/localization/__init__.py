"""Locale data package: translation store and locale file loading.

Submodules:
    types   - PEP 695 type aliases (Key, LocaleCode, RawTranslation, ...)
    store   - LocaleData, TranslationStore (fallback-chain lookup, merges)
    loading - LocaleFileLoader, LocaleLoadResult, LoadSummary

Python 3.13+.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability

from compiledi18n.enums import LoadStatus
from compiledi18n.localization.loading import LoadSummary, LocaleFileLoader, LocaleLoadResult
from compiledi18n.localization.store import LocaleData, TranslationStore
from compiledi18n.localization.types import (
    Key,
    LocaleCode,
    RawPlural,
    RawTranslation,
    TranslationMap,
)

__all__ = [
    # Store
    "LocaleData",
    "TranslationStore",
    # Loading
    "LocaleFileLoader",
    "LoadStatus",
    "LoadSummary",
    "LocaleLoadResult",
    # Type aliases for user code type annotations
    "Key",
    "LocaleCode",
    "RawPlural",
    "RawTranslation",
    "TranslationMap",
]
