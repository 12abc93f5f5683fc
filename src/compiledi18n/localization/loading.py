"""Locale file loading.

One JSON file per locale, named after the locale:

    i18n/en.json
    {
        "locale": "en",
        "fallback": "nl",            (optional)
        "name": "English",           (optional, synthesized if absent)
        "translations": {"Hello $1": "Hello $1!"}
    }

Components:
    LocaleFileLoader - Reads, validates, synthesizes, and writes locale files
    LocaleLoadResult - Immutable record of one locale file load
    LoadSummary - Immutable aggregate of all load results

Python 3.13+.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from compiledi18n.diagnostics import (
    ConfigurationError,
    ErrorTemplate,
    LocaleMismatchError,
    UnknownFallbackError,
)
from compiledi18n.enums import LoadStatus
from compiledi18n.locale_utils import default_locale_name, validate_locale
from compiledi18n.localization.store import LocaleData, TranslationStore
from compiledi18n.localization.types import LocaleCode

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Loader
    "LocaleFileLoader",
    # Load result types
    "LocaleLoadResult",
    "LoadSummary",
]

logger = logging.getLogger(__name__)

# Indentation is sniffed from the head of an existing file
_INDENT_SNIFF_WINDOW = 100


@dataclass(frozen=True, slots=True)
class LocaleLoadResult:
    """Result of loading a single locale file.

    Attributes:
        locale: Locale code
        status: How the locale data was obtained
        path: Locale file path
        uses_tabs: Whether the file is (or will be) indented with tabs
    """

    locale: LocaleCode
    status: LoadStatus
    path: str
    uses_tabs: bool = False

    @property
    def is_loaded(self) -> bool:
        """Check if the file existed and was read."""
        return self.status == LoadStatus.LOADED

    @property
    def is_new(self) -> bool:
        """Check if the locale data was synthesized because the file was missing."""
        return self.status in (LoadStatus.CREATED, LoadStatus.SYNTHESIZED)


@dataclass(frozen=True, slots=True)
class LoadSummary:
    """Immutable aggregate of locale load results.

    Attributes:
        results: All individual load results (immutable tuple)
    """

    results: tuple[LocaleLoadResult, ...]

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return (
            f"LoadSummary(total={self.total}, "
            f"loaded={self.loaded}, "
            f"new={self.new})"
        )

    @property
    def total(self) -> int:
        """Total number of locales loaded."""
        return len(self.results)

    @property
    def loaded(self) -> int:
        """Number of locales read from existing files."""
        return sum(1 for r in self.results if r.is_loaded)

    @property
    def new(self) -> int:
        """Number of locales synthesized because their file was missing."""
        return sum(1 for r in self.results if r.is_new)

    def get_new(self) -> tuple[LocaleLoadResult, ...]:
        """Get all results for synthesized locales."""
        return tuple(r for r in self.results if r.is_new)

    def get_by_locale(self, locale: LocaleCode) -> LocaleLoadResult | None:
        """Get the result for one locale, if it was loaded."""
        return next((r for r in self.results if r.locale == locale), None)


class LocaleFileLoader:
    """File system loader for <locales_dir>/<locale>.json files.

    Example:
        >>> loader = LocaleFileLoader("i18n")
        >>> store, summary = loader.load_all(["en", "nl"])
        >>> summary.new  # files created for locales without one
        0

    Attributes:
        locales_dir: Directory holding the locale files
    """

    __slots__ = ("_indent_tabs", "locales_dir")

    def __init__(self, locales_dir: str | Path) -> None:
        self.locales_dir = Path(locales_dir)
        # Indentation per locale file, preserved when the file is rewritten
        self._indent_tabs: dict[LocaleCode, bool] = {}

    def __repr__(self) -> str:
        return f"LocaleFileLoader({str(self.locales_dir)!r})"

    def path_for(self, locale: LocaleCode) -> Path:
        """Return the file path of a locale.

        Raises:
            LocaleFormatError: If the locale code is malformed
        """
        validate_locale(locale)
        return self.locales_dir / f"{locale}.json"

    def load(
        self,
        locale: LocaleCode,
        *,
        add_missing: bool = True,
        tabs: bool = False,
    ) -> tuple[LocaleData, LocaleLoadResult]:
        """Load one locale file, synthesizing it when missing.

        Args:
            locale: Locale code
            add_missing: Write a synthesized file for a missing locale
            tabs: Indent a newly written file with tabs

        Returns:
            (locale data, load result)

        Raises:
            LocaleFormatError: If the locale code is malformed
            LocaleMismatchError: If the file declares another locale
            ConfigurationError: If the file is not a valid locale document
        """
        path = self.path_for(locale)
        if not path.exists():
            data = LocaleData(locale=locale, name=default_locale_name(locale))
            self._indent_tabs[locale] = tabs
            if add_missing:
                self.save(data)
                logger.info("Created locale file %s", path)
                status = LoadStatus.CREATED
            else:
                status = LoadStatus.SYNTHESIZED
            return data, LocaleLoadResult(locale, status, str(path), tabs)

        text = path.read_text(encoding="utf-8")
        uses_tabs = "\t" in text[:_INDENT_SNIFF_WINDOW]
        self._indent_tabs[locale] = uses_tabs
        try:
            raw = json.loads(text)
            if not isinstance(raw, dict):
                msg = "top level must be an object"
                raise TypeError(msg)
            data = LocaleData.from_raw(raw)
        except (json.JSONDecodeError, KeyError, TypeError) as e:
            raise ConfigurationError(ErrorTemplate.locale_file_invalid(str(path), str(e))) from e

        if data.locale != locale:
            diagnostic = ErrorTemplate.locale_mismatch(str(path), data.locale, locale)
            raise LocaleMismatchError(diagnostic)
        if not data.name:
            data.name = default_locale_name(locale)

        logger.debug("Loaded %d translations for %s from %s", len(data.translations), locale, path)
        return data, LocaleLoadResult(locale, LoadStatus.LOADED, str(path), uses_tabs)

    def load_all(
        self,
        locales: Iterable[LocaleCode],
        *,
        add_missing: bool = True,
        tabs: bool = False,
    ) -> tuple[TranslationStore, LoadSummary]:
        """Load every configured locale and build a validated store.

        Args:
            locales: Configured locale codes
            add_missing: Create files for locales that have none
            tabs: Indent newly created files with tabs

        Returns:
            (translation store, load summary)

        Raises:
            LocaleFormatError: If a locale code is malformed
            UnknownFallbackError: If a file falls back to an unconfigured locale
            FallbackCycleError: If fallbacks form a cycle
            ConfigurationError: If a file is invalid
        """
        codes = list(dict.fromkeys(locales))
        for code in codes:
            validate_locale(code)
        if add_missing:
            self.locales_dir.mkdir(parents=True, exist_ok=True)

        records: list[LocaleData] = []
        results: list[LocaleLoadResult] = []
        for code in codes:
            data, result = self.load(code, add_missing=add_missing, tabs=tabs)
            if data.fallback is not None and data.fallback not in codes:
                diagnostic = ErrorTemplate.fallback_unknown(result.path, data.fallback)
                raise UnknownFallbackError(diagnostic)
            records.append(data)
            results.append(result)

        summary = LoadSummary(tuple(results))
        logger.info("Loaded locales: %r", summary)
        return TranslationStore(records), summary

    def save(self, data: LocaleData) -> Path:
        """Write a locale file with translations sorted by key.

        Keys are ordered case-insensitively so that diffs of regenerated
        files stay small. The file keeps the indentation it was read with.

        Args:
            data: Locale record to write

        Returns:
            Path written
        """
        path = self.path_for(data.locale)
        raw = data.to_raw()
        translations = raw["translations"]
        assert isinstance(translations, dict)  # noqa: S101 - to_raw() shape
        raw["translations"] = dict(
            sorted(translations.items(), key=lambda item: (item[0].casefold(), item[0]))
        )
        indent = "\t" if self._indent_tabs.get(data.locale, False) else 2
        path.write_text(json.dumps(raw, indent=indent, ensure_ascii=False) + "\n", encoding="utf-8")
        return path
