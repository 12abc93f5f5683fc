"""Build configuration.

A single frozen dataclass carrying every option of a build. Locale codes
are validated at construction so a typo fails before any file is read.

Python 3.13+.
"""

from __future__ import annotations

from dataclasses import dataclass

from compiledi18n.diagnostics import ErrorTemplate, UnknownLocaleError
from compiledi18n.locale_utils import validate_locale
from compiledi18n.localization.types import LocaleCode

__all__ = ["I18nConfig"]


@dataclass(frozen=True, slots=True)
class I18nConfig:
    """Immutable configuration for a BuildSession.

    Constructing ``I18nConfig()`` with no arguments produces a usable
    single-locale ("en") configuration.

    Attributes:
        locales: Supported locale codes, in order (default: ("en",)).
        locales_dir: Directory of the <locale>.json files (default: "i18n").
        default_locale: Locale used when none is selected (default: the
            first of locales).
        add_missing: Create missing locale files and write keys found in
            code but absent from a locale as "" entries (default: True).
        tabs: Indent newly created locale files with tabs (default: False).
        assets_dir: Subdirectory of browser assets in the build output.
            Only files under it are emitted per locale, as
            <assets_dir><locale>/<rest>. Normalized to end with "/".
            Empty means the whole output (default: "").

    Example:
        >>> config = I18nConfig(locales=("en", "nl"), assets_dir="build")
        >>> config.default_locale
        'en'
        >>> config.assets_dir
        'build/'
    """

    locales: tuple[LocaleCode, ...] = ("en",)
    locales_dir: str = "i18n"
    default_locale: LocaleCode | None = None
    add_missing: bool = True
    tabs: bool = False
    assets_dir: str = ""

    def __post_init__(self) -> None:
        """Validate and normalize configuration values.

        Raises:
            ValueError: If locales is empty
            LocaleFormatError: If a locale code is malformed
            UnknownLocaleError: If default_locale is not among locales
        """
        # Accept any iterable of codes; store a deduplicated tuple
        locales = tuple(dict.fromkeys(self.locales))
        if not locales:
            msg = "locales must not be empty"
            raise ValueError(msg)
        for locale in locales:
            validate_locale(locale)
        object.__setattr__(self, "locales", locales)

        if self.default_locale is None:
            object.__setattr__(self, "default_locale", locales[0])
        elif self.default_locale not in locales:
            diagnostic = ErrorTemplate.locale_unknown(self.default_locale, "defaultLocale")
            raise UnknownLocaleError(diagnostic)

        if self.assets_dir and not self.assets_dir.endswith("/"):
            object.__setattr__(self, "assets_dir", f"{self.assets_dir}/")
