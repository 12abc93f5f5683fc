"""Current-locale context for runtime lookups.

Replaces module-level mutable locale state with an explicit object that is
created once per process (or per test) and threaded into the Localizer.

Resolution order of get_locale():
    1. A locale bound with `with context.using(locale):` in the current
       thread or asyncio task (contextvars-based)
    2. The registered locale getter, if any (e.g. reading the request)
    3. The default locale

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Generator, Iterable
from contextlib import contextmanager
from contextvars import ContextVar
from typing import TypeAlias

from compiledi18n.diagnostics import ErrorTemplate, UnknownLocaleError
from compiledi18n.locale_utils import negotiate_locale, validate_locale
from compiledi18n.localization.types import LocaleCode

__all__ = ["LocaleContext"]

logger = logging.getLogger(__name__)

LocaleGetter: TypeAlias = Callable[[], LocaleCode | None]


class LocaleContext:
    """Locale selection for one process.

    Example:
        >>> ctx = LocaleContext(["en", "nl"])
        >>> ctx.get_locale()
        'en'
        >>> with ctx.using("nl"):
        ...     ctx.get_locale()
        'nl'
        >>> ctx.guess_locale("nl-BE,nl;q=0.9")
        'nl'

    Attributes:
        locales: Configured locale codes
    """

    __slots__ = ("_bound", "_default", "_getter", "locales")

    def __init__(self, locales: Iterable[LocaleCode], default_locale: LocaleCode | None = None) -> None:
        """Initialize the context.

        Args:
            locales: Configured locale codes
            default_locale: Defaults to the first locale

        Raises:
            ValueError: If locales is empty
            LocaleFormatError: If a locale code is malformed
            UnknownLocaleError: If default_locale is not configured
        """
        self.locales: tuple[LocaleCode, ...] = tuple(dict.fromkeys(locales))
        if not self.locales:
            msg = "At least one locale is required"
            raise ValueError(msg)
        for locale in self.locales:
            validate_locale(locale)
        self._default = self._check(default_locale or self.locales[0], "defaultLocale")
        self._getter: LocaleGetter | None = None
        self._bound: ContextVar[LocaleCode | None] = ContextVar(
            f"compiledi18n_locale_{id(self)}", default=None
        )

    def __repr__(self) -> str:
        return f"LocaleContext(locales={self.locales!r}, default_locale={self._default!r})"

    def _check(self, locale: LocaleCode, operation: str) -> LocaleCode:
        if locale not in self.locales:
            raise UnknownLocaleError(ErrorTemplate.locale_unknown(locale, operation))
        return locale

    @property
    def default_locale(self) -> LocaleCode:
        """Locale used when nothing else selects one."""
        return self._default

    def set_default_locale(self, locale: LocaleCode) -> None:
        """Change the default locale.

        Raises:
            UnknownLocaleError: If the locale is not configured
        """
        self._default = self._check(locale, "setDefaultLocale")
        logger.debug("Default locale set to %s", locale)

    def set_locale_getter(self, getter: LocaleGetter | None) -> None:
        """Register a function that yields the locale for each lookup.

        A getter returning None or "" selects the default locale. Pass None
        to remove the getter.
        """
        self._getter = getter

    def get_locale(self) -> LocaleCode:
        """Return the locale lookups should use right now.

        Raises:
            UnknownLocaleError: If the getter returns an unconfigured locale
        """
        bound = self._bound.get()
        if bound is not None:
            return bound
        if self._getter is not None:
            return self._check(self._getter() or self._default, "getLocale")
        return self._default

    @contextmanager
    def using(self, locale: LocaleCode) -> Generator[LocaleCode]:
        """Bind a locale for the current thread or task.

        Raises:
            UnknownLocaleError: If the locale is not configured
        """
        token = self._bound.set(self._check(locale, "using"))
        try:
            yield locale
        finally:
            self._bound.reset(token)

    def guess_locale(self, accept_language: str | None) -> LocaleCode:
        """Pick a configured locale from an Accept-Language header.

        Falls back to the default locale when nothing matches.
        """
        return negotiate_locale(accept_language, self.locales, self._default)
