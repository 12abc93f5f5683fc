"""Runtime translation lookups.

The runtime path for call sites that were not inlined at build time
(development, server rendering, strings built at runtime):

    >>> l10n = Localizer(store, LocaleContext(["en", "nl"]))
    >>> l10n.localize(["Hello ", "!"], "world")   # fragments -> "Hello $1!"
    'Hello world!'
    >>> l10n.localize("Hello $1!", "world")       # key used directly
    'Hello world!'

On Python 3.14+, template strings work as well: `l10n.localize(t"Hello {name}!")`
derives the key from the template's literal parts and takes its
interpolated values as parameters.

A process-wide Localizer can be installed with configure(); the module
level localize(), _(), plural() and load_translations() delegate to it.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Protocol, TypeAlias

from compiledi18n.keys import derive_key
from compiledi18n.runtime.locale_context import LocaleContext

if TYPE_CHECKING:
    from compiledi18n.localization.store import TranslationStore
    from compiledi18n.localization.types import Key, LocaleCode, RawTranslation
    from compiledi18n.runtime.plural import Plural

__all__ = [
    "Localizer",
    "configure",
    "get_localizer",
    "load_translations",
    "localize",
    "plural",
]

logger = logging.getLogger(__name__)


class TemplateLike(Protocol):
    """Structural type of string.templatelib.Template (PEP 750)."""

    @property
    def strings(self) -> tuple[str, ...]: ...

    @property
    def values(self) -> tuple[object, ...]: ...


Message: TypeAlias = str | Sequence[str] | TemplateLike


def _key_and_params(message: Message, params: Sequence[object]) -> tuple[Key, Sequence[object]]:
    """Split a localize() argument into key and parameters."""
    if isinstance(message, str):
        return message, params
    strings = getattr(message, "strings", None)
    if strings is not None:
        # string.templatelib.Template: literal parts plus interpolated values
        if params:
            msg = "Template messages take their parameters from the template"
            raise TypeError(msg)
        return derive_key(strings), tuple(getattr(message, "values", ()))
    if isinstance(message, Sequence):
        return derive_key(message), params
    msg = f"Cannot localize {type(message).__name__}: expected a key, fragments, or a template"
    raise TypeError(msg)


class Localizer:
    """Looks up and interpolates translations for the current locale.

    Attributes:
        store: Translations of all configured locales
        context: Decides the current locale
    """

    __slots__ = ("context", "store")

    def __init__(self, store: TranslationStore, context: LocaleContext | None = None) -> None:
        self.store = store
        self.context = context if context is not None else LocaleContext(store.locales)

    def __repr__(self) -> str:
        return f"Localizer(store={self.store!r}, context={self.context!r})"

    def localize(self, message: Message, /, *params: object) -> str:
        """Translate a message for the current locale.

        A plain string is used as the key directly. A sequence of literal
        fragments (or a template object) is converted to its key first.
        Missing translations fall back to the key text.

        Args:
            message: Key, literal fragments, or template
            *params: Positional parameters ($1, $2, ... and plural selectors)

        Returns:
            Translated, interpolated text
        """
        key, values = _key_and_params(message, params)
        return self.store.resolve(self.context.get_locale(), key, values)

    __call__ = localize
    plural = localize

    def load_translations(
        self,
        translations: Mapping[Key, RawTranslation | Plural],
        locale: LocaleCode | None = None,
    ) -> None:
        """Merge translations into a locale, the current one by default.

        Raises:
            UnknownLocaleError: If the locale is not configured
        """
        self.store.merge(locale or self.context.get_locale(), translations)


_localizer: Localizer | None = None


def configure(store: TranslationStore, context: LocaleContext | None = None) -> Localizer:
    """Install the process-wide Localizer used by the module-level helpers."""
    global _localizer  # noqa: PLW0603 - process-scoped configuration
    _localizer = Localizer(store, context)
    logger.info("Configured localizer for locales %s", ", ".join(store.locales))
    return _localizer


def get_localizer() -> Localizer:
    """Return the process-wide Localizer.

    Raises:
        RuntimeError: If configure() was never called
    """
    if _localizer is None:
        msg = "No localizer configured; call compiledi18n.configure() first"
        raise RuntimeError(msg)
    return _localizer


def localize(message: Message, /, *params: object) -> str:
    """Translate a message with the process-wide Localizer."""
    return get_localizer().localize(message, *params)


plural = localize


def load_translations(
    translations: Mapping[Key, RawTranslation | Plural],
    locale: LocaleCode | None = None,
) -> None:
    """Merge translations with the process-wide Localizer."""
    get_localizer().load_translations(translations, locale)
