"""In-memory translation store with fallback chains.

Holds one LocaleData record per configured locale. Lookups walk the
fallback chain of the requested locale; a key missing everywhere resolves
to the key text itself, so missing translations degrade to the untranslated
message instead of failing.

Empty-string translations count as missing. Locale files use "" for keys
that were added automatically and are still waiting for a translator.

Thread Safety:
    Lookups never mutate the store and can run concurrently. merge() mutates
    one locale's translation map; hosts that hot-load translations while
    serving requests must serialize merges against reads themselves.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field

from compiledi18n.analysis.graph import detect_cycles, walk_chain
from compiledi18n.diagnostics import (
    ErrorTemplate,
    FallbackCycleError,
    UnknownFallbackError,
    UnknownLocaleError,
)
from compiledi18n.localization.types import Key, LocaleCode, RawTranslation
from compiledi18n.runtime.interpolate import interpolate
from compiledi18n.runtime.plural import Plural, Translation, parse_translation

__all__ = ["LocaleData", "TranslationStore"]

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class LocaleData:
    """One locale's record: identity, fallback, display name, translations.

    Attributes:
        locale: Locale code
        translations: Key -> Translation map (mutated only by merges)
        fallback: Locale consulted for keys missing here
        name: Display name of the locale in its own language
    """

    locale: LocaleCode
    translations: dict[Key, Translation] = field(default_factory=dict)
    fallback: LocaleCode | None = None
    name: str | None = None

    def __post_init__(self) -> None:
        # Raw plural objects passed by callers are parsed here
        self.translations = {
            key: parse_translation(value) for key, value in self.translations.items()
        }

    @classmethod
    def from_raw(cls, raw: Mapping[str, object]) -> LocaleData:
        """Build LocaleData from a parsed locale JSON document.

        Raises:
            TypeError: If a field or translation has the wrong type
            KeyError: If "locale" is absent
        """
        locale = raw["locale"]
        if not isinstance(locale, str):
            msg = f'"locale" must be a string, got {type(locale).__name__}'
            raise TypeError(msg)
        translations_raw = raw.get("translations") or {}
        if not isinstance(translations_raw, Mapping):
            msg = f'"translations" must be an object, got {type(translations_raw).__name__}'
            raise TypeError(msg)
        fallback = raw.get("fallback") or None
        name = raw.get("name") or None
        if fallback is not None and not isinstance(fallback, str):
            msg = f'"fallback" must be a string, got {type(fallback).__name__}'
            raise TypeError(msg)
        if name is not None and not isinstance(name, str):
            msg = f'"name" must be a string, got {type(name).__name__}'
            raise TypeError(msg)
        return cls(
            locale=locale,
            translations={
                str(key): parse_translation(value) for key, value in translations_raw.items()
            },
            fallback=fallback,
            name=name,
        )

    def to_raw(self) -> dict[str, object]:
        """Return the locale JSON document for this record."""
        raw: dict[str, object] = {"locale": self.locale}
        if self.fallback:
            raw["fallback"] = self.fallback
        if self.name:
            raw["name"] = self.name
        raw["translations"] = {
            key: value.to_raw() if isinstance(value, Plural) else value
            for key, value in self.translations.items()
        }
        return raw


class TranslationStore:
    """Process-wide map of locale -> LocaleData with fallback lookup.

    Built once per build or process. The fallback graph is validated at
    construction: every fallback must name a known locale and no chain may
    loop.

    Example:
        >>> store = TranslationStore([
        ...     LocaleData("en", {"Hello $1": "Hello $1!"}),
        ...     LocaleData("nl", {}, fallback="en"),
        ... ])
        >>> store.resolve("nl", "Hello $1", ["world"])
        'Hello world!'
        >>> store.resolve("nl", "Bye", [])
        'Bye'
    """

    __slots__ = ("_data",)

    def __init__(self, locales: Iterable[LocaleData]) -> None:
        """Initialize the store and validate the fallback graph.

        Args:
            locales: Locale records, one per configured locale

        Raises:
            UnknownFallbackError: If a fallback is not among the locales
            FallbackCycleError: If fallbacks form a cycle
        """
        self._data: dict[LocaleCode, LocaleData] = {data.locale: data for data in locales}

        for data in self._data.values():
            if data.fallback is not None and data.fallback not in self._data:
                diagnostic = ErrorTemplate.fallback_unknown(data.locale, data.fallback)
                raise UnknownFallbackError(diagnostic)

        cycles = detect_cycles({code: data.fallback for code, data in self._data.items()})
        if cycles:
            raise FallbackCycleError(ErrorTemplate.fallback_cycle(cycles[0]), cycles[0])

    @classmethod
    def from_mapping(
        cls, mapping: Mapping[LocaleCode, LocaleData | Mapping[str, object]]
    ) -> TranslationStore:
        """Build a store from locale -> LocaleData or raw locale documents."""
        return cls(
            data if isinstance(data, LocaleData) else LocaleData.from_raw(data)
            for data in mapping.values()
        )

    def __contains__(self, locale: object) -> bool:
        return locale in self._data

    def __iter__(self) -> Iterator[LocaleData]:
        return iter(self._data.values())

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"TranslationStore(locales={self.locales!r})"

    @property
    def locales(self) -> tuple[LocaleCode, ...]:
        """Configured locale codes in insertion order."""
        return tuple(self._data)

    def get(self, locale: LocaleCode) -> LocaleData:
        """Return one locale's record.

        Raises:
            UnknownLocaleError: If the locale is not configured
        """
        try:
            return self._data[locale]
        except KeyError:
            raise UnknownLocaleError(ErrorTemplate.locale_unknown(locale, "get")) from None

    def fallback_chain(self, locale: LocaleCode) -> tuple[LocaleCode, ...]:
        """Locales consulted, in order, for lookups starting at locale."""
        self.get(locale)
        return tuple(
            walk_chain(locale, {code: data.fallback for code, data in self._data.items()})
        )

    def lookup(self, locale: LocaleCode, key: Key) -> Translation | None:
        """Find the translation of key along the fallback chain.

        Args:
            locale: Locale to start at
            key: Message key

        Returns:
            First non-empty translation, or None if no locale in the chain has one

        Raises:
            UnknownLocaleError: If the starting locale is not configured
        """
        for code in self.fallback_chain(locale):
            translation = self._data[code].translations.get(key)
            if translation:
                if code != locale:
                    logger.debug("Key %r for %s resolved from fallback %s", key, locale, code)
                return translation
        return None

    def translation_for(self, locale: LocaleCode, key: Key) -> Translation:
        """Like lookup(), but an unresolved key becomes its own translation."""
        translation = self.lookup(locale, key)
        return key if translation is None else translation

    def resolve(self, locale: LocaleCode, key: Key, params: Sequence[object] = ()) -> str:
        """Look up key for locale and interpolate params into it.

        Args:
            locale: Locale to start at
            key: Message key
            params: Positional parameters for plural selection and placeholders

        Returns:
            Display string
        """
        return interpolate(self.translation_for(locale, key), params)

    def merge(self, locale: LocaleCode, translations: Mapping[Key, RawTranslation | Plural]) -> None:
        """Add translations to a locale without removing existing ones.

        Args:
            locale: Target locale
            translations: Key -> translation entries; existing keys are overwritten

        Raises:
            UnknownLocaleError: If the locale is not configured
            TypeError: If a translation is neither text nor a plural object
        """
        if locale not in self._data:
            raise UnknownLocaleError(ErrorTemplate.locale_unknown(locale, "loadTranslations"))
        parsed = {key: parse_translation(value) for key, value in translations.items()}
        self._data[locale].translations.update(parsed)
        logger.debug("Merged %d translations into %s", len(parsed), locale)

    def plural_keys(self) -> frozenset[Key]:
        """Keys whose translation is a plural object in at least one locale."""
        return frozenset(
            key
            for data in self._data.values()
            for key, value in data.translations.items()
            if isinstance(value, Plural)
        )

    def keys(self, locale: LocaleCode) -> frozenset[Key]:
        """Keys with an entry (possibly empty) in locale itself."""
        return frozenset(self.get(locale).translations)
