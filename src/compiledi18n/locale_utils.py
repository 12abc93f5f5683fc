"""Locale code utilities.

Validates the locale code shape, converts between the BCP-47 separator
("en-US") and the POSIX one Babel expects ("en_US"), and derives display
names and Accept-Language matches from Babel's CLDR data.

Python 3.13+.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from compiledi18n.constants import LOCALE_PATTERN
from compiledi18n.diagnostics import ErrorTemplate, LocaleFormatError

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "default_locale_name",
    "get_babel_locale",
    "negotiate_locale",
    "normalize_locale",
    "validate_locale",
]

logger = logging.getLogger(__name__)


def validate_locale(locale_code: str) -> tuple[str, str | None]:
    """Check that a locale code is xx or xx_XX (or xx-XX).

    Args:
        locale_code: Locale code to check

    Returns:
        (language, region) pair; region is None for language-only codes

    Raises:
        LocaleFormatError: If the code has another shape

    Example:
        >>> validate_locale("nl_BE")
        ('nl', 'BE')
        >>> validate_locale("en")
        ('en', None)
    """
    match = LOCALE_PATTERN.fullmatch(locale_code)
    if match is None:
        raise LocaleFormatError(ErrorTemplate.locale_invalid(locale_code))
    return match.group(1), match.group(2)


def normalize_locale(locale_code: str) -> str:
    """Convert BCP-47 locale code to POSIX format for Babel.

    Example:
        >>> normalize_locale("pt-BR")
        'pt_BR'
    """
    return locale_code.replace("-", "_")


@functools.lru_cache(maxsize=128)
def get_babel_locale(locale_code: str) -> Locale:
    """Get a Babel Locale object with caching.

    Thread-safe via lru_cache internal locking.

    Raises:
        babel.core.UnknownLocaleError: If locale is not recognized
        ValueError: If locale format is invalid
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel import Locale  # noqa: PLC0415

    return Locale.parse(normalize_locale(locale_code))


def default_locale_name(locale_code: str) -> str:
    """Name a locale in its own language.

    Uses Babel's CLDR display name ("Nederlands (België)"). Locales CLDR
    does not know get a synthesized "xx (YY)" name, or the code itself for
    language-only codes.

    Args:
        locale_code: Validated locale code

    Returns:
        Display name
    """
    from babel.core import UnknownLocaleError  # noqa: PLC0415

    language, region = validate_locale(locale_code)
    try:
        name = get_babel_locale(locale_code).get_display_name()
    except (UnknownLocaleError, ValueError) as e:
        logger.warning("Unknown locale '%s': %s. Using a synthesized name", locale_code, e)
        name = None
    if name:
        return name
    return f"{language} ({region})" if region else locale_code


def negotiate_locale(
    accept_language: str | None,
    locales: Sequence[str],
    default: str,
) -> str:
    """Pick a configured locale for an Accept-Language header.

    Language ranges are tried in quality order; "en-US" in the header
    matches a configured "en_US", and "nl-BE" falls back to a configured
    "nl" through Babel's alias and subtag handling.

    Args:
        accept_language: Header value, e.g. "nl-BE,nl;q=0.9,en;q=0.8"
        locales: Configured locale codes
        default: Locale returned when nothing matches

    Returns:
        Matching configured locale, or default

    Example:
        >>> negotiate_locale("fr-CH, fr;q=0.9, en;q=0.8", ["en", "fr"], "en")
        'fr'
    """
    if not accept_language:
        return default

    from babel import negotiate_locale as babel_negotiate  # noqa: PLC0415

    ranges: list[tuple[float, int, str]] = []
    for position, part in enumerate(accept_language.split(",")):
        tag, _, params = part.strip().partition(";")
        if not tag or tag == "*":
            continue
        quality = 1.0
        for param in params.split(";"):
            name, _, value = param.strip().partition("=")
            if name == "q":
                try:
                    quality = float(value)
                except ValueError:
                    quality = 0.0
        if quality > 0:
            ranges.append((-quality, position, normalize_locale(tag)))

    preferred = [tag for _, _, tag in sorted(ranges)]
    by_folded = {normalize_locale(code).lower(): code for code in locales}
    match = babel_negotiate(preferred, list(by_folded), sep="_")
    if match is None:
        return default
    return by_folded.get(match.lower(), default)
