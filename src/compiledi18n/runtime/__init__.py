"""Runtime lookups: plural dispatch, interpolation, current locale.

Python 3.13+.
"""

from .interpolate import fill_placeholders, interpolate
from .locale_context import LocaleContext
from .localize import (
    Localizer,
    configure,
    get_localizer,
    load_translations,
    localize,
    plural,
)
from .plural import Nested, Plural, PluralEntry, Redirect, Text, Translation, stringify

__all__ = [
    "LocaleContext",
    "Localizer",
    "Nested",
    "Plural",
    "PluralEntry",
    "Redirect",
    "Text",
    "Translation",
    "configure",
    "fill_placeholders",
    "get_localizer",
    "interpolate",
    "load_translations",
    "localize",
    "plural",
    "stringify",
]
