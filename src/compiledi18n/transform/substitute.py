"""Bundle-text substitution of marker calls.

Runs after bundling and minification, once per target locale. Every marker
call in the output is replaced by a template literal holding that locale's
translation, with placeholders turned into slots around the original
parameter expressions:

    __$LOCALIZE$__("Hello $1!", [user.name])   ->   `Hallo ${user.name}!`

Calls are processed from the end of the text backwards. A marker inside
another marker's parameters therefore sits to the right of its parent and
is replaced first, so the parent's scan sees the finished literal.

Python 3.13+.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Mapping, Sequence
from typing import TypeAlias

from compiledi18n.constants import LOCALE_MARKER, LOCALIZE_CALL, LOCALIZE_MARKER
from compiledi18n.diagnostics import ErrorTemplate, MalformedBundleError
from compiledi18n.localization.store import LocaleData, TranslationStore
from compiledi18n.localization.types import LocaleCode
from compiledi18n.runtime.plural import Plural, Translation
from compiledi18n.transform.scanner import scan_call

__all__ = ["make_translated_expr", "substitute"]

logger = logging.getLogger(__name__)

_PLACEHOLDER = re.compile(r"\$([0-9$])")

TranslationsByLocale: TypeAlias = TranslationStore | Mapping[LocaleCode, LocaleData | Mapping[str, object]]


def _escape_template_text(text: str) -> str:
    """Escape text so a template literal evaluates back to it."""
    return text.replace("\\", "\\\\").replace("`", "\\`").replace("${", "\\${")


def make_translated_expr(translation: Translation, parameters: Sequence[str] | None) -> str:
    """Build the literal expression that replaces a marker call.

    Args:
        translation: Translation for the target locale
        parameters: Source text of the call's parameter expressions, or None
            when the call had no parameter list (the translation is then
            kept raw, placeholders included, for runtime interpolation)

    Returns:
        JavaScript expression text

    Example:
        >>> make_translated_expr("foo $2 b$$r $1", ['"a"', "b"])
        '`foo ${b} b$r ${"a"}`'
        >>> make_translated_expr("foo $1 b$$r", None)
        '`foo $1 b$$r`'
    """
    if isinstance(translation, Plural):
        return json.dumps(translation.to_raw(), ensure_ascii=False, separators=(",", ":"))

    if parameters is None:
        return f"`{_escape_template_text(translation)}`"

    pieces: list[str] = []
    position = 0
    for match in _PLACEHOLDER.finditer(translation):
        pieces.append(_escape_template_text(translation[position : match.start()]))
        token = match.group(1)
        if token == "$":
            # "$" directly before "{" would open a slot
            pieces.append("\\$" if translation.startswith("{", match.end()) else "$")
        else:
            index = int(token) - 1
            if 0 <= index < len(parameters):
                pieces.append(f"${{{parameters[index]}}}")
            # otherwise the translator referenced a parameter this call lacks
        position = match.end()
    pieces.append(_escape_template_text(translation[position:]))
    return "`" + "".join(pieces) + "`"


def substitute(code: str, locale: LocaleCode, translations: TranslationsByLocale) -> str:
    """Inline one locale's translations into generated code.

    Args:
        code: Bundled output text
        locale: Target locale
        translations: TranslationStore, or locale -> LocaleData / raw locale document

    Returns:
        Code without marker calls or locale markers

    Raises:
        UnknownLocaleError: If the locale is not among the translations
        MalformedBundleError: If a marker call cannot be scanned, or a
            marker survives substitution
    """
    store = (
        translations
        if isinstance(translations, TranslationStore)
        else TranslationStore.from_mapping(translations)
    )
    store.get(locale)

    code = code.replace(LOCALE_MARKER, locale)
    replaced = 0
    search_end = len(code)
    while (start := code.rfind(LOCALIZE_CALL, 0, search_end)) != -1:
        call = scan_call(code, start)
        translation = store.translation_for(locale, call.key)
        parameters = call.parameters if call.has_parameter_list else None
        code = code[:start] + make_translated_expr(translation, parameters) + code[call.end :]
        search_end = start
        replaced += 1

    leftover = code.find(LOCALIZE_MARKER)
    if leftover != -1:
        diagnostic = ErrorTemplate.marker_leftover(LOCALIZE_MARKER, code, leftover)
        raise MalformedBundleError(diagnostic, leftover)

    if replaced:
        logger.debug("Inlined %d localize calls for %s", replaced, locale)
    return code
