"""Runtime interpolation of translations.

Resolves plural dispatch and fills positional placeholders. This is the
runtime half of the build-time substitution: deployments that do not
inline translations call interpolate() themselves.

Placeholder syntax:
    $1 .. $9  - parameter 1..9 (missing or None renders empty)
    $$        - literal dollar sign
    $0        - never a valid parameter; renders empty

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence

from compiledi18n.runtime.plural import Plural, Translation, parse_translation, stringify

__all__ = ["fill_placeholders", "interpolate"]

_PLACEHOLDER = re.compile(r"\$([0-9$])")


def fill_placeholders(text: str, params: Sequence[object]) -> str:
    """Replace $n and $$ in text in a single pass.

    Replacement text is never re-scanned, so a parameter containing "$1"
    stays literal.

    Args:
        text: Translation text
        params: Positional parameters; $n takes params[n - 1]

    Returns:
        Text with placeholders filled
    """

    def _replace(match: re.Match[str]) -> str:
        token = match.group(1)
        if token == "$":
            return "$"
        index = int(token) - 1
        if 0 <= index < len(params):
            return stringify(params[index])
        return ""

    return _PLACEHOLDER.sub(_replace, text)


def interpolate(
    value: Translation | Mapping[str, object] | None,
    params: Sequence[object] = (),
) -> str:
    """Resolve a translation with positional parameters.

    While the value is a plural, parameter 0, then 1, and so on, selects the
    branch. The resulting text then gets its placeholders filled from the
    full parameter list.

    Args:
        value: Text, parsed Plural, or raw plural mapping from a locale file
        params: Positional parameters

    Returns:
        Display string; empty if plural selection matched nothing

    Example:
        >>> interpolate("hi $1", [0])
        'hi 0'
        >>> interpolate({"*": "$1 things", "1": "one thing"}, [1])
        'one thing'
    """
    current: Translation | None = parse_translation(value) if value is not None else None
    depth = 0
    while isinstance(current, Plural):
        param = params[depth] if depth < len(params) else None
        current = current.select(param)
        depth += 1

    if current is None:
        return ""
    return fill_placeholders(current, params)
