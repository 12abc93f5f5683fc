"""Call-site rewrite rules.

The syntax transformer (an external collaborator that parses modules) finds
tagged templates whose tag is imported from the runtime package:

    import {_, localize as t} from 'compiled-i18n'
    _`Hello ${name}!`

and asks CallSiteRewriter what to put in their place:

    __$LOCALIZE$__("Hello $1!", [name])

Keys known to resolve to a plural in some locale need the first runtime
argument to pick a branch, so their translation is fetched raw and handed
to the runtime interpolate function instead:

    __interpolate__(__$LOCALIZE$__("$1 items"), [count])

The module then needs `interpolate as __interpolate__` added to its import.

Python 3.13+.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Protocol, TypeAlias

from compiledi18n.constants import (
    IMPORT_SCAN_WINDOW,
    INTERPOLATE_NAME,
    LOCALIZE_CALL,
    LOCALIZE_EXPORTS,
    LOCALIZE_MARKER,
    RUNTIME_PACKAGE,
)
from compiledi18n.diagnostics import ErrorTemplate, KeyFormatError
from compiledi18n.keys import derive_key
from compiledi18n.localization.types import Key

__all__ = [
    "CallSiteRewriter",
    "ImportSpecifier",
    "MarkerCall",
    "StringLiteral",
    "SyntaxRewriter",
    "is_rewritten",
    "transform_localize",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class StringLiteral:
    """Constant string interpolated into a template (e.g. `${"x"}`)."""

    value: str

    def to_source(self) -> str:
        """Render as a double-quoted literal."""
        return json.dumps(self.value, ensure_ascii=False)


Expression: TypeAlias = str | StringLiteral
"""Interpolated sub-expression: source text passed through, or a constant string."""


def _expression_source(expression: Expression) -> str:
    if isinstance(expression, StringLiteral):
        return expression.to_source()
    return expression


@dataclass(frozen=True, slots=True)
class ImportSpecifier:
    """Named import to add to the module's runtime-package import."""

    imported: str
    local: str

    def to_source(self) -> str:
        """Render as it appears inside import braces."""
        return f"{self.imported} as {self.local}"


@dataclass(frozen=True, slots=True)
class MarkerCall:
    """Canonical replacement for one localization call site.

    Attributes:
        key: Message key derived from the template's literal fragments
        arguments: Interpolated expressions, in template order
        runtime_interpolation: Wrap in the runtime interpolate call (plural keys)
    """

    key: Key
    arguments: tuple[Expression, ...] = ()
    runtime_interpolation: bool = False

    def to_source(self) -> str:
        """Render the call as code.

        Example:
            >>> MarkerCall("Hello $1!", ("name",)).to_source()
            '__$LOCALIZE$__("Hello $1!", [name])'
        """
        key_source = json.dumps(self.key, ensure_ascii=False)
        array = "[" + ", ".join(_expression_source(arg) for arg in self.arguments) + "]"
        if self.runtime_interpolation:
            # Without parameters the marker yields the raw translation,
            # placeholders included, for interpolate() to resolve
            return f"{INTERPOLATE_NAME}({LOCALIZE_MARKER}({key_source}), {array})"
        return f"{LOCALIZE_MARKER}({key_source}, {array})"


class CallSiteRewriter:
    """Decides the marker call for each localization call site.

    One instance serves a whole build: it accumulates every emitted key in
    all_keys for the end-of-build missing/unused report. Call begin_module()
    before rewriting each module so the interpolate import is requested once
    per module.

    Example:
        >>> rules = CallSiteRewriter(plural_keys={"$1 items"})
        >>> rules.rewrite(["", " items"], ["count"]).to_source()
        '__interpolate__(__$LOCALIZE$__("$1 items"), [count])'
        >>> rules.take_import()
        ImportSpecifier(imported='interpolate', local='__interpolate__')

    Attributes:
        plural_keys: Keys whose translation is a plural in some locale
        all_keys: Keys emitted so far
    """

    __slots__ = ("_import_added", "_import_needed", "all_keys", "plural_keys")

    def __init__(
        self,
        plural_keys: Iterable[Key] = (),
        all_keys: set[Key] | None = None,
    ) -> None:
        self.plural_keys: frozenset[Key] = frozenset(plural_keys)
        self.all_keys: set[Key] = all_keys if all_keys is not None else set()
        self._import_needed = False
        self._import_added = False

    @staticmethod
    def is_localize_import(source: str, imported: str) -> bool:
        """Check whether a named import binds a localization tag.

        Args:
            source: Module specifier of the import declaration
            imported: Exported name being imported (not the local alias)
        """
        return source == RUNTIME_PACKAGE and imported in LOCALIZE_EXPORTS

    def begin_module(self) -> None:
        """Reset per-module state."""
        self._import_needed = False
        self._import_added = False

    def rewrite(
        self,
        fragments: Sequence[str],
        expressions: Sequence[Expression] = (),
    ) -> MarkerCall:
        """Build the marker call for a tagged template.

        Args:
            fragments: Cooked literal parts of the template
            expressions: Interpolated expressions; StringLiteral for constant
                strings, source text otherwise

        Returns:
            Marker call to substitute for the tagged template

        Raises:
            KeyFormatError: If the key contains a line break
        """
        key = derive_key(fragments)
        if "\n" in key or "\r" in key:
            raise KeyFormatError(ErrorTemplate.key_multiline(fragments), fragments)
        self.all_keys.add(key)

        if key in self.plural_keys:
            self._import_needed = True
            logger.debug("Plural key %r deferred to runtime interpolation", key)
            return MarkerCall(key, tuple(expressions), runtime_interpolation=True)
        return MarkerCall(key, tuple(expressions))

    def take_import(self) -> ImportSpecifier | None:
        """Return the interpolate import the first time the module needs it."""
        if self._import_needed and not self._import_added:
            self._import_added = True
            return ImportSpecifier("interpolate", INTERPOLATE_NAME)
        return None


class SyntaxRewriter(Protocol):
    """Syntax-tree transformer that applies the rewrite rules to a module.

    Implementations parse the module, bind the local names of localization
    imports (see CallSiteRewriter.is_localize_import), replace each tagged
    template with rules.rewrite(...).to_source(), add rules.take_import()
    to the runtime import when it returns a specifier, and print the module.
    """

    def __call__(self, code: str, rules: CallSiteRewriter, module_id: str | None) -> str:
        """Return the rewritten module code."""
        ...


def is_rewritten(code: str) -> bool:
    """Check whether a module already went through the rewrite."""
    return INTERPOLATE_NAME in code[:IMPORT_SCAN_WINDOW] or LOCALIZE_CALL in code


def transform_localize(
    code: str,
    rewriter: SyntaxRewriter,
    rules: CallSiteRewriter,
    module_id: str | None = None,
) -> str | None:
    """Rewrite a module's localization call sites.

    Args:
        code: Module source
        rewriter: Syntax-tree transformer
        rules: Rewrite rules shared by the build
        module_id: Module path, for diagnostics

    Returns:
        Rewritten source, or None when the module does not import the
        runtime package or was already rewritten

    Raises:
        KeyFormatError: If a call site produces a multi-line key
    """
    if RUNTIME_PACKAGE not in code[:IMPORT_SCAN_WINDOW] or is_rewritten(code):
        return None
    rules.begin_module()
    result = rewriter(code, rules, module_id)
    logger.debug("Rewrote localize calls in %s", module_id or "<module>")
    return result
