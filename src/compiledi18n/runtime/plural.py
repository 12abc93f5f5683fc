"""Plural dispatch tables.

A plural translation selects its text by the string form of a runtime
parameter. Locale files store it as a JSON object:

    {"0": "no items", "1": "one item", "2": 1, "*": "$1 items"}

Each entry is one of three kinds, modeled as a tagged union:

    Text     - "one item": placeholder text, the selection ends here
    Redirect - 1: use the entry of tag "1" instead (exactly one hop)
    Nested   - {...}: another plural, selected by the next parameter

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import TypeAlias

from compiledi18n.constants import PLURAL_FALLBACK_TAG

__all__ = [
    "Nested",
    "Plural",
    "PluralEntry",
    "Redirect",
    "Text",
    "Translation",
    "parse_translation",
    "stringify",
]


def stringify(value: object) -> str:
    """Render a parameter the way translations expect it.

    Booleans render lowercase ("true"/"false") and integral floats drop
    their ".0", so texts shared with generated JavaScript read the same.
    None renders empty. Everything else uses its own str().

    Example:
        >>> stringify(0), stringify(False), stringify(None)
        ('0', 'false', '')
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


@dataclass(frozen=True, slots=True)
class Text:
    """Terminal entry: placeholder text."""

    value: str


@dataclass(frozen=True, slots=True)
class Redirect:
    """Entry that borrows the entry of a sibling tag."""

    tag: str


@dataclass(frozen=True, slots=True)
class Nested:
    """Entry that dispatches again on the next parameter."""

    plural: Plural


PluralEntry: TypeAlias = Text | Redirect | Nested


@dataclass(frozen=True, slots=True, eq=False)
class Plural:
    """Immutable plural dispatch table.

    Attributes:
        entries: Read-only mapping of tag -> entry, in file order
    """

    entries: Mapping[str, PluralEntry]

    def __post_init__(self) -> None:
        object.__setattr__(self, "entries", MappingProxyType(dict(self.entries)))

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Plural) and dict(self.entries) == dict(other.entries)

    __hash__ = None  # type: ignore[assignment]

    @classmethod
    def from_raw(cls, raw: Mapping[str, object]) -> Plural:
        """Parse a plural object as stored in a locale file.

        Args:
            raw: Mapping of tag -> string, number, or nested mapping

        Returns:
            Parsed Plural

        Raises:
            TypeError: If an entry is neither text, number, nor mapping
        """
        entries: dict[str, PluralEntry] = {}
        for tag, value in raw.items():
            match value:
                case bool():
                    msg = f"Plural entry {tag!r} must be text, a tag number, or an object"
                    raise TypeError(msg)
                case str():
                    entries[str(tag)] = Text(value)
                case int() | float():
                    entries[str(tag)] = Redirect(stringify(value))
                case Mapping():
                    entries[str(tag)] = Nested(cls.from_raw(value))
                case _:
                    msg = f"Plural entry {tag!r} must be text, a tag number, or an object"
                    raise TypeError(msg)
        return cls(entries)

    def to_raw(self) -> dict[str, object]:
        """Return the JSON structure this plural was parsed from."""
        raw: dict[str, object] = {}
        for tag, entry in self.entries.items():
            match entry:
                case Text(value):
                    raw[tag] = value
                case Redirect(target):
                    raw[tag] = int(target) if target.lstrip("-").isdigit() else target
                case Nested(plural):
                    raw[tag] = plural.to_raw()
        return raw

    def select(self, param: object) -> str | Plural | None:
        """Pick the branch for one parameter.

        The parameter's string form is looked up, falling back to the "*"
        tag. A Redirect is followed exactly once; a redirect that lands on
        another redirect, or on a missing tag, selects nothing.

        Args:
            param: Runtime parameter deciding the branch (None selects "*")

        Returns:
            Text of the branch, a nested Plural, or None when nothing matches
        """
        entry = self.entries.get(stringify(param)) if param is not None else None
        if entry is None:
            entry = self.entries.get(PLURAL_FALLBACK_TAG)
        if isinstance(entry, Redirect):
            entry = self.entries.get(entry.tag)
        match entry:
            case Text(value):
                return value
            case Nested(plural):
                return plural
            case _:
                return None


Translation: TypeAlias = str | Plural


def parse_translation(raw: object) -> Translation:
    """Convert a locale-file value into a Translation.

    Raises:
        TypeError: If the value is neither a string nor a plural object
    """
    if isinstance(raw, str):
        return raw
    if isinstance(raw, Plural):
        return raw
    if isinstance(raw, Mapping):
        return Plural.from_raw(raw)
    msg = f"Translation must be a string or a plural object, got {type(raw).__name__}"
    raise TypeError(msg)
