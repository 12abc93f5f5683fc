"""Key derivation from template fragments.

A key identifies a message by its literal text. Interpolated expressions
are replaced by positional placeholders, so `Hello ${name}!` and
`Hello ${user.name}!` share the key "Hello $1!".

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from compiledi18n.localization.types import Key

__all__ = ["derive_key"]


def derive_key(fragments: Iterable[str]) -> Key:
    """Join literal template fragments into a lookup key.

    Every literal "$" is escaped to "$$", fragment i is prefixed with its
    index, and fragments are joined with "$". The index prefix of fragment 0
    is dropped. The result therefore only contains "$" as "$$" escapes or as
    "$<n>" placeholder markers.

    Args:
        fragments: Literal parts of a template, in source order. A template
            with n interpolations has n + 1 fragments.

    Returns:
        Canonical key

    Example:
        >>> derive_key(["hi"])
        'hi'
        >>> derive_key(["hi ", "!"])
        'hi $1!'
        >>> derive_key(["h$i", "t$$$here"])
        'h$$i$1t$$$$$$here'
    """
    joined = "$".join(
        f"{index}{fragment.replace('$', '$$')}" for index, fragment in enumerate(fragments)
    )
    return joined[1:]
