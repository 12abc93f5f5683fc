"""Fallback graph analysis.

Each locale points to at most one fallback locale, so the fallback graph
is a set of chains that may end in a cycle. Cycles are fatal configuration
errors: a lookup walking such a chain would never terminate.

Python 3.13+.
"""

from collections.abc import Iterator, Mapping
from enum import Enum, auto

__all__ = ["detect_cycles", "walk_chain"]


class _NodeState(Enum):
    """Visitation state for cycle detection."""

    ON_PATH = auto()  # Reached from the chain currently being walked
    DONE = auto()  # Chain from this node is known to terminate or was reported


def detect_cycles(fallbacks: Mapping[str, str | None]) -> list[list[str]]:
    """Detect all cycles in a fallback graph.

    Walks the chain from every locale, coloring nodes as it goes. Reaching a
    node that is on the current path closes a cycle; reaching a finished
    node ends the walk. Each cycle is reported once.

    Args:
        fallbacks: Mapping from locale to its fallback (None for none).
                   Example: {"en": None, "nl": "de", "de": "nl"}

    Returns:
        List of cycles, each a list of locales with the first one repeated
        at the end. Empty list if the graph is acyclic.

    Example:
        >>> detect_cycles({"en": "nl", "nl": "en", "de": "en"})
        [['en', 'nl', 'en']]

    Complexity:
        Time: O(V) since every node has at most one outgoing edge
        Space: O(V)
    """
    state: dict[str, _NodeState] = {}
    cycles: list[list[str]] = []

    for start in fallbacks:
        if start in state:
            continue

        path: list[str] = []
        node: str | None = start
        while node is not None and node not in state:
            state[node] = _NodeState.ON_PATH
            path.append(node)
            node = fallbacks.get(node)

        if node is not None and state[node] is _NodeState.ON_PATH:
            cycle_start = path.index(node)
            cycles.append([*path[cycle_start:], node])

        for visited in path:
            state[visited] = _NodeState.DONE

    return cycles


def walk_chain(start: str, fallbacks: Mapping[str, str | None]) -> Iterator[str]:
    """Yield start, its fallback, that one's fallback, and so on.

    Stops at a locale without fallback or at the first repeated locale, so
    it terminates even on graphs that were not validated.

    Example:
        >>> list(walk_chain("nl_BE", {"nl_BE": "nl", "nl": "en", "en": None}))
        ['nl_BE', 'nl', 'en']
    """
    seen: set[str] = set()
    node: str | None = start
    while node is not None and node not in seen:
        seen.add(node)
        yield node
        node = fallbacks.get(node)
