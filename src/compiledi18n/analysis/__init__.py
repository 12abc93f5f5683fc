"""Static analysis of locale configuration.

Python 3.13+.
"""

from .graph import detect_cycles, walk_chain

__all__ = ["detect_cycles", "walk_chain"]
