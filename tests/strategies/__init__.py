"""Hypothesis strategies for compiledi18n property-based testing.

Usage:
    from tests.strategies import template_fragments, plural_documents
"""

from .messages import (
    fragment_text,
    locale_codes,
    placeholder_texts,
    plural_documents,
    template_fragments,
)

__all__ = [
    "fragment_text",
    "locale_codes",
    "placeholder_texts",
    "plural_documents",
    "template_fragments",
]
