"""Shared constants for compiledi18n.

Centralizes the marker tokens that travel through generated code, the
locale code shape, and the limits used by the build-time transforms.
Placing constants here avoids circular imports between the runtime and
transform packages.

Constants are grouped by domain:
- Marker tokens: Intermediate encodings embedded in generated code
- Locale shape: Accepted locale code pattern
- Transform limits: How much of a module is inspected before rewriting

Python 3.13+. Zero external dependencies.
"""

import re

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Marker tokens
    "LOCALIZE_MARKER",
    "LOCALIZE_CALL",
    "LOCALE_MARKER",
    "INTERPOLATE_NAME",
    "RUNTIME_PACKAGE",
    "LOCALIZE_EXPORTS",
    # Plural dispatch
    "PLURAL_FALLBACK_TAG",
    # Locale shape
    "LOCALE_PATTERN",
    # Transform limits
    "IMPORT_SCAN_WINDOW",
]

# ============================================================================
# MARKER TOKENS
# ============================================================================
#
# The call-site rewrite emits canonical marker calls into module code. After
# bundling, the substitution scanner finds these calls in the final text and
# replaces them with literal template expressions. None of these tokens may
# survive into shipped output.
#
#   __$LOCALIZE$__("Hello $1", [name])
#   __interpolate__(__$LOCALIZE$__("$1 items"), [count])
#   "__$LOCALE$__"
#
# ============================================================================

# Bare name of the canonical marker function.
LOCALIZE_MARKER: str = "__$LOCALIZE$__"

# The marker as it appears at a call site; the scanner searches for this.
LOCALIZE_CALL: str = LOCALIZE_MARKER + "("

# Sentinel replaced with the literal target locale before call-site scanning.
LOCALE_MARKER: str = "__$LOCALE$__"

# Local binding under which the runtime interpolate function is imported
# into modules that use plural keys. Its presence marks rewritten output.
INTERPOLATE_NAME: str = "__interpolate__"

# Module specifier that localized modules import from.
RUNTIME_PACKAGE: str = "compiled-i18n"

# Exported names that are recognized as localization tags.
LOCALIZE_EXPORTS: frozenset[str] = frozenset({"_", "localize"})

# ============================================================================
# PLURAL DISPATCH
# ============================================================================

# Tag consulted when no tag matches the selecting parameter.
PLURAL_FALLBACK_TAG: str = "*"

# ============================================================================
# LOCALE SHAPE
# ============================================================================

# Two-letter language, optionally followed by "_" or "-" and a two-letter
# region: "en", "en_US", "pt-BR".
LOCALE_PATTERN: re.Pattern[str] = re.compile(r"^([a-z]{2})(?:[_-]([A-Z]{2}))?$")

# ============================================================================
# TRANSFORM LIMITS
# ============================================================================

# Only the head of a module is checked for the runtime import and for the
# already-rewritten signal. Imports are hoisted, so they sit in this window.
IMPORT_SCAN_WINDOW: int = 5000
