"""compiledi18n - Compile-time translations for JavaScript bundles.

Messages are written as tagged templates in application code. A build step
rewrites each call site into a marker call keyed by the template's literal
text, and after bundling replaces every marker call with the translation of
the target locale, producing one fully translated bundle per locale. Keys
whose translation is a plural object are left to a small runtime
interpolator.

Public API:
    derive_key - Template fragments -> message key
    interpolate - Plural selection and placeholder filling
    TranslationStore - Locale data with fallback-chain lookup
    Localizer - Runtime lookup bound to a store and a LocaleContext
    localize / _ / plural - Module-level lookup after configure()
    substitute - Inline one locale's translations into bundle text
    BuildSession - Drives a build (load, rewrite, emit, report)

Exceptions:
    I18nError - Base exception class
    ConfigurationError - Invalid locale setup (codes, files, fallbacks)
    KeyFormatError - Call site produces an unusable key
    MalformedBundleError - Marker call cannot be scanned

Submodules:
    compiledi18n.runtime - Plural dispatch, interpolation, current locale
    compiledi18n.localization - Locale data, store, and file loading
    compiledi18n.transform - Call-site rewrite and bundle substitution
    compiledi18n.diagnostics - Error types and structured diagnostics
"""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

# Essential Public API - Minimal exports for clean namespace
from .build import BuildSession, KeyReport
from .config import I18nConfig
from .diagnostics import (
    ConfigurationError,
    I18nError,
    KeyFormatError,
    MalformedBundleError,
)
from .keys import derive_key
from .localization import LocaleData, LocaleFileLoader, TranslationStore
from .runtime import (
    LocaleContext,
    Localizer,
    Plural,
    configure,
    interpolate,
    load_translations,
    localize,
    plural,
)
from .transform import CallSiteRewriter, substitute, transform_localize

# Tagged-template alias used in application code: _`Hello ${name}!`
_ = localize

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
try:
    __version__ = _get_version("compiledi18n")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "BuildSession",
    "CallSiteRewriter",
    "ConfigurationError",
    "I18nConfig",
    "I18nError",
    "KeyFormatError",
    "KeyReport",
    "LocaleContext",
    "LocaleData",
    "LocaleFileLoader",
    "Localizer",
    "MalformedBundleError",
    "Plural",
    "TranslationStore",
    "_",
    "__version__",
    "configure",
    "derive_key",
    "interpolate",
    "load_translations",
    "localize",
    "plural",
    "substitute",
    "transform_localize",
]
