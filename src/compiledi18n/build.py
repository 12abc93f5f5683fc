"""Build session: the lifecycle of one production build.

Ties the loader, the call-site rewrite, and the bundle substitution together
in the order a bundler drives them:

    session = BuildSession(I18nConfig(locales=("en", "nl")))
    session.start()                                  # load locale files
    code = session.transform(source, syntax_rewriter, "src/app.js")
    assets = session.generate_bundle(output_files)   # per-locale copies
    report = session.finish()                        # missing/unused keys

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass

from compiledi18n.config import I18nConfig
from compiledi18n.diagnostics import ErrorTemplate
from compiledi18n.localization.loading import LoadSummary, LocaleFileLoader
from compiledi18n.localization.store import TranslationStore
from compiledi18n.localization.types import Key, LocaleCode
from compiledi18n.runtime.locale_context import LocaleContext
from compiledi18n.transform.rewrite import CallSiteRewriter, SyntaxRewriter, transform_localize
from compiledi18n.transform.substitute import substitute

__all__ = ["BuildSession", "KeyReport"]

logger = logging.getLogger(__name__)

# Output files whose text goes through substitution
_SCRIPT_SUFFIX = "js"


@dataclass(frozen=True, slots=True)
class KeyReport:
    """Key usage of one locale at the end of a build.

    Attributes:
        locale: Locale code
        missing: Keys used in code without an entry in the locale file
        unused: Keys in the locale file that no code used
    """

    locale: LocaleCode
    missing: tuple[Key, ...] = ()
    unused: tuple[Key, ...] = ()

    @property
    def is_clean(self) -> bool:
        """True when nothing is missing or unused."""
        return not self.missing and not self.unused


class BuildSession:
    """State shared by all build hooks of one build.

    Attributes:
        config: Build configuration
        loader: Locale file loader
    """

    __slots__ = ("_rules", "_store", "_summary", "config", "loader")

    def __init__(self, config: I18nConfig, loader: LocaleFileLoader | None = None) -> None:
        self.config = config
        self.loader = loader if loader is not None else LocaleFileLoader(config.locales_dir)
        self._store: TranslationStore | None = None
        self._summary: LoadSummary | None = None
        self._rules: CallSiteRewriter | None = None

    def __repr__(self) -> str:
        state = "started" if self._store is not None else "idle"
        return f"BuildSession(locales={self.config.locales!r}, {state})"

    @property
    def store(self) -> TranslationStore:
        """Translations loaded by start().

        Raises:
            RuntimeError: If start() has not been called
        """
        if self._store is None:
            msg = "BuildSession.start() must be called first"
            raise RuntimeError(msg)
        return self._store

    @property
    def summary(self) -> LoadSummary | None:
        """Locale file load summary, once started."""
        return self._summary

    @property
    def all_keys(self) -> frozenset[Key]:
        """Keys emitted by the rewrite so far."""
        return frozenset(self._rules.all_keys) if self._rules is not None else frozenset()

    def start(self) -> TranslationStore:
        """Load and validate every locale file.

        Resets key tracking, so one session can run several builds.

        Returns:
            The loaded store

        Raises:
            ConfigurationError: If a locale file or the fallback graph is invalid
        """
        self._store, self._summary = self.loader.load_all(
            self.config.locales,
            add_missing=self.config.add_missing,
            tabs=self.config.tabs,
        )
        self._rules = CallSiteRewriter(plural_keys=self._store.plural_keys())
        logger.debug("Plural keys: %d", len(self._rules.plural_keys))
        return self._store

    def rewriter(self) -> CallSiteRewriter:
        """Rewrite rules bound to this build's plural keys and key tracking."""
        if self._rules is None:
            msg = "BuildSession.start() must be called first"
            raise RuntimeError(msg)
        return self._rules

    def locale_context(self) -> LocaleContext:
        """A LocaleContext for the configured locales."""
        return LocaleContext(self.config.locales, self.config.default_locale)

    def transform(
        self,
        code: str,
        syntax_rewriter: SyntaxRewriter,
        module_id: str | None = None,
    ) -> str | None:
        """Rewrite one module's localization call sites.

        Returns:
            Rewritten source, or None when the module needs no rewrite
        """
        return transform_localize(code, syntax_rewriter, self.rewriter(), module_id)

    def generate_bundle(self, files: Mapping[str, str | bytes]) -> dict[str, str | bytes]:
        """Produce one copy of the output per locale.

        Files under assets_dir (or all files when it is empty) are emitted as
        <assets_dir><locale>/<rest>. Text of script files has its marker
        calls replaced by the locale's translations; other files are copied
        unchanged. Files outside assets_dir are not emitted.

        Args:
            files: Output file name -> content

        Returns:
            Emitted file name -> content

        Raises:
            MalformedBundleError: If a script contains a malformed marker call
        """
        store = self.store
        assets_dir = self.config.assets_dir
        emitted: dict[str, str | bytes] = {}
        for name, source in files.items():
            if assets_dir and not name.startswith(assets_dir):
                continue
            rest = name[len(assets_dir) :]
            for locale in self.config.locales:
                content = source
                if name.endswith(_SCRIPT_SUFFIX) and isinstance(source, str):
                    content = substitute(source, locale, store)
                emitted[f"{assets_dir}{locale}/{rest}"] = content
        logger.info(
            "Emitted %d files for %d locales", len(emitted), len(self.config.locales)
        )
        return emitted

    def finish(self) -> dict[LocaleCode, KeyReport]:
        """Report missing and unused keys per locale.

        With add_missing, missing keys are added to each locale as "" and
        the locale file is rewritten.

        Returns:
            Locale -> KeyReport
        """
        store = self.store
        used = self.all_keys
        reports: dict[LocaleCode, KeyReport] = {}
        for locale in self.config.locales:
            present = store.keys(locale)
            report = KeyReport(
                locale,
                missing=tuple(sorted(used - present)),
                unused=tuple(sorted(present - used)),
            )
            reports[locale] = report
            if report.missing:
                logger.info("%s", ErrorTemplate.keys_missing(locale, report.missing).message)
            if report.unused:
                logger.info("%s", ErrorTemplate.keys_unused(locale, report.unused).message)

            if self.config.add_missing and report.missing:
                store.merge(locale, dict.fromkeys(report.missing, ""))
                path = self.loader.save(store.get(locale))
                logger.debug("Added %d missing keys to %s", len(report.missing), path)
        return reports
