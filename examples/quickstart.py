"""Quickstart example for compiledi18n.

This example walks one message through the whole pipeline: locale files,
runtime lookup, call-site rewrite, and per-locale bundle substitution.

Note: The call-site rewrite needs a JavaScript parser. This example uses a
one-line stand-in that handles exactly the module below.
"""

import json
import tempfile
from pathlib import Path

from compiledi18n import (
    BuildSession,
    CallSiteRewriter,
    I18nConfig,
    LocaleContext,
    Localizer,
    derive_key,
)

with tempfile.TemporaryDirectory() as tmp:
    locales_dir = Path(tmp) / "i18n"
    locales_dir.mkdir()
    (locales_dir / "en.json").write_text(
        json.dumps({"locale": "en", "translations": {"Hello $1!": "Hello $1!"}})
    )
    (locales_dir / "nl.json").write_text(
        json.dumps(
            {
                "locale": "nl",
                "fallback": "en",
                "translations": {
                    "Hello $1!": "Hallo $1!",
                    "$1 items": {"0": "geen dingen", "1": "1 ding", "*": "$1 dingen"},
                },
            }
        )
    )

    # Example 1: Keys
    print("=" * 50)
    print("Example 1: Keys")
    print("=" * 50)

    print(derive_key(["Hello ", "!"]))
    # Output: Hello $1!

    # Example 2: Runtime lookup
    print("\n" + "=" * 50)
    print("Example 2: Runtime Lookup")
    print("=" * 50)

    session = BuildSession(I18nConfig(locales=("en", "nl"), locales_dir=str(locales_dir)))
    store = session.start()
    l10n = Localizer(store, LocaleContext(store.locales))

    with l10n.context.using("nl"):
        print(l10n.localize(["Hello ", "!"], "wereld"))
        # Output: Hallo wereld!
        print(l10n.plural("$1 items", 0))
        # Output: geen dingen
        print(l10n.plural("$1 items", 7))
        # Output: 7 dingen

    print(l10n.context.guess_locale("nl-BE,nl;q=0.9,en;q=0.8"))
    # Output: nl

    # Example 3: Build pipeline
    print("\n" + "=" * 50)
    print("Example 3: Build Pipeline")
    print("=" * 50)

    module = "import {_} from 'compiled-i18n'\nexport const greet = name => _`Hello ${name}!`\n"

    def rewrite_module(code: str, rules: CallSiteRewriter, module_id: str | None) -> str:
        call = rules.rewrite(["Hello ", "!"], ["name"])
        return code.replace("_`Hello ${name}!`", call.to_source())

    rewritten = session.transform(module, rewrite_module, "src/greet.js")
    assert rewritten is not None
    print(rewritten.splitlines()[1])
    # Output: export const greet = name => __$LOCALIZE$__("Hello $1!", [name])

    assets = session.generate_bundle({"greet.js": rewritten})
    print(assets["nl/greet.js"].splitlines()[1])
    # Output: export const greet = name => `Hallo ${name}!`

    for locale, report in session.finish().items():
        print(locale, "missing:", report.missing, "unused:", report.unused)
    # Output: en missing: () unused: ()
    # Output: nl missing: () unused: ('$1 items',)
