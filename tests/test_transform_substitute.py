"""Tests for bundle-text substitution of marker calls."""

import json

import pytest
from hypothesis import given
from hypothesis import strategies as st

from compiledi18n.diagnostics import (
    DiagnosticCode,
    MalformedBundleError,
    UnknownLocaleError,
)
from compiledi18n.localization.store import LocaleData, TranslationStore
from compiledi18n.runtime.interpolate import interpolate
from compiledi18n.runtime.plural import Plural
from compiledi18n.transform.substitute import make_translated_expr, substitute
from tests.strategies import placeholder_texts

# ============================================================================
# UNIT TESTS - TRANSLATED EXPRESSIONS
# ============================================================================


class TestMakeTranslatedExpr:
    def test_plural(self) -> None:
        plural = Plural.from_raw({"0": "foo", "*": "bar $1"})
        assert make_translated_expr(plural, []) == '{"0":"foo","*":"bar $1"}'

    def test_parameters(self) -> None:
        """Placeholders become slots around the parameter source text."""
        assert make_translated_expr("foo $2 b$$r $1", ['"a"', "b"]) == '`foo ${b} b$r ${"a"}`'

    def test_no_parameter_list(self) -> None:
        """Without a parameter list the text stays raw for runtime interpolation."""
        assert make_translated_expr("foo $1 b$$r $2", None) == "`foo $1 b$$r $2`"

    def test_backticks(self) -> None:
        assert make_translated_expr("``` hello``", ["0"]) == "`\\`\\`\\` hello\\`\\``"

    def test_missing_parameter_dropped(self) -> None:
        assert make_translated_expr("a $1 $3 $0", ["x"]) == "`a ${x}  `"

    def test_backslash_and_slot_escaped(self) -> None:
        assert make_translated_expr("a\\b ${c}", []) == "`a\\\\b \\${c}`"

    def test_dollar_escape_before_brace(self) -> None:
        """"$${" must not open a slot in the output."""
        assert make_translated_expr("$${x}", []) == "`\\${x}`"

    def test_raw_text_escaped_too(self) -> None:
        assert make_translated_expr("`$1`", None) == "`\\`$1\\``"


# ============================================================================
# UNIT TESTS - SUBSTITUTION
# ============================================================================

_TRANSLATIONS = {
    "en": {
        "locale": "en",
        "fallback": "fr",
        "translations": {"a key$$ $1 $2: $3-$4$5": "A k$0e$9y!! $a $$ $2 $1: $3-$4-$5"},
    },
    "fr": {"locale": "fr", "translations": {"hello": "bonjour"}},
}


class TestSubstitute:
    def test_bundle_text(self) -> None:
        """Flat parameters, nested markers, fallback lookup, and locale marker."""
        code = (
            "\n\tconsole.log(__$LOCALIZE$__(\"a key$$ $1 $2: $3-$4$5\", 'string argument', "
            'someVariable, "string with a , comma", (1 + 2 * 3 / 4), __$LOCALIZE$__("hello")), '
            '__$LOCALIZE$__("noTranslation"), "__$LOCALE$__");\n\t'
        )
        assert substitute(code, "en", _TRANSLATIONS) == (
            "\n\tconsole.log(`A key!! $a $ ${someVariable} ${'string argument'}: "
            '${"string with a , comma"}-${(1 + 2 * 3 / 4)}-${`bonjour`}`, '
            '`noTranslation`, "en");\n\t'
        )

    def test_hello_name(self) -> None:
        store = TranslationStore([LocaleData("en", {"Hello $1!": "Hello $1!"})])
        code = 'const s = __$LOCALIZE$__("Hello $1!", [name]);'
        assert substitute(code, "en", store) == "const s = `Hello ${name}!`;"
        assert store.resolve("en", "Hello $1!", ["world"]) == "Hello world!"

    def test_translated(self) -> None:
        store = TranslationStore([LocaleData("nl", {"Hello $1!": "Hallo $1!"})])
        code = '__$LOCALIZE$__("Hello $1!", [user.name])'
        assert substitute(code, "nl", store) == "`Hallo ${user.name}!`"

    def test_nested_innermost_first(self) -> None:
        store = TranslationStore(
            [LocaleData("nl", {"outer $1": "buiten $1", "inner $1": "binnen $1"})]
        )
        code = '__$LOCALIZE$__("outer $1", [__$LOCALIZE$__("inner $1", [x])])'
        assert substitute(code, "nl", store) == "`buiten ${`binnen ${x}`}`"

    def test_plural_kept_for_runtime(self) -> None:
        store = TranslationStore(
            [LocaleData("en", {"$1 items": Plural.from_raw({"*": "$1 items", "1": "one item"})})]
        )
        code = '__interpolate__(__$LOCALIZE$__("$1 items"), [n])'
        result = substitute(code, "en", store)
        assert result == '__interpolate__({"*":"$1 items","1":"one item"}, [n])'
        plural_json = result[len("__interpolate__(") : result.index(", [n])")]
        assert interpolate(json.loads(plural_json), [1]) == "one item"

    def test_non_plural_key_only_form(self) -> None:
        """A key-only call of a plain text key yields the raw text."""
        store = TranslationStore([LocaleData("en", {"$1 items": "$1 things"})])
        code = '__interpolate__(__$LOCALIZE$__("$1 items"), [n])'
        assert substitute(code, "en", store) == "__interpolate__(`$1 things`, [n])"

    def test_no_markers_unchanged(self) -> None:
        code = "const a = `x ${y}`; // __LOCALIZE__ $1"
        assert substitute(code, "en", {"en": {"locale": "en", "translations": {}}}) == code

    def test_idempotent(self) -> None:
        store = TranslationStore([LocaleData("en", {})])
        once = substitute('f(__$LOCALIZE$__("a $1", [b]))', "en", store)
        assert substitute(once, "en", store) == once

    def test_unknown_locale(self) -> None:
        with pytest.raises(UnknownLocaleError):
            substitute("x", "de", {"en": {"locale": "en", "translations": {}}})

    def test_malformed_call(self) -> None:
        store = TranslationStore([LocaleData("en", {})])
        with pytest.raises(MalformedBundleError) as exc_info:
            substitute('a; __$LOCALIZE$__("k", [x)', "en", store)
        assert exc_info.value.position == 3

    def test_leftover_marker(self) -> None:
        """A marker name not followed by a call is an error."""
        store = TranslationStore([LocaleData("en", {})])
        with pytest.raises(MalformedBundleError) as exc_info:
            substitute("const f = __$LOCALIZE$__;", "en", store)
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code is DiagnosticCode.MARKER_LEFTOVER
        assert exc_info.value.position == 10


# ============================================================================
# PROPERTY TESTS
# ============================================================================


def _evaluate_template(literal: str, values: dict[str, str]) -> str:
    """Evaluate a generated template literal whose slots are bare names."""
    assert literal.startswith("`")
    assert literal.endswith("`")
    body = literal[1:-1]
    out: list[str] = []
    index = 0
    while index < len(body):
        char = body[index]
        if char == "\\":
            out.append(body[index + 1])
            index += 2
        elif body.startswith("${", index):
            end = body.index("}", index)
            out.append(values[body[index + 2 : end]])
            index = end + 1
        else:
            assert char != "`"
            out.append(char)
            index += 1
    return "".join(out)


class TestSubstitutionMatchesRuntime:
    """Inlined output evaluates to what the runtime interpolator produces."""

    @given(placeholder_texts, st.lists(st.sampled_from(["x", "y z", "$1", "`"]), max_size=3))
    def test_inline_equals_interpolate(self, translation: str, params: list[str]) -> None:
        names = [f"p{index}" for index in range(len(params))]
        literal = make_translated_expr(translation, names)
        inlined = _evaluate_template(literal, dict(zip(names, params, strict=True)))
        assert inlined == interpolate(translation, params)
