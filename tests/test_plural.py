"""Tests for plural dispatch tables."""

import pytest
from hypothesis import given

from compiledi18n.runtime.plural import (
    Nested,
    Plural,
    Redirect,
    Text,
    parse_translation,
    stringify,
)
from tests.strategies import plural_documents


class TestStringify:
    """Parameter rendering."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (None, ""),
            (True, "true"),
            (False, "false"),
            (0, "0"),
            (1.5, "1.5"),
            (2.0, "2"),
            ("", ""),
            ("x", "x"),
        ],
    )
    def test_values(self, value: object, expected: str) -> None:
        """Booleans lowercase, None empty, others via str()."""
        assert stringify(value) == expected

    def test_object_with_str(self) -> None:
        """Objects render through __str__."""

        class There:
            def __str__(self) -> str:
                return "there"

        assert stringify(There()) == "there"


class TestPluralFromRaw:
    """Parsing locale-file plural objects into the tagged union."""

    def test_entry_kinds(self) -> None:
        """Strings, numbers, and objects map to Text, Redirect, Nested."""
        plural = Plural.from_raw({"*": "many", "1": "one", "2": 1, "0": {"*": "x"}})
        assert plural.entries["*"] == Text("many")
        assert plural.entries["2"] == Redirect("1")
        assert plural.entries["0"] == Nested(Plural({"*": Text("x")}))

    def test_entries_read_only(self) -> None:
        """Entries cannot be mutated after construction."""
        plural = Plural.from_raw({"*": "x"})
        with pytest.raises(TypeError):
            plural.entries["*"] = Text("y")  # type: ignore[index]

    def test_bool_rejected(self) -> None:
        """JSON true is not a tag number."""
        with pytest.raises(TypeError, match="must be text"):
            Plural.from_raw({"*": True})

    def test_null_rejected(self) -> None:
        """JSON null is not a valid entry."""
        with pytest.raises(TypeError):
            Plural.from_raw({"*": None})

    def test_equality(self) -> None:
        """Plurals compare by entries."""
        assert Plural.from_raw({"*": "a", "1": 1}) == Plural.from_raw({"*": "a", "1": 1})
        assert Plural.from_raw({"*": "a"}) != Plural.from_raw({"*": "b"})

    @given(plural_documents())
    def test_to_raw_restores_document(self, document: dict[str, object]) -> None:
        """to_raw() returns the parsed JSON structure."""
        assert Plural.from_raw(document).to_raw() == document


class TestPluralSelect:
    """Selecting a branch for one parameter."""

    plural = Plural.from_raw({"*": "hi", "0": "zero", "1": "one", "5": 1, "6": 5})

    def test_exact_tag(self) -> None:
        """The parameter's string form picks the tag."""
        assert self.plural.select(1) == "one"
        assert self.plural.select("0") == "zero"

    def test_fallback(self) -> None:
        """Unknown tags use "*"."""
        assert self.plural.select(2) == "hi"

    def test_none_selects_fallback(self) -> None:
        """A missing parameter selects "*"."""
        assert self.plural.select(None) == "hi"

    def test_redirect_followed_once(self) -> None:
        """A number entry borrows its sibling's entry."""
        assert self.plural.select(5) == "one"

    def test_redirect_to_redirect_selects_nothing(self) -> None:
        """Exactly one hop: a redirect landing on a redirect yields nothing."""
        assert self.plural.select(6) is None

    def test_redirect_to_missing_tag(self) -> None:
        """A redirect to an absent tag yields nothing."""
        assert Plural.from_raw({"*": 7}).select(None) is None

    def test_missing_fallback(self) -> None:
        """Without "*", an unmatched parameter selects nothing."""
        assert Plural.from_raw({"0": "zero"}).select(3) is None

    def test_nested(self) -> None:
        """A nested entry is returned for the next parameter."""
        plural = Plural.from_raw({"*": {"*": "inner"}})
        assert plural.select(1) == Plural.from_raw({"*": "inner"})


class TestParseTranslation:
    """Locale-file values to translations."""

    def test_string_passthrough(self) -> None:
        """Strings stay strings."""
        assert parse_translation("hi $1") == "hi $1"

    def test_mapping_becomes_plural(self) -> None:
        """Objects become Plural."""
        assert isinstance(parse_translation({"*": "x"}), Plural)

    def test_plural_passthrough(self) -> None:
        """Already parsed plurals are kept."""
        plural = Plural.from_raw({"*": "x"})
        assert parse_translation(plural) is plural

    def test_invalid(self) -> None:
        """Lists and numbers are not translations."""
        with pytest.raises(TypeError, match="string or a plural object"):
            parse_translation(["x"])
        with pytest.raises(TypeError):
            parse_translation(3)
