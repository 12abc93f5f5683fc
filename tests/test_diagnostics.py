"""Tests for diagnostics: codes, templates, errors, and formatting."""

import json

import pytest

from compiledi18n.diagnostics import (
    ConfigurationError,
    Diagnostic,
    DiagnosticCode,
    DiagnosticFormatter,
    ErrorTemplate,
    FallbackCycleError,
    I18nError,
    KeyFormatError,
    LocaleFormatError,
    MalformedBundleError,
    OutputFormat,
    SourceSpan,
    UnknownLocaleError,
)


class TestSourceSpan:
    def test_at_computes_line_and_column(self) -> None:
        span = SourceSpan.at("ab\ncd\nef", 7)
        assert (span.line, span.column) == (3, 2)
        assert span.end == 7

    def test_at_first_char(self) -> None:
        span = SourceSpan.at("abc", 0, 2)
        assert (span.start, span.end, span.line, span.column) == (0, 2, 1, 1)

    @pytest.mark.parametrize(
        ("start", "end", "line", "column"),
        [(-1, 0, 1, 1), (5, 4, 1, 1), (0, 0, 0, 1), (0, 0, 1, 0)],
    )
    def test_invariants(self, start: int, end: int, line: int, column: int) -> None:
        with pytest.raises(ValueError, match="SourceSpan"):
            SourceSpan(start, end, line, column)


class TestErrorHierarchy:
    def test_configuration_errors(self) -> None:
        for error in (LocaleFormatError, UnknownLocaleError, FallbackCycleError):
            assert issubclass(error, ConfigurationError)
            assert issubclass(error, I18nError)

    def test_value_error_compatibility(self) -> None:
        assert issubclass(LocaleFormatError, ValueError)
        assert issubclass(KeyFormatError, ValueError)
        assert not issubclass(MalformedBundleError, ValueError)

    def test_plain_message(self) -> None:
        error = I18nError("boom")
        assert str(error) == "boom"
        assert error.diagnostic is None

    def test_diagnostic_message(self) -> None:
        error = UnknownLocaleError(ErrorTemplate.locale_unknown("de", "getLocale"))
        assert error.diagnostic is not None
        assert str(error).startswith("error[LOCALE_UNKNOWN]: getLocale: Invalid locale de")

    def test_extra_attributes(self) -> None:
        assert FallbackCycleError("x", ["a", "b", "a"]).cycle == ("a", "b", "a")
        assert KeyFormatError("x", ["a\n"]).fragments == ("a\n",)
        assert MalformedBundleError("x").position == -1


class TestErrorTemplate:
    def test_locale_invalid(self) -> None:
        diagnostic = ErrorTemplate.locale_invalid("english")
        assert diagnostic.code is DiagnosticCode.LOCALE_INVALID
        assert diagnostic.message == "Invalid locale: english (does not match xx or xx_XX)"

    def test_fallback_cycle(self) -> None:
        diagnostic = ErrorTemplate.fallback_cycle(["en", "nl", "en"])
        assert diagnostic.message == "Circular fallback: en -> nl -> en"
        assert diagnostic.locale == "en"

    def test_key_multiline(self) -> None:
        diagnostic = ErrorTemplate.key_multiline(["a\n", "b"])
        assert diagnostic.message.endswith('["a\\n", "b"]')

    def test_keys_reports_are_info(self) -> None:
        missing = ErrorTemplate.keys_missing("nl", ["a", 'say "hi"'])
        assert missing.severity == "info"
        assert missing.message == 'i18n nl: missing 2 keys: "a" "say \\"hi\\""'
        assert ErrorTemplate.keys_unused("nl", ["b"]).code is DiagnosticCode.KEYS_UNUSED

    def test_marker_spans(self) -> None:
        code = "x\n  __$LOCALIZE$__"
        diagnostic = ErrorTemplate.marker_leftover("__$LOCALIZE$__", code, 4)
        assert diagnostic.span is not None
        assert (diagnostic.span.line, diagnostic.span.column) == (2, 3)


class TestDiagnosticFormatter:
    diagnostic = Diagnostic(
        code=DiagnosticCode.LOCALE_MISMATCH,
        message="Invalid locale file: i18n/nl.json (locale mismatch en !== nl)",
        hint='Set "locale" to "nl" in the file',
        locale="nl",
        location="i18n/nl.json",
    )

    def test_rust(self) -> None:
        assert DiagnosticFormatter().format(self.diagnostic) == (
            "error[LOCALE_MISMATCH]: Invalid locale file: i18n/nl.json (locale mismatch en !== nl)\n"
            "  --> i18n/nl.json\n"
            "  = locale: nl\n"
            '  = help: Set "locale" to "nl" in the file'
        )

    def test_rust_span(self) -> None:
        diagnostic = ErrorTemplate.marker_unbalanced("a\nbc", 3)
        lines = DiagnosticFormatter().format(diagnostic).splitlines()
        assert lines[1] == "  --> line 2, column 2"

    def test_simple(self) -> None:
        formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)
        assert formatter.format(self.diagnostic) == (
            "LOCALE_MISMATCH: Invalid locale file: i18n/nl.json (locale mismatch en !== nl)"
        )

    def test_json(self) -> None:
        formatter = DiagnosticFormatter(output_format=OutputFormat.JSON)
        data = json.loads(formatter.format(self.diagnostic))
        assert data["code"] == "LOCALE_MISMATCH"
        assert data["code_value"] == 1003
        assert data["location"] == "i18n/nl.json"
        assert "line" not in data

    def test_color(self) -> None:
        output = DiagnosticFormatter(color=True).format(self.diagnostic)
        assert output.startswith("\033[1;31merror\033[0m[LOCALE_MISMATCH]")

    def test_sanitize(self) -> None:
        formatter = DiagnosticFormatter(
            output_format=OutputFormat.SIMPLE, sanitize=True, max_content_length=10
        )
        assert formatter.format(self.diagnostic) == "LOCALE_MISMATCH: Invalid lo..."

    def test_format_all(self) -> None:
        output = DiagnosticFormatter(output_format=OutputFormat.SIMPLE).format_all(
            [self.diagnostic, ErrorTemplate.locale_invalid("x")]
        )
        assert output.count("\n\n") == 1
