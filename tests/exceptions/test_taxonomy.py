"""Tests for the shellqa exception hierarchy and diagnostic codes."""

from pathlib import Path

from shellqa.exceptions import (
    AnalysisError,
    ConfigurationError,
    Diagnostic,
    ErrorCode,
    FileAccessError,
    InvalidConfigError,
    InvalidPathError,
    MalformedFunctionError,
    ShellQAError,
)


class TestErrorCode:
    def test_scanning_error_codes(self):
        """Scanning errors are SQ1xx."""
        assert ErrorCode.SQ100.value == "SQ100"  # File read error
        assert ErrorCode.SQ101.value == "SQ101"  # File too large

    def test_extraction_error_codes(self):
        """Extraction errors are SQ2xx."""
        assert ErrorCode.SQ200.value == "SQ200"  # No closing brace


class TestDiagnostic:
    def test_str_with_location(self):
        diag = Diagnostic(ErrorCode.SQ200, "No closing brace", path="lib/a.sh", line=12)
        assert str(diag) == "[SQ200] lib/a.sh:12 No closing brace"

    def test_str_without_location(self):
        assert str(Diagnostic(ErrorCode.SQ100, "boom")) == "[SQ100] boom"

    def test_to_json(self):
        diag = Diagnostic(ErrorCode.SQ101, "too big", path="x.sh", context={"size": 5})
        assert diag.to_json() == {
            "code": "SQ101",
            "message": "too big",
            "path": "x.sh",
            "line": None,
            "context": {"size": 5},
        }


class TestHierarchy:
    def test_all_derive_from_base(self):
        for cls in (
            AnalysisError,
            FileAccessError,
            MalformedFunctionError,
            ConfigurationError,
            InvalidPathError,
            InvalidConfigError,
        ):
            assert issubclass(cls, ShellQAError)

    def test_path_and_value_errors_are_configuration_errors(self):
        assert issubclass(InvalidPathError, ConfigurationError)
        assert issubclass(InvalidConfigError, ConfigurationError)

    def test_details_in_message(self):
        err = InvalidConfigError("max_lines", -1, "must be non-negative")
        text = str(err)
        assert "max_lines" in text
        assert "must be non-negative" in text
        assert err.details["key"] == "max_lines"

    def test_file_access_error(self):
        err = FileAccessError(Path("a.sh"), "Permission denied")
        assert err.reason == "Permission denied"
        assert "a.sh" in str(err)

    def test_malformed_function_error(self):
        err = MalformedFunctionError("lib.sh", "broken", 7)
        assert err.line == 7
        assert err.name == "broken"
        assert "broken" in err.message
