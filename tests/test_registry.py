"""Tests for the parser registry."""

import pytest

from forcesuper.errors import UnsupportedLanguageError
from forcesuper.semantic import (
    JavaParser,
    parser_for_path,
    supported_extensions,
    supported_languages,
)


class TestParserForPath:
    def test_java_is_registered(self):
        assert supported_languages() == ["java"]
        assert supported_extensions() == [".java"]

    def test_extension_is_case_insensitive(self):
        assert isinstance(parser_for_path("src/Widget.JAVA"), JavaParser)

    def test_parser_is_shared(self):
        assert parser_for_path("A.java") is parser_for_path("lib/B.java")

    def test_unknown_extension(self):
        with pytest.raises(UnsupportedLanguageError) as exc_info:
            parser_for_path("widget.kt")

        error = exc_info.value
        assert error.language == ".kt"
        assert error.supported == ["java"]
        assert "widget.kt" in str(error)

    def test_no_extension(self):
        with pytest.raises(UnsupportedLanguageError, match="<no extension>"):
            parser_for_path("Makefile")
