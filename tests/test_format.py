"""Tests for core/printer.py and lib/format.py - Formatting."""

import re

import pytest

from core.jsonc import parse
from core.printer import FormatOptions, format_text
from lib.format import format_document


class TestFormatText:
    """Tests for format_text()."""

    def test_expands_compact_object(self):
        """Should put each property on its own line."""
        assert format_text('{"foo":"bar","baz":123}') == '{\n  "foo": "bar",\n  "baz": 123\n}'

    def test_nested_containers(self):
        """Nested objects and arrays indent one level deeper."""
        expected = '{\n  "a": {\n    "b": [\n      1,\n      2\n    ]\n  }\n}'
        assert format_text('{"a":{"b":[1,2]}}') == expected

    def test_empty_containers_stay_compact(self):
        """{} and [] should not be expanded."""
        assert format_text('{"a":{},"b":[]}') == '{\n  "a": {},\n  "b": []\n}'

    def test_tabs(self):
        """insert_spaces=False indents with tabs."""
        assert format_text('{"a":1}', FormatOptions(insert_spaces=False)) == '{\n\t"a": 1\n}'

    def test_tab_size(self):
        """tab_size controls the number of spaces."""
        assert format_text('{"a":1}', FormatOptions(tab_size=4)) == '{\n    "a": 1\n}'

    def test_eol(self):
        """eol controls the line terminator."""
        assert format_text('{"a":1}', FormatOptions(eol="\r\n")) == '{\r\n  "a": 1\r\n}'

    def test_trailing_line_comment_stays_on_line(self):
        """A comment on the same line as a value stays there."""
        result = format_text('{"a":1, // one\n"b":2}')
        assert result == '{\n  "a": 1, // one\n  "b": 2\n}'

    def test_own_line_comment_stays_on_own_line(self):
        """A comment that had its own line keeps it."""
        result = format_text('{\n// head\n"a":1}')
        assert result == '{\n  // head\n  "a": 1\n}'

    def test_surrounding_whitespace_dropped(self):
        """Leading and trailing whitespace is removed."""
        assert format_text("  {}  \n") == "{}"

    def test_empty_text(self):
        """Text without tokens is returned as-is."""
        assert format_text("") == ""

    def test_preserves_value_and_comments(self, settings_jsonc):
        """Formatting changes only whitespace."""
        result = format_text(settings_jsonc)
        assert parse(result) == parse(settings_jsonc)
        comments = re.findall(r"//[^\n]*|/\*.*?\*/", settings_jsonc)
        assert re.findall(r"//[^\n]*|/\*.*?\*/", result) == comments

    def test_idempotent(self, settings_jsonc, tsconfig_jsonc):
        """Formatting formatted text changes nothing."""
        for text in (settings_jsonc, tsconfig_jsonc, '{"a":[1,{"b":null}]}'):
            once = format_text(text)
            assert format_text(once) == once


class TestFormatDocument:
    """Tests for format_document()."""

    def test_keyword_options(self):
        """Should pass options through to the printer."""
        result = format_document('{"a":1}', tab_size=3, eol="\r\n")
        assert result == '{\r\n   "a": 1\r\n}'

    def test_negative_tab_size_rejected(self):
        """A negative tab size is an error."""
        with pytest.raises(ValueError):
            format_document("{}", tab_size=-1)
