"""Tests for lib/ranges.py - Property range resolver."""

from core.jsonc import parse_tree
from lib.ranges import is_single_line, resolve_range


def prop_at(text: str, *path: str):
    """Property node at a key path."""
    node = parse_tree(text)
    prop = None
    for key in path:
        prop = next(p for p in node.children if p.key == key)
        node = prop.children[1]
    return prop


def delete(text: str, *path: str) -> str:
    span = resolve_range(text, prop_at(text, *path))
    return text[: span.delete_start] + span.replacement + text[span.delete_end :]


class TestIsSingleLine:
    """Tests for is_single_line()."""

    def test_brace_on_same_line(self):
        text = '{ "a": 1 }'
        assert is_single_line(text, prop_at(text, "a"))

    def test_own_line(self):
        text = '{\n  "a": 1\n}'
        assert not is_single_line(text, prop_at(text, "a"))


class TestResolveRange:
    """Tests for resolve_range()."""

    def test_single_line_starts_at_key(self):
        """Single-line properties are cut from the key through the comma."""
        text = '{ "a": 1, "b": 2 }'
        span = resolve_range(text, prop_at(text, "a"))
        assert span.is_single_line
        assert text[span.delete_start : span.delete_end] == '"a": 1, '

    def test_multi_line_takes_whole_line(self):
        """Multi-line properties take their line including the terminator."""
        text = '{\n  "a": 1,\n  "b": 2\n}'
        span = resolve_range(text, prop_at(text, "a"))
        assert not span.is_single_line
        assert span.line_start == 2
        assert text[span.delete_start : span.delete_end] == '  "a": 1,\n'

    def test_code_before_key_keeps_line(self):
        """A property after other code on its line is cut from the key."""
        text = '{\n  "a": {\n    "x": 1\n  }, "b": 2\n}'
        span = resolve_range(text, prop_at(text, "b"))
        assert not span.is_single_line
        assert text[span.delete_start : span.delete_end] == '"b": 2'

    def test_leading_comment_included(self):
        """The comment above the property goes with it."""
        text = '{\n  // about a\n  "a": 1,\n  "b": 2\n}'
        assert delete(text, "a") == '{\n  "b": 2\n}'

    def test_detached_leading_comment_kept(self):
        """A ** comment above the property stays."""
        text = '{\n  // ** keep\n  "a": 1,\n  "b": 2\n}'
        assert delete(text, "a") == '{\n  // ** keep\n  "b": 2\n}'

    def test_trailing_comment_included(self):
        """The comment after the value goes with it."""
        text = '{\n  "a": 1, // about a\n  "b": 2\n}'
        assert delete(text, "a") == '{\n  "b": 2\n}'

    def test_detached_trailing_comment_kept(self):
        """A ** comment after the value stays on its own line."""
        text = '{\n  "a": 1, // ** keep\n  "b": 2\n}'
        assert delete(text, "a") == '{\n  // ** keep\n  "b": 2\n}'

    def test_block_comment_before_comma(self):
        """A block comment between value and comma goes with the property."""
        text = '{\n  "a": 1 /* one */,\n  "b": 2\n}'
        assert delete(text, "a") == '{\n  "b": 2\n}'

    def test_comment_after_brace_keeps_brace_line(self):
        """A comment after the brace is removed, the brace stays on its line."""
        text = '{ // about a\n  "a": 1,\n  "b": 2\n}'
        assert delete(text, "a") == '{\n  "b": 2\n}'

    def test_crlf(self):
        """\\r\\n terminators are removed whole."""
        text = '{\r\n  "a": 1,\r\n  "b": 2\r\n}'
        assert delete(text, "a") == '{\r\n  "b": 2\r\n}'
