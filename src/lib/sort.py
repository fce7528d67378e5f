"""Object key sorting.

TIER 1: May import from core only.

Reorders the properties of an object while keeping every comment with
the property it belongs to. Two layouts are recognized:

- Line layout: every property starts its own line. Properties move as
  whole lines, together with the comment lines and blank lines above
  them.
- Inline layout (anything else): properties move between fixed gaps,
  so the whitespace between entries stays where it was.

Whether the last entry carries a comma is a property of the object, not
of the entry: a trailing comma stays at the end after reordering.
"""

from collections.abc import Callable
from dataclasses import dataclass
from functools import cmp_to_key

from core.comments import SPACES, find_trailing_comment, line_end, line_start, skip_line_break, skip_spaces
from core.edit import detect_eol
from core.jsonc import find_node_at_location, parse_tree
from core.paths import PathLike, format_path, parse_path
from core.types import Node, NodeType
from lib.logger import get_logger

logger = get_logger("sort")

Comparator = Callable[[str, str], int]


@dataclass(frozen=True)
class _Entry:
    """A property and the text that travels with it."""

    key: str
    start: int
    end: int
    comma: int | None
    value: Node
    line_comment: bool


def _tail(text: str, prop: Node) -> tuple[int | None, int, bool]:
    """Comma offset, end of the property's trailing text, and whether it ends in a // comment."""
    comma = None
    end = prop.end
    pos = skip_spaces(text, prop.end)
    if text.startswith(",", pos):
        comma = pos
        end = pos + 1

    trailing = find_trailing_comment(text, prop.end)
    if trailing is None:
        return comma, end, False

    end = trailing.end
    after = skip_spaces(text, trailing.end)
    if comma is None and text.startswith(",", after):
        comma = after
        end = after + 1
    return comma, end, not trailing.block


def _is_line_layout(text: str, obj: Node) -> bool:
    for prop in obj.children:
        start = line_start(text, prop.offset)
        if start <= obj.offset or text[start : prop.offset].strip(SPACES):
            return False
        _, end, _ = _tail(text, prop)
        pos = skip_spaces(text, end)
        if pos >= len(text) or text[pos] not in "\r\n":
            return False
    return True


def _entries(text: str, obj: Node) -> tuple[list[_Entry], bool]:
    """Split an object's properties into movable entries."""
    line_layout = _is_line_layout(text, obj)
    entries: list[_Entry] = []

    for prop in obj.children:
        comma, end, line_comment = _tail(text, prop)
        if line_layout:
            # Contiguous whole lines, starting below the opening brace
            if entries:
                start = entries[-1].end
            else:
                start = skip_line_break(text, line_end(text, obj.offset + 1))
            end = skip_line_break(text, skip_spaces(text, end))
        else:
            start = prop.offset
        entries.append(_Entry(prop.key, start, end, comma, prop.children[1], line_comment))

    return entries, line_layout


def _render_entry(text: str, entry: _Entry, with_comma: bool, sort_key, deep: bool) -> str:
    value = entry.value
    body = text[value.offset : value.end]
    if deep and value.type is NodeType.OBJECT:
        body = _sort_object(text, value, sort_key, deep)

    comma_at = entry.comma if entry.comma is not None else value.end
    rest_start = comma_at + 1 if entry.comma is not None else comma_at

    head = text[entry.start : value.offset] + body + text[value.end : comma_at]
    return head + ("," if with_comma else "") + text[rest_start : entry.end]


def _sort_object(text: str, obj: Node, sort_key, deep: bool) -> str:
    """Text of obj with its properties (and, if deep, nested objects) sorted."""
    if not obj.children:
        return text[obj.offset : obj.end]

    entries, line_layout = _entries(text, obj)
    ordered = sorted(entries, key=lambda entry: sort_key(entry.key))
    trailing_comma = entries[-1].comma is not None

    gaps = [text[a.end : b.start] for a, b in zip(entries, entries[1:])]
    pieces = [text[obj.offset : entries[0].start]]
    following = gaps + [text[entries[-1].end : obj.end]]

    for position, entry in enumerate(ordered):
        last = position == len(ordered) - 1
        pieces.append(_render_entry(text, entry, not last or trailing_comma, sort_key, deep))
        after = following[position]
        # A // comment must still be followed by a line break
        if entry.line_comment and not line_layout and not after.lstrip(SPACES).startswith(("\n", "\r")):
            pieces.append(detect_eol(text))
        pieces.append(after)

    return "".join(pieces)


def sort(text: str, path: PathLike = "", comparator: Comparator | None = None, deep: bool = True) -> str:
    """Sort the keys of the object at path.

    Args:
        text: JSONC document text.
        path: Path of the object ("" or [] for the root).
        comparator: cmp-style function (negative, zero, positive). Defaults
            to code point order.
        deep: Also sort objects nested (directly) in property values.

    Returns:
        New document text, or text unchanged if path is not an object.

    Raises:
        JsoncParseError: If the document is not valid JSONC.
    """
    segments = parse_path(path)
    node = find_node_at_location(parse_tree(text), segments)
    if node is None or node.type is not NodeType.OBJECT:
        logger.debug("sort: no object at %s", format_path(segments) or "<root>")
        return text

    sort_key = cmp_to_key(comparator) if comparator is not None else str
    return text[: node.offset] + _sort_object(text, node, sort_key, deep) + text[node.end :]
