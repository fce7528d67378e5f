"""Low-level edit generation and application.

TIER 0: May import from core only.

An edit replaces ``length`` characters at ``offset`` with ``content``.
Edit generators parse the document, work out the minimal span to touch
and return edits; ``apply_edits`` turns them into new text.
"""

import json
from dataclasses import dataclass
from typing import Any

from core.comments import find_trailing_comment, line_start, skip_spaces, SPACES
from core.errors import JsoncEditError, JsoncPathError
from core.jsonc import find_node_at_location, parse_tree
from core.paths import format_path
from core.types import Node, NodeType


@dataclass(frozen=True)
class Edit:
    """Replace text[offset:offset + length] with content."""

    offset: int
    length: int
    content: str

    @property
    def end(self) -> int:
        return self.offset + self.length


def apply_edits(text: str, edits: list[Edit]) -> str:
    """Apply non-overlapping edits to text.

    Args:
        text: Original text.
        edits: Edits with offsets into the original text.

    Returns:
        New text.

    Raises:
        JsoncEditError: If two edits overlap.
    """
    result = text
    limit = len(text)

    # Back to front so earlier offsets stay valid
    for edit in sorted(edits, key=lambda e: e.offset, reverse=True):
        if edit.end > limit:
            raise JsoncEditError(f"Overlapping edit at offset {edit.offset}")
        result = result[: edit.offset] + edit.content + result[edit.end :]
        limit = edit.offset

    return result


def to_json(value: Any) -> str:
    """Serialize a value compactly, the way new values are written."""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def detect_eol(text: str) -> str:
    """Line terminator used by the document (\\n when it has none)."""
    return "\r\n" if "\r\n" in text else "\n"


def _append_edits(text: str, container: Node, item: str) -> list[Edit]:
    """Edits that append item as the container's last entry."""
    if not container.children:
        return [Edit(container.offset + 1, 0, item)]

    previous = container.children[-1]
    start = line_start(text, previous.offset)
    indent = text[start : previous.offset]

    # Entries share a line with the brace or each other: stay on one line
    if start <= container.offset or indent.strip(SPACES):
        return [Edit(previous.end, 0, "," + item)]

    eol = detect_eol(text)
    trailing = find_trailing_comment(text, previous.end)
    if trailing is None:
        # An existing trailing comma ends up after the new entry
        return [Edit(previous.end, 0, f",{eol}{indent}{item}")]

    # Keep the comment on its property's line
    anchor = trailing.end
    pos = skip_spaces(text, previous.end)
    has_comma = text.startswith(",", pos)
    after = skip_spaces(text, trailing.end)
    if text.startswith(",", after):
        has_comma = True
        anchor = after + 1

    edits = [Edit(anchor, 0, f"{eol}{indent}{item}{',' if has_comma else ''}")]
    if not has_comma:
        edits.append(Edit(previous.end, 0, ","))
    return edits


def set_value_edits(text: str, path: list, value: Any) -> list[Edit]:
    """Compute edits that write value at path.

    Missing intermediate containers are created: string segments become
    objects, integer segments become arrays. Replacing an existing value
    touches only that value's span.

    Args:
        text: Document text.
        path: Target path.
        value: JSON-serializable value.

    Returns:
        Edits to apply to text.

    Raises:
        JsoncParseError: If the document is not valid JSONC.
        JsoncPathError: If the path runs through a scalar or uses a negative index.
    """
    root = parse_tree(text)
    segments = list(path)
    parent: Node | None = None
    last: str | int | None = None

    while segments:
        last = segments.pop()
        parent = find_node_at_location(root, segments)
        if parent is not None:
            break
        value = {last: value} if isinstance(last, str) else [value]

    if parent is None:
        # Replace the whole document value
        offset = root.offset if root else 0
        length = root.length if root else 0
        return [Edit(offset, length, to_json(value))]

    if parent.type is NodeType.OBJECT and isinstance(last, str):
        existing = find_node_at_location(parent, [last])
        if existing is not None:
            return [Edit(existing.offset, existing.length, to_json(value))]
        return _append_edits(text, parent, f"{to_json(last)}: {to_json(value)}")

    if parent.type is NodeType.ARRAY and isinstance(last, int):
        if last < 0:
            raise JsoncPathError(f"Negative array index in {format_path(path)}")
        if last < len(parent.children):
            child = parent.children[last]
            return [Edit(child.offset, child.length, to_json(value))]
        return _append_edits(text, parent, to_json(value))

    kind = "index" if isinstance(last, int) else "property"
    raise JsoncPathError(f"Cannot add {kind} {format_path(path)} to a value of type {parent.type.value}")


def remove_element_edits(text: str, path: list) -> list[Edit]:
    """Compute edits that delete the array element at path.

    The element goes together with one separating comma. Returns no edits
    if path does not name an existing array element.
    """
    if not path or not isinstance(path[-1], int):
        return []

    root = parse_tree(text)
    parent = find_node_at_location(root, path[:-1])
    index = path[-1]
    if parent is None or parent.type is not NodeType.ARRAY:
        return []
    if index < 0 or index >= len(parent.children):
        return []

    children = parent.children
    target = children[index]

    if len(children) == 1:
        return [Edit(parent.offset + 1, parent.length - 2, "")]
    if index == len(children) - 1:
        previous = children[index - 1]
        return [Edit(previous.end, target.end - previous.end, "")]
    following = children[index + 1]
    return [Edit(target.offset, following.offset - target.offset, "")]
