"""Property range resolver.

TIER 1: May import from core only.

Works out which characters go away when a property is deleted: the
property itself, its comma, the comments that document it and, when the
property has a line of its own, the line terminator.
"""

from dataclasses import dataclass

from core.comments import (
    SPACES,
    find_leading_comment,
    find_trailing_comment,
    line_start,
    skip_line_break,
    skip_spaces,
)
from core.types import Node


@dataclass(frozen=True)
class PropertyRange:
    """Deletion span of a property.

    Deleting means replacing text[delete_start:delete_end] with
    ``replacement`` (usually empty).
    """

    is_single_line: bool
    line_start: int
    delete_start: int
    delete_end: int
    replacement: str = ""


def is_single_line(text: str, prop: Node) -> bool:
    """Check if the property shares its line with an opening brace."""
    return "{" in text[line_start(text, prop.offset) : prop.offset]


def starts_line(text: str, prop: Node) -> bool:
    """Check if only indentation precedes the property on its line."""
    return not text[line_start(text, prop.offset) : prop.offset].strip(SPACES)


def resolve_range(text: str, prop: Node) -> PropertyRange:
    """Compute the deletion span of a property node.

    Args:
        text: Document text.
        prop: Property node (key + value).

    Returns:
        PropertyRange for the property.
    """
    start = line_start(text, prop.offset)
    single = is_single_line(text, prop)
    # Code before the key on its line: cut like a single-line property
    inline = single or not starts_line(text, prop)
    replacement = ""

    leading = None if inline else find_leading_comment(text, prop.offset)
    if inline:
        delete_start = prop.offset
    elif leading is not None and not leading.detached:
        if leading.own_line:
            delete_start = line_start(text, leading.start)
        else:
            # `{ // note`: drop the note, keep the brace and the line break
            delete_start = leading.start
            while delete_start > 0 and text[delete_start - 1] in SPACES:
                delete_start -= 1
            replacement = text[leading.end : start]
    else:
        delete_start = start

    delete_end = prop.end
    if delete_end < len(text) and text[delete_end] == ",":
        delete_end += 1
    delete_end = skip_spaces(text, delete_end)

    trailing = find_trailing_comment(text, prop.end)
    if trailing is not None and trailing.detached:
        # Keep the note where the property was
        delete_end = trailing.start
        if not inline:
            replacement += text[start : prop.offset]
    elif trailing is not None:
        delete_end = skip_spaces(text, trailing.end)
        if delete_end < len(text) and text[delete_end] == ",":
            delete_end = skip_spaces(text, delete_end + 1)

    if not inline and (trailing is None or not trailing.detached):
        delete_end = skip_line_break(text, delete_end)

    return PropertyRange(single, start, delete_start, delete_end, replacement)
