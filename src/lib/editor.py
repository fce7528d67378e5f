"""Lossless JSONC editing operations.

TIER 1: May import from core only.

Every operation takes document text and returns new text. Characters
outside the touched span (comments, whitespace, key order, trailing
commas) come back unchanged. Read operations never raise; mutating
operations raise JsoncParseError on malformed input and return the input
unchanged when the path names nothing.

Usage:
    from lib.editor import get, set_value, remove

    text = set_value(text, "config.port", 8080)
    text = remove(text, ["config", "legacy"])
"""

from collections.abc import Mapping
from typing import Any

from core.comments import SPACES, find_leading_comment, find_trailing_comment, line_end, line_start, skip_line_break
from core.edit import apply_edits, detect_eol, remove_element_edits, set_value_edits
from core.errors import JsoncEditError, JsoncPathError
from core.jsonc import find_node_at_location, get_node_value, parse_tree, tokenize
from core.paths import PathLike, format_path, parse_path
from core.types import FlatChange, Node, NodeType, TokenKind
from lib.changes import compute_deletions, flatten
from lib.logger import get_logger
from lib.ranges import is_single_line, resolve_range, starts_line

logger = get_logger("editor")


def find_property(text: str, path: PathLike) -> Node | None:
    """Find the property node (key + value) at path.

    Raises:
        JsoncParseError: If the document is not valid JSONC.
    """
    node = find_node_at_location(parse_tree(text), parse_path(path))
    if node is None or node.parent is None or node.parent.type is not NodeType.PROPERTY:
        return None
    return node.parent


# =============================================================================
# Read
# =============================================================================


def get(text: str, path: PathLike, default: Any = None) -> Any:
    """Read the value at path.

    Args:
        text: JSONC document text.
        path: Path list or notation string ("" or [] for the root).
        default: Returned when nothing is there or the text is malformed.

    Returns:
        Decoded value, or default.
    """
    try:
        node = find_node_at_location(parse_tree(text), parse_path(path))
    except JsoncEditError as e:
        logger.debug("get: %s", e)
        return default
    if node is None:
        return default
    return get_node_value(node)


def has(text: str, path: PathLike) -> bool:
    """Check if a value exists at path. A null value counts as present."""
    try:
        return find_node_at_location(parse_tree(text), parse_path(path)) is not None
    except JsoncEditError as e:
        logger.debug("has: %s", e)
        return False


# =============================================================================
# Write
# =============================================================================


def set_value(text: str, path: PathLike, value: Any, comment: str | None = None) -> str:
    """Write value at path, creating missing containers.

    Args:
        text: JSONC document text.
        path: Target path.
        value: JSON-serializable value.
        comment: Optional leading comment for the written property.

    Returns:
        New document text. Unchanged if the path runs through a scalar.

    Raises:
        JsoncParseError: If the document is not valid JSONC.
    """
    segments = parse_path(path)
    try:
        edits = set_value_edits(text, segments, value)
    except JsoncPathError as e:
        logger.debug("set_value: %s", e)
        return text

    result = apply_edits(text, edits)
    if comment is not None:
        result = set_comment(result, segments, comment)
    return result


def remove(text: str, path: PathLike) -> str:
    """Delete the property or array element at path.

    The property's comma, its own line and the comments documenting it go
    with it. Comments starting with ``**`` stay behind.

    Returns:
        New document text, or text unchanged if nothing is at path.

    Raises:
        JsoncParseError: If the document is not valid JSONC.
    """
    segments = parse_path(path)
    node = find_node_at_location(parse_tree(text), segments)
    if node is None or node.parent is None:
        logger.debug("remove: nothing at %s", format_path(segments))
        return text

    if node.parent.type is NodeType.ARRAY:
        return apply_edits(text, remove_element_edits(text, segments))

    span = resolve_range(text, node.parent)
    before = text[: span.delete_start]
    after = span.replacement + text[span.delete_end :]

    # Removing the last property must not leave `, }` behind
    if after.lstrip().startswith("}"):
        before = _drop_dangling_comma(before, after)

    return before + after


def _drop_dangling_comma(before: str, after: str) -> str:
    """Remove the comma ending before, if its last token is one."""
    tokens = [token for token in tokenize(before) if not token.kind.is_whitespace()]
    if not tokens or tokens[-1].kind is not TokenKind.COMMA:
        return before

    comma = tokens[-1].offset
    rest = before[comma + 1 :]
    # Nothing else left on the comma's line
    if not rest.strip(SPACES) and after.startswith(("\n", "\r")):
        rest = ""
    return before[:comma] + rest


def _apply(text: str, change: FlatChange) -> str:
    if change.is_delete:
        return remove(text, list(change.path))
    return set_value(text, list(change.path), change.leaf.value)


def merge(text: str, changes: Mapping) -> str:
    """Apply a change description without deleting unmentioned keys.

    Values are written with set_value, ``DELETE`` entries are removed, in
    the description's order.

    Raises:
        JsoncParseError: If the document is not valid JSONC.
    """
    result = text
    for change in flatten(changes):
        result = _apply(result, change)
    return result


# Same semantics, kept under the name used for partial updates
patch = merge


def replace(text: str, changes: Mapping) -> str:
    """Make the document match a full description.

    Keys the description leaves out are deleted (deepest first), then
    the description is applied like merge.

    Raises:
        JsoncParseError: If the document is not valid JSONC.
    """
    result = text
    for path in compute_deletions(text, changes):
        result = remove(result, list(path))
    return merge(result, changes)


modify = replace


def rename(text: str, path: PathLike, new_key: str) -> str:
    """Rename the property at path, keeping its value and leading comment.

    The renamed property is appended to its parent object.

    Raises:
        JsoncParseError: If the document is not valid JSONC.
    """
    segments = parse_path(path)
    prop = find_property(text, segments)
    if prop is None:
        logger.debug("rename: no property at %s", format_path(segments))
        return text

    value = get_node_value(prop.children[1])
    comment = find_leading_comment(text, prop.offset)
    new_path = segments[:-1] + [new_key]

    result = remove(text, segments)
    result = set_value(result, new_path, value)

    if comment is not None:
        result = set_comment(result, new_path, comment.content)
    return result


def move(text: str, from_path: PathLike, to_path: PathLike) -> str:
    """Move the value at from_path to to_path.

    Raises:
        JsoncParseError: If the document is not valid JSONC.
    """
    source = parse_path(from_path)
    node = find_node_at_location(parse_tree(text), source)
    if node is None or node.parent is None:
        logger.debug("move: nothing at %s", format_path(source))
        return text

    value = get_node_value(node)
    return set_value(remove(text, source), to_path, value)


# =============================================================================
# Comments
# =============================================================================


def get_comment(text: str, path: PathLike) -> str | None:
    """Comment documenting the property at path.

    The comment above the property wins; otherwise the one after its value.
    """
    try:
        prop = find_property(text, path)
    except JsoncEditError as e:
        logger.debug("get_comment: %s", e)
        return None
    if prop is None:
        return None

    comment = find_leading_comment(text, prop.offset) or find_trailing_comment(text, prop.end)
    return comment.content if comment else None


def get_trailing_comment(text: str, path: PathLike) -> str | None:
    """Comment after the value of the property at path."""
    try:
        prop = find_property(text, path)
    except JsoncEditError as e:
        logger.debug("get_trailing_comment: %s", e)
        return None
    if prop is None:
        return None

    comment = find_trailing_comment(text, prop.end)
    return comment.content if comment else None


def set_comment(text: str, path: PathLike, content: str) -> str:
    """Put ``// content`` on the line above the property at path.

    An existing leading comment is replaced. Properties that do not start
    their own line are left alone.

    Raises:
        JsoncParseError: If the document is not valid JSONC.
    """
    prop = find_property(text, path)
    if prop is None:
        return text
    if is_single_line(text, prop) or not starts_line(text, prop):
        logger.debug("set_comment: property at %s does not start a line", format_path(parse_path(path)))
        return text

    content = " ".join(content.splitlines())
    start = line_start(text, prop.offset)
    indent = text[start : prop.offset]
    existing = find_leading_comment(text, prop.offset)

    if existing is None:
        return text[:start] + f"{indent}// {content}{detect_eol(text)}" + text[start:]

    if not existing.own_line:
        return text[: existing.start] + f"// {content}" + text[existing.end :]

    comment_start = line_start(text, existing.start)
    comment_end = skip_line_break(text, line_end(text, existing.end))
    return text[:comment_start] + f"{indent}// {content}{detect_eol(text)}" + text[comment_end:]


def set_trailing_comment(text: str, path: PathLike, content: str) -> str:
    """Put a comment after the value of the property at path.

    The comment goes after the property's comma. It is a ``//`` comment
    unless more code follows on the line, then a ``/* */`` one.

    Raises:
        JsoncParseError: If the document is not valid JSONC.
    """
    prop = find_property(text, path)
    if prop is None:
        return text
    if is_single_line(text, prop):
        logger.debug("set_trailing_comment: property at %s shares the brace line", format_path(parse_path(path)))
        return text

    content = " ".join(content.splitlines())
    existing = find_trailing_comment(text, prop.end)
    if existing is not None:
        start, end = existing.start, existing.end
        separator = ""
    else:
        pos = prop.end
        while pos < len(text) and text[pos] in SPACES:
            pos += 1
        start = end = pos + 1 if text.startswith(",", pos) else prop.end
        separator = " "

    rest = text[end : line_end(text, end)].strip()
    rendered = f"/* {content} */" if rest else f"// {content}"
    return text[:start] + separator + rendered + text[end:]


def remove_comment(text: str, path: PathLike) -> str:
    """Delete the comment above the property at path.

    Raises:
        JsoncParseError: If the document is not valid JSONC.
    """
    prop = find_property(text, path)
    if prop is None:
        return text
    existing = find_leading_comment(text, prop.offset)
    if existing is None:
        return text

    if existing.own_line:
        start = line_start(text, existing.start)
        end = skip_line_break(text, line_end(text, existing.end))
        return text[:start] + text[end:]

    # Comment after the opening brace: keep the brace
    start = existing.start
    while start > 0 and text[start - 1] in SPACES:
        start -= 1
    return text[:start] + text[existing.end :]


def remove_trailing_comment(text: str, path: PathLike) -> str:
    """Delete the comment after the value of the property at path.

    Raises:
        JsoncParseError: If the document is not valid JSONC.
    """
    prop = find_property(text, path)
    if prop is None:
        return text
    existing = find_trailing_comment(text, prop.end)
    if existing is None:
        return text

    start = existing.start
    while start > prop.end and text[start - 1] in SPACES:
        start -= 1
    return text[:start] + text[existing.end :]
