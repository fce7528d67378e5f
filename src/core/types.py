"""Core types and enums.

TIER 0: No internal imports, only Python stdlib.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

# A location in the logical value tree: property names and array indices
JSONPath = list[Union[str, int]]

# Comments whose content starts with this marker survive deletion of their property
DETACHED_MARKER = "**"


class NodeType(str, Enum):
    """Structural node types produced by the parser."""

    OBJECT = "object"
    ARRAY = "array"
    PROPERTY = "property"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"

    def is_container(self) -> bool:
        """Check if nodes of this type own child nodes."""
        return self in (NodeType.OBJECT, NodeType.ARRAY, NodeType.PROPERTY)


class TokenKind(str, Enum):
    """Lexical token kinds of JSONC text."""

    OPEN_BRACE = "{"
    CLOSE_BRACE = "}"
    OPEN_BRACKET = "["
    CLOSE_BRACKET = "]"
    COMMA = ","
    COLON = ":"
    STRING = "string"
    NUMBER = "number"
    TRUE = "true"
    FALSE = "false"
    NULL = "null"
    LINE_COMMENT = "line-comment"
    BLOCK_COMMENT = "block-comment"
    LINE_BREAK = "line-break"
    TRIVIA = "trivia"
    UNKNOWN = "unknown"

    def is_comment(self) -> bool:
        """Check if token is a line or block comment."""
        return self in (TokenKind.LINE_COMMENT, TokenKind.BLOCK_COMMENT)

    def is_whitespace(self) -> bool:
        """Check if token carries only whitespace."""
        return self in (TokenKind.LINE_BREAK, TokenKind.TRIVIA)


class CommentKind(str, Enum):
    """Where a comment sits relative to the property it documents."""

    LEADING = "leading"
    TRAILING = "trailing"


class Marker(Enum):
    """Sentinels understood by change descriptions."""

    DELETE = "delete"


# Explicit "no value" marker: {"key": DELETE} removes key
DELETE = Marker.DELETE


@dataclass(frozen=True)
class Token:
    """A lexical token with its position in the source text."""

    kind: TokenKind
    offset: int
    length: int
    value: Any = None
    error: bool = False

    @property
    def end(self) -> int:
        return self.offset + self.length


@dataclass(eq=False)
class Node:
    """Element of the structural tree.

    Children are owned by their container; ``parent`` is a back-reference
    that is only valid while the tree built by one parse call is alive.
    """

    type: NodeType
    offset: int
    length: int = 0
    value: Any = None
    parent: Node | None = field(default=None, repr=False)
    children: list[Node] = field(default_factory=list, repr=False)
    colon_offset: int = -1

    @property
    def end(self) -> int:
        return self.offset + self.length

    @property
    def key(self) -> str | None:
        """Property name, for property nodes."""
        if self.type is NodeType.PROPERTY and self.children:
            return self.children[0].value
        return None


@dataclass(frozen=True)
class Comment:
    """A comment located next to a property.

    ``start``/``end`` delimit the comment token itself. ``own_line`` is False
    when the comment shares its line with code (an opening brace for leading
    comments, the property for trailing ones).
    """

    start: int
    end: int
    content: str
    kind: CommentKind
    block: bool = False
    own_line: bool = True

    @property
    def detached(self) -> bool:
        """Detached comments are never deleted along with their property."""
        return self.content.startswith(DETACHED_MARKER)


@dataclass(frozen=True)
class SetLeaf:
    """Flattened change: write value."""

    value: Any


@dataclass(frozen=True)
class DeleteLeaf:
    """Flattened change: delete the key."""

    pass


Leaf = Union[SetLeaf, DeleteLeaf]


@dataclass(frozen=True)
class FlatChange:
    """One terminal instruction of a flattened change description."""

    path: tuple[Union[str, int], ...]
    leaf: Leaf

    @property
    def is_delete(self) -> bool:
        return isinstance(self.leaf, DeleteLeaf)
