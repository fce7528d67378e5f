"""Core module - types, errors, parser, low-level edits.

TIER 0: No internal imports, only Python stdlib.

Exports:
- Error types: JsoncEditError, JsoncParseError, JsoncPathError, ConfigError, LimitError
- Types: Node, NodeType, Token, TokenKind, Comment, CommentKind, DELETE
- Parser: tokenize, parse_tree, find_node_at_location, get_node_value, parse
- Paths: parse_path, format_path
- Edits: Edit, apply_edits, set_value_edits, remove_element_edits
- Printer: FormatOptions, format_text
"""

from core.edit import Edit, apply_edits, remove_element_edits, set_value_edits
from core.errors import (
    ConfigError,
    JsoncEditError,
    JsoncParseError,
    JsoncPathError,
    LimitError,
)
from core.jsonc import find_node_at_location, get_node_value, parse, parse_tree, tokenize
from core.paths import format_path, parse_path
from core.printer import FormatOptions, format_text
from core.types import (
    DELETE,
    Comment,
    CommentKind,
    Node,
    NodeType,
    Token,
    TokenKind,
)

__all__ = [
    "DELETE",
    "Comment",
    "CommentKind",
    "ConfigError",
    "Edit",
    "FormatOptions",
    "JsoncEditError",
    "JsoncParseError",
    "JsoncPathError",
    "LimitError",
    "Node",
    "NodeType",
    "Token",
    "TokenKind",
    "apply_edits",
    "find_node_at_location",
    "format_path",
    "format_text",
    "get_node_value",
    "parse",
    "parse_path",
    "parse_tree",
    "remove_element_edits",
    "set_value_edits",
    "tokenize",
]
