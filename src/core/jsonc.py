"""JSONC parser - JSON with Comments support.

TIER 0: May import from core only.

Turns document text into tokens and a tree of typed nodes. Every token and
node remembers its offset and length in the original text, which is what
lets the editing layers rewrite a minimal span and leave the rest alone.
"""

import json
import re
from typing import Any

from core.errors import JsoncParseError
from core.types import Node, NodeType, Token, TokenKind

# Whitespace other than line breaks
WHITESPACE = " \t\v\f\u00a0\ufeff"

_PUNCTUATION = {
    "{": TokenKind.OPEN_BRACE,
    "}": TokenKind.CLOSE_BRACE,
    "[": TokenKind.OPEN_BRACKET,
    "]": TokenKind.CLOSE_BRACKET,
    ",": TokenKind.COMMA,
    ":": TokenKind.COLON,
}

_KEYWORDS = {
    "true": (TokenKind.TRUE, True),
    "false": (TokenKind.FALSE, False),
    "null": (TokenKind.NULL, None),
}

_NUMBER_RE = re.compile(r"-?(?:0|[1-9][0-9]*)(?:\.[0-9]+)?(?:[eE][+-]?[0-9]+)?")
_WORD_RE = re.compile(r"[A-Za-z0-9_$.+-]+")


def _scan_string(text: str, start: int) -> Token:
    """Scan a string literal starting at the opening quote."""
    i = start + 1
    n = len(text)

    while i < n:
        char = text[i]

        # Skip the escaped character, whatever it is
        if char == "\\":
            i += 2
            continue

        if char == '"':
            literal = text[start : i + 1]
            try:
                value = json.loads(literal, strict=False)
            except json.JSONDecodeError:
                return Token(TokenKind.STRING, start, len(literal), error=True)
            return Token(TokenKind.STRING, start, len(literal), value=value)

        # Strings never span lines
        if char in "\r\n":
            break

        i += 1

    end = min(i, n)
    return Token(TokenKind.STRING, start, end - start, error=True)


def tokenize(text: str) -> list[Token]:
    """Split JSONC text into tokens, including comments and whitespace.

    The concatenated token texts reproduce the input exactly. Malformed
    pieces (unterminated strings or block comments, stray characters) become
    tokens with ``error=True`` rather than stopping the scan.

    Args:
        text: JSONC document text.

    Returns:
        List of tokens in document order.
    """
    tokens: list[Token] = []
    i = 0
    n = len(text)

    while i < n:
        char = text[i]

        # Line breaks (\r\n counts as one)
        if char in "\r\n":
            length = 2 if text.startswith("\r\n", i) else 1
            tokens.append(Token(TokenKind.LINE_BREAK, i, length))
            i += length
            continue

        if char in WHITESPACE:
            j = i + 1
            while j < n and text[j] in WHITESPACE:
                j += 1
            tokens.append(Token(TokenKind.TRIVIA, i, j - i))
            i = j
            continue

        if char in _PUNCTUATION:
            tokens.append(Token(_PUNCTUATION[char], i, 1))
            i += 1
            continue

        if char == '"':
            token = _scan_string(text, i)
            tokens.append(token)
            i = token.end
            continue

        # Single-line comment
        if text.startswith("//", i):
            j = i + 2
            while j < n and text[j] not in "\r\n":
                j += 1
            tokens.append(Token(TokenKind.LINE_COMMENT, i, j - i))
            i = j
            continue

        # Multi-line comment
        if text.startswith("/*", i):
            close = text.find("*/", i + 2)
            if close == -1:
                tokens.append(Token(TokenKind.BLOCK_COMMENT, i, n - i, error=True))
                i = n
            else:
                tokens.append(Token(TokenKind.BLOCK_COMMENT, i, close + 2 - i))
                i = close + 2
            continue

        match = _WORD_RE.match(text, i)
        if match:
            word = match.group()
            number = _NUMBER_RE.fullmatch(word)
            if number:
                tokens.append(Token(TokenKind.NUMBER, i, len(word), value=json.loads(word)))
            elif word in _KEYWORDS:
                kind, value = _KEYWORDS[word]
                tokens.append(Token(kind, i, len(word), value=value))
            else:
                tokens.append(Token(TokenKind.UNKNOWN, i, len(word), error=True))
            i = match.end()
            continue

        tokens.append(Token(TokenKind.UNKNOWN, i, 1, error=True))
        i += 1

    return tokens


class _TreeBuilder:
    """Recursive-descent parser over the significant tokens."""

    def __init__(self, text: str):
        self.text = text
        self.tokens: list[Token] = []
        for token in tokenize(text):
            if token.error:
                raise JsoncParseError(f"Invalid token {text[token.offset:token.end]!r}", token.offset)
            if token.kind.is_whitespace() or token.kind.is_comment():
                continue
            self.tokens.append(token)
        self.pos = 0

    def peek(self) -> Token | None:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def advance(self) -> Token:
        token = self.tokens[self.pos]
        self.pos += 1
        return token

    def expect(self, kind: TokenKind, message: str) -> Token:
        token = self.peek()
        if token is None:
            raise JsoncParseError(message, len(self.text))
        if token.kind is not kind:
            raise JsoncParseError(message, token.offset)
        return self.advance()

    def parse_value(self, parent: Node | None) -> Node:
        token = self.peek()
        if token is None:
            raise JsoncParseError("Value expected", len(self.text))

        if token.kind is TokenKind.OPEN_BRACE:
            return self.parse_object(parent)
        if token.kind is TokenKind.OPEN_BRACKET:
            return self.parse_array(parent)

        scalar_types = {
            TokenKind.STRING: NodeType.STRING,
            TokenKind.NUMBER: NodeType.NUMBER,
            TokenKind.TRUE: NodeType.BOOLEAN,
            TokenKind.FALSE: NodeType.BOOLEAN,
            TokenKind.NULL: NodeType.NULL,
        }
        if token.kind not in scalar_types:
            raise JsoncParseError("Value expected", token.offset)

        self.advance()
        return Node(scalar_types[token.kind], token.offset, token.length, token.value, parent=parent)

    def parse_object(self, parent: Node | None) -> Node:
        open_token = self.advance()
        node = Node(NodeType.OBJECT, open_token.offset, parent=parent)
        need_comma = False

        while True:
            token = self.peek()
            if token is None:
                raise JsoncParseError("Closing brace expected", len(self.text))

            if token.kind is TokenKind.CLOSE_BRACE:
                self.advance()
                node.length = token.end - node.offset
                return node

            if need_comma:
                self.expect(TokenKind.COMMA, "Comma expected")
                need_comma = False
                continue

            key_token = self.expect(TokenKind.STRING, "Property name expected")
            prop = Node(NodeType.PROPERTY, key_token.offset, parent=node)
            key = Node(NodeType.STRING, key_token.offset, key_token.length, key_token.value, parent=prop)

            colon = self.expect(TokenKind.COLON, "Colon expected")
            prop.colon_offset = colon.offset

            value = self.parse_value(prop)
            prop.children = [key, value]
            prop.length = value.end - prop.offset
            node.children.append(prop)
            need_comma = True

    def parse_array(self, parent: Node | None) -> Node:
        open_token = self.advance()
        node = Node(NodeType.ARRAY, open_token.offset, parent=parent)
        need_comma = False

        while True:
            token = self.peek()
            if token is None:
                raise JsoncParseError("Closing bracket expected", len(self.text))

            if token.kind is TokenKind.CLOSE_BRACKET:
                self.advance()
                node.length = token.end - node.offset
                return node

            if need_comma:
                self.expect(TokenKind.COMMA, "Comma expected")
                need_comma = False
                continue

            node.children.append(self.parse_value(node))
            need_comma = True

    def parse_document(self) -> Node | None:
        if not self.tokens:
            return None

        root = self.parse_value(None)
        extra = self.peek()
        if extra is not None:
            raise JsoncParseError("End of file expected", extra.offset)
        return root


def parse_tree(text: str) -> Node | None:
    """Parse JSONC text into a node tree.

    Args:
        text: JSONC document text.

    Returns:
        Root node, or None if the document holds no value at all.

    Raises:
        JsoncParseError: If the text is not valid JSONC.
    """
    return _TreeBuilder(text).parse_document()


def find_node_at_location(root: Node | None, path) -> Node | None:
    """Find the value node at path.

    String segments select object properties (first match wins),
    integer segments select array elements.
    """
    node = root
    for segment in path:
        if node is None:
            return None

        if isinstance(segment, str):
            if node.type is not NodeType.OBJECT:
                return None
            node = next((p.children[1] for p in node.children if p.key == segment), None)
        else:
            if node.type is not NodeType.ARRAY or segment < 0 or segment >= len(node.children):
                return None
            node = node.children[segment]

    return node


def get_node_value(node: Node) -> Any:
    """Decode a node and its subtree into Python values."""
    if node.type is NodeType.OBJECT:
        return {prop.key: get_node_value(prop.children[1]) for prop in node.children}
    if node.type is NodeType.ARRAY:
        return [get_node_value(child) for child in node.children]
    if node.type is NodeType.PROPERTY:
        return get_node_value(node.children[1])
    return node.value


def parse(text: str) -> Any:
    """Parse JSONC text into Python values.

    Args:
        text: JSONC content with comments and/or trailing commas.

    Returns:
        Decoded value (None for an empty document).

    Raises:
        JsoncParseError: If the text is not valid JSONC.
    """
    root = parse_tree(text)
    if root is None:
        return None
    return get_node_value(root)
