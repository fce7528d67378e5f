"""Comment locator.

TIER 0: May import from core only.

Finds the comment that documents a property by scanning the raw text
around the property's offsets. Candidates are confirmed against the token
stream so comment markers inside strings never count.
"""

from core.jsonc import tokenize
from core.types import Comment, CommentKind, Token, TokenKind

SPACES = " \t"


def line_start(text: str, pos: int) -> int:
    """Offset of the first character of the line containing pos."""
    while pos > 0 and text[pos - 1] != "\n":
        pos -= 1
    return pos


def line_end(text: str, pos: int) -> int:
    """Offset of the line terminator (or end of text) at or after pos."""
    while pos < len(text) and text[pos] not in "\r\n":
        pos += 1
    return pos


def skip_spaces(text: str, pos: int) -> int:
    """Advance pos past spaces and tabs."""
    while pos < len(text) and text[pos] in SPACES:
        pos += 1
    return pos


def skip_line_break(text: str, pos: int) -> int:
    """Advance pos past one \\n or \\r\\n, if one starts at pos."""
    if text.startswith("\r\n", pos):
        return pos + 2
    if pos < len(text) and text[pos] == "\n":
        return pos + 1
    return pos


def _token_at(tokens: list[Token], pos: int) -> int | None:
    """Index of the token covering pos."""
    for index, token in enumerate(tokens):
        if token.offset <= pos < token.end:
            return index
    return None


def find_leading_comment(text: str, property_offset: int) -> Comment | None:
    """Find the comment on the line above a property.

    The property must start its own line. The scan checks, in order: the
    indentation before the key, the newline (and optional \\r) ending the
    previous line, trailing whitespace on that line, then the comment
    token ending there. Only real comment tokens count, so ``//`` or
    ``*/`` inside a string never match. A comment that follows the
    container's opening brace on the line above (``{ // note``) also
    counts; a comment after any other code belongs to that code.

    Args:
        text: Document text.
        property_offset: Offset of the property's key token.

    Returns:
        The comment, or None if the property has no leading comment.
    """
    pos = property_offset - 1

    # Skip indentation
    while pos >= 0 and text[pos] in SPACES:
        pos -= 1

    # Must have a newline before the property for there to be a comment above
    if pos < 0 or text[pos] != "\n":
        return None
    pos -= 1
    if pos >= 0 and text[pos] == "\r":
        pos -= 1

    # Skip trailing whitespace on previous line
    while pos >= 0 and text[pos] in SPACES:
        pos -= 1

    # A blank line separates the property from anything above it
    if pos < 0 or text[pos] in "\r\n":
        return None

    tokens = tokenize(text)
    index = _token_at(tokens, pos)
    if index is None or not tokens[index].kind.is_comment():
        return None

    token = tokens[index]
    block = token.kind is TokenKind.BLOCK_COMMENT
    if block and (token.error or token.end != pos + 1):
        return None

    # What precedes the comment on its line: nothing, or an opening brace
    before = index - 1
    while before >= 0 and tokens[before].kind is TokenKind.TRIVIA:
        before -= 1
    if before < 0 or tokens[before].kind is TokenKind.LINE_BREAK:
        own_line = True
    elif tokens[before].kind is TokenKind.OPEN_BRACE:
        own_line = False
    else:
        return None

    end = pos + 1
    content = text[token.offset + 2 : end - 2 if block else end].strip()
    return Comment(token.offset, end, content, CommentKind.LEADING, block=block, own_line=own_line)


def find_trailing_comment(text: str, value_end: int) -> Comment | None:
    """Find the comment after a property's value on the same line.

    Accepts an optional comma either before or after the comment:
    ``"a": 1, // note`` and ``"a": 1 /* note */,`` both match.

    Args:
        text: Document text.
        value_end: End offset of the property (its value's last character + 1).

    Returns:
        The comment, or None.
    """
    pos = skip_spaces(text, value_end)
    if pos < len(text) and text[pos] == ",":
        pos = skip_spaces(text, pos + 1)

    if text.startswith("//", pos):
        end = line_end(text, pos)
        content = text[pos + 2 : end].strip()
        return Comment(pos, end, content, CommentKind.TRAILING, own_line=False)

    if text.startswith("/*", pos):
        close = text.find("*/", pos + 2)
        if close == -1:
            return None
        content = text[pos + 2 : close].strip()
        return Comment(pos, close + 2, content, CommentKind.TRAILING, block=True, own_line=False)

    return None
