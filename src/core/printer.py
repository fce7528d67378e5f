"""Token-level pretty-printer.

TIER 0: May import from core only.

Rewrites only the whitespace between tokens. Every other character of the
document, comments included, is copied through in its original order.
"""

from dataclasses import dataclass

from core.jsonc import tokenize
from core.types import Token, TokenKind

# Tokens that end a value
_VALUE_END = {
    TokenKind.NULL,
    TokenKind.TRUE,
    TokenKind.FALSE,
    TokenKind.NUMBER,
    TokenKind.CLOSE_BRACE,
    TokenKind.CLOSE_BRACKET,
}


@dataclass(frozen=True)
class FormatOptions:
    """Indentation and line terminator settings."""

    tab_size: int = 2
    insert_spaces: bool = True
    eol: str = "\n"

    @property
    def indent_unit(self) -> str:
        return " " * self.tab_size if self.insert_spaces else "\t"


def _significant(text: str) -> list[tuple[Token, bool]]:
    """Tokens other than whitespace, each flagged if a line break precedes it."""
    items: list[tuple[Token, bool]] = []
    broken = False
    for token in tokenize(text):
        if token.kind is TokenKind.LINE_BREAK:
            broken = True
        elif token.kind is not TokenKind.TRIVIA:
            items.append((token, broken))
            broken = False
    return items


def format_text(text: str, options: FormatOptions | None = None) -> str:
    """Re-indent a JSONC document.

    Containers get one entry per line; empty ones stay ``{}``/``[]``. A
    comment stays on the line of the token before it unless a line break
    separated them originally; a line comment always ends its line. Gaps
    next to malformed tokens keep their original whitespace.

    Args:
        text: JSONC document text.
        options: Formatting options (defaults: 2 spaces, \\n).

    Returns:
        Formatted text (no final newline).
    """
    options = options or FormatOptions()
    items = _significant(text)
    if not items:
        return text

    level = 0

    def newline() -> str:
        return options.eol + options.indent_unit * level

    def take(position: int) -> tuple[Token | None, bool]:
        return items[position] if position < len(items) else (None, False)

    first, _ = items[0]
    out = [text[first.offset : first.end]]
    index = 1

    while True:
        second, broken = take(index)
        index += 1
        replace = ""
        needs_break = False
        gap_start = first.end

        # Comments on the same line stick to the token before them
        while second is not None and not broken and second.kind.is_comment():
            keep = first.error or second.error
            out.append((text[gap_start : second.offset] if keep else " ") + text[second.offset : second.end])
            gap_start = second.end
            needs_break = second.kind is TokenKind.LINE_COMMENT
            replace = newline() if needs_break else ""
            second, broken = take(index)
            index += 1

        if second is None:
            break

        kind = first.kind
        next_kind = second.kind
        error = first.error or second.error

        if next_kind in (TokenKind.CLOSE_BRACE, TokenKind.CLOSE_BRACKET):
            opener = TokenKind.OPEN_BRACE if next_kind is TokenKind.CLOSE_BRACE else TokenKind.OPEN_BRACKET
            if kind is not opener:
                level -= 1
                replace = newline()
        else:
            if kind in (TokenKind.OPEN_BRACE, TokenKind.OPEN_BRACKET):
                level += 1
                replace = newline()
            elif kind in (TokenKind.COMMA, TokenKind.LINE_COMMENT):
                replace = newline()
            elif kind is TokenKind.BLOCK_COMMENT:
                if broken:
                    replace = newline()
                elif not needs_break:
                    replace = " "
            elif kind is TokenKind.COLON:
                if not needs_break:
                    replace = " "
            elif kind in _VALUE_END:
                if next_kind.is_comment() and not needs_break:
                    replace = " "
                elif next_kind is not TokenKind.COMMA:
                    error = True
            elif kind is TokenKind.UNKNOWN:
                error = True

            if broken and next_kind.is_comment():
                replace = newline()

        gap = text[gap_start : second.offset] if error else replace
        out.append(gap + text[second.offset : second.end])
        first = second

    return "".join(out)
