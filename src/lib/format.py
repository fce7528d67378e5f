"""Document formatting.

TIER 1: May import from core only.
"""

from core.printer import FormatOptions, format_text


def format_document(text: str, tab_size: int = 2, insert_spaces: bool = True, eol: str = "\n") -> str:
    """Re-indent a JSONC document, keeping its comments.

    Args:
        text: JSONC document text.
        tab_size: Spaces per indentation level.
        insert_spaces: Indent with spaces (False: one tab per level).
        eol: Line terminator to write.

    Returns:
        Formatted text.
    """
    if tab_size < 0:
        raise ValueError(f"tab_size must not be negative, got {tab_size}")
    return format_text(text, FormatOptions(tab_size=tab_size, insert_spaces=insert_spaces, eol=eol))
