"""Path notation.

TIER 0: May import from core only.

Paths are lists of segments: str for property names, int for array
indices. Callers may also pass a string in dot/bracket notation:

    "config.items.2"          -> ["config", "items", 2]
    "config.items[2]"         -> ["config", "items", 2]
    'settings["editor.tab"]'  -> ["settings", "editor.tab"]
    ""                        -> []
"""

import json
import re
from collections.abc import Sequence
from typing import Union

from core.errors import JsoncPathError
from core.types import JSONPath

PathLike = Union[str, Sequence[Union[str, int]]]

_INDEX_RE = re.compile(r"[0-9]+")
_QUOTED_RE = re.compile(r'\[\s*("(?:[^"\\]|\\.)*")\s*\]')


def _segment(token: str) -> str | int:
    """Digit-only tokens are array indices, anything else a key."""
    if _INDEX_RE.fullmatch(token):
        return int(token)
    return token


def parse_path(path: PathLike) -> JSONPath:
    """Normalize a path given as a segment sequence or a notation string.

    Args:
        path: Segment sequence, or dot/bracket notation string.

    Returns:
        List of path segments.

    Raises:
        JsoncPathError: If a bracket is not closed or a quoted key is invalid.
    """
    if not isinstance(path, str):
        return list(path)

    segments: JSONPath = []
    token = ""
    i = 0

    while i < len(path):
        char = path[i]

        if char == ".":
            if token:
                segments.append(_segment(token))
            token = ""
            i += 1
            continue

        if char == "[":
            if token:
                segments.append(_segment(token))
            token = ""

            # Quoted key: ["key.with.dots"]
            quoted = _QUOTED_RE.match(path, i)
            if quoted:
                try:
                    segments.append(json.loads(quoted.group(1)))
                except json.JSONDecodeError as e:
                    raise JsoncPathError(f"Invalid quoted key in path {path!r}: {e}") from e
                i = quoted.end()
                continue

            close = path.find("]", i)
            if close == -1:
                raise JsoncPathError(f"Unclosed '[' in path {path!r}")
            inner = path[i + 1 : close].strip()
            if inner:
                segments.append(_segment(inner))
            i = close + 1
            continue

        token += char
        i += 1

    if token:
        segments.append(_segment(token))

    return segments


def format_path(path: Sequence[Union[str, int]]) -> str:
    """Render a path in dot/bracket notation (for messages and logs)."""
    parts: list[str] = []
    for segment in path:
        if isinstance(segment, int):
            parts.append(f"[{segment}]")
        elif segment and re.fullmatch(r"[^.\[\]\"]+", segment) and not _INDEX_RE.fullmatch(segment):
            parts.append(f".{segment}" if parts else segment)
        else:
            parts.append(f"[{json.dumps(segment)}]")
    return "".join(parts)
