"""Lib module - editing operations.

TIER 1: May import from core only.
"""

from core.jsonc import parse
from core.types import DELETE
from lib.config import clear_cache, get_project_root, load_config
from lib.editor import (
    get,
    get_comment,
    get_trailing_comment,
    has,
    merge,
    modify,
    move,
    patch,
    remove,
    remove_comment,
    remove_trailing_comment,
    rename,
    replace,
    set_comment,
    set_trailing_comment,
    set_value,
)
from lib.format import format_document
from lib.logger import get_logger, set_log_level
from lib.sort import sort

__all__ = [
    "DELETE",
    "clear_cache",
    "format_document",
    "get",
    "get_comment",
    "get_logger",
    "get_project_root",
    "get_trailing_comment",
    "has",
    "load_config",
    "merge",
    "modify",
    "move",
    "parse",
    "patch",
    "remove",
    "remove_comment",
    "remove_trailing_comment",
    "rename",
    "replace",
    "set_comment",
    "set_log_level",
    "set_trailing_comment",
    "set_value",
    "sort",
]
