#!/usr/bin/env python3
"""Command line interface: jsonc-edit <command> <file> [args].

TIER 2: May import from core and lib.

Every mutating command prints a unified diff (or "No changes") and writes
the file unless --dry-run is given. A file argument of "-" reads standard
input and writes the result to standard output.
"""

import argparse
import difflib
import json
import sys
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Any

from core.errors import JsoncEditError, LimitError
from core.jsonc import parse
from lib import config
from lib.editor import (
    get,
    get_comment,
    get_trailing_comment,
    merge,
    modify,
    move,
    remove,
    remove_comment,
    remove_trailing_comment,
    rename,
    set_comment,
    set_trailing_comment,
    set_value,
)
from lib.format import format_document
from lib.logger import get_logger
from lib.sort import sort

logger = get_logger("cli")

STDIO = "-"


# =============================================================================
# Input safety
# =============================================================================


def json_depth(value: Any) -> int:
    """Nesting depth of a decoded JSON value (scalars are 0)."""
    depth = 0
    stack = [(value, 0)]
    while stack:
        current, level = stack.pop()
        depth = max(depth, level)
        if isinstance(current, dict):
            stack.extend((item, level + 1) for item in current.values())
        elif isinstance(current, list):
            stack.extend((item, level + 1) for item in current)
    return depth


def load_json_argument(raw: str, max_size: int, max_depth: int) -> Any:
    """Decode a JSON command line argument under size and depth limits.

    Raises:
        LimitError: If the argument is too large or too deeply nested.
        ValueError: If the argument is not valid JSON.
    """
    if len(raw) > max_size:
        raise LimitError(
            f"JSON input too large: {len(raw)} bytes (max: {max_size} bytes). "
            f"Override with {config.LIMIT_ENV['max_json_size']}."
        )

    value = json.loads(raw)

    depth = json_depth(value)
    if depth > max_depth:
        raise LimitError(
            f"JSON input too deeply nested: {depth} levels (max: {max_depth} levels). "
            f"Override with {config.LIMIT_ENV['max_json_depth']}."
        )
    return value


def validate_path(file: str, allow_traversal: bool) -> Path:
    """Resolve a file argument, rejecting paths outside the working directory.

    Raises:
        LimitError: If the path escapes the working directory.
    """
    resolved = Path(file).resolve()
    if allow_traversal:
        return resolved

    base = Path.cwd().resolve()
    if resolved != base and base not in resolved.parents:
        raise LimitError(
            f'Path traversal detected: "{file}". Use --allow-path-traversal to override (not recommended).'
        )
    return resolved


def read_input(file: str, allow_traversal: bool, max_file_size: int | None) -> str:
    """Read the document from a file or standard input.

    Args:
        file: File path or "-".
        allow_traversal: Accept paths outside the working directory.
        max_file_size: Size limit in bytes (None: no limit). Not applied to stdin.

    Raises:
        LimitError: If the file is larger than max_file_size.
    """
    if file == STDIO:
        return sys.stdin.buffer.read().decode("utf-8")

    path = validate_path(file, allow_traversal)
    if max_file_size is not None and path.exists():
        size = path.stat().st_size
        if size > max_file_size:
            raise LimitError(
                f"File too large: {size} bytes (max: {max_file_size} bytes). "
                "Use --max-file-size <bytes> or --no-file-size-limit to override."
            )
    # Bytes keep \r\n line terminators intact
    return path.read_bytes().decode("utf-8")


# =============================================================================
# Output
# =============================================================================


def render_diff(original: str, result: str, name: str = "document") -> str:
    """Unified diff between two versions of a document."""
    lines = difflib.unified_diff(
        original.splitlines(keepends=True),
        result.splitlines(keepends=True),
        fromfile=f"a/{name}",
        tofile=f"b/{name}",
    )
    return "".join(line if line.endswith("\n") else line + "\n" for line in lines)


def handle_mutation(args: argparse.Namespace, original: str, result: str) -> int:
    """Report and persist the result of a mutating command."""
    if args.file == STDIO:
        sys.stdout.write(result)
        return 0

    if original == result:
        print("No changes")
        return 0

    sys.stdout.write(render_diff(original, result, args.file))

    if args.dry_run:
        print("\n(dry-run: file not modified)")
        return 0

    path = validate_path(args.file, args.allow_path_traversal)
    path.write_bytes(result.encode("utf-8"))
    logger.info("Wrote %s", path)
    return 0


def _print_json(value: Any) -> None:
    print(json.dumps(value, indent=2, ensure_ascii=False))


def _json_limits() -> tuple[int, int]:
    return config.get_limit("max_json_size"), config.get_limit("max_json_depth")


def _load_changes(raw: str, command: str) -> dict:
    changes = load_json_argument(raw, *_json_limits())
    if not isinstance(changes, dict):
        raise JsoncEditError(f"{command} requires a JSON object")
    return changes


# =============================================================================
# Commands
# =============================================================================


def cmd_parse(args: argparse.Namespace, text: str) -> int:
    _print_json(parse(text))
    return 0


def cmd_get(args: argparse.Namespace, text: str) -> int:
    missing = object()
    value = get(text, args.path, default=missing)
    if value is missing:
        print(f"Not found: {args.path}", file=sys.stderr)
        return 1
    _print_json(value)
    return 0


def cmd_set(args: argparse.Namespace, text: str) -> int:
    value = load_json_argument(args.value, *_json_limits())
    return handle_mutation(args, text, set_value(text, args.path, value))


def cmd_remove(args: argparse.Namespace, text: str) -> int:
    return handle_mutation(args, text, remove(text, args.path))


def cmd_modify(args: argparse.Namespace, text: str) -> int:
    return handle_mutation(args, text, modify(text, _load_changes(args.changes, "modify")))


def cmd_merge(args: argparse.Namespace, text: str) -> int:
    return handle_mutation(args, text, merge(text, _load_changes(args.changes, "merge")))


def cmd_rename(args: argparse.Namespace, text: str) -> int:
    return handle_mutation(args, text, rename(text, args.path, args.new_key))


def cmd_move(args: argparse.Namespace, text: str) -> int:
    return handle_mutation(args, text, move(text, args.from_path, args.to_path))


def cmd_sort(args: argparse.Namespace, text: str) -> int:
    deep = False if args.no_deep else bool(config.get("sort.deep", True))
    return handle_mutation(args, text, sort(text, args.path, deep=deep))


def cmd_format(args: argparse.Namespace, text: str) -> int:
    options = config.format_options()
    result = format_document(
        text,
        tab_size=options.tab_size if args.tab_size is None else args.tab_size,
        insert_spaces=False if args.tabs else options.insert_spaces,
        eol=options.eol,
    )
    return handle_mutation(args, text, result)


def cmd_comment(args: argparse.Namespace, text: str) -> int:
    if args.text is None:
        comment = get_trailing_comment(text, args.path) if args.trailing else get_comment(text, args.path)
        print("(no comment)" if comment is None else comment)
        return 0

    if args.trailing:
        result = set_trailing_comment(text, args.path, args.text)
    else:
        result = set_comment(text, args.path, args.text)
    return handle_mutation(args, text, result)


def cmd_uncomment(args: argparse.Namespace, text: str) -> int:
    if args.trailing:
        result = remove_trailing_comment(text, args.path)
    else:
        result = remove_comment(text, args.path)
    return handle_mutation(args, text, result)


# =============================================================================
# Parser
# =============================================================================


def _non_negative(raw: str) -> int:
    try:
        number = int(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"must be a non-negative integer, got {raw!r}") from None
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be a non-negative integer, got {raw!r}")
    return number


def _package_version() -> str:
    try:
        return version("jsonc-edit")
    except PackageNotFoundError:
        return "unknown"


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with one subcommand per operation."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("file", help='JSONC file ("-" for stdin/stdout)')
    common.add_argument("-n", "--dry-run", action="store_true", help="show the diff but do not write the file")
    common.add_argument(
        "--allow-path-traversal",
        action="store_true",
        help="allow file paths outside the current directory (not recommended)",
    )
    common.add_argument("--max-file-size", type=_non_negative, metavar="BYTES", help="maximum file size in bytes")
    common.add_argument(
        "--no-file-size-limit", action="store_true", help="disable the file size limit (not recommended)"
    )

    parser = argparse.ArgumentParser(
        prog="jsonc-edit",
        description="Modify JSONC files while preserving comments and formatting.",
        epilog="Paths use dot notation (database.host) and indices (items.0 or items[0]).",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {_package_version()}")
    commands = parser.add_subparsers(dest="command", metavar="<command>", required=True)

    def add(name: str, handler, help_text: str) -> argparse.ArgumentParser:
        sub = commands.add_parser(name, parents=[common], help=help_text)
        sub.set_defaults(handler=handler)
        return sub

    add("parse", cmd_parse, "parse JSONC and print it as JSON")

    sub = add("get", cmd_get, "print the value at a path")
    sub.add_argument("path")

    sub = add("set", cmd_set, "set the value at a path")
    sub.add_argument("path")
    sub.add_argument("value", help="JSON value")

    sub = add("remove", cmd_remove, "remove the field at a path")
    sub.add_argument("path")

    sub = add("modify", cmd_modify, "replace content, deleting unmentioned fields")
    sub.add_argument("changes", help="JSON object")

    sub = add("merge", cmd_merge, "merge content without deleting")
    sub.add_argument("changes", help="JSON object")

    sub = add("rename", cmd_rename, "rename a key")
    sub.add_argument("path")
    sub.add_argument("new_key")

    sub = add("move", cmd_move, "move a field to a new location")
    sub.add_argument("from_path")
    sub.add_argument("to_path")

    sub = add("sort", cmd_sort, "sort object keys")
    sub.add_argument("path", nargs="?", default="")
    sub.add_argument("--no-deep", action="store_true", help="only sort the given object, not nested ones")

    sub = add("format", cmd_format, "re-indent the document")
    sub.add_argument("--tab-size", type=_non_negative, help="spaces per indent level")
    sub.add_argument("--tabs", action="store_true", help="indent with tabs")

    sub = add("comment", cmd_comment, "print or set the comment of a field")
    sub.add_argument("path")
    sub.add_argument("text", nargs="?")
    sub.add_argument("--trailing", action="store_true", help="use the comment after the value")

    sub = add("uncomment", cmd_uncomment, "remove the comment of a field")
    sub.add_argument("path")
    sub.add_argument("--trailing", action="store_true", help="use the comment after the value")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the CLI.

    Returns:
        Exit code (0 success, 1 error).
    """
    args = build_parser().parse_args(argv)

    try:
        if args.no_file_size_limit:
            max_file_size = None
        elif args.max_file_size is not None:
            max_file_size = args.max_file_size
        else:
            max_file_size = config.get_limit("max_file_size")

        text = read_input(args.file, args.allow_path_traversal, max_file_size)
        return args.handler(args, text)
    except (JsoncEditError, OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
