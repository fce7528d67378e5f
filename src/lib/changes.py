"""Change descriptions.

TIER 1: May import from core only.

A change description is a nested mapping: a mapping value descends into
the property, ``DELETE`` removes it and anything else is written as-is.
"""

from collections.abc import Mapping
from typing import Any

from core.jsonc import find_node_at_location, parse_tree
from core.types import DELETE, DeleteLeaf, FlatChange, Leaf, NodeType, SetLeaf


def _leaf(value: Any) -> Leaf:
    if value is DELETE:
        return DeleteLeaf()
    return SetLeaf(value)


def flatten(changes: Mapping, prefix: tuple = ()) -> list[FlatChange]:
    """Flatten a change description into leaf changes.

    Nested mappings are walked, never written whole; an empty nested
    mapping therefore contributes nothing. Order follows the mapping's
    key order, depth first.

    Args:
        changes: Nested change description.
        prefix: Path of the mapping inside the document.

    Returns:
        Leaf changes with absolute paths.
    """
    result: list[FlatChange] = []
    for key, value in changes.items():
        path = (*prefix, key)
        if isinstance(value, Mapping):
            result.extend(flatten(value, path))
        else:
            result.append(FlatChange(path, _leaf(value)))
    return result


def compute_deletions(text: str, changes: Mapping) -> list[tuple]:
    """Paths of document keys that the description leaves out.

    Only objects present on both sides are compared; keys of objects the
    description does not mention stay untouched.

    Args:
        text: Document text.
        changes: Full description of the wanted content.

    Returns:
        Paths to delete, deepest first.

    Raises:
        JsoncParseError: If the document is not valid JSONC.
    """
    root = parse_tree(text)
    deletions = _omitted(root, changes, ())
    return sorted(deletions, key=len, reverse=True)


def _omitted(root, changes: Mapping, prefix: tuple) -> list[tuple]:
    node = find_node_at_location(root, list(prefix))
    if node is None or node.type is not NodeType.OBJECT:
        return []

    result: list[tuple] = []
    for prop in node.children:
        key = prop.key
        if key not in changes:
            result.append((*prefix, key))
        elif isinstance(changes[key], Mapping):
            result.extend(_omitted(root, changes[key], (*prefix, key)))
    return result
