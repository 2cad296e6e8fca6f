# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Read-only traversal of email trees.

All lookups are depth-first, pre-order, and O(n) in the size of the tree.
Editor documents hold hundreds of nodes, so nothing is indexed or cached.
"""

from __future__ import annotations

from typing import Iterator

from .node import EmailNode
from .registry import get_label

PATH_SEPARATOR = ' > '


def iter_nodes(tree: EmailNode) -> Iterator[EmailNode]:
    """Yield every node of the tree in pre-order."""
    yield tree
    for child in tree.iter_children():
        yield from iter_nodes(child)


def walk(tree: EmailNode, _prefix: str = '') -> Iterator[tuple[str, EmailNode]]:
    """Walk the tree yielding (path, node) pairs in pre-order.

    The path is the sequence of type labels from the root, joined by ' > '.

    Example:
        >>> for path, node in walk(tree):
        ...     print(path)
        Email
        Email > Head
        Email > Body
    """
    label = get_label(tree.type)
    path = f"{_prefix}{PATH_SEPARATOR}{label}" if _prefix else label
    yield path, tree
    for child in tree.iter_children():
        yield from walk(child, path)


def find_by_id(tree: EmailNode, id: str) -> EmailNode | None:
    """Return the first node with the given id, or None."""
    if tree.id == id:
        return tree
    for child in tree.iter_children():
        found = find_by_id(child, id)
        if found is not None:
            return found
    return None


def find_first_by_type(tree: EmailNode, type: str) -> EmailNode | None:
    """Return the first node of the given type, or None."""
    if tree.type == type:
        return tree
    for child in tree.iter_children():
        found = find_first_by_type(child, type)
        if found is not None:
            return found
    return None


def find_all_by_type(tree: EmailNode, type: str) -> list[EmailNode]:
    """Return all nodes of the given type, in pre-order."""
    return [node for node in iter_nodes(tree) if node.type == type]


def _find_path(tree: EmailNode, id: str) -> list[EmailNode] | None:
    """Return the chain of nodes from the root to the target (inclusive)."""
    if tree.id == id:
        return [tree]
    for child in tree.iter_children():
        path = _find_path(child, id)
        if path is not None:
            return [tree, *path]
    return None


def get_ancestor_ids(tree: EmailNode, id: str) -> list[str]:
    """Return the ids from the root down to the target's parent.

    Empty if the id is not found (or is the root itself).
    """
    path = _find_path(tree, id)
    if path is None:
        return []
    return [node.id for node in path[:-1]]


def is_descendant_of_type(tree: EmailNode, id: str, ancestor_type: str) -> bool:
    """True if any ancestor of the target node has the given type.

    The target itself is not considered. False if the id is not found.
    """
    path = _find_path(tree, id)
    if path is None:
        return False
    return any(node.type == ancestor_type for node in path[:-1])


def find_parent(tree: EmailNode, id: str) -> EmailNode | None:
    """Return the parent of the target node, or None for root/missing ids."""
    path = _find_path(tree, id)
    if path is None or len(path) < 2:
        return None
    return path[-2]


def collect_ids(tree: EmailNode) -> list[str]:
    """Return every id of the tree in pre-order (duplicates included)."""
    return [node.id for node in iter_nodes(tree)]
