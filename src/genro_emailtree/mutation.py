# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Copy-on-write tree mutations.

Every operation clones the input tree, edits the clone and returns it.
The tree passed in is never modified, so callers may keep previous
versions around (undo/redo). Failures (missing ids, root removal,
illegal placement) return None and leave nothing half-applied.
"""

from __future__ import annotations

from typing import Any

from loguru import logger

from .navigation import find_by_id, find_parent, iter_nodes
from .node import EmailNode, generate_id
from .registry import can_accept_child


def _clamp(position: int, size: int) -> int:
    return max(0, min(position, size))


def _attach(parent: EmailNode, node: EmailNode, position: int) -> int:
    """Insert node into parent's children at a clamped position.

    Returns:
        The index actually used.
    """
    if parent.children is None:
        parent.children = []
    index = _clamp(position, len(parent.children))
    parent.children.insert(index, node)
    return index


def _detach(tree: EmailNode, id: str) -> tuple[EmailNode, EmailNode, int] | None:
    """Splice the node out of its parent's children, in place.

    Returns:
        Tuple of (node, parent, former_index), or None for root/missing ids.
    """
    parent = find_parent(tree, id)
    if parent is None or parent.children is None:
        return None
    for index, child in enumerate(parent.children):
        if child.id == id:
            del parent.children[index]
            return child, parent, index
    return None


def insert(
    tree: EmailNode, parent_id: str, node: EmailNode, position: int
) -> EmailNode | None:
    """Insert a node under the given parent.

    No child-type legality check is made here: trees built in bulk (e.g. by
    an external parser) are validated afterwards.

    Args:
        tree: The current tree.
        parent_id: Id of the node that will receive the new child.
        node: The node to insert (cloned, never aliased into the result).
        position: Target index; out-of-range values saturate to the
            first/last slot.

    Returns:
        The new tree, or None if parent_id is not in the tree.
    """
    new_tree = tree.clone()
    parent = find_by_id(new_tree, parent_id)
    if parent is None:
        logger.debug("insert: parent '{}' not found", parent_id)
        return None
    index = _attach(parent, node.clone(), position)
    logger.debug("insert: {} '{}' into '{}' at {}", node.type, node.id, parent_id, index)
    return new_tree


def remove(tree: EmailNode, id: str) -> EmailNode | None:
    """Remove a node (and its subtree).

    Returns:
        The new tree, or None if id is the root or is not in the tree.
    """
    if tree.id == id:
        logger.debug("remove: refusing to remove root '{}'", id)
        return None
    new_tree = tree.clone()
    if _detach(new_tree, id) is None:
        logger.debug("remove: node '{}' not found", id)
        return None
    logger.debug("remove: node '{}'", id)
    return new_tree


def move(
    tree: EmailNode, id: str, new_parent_id: str, position: int
) -> EmailNode | None:
    """Move a node under a new parent.

    The destination must accept the node's type (registry check). The move
    is computed on a single clone: either the returned tree has the node at
    its new place, or None is returned.

    Args:
        tree: The current tree.
        id: Id of the node to move.
        new_parent_id: Id of the destination parent.
        position: Index among the destination's children once the node has
            been detached from its old place; clamped like insert().

    Returns:
        The new tree, or None if either id is missing, the node is the root,
        the destination is the node itself or one of its descendants, or the
        destination does not accept the node's type.
    """
    node = find_by_id(tree, id)
    new_parent = find_by_id(tree, new_parent_id)
    if node is None or new_parent is None:
        logger.debug("move: '{}' or '{}' not found", id, new_parent_id)
        return None

    if not can_accept_child(new_parent.type, node.type):
        logger.warning("Cannot move {} into {}", node.type, new_parent.type)
        return None

    if find_by_id(node, new_parent_id) is not None:
        logger.warning("Cannot move '{}' into its own subtree", id)
        return None

    new_tree = tree.clone()
    detached = _detach(new_tree, id)
    if detached is None:
        return None
    moved, _, _ = detached

    target = find_by_id(new_tree, new_parent_id)
    if target is None:
        return None
    index = _attach(target, moved, position)
    logger.debug("move: '{}' into '{}' at {}", id, new_parent_id, index)
    return new_tree


def regenerate_ids(tree: EmailNode) -> EmailNode:
    """Return a deep copy with every id replaced by a fresh one."""
    new_tree = tree.clone()
    for node in iter_nodes(new_tree):
        node.id = generate_id()
    return new_tree


def duplicate(tree: EmailNode, id: str) -> EmailNode | None:
    """Duplicate a node right after itself, with fresh ids in the copy.

    Returns:
        The new tree, or None if id is the root or is not in the tree.
    """
    new_tree = tree.clone()
    parent = find_parent(new_tree, id)
    if parent is None or parent.children is None:
        return None
    for index, child in enumerate(parent.children):
        if child.id == id:
            parent.children.insert(index + 1, regenerate_ids(child))
            logger.debug("duplicate: node '{}'", id)
            return new_tree
    return None


def update_node(
    tree: EmailNode,
    id: str,
    attributes: dict[str, Any] | None = None,
    content: str | None = None,
    replace: bool = False,
) -> EmailNode | None:
    """Update the attributes and/or content of a node.

    Args:
        tree: The current tree.
        id: Id of the node to update.
        attributes: Attributes to merge into the node. A None value removes
            the attribute.
        content: New payload, if given.
        replace: If True, attributes replace the whole attribute dict.

    Returns:
        The new tree, or None if id is not in the tree.
    """
    new_tree = tree.clone()
    node = find_by_id(new_tree, id)
    if node is None:
        return None

    if attributes is not None:
        if replace:
            node.attributes = {}
        for key, value in attributes.items():
            if value is None:
                node.attributes.pop(key, None)
            else:
                node.attributes[key] = value

    if content is not None:
        node.content = content

    return new_tree
