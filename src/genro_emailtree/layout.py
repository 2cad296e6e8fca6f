# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Layout recomputation - derived state refreshed after structural edits.

Column widths are derived from structure: whenever columns are added,
removed or moved, the columns of the affected section/group are reset to
equal shares summing to 100%. Custom width ratios do not survive a
structural move.
"""

from __future__ import annotations

from typing import Any

from loguru import logger

from .config import get_config
from .navigation import find_by_id, iter_nodes
from .node import EmailNode

COLUMN_TYPE = 'mj-column'


def format_width(count: int) -> str:
    """Return the equal share of 100% for ``count`` columns.

    Shares are never rounded, so ``count`` of them add back up to 100.

    Example:
        >>> format_width(2)
        '50%'
        >>> format_width(3)
        '33.333333333333336%'
    """
    value = 100 / count
    text = str(int(value)) if value.is_integer() else repr(value)
    return f"{text}%"


def _equalize_columns(container: EmailNode) -> int:
    """Set equal widths on the direct column children, in place.

    Returns:
        The number of columns updated.
    """
    columns = [child for child in container.iter_children() if child.type == COLUMN_TYPE]
    if not columns:
        return 0
    width = format_width(len(columns))
    for column in columns:
        column.attributes['width'] = width
    logger.info(
        "Redistributed widths for {} columns in {} {}: {} each",
        len(columns), container.type, container.id, width,
    )
    return len(columns)


def redistribute_group_column_widths(tree: EmailNode, group_id: str) -> EmailNode:
    """Give every column of an mj-group an equal share of the width.

    Returns:
        A new tree. Equivalent to a plain copy if group_id does not exist,
        is not an mj-group, or has no column children.
    """
    new_tree = tree.clone()
    group = find_by_id(new_tree, group_id)
    if group is None or group.type != 'mj-group':
        return new_tree
    _equalize_columns(group)
    return new_tree


def _redistribute_container(tree: EmailNode, container_id: str) -> EmailNode:
    container = find_by_id(tree, container_id)
    if container is None:
        return tree
    if container.type == 'mj-section':
        _equalize_columns(container)
    elif container.type == 'mj-group':
        return redistribute_group_column_widths(tree, container_id)
    return tree


def redistribute_container_column_widths(tree: EmailNode, container_id: str) -> EmailNode:
    """Equalize the columns of a section or group, e.g. after a column removal.

    Returns:
        A new tree.
    """
    return _redistribute_container(tree.clone(), container_id)


def redistribute_column_widths_after_move(
    tree: EmailNode,
    moved_id: str,
    source_parent_id: str,
    target_parent_id: str,
) -> EmailNode:
    """Recompute column widths in the containers touched by a column move.

    Does nothing unless the moved node is an mj-column. When the source and
    target containers differ, the columns left in the source are equalized
    first; the target's columns (moved one included) are always equalized.
    Sections equalize their direct columns, groups go through
    redistribute_group_column_widths().

    Returns:
        A new tree.
    """
    new_tree = tree.clone()
    moved = find_by_id(new_tree, moved_id)
    if moved is None or moved.type != COLUMN_TYPE:
        return new_tree

    if source_parent_id != target_parent_id:
        new_tree = _redistribute_container(new_tree, source_parent_id)
    return _redistribute_container(new_tree, target_parent_id)


def _same_value(value: Any, match_value: Any) -> bool:
    # Booleans only match booleans (True == 1 in Python)
    if isinstance(value, bool) or isinstance(match_value, bool):
        return isinstance(value, bool) and isinstance(match_value, bool) and value == match_value
    return value == match_value


def reset_attribute_references(
    tree: EmailNode,
    match_value: Any,
    attribute_name: str,
    replacement_value: Any,
) -> EmailNode:
    """Replace an attribute value wherever it equals ``match_value``.

    Returns:
        A new tree.
    """
    new_tree = tree.clone()
    for node in iter_nodes(new_tree):
        if attribute_name not in node.attributes:
            continue
        if _same_value(node.attributes[attribute_name], match_value):
            logger.info(
                "Resetting {} from {!r} to {!r} for block {} ({})",
                attribute_name, match_value, replacement_value, node.id, node.type,
            )
            node.attributes[attribute_name] = replacement_value
    return new_tree


def cleanup_font_references(
    tree: EmailNode, removed_font: str, default_font: str | None = None
) -> EmailNode:
    """Reset fontFamily references to a font that was removed from the document.

    Args:
        tree: The current tree.
        removed_font: The fontFamily value to reset.
        default_font: Replacement; defaults to the configured default font.

    Raises:
        ConfigError: If default_font is None and the config has not been
            loaded yet and is invalid. Call get_config() or setup_logging()
            at startup to surface config errors early.
    """
    if default_font is None:
        default_font = get_config().default_font
    return reset_attribute_references(tree, removed_font, 'fontFamily', default_font)
