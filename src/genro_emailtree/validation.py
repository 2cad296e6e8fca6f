# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Structural validation of email trees.

Validation is advisory and on demand: mutations do not call it (move only
checks the single placement it performs). Call validate() before
persisting or compiling a tree, and on every externally built tree.
"""

from __future__ import annotations

from .navigation import PATH_SEPARATOR
from .node import EmailNode
from .registry import get_label, get_registration

# Attributes a node cannot do without, per type
REQUIRED_ATTRIBUTES: dict[str, tuple[str, ...]] = {
    'mj-image': ('src',),
    'mj-font': ('name', 'href'),
}

NESTING_TOO_DEEP = 'Invalid tree structure: nesting too deep'


def _check(
    node: EmailNode,
    path: str,
    seen_ids: set[str],
    errors: list[str],
    declaration: bool = False,
) -> None:
    """Recursively check a node and its children, collecting messages.

    Declarations (children of mj-attributes) only carry defaults, so the
    required-attribute rules do not apply to them.
    """
    label = get_label(node.type)
    current_path = f"{path}{PATH_SEPARATOR}{label}" if path else label

    if node.id in seen_ids:
        errors.append(f"Duplicate id '{node.id}' at {current_path}")
    seen_ids.add(node.id)

    registration = get_registration(node.type)
    for child in node.iter_children():
        if not registration.can_accept_child(child.type):
            errors.append(
                f"Invalid child: {child.type} cannot be placed inside "
                f"{node.type} at {current_path}"
            )
        _check(
            child, current_path, seen_ids, errors,
            declaration=node.type == 'mj-attributes',
        )

    if declaration:
        return
    for attr in REQUIRED_ATTRIBUTES.get(node.type, ()):
        if attr not in node.attributes:
            errors.append(
                f"Missing required '{attr}' attribute for "
                f"{label.lower()} at {current_path}"
            )


def validate(tree: EmailNode) -> list[str]:
    """Check the tree structure against the registry.

    Checks:
    - every child type is accepted by its parent type
    - type-specific required attributes (image src, font name/href)
    - ids are unique across the tree
    - the tree is not nested deeper than the interpreter can walk

    Args:
        tree: The tree to check.

    Returns:
        List of error messages (empty if valid). Never raises.

    Example:
        >>> validate(tree)
        ['Invalid child: mj-social-element cannot be placed inside mjml at Email']
    """
    errors: list[str] = []
    try:
        _check(tree, '', set(), errors)
    except RecursionError:
        errors.append(NESTING_TOO_DEEP)
    return errors


def is_valid(tree: EmailNode) -> bool:
    """True if validate() reports no error."""
    return not validate(tree)
