# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Default resolution - document overrides and effective attributes.

Attribute precedence, highest first:
    1. the node's own attributes
    2. the document override defaults (mjml > mj-head > mj-attributes)
    3. the registry baseline defaults
"""

from __future__ import annotations

from typing import Any

from .node import EmailNode
from .registry import get_default_attributes

OverrideDefaults = dict[str, dict[str, Any]]


def _first_child_of_type(node: EmailNode | None, type: str) -> EmailNode | None:
    if node is None:
        return None
    for child in node.iter_children():
        if child.type == type:
            return child
    return None


def extract_document_override_defaults(tree: EmailNode) -> OverrideDefaults:
    """Read the per-type override defaults declared in the document head.

    Each declaration under mj-attributes is keyed by the component type it
    declares defaults for. Returns an empty dict if the head or the
    attributes block is missing.

    Example:
        >>> extract_document_override_defaults(tree)
        {'mj-text': {'color': '#333333'}, 'mj-button': {...}}
    """
    head = _first_child_of_type(tree, 'mj-head')
    attributes_block = _first_child_of_type(head, 'mj-attributes')
    if attributes_block is None:
        return {}

    defaults: OverrideDefaults = {}
    for declaration in attributes_block.iter_children():
        defaults[declaration.type] = dict(declaration.attributes)
    return defaults


def merge_effective_attributes(
    type: str,
    own_attributes: dict[str, Any] | None = None,
    override_defaults: OverrideDefaults | None = None,
) -> dict[str, Any]:
    """Merge the three attribute tiers for a node of the given type."""
    merged = get_default_attributes(type)
    if override_defaults:
        merged.update(override_defaults.get(type, {}))
    if own_attributes:
        merged.update(own_attributes)
    return merged


def effective_attributes(tree: EmailNode, node: EmailNode) -> dict[str, Any]:
    """Return the effective attributes of a node of ``tree``."""
    return merge_effective_attributes(
        node.type, node.attributes, extract_document_override_defaults(tree)
    )
