# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""EmailNode - the typed element of an email document tree."""

from __future__ import annotations

import uuid
from typing import Any, Iterator

from .exceptions import InvalidNodeError

AttributeValue = str | int | float | bool


def generate_id() -> str:
    """Return a fresh globally-unique node id (UUID4)."""
    return str(uuid.uuid4())


class EmailNode:
    """A node in an email document tree.

    Each node has:
    - id: Identifier, unique within the tree
    - type: Component tag (e.g. 'mj-section', 'mj-text')
    - attributes: Dictionary of scalar attributes
    - content: Markup/text payload for content-bearing types, else None
    - children: Ordered list of child nodes for containers, else None

    Nodes are plain values: tree operations never modify a node they
    receive, they work on a clone and return it.

    Example:
        >>> node = EmailNode('t1', 'mj-text', {'color': 'red'}, content='<p>Hi</p>')
        >>> node.type
        'mj-text'
        >>> node.is_leaf
        True
    """

    __slots__ = ('id', 'type', 'attributes', 'content', 'children')

    def __init__(
        self,
        id: str,
        type: str,
        attributes: dict[str, AttributeValue] | None = None,
        content: str | None = None,
        children: list[EmailNode] | None = None,
    ) -> None:
        """Initialize an EmailNode.

        Args:
            id: The node identifier.
            type: The component tag.
            attributes: Optional dictionary of attributes.
            content: Optional text/markup payload.
            children: Optional list of child nodes (containers only).
        """
        self.id = id
        self.type = type
        self.attributes = attributes if attributes is not None else {}
        self.content = content
        self.children = children

    def __repr__(self) -> str:
        children_repr = (
            f", children={len(self.children)}" if self.children is not None else ""
        )
        return f"EmailNode({self.id!r}, {self.type!r}{children_repr})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EmailNode):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    __hash__ = None  # type: ignore[assignment]

    @property
    def is_branch(self) -> bool:
        """True if this node holds a children list."""
        return self.children is not None

    @property
    def is_leaf(self) -> bool:
        """True if this node holds no children list."""
        return self.children is None

    def iter_children(self) -> Iterator[EmailNode]:
        """Yield direct children in order (nothing for leaves)."""
        if self.children:
            yield from self.children

    def get_attr(self, attr: str | None = None, default: Any = None) -> Any:
        """Get attribute value or all attributes.

        Args:
            attr: Attribute name. If None, returns all attributes.
            default: Default value if attribute not found.
        """
        if attr is None:
            return self.attributes
        return self.attributes.get(attr, default)

    def clone(self) -> EmailNode:
        """Return a deep copy of this node and its whole subtree."""
        return EmailNode(
            self.id,
            self.type,
            dict(self.attributes),
            self.content,
            [child.clone() for child in self.children]
            if self.children is not None
            else None,
        )

    # ==================== Conversion ====================

    def to_dict(self) -> dict[str, Any]:
        """Convert to the plain-dict wire shape (recursive).

        ``content`` and ``children`` keys are omitted when absent.
        """
        result: dict[str, Any] = {
            'id': self.id,
            'type': self.type,
            'attributes': dict(self.attributes),
        }
        if self.content is not None:
            result['content'] = self.content
        if self.children is not None:
            result['children'] = [child.to_dict() for child in self.children]
        return result

    @classmethod
    def from_dict(cls, data: Any) -> EmailNode:
        """Build a node tree from its plain-dict wire shape.

        Unknown keys are ignored. A missing or null ``attributes`` becomes
        an empty dict.

        Raises:
            InvalidNodeError: If the mapping lacks a string id/type, or if
                attributes/children have the wrong shape.
        """
        if not isinstance(data, dict):
            raise InvalidNodeError(
                f"node must be an object, not {type(data).__name__}"
            )
        node_id = data.get('id')
        node_type = data.get('type')
        if not isinstance(node_id, str) or not isinstance(node_type, str):
            raise InvalidNodeError("node is missing id or type")

        attributes = data.get('attributes')
        if attributes is None:
            attributes = {}
        elif not isinstance(attributes, dict):
            raise InvalidNodeError(f"attributes of '{node_id}' must be an object")

        content = data.get('content')
        if content is not None and not isinstance(content, str):
            raise InvalidNodeError(f"content of '{node_id}' must be a string")

        raw_children = data.get('children')
        children: list[EmailNode] | None = None
        if raw_children is not None:
            if not isinstance(raw_children, list):
                raise InvalidNodeError(f"children of '{node_id}' must be an array")
            children = [cls.from_dict(child) for child in raw_children]

        return cls(node_id, node_type, dict(attributes), content, children)
