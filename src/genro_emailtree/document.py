# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""EmailDocument - editor-side cover class over the tree functions."""

from __future__ import annotations

from typing import Any, Callable

from .defaults import effective_attributes
from .factory import create_node
from .layout import (
    cleanup_font_references,
    redistribute_column_widths_after_move,
    redistribute_container_column_widths,
)
from .mutation import duplicate, insert, move, remove, update_node
from .navigation import find_by_id, find_parent, walk
from .node import EmailNode
from .snapshot import export_snapshot, import_snapshot
from .templates import initial_template
from .validation import validate


class EmailDocument:
    """An email tree with undo/redo history.

    This is the "cover" class that holds the current tree and routes edits
    through the copy-on-write functions. Since those never modify their
    input, every past version stays valid and history is just a list of
    trees.

    Example:
        >>> doc = EmailDocument()
        >>> text = doc.add('mj-text', 'hero-column-1', content='Hi')
        >>> doc.undo()
        True
        >>> doc.find(text.id) is None
        True
    """

    def __init__(
        self,
        tree: EmailNode | None = None,
        test_data: dict[str, Any] | None = None,
        history_limit: int = 100,
    ) -> None:
        """Create a document.

        Args:
            tree: Initial tree. If None, starts from initial_template().
            test_data: Sample data used when compiling the email.
            history_limit: Maximum number of undo steps kept.
        """
        self._tree = tree if tree is not None else initial_template()
        self.test_data = test_data
        self._history_limit = history_limit
        self._undo: list[EmailNode] = []
        self._redo: list[EmailNode] = []

    @classmethod
    def from_snapshot(cls, data: dict[str, Any] | str | bytes) -> EmailDocument:
        """Create a document from a snapshot, rejecting invalid trees."""
        snapshot = import_snapshot(data)
        return cls(snapshot.email_tree, snapshot.test_data)

    @property
    def tree(self) -> EmailNode:
        """The current tree."""
        return self._tree

    @property
    def can_undo(self) -> bool:
        return bool(self._undo)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    def _commit(self, new_tree: EmailNode | None) -> bool:
        if new_tree is None:
            return False
        self._undo.append(self._tree)
        if len(self._undo) > self._history_limit:
            del self._undo[0]
        self._redo.clear()
        self._tree = new_tree
        return True

    def apply(self, operation: Callable[..., EmailNode | None], *args: Any) -> bool:
        """Apply a tree function ``operation(tree, *args)`` to the document.

        Returns:
            True if the operation succeeded and was recorded in history.
        """
        return self._commit(operation(self._tree, *args))

    def undo(self) -> bool:
        if not self._undo:
            return False
        self._redo.append(self._tree)
        self._tree = self._undo.pop()
        return True

    def redo(self) -> bool:
        if not self._redo:
            return False
        self._undo.append(self._tree)
        self._tree = self._redo.pop()
        return True

    # ==================== Editing ====================

    def find(self, id: str) -> EmailNode | None:
        return find_by_id(self._tree, id)

    def add(
        self,
        type: str,
        parent_id: str,
        position: int | None = None,
        content: str | None = None,
    ) -> EmailNode | None:
        """Create a node with document defaults and insert it.

        Column widths of the receiving section/group are equalized when a
        column is added. Position None appends.

        Returns:
            The new node, or None if the parent does not exist.
        """
        parent = self.find(parent_id)
        if parent is None:
            return None
        node = create_node(type, content=content, document=self._tree)
        if position is None:
            position = len(parent.children or [])
        new_tree = insert(self._tree, parent_id, node, position)
        if new_tree is not None and type == 'mj-column':
            new_tree = redistribute_column_widths_after_move(
                new_tree, node.id, parent_id, parent_id
            )
        if not self._commit(new_tree):
            return None
        return self.find(node.id)

    def delete(self, id: str) -> bool:
        """Remove a node; columns left behind get equal widths."""
        parent = find_parent(self._tree, id)
        node = self.find(id)
        new_tree = remove(self._tree, id)
        if new_tree is not None and node.type == 'mj-column':
            new_tree = redistribute_container_column_widths(new_tree, parent.id)
        return self._commit(new_tree)

    def move(self, id: str, new_parent_id: str, position: int) -> bool:
        """Move a node, then recompute column widths of both containers."""
        parent = find_parent(self._tree, id)
        new_tree = move(self._tree, id, new_parent_id, position)
        if new_tree is not None and parent is not None:
            new_tree = redistribute_column_widths_after_move(
                new_tree, id, parent.id, new_parent_id
            )
        return self._commit(new_tree)

    def duplicate(self, id: str) -> bool:
        return self.apply(duplicate, id)

    def update(
        self,
        id: str,
        attributes: dict[str, Any] | None = None,
        content: str | None = None,
    ) -> bool:
        return self.apply(update_node, id, attributes, content)

    def remove_font(self, name: str, default_font: str | None = None) -> bool:
        """Remove an mj-font declaration and reset the references to it."""
        font = next(
            (
                node for _, node in walk(self._tree)
                if node.type == 'mj-font' and node.attributes.get('name') == name
            ),
            None,
        )
        if font is None:
            return False
        new_tree = remove(self._tree, font.id)
        if new_tree is not None:
            new_tree = cleanup_font_references(new_tree, name, default_font)
        return self._commit(new_tree)

    # ==================== Inspection ====================

    def attributes_of(self, id: str) -> dict[str, Any] | None:
        """Effective attributes of a node (own > document > registry)."""
        node = self.find(id)
        if node is None:
            return None
        return effective_attributes(self._tree, node)

    def validate(self) -> list[str]:
        return validate(self._tree)

    def to_snapshot(self) -> dict[str, Any]:
        return export_snapshot(self._tree, self.test_data)

    def print_tree(self) -> None:
        """Print the tree structure for debugging."""
        for path, node in walk(self._tree):
            indent = '  ' * path.count('>')
            attrs = ' '.join(f'{k}={v}' for k, v in node.attributes.items())
            attrs_str = f' ({attrs})' if attrs else ''
            print(f"{indent}{node.type} [{node.id}]{attrs_str}")
