# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Tests for copy-on-write tree mutations."""

import pytest

from genro_emailtree import (
    EmailNode,
    collect_ids,
    create_node,
    duplicate,
    find_by_id,
    find_parent,
    insert,
    iter_nodes,
    move,
    regenerate_ids,
    remove,
    update_node,
)


def child_ids(tree, id):
    return [child.id for child in find_by_id(tree, id).iter_children()]


class TestInsert:
    """Tests for insert."""

    def test_insert_at_position(self, tree):
        """Test a node lands at the requested index."""
        new = insert(tree, 'col-1', EmailNode('t2', 'mj-text', content='x'), 0)
        assert child_ids(new, 'col-1') == ['t2', 'text-1']

    def test_insert_does_not_touch_input(self, tree):
        """Test the input tree is unchanged and node identity preserved."""
        before = tree.to_dict()
        section = find_by_id(tree, 'section-1')
        new = insert(tree, 'col-1', EmailNode('t2', 'mj-text'), 0)
        assert new is not tree
        assert tree.to_dict() == before
        assert find_by_id(tree, 'section-1') is section

    def test_insert_does_not_alias_node(self, tree):
        """Test the inserted node is copied into the result."""
        node = EmailNode('t2', 'mj-text')
        new = insert(tree, 'col-1', node, 0)
        node.attributes['color'] = 'red'
        assert find_by_id(new, 't2').attributes == {}

    @pytest.mark.parametrize('position, expected', [
        (99, ['col-1', 'col-2', 'c3']),
        (-5, ['c3', 'col-1', 'col-2']),
        (1, ['col-1', 'c3', 'col-2']),
    ])
    def test_insert_clamps_position(self, tree, position, expected):
        """Test out-of-range positions saturate to the ends."""
        new = insert(tree, 'section-1', EmailNode('c3', 'mj-column', children=[]), position)
        assert child_ids(new, 'section-1') == expected

    def test_insert_missing_parent(self, tree):
        """Test inserting under an unknown id fails."""
        assert insert(tree, 'nope', EmailNode('x', 'mj-text'), 0) is None

    def test_insert_into_leaf_creates_children(self, tree):
        """Test a leaf parent receives a children list."""
        new = insert(tree, 'text-1', EmailNode('x', 'mj-text'), 0)
        assert child_ids(new, 'text-1') == ['x']


class TestRemove:
    """Tests for remove."""

    def test_remove_subtree(self, tree):
        """Test the node and its descendants disappear."""
        new = remove(tree, 'col-1')
        assert find_by_id(new, 'col-1') is None
        assert find_by_id(new, 'text-1') is None
        assert find_by_id(tree, 'text-1') is not None

    def test_remove_root_fails(self, tree):
        """Test the root can never be removed."""
        assert remove(tree, 'mjml-1') is None

    def test_remove_missing(self, tree):
        """Test removing an unknown id fails."""
        assert remove(tree, 'nope') is None


class TestMove:
    """Tests for move."""

    def test_move_between_columns(self, tree):
        """Test moving a text from one column to another."""
        new = move(tree, 'text-1', 'col-2', 1)
        assert child_ids(new, 'col-1') == []
        assert child_ids(new, 'col-2') == ['button-1', 'text-1']
        assert child_ids(tree, 'col-1') == ['text-1']

    def test_move_within_parent(self, tree):
        """Test the position is taken after the node is detached."""
        new = move(tree, 'col-1', 'section-1', 1)
        assert child_ids(new, 'section-1') == ['col-2', 'col-1']
        new = move(tree, 'col-2', 'section-1', 0)
        assert child_ids(new, 'section-1') == ['col-2', 'col-1']

    def test_move_clamps_position(self, tree):
        """Test move clamps like insert."""
        new = move(tree, 'text-1', 'col-2', 50)
        assert child_ids(new, 'col-2') == ['button-1', 'text-1']

    def test_illegal_move_rejected(self, tree):
        """Test a move the registry forbids leaves the tree unchanged."""
        before = tree.to_dict()
        assert move(tree, 'text-1', 'section-1', 0) is None
        assert move(tree, 'col-1', 'body-1', 0) is None
        assert tree.to_dict() == before

    def test_move_into_own_subtree_rejected(self):
        """Test a node cannot be moved under one of its descendants."""
        # A wrapper inside a section is illegal, but insert does not check it
        section = EmailNode('s1', 'mj-section', children=[])
        tree = EmailNode('m', 'mjml', children=[
            EmailNode('b', 'mj-body', children=[section]),
        ])
        nested = insert(tree, 's1', EmailNode('w2', 'mj-wrapper', children=[]), 0)
        before = nested.to_dict()
        # mj-wrapper accepts mj-section, yet w2 lies inside s1
        assert move(nested, 's1', 'w2', 0) is None
        assert nested.to_dict() == before

    def test_move_missing_ids(self, tree):
        """Test unknown node or destination fails."""
        assert move(tree, 'nope', 'col-2', 0) is None
        assert move(tree, 'text-1', 'nope', 0) is None

    def test_move_preserves_ids(self, tree):
        """Test moving keeps every id exactly once."""
        new = move(tree, 'text-1', 'col-2', 0)
        assert sorted(collect_ids(new)) == sorted(collect_ids(tree))


class TestDuplicate:
    """Tests for duplicate and regenerate_ids."""

    def test_regenerate_ids(self, tree):
        """Test every id is replaced and structure is kept."""
        copy = regenerate_ids(tree)
        assert set(collect_ids(copy)).isdisjoint(collect_ids(tree))
        assert len(set(collect_ids(copy))) == len(collect_ids(tree))
        assert [n.type for n in copy.children] == ['mj-head', 'mj-body']

    def test_duplicate_inserts_after(self, tree):
        """Test the copy lands right after the original with fresh ids."""
        new = duplicate(tree, 'col-1')
        ids = child_ids(new, 'section-1')
        assert ids[0] == 'col-1'
        assert ids[2] == 'col-2'
        copy = find_by_id(new, ids[1])
        assert copy.type == 'mj-column'
        assert copy.children[0].id != 'text-1'
        assert copy.children[0].content == '<p>Hi</p>'
        assert len(set(collect_ids(new))) == len(collect_ids(new))

    def test_duplicate_root_fails(self, tree):
        """Test the root cannot be duplicated."""
        assert duplicate(tree, 'mjml-1') is None
        assert duplicate(tree, 'nope') is None


class TestUpdate:
    """Tests for update_node."""

    def test_merge_attributes(self, tree):
        """Test attributes are merged and None deletes."""
        new = update_node(tree, 'text-1', {'color': 'red', 'fontSize': None})
        assert find_by_id(new, 'text-1').attributes == {'color': 'red'}
        assert find_by_id(tree, 'text-1').attributes == {'fontSize': '20px'}

    def test_replace_attributes(self, tree):
        """Test replace=True drops the previous attributes."""
        new = update_node(tree, 'col-1', {'backgroundColor': '#fff'}, replace=True)
        assert find_by_id(new, 'col-1').attributes == {'backgroundColor': '#fff'}

    def test_update_content(self, tree):
        """Test content update."""
        new = update_node(tree, 'button-1', content='Buy')
        assert find_by_id(new, 'button-1').content == 'Buy'

    def test_update_missing(self, tree):
        """Test unknown id fails."""
        assert update_node(tree, 'nope', {'a': 1}) is None


class TestInvariants:
    """Properties that hold across operation sequences."""

    @pytest.mark.parametrize('operation', [
        lambda t: insert(t, 'col-1', EmailNode('t2', 'mj-text'), 0),
        lambda t: remove(t, 'col-1'),
        lambda t: move(t, 'text-1', 'col-2', 0),
        lambda t: move(t, 'col-2', 'section-1', 0),
        lambda t: duplicate(t, 'col-1'),
        lambda t: regenerate_ids(t),
        lambda t: update_node(t, 'text-1', {'color': 'red'}, '<p>Bye</p>'),
    ])
    def test_input_untouched(self, tree, operation):
        """Test every mutation leaves the input values and node objects alone."""
        before = tree.to_dict()
        nodes = {node.id: node for node in iter_nodes(tree)}

        result = operation(tree)

        assert result is not None
        assert result is not tree
        assert tree.to_dict() == before
        assert {node.id: node for node in iter_nodes(tree)} == nodes
        for id, node in nodes.items():
            assert find_by_id(tree, id) is node
            assert find_by_id(result, id) is not node

    def test_ids_stay_unique(self, tree):
        """Test ids remain unique through creation, moves and duplication."""
        current = tree
        for _ in range(3):
            column = create_node('mj-column')
            current = insert(current, 'section-1', column, 99)
            current = insert(current, column.id, create_node('mj-social'), 0)
            current = duplicate(current, column.id)
        current = move(current, 'text-1', 'col-2', 0)
        ids = collect_ids(current)
        assert len(ids) == len(set(ids))

    def test_root_survives(self, tree):
        """Test no sequence of operations replaces the root."""
        current = tree
        for id in collect_ids(tree)[1:]:
            result = remove(current, id)
            if result is not None:
                current = result
        assert remove(current, 'mjml-1') is None
        assert current.id == 'mjml-1'
        assert current.type == 'mjml'
        assert find_parent(current, 'mjml-1') is None
