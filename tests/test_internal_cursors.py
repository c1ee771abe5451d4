from __future__ import annotations

import pytest

from polymatch import Cursor, InvalidCursorError, NodeType, ScheduleTree


def test_get_root(three_statements):
    cursor = Cursor.create(three_statements)
    assert cursor._node is three_statements
    assert cursor.child(0).get_root() is three_statements


def test_child_navigation(three_statements):
    seq = Cursor.create(three_statements).child(0)
    assert seq.type() is NodeType.Sequence
    assert seq.num_children() == 3
    assert [c.get_index() for c in seq.children()] == [0, 1, 2]
    assert seq.child(2).child(0).type() is NodeType.Mark


def test_parent(three_statements):
    root = Cursor.create(three_statements)
    band = root.child(0).child(0).child(0)
    assert band.type() is NodeType.Band
    assert band.parent().parent() == root.child(0)
    assert band.parent().parent().parent() == root


def test_root_has_no_parent(three_statements):
    root = Cursor.create(three_statements)
    assert not root.has_parent()
    with pytest.raises(InvalidCursorError, match="cursor does not have a parent"):
        root.parent()
    with pytest.raises(InvalidCursorError):
        root.get_index()


def test_next_prev(three_statements):
    first = Cursor.create(three_statements).child(0).child(0)
    assert first.next().get_index() == 1
    assert first.next(2).prev().get_index() == 1
    with pytest.raises(InvalidCursorError, match="cursor is out of range"):
        first.prev()
    with pytest.raises(InvalidCursorError, match="cannot move root cursor"):
        Cursor.create(three_statements).next()


def test_child_out_of_range(three_statements):
    root = Cursor.create(three_statements)
    with pytest.raises(InvalidCursorError):
        root.child(1)

    leaf = root.child(0).child(1).child(0)
    assert leaf.type() is NodeType.Leaf
    assert leaf.num_children() == 0
    assert leaf.children() == []
    with pytest.raises(InvalidCursorError):
        leaf.child(0)


def test_siblings(three_statements):
    middle = Cursor.create(three_statements).child(0).child(1)
    assert [s.get_index() for s in middle.prev_siblings()] == [0]
    assert [s.get_index() for s in middle.next_siblings()] == [2]

    root = Cursor.create(three_statements)
    assert root.prev_siblings() == [] and root.next_siblings() == []


def test_descendants_preorder(three_statements):
    root = Cursor.create(three_statements)
    types = [d.type() for d in root.descendants()]
    assert types == [
        NodeType.Sequence,
        NodeType.Filter,
        NodeType.Band,
        NodeType.Leaf,
        NodeType.Filter,
        NodeType.Leaf,
        NodeType.Filter,
        NodeType.Mark,
        NodeType.Leaf,
    ]


def test_is_ancestor_of(three_statements):
    root = Cursor.create(three_statements)
    band = root.child(0).child(0).child(0)
    assert root.is_ancestor_of(band)
    assert root.child(0).child(0).is_ancestor_of(band)
    assert not root.child(0).child(1).is_ancestor_of(band)


def test_leaf_is_shared():
    assert ScheduleTree.Leaf() is ScheduleTree.Leaf()
