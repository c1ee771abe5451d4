from __future__ import annotations

import pytest

from polymatch import (
    Capture,
    Cursor,
    ScheduleTree,
    any_,
    band,
    domain,
    filter,
    has_descendant,
    has_next_sibling,
    has_previous_sibling,
    has_sibling,
    is_matching,
    leaf,
    mark,
    sequence,
)


@pytest.fixture
def filters(three_statements):
    seq = Cursor.create(three_statements).child(0)
    return seq.children()


def test_previous_sibling(filters):
    banded = filter(band(leaf()))
    pred = has_previous_sibling(banded)
    assert [pred(f) for f in filters] == [False, True, True]


def test_next_sibling(filters):
    marked = filter(mark(leaf()))
    pred = has_next_sibling(marked)
    assert [pred(f) for f in filters] == [True, True, False]


def test_sibling_is_either_side(filters):
    plain = filter(leaf())
    assert [has_sibling(plain)(f) for f in filters] == [True, False, True]
    for f in filters:
        expected = has_previous_sibling(plain)(f) or has_next_sibling(plain)(f)
        assert has_sibling(plain)(f) == expected


def test_no_siblings():
    T = ScheduleTree
    tree = T.Domain(None, [T.Band(None, [T.Leaf()])])
    root = Cursor.create(tree)
    for node in [root, *root.descendants()]:
        assert not has_previous_sibling(any_())(node)
        assert not has_next_sibling(any_())(node)
        assert not has_sibling(any_())(node)


def test_sibling_guard_in_pattern(three_statements):
    m = domain(
        sequence(
            filter(has_next_sibling(filter(leaf())), band(leaf())),
            any_(),
            filter(has_previous_sibling(filter(band(leaf()))), mark(leaf())),
        )
    )
    assert is_matching(m, three_statements)

    m = domain(
        sequence(
            filter(has_previous_sibling(any_()), band(leaf())),
            any_(),
            any_(),
        )
    )
    assert not is_matching(m, three_statements)


def test_sibling_matcher_captures(filters):
    slot = Capture()
    assert has_previous_sibling(filter(slot, band(leaf())))(filters[2])
    assert slot.node == filters[0]


def test_descendant(three_statements):
    root = Cursor.create(three_statements)
    assert has_descendant(mark(leaf()))(root)
    assert has_descendant(band(any_()))(root)
    assert not has_descendant(domain(any_()))(root)


def test_descendant_excludes_self(filters):
    pred = has_descendant(filter(any_()))
    assert not pred(filters[0])
    assert has_descendant(band(leaf()))(filters[0])
    assert not has_descendant(band(leaf()))(filters[1])


def test_descendant_guard_in_pattern(three_statements):
    m = domain(has_descendant(mark(leaf())), any_())
    assert is_matching(m, three_statements)

    m = domain(has_descendant(mark(band(leaf()))), any_())
    assert not is_matching(m, three_statements)
