from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from functools import cached_property
from typing import Iterator, Optional

from .schedule_tree import NodeType, children_of, node_type, schedule_tree_from_isl


class InvalidCursorError(Exception):
    pass


def _starts_with(a: list, b: list):
    """
    Returns true if the first elements of `a` equal `b` exactly
    >>> _starts_with([1, 2, 3], [1, 2])
    True
    >>> _starts_with(['x'], ['x'])
    True
    >>> _starts_with([1, 2, 3], [])
    True
    >>> _starts_with(['a', 'b', 'c'], ['a', 'b', 'c', 'd'])
    False
    """
    return len(a) >= len(b) and all(x == y for x, y in zip(a, b))


@dataclass
class Cursor(ABC):
    _root: object

    # ------------------------------------------------------------------------ #
    # Static constructors
    # ------------------------------------------------------------------------ #

    @staticmethod
    def create(obj: object):
        return Node(obj, [])

    @staticmethod
    def from_isl(isl_node) -> Node:
        """
        Convert the whole isl schedule tree containing `isl_node` and return a
        cursor pointing at the same position, so that navigation to parents
        and siblings sees the real tree.
        """
        path = []
        while isl_node.has_parent():
            path.append(("children", isl_node.get_child_position()))
            isl_node = isl_node.parent()
        return Node(schedule_tree_from_isl(isl_node), path[::-1])

    # ------------------------------------------------------------------------ #
    # Validating accessors
    # ------------------------------------------------------------------------ #

    def get_root(self):
        return self.root()._node

    # ------------------------------------------------------------------------ #
    # Navigation (universal)
    # ------------------------------------------------------------------------ #

    def root(self) -> Node:
        """Get a cursor to the root of the tree this cursor resides in"""
        return Node(self._root, [])

    # ------------------------------------------------------------------------ #
    # Navigation (abstract)
    # ------------------------------------------------------------------------ #

    @abstractmethod
    def parent(self) -> Node:
        """Get the node containing the current cursor"""


@dataclass
class Node(Cursor):
    _path: list[tuple[str, Optional[int]]]

    # ------------------------------------------------------------------------ #
    # Validating accessors
    # ------------------------------------------------------------------------ #

    @cached_property
    def _node(self):
        """
        Gets the raw underlying schedule tree node that's pointed-to. This is
        meant to be package-internal, not class-private.
        """
        n = self._root

        for attr, idx in self._path:
            n = getattr(n, attr)
            if idx is not None:
                n = n[idx]

        return n

    def type(self) -> NodeType:
        return node_type(self._node)

    # ------------------------------------------------------------------------ #
    # Navigation (implementation)
    # ------------------------------------------------------------------------ #

    def parent(self) -> Node:
        if not self._path:
            raise InvalidCursorError("cursor does not have a parent")
        return Node(self._root, self._path[:-1])

    def has_parent(self) -> bool:
        return bool(self._path)

    def depth(self) -> int:
        return len(self._path)

    def prev(self, dist=1) -> Node:
        return self.next(-dist)

    def next(self, dist=1) -> Node:
        if not self._path:
            raise InvalidCursorError("cannot move root cursor")
        attr, i = self._path[-1]
        return self.parent()._child_node(attr, i + dist)

    # ------------------------------------------------------------------------ #
    # Navigation (children)
    # ------------------------------------------------------------------------ #

    def _child_node(self, attr, i=None) -> Node:
        _node = getattr(self._node, attr)
        if i is not None:
            if 0 <= i < len(_node):
                _node = _node[i]
            else:
                raise InvalidCursorError("cursor is out of range")
        elif isinstance(_node, list):
            raise ValueError("must index into children")
        cur = Node(self._root, self._path + [(attr, i)])
        # noinspection PyPropertyAccess
        # cached_property is settable, bug in static analysis
        cur._node = _node
        return cur

    def num_children(self) -> int:
        return len(children_of(self._node))

    def child(self, i) -> Node:
        if not 0 <= i < self.num_children():
            raise InvalidCursorError("cursor is out of range")
        return self._child_node("children", i)

    def children(self) -> list[Node]:
        return [self._child_node("children", i) for i in range(self.num_children())]

    # ------------------------------------------------------------------------ #
    # Navigation (siblings and subtree)
    # ------------------------------------------------------------------------ #

    def prev_siblings(self) -> list[Node]:
        """Siblings preceding this node, in child order"""
        if not self._path:
            return []
        return self.parent().children()[: self.get_index()]

    def next_siblings(self) -> list[Node]:
        """Siblings following this node, in child order"""
        if not self._path:
            return []
        return self.parent().children()[self.get_index() + 1 :]

    def descendants(self) -> Iterator[Node]:
        """Pre-order walk of the subtree, excluding this node"""
        for c in self.children():
            yield c
            yield from c.descendants()

    # ------------------------------------------------------------------------ #
    # Location queries
    # ------------------------------------------------------------------------ #

    def get_index(self):
        if not self._path:
            raise InvalidCursorError("root cursor has no index")
        _, i = self._path[-1]
        return i

    def is_ancestor_of(self, other: Node) -> bool:
        """Return true if this node is an ancestor of another"""
        return _starts_with(other._path, self._path)
