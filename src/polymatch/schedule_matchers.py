"""
A matcher is a tree itself where every node is assigned a node type. Matchers
are built with nested calls that omit the contents of the schedule nodes:

    m = domain(
          context(
            sequence(
              filter(leaf()),
              filter(leaf()))))

matches a subtree that starts at a domain node, having context as only
child, which in turn has a sequence as only child node, and the latter has
two filter children. The structure is not anchored at any position in the
tree: the first node is not necessarily the tree root.

Every builder accepts an optional leading argument: either a Capture slot,
bound to the matched node on success, or a guard callable taking a cursor and
returning False to fail the match before the children are looked at. A
matcher without children lets the node have zero or more children.
"""

from __future__ import annotations

from typing import Callable, Optional

import attrs
import islpy as isl

from .core.internal_cursors import Cursor, Node
from .core.schedule_tree import NodeType, ScheduleTree


class MatcherConstructionError(Exception):
    pass


@attrs.define(eq=False)
class Capture:
    """A caller-owned slot the matcher writes the matched node into"""

    node: Optional[Node] = None

    def is_bound(self) -> bool:
        return self.node is not None

    def clear(self):
        self.node = None


@attrs.frozen(eq=False)
class ScheduleNodeMatcher:
    node_type: NodeType
    children: tuple = attrs.field(factory=tuple, converter=tuple)
    guard: Optional[Callable[[Node], bool]] = None
    capture: Optional[Capture] = None

    @staticmethod
    def is_matching(matcher: ScheduleNodeMatcher, node) -> bool:
        return is_matching(matcher, node)


# --------------------------------------------------------------------------- #
# Matching


def _as_cursor(node) -> Node:
    if isinstance(node, Node):
        return node
    elif isinstance(node, isl.ScheduleNode):
        return Cursor.from_isl(node)
    elif isinstance(node, isl.Schedule):
        return Cursor.from_isl(node.get_root())
    elif isinstance(node, ScheduleTree.node):
        return Cursor.create(node)
    raise TypeError(f"cannot match against a {type(node)}")


def is_matching(matcher: ScheduleNodeMatcher, node) -> bool:
    """
    Check whether the subtree at `node` has the structure described by
    `matcher`. `node` is a cursor, a ScheduleTree, or an isl schedule node.

    Captures in `matcher` are bound only when the whole match succeeds: a
    failed call puts back whatever the slots held before it. Slots inside a
    guard's own matcher (e.g. `has_sibling`) follow the guard's result.
    """
    assert isinstance(matcher, ScheduleNodeMatcher), f"got {type(matcher)}"
    return _try_match(matcher, _as_cursor(node))


def _try_match(matcher: ScheduleNodeMatcher, cur: Node) -> bool:
    bound = []
    if _match(matcher, cur, bound):
        return True
    for capture, previous in reversed(bound):
        capture.node = previous
    return False


def _match(matcher: ScheduleNodeMatcher, cur: Node, bound: list) -> bool:
    if matcher.node_type is not NodeType.Any and matcher.node_type is not cur.type():
        return False

    # the guard sees the node before any of its children
    if matcher.guard is not None and not matcher.guard(cur):
        return False

    if matcher.children:
        if cur.num_children() != len(matcher.children):
            return False
        for sub, child in zip(matcher.children, cur.children()):
            if not _match(sub, child, bound):
                return False

    if matcher.capture is not None:
        bound.append((matcher.capture, matcher.capture.node))
        matcher.capture.node = cur
    return True


def find_all(matcher: ScheduleNodeMatcher, root) -> list[Node]:
    """All nodes of the tree under `root` (itself included) matching `matcher`"""
    cur = _as_cursor(root)
    return [n for n in [cur, *cur.descendants()] if _try_match(matcher, n)]


# --------------------------------------------------------------------------- #
# Builders


def _split_leading(name, args):
    capture = guard = None
    if args and isinstance(args[0], Capture):
        capture, args = args[0], args[1:]
    elif args and callable(args[0]):
        guard, args = args[0], args[1:]

    for a in args:
        if not isinstance(a, ScheduleNodeMatcher):
            raise MatcherConstructionError(
                f"{name}: expected child matchers, got {type(a).__name__}"
            )
    return capture, guard, args


def _single_child(node_type, name, args):
    capture, guard, children = _split_leading(name, args)
    if len(children) != 1:
        raise MatcherConstructionError(
            f"{name}: expected exactly one child matcher, got {len(children)}"
        )
    return ScheduleNodeMatcher(node_type, children, guard, capture)


def _many_children(node_type, name, args):
    capture, guard, children = _split_leading(name, args)
    # only a guarded sequence/set may leave its children unconstrained
    if not children and guard is None:
        raise MatcherConstructionError(f"{name}: expected at least one child matcher")
    return ScheduleNodeMatcher(node_type, children, guard, capture)


def band(*args) -> ScheduleNodeMatcher:
    return _single_child(NodeType.Band, "band", args)


def context(*args) -> ScheduleNodeMatcher:
    return _single_child(NodeType.Context, "context", args)


def domain(*args) -> ScheduleNodeMatcher:
    return _single_child(NodeType.Domain, "domain", args)


def extension(*args) -> ScheduleNodeMatcher:
    return _single_child(NodeType.Extension, "extension", args)


def filter(*args) -> ScheduleNodeMatcher:
    return _single_child(NodeType.Filter, "filter", args)


def guard(*args) -> ScheduleNodeMatcher:
    return _single_child(NodeType.Guard, "guard", args)


def mark(*args) -> ScheduleNodeMatcher:
    return _single_child(NodeType.Mark, "mark", args)


def sequence(*args) -> ScheduleNodeMatcher:
    return _many_children(NodeType.Sequence, "sequence", args)


def set_(*args) -> ScheduleNodeMatcher:
    return _many_children(NodeType.Set, "set", args)


def leaf() -> ScheduleNodeMatcher:
    return ScheduleNodeMatcher(NodeType.Leaf)


def any_(*args) -> ScheduleNodeMatcher:
    """Matches any node and does not look at its children"""
    capture, guard_fn, children = _split_leading("any", args)
    if children:
        raise MatcherConstructionError("any: does not take child matchers")
    return ScheduleNodeMatcher(NodeType.Any, (), guard_fn, capture)


# --------------------------------------------------------------------------- #
# Sibling and descendant guards


def has_previous_sibling(sibling_matcher: ScheduleNodeMatcher):
    def has_previous(node: Node) -> bool:
        return any(_try_match(sibling_matcher, s) for s in node.prev_siblings())

    return has_previous


def has_next_sibling(sibling_matcher: ScheduleNodeMatcher):
    def has_next(node: Node) -> bool:
        return any(_try_match(sibling_matcher, s) for s in node.next_siblings())

    return has_next


def has_sibling(sibling_matcher: ScheduleNodeMatcher):
    previous = has_previous_sibling(sibling_matcher)
    following = has_next_sibling(sibling_matcher)

    def has(node: Node) -> bool:
        return previous(node) or following(node)

    return has


def has_descendant(descendant_matcher: ScheduleNodeMatcher):
    def has(node: Node) -> bool:
        return any(_try_match(descendant_matcher, d) for d in node.descendants())

    return has
