from __future__ import annotations

import enum

import islpy as isl
from asdl_adt import ADT


# --------------------------------------------------------------------------- #
# Node types
# --------------------------------------------------------------------------- #


class NodeType(enum.Enum):
    Band = 0
    Context = 1
    Domain = 2
    Extension = 3
    Filter = 4
    Guard = 5
    Mark = 6
    Leaf = 7
    Sequence = 8
    Set = 9

    # wildcard, only ever found in patterns
    Any = 10

    def to_isl(self):
        if self is NodeType.Any:
            raise ValueError("the wildcard node type has no isl counterpart")
        return _to_isl_type()[self]

    @staticmethod
    def from_isl(isl_type) -> NodeType:
        for typ, other in _to_isl_type().items():
            if other == isl_type:
                return typ
        raise ValueError(f"unsupported isl schedule node type: {isl_type}")


def _to_isl_type():
    t = isl.schedule_node_type
    return {
        NodeType.Band: t.band,
        NodeType.Context: t.context,
        NodeType.Domain: t.domain,
        NodeType.Extension: t.extension,
        NodeType.Filter: t.filter,
        NodeType.Guard: t.guard,
        NodeType.Mark: t.mark,
        NodeType.Leaf: t.leaf,
        NodeType.Sequence: t.sequence,
        NodeType.Set: t.set,
    }


# --------------------------------------------------------------------------- #
# Schedule trees
# --------------------------------------------------------------------------- #

ScheduleTree = ADT(
    """
module ScheduleTree {
    node = Band( object? payload, node* children )
         | Context( object? payload, node* children )
         | Domain( object? payload, node* children )
         | Extension( object? payload, node* children )
         | Filter( object? payload, node* children )
         | Guard( object? payload, node* children )
         | Mark( object? payload, node* children )
         | Leaf()
         | Sequence( node* children )
         | Set( node* children )
}""",
    memoize={"Leaf"},
)

_node_types = {
    ScheduleTree.Band: NodeType.Band,
    ScheduleTree.Context: NodeType.Context,
    ScheduleTree.Domain: NodeType.Domain,
    ScheduleTree.Extension: NodeType.Extension,
    ScheduleTree.Filter: NodeType.Filter,
    ScheduleTree.Guard: NodeType.Guard,
    ScheduleTree.Mark: NodeType.Mark,
    ScheduleTree.Leaf: NodeType.Leaf,
    ScheduleTree.Sequence: NodeType.Sequence,
    ScheduleTree.Set: NodeType.Set,
}

_constructors = {typ: ctor for ctor, typ in _node_types.items()}


def node_type(node) -> NodeType:
    return _node_types[type(node)]


def children_of(node) -> list:
    if isinstance(node, ScheduleTree.Leaf):
        return []
    return node.children


def payload_of(node):
    if isinstance(node, (ScheduleTree.Leaf, ScheduleTree.Sequence, ScheduleTree.Set)):
        return None
    return node.payload


# --------------------------------------------------------------------------- #
# Conversion from isl
# --------------------------------------------------------------------------- #

_isl_payload_getters = {
    NodeType.Band: "band_get_partial_schedule",
    NodeType.Context: "context_get_context",
    NodeType.Domain: "domain_get_domain",
    NodeType.Extension: "extension_get_extension",
    NodeType.Filter: "filter_get_filter",
    NodeType.Guard: "guard_get_guard",
    NodeType.Mark: "mark_get_id",
}


def schedule_tree_from_isl(obj):
    """
    Convert an isl schedule (or the subtree rooted at an isl schedule node)
    into an immutable ScheduleTree. isl expansion nodes are rejected.
    """
    if isinstance(obj, isl.Schedule):
        obj = obj.get_root()
    assert isinstance(obj, isl.ScheduleNode), f"expected ScheduleNode, got {type(obj)}"

    typ = NodeType.from_isl(obj.get_type())
    if typ is NodeType.Leaf:
        return ScheduleTree.Leaf()

    children = [schedule_tree_from_isl(obj.child(i)) for i in range(obj.n_children())]
    if typ in (NodeType.Sequence, NodeType.Set):
        return _constructors[typ](children)

    payload = getattr(obj, _isl_payload_getters[typ])()
    return _constructors[typ](payload, children)
