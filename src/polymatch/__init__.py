from .schedule_matchers import (
    Capture,
    MatcherConstructionError,
    ScheduleNodeMatcher,
    is_matching,
    find_all,
    band,
    context,
    domain,
    extension,
    filter,
    guard,
    mark,
    sequence,
    set_,
    leaf,
    any_,
    has_previous_sibling,
    has_next_sibling,
    has_sibling,
    has_descendant,
)
from .relation_matchers import (
    RelationKind,
    RelationMatcher,
    read,
    write,
    read_and_write,
)
from .constraints import (
    Constraint,
    ConstraintsList,
    build_matcher_constraints,
    build_all_matcher_constraints,
    compare_lists,
)
from .finder import Finder, FinderMatch
from .core.schedule_tree import NodeType, ScheduleTree, schedule_tree_from_isl
from .core.internal_cursors import Cursor, Node, InvalidCursorError

from . import matchers_pprint

__version__ = "0.1.0"

__all__ = [
    "Capture",
    "MatcherConstructionError",
    "ScheduleNodeMatcher",
    "is_matching",
    "find_all",
    "band",
    "context",
    "domain",
    "extension",
    "filter",
    "guard",
    "mark",
    "sequence",
    "set_",
    "leaf",
    "any_",
    "has_previous_sibling",
    "has_next_sibling",
    "has_sibling",
    "has_descendant",
    #
    "RelationKind",
    "RelationMatcher",
    "read",
    "write",
    "read_and_write",
    #
    "Constraint",
    "ConstraintsList",
    "build_matcher_constraints",
    "build_all_matcher_constraints",
    "compare_lists",
    #
    "Finder",
    "FinderMatch",
    #
    "NodeType",
    "ScheduleTree",
    "schedule_tree_from_isl",
    "Cursor",
    "Node",
    "InvalidCursorError",
]
