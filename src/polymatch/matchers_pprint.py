from .config import (
    EMPTY_CONSTRAINTS_TEXT,
    INDENT,
    MATCHER_DELIMITER,
    READ_AND_WRITE_MATCHER_TITLE,
    READ_MATCHER_TITLE,
    WRITE_MATCHER_TITLE,
)
from .constraints import Constraint, ConstraintsList
from .core.prelude import extclass
from .core.schedule_tree import ScheduleTree, children_of, node_type, payload_of
from .relation_matchers import RelationKind, RelationMatcher
from .schedule_matchers import ScheduleNodeMatcher

# We expect pprint to install functions on the data types rather than
# expose functions; therefore hide all variables as local
__all__ = []


# --------------------------------------------------------------------------- #
# --------------------------------------------------------------------------- #
# Constraints


@extclass(Constraint)
def __str__(self):
    return f"({self.label},{self.expr})"


del __str__


def _print_constraints(constraints):
    return "[" + ",".join(str(c) for c in constraints) + "]"


@extclass(ConstraintsList)
def __str__(self):
    lines = ["{", f"Involved Dims = {self.dims_involved}"]
    if self.is_empty():
        lines.append(f"Constraints = {EMPTY_CONSTRAINTS_TEXT}")
    else:
        lines.append(f"Constraints = {_print_constraints(self.constraints)}")
    lines.append("}")
    return "\n".join(lines)


del __str__


# --------------------------------------------------------------------------- #
# --------------------------------------------------------------------------- #
# Relation matchers

_kind_titles = {
    RelationKind.read: READ_MATCHER_TITLE,
    RelationKind.write: WRITE_MATCHER_TITLE,
    RelationKind.readAndWrite: READ_AND_WRITE_MATCHER_TITLE,
}


@extclass(RelationMatcher)
def __str__(self):
    lines = [MATCHER_DELIMITER, _kind_titles[self.kind]]
    lines += list(self.labels)
    if self.is_set():
        for i in range(self.get_indexes_size()):
            lines += [str(e) for e in self.get_dims(i)]
    lines.append(MATCHER_DELIMITER)
    return "\n".join(lines)


del __str__


# --------------------------------------------------------------------------- #
# --------------------------------------------------------------------------- #
# Trees


def _matcher_lines(matcher, tab):
    line = tab + matcher.node_type.name.lower()
    if matcher.guard is not None:
        line += " [guard]"
    if matcher.capture is not None:
        line += " [capture]"

    lines = [line]
    for child in matcher.children:
        lines += _matcher_lines(child, tab + INDENT)
    return lines


@extclass(ScheduleNodeMatcher)
def __str__(self):
    return "\n".join(_matcher_lines(self, ""))


del __str__


def _tree_lines(node, tab):
    line = tab + node_type(node).name.lower()
    payload = payload_of(node)
    if payload is not None:
        line += f": {payload}"

    lines = [line]
    for child in children_of(node):
        lines += _tree_lines(child, tab + INDENT)
    return lines


@extclass(ScheduleTree.node)
def __str__(self):
    return "\n".join(_tree_lines(self, ""))


del __str__
