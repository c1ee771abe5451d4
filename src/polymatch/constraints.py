from __future__ import annotations

import logging

import attrs
import islpy as isl

from .config import EMPTY_DIMS
from .core.accesses import affine_equal, dim_exprs
from .core.prelude import is_valid_label
from .relation_matchers import RelationMatcher

logger = logging.getLogger(__name__)

# --------------------------------------------------------------------------- #
# --------------------------------------------------------------------------- #
# Constraints
#
# A constraint is introduced by an access and a matcher: (A, e) means that
# label A of the matcher has been assigned the affine expression e of one
# output dimension of the access.


def _label_validator(_, __, label):
    if not is_valid_label(label):
        raise ValueError(f"invalid constraint label: {label!r}")


@attrs.frozen(eq=False)
class Constraint:
    label: str = attrs.field(validator=_label_validator)
    expr: isl.PwAff

    def agrees_with(self, other: Constraint) -> bool:
        return self.label == other.label and affine_equal(self.expr, other.expr)


@attrs.frozen(eq=False)
class ConstraintsList:
    """
    The constraints derived from one access, one per label position.
    `dims_involved` is the arity of that access, or EMPTY_DIMS for the
    sentinel produced when nothing could be derived or nothing agreed.
    """

    dims_involved: int = EMPTY_DIMS
    constraints: tuple = attrs.field(factory=tuple, converter=tuple)

    @staticmethod
    def empty() -> ConstraintsList:
        return ConstraintsList()

    def is_empty(self) -> bool:
        return self.dims_involved == EMPTY_DIMS

    def labels(self) -> list[str]:
        return [c.label for c in self.constraints]

    def __len__(self):
        return len(self.constraints)

    def __iter__(self):
        return iter(self.constraints)


# --------------------------------------------------------------------------- #
# Building


def _repeated_labels_agree(labels, exprs) -> bool:
    first = {}
    for label, e in zip(labels, exprs):
        if label in first and not affine_equal(first[label], e):
            return False
        first.setdefault(label, e)
    return True


def build_all_matcher_constraints(
    matcher: RelationMatcher, relation
) -> list[ConstraintsList]:
    """
    One ConstraintsList per map of `relation` the matcher can apply to, in
    the relation's map order. A map applies when its arity equals the number
    of labels, it is single-valued, and every repeated label of the matcher
    gets the same expression at each of its positions.
    """
    results = []
    for access in matcher.get_accesses(relation):
        exprs = dim_exprs(access)
        if exprs is None:
            continue
        if not _repeated_labels_agree(matcher.labels, exprs):
            logger.debug(f"repeated labels {matcher.labels} disagree on {access}")
            continue
        results.append(
            ConstraintsList(
                len(exprs),
                [Constraint(label, e) for label, e in zip(matcher.labels, exprs)],
            )
        )
    return results


def build_matcher_constraints(matcher: RelationMatcher, relation) -> ConstraintsList:
    """
    The constraints of the last map of `relation` the matcher applies to, or
    the empty sentinel. Call it on single maps, or use
    build_all_matcher_constraints, to see every candidate.
    """
    candidates = build_all_matcher_constraints(matcher, relation)
    if not candidates:
        return ConstraintsList.empty()
    return candidates[-1]


# --------------------------------------------------------------------------- #
# Comparison


def compare_lists(list_one: ConstraintsList, list_two: ConstraintsList) -> ConstraintsList:
    """
    The constraints of `list_one` that `list_two` also holds: same label,
    equal expression. Each label is reported once, in `list_one`'s order.

    Lists built for different arities are not comparable; like the case
    where nothing agrees, the result is then the empty sentinel.
    """
    if list_one.is_empty() or list_two.is_empty():
        return ConstraintsList.empty()
    if list_one.dims_involved != list_two.dims_involved:
        logger.debug(
            f"cannot compare lists of arity {list_one.dims_involved} "
            f"and {list_two.dims_involved}"
        )
        return ConstraintsList.empty()

    agreed = []
    seen = set()
    for c in list_one.constraints:
        if c.label in seen:
            continue
        if any(c.agrees_with(other) for other in list_two.constraints):
            agreed.append(c)
            seen.add(c.label)

    if not agreed:
        return ConstraintsList.empty()
    return ConstraintsList(list_one.dims_involved, agreed)
