from __future__ import annotations

import enum

import attrs
import islpy as isl

from .core.accesses import individual_maps, output_arity
from .core.prelude import is_valid_label
from .schedule_matchers import MatcherConstructionError


class RelationKind(enum.Enum):
    read = 0
    write = 1
    readAndWrite = 2


def _labels_validator(_, __, labels):
    if len(labels) == 0:
        raise MatcherConstructionError("a relation matcher needs at least one label")
    for label in labels:
        if not is_valid_label(label):
            raise MatcherConstructionError(
                f"labels must be single identifier characters, got {label!r}"
            )


@attrs.define(eq=False)
class RelationMatcher:
    """
    Describes the shape of an access: its kind and one symbolic label per
    output dimension. The same label at two positions requires both to be
    bound to the same affine expression.

    Once the matcher has been resolved against concrete accesses, it holds
    one binding per match, each binding giving one expression per label.
    """

    kind: RelationKind
    labels: tuple = attrs.field(converter=tuple, validator=_labels_validator)
    _bindings: list = attrs.field(factory=list, init=False)
    _is_set: bool = attrs.field(default=False, init=False)

    def is_read(self) -> bool:
        return self.kind in (RelationKind.read, RelationKind.readAndWrite)

    def is_write(self) -> bool:
        return self.kind in (RelationKind.write, RelationKind.readAndWrite)

    def get_type(self) -> RelationKind:
        return self.kind

    def get_index(self, i) -> str:
        return self.labels[i]

    def get_indexes_size(self) -> int:
        return len(self.labels)

    def set_dims(self, constraints):
        """Record one binding, given one constraint per label in label order"""
        constraints = list(constraints)
        if len(constraints) != len(self.labels):
            raise ValueError(
                f"expected {len(self.labels)} constraints, got {len(constraints)}"
            )
        for label, c in zip(self.labels, constraints):
            if c.label != label:
                raise ValueError(f"constraint for {c.label!r} given for label {label!r}")
        self._bindings.append([c.expr for c in constraints])

    def get_dims(self, i) -> list[isl.PwAff]:
        return [binding[i] for binding in self._bindings]

    def num_bindings(self) -> int:
        return len(self._bindings)

    def is_set(self) -> bool:
        return self._is_set

    def set(self):
        self._is_set = True

    def get_accesses(self, relation) -> list[isl.Map]:
        """The maps of `relation` with one output dimension per label"""
        return [
            m for m in individual_maps(relation) if output_arity(m) == len(self.labels)
        ]


# --------------------------------------------------------------------------- #
# Builders


def read(*labels) -> RelationMatcher:
    return RelationMatcher(RelationKind.read, labels)


def write(*labels) -> RelationMatcher:
    return RelationMatcher(RelationKind.write, labels)


def read_and_write(*labels) -> RelationMatcher:
    return RelationMatcher(RelationKind.readAndWrite, labels)
