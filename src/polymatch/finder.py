from __future__ import annotations

import logging

import attrs

from .constraints import ConstraintsList, build_all_matcher_constraints, compare_lists
from .relation_matchers import RelationKind, RelationMatcher

logger = logging.getLogger(__name__)


@attrs.frozen(eq=False)
class FinderMatch:
    read_matcher: RelationMatcher
    write_matcher: RelationMatcher
    constraints: ConstraintsList


def _describe(matcher: RelationMatcher) -> str:
    return f"{matcher.kind.name}({', '.join(matcher.labels)})"


class Finder:
    """
    Runs relation matchers against the read and write accesses of one
    statement. Read-and-write matchers take part on both sides.
    """

    def __init__(self, reads, writes, matchers):
        self._reads = reads
        self._writes = writes

        self._read_matchers = []
        self._write_matchers = []
        self._read_and_write_matchers = []
        for m in matchers:
            if not isinstance(m, RelationMatcher):
                raise TypeError(f"expected a RelationMatcher, got {type(m).__name__}")
            if m.get_type() is RelationKind.read:
                self._read_matchers.append(m)
            elif m.get_type() is RelationKind.write:
                self._write_matchers.append(m)
            else:
                self._read_and_write_matchers.append(m)

        self._merge(self._read_matchers, self._read_and_write_matchers)
        self._merge(self._write_matchers, self._read_and_write_matchers)

    @staticmethod
    def _merge(first: list, second: list):
        first.extend(m for m in second if m not in first)

    # ------------------------------------------------------------------------ #
    # Accessors
    # ------------------------------------------------------------------------ #

    @property
    def reads(self):
        return self._reads

    @property
    def writes(self):
        return self._writes

    @property
    def read_matchers(self) -> tuple:
        return tuple(self._read_matchers)

    @property
    def write_matchers(self) -> tuple:
        return tuple(self._write_matchers)

    @property
    def read_and_write_matchers(self) -> tuple:
        return tuple(self._read_and_write_matchers)

    def get_size_read_matchers(self) -> int:
        return len(self._read_matchers)

    def get_size_write_matchers(self) -> int:
        return len(self._write_matchers)

    def get_size_read_and_write_matchers(self) -> int:
        return len(self._read_and_write_matchers)

    # ------------------------------------------------------------------------ #
    # Matching
    # ------------------------------------------------------------------------ #

    def find_and_print(self) -> list[FinderMatch]:
        """
        Pair every read matcher with every write matcher sharing a label and
        compare their candidate constraints. Each pair that agrees on at
        least one label is logged and returned; the agreeing accesses are
        recorded in their matchers, each access once per matcher.
        """
        read_lists = {
            m: build_all_matcher_constraints(m, self._reads) for m in self._read_matchers
        }
        write_lists = {
            m: build_all_matcher_constraints(m, self._writes)
            for m in self._write_matchers
        }

        recorded = set()

        def record(matcher, candidate):
            if (id(matcher), id(candidate)) in recorded:
                return
            recorded.add((id(matcher), id(candidate)))
            matcher.set_dims(candidate.constraints)
            matcher.set()

        matches = []
        for r in self._read_matchers:
            for w in self._write_matchers:
                if not set(r.labels) & set(w.labels):
                    continue
                for r_list in read_lists[r]:
                    for w_list in write_lists[w]:
                        agreed = compare_lists(r_list, w_list)
                        if agreed.is_empty():
                            continue

                        logger.info(
                            f"{_describe(r)} and {_describe(w)} agree on "
                            f"{', '.join(agreed.labels())}"
                        )
                        record(r, r_list)
                        record(w, w_list)
                        matches.append(FinderMatch(r, w, agreed))

        if not matches:
            logger.debug("no consistent read/write matcher pair")
        return matches
