from __future__ import annotations

import logging
from typing import Optional

import islpy as isl

logger = logging.getLogger(__name__)


def individual_maps(relation) -> list[isl.Map]:
    """The maps making up an access relation, in isl's order"""
    if isinstance(relation, isl.Map):
        return [relation]
    assert isinstance(relation, isl.UnionMap), f"expected UnionMap, got {type(relation)}"

    map_list = relation.get_map_list()
    return [map_list.get_at(i) for i in range(map_list.n_map())]


def output_arity(access: isl.Map) -> int:
    return access.dim(isl.dim_type.out)


def dim_exprs(access: isl.Map) -> Optional[list[isl.PwAff]]:
    """
    One affine expression per output dimension of `access`, or None when the
    access is not a function of the statement instance.
    """
    if not access.is_single_valued():
        logger.debug(f"skipping access that is not single-valued: {access}")
        return None

    pma = isl.PwMultiAff.from_map(access)
    return [pma.get_pw_aff(i) for i in range(output_arity(access))]


def affine_equal(lhs: isl.PwAff, rhs: isl.PwAff) -> bool:
    return bool(lhs.plain_is_equal(rhs))
