"""
Matrix layout: which (column, row) addresses hold a key, and the key mounts at them.
"""
import logging
from typing import List, Tuple

from .engines.engine import GeometryEngine
from .mesh import union_all
from .parameters import ShapeParameters
from .placement import key_place
from .plates import single_plate
from .predicates import has_inner_key, has_key, is_wide_key

KeyAddress = Tuple[int, int]


def main_addresses(params: ShapeParameters) -> List[KeyAddress]:
    return [
        (column, row)
        for column in range(params.innercol_offset, params.ncols)
        for row in range(params.nrows)
        if has_key(params, column, row)
    ]


def inner_addresses(params: ShapeParameters) -> List[KeyAddress]:
    return [(0, row) for row in range(params.nrows) if has_inner_key(params, row)]


def key_addresses(params: ShapeParameters) -> List[KeyAddress]:
    """
    Every key of the matrix, inner column first.
    """
    return inner_addresses(params) + main_addresses(params)


def wide_addresses(params: ShapeParameters) -> List[KeyAddress]:
    return [(column, row) for column, row in main_addresses(params) if is_wide_key(params, column, row)]


def key_holes(params: ShapeParameters, engine: GeometryEngine):
    logging.debug("key_holes()")
    plate = single_plate(params, engine)
    return union_all(
        [key_place(plate, column, row, params, engine) for column, row in main_addresses(params)],
        engine,
    )


def key_holes_inner(params: ShapeParameters, engine: GeometryEngine):
    logging.debug("key_holes_inner()")
    plate = single_plate(params, engine)
    return union_all(
        [key_place(plate, column, row, params, engine) for column, row in inner_addresses(params)],
        engine,
    )
