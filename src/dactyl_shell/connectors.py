"""
Connector meshing: webs between neighbouring key mounts.

Each enumeration only walks precomputed neighbour ranges; nothing here looks
for neighbours geometrically.
"""
import logging
from typing import List

from .engines.engine import GeometryEngine
from .mesh import PostGroup, PostRef, mesh
from .parameters import ShapeParameters
from .placement import KeyPlacement
from .posts import web_post_bl, web_post_br, web_post_tl, web_post_tr
from .predicates import pinky_15u_active


def _key_post(params: ShapeParameters, column: int, row: int, post) -> PostRef:
    return PostRef(KeyPlacement(params, column, row), post)


def row_connector(params: ShapeParameters, column: int, row: int, component: str) -> PostGroup:
    """
    Web between (column, row) and the key to its right.
    """
    return PostGroup(component, (
        _key_post(params, column + 1, row, web_post_tl()),
        _key_post(params, column, row, web_post_tr()),
        _key_post(params, column + 1, row, web_post_bl()),
        _key_post(params, column, row, web_post_br()),
    ))


def column_connector(params: ShapeParameters, column: int, row: int, component: str) -> PostGroup:
    """
    Web between (column, row) and the key below it.
    """
    return PostGroup(component, (
        _key_post(params, column, row, web_post_bl()),
        _key_post(params, column, row, web_post_br()),
        _key_post(params, column, row + 1, web_post_tl()),
        _key_post(params, column, row + 1, web_post_tr()),
    ))


def diagonal_connector(params: ShapeParameters, column: int, row: int, component: str) -> PostGroup:
    """
    Web filling the middle of the 2x2 block whose top left key is (column, row).
    """
    return PostGroup(component, (
        _key_post(params, column, row, web_post_br()),
        _key_post(params, column, row + 1, web_post_tr()),
        _key_post(params, column + 1, row, web_post_bl()),
        _key_post(params, column + 1, row + 1, web_post_tl()),
    ))


def main_connector_groups(params: ShapeParameters) -> List[PostGroup]:
    groups = []
    for column in range(params.innercol_offset, params.ncols - 1):
        for row in range(0, params.lastrow):
            groups.append(row_connector(params, column, row, "row connectors"))

    for column in range(params.innercol_offset, params.ncols):
        for row in range(0, params.cornerrow):
            groups.append(column_connector(params, column, row, "column connectors"))

    for column in range(0, params.ncols - 1):
        for row in range(0, params.cornerrow):
            groups.append(diagonal_connector(params, column, row, "diagonal connectors"))

    return groups


def inner_connector_groups(params: ShapeParameters) -> List[PostGroup]:
    """
    The inner column only meets column 1, and is two rows short.
    """
    if not params.inner_column:
        return []

    groups = []
    for row in range(0, params.nrows - 2):
        groups.append(row_connector(params, 0, row, "inner column connectors"))

    for row in range(0, params.cornerrow - 1):
        groups.append(column_connector(params, 0, row, "inner column connectors"))

    return groups


def extra_connector_groups(params: ShapeParameters) -> List[PostGroup]:
    if not params.extra_row:
        return []

    offset = params.innercol_offset
    cornerrow = params.cornerrow
    groups = []
    for column in range(offset + 2, params.ncols):
        groups.append(column_connector(params, column, cornerrow, "extra row connectors"))

    for column in range(offset + 2, params.ncols - 1):
        groups.append(diagonal_connector(params, column, cornerrow, "extra row connectors"))

    for column in range(offset + 3, params.ncols - 1):
        groups.append(row_connector(params, column, params.lastrow, "extra row connectors"))

    return groups


def pinky_connector_groups(params: ShapeParameters) -> List[PostGroup]:
    """
    Webs between the narrow and wide posts of the outer column's 1.5u keys,
    so the wide mounts meet the right wall without a gap.
    """
    if not pinky_15u_active(params):
        return []

    lastcol = params.lastcol
    first = params.first_15u_row
    last = params.last_15u_row
    component = "pinky connectors"

    def k(row, post):
        return _key_post(params, lastcol, row, post)

    groups = []
    for row in range(first, last + 1):
        groups.append(PostGroup(component, (
            k(row, web_post_tr()), k(row, web_post_tr(wide=True)),
            k(row, web_post_br()), k(row, web_post_br(wide=True)),
        )))
    if last != params.extra_cornerrow:
        groups.append(PostGroup(component, (
            k(last + 1, web_post_tr()), k(last, web_post_br(wide=True)), k(last + 1, web_post_br()),
        )))
    if first != 0:
        groups.append(PostGroup(component, (
            k(first - 1, web_post_tr()), k(first, web_post_tr(wide=True)), k(first - 1, web_post_br()),
        )))

    for row in range(first, last):
        groups.append(PostGroup(component, (
            k(row, web_post_br()), k(row, web_post_br(wide=True)),
            k(row + 1, web_post_tr()), k(row + 1, web_post_tr(wide=True)),
        )))
    if last != params.extra_cornerrow:
        groups.append(PostGroup(component, (
            k(last, web_post_br()), k(last, web_post_br(wide=True)), k(last + 1, web_post_tr()),
        )))
    if first != 0:
        groups.append(PostGroup(component, (
            k(first - 1, web_post_br()), k(first, web_post_tr(wide=True)), k(first, web_post_tr()),
        )))

    return groups


def connector_groups(params: ShapeParameters) -> List[PostGroup]:
    return (
        main_connector_groups(params)
        + inner_connector_groups(params)
        + extra_connector_groups(params)
        + pinky_connector_groups(params)
    )


def connectors(params: ShapeParameters, engine: GeometryEngine):
    logging.debug("connectors()")
    return mesh(connector_groups(params), params, engine)
